# traceflow_plugin/k8s_tools/__init__.py
"""
Kubernetes access for the Traceflow plugin.

k8s_config holds the connection settings, k8s_utils sends requests with them,
and TraceflowStore is the only thing the rest of the plugin talks to.
"""

from .k8s_config import K8sConfig, k8s_config, load_kubeconfig
from .traceflow_store import TraceflowStore

__all__ = [
    "K8sConfig",
    "k8s_config",
    "load_kubeconfig",
    "TraceflowStore",
]
