# traceflow_plugin/rpc/__init__.py
"""
JSON-RPC transport between the dashboard host and the plugin.
"""

from .server import create_application, start_plugin_server
from .client import call_plugin

__all__ = [
    "create_application",
    "start_plugin_server",
    "call_plugin"
]
