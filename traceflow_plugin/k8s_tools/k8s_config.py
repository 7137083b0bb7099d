# traceflow_plugin/k8s_tools/k8s_config.py
"""
Configuration module for the Kubernetes API connection.

This module holds the connection settings used by the Traceflow store. They
are filled from a kubeconfig file at startup; by default the file named by the
KUBECONFIG environment variable, falling back to ~/.kube/config.

The kubeconfig itself is resolved by the kubernetes client library, which
handles contexts, token files, exec and auth-provider credentials, and inline
certificate data. Requests are still sent with requests (see k8s_utils).
"""

import os
from typing import Dict, Optional, Tuple, Union

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from ..errors import ConfigurationError

DEFAULT_KUBECONFIG = os.path.join("~", ".kube", "config")


class K8sConfig:
    """
    Singleton configuration for the Kubernetes API connection.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(K8sConfig, cls).__new__(cls)
            cls._instance.reset()
        return cls._instance

    def reset(self):
        """Reset configuration to defaults (local kubectl proxy)."""
        self.api_url = "http://127.0.0.1:8001"
        self.token = None
        self.verify_ssl: Union[bool, str] = True
        self.client_cert: Optional[Tuple[str, str]] = None
        self.headers = {}
        self.configuration: Optional[client.Configuration] = None

    def configure_remote(self, api_url: str, token: Optional[str] = None,
                         verify_ssl: Union[bool, str] = True,
                         client_cert: Optional[Tuple[str, str]] = None):
        """
        Configure for a Kubernetes API server.

        Args:
            api_url (str): The base URL of the Kubernetes API (e.g., "https://10.20.4.221:16443")
            token (str): Bearer token for authentication, if any
            verify_ssl (bool | str): False to skip verification, or a CA bundle path
            client_cert (tuple): (cert_path, key_path) for client certificate auth
        """
        self.api_url = api_url.rstrip('/')
        self.token = token
        self.verify_ssl = verify_ssl
        self.client_cert = client_cert
        self.configuration = None
        self.headers = {}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def configure_from(self, configuration: client.Configuration):
        """
        Configure from a kubernetes client Configuration resolved from a kubeconfig.

        The Authorization header is read from the configuration on every call,
        so exec and auth-provider tokens that expire get refreshed.
        """
        if not configuration.verify_ssl:
            verify_ssl: Union[bool, str] = False
        else:
            verify_ssl = configuration.ssl_ca_cert or True

        client_cert = None
        if configuration.cert_file and configuration.key_file:
            client_cert = (configuration.cert_file, configuration.key_file)

        self.configure_remote(configuration.host, verify_ssl=verify_ssl, client_cert=client_cert)
        self.configuration = configuration

    def get_api_url(self) -> str:
        return self.api_url

    def get_headers(self) -> Dict[str, str]:
        headers = dict(self.headers)
        if self.configuration is not None:
            authorization = self.configuration.get_api_key_with_prefix("authorization")
            if authorization:
                headers["Authorization"] = authorization
        return headers

    def get_verify_ssl(self) -> Union[bool, str]:
        return self.verify_ssl

    def get_client_cert(self) -> Optional[Tuple[str, str]]:
        return self.client_cert

    def has_credentials(self) -> bool:
        return bool(self.get_headers().get("Authorization") or self.client_cert)


def load_kubeconfig(path: Optional[str] = None, context: Optional[str] = None) -> K8sConfig:
    """
    Read a kubeconfig file and configure the global k8s_config from it.

    Args:
        path (str): kubeconfig path, or a path list as in $KUBECONFIG.
                    Defaults to $KUBECONFIG, then ~/.kube/config.
        context (str): context to use instead of current-context

    Returns:
        K8sConfig: the configured global instance

    Raises:
        ConfigurationError: if the file is missing or invalid, or if an https
                            server is configured without usable credentials
    """
    if not path:
        path = os.environ.get("KUBECONFIG") or DEFAULT_KUBECONFIG

    paths = [os.path.expanduser(p) for p in path.split(os.pathsep) if p]
    if not any(os.path.exists(p) for p in paths):
        raise ConfigurationError(f"kubeconfig file '{path}' not found")

    configuration = client.Configuration()
    try:
        config.load_kube_config(
            config_file=path,
            context=context,
            client_configuration=configuration,
            persist_config=False
        )
    except ConfigException as e:
        raise ConfigurationError(f"Invalid kubeconfig '{path}': {e}")
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read kubeconfig '{path}': {e}")

    k8s_config.configure_from(configuration)

    # Failed exec/auth-provider plugins only log; without a credential every call would be a 401
    if k8s_config.get_api_url().startswith("https://") and not k8s_config.has_credentials():
        url = k8s_config.get_api_url()
        k8s_config.reset()
        raise ConfigurationError(
            f"kubeconfig '{path}' has no usable credentials for {url}"
        )
    return k8s_config

# Global instance
k8s_config = K8sConfig()
