# traceflow_plugin/k8s_tools/k8s_utils.py
"""
HTTP helper for the Kubernetes API.

Wraps requests so every call uses the configured URL, credentials and
timeout, and so failures come back as plugin errors instead of requests
exceptions.
"""

import logging
from typing import Any, Dict, Optional

import requests
import urllib3

from ..errors import ConflictError, NotFoundError, TransportError, ValidationError
from ..settings import settings
from .k8s_config import k8s_config

logger = logging.getLogger(__name__)


def _status_message(response: requests.Response) -> str:
    """Pull the message out of a Kubernetes Status object if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.reason or ""
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return response.reason or ""


def k8s_request(method: str, path: str, json: Optional[Dict[str, Any]] = None,
                params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Send one request to the Kubernetes API and return the decoded body.

    Args:
        method (str): HTTP method ("GET", "POST", ...)
        path (str): API path starting with '/', e.g. "/apis/group/v1/things"
        json (dict): request body, if any
        params (dict): query parameters, if any

    Returns:
        Dict[str, Any]: the JSON response

    Raises:
        NotFoundError: the API answered 404
        ConflictError: the API answered 409
        ValidationError: the API rejected the request body or parameters (400, 422)
        TransportError: the API is unreachable, timed out or answered any other error
    """
    url = f"{k8s_config.get_api_url()}{path}"
    verify_ssl = k8s_config.get_verify_ssl()

    # Self-signed clusters are common; don't spam a warning per call
    if verify_ssl is False:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    logger.debug("%s %s params=%s", method, url, params)
    try:
        response = requests.request(
            method,
            url,
            headers=k8s_config.get_headers(),
            json=json,
            params=params,
            verify=verify_ssl,
            cert=k8s_config.get_client_cert(),
            timeout=settings.REQUEST_TIMEOUT
        )
    except requests.exceptions.ConnectionError:
        raise TransportError(
            f"Cannot connect to Kubernetes API at {k8s_config.get_api_url()}. "
            "Check your network connection and kubeconfig."
        )
    except requests.exceptions.Timeout:
        raise TransportError(
            f"Request to Kubernetes API timed out after {settings.REQUEST_TIMEOUT:g} seconds"
        )
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Network error talking to Kubernetes API: {e}")

    if response.status_code == 404:
        raise NotFoundError(_status_message(response) or "resource not found")
    if response.status_code == 409:
        raise ConflictError(_status_message(response) or "resource already exists")
    if response.status_code in (400, 422):
        raise ValidationError(_status_message(response) or "request rejected by the Kubernetes API")
    if response.status_code >= 400:
        raise TransportError(
            f"Kubernetes API returned error: {response.status_code} - {_status_message(response)}"
        )

    try:
        return response.json()
    except ValueError:
        raise TransportError(f"Kubernetes API returned invalid JSON: {response.text[:200]}")
