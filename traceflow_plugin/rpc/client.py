# traceflow_plugin/rpc/client.py
"""
Plugin RPC Client

Sends JSON-RPC 2.0 requests to a running plugin server, the same way the
dashboard host does. Used by `traceflow-plugin ping` to check a deployed
plugin.
"""

import json
from typing import Any, Dict, Optional

import requests

from ..settings import settings


def default_url() -> str:
    return f"http://{settings.SERVER_HOST}:{settings.SERVER_PORT}"


def call_plugin(method: str, params: Optional[Dict[str, Any]] = None,
                url: Optional[str] = None, timeout: float = 30) -> Dict[str, Any]:
    """
    Call one plugin method.

    Args:
        method (str): JSON-RPC method, e.g. "plugin.register"
        params (dict): keyword params for the method
        url (str): server URL. Defaults to the configured host and port.
        timeout (float): seconds to wait for the answer

    Returns:
        Dict[str, Any]: the method's result, or {"success": False, "error": ...}
    """
    url = url or default_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params or {},
        "id": 1
    }

    try:
        response = requests.post(
            url=url,
            json=payload,
            timeout=timeout,
            headers={'Content-Type': 'application/json'}
        )
        response.raise_for_status()
        result = response.json()

        if "error" in result:
            return {
                "success": False,
                "error": result["error"],
                "original_response": result
            }

        return result.get("result", {
            "success": False,
            "error": "No result returned from server"
        })

    except requests.exceptions.ConnectionError:
        return {
            "success": False,
            "error": f"Cannot connect to plugin server at {url}. "
                    "Make sure it is running with 'traceflow-plugin serve'."
        }

    except requests.exceptions.Timeout:
        return {
            "success": False,
            "error": f"Request to plugin server timed out after {timeout:g} seconds"
        }

    except json.JSONDecodeError:
        return {
            "success": False,
            "error": f"Server returned invalid JSON response: {response.text}"
        }

    except requests.exceptions.RequestException as e:
        return {
            "success": False,
            "error": f"Network error occurred: {str(e)}"
        }
