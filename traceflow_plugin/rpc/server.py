# traceflow_plugin/rpc/server.py
"""
Plugin RPC Server

Serves the Traceflow plugin to the dashboard host as JSON-RPC 2.0 methods
over HTTP. It uses the Werkzeug WSGI server for HTTP handling and the
json-rpc library for the protocol. Each host call maps onto one
TraceflowPlugin method:

    plugin.register    -> capabilities (name, action names)
    plugin.navigation  -> navigation entry
    plugin.action      -> run a form action
    plugin.content     -> render a route
"""

import logging
from typing import Any, Callable, Dict, Optional

from jsonrpc import Dispatcher, JSONRPCResponseManager
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from ..errors import TraceflowError
from ..plugin import TraceflowPlugin
from ..settings import settings

logger = logging.getLogger(__name__)


def create_handler(method_name: str, func: Callable[..., Dict[str, Any]]):
    """
    Wrap a plugin method so it always answers with a result.

    Plugin errors become {"success": False, ...} results; anything else is
    logged with its traceback and reported the same way, so one bad call
    never takes the server down.
    """
    def handler(**kwargs) -> Dict[str, Any]:
        try:
            return func(**kwargs)
        except TraceflowError as e:
            logger.warning("%s failed: %s", method_name, e)
            return e.to_result()
        except Exception as e:
            logger.exception("%s raised an unexpected error", method_name)
            return {
                "success": False,
                "error": f"Plugin execution failed: {str(e)}",
                "kind": "internal"
            }
    return handler


def build_dispatcher(plugin: TraceflowPlugin) -> Dispatcher:
    """Register the plugin's host-facing methods on a fresh dispatcher."""

    def register() -> Dict[str, Any]:
        return dict(success=True, **plugin.capabilities().model_dump())

    def navigation(root: str = "") -> Dict[str, Any]:
        return plugin.navigation(root)

    def action(payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return plugin.handle_action(payload or {})

    def content(path: str, graph: Optional[str] = None) -> Dict[str, Any]:
        return plugin.render(path, graph=graph)

    dispatcher = Dispatcher()
    for name, func in (
        ("plugin.register", register),
        ("plugin.navigation", navigation),
        ("plugin.action", action),
        ("plugin.content", content),
    ):
        dispatcher.add_method(create_handler(name, func), name)
    return dispatcher


def create_application(plugin: Optional[TraceflowPlugin] = None):
    """
    Build the WSGI application serving `plugin`.

    Returns:
        A WSGI callable: parses the JSON-RPC request from the body and hands it
        to the dispatcher.
    """
    dispatcher = build_dispatcher(plugin if plugin is not None else TraceflowPlugin())

    def application(environ, start_response):
        request = Request(environ)
        request_body = request.get_data(as_text=True)
        response = JSONRPCResponseManager.handle(request_body, dispatcher)
        # Notifications get no response body
        body = response.json if response is not None else ""
        wsgi_response = Response(body, mimetype='application/json')
        return wsgi_response(environ, start_response)

    return application


def start_plugin_server(plugin: TraceflowPlugin, host: Optional[str] = None, port: Optional[int] = None):
    """
    Start the plugin server. Blocks until interrupted.

    Args:
        plugin: the plugin to serve
        host (str): bind address. If None, uses settings.SERVER_HOST.
        port (int): port. If None, uses settings.SERVER_PORT.
    """
    if host is None:
        host = settings.SERVER_HOST
    if port is None:
        port = settings.SERVER_PORT

    descriptor = plugin.capabilities()
    logger.info("%s is starting at http://%s:%s", descriptor.name, host, port)
    logger.info("Registered actions: %s", descriptor.action_names)

    run_simple(
        hostname=host,
        port=port,
        application=create_application(plugin),
        use_reloader=False,
        use_debugger=False,
        threaded=True  # Calls share no mutable plugin state
    )

# Example of what a JSON-RPC request from the host looks like:
"""
{
    "jsonrpc": "2.0",
    "method": "plugin.action",
    "params": {
        "payload": {
            "action": "traceflowPlugin/addTf",
            "name": "t1",
            "fromNamespace": "default",
            "fromPod": "pod-a",
            "toNamespace": "default",
            "toPod": "pod-b"
        }
    },
    "id": 1
}
"""
