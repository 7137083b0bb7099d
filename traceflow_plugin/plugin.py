# traceflow_plugin/plugin.py
"""
Traceflow dashboard plugin

The host-facing side of the plugin: what it registers as, where it appears in
the navigation, which routes it serves and how it handles form actions.
Nothing here knows about JSON-RPC; rpc/server.py maps wire calls onto these
methods.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from . import views
from .actions import ALL_ACTIONS, PLUGIN_NAME, find_action_by_name
from .errors import NotFoundError, TraceflowError, ValidationError
from .manager import TraceRequestManager

logger = logging.getLogger(__name__)

TITLE = "Antrea Traceflow"
NAV_TITLE = "Trace Flow"
NAV_ICON = "cloud"
CONTENT_ICON = "overview"
COMPONENTS_ROUTE = "/components"


class PluginDescriptor(BaseModel):
    """What the plugin tells the host when it registers."""
    name: str
    description: str
    action_names: List[str]
    is_module: bool = True


ContentHandler = Callable[..., Dict[str, Any]]


class Router:
    """Maps content paths below the plugin root to handlers."""

    def __init__(self):
        self._routes: Dict[str, ContentHandler] = {}

    def handle_func(self, path: str, handler: ContentHandler):
        self._routes["/" + path.strip("/")] = handler

    def paths(self) -> List[str]:
        return list(self._routes)

    def resolve(self, path: str) -> ContentHandler:
        handler = self._routes.get("/" + (path or "").strip("/"))
        if handler is None:
            raise NotFoundError(f"No content handler for path '{path}'")
        return handler


class TraceflowPlugin:
    def __init__(self, manager: Optional[TraceRequestManager] = None):
        self.manager = manager if manager is not None else TraceRequestManager()
        self.router = Router()
        self.router.handle_func(COMPONENTS_ROUTE, self.traceflow_content)

    def capabilities(self) -> PluginDescriptor:
        return PluginDescriptor(
            name=PLUGIN_NAME,
            description="Start Antrea Traceflows and browse their results",
            action_names=[action.name for action in ALL_ACTIONS]
        )

    def navigation(self, root: str = "") -> Dict[str, Any]:
        return {
            "title": NAV_TITLE,
            "path": root.rstrip("/") + COMPONENTS_ROUTE,
            "iconName": NAV_ICON
        }

    def handle_action(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run the action named in payload['action'] with the rest of the payload.

        Plugin errors come back as failed results instead of being raised.
        """
        fields = dict(payload or {})
        action_name = fields.pop("action", None)
        action = find_action_by_name(action_name) if action_name else None

        try:
            if action is None:
                raise ValidationError(
                    f"received action request for {PLUGIN_NAME}, but no handler defined"
                    + (f" for '{action_name}'" if action_name else "")
                )
            return action.run(self.manager, fields)
        except TraceflowError as e:
            logger.warning("Action %s failed: %s", action_name, e)
            return e.to_result()

    def render(self, path: str, graph: Optional[str] = None) -> Dict[str, Any]:
        """Content for a route. `graph` is DOT text from an earlier graph action."""
        return self.router.resolve(path)(graph=graph)

    def traceflow_content(self, graph: Optional[str] = None) -> Dict[str, Any]:
        controls = views.card(TITLE, views.text(""), actions=ALL_ACTIONS)
        section = [controls]
        if graph:
            section.append(views.card(f"{TITLE} Graph", views.graphviz(graph)))

        # A failed listing degrades to an empty table, it never fails the page
        try:
            table = views.trace_table(self.manager.rows())
        except TraceflowError as e:
            logger.error("Failed to list traceflows: %s", e)
            table = views.trace_table([], placeholder=f"Failed to list traces: {e}")

        return {
            "title": [views.text(TITLE)],
            "viewComponents": [
                views.flex_layout(TITLE, section),
                table
            ],
            "iconName": CONTENT_ICON,
            "iconSource": CONTENT_ICON
        }
