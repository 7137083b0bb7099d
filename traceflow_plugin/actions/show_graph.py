# traceflow_plugin/actions/show_graph.py
"""
Generate Trace Graph action

Looks up one Traceflow and returns its path graph as DOT text. The graph is
handed back to the host, which passes it to the next content render; the
plugin itself keeps no copy.
"""

from typing import Any, Dict

from ..graph import render_dot
from ..manager import TraceRequestManager
from .base import Action, PLUGIN_NAME
from .registry import register_action

SHOW_GRAPH_ACTION = f"{PLUGIN_NAME}/showGraphAction"


@register_action
class ShowGraphAction(Action):
    name = SHOW_GRAPH_ACTION
    title = "Generate Trace Graph"
    description = "Draw the observed path of an existing trace"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the trace to draw"}
            },
            "required": ["name"]
        }

    def run(self, manager: TraceRequestManager, fields: Dict[str, Any]) -> Dict[str, Any]:
        request = manager.get_by_name(fields.get("name", ""))
        return {
            "success": True,
            "name": request.name,
            "graph": render_dot(request)
        }
