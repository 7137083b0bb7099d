# traceflow_plugin/actions/add_traceflow.py
"""
Start New Trace action

Creates a Traceflow resource from the dashboard form. The form uses the
dashboard's field names (fromNamespace, toPod, ...); they are mapped onto the
manager's source/destination arguments here.
"""

from typing import Any, Dict

from ..manager import TraceRequestManager
from .base import Action, PLUGIN_NAME
from .registry import register_action

ADD_TRACEFLOW_ACTION = f"{PLUGIN_NAME}/addTf"


@register_action
class AddTraceflowAction(Action):
    name = ADD_TRACEFLOW_ACTION
    title = "Start New Trace"
    description = "Trace connectivity from a source pod to a destination pod"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the new trace"},
                "fromNamespace": {"type": "string", "description": "Namespace of the source pod"},
                "fromPod": {"type": "string", "description": "Source pod"},
                "toNamespace": {"type": "string", "description": "Namespace of the destination pod"},
                "toPod": {"type": "string", "description": "Destination pod"}
            },
            "required": ["name", "fromNamespace", "fromPod", "toNamespace", "toPod"]
        }

    def run(self, manager: TraceRequestManager, fields: Dict[str, Any]) -> Dict[str, Any]:
        request = manager.submit(
            name=fields.get("name", ""),
            source_namespace=fields.get("fromNamespace", ""),
            source_pod=fields.get("fromPod", ""),
            destination_namespace=fields.get("toNamespace", ""),
            destination_pod=fields.get("toPod", "")
        )
        return {
            "success": True,
            "traceflow": request.model_dump(),
            "message": f"Trace {request.name} started from {request.source} to {request.destination}."
        }
