# traceflow_plugin/views.py
"""
Dashboard component descriptors.

Plain dictionaries in the shape the dashboard's component renderer expects:
every component is {"metadata": {"type": ...}, "config": {...}}. Building
them here keeps plugin.py free of layout details.
"""

from typing import Any, Dict, List, Optional

from .actions.base import Action
from .models import TraceRow

# Trace list columns, in display order
TRACE_NAME_COL = "Trace"
SRC_NAMESPACE_COL = "Source Namespace"
SRC_POD_COL = "Source Pod"
DST_NAMESPACE_COL = "Destination Namespace"
DST_POD_COL = "Destination Pod"
DETAIL_COL = "Detailed Information"

TRACE_COLUMNS = [
    TRACE_NAME_COL,
    SRC_NAMESPACE_COL,
    SRC_POD_COL,
    DST_NAMESPACE_COL,
    DST_POD_COL,
    DETAIL_COL,
]


def _component(kind: str, config: Dict[str, Any], title: Optional[str] = None) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"type": kind}
    if title is not None:
        metadata["title"] = [text(title)]
    return {"metadata": metadata, "config": config}


def text(value: str) -> Dict[str, Any]:
    return {"metadata": {"type": "text"}, "config": {"value": value}}


def link(value: str, ref: str) -> Dict[str, Any]:
    return _component("link", {"value": value, "ref": ref})


def graphviz(dot: str) -> Dict[str, Any]:
    return _component("graphviz", {"dot": dot})


def action_form(action: Action) -> Dict[str, Any]:
    """
    Form for an action, one text field per schema property.

    A hidden 'action' field carries the action name back to the plugin.
    """
    fields = [
        {"type": "text", "name": field, "label": field, "value": ""}
        for field in action.get_parameters_schema().get("properties", {})
    ]
    fields.append({"type": "hidden", "name": "action", "value": action.name})
    return {
        "name": action.title,
        "title": action.title,
        "form": {"fields": fields}
    }


def card(title: str, body: Dict[str, Any], actions: Optional[List[Action]] = None) -> Dict[str, Any]:
    return _component(
        "card",
        {
            "body": body,
            "actions": [action_form(action) for action in actions or []]
        },
        title=title
    )


def trace_table(rows: List[TraceRow], placeholder: str = "") -> Dict[str, Any]:
    """Trace List table. The placeholder is shown when there are no rows."""
    return _component(
        "table",
        {
            "columns": [{"name": column, "accessor": column} for column in TRACE_COLUMNS],
            "rows": [
                {
                    TRACE_NAME_COL: text(row.name),
                    SRC_NAMESPACE_COL: text(row.source_namespace),
                    SRC_POD_COL: text(row.source_pod),
                    DST_NAMESPACE_COL: text(row.destination_namespace),
                    DST_POD_COL: text(row.destination_pod),
                    DETAIL_COL: link(row.detail.text, row.detail.ref),
                }
                for row in rows
            ],
            "emptyContent": placeholder
        },
        title="Trace List"
    )


def flex_layout(title: str, components: List[Dict[str, Any]]) -> Dict[str, Any]:
    """One full-width section holding the given components."""
    return _component(
        "flexlayout",
        {"sections": [[{"width": 24, "view": component} for component in components]]},
        title=title
    )
