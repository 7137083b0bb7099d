# traceflow_plugin/actions/__init__.py
"""
Actions Registry Module

Importing the action modules registers them; the helpers below are what the
plugin uses to advertise and dispatch them.
"""

from typing import List, Optional

from .base import Action, PLUGIN_NAME
from .registry import registry
from .add_traceflow import AddTraceflowAction, ADD_TRACEFLOW_ACTION
from .show_graph import ShowGraphAction, SHOW_GRAPH_ACTION

ALL_ACTIONS: List[Action] = registry.get_actions()


def find_action_by_name(name: str) -> Optional[Action]:
    """Return the registered action with this name, or None."""
    return registry.get_action(name)


def get_all_action_names() -> List[str]:
    return [action.name for action in ALL_ACTIONS]


__all__ = [
    "Action",
    "AddTraceflowAction",
    "ShowGraphAction",
    "ALL_ACTIONS",
    "ADD_TRACEFLOW_ACTION",
    "SHOW_GRAPH_ACTION",
    "PLUGIN_NAME",
    "find_action_by_name",
    "get_all_action_names",
]
