# traceflow_plugin/actions/base.py
"""
Base class for all plugin actions.

An action is something the dashboard can ask the plugin to do from a form:
start a trace, draw a graph. Each action declares the form it needs as a
JSON Schema and implements run().
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..manager import TraceRequestManager

# Name the plugin registers under; action names are prefixed with it
PLUGIN_NAME = "traceflowPlugin"


class Action(ABC):
    """
    Abstract base class for all plugin actions.
    """

    name: str  # Action identifier the host sends back, e.g. "traceflowPlugin/addTf"
    title: str  # Button / form title shown by the dashboard
    description: str

    @abstractmethod
    def get_parameters_schema(self) -> Dict[str, Any]:
        """
        Return the JSON Schema for the form this action submits.

        Property order is the order fields appear in the form.
        """
        pass

    @abstractmethod
    def run(self, manager: TraceRequestManager, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute the action against the trace request manager.

        `fields` are the submitted form values, keyed by the schema property names.

        Returns a dictionary with a 'success' key. Plugin errors are raised,
        not returned; the caller turns them into failed results.
        """
        pass

    def required_fields(self):
        return self.get_parameters_schema().get("required", [])
