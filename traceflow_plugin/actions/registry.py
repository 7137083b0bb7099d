# traceflow_plugin/actions/registry.py
"""
Action registry

Actions register themselves with @register_action when their module is
imported; the plugin looks them up by the name the host sends back.
"""

from typing import Dict, List, Optional, Type
from .base import Action

class ActionRegistry:
    """
    Central registry for all plugin actions.
    Allows actions to register themselves via decorators.
    """
    def __init__(self):
        self._actions: Dict[str, Action] = {}

    def register(self, action_cls: Type[Action]):
        """
        Register an action class. Instantiate it and add to registry.
        """
        action = action_cls()
        self._actions[action.name] = action
        return action_cls

    def get_actions(self) -> List[Action]:
        return list(self._actions.values())

    def get_action(self, name: str) -> Optional[Action]:
        return self._actions.get(name)

# Global registry instance
registry = ActionRegistry()

def register_action(cls):
    """
    Decorator to register an action class.

    Usage:
        @register_action
        class MyAction(Action):
            ...
    """
    registry.register(cls)
    return cls
