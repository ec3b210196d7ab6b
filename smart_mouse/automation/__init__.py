"""Pointer automation: action resolution and input injection backends."""

from .action_executor import ActionResolver, ActionType, PacingPolicy
from .input_injector import DryRunInjector, InputInjector, PyAutoGUIInjector

__all__ = [
    "ActionResolver",
    "ActionType",
    "DryRunInjector",
    "InputInjector",
    "PacingPolicy",
    "PyAutoGUIInjector",
]
