"""Binding router modules for cockpitbind.

Includes:
- bindings: Binding definitions and value snapping
- device: Device facade protocol and a logging facade
- loader: YAML binding table loading
- router: Input event dispatch and state tracking
"""

from cockpitbind.router.bindings import Binding, BindingKind, KeyRole, ToggleStrategy
from cockpitbind.router.device import DeviceFacade, LoggingDevice
from cockpitbind.router.loader import load_bindings
from cockpitbind.router.router import KeybindRouter

__all__ = [
    "Binding",
    "BindingKind",
    "DeviceFacade",
    "KeyRole",
    "KeybindRouter",
    "LoggingDevice",
    "ToggleStrategy",
    "load_bindings",
]
