"""Supporting helpers for cockpit device scripts.

Includes:
- timer: Countdown timer driven by device updates
- animation: Linear and sawtooth value animation
- builder: Keybind table rows for the input settings screen
"""

from cockpitbind.helpers.animation import Animation, Animator
from cockpitbind.helpers.builder import KeybindBlockBuilder, KeybindRow
from cockpitbind.helpers.timer import Timer

__all__ = ["Animation", "Animator", "KeybindBlockBuilder", "KeybindRow", "Timer"]
