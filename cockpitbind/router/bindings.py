"""Binding definitions for the keybind router.

A binding ties one actuator command on the device to the input commands
that drive it, and tracks the actuator's last known state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional, Protocol, Sequence


class KeyRole(str, Enum):
    """Role under which a command id matched a binding."""

    DIRECT = "direct"
    CYCLE = "cycle"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    TOGGLE = "toggle"
    ACTUATOR = "actuator"


class BindingKind(str, Enum):
    """Shape of a binding, derived from the roles it carries."""

    DIRECT = "direct"
    CYCLE = "cycle"
    STEPPED = "stepped"
    CALLBACK_TOGGLE = "callback_toggle"
    MIRROR_ONLY = "mirror_only"


# Binding attribute holding the input key for each role
ROLE_ATTRIBUTES: dict[KeyRole, str] = {
    KeyRole.DIRECT: "direct_key",
    KeyRole.CYCLE: "cycle_key",
    KeyRole.INCREMENT: "increment_key",
    KeyRole.DECREMENT: "decrement_key",
    KeyRole.TOGGLE: "toggle_key",
}


class ToggleStrategy(Protocol):
    """Computes the next actuator value for a callback toggle.

    Implementations must return a value on every call. Returning None is
    treated as a contract violation: the actuator is left unchanged.
    """

    def next_value(self) -> Optional[Any]:
        ...


def nearest_index(values: Sequence[float], value: Optional[float]) -> int:
    """Find the 1-based index of the entry closest to value.

    Ties resolve to the lower index. An empty sequence yields 1.

    Args:
        values: Ordered actuator states.
        value: Value to snap. None is treated as 0.

    Returns:
        1-based index into values.
    """
    target = value or 0
    best_index, best_distance = 1, float("inf")
    for index, entry in enumerate(values, start=1):
        distance = abs((entry or 0) - target)
        if distance < best_distance:
            best_index, best_distance = index, distance
    return best_index


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class Binding:
    """Represents a single actuator binding.

    Attributes:
        actuator: Command id driven on the device.
        direct_key: Input command passing its value straight through.
        cycle_key: Input command advancing through values, wrapping.
        increment_key: Input command stepping up through values, clamped.
        decrement_key: Input command stepping down through values, clamped.
        toggle_key: Input command asking the strategy for the next value.
        values: Ordered actuator states, or None for scalar bindings.
        state_index: 1-based position into values.
        current_value: Last value applied to the actuator.
        mirror_to_external: Echo state changes to the external flight model.
        strategy: Next-value strategy for callback toggles.
    """

    actuator: Hashable
    direct_key: Optional[Hashable] = None
    cycle_key: Optional[Hashable] = None
    increment_key: Optional[Hashable] = None
    decrement_key: Optional[Hashable] = None
    toggle_key: Optional[Hashable] = None
    values: Optional[tuple[float, ...]] = None
    state_index: int = 1
    current_value: Any = 0
    mirror_to_external: bool = False
    strategy: Optional[ToggleStrategy] = None

    @property
    def kind(self) -> BindingKind:
        """Classify the binding by the roles it carries."""
        if self.strategy is not None:
            return BindingKind.CALLBACK_TOGGLE
        if self.cycle_key is not None:
            return BindingKind.CYCLE
        if self.increment_key is not None or self.decrement_key is not None:
            return BindingKind.STEPPED
        if self.direct_key is not None:
            return BindingKind.DIRECT
        return BindingKind.MIRROR_ONLY

    @property
    def has_values(self) -> bool:
        """Check if the binding has a non-empty value list."""
        return bool(self.values)

    def role_keys(self) -> list[tuple[KeyRole, Hashable]]:
        """Get the input keys this binding listens on, with their roles."""
        keys = []
        for role, attribute in ROLE_ATTRIBUTES.items():
            key = getattr(self, attribute)
            if key is not None:
                keys.append((role, key))
        return keys

    def mirror_key(self, role: KeyRole) -> Optional[Hashable]:
        """Get the input id a state change is mirrored under.

        Direct, cycle and toggle events mirror under the key that fired.
        Stepped and reverse-path events prefer the cycle key, then the
        direct key, then the toggle key.

        Args:
            role: Role under which the event matched.

        Returns:
            Input command id, or None when there is nothing to mirror under.
        """
        if role in (KeyRole.DIRECT, KeyRole.CYCLE, KeyRole.TOGGLE):
            return getattr(self, ROLE_ATTRIBUTES[role])
        for key in (self.cycle_key, self.direct_key, self.toggle_key):
            if key is not None:
                return key
        return None

    def select(self, index: int) -> Any:
        """Move to a 1-based index into values and return its value."""
        self.state_index = index
        self.current_value = self.values[index - 1]
        return self.current_value

    def snap(self, value: Any) -> Any:
        """Snap value onto the value list and adopt it as current state."""
        return self.select(nearest_index(self.values, value))

    def seed(self, default: Any) -> bool:
        """Apply a registration default.

        With a value list the default is a 1-based index; otherwise it is the
        starting value. Invalid defaults fall back to index 1 or value 0.

        Args:
            default: Index or value supplied at registration.

        Returns:
            True if the default was used as given.
        """
        if self.values is not None:
            valid = (
                _is_number(default)
                and float(default).is_integer()
                and 1 <= default <= len(self.values)
            )
            if self.values:
                self.select(int(default) if valid else 1)
            else:
                self.state_index = 1
                self.current_value = 0
            return valid

        if _is_number(default):
            self.current_value = default
            return True
        self.current_value = 0
        return default is None
