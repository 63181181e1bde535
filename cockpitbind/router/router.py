"""Keybind router.

Maps input command ids to actuator commands on a device, keeps a mirror of
each actuator's state, and optionally echoes changes to the external
flight model.
"""

from typing import Any, Callable, Hashable, Iterable, Optional

from cockpitbind.config import get_settings
from cockpitbind.router.bindings import (
    ROLE_ATTRIBUTES,
    Binding,
    BindingKind,
    KeyRole,
    ToggleStrategy,
)
from cockpitbind.router.device import DeviceFacade
from cockpitbind.router.loader import load_bindings
from cockpitbind.utils.logger import configure_logging, get_logger, log_dispatch_event

logger = get_logger(__name__)

# Handler result meaning the binding claimed the event but nothing changed
_NO_CHANGE = object()


class KeybindRouter:
    """Routes input events to actuator bindings.

    Bindings are registered once during setup and live as long as the
    router. Every dispatch resolves at most one binding.

    Attributes:
        device: Device facade the router drives.
        disable_gate: Optional predicate; while it returns True all events
            are dropped.
        log_unhandled: Log events no binding claims.
        bindings: Dictionary of actuator command to Binding.
    """

    def __init__(
        self,
        device: DeviceFacade,
        disable_gate: Optional[Callable[[], bool]] = None,
        log_unhandled: bool = False,
    ):
        """Initialize the router.

        Args:
            device: Device facade to drive.
            disable_gate: Predicate owned by the host; True disables input.
            log_unhandled: If True, log events no binding claims.
        """
        self.device = device
        self.disable_gate = disable_gate
        self.log_unhandled = log_unhandled
        self.bindings: dict[Hashable, Binding] = {}
        self._keys: dict[Hashable, tuple[Binding, KeyRole]] = {}
        self._handlers: dict[KeyRole, Callable[[Binding, Any], Any]] = {
            KeyRole.DIRECT: self._on_direct,
            KeyRole.CYCLE: self._on_cycle,
            KeyRole.INCREMENT: self._on_increment,
            KeyRole.DECREMENT: self._on_decrement,
            KeyRole.TOGGLE: self._on_toggle,
            KeyRole.ACTUATOR: self._on_actuator,
        }

    @classmethod
    def from_config(
        cls,
        device: DeviceFacade,
        disable_gate: Optional[Callable[[], bool]] = None,
    ) -> "KeybindRouter":
        """Create a router from app configuration.

        Applies the configured logging setup and loads the configured
        binding table when one is set.

        Args:
            device: Device facade to drive.
            disable_gate: Predicate owned by the host; True disables input.

        Returns:
            Configured KeybindRouter instance.
        """
        settings = get_settings()
        configure_logging(settings)
        router = cls(
            device,
            disable_gate=disable_gate,
            log_unhandled=settings.router.log_unhandled,
        )
        bindings_path = settings.get_bindings_path()
        if bindings_path:
            load_bindings(router, bindings_path)
        return router

    def __contains__(self, actuator: Hashable) -> bool:
        return actuator in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)

    # Registration

    def register(
        self,
        actuator: Hashable,
        direct_key: Optional[Hashable] = None,
        cycle_key: Optional[Hashable] = None,
        values: Optional[Iterable[float]] = None,
        increment_key: Optional[Hashable] = None,
        decrement_key: Optional[Hashable] = None,
        mirror_to_external: bool = False,
        default: Any = None,
    ) -> Binding:
        """Register a binding for an actuator.

        Re-registering an actuator is a no-op; the first registration wins.

        Args:
            actuator: Device command to drive.
            direct_key: Input command that sets the actuator to its value.
            cycle_key: Input command that cycles through values.
            values: Ordered actuator states, e.g. (0, 0.5, 1).
            increment_key: Input command that steps up through values.
            decrement_key: Input command that steps down through values.
            mirror_to_external: Echo state changes to the external flight model.
            default: Starting 1-based index (with values) or starting value.

        Returns:
            The binding owning the actuator.
        """
        existing = self.bindings.get(actuator)
        if existing is not None:
            logger.debug("binding_already_registered", actuator=actuator)
            return existing

        binding = Binding(
            actuator=actuator,
            direct_key=direct_key,
            cycle_key=cycle_key,
            increment_key=increment_key,
            decrement_key=decrement_key,
            values=tuple(values) if values is not None else None,
            mirror_to_external=mirror_to_external,
        )
        return self._add(binding, default)

    def register_toggle(
        self,
        actuator: Hashable,
        toggle_key: Hashable,
        strategy: ToggleStrategy,
        values: Optional[Iterable[float]] = None,
        mirror_to_external: bool = False,
        default: Any = None,
    ) -> Binding:
        """Register a binding whose next value comes from a strategy.

        Args:
            actuator: Device command to drive.
            toggle_key: Input command that asks the strategy for a value.
            strategy: Object computing the next actuator value.
            values: Optional value list kept in sync with strategy results.
            mirror_to_external: Echo state changes to the external flight model.
            default: Starting 1-based index (with values) or starting value.

        Returns:
            The binding owning the actuator.
        """
        existing = self.bindings.get(actuator)
        if existing is not None:
            logger.debug("binding_already_registered", actuator=actuator)
            return existing

        binding = Binding(
            actuator=actuator,
            toggle_key=toggle_key,
            values=tuple(values) if values is not None else None,
            mirror_to_external=mirror_to_external,
            strategy=strategy,
        )
        return self._add(binding, default)

    def _add(self, binding: Binding, default: Any) -> Binding:
        if not binding.seed(default) and default is not None:
            logger.warning(
                "binding_default_ignored",
                actuator=binding.actuator,
                default=default,
                state_index=binding.state_index,
                current_value=binding.current_value,
            )

        if binding.actuator in self._keys:
            logger.warning("actuator_shadowed_by_key", actuator=binding.actuator)

        self.bindings[binding.actuator] = binding
        self._claim_keys(binding)

        if not binding.has_values and binding.kind in (
            BindingKind.CYCLE,
            BindingKind.STEPPED,
        ):
            logger.warning("binding_empty_values", actuator=binding.actuator)

        logger.info(
            "binding_registered",
            actuator=binding.actuator,
            kind=binding.kind.value,
            keys={role.value: key for role, key in binding.role_keys()},
            state_index=binding.state_index,
            mirror_to_external=binding.mirror_to_external,
        )
        return binding

    def _claim_keys(self, binding: Binding) -> None:
        """Index a binding's input keys and listen for each one."""
        for role, key in binding.role_keys():
            owner = self._keys.get(key)
            if owner is not None or key in self.bindings:
                logger.warning(
                    "binding_key_conflict",
                    actuator=binding.actuator,
                    role=role.value,
                    key=key,
                    owner=owner[0].actuator if owner else key,
                )
                setattr(binding, ROLE_ATTRIBUTES[role], None)
                continue
            self._keys[key] = (binding, role)
            self.device.listen_for(key)

    # Lookup

    def lookup(self, command: Hashable) -> Optional[tuple[Binding, KeyRole]]:
        """Find the binding that claims a command id.

        Input keys are checked before actuator commands.

        Args:
            command: Incoming command id.

        Returns:
            Tuple of binding and matched role, or None.
        """
        claim = self._keys.get(command)
        if claim is not None:
            return claim
        binding = self.bindings.get(command)
        if binding is not None:
            return binding, KeyRole.ACTUATOR
        return None

    def get(self, actuator: Hashable) -> Optional[Binding]:
        """Get a binding by its actuator command."""
        return self.bindings.get(actuator)

    def list_all(self) -> list[Binding]:
        """Get all bindings in registration order."""
        return list(self.bindings.values())

    def current_value(self, actuator: Hashable) -> Optional[Any]:
        """Get the tracked value of an actuator.

        Args:
            actuator: Actuator command registered with the router.

        Returns:
            Current value, or None if the actuator is not registered.
        """
        binding = self.bindings.get(actuator)
        if binding is None:
            return None
        return binding.current_value

    # Dispatch

    def dispatch(self, command: Hashable, value: Any = None) -> bool:
        """Send one input or device event through the router.

        Args:
            command: Input command id, or an actuator's own command id for
                device-originated changes.
            value: Value carried by the event.

        Returns:
            True if a binding claimed the event.
        """
        if self.disable_gate is not None and self.disable_gate():
            log_dispatch_event("dispatch_gated", command, value=value)
            return False

        match = self.lookup(command)
        if match is None:
            if self.log_unhandled:
                logger.info("dispatch_unhandled", command=command, value=value)
            return False

        binding, role = match
        result = self._handlers[role](binding, value)
        if result is _NO_CHANGE:
            log_dispatch_event(
                "dispatch_no_change",
                command,
                actuator=binding.actuator,
                role=role.value,
                state_index=binding.state_index,
            )
            return True

        log_dispatch_event(
            "dispatch_applied",
            command,
            actuator=binding.actuator,
            role=role.value,
            value=result,
            state_index=binding.state_index,
        )
        self._mirror(binding, role, result)
        return True

    def _mirror(self, binding: Binding, role: KeyRole, value: Any) -> None:
        if not binding.mirror_to_external:
            return
        key = binding.mirror_key(role)
        if key is None:
            return
        self.device.dispatch_external(key, value)

    def _on_direct(self, binding: Binding, value: Any) -> Any:
        self.device.perform_action(binding.actuator, value, False)
        if binding.has_values:
            binding.snap(value)
        else:
            binding.current_value = value
        return value

    def _on_cycle(self, binding: Binding, value: Any) -> Any:
        if not binding.has_values:
            return _NO_CHANGE
        index = binding.state_index % len(binding.values) + 1
        return self._step_to(binding, index)

    def _on_increment(self, binding: Binding, value: Any) -> Any:
        if not binding.has_values or binding.state_index >= len(binding.values):
            return _NO_CHANGE
        return self._step_to(binding, binding.state_index + 1)

    def _on_decrement(self, binding: Binding, value: Any) -> Any:
        if not binding.has_values or binding.state_index <= 1:
            return _NO_CHANGE
        return self._step_to(binding, binding.state_index - 1)

    def _step_to(self, binding: Binding, index: int) -> Any:
        self.device.perform_action(binding.actuator, binding.values[index - 1], True)
        return binding.select(index)

    def _on_toggle(self, binding: Binding, value: Any) -> Any:
        new_value = binding.strategy.next_value()
        if new_value is None:
            logger.warning(
                "toggle_strategy_returned_none",
                actuator=binding.actuator,
                toggle_key=binding.toggle_key,
                current_value=binding.current_value,
            )
            return _NO_CHANGE
        self.device.perform_action(binding.actuator, new_value, True)
        if binding.has_values:
            binding.snap(new_value)
        else:
            binding.current_value = new_value
        return new_value

    def _on_actuator(self, binding: Binding, value: Any) -> Any:
        # The device already moved; only track and mirror
        if binding.has_values:
            return binding.snap(value)
        binding.current_value = value
        return value
