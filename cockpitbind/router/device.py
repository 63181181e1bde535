"""Device facade consumed by the binding router.

The router never drives a simulator directly. It talks to whatever object
the host hands it through the three calls declared here.
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Protocol

from cockpitbind.utils.logger import get_logger

logger = get_logger(__name__)


class DeviceFacade(Protocol):
    """Capabilities the router needs from the host device."""

    def perform_action(self, command: Hashable, value: Any, is_step: bool) -> None:
        """Drive an actuator. ``is_step`` marks a relative nudge."""

    def dispatch_external(self, command: Hashable, value: Any) -> None:
        """Mirror a value to the external flight model."""

    def listen_for(self, command: Hashable) -> None:
        """Register interest in an input command with the host event source."""


@dataclass
class DeviceCall:
    """A single call made against a LoggingDevice.

    Attributes:
        method: Name of the facade method that was called.
        command: Command id passed to the call.
        value: Value passed to the call, if any.
        is_step: Step flag for perform_action calls.
    """

    method: str
    command: Hashable
    value: Any = None
    is_step: bool = False


@dataclass
class LoggingDevice:
    """Facade that records and logs calls instead of driving a simulator.

    Useful for dry runs of a binding table when no host is attached.

    Attributes:
        name: Label attached to every log line.
        calls: Every call made, in order.
        listened: Input commands registered through listen_for.
    """

    name: str = "device"
    calls: list[DeviceCall] = field(default_factory=list)
    listened: list[Hashable] = field(default_factory=list)

    def perform_action(self, command: Hashable, value: Any, is_step: bool) -> None:
        self.calls.append(DeviceCall("perform_action", command, value, is_step))
        logger.info(
            "perform_action",
            device=self.name,
            command=command,
            value=value,
            is_step=is_step,
        )

    def dispatch_external(self, command: Hashable, value: Any) -> None:
        self.calls.append(DeviceCall("dispatch_external", command, value))
        logger.info("dispatch_external", device=self.name, command=command, value=value)

    def listen_for(self, command: Hashable) -> None:
        self.listened.append(command)
        logger.debug("listen_for", device=self.name, command=command)

    def actions(self) -> list[DeviceCall]:
        """Get the perform_action calls only."""
        return [c for c in self.calls if c.method == "perform_action"]

    def mirrors(self) -> list[DeviceCall]:
        """Get the dispatch_external calls only."""
        return [c for c in self.calls if c.method == "dispatch_external"]
