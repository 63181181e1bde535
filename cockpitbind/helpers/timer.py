"""Countdown timer driven by the device update loop.

The timer has no clock of its own; each update() advances it by a fixed
step that must match the device update period.
"""

from typing import Callable, Optional

from cockpitbind.config import get_settings
from cockpitbind.utils.logger import get_logger

logger = get_logger(__name__)


class Timer:
    """Counts a fixed duration down in update-rate steps.

    Attributes:
        duration: Seconds until the timer goes off.
        update_rate: Seconds added per update() call.
        callback: Called when the timer goes off.
        persistent_ringing: Keep firing the callback every update after
            going off, until stop() is called.
        auto_reset: Restart counting from zero after going off.
        running: Whether the timer is counting.
        elapsed: Seconds counted so far.
        completed: Whether the timer has gone off.
    """

    def __init__(
        self,
        duration: float = 1.0,
        update_rate: float = 0.05,
        callback: Optional[Callable[[], None]] = None,
        persistent_ringing: bool = False,
        auto_reset: bool = False,
    ):
        """Initialize the timer.

        Args:
            duration: Seconds until the timer goes off.
            update_rate: Seconds added per update() call.
            callback: Called when the timer goes off.
            persistent_ringing: Fire the callback every update once done.
            auto_reset: Restart automatically once done.

        Raises:
            ValueError: If persistent_ringing and auto_reset are both set.
        """
        if persistent_ringing and auto_reset:
            raise ValueError("persistent_ringing and auto_reset cannot both be set")

        self.duration = duration
        self.update_rate = update_rate
        self.callback = callback
        self.persistent_ringing = persistent_ringing
        self.auto_reset = auto_reset
        self.running = False
        self.elapsed = 0.0
        self.completed = False

    @classmethod
    def from_config(cls, callback: Optional[Callable[[], None]] = None, **kwargs) -> "Timer":
        """Create a Timer from app configuration.

        Args:
            callback: Called when the timer goes off.
            **kwargs: Overrides for persistent_ringing / auto_reset / duration.

        Returns:
            Configured Timer instance.
        """
        settings = get_settings()
        kwargs.setdefault("duration", settings.timer.duration)
        kwargs.setdefault("update_rate", settings.timer.update_rate)
        return cls(callback=callback, **kwargs)

    @property
    def is_done(self) -> bool:
        """Check if the timer has gone off."""
        return self.completed

    def start(self) -> None:
        """Start counting from zero."""
        self.running = True
        self.elapsed = 0.0
        self.completed = False

    def stop(self) -> None:
        """Stop counting, or stop ringing."""
        self.running = False

    def reset(self) -> None:
        """Clear the timer back to its initial state."""
        self.elapsed = 0.0
        self.completed = False
        self.running = False

    def set_callback(self, callback: Optional[Callable[[], None]]) -> None:
        """Replace the callback fired when the timer goes off."""
        self.callback = callback

    def update(self) -> None:
        """Advance the timer one device update."""
        if not self.running:
            return

        if self.completed and self.persistent_ringing:
            self._fire()
            return

        self.elapsed += self.update_rate
        if self.elapsed < self.duration:
            return

        logger.debug("timer_elapsed", duration=self.duration, elapsed=self.elapsed)
        if self.auto_reset:
            # Rearm first; the callback may stop() the timer
            self.elapsed = 0.0
            self.completed = False
            self.running = True
        else:
            self.completed = True
            self.running = self.persistent_ringing
        self._fire()

    def _fire(self) -> None:
        if self.callback is not None:
            self.callback()
