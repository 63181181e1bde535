"""Linear value animation for cockpit and model arguments.

An Animator owns a set of Animations and advances them once per device
update. Speed is the number of seconds needed to sweep the full range,
so moving part of the range takes proportionally less time.
"""

from dataclasses import dataclass
from typing import Callable, Hashable, Optional

from cockpitbind.config import get_settings
from cockpitbind.utils.logger import get_logger

logger = get_logger(__name__)

# Ranges narrower than this are treated as a single point
DEGENERATE_RANGE = 1e-12


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to [low, high]."""
    return max(low, min(high, value))


@dataclass
class Animation:
    """A single animated argument.

    Attributes:
        arg: Draw argument the value is applied to.
        minimum: Range start.
        maximum: Range end.
        speed: Seconds to sweep the full range.
        value: Current value.
        target: Value being moved toward.
        running: Whether the animation is moving.
        loop: Sweep low to high repeatedly (sawtooth).
        cockpit: Apply to the cockpit instead of the external model.
        clickable: Optional clickable element refreshed on each apply.
        on_value: Optional hook called with the value on each moving tick.
        apply: Output sink shared with the owning Animator.
    """

    arg: Hashable
    minimum: float
    maximum: float
    speed: float = 1.0
    value: float = 0.0
    target: float = 0.0
    running: bool = False
    loop: bool = False
    cockpit: bool = False
    clickable: Optional[str] = None
    on_value: Optional[Callable[[float], None]] = None
    apply: Optional[Callable[["Animation"], None]] = None

    @property
    def low(self) -> float:
        return min(self.minimum, self.maximum)

    @property
    def high(self) -> float:
        return max(self.minimum, self.maximum)

    @property
    def is_running(self) -> bool:
        """Check if the animation is moving."""
        return self.running

    def get(self) -> float:
        """Get the current value."""
        return self.value

    def start(self, target: Optional[float] = None) -> None:
        """Start moving toward target.

        With no target the animation toggles: below the midpoint it heads
        for the range end, otherwise for the range start.

        Args:
            target: Value to move toward, clamped to the range.
        """
        if target is None:
            midpoint = (self.minimum + self.maximum) * 0.5
            target = self.maximum if self.value < midpoint else self.minimum
        else:
            target = clamp(target, self.low, self.high)

        self.target = target
        self.running = self.value != self.target

    def set(self, value: float) -> None:
        """Jump to value immediately and stop."""
        self.value = clamp(value, self.low, self.high)
        self.target = self.value
        self.running = False
        if self.apply is not None:
            self.apply(self)

    def stop(self) -> None:
        """Stop moving, keeping the current value."""
        self.running = False

    def set_clickable(self, name: Optional[str]) -> None:
        """Mark a clickable element to refresh on every apply."""
        self.clickable = name

    def advance(self, update_rate: float) -> None:
        """Move one tick toward the target."""
        full_range = abs(self.maximum - self.minimum)
        if full_range <= DEGENERATE_RANGE:
            self.value = self.target
            self.running = False
        else:
            step = full_range * (update_rate / self.speed)
            remaining = abs(self.target - self.value)
            if remaining <= step:
                self.value = self.target
                if self.loop:
                    # Sawtooth: always restart from the low end
                    self.value = self.low
                    self.target = self.high
                else:
                    self.running = False
            elif self.target > self.value:
                self.value += step
            else:
                self.value -= step

        if self.on_value is not None:
            self.on_value(self.value)


class Animator:
    """Drives a set of animations from the device update loop.

    The apply sink writes each animation's value to its draw argument
    (cockpit or external model, per ``animation.cockpit``) and refreshes
    ``animation.clickable`` when one is set.

    Attributes:
        update_rate: Seconds per update(), matching the device update period.
        animations: Registered animations in creation order.
        apply: Output sink called for every animation on every update.
    """

    def __init__(
        self,
        update_rate: float = 0.05,
        apply: Optional[Callable[[Animation], None]] = None,
    ):
        """Initialize the animator.

        Args:
            update_rate: Seconds per update() call.
            apply: Sink writing an animation's value to its argument.
        """
        self.update_rate = update_rate
        self.apply = apply
        self.animations: list[Animation] = []

    @classmethod
    def from_config(cls, apply: Optional[Callable[[Animation], None]] = None) -> "Animator":
        """Create an Animator from app configuration.

        Args:
            apply: Sink writing an animation's value to its argument.

        Returns:
            Configured Animator instance.
        """
        settings = get_settings()
        return cls(update_rate=settings.animation.update_rate, apply=apply)

    def create(
        self,
        arg: Hashable,
        value_range: tuple[float, float],
        speed: float = 1.0,
        loop: bool = False,
        cockpit: bool = False,
    ) -> Animation:
        """Register a new animation.

        Args:
            arg: Draw argument to animate.
            value_range: (start, end) of the range.
            speed: Seconds to sweep the full range; non-positive becomes 1.0.
            loop: Sweep low to high repeatedly.
            cockpit: Apply to the cockpit instead of the external model.

        Returns:
            The new animation, resting at the range start.
        """
        start, end = value_range
        animation = Animation(
            arg=arg,
            minimum=start,
            maximum=end,
            speed=speed if speed and speed > 0 else 1.0,
            value=start,
            target=start,
            loop=loop,
            cockpit=cockpit,
            apply=self.apply,
        )
        self.animations.append(animation)
        logger.debug("animation_created", arg=arg, range=value_range, speed=animation.speed)
        return animation

    def update(self) -> None:
        """Advance every animation one tick and apply all values."""
        for animation in self.animations:
            if animation.running:
                animation.advance(self.update_rate)
            if self.apply is not None:
                self.apply(animation)
