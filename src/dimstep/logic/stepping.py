"""
Stepping Models

A stepping model turns a device's current brightness and its maximum into a
new raw brightness value. Exactly one model is active per invocation.

Supports five models:
- ABSOLUTE: Sets a fixed raw value, ignoring the current brightness
- LINEAR: Adds a raw step onto the current brightness
- GEOMETRIC: Multiplies the current brightness by (1 + step%)
- PARABOLIC: Moves step% along the power curve x^exponent (perceptual dimming)
- BLEND: Moves step% along ratio*x^a + (1-ratio)*(1-(1-x)^(1/b))

Results are raw floats: unrounded and unclamped. Rounding and bounding into a
valid device value is the job of dimstep.logic.clamp.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from dimstep.errors import ConfigurationError
from dimstep.logic.blend import DEFAULT_MAX_ITERATIONS, blend_step


class SteppingMode(Enum):
    """Names of the available stepping models."""
    ABSOLUTE = "absolute"
    LINEAR = "linear"
    GEOMETRIC = "geometric"
    PARABOLIC = "parabolic"
    BLEND = "blend"


DEFAULT_EXPONENT = 2.0

# Recommended blend parameters (ratio, a, b)
RECOMMENDED_BLEND = (0.75, 1.8, 2.2)


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a finite number > 0, got {value}")


@dataclass(frozen=True)
class Absolute:
    """Set the brightness to a fixed raw value."""
    value: float

    mode = SteppingMode.ABSOLUTE

    def __post_init__(self):
        if not math.isfinite(self.value) or self.value < 0:
            raise ConfigurationError(f"absolute value must be >= 0, got {self.value}")


@dataclass(frozen=True)
class Linear:
    """Add `step` raw units to the current brightness."""
    step: float

    mode = SteppingMode.LINEAR


@dataclass(frozen=True)
class Geometric:
    """Scale the current brightness by `step` percent."""
    step: float

    mode = SteppingMode.GEOMETRIC


@dataclass(frozen=True)
class Parabolic:
    """Advance `step` percent along the curve x^exponent."""
    step: float
    exponent: float = DEFAULT_EXPONENT

    mode = SteppingMode.PARABOLIC

    def __post_init__(self):
        _require_positive("exponent", self.exponent)


@dataclass(frozen=True)
class Blend:
    """Advance `step` percent along ratio*x^a + (1-ratio)*(1-(1-x)^(1/b))."""
    step: float
    ratio: float = RECOMMENDED_BLEND[0]
    a: float = RECOMMENDED_BLEND[1]
    b: float = RECOMMENDED_BLEND[2]
    max_iterations: int = field(default=DEFAULT_MAX_ITERATIONS, compare=False)

    mode = SteppingMode.BLEND

    def __post_init__(self):
        _require_positive("a", self.a)
        _require_positive("b", self.b)
        if not (0.0 <= self.ratio <= 1.0):
            raise ConfigurationError(f"ratio must be within [0, 1], got {self.ratio}")
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )


StepStrategy = Union[Absolute, Linear, Geometric, Parabolic, Blend]


def calculate(strategy: StepStrategy, current: int, maximum: int) -> float:
    """
    Calculate the raw new brightness for one device.

    Args:
        strategy: Stepping model with its parameters
        current: Current raw brightness of the device
        maximum: Device's maximum raw brightness

    Returns:
        New raw brightness (unrounded, unclamped)

    Examples:
        >>> calculate(Linear(step=-10), 50, 100)
        40.0
        >>> calculate(Geometric(step=100), 50, 100)
        100.0
        >>> round(calculate(Parabolic(step=10), 50, 100))
        65
    """
    if isinstance(strategy, Absolute):
        return float(strategy.value)

    elif isinstance(strategy, Linear):
        return float(current + strategy.step)

    elif isinstance(strategy, Geometric):
        return current + current * (strategy.step / 100.0)

    elif isinstance(strategy, Parabolic):
        return _parabolic(strategy, current, maximum)

    elif isinstance(strategy, Blend):
        return blend_step(
            current,
            maximum,
            strategy.step,
            ratio=strategy.ratio,
            a=strategy.a,
            b=strategy.b,
            max_iterations=strategy.max_iterations,
        )

    raise TypeError(f"Unknown stepping strategy: {strategy!r}")


def _parabolic(strategy: Parabolic, current: int, maximum: int) -> float:
    if maximum <= 0:
        return 0.0

    # Curve position of the current brightness
    position = (current / maximum) ** (1.0 / strategy.exponent)
    position = min(1.0, max(0.0, position + strategy.step / 100.0))

    return maximum * position ** strategy.exponent
