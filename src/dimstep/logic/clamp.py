"""
Brightness Clamp

Turns a raw stepping result into a value the device accepts.
"""
import math

from dimstep.errors import ComputationDivergence
from dimstep.logic.stepping import StepStrategy, calculate


def clamp(raw: float, minimum: int, maximum: int) -> int:
    """
    Round half up, then bound into [minimum, maximum].

    A floor above the device ceiling is lowered to the ceiling.

    Args:
        raw: Raw brightness from a stepping model
        minimum: User supplied brightness floor
        maximum: Device's maximum raw brightness

    Returns:
        Brightness satisfying 0 <= value <= maximum

    Raises:
        ComputationDivergence: If raw is NaN

    Examples:
        >>> clamp(64.5, 0, 100)
        65
        >>> clamp(1100, 0, 100)
        100
        >>> clamp(-50, 5, 100)
        5
    """
    if math.isnan(raw):
        raise ComputationDivergence("stepping produced NaN brightness")

    maximum = max(0, maximum)
    minimum = min(max(0, minimum), maximum)

    # Infinite values never reach floor()
    if raw >= maximum:
        return maximum
    if raw <= minimum:
        return minimum

    rounded = math.floor(raw + 0.5)
    return max(minimum, min(maximum, rounded))


def compute_brightness(
    strategy: StepStrategy,
    current: int,
    maximum: int,
    min_brightness: int = 0,
) -> int:
    """
    Compute the new device brightness for one (current, maximum) pair.

    Args:
        strategy: Stepping model with its parameters
        current: Current raw brightness
        maximum: Device's maximum raw brightness
        min_brightness: Brightness floor

    Returns:
        New brightness within [min_brightness, maximum]
    """
    return clamp(calculate(strategy, current, maximum), min_brightness, maximum)
