"""
Blend Curve

Combines two perceptual curves into one forward curve over the normalized
curve position x in [0, 1]:

    f(x) = x^a
    g(x) = 1 - (1 - x)^(1/b)
    h(x) = ratio * f(x) + (1 - ratio) * g(x)

h has no closed-form inverse, so the curve position of the current brightness
is found by bisection. The root of h(x) = p always lies between the two
component inverses f_inv(p) = p^(1/a) and g_inv(p) = 1 - (1-p)^b, since h is
a convex combination of two increasing curves.

The curve is symmetric under the mirror y = 1 - x:

    1 - h(1 - y) = h'(y)  with  (ratio', a', b') = (1 - ratio, 1/b, 1/a)

Roots in the upper half are searched in the mirrored coordinate, which keeps
full floating point resolution next to x = 1 where g is steepest.
"""
import math
from dataclasses import dataclass
from typing import Tuple

import structlog

from dimstep.errors import ComputationDivergence

logger = structlog.get_logger(__name__)


DEFAULT_MAX_ITERATIONS = 64


@dataclass(frozen=True)
class BlendPosition:
    """Result of locating a brightness on the blend curve."""
    coordinate: float  # Search coordinate (x, or y = 1 - x when mirrored)
    mirrored: bool
    iterations: int
    residual: float  # |h(x) - p| in normalized brightness

    @property
    def position(self) -> float:
        """
        Curve position x in [0, 1].

        Approximate next to x = 1 when mirrored: 1 - coordinate rounds to 1.0
        once the coordinate drops below float resolution. Evaluate the curve
        through the mirrored coordinate instead when precision matters there.
        """
        return 1.0 - self.coordinate if self.mirrored else self.coordinate


def _clamp01(x: float) -> float:
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0
    return x


def _power(x: float, exponent: float) -> float:
    """x^exponent for x in [0, 1]."""
    if x <= 0.0:
        return 0.0
    return x ** exponent


def _rise(x: float, exponent: float) -> float:
    """1 - (1 - x)^exponent for x in [0, 1], accurate for small x."""
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0
    return -math.expm1(exponent * math.log1p(-x))


def blend_curve(x: float, ratio: float, a: float, b: float) -> float:
    """
    Evaluate h(x).

    Args:
        x: Curve position (clamped to 0.0 - 1.0)
        ratio: Weight of x^a against 1 - (1-x)^(1/b)
        a: Exponent of the first component
        b: Exponent divisor of the second component

    Returns:
        Normalized brightness (0.0 to 1.0)
    """
    x = _clamp01(x)
    return ratio * _power(x, a) + (1.0 - ratio) * _rise(x, 1.0 / b)


def component_inverses(p: float, a: float, b: float) -> Tuple[float, float]:
    """Closed-form inverses (f_inv(p), g_inv(p)) of the two components."""
    p = _clamp01(p)
    return _power(p, 1.0 / a), _rise(p, b)


def _midpoint(low: float, high: float) -> float:
    # Geometric mean while the bracket spans orders of magnitude
    if low > 0.0 and high > 2.0 * low:
        return math.sqrt(low) * math.sqrt(high)
    return low + (high - low) / 2.0


def _bisect(
    p: float,
    ratio: float,
    a: float,
    b: float,
    tolerance: float,
    max_iterations: int,
) -> Tuple[float, int, float]:
    f_inv, g_inv = component_inverses(p, a, b)
    low, high = min(f_inv, g_inv), max(f_inv, g_inv)
    guess = ratio * f_inv + (1.0 - ratio) * g_inv
    residual = math.inf

    for iteration in range(1, max_iterations + 1):
        diff = blend_curve(guess, ratio, a, b) - p
        residual = abs(diff)
        if residual <= tolerance:
            return guess, iteration, residual

        if diff > 0.0:
            high = guess
        else:
            low = guess

        next_guess = _midpoint(low, high)
        if not (low < next_guess < high):
            # Bracket cannot be split any further
            raise ComputationDivergence(
                f"blend bisection ran out of precision after {iteration} iterations "
                f"(residual {residual:.3g} > tolerance {tolerance:.3g})",
                iterations=iteration,
                residual=residual,
            )
        guess = next_guess

    raise ComputationDivergence(
        f"blend bisection did not converge within {max_iterations} iterations "
        f"(residual {residual:.3g} > tolerance {tolerance:.3g})",
        iterations=max_iterations,
        residual=residual,
    )


def locate(
    current: int,
    maximum: int,
    ratio: float,
    a: float,
    b: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> BlendPosition:
    """
    Find the curve position of `current` on the blend curve.

    The tolerance is one device unit: |h(x) - current/maximum| <= 1/maximum.

    Args:
        current: Current raw brightness
        maximum: Device's maximum raw brightness (> 0)
        ratio: Blend ratio (0.0 to 1.0)
        a: First component exponent (> 0)
        b: Second component exponent divisor (> 0)
        max_iterations: Bisection iteration cap

    Returns:
        BlendPosition holding the search coordinate and convergence data

    Raises:
        ComputationDivergence: Tolerance not met within max_iterations
    """
    current = min(max(current, 0), maximum)
    tolerance = 1.0 / maximum
    p = current / maximum

    if blend_curve(0.5, ratio, a, b) >= p:
        coordinate, iterations, residual = _bisect(
            p, ratio, a, b, tolerance, max_iterations
        )
        return BlendPosition(coordinate, False, iterations, residual)

    q = (maximum - current) / maximum
    coordinate, iterations, residual = _bisect(
        q, 1.0 - ratio, 1.0 / b, 1.0 / a, tolerance, max_iterations
    )
    return BlendPosition(coordinate, True, iterations, residual)


def blend_step(
    current: int,
    maximum: int,
    step: float,
    ratio: float,
    a: float,
    b: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Advance `step` percent along the blend curve.

    Args:
        current: Current raw brightness
        maximum: Device's maximum raw brightness
        step: Signed step in percent of the curve
        ratio: Blend ratio (0.0 to 1.0)
        a: First component exponent (> 0)
        b: Second component exponent divisor (> 0)
        max_iterations: Bisection iteration cap

    Returns:
        New raw brightness (unrounded)

    Examples:
        >>> blend_step(1000, 1000, 10, 0.75, 1.8, 2.2)
        1000.0
        >>> blend_step(0, 1000, -10, 0.75, 1.8, 2.2)
        0.0
    """
    if maximum <= 0:
        return 0.0

    # Saturated ends; also avoids (1-x)^(1/b) at x = 1
    if current >= maximum and step > 0:
        return float(maximum)
    if current <= 0 and step < 0:
        return 0.0

    found = locate(current, maximum, ratio, a, b, max_iterations)
    advance = step / 100.0

    logger.debug(
        "blend_position_located",
        current=current,
        maximum=maximum,
        coordinate=found.coordinate,
        mirrored=found.mirrored,
        iterations=found.iterations,
        residual=found.residual,
    )

    if found.mirrored:
        y = _clamp01(found.coordinate - advance)
        return maximum - maximum * blend_curve(y, 1.0 - ratio, 1.0 / b, 1.0 / a)

    x = _clamp01(found.coordinate + advance)
    return maximum * blend_curve(x, ratio, a, b)
