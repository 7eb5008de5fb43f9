"""
Stepping Selection

Resolves exactly one stepping strategy from mutually exclusive user inputs.
When no model is requested the parabolic curve x^2 is used.
"""
import re
from typing import Optional, Tuple

import structlog

from dimstep.errors import ConfigurationError
from dimstep.logic.blend import DEFAULT_MAX_ITERATIONS
from dimstep.logic.stepping import (
    DEFAULT_EXPONENT,
    Absolute,
    Blend,
    Geometric,
    Linear,
    Parabolic,
    StepStrategy,
)

logger = structlog.get_logger(__name__)

_BLEND_PATTERN = re.compile(r"^\(?\s*([^,()]+),([^,()]+),([^,()]+)\)?$")


def parse_blend_parameters(text: str) -> Tuple[float, float, float]:
    """
    Parse blend parameters written as "(RATIO,A,B)".

    The parentheses are optional and whitespace is ignored.

    Args:
        text: Parameter text, e.g. "(0.75,1.8,2.2)"

    Returns:
        Tuple of (ratio, a, b)

    Raises:
        ConfigurationError: If the text is not three comma separated numbers
    """
    match = _BLEND_PATTERN.match(text.strip())
    if match is None:
        raise ConfigurationError(
            f"blend parameters must look like (RATIO,A,B), got {text!r}"
        )
    try:
        ratio, a, b = (float(group) for group in match.groups())
    except ValueError:
        raise ConfigurationError(
            f"blend parameters must be numbers, got {text!r}"
        ) from None
    return ratio, a, b


def resolve_stepping(
    step: Optional[float],
    *,
    absolute: bool = False,
    linear: bool = False,
    geometric: bool = False,
    parabolic: Optional[float] = None,
    blend: Optional[Tuple[float, float, float]] = None,
    default_exponent: float = DEFAULT_EXPONENT,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> StepStrategy:
    """
    Build the one stepping strategy requested by the user.

    Args:
        step: Step value (raw units or percent, depending on the model)
        absolute: Set the brightness to `step`
        linear: Add `step` raw units
        geometric: Scale by `step` percent
        parabolic: Exponent of the parabolic curve, if requested
        blend: (ratio, a, b) of the blend curve, if requested
        default_exponent: Parabolic exponent used when no model is requested
        max_iterations: Bisection cap for the blend curve

    Returns:
        A fully parameterized strategy

    Raises:
        ConfigurationError: If more than one model is requested, the step is
            missing, or a curve parameter is out of its domain
    """
    requested = [
        name
        for name, selected in (
            ("absolute", absolute),
            ("linear", linear),
            ("geometric", geometric),
            ("parabolic", parabolic is not None),
            ("blend", blend is not None),
        )
        if selected
    ]

    if len(requested) > 1:
        raise ConfigurationError(
            f"Only one stepping mode may be selected, got: {', '.join(requested)}"
        )

    if step is None:
        raise ConfigurationError("No step value provided")

    if absolute:
        strategy = Absolute(value=step)
    elif linear:
        strategy = Linear(step=step)
    elif geometric:
        strategy = Geometric(step=step)
    elif parabolic is not None:
        strategy = Parabolic(step=step, exponent=parabolic)
    elif blend is not None:
        ratio, a, b = blend
        strategy = Blend(step=step, ratio=ratio, a=a, b=b, max_iterations=max_iterations)
    else:
        strategy = Parabolic(step=step, exponent=default_exponent)

    logger.debug("stepping_resolved", mode=strategy.mode.value, strategy=repr(strategy))
    return strategy
