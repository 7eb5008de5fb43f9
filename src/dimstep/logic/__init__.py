"""
dimstep Stepping Logic

This module contains the pure brightness math:
- Stepping models (absolute, linear, geometric, parabolic, blend)
- Stepping selection from user input
- Clamping raw results into valid device values
"""

from dimstep.logic.clamp import clamp, compute_brightness
from dimstep.logic.selector import parse_blend_parameters, resolve_stepping
from dimstep.logic.stepping import (
    Absolute,
    Blend,
    Geometric,
    Linear,
    Parabolic,
    StepStrategy,
    SteppingMode,
    calculate,
)

__all__ = [
    "Absolute",
    "Blend",
    "Geometric",
    "Linear",
    "Parabolic",
    "StepStrategy",
    "SteppingMode",
    "calculate",
    "clamp",
    "compute_brightness",
    "parse_blend_parameters",
    "resolve_stepping",
]
