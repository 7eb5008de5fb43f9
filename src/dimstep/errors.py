"""
dimstep Errors

Every error raised by dimstep derives from DimstepError. Filesystem failures
from the device layer are plain OSError and propagate unchanged.
"""
from typing import Optional


class DimstepError(Exception):
    """Base class for all dimstep errors"""


class ConfigurationError(DimstepError, ValueError):
    """Invalid stepping selection or out-of-domain curve parameter"""


class ComputationDivergence(DimstepError, ArithmeticError):
    """A curve computation failed to produce a usable value"""

    def __init__(
        self,
        message: str,
        iterations: Optional[int] = None,
        residual: Optional[float] = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class DeviceError(DimstepError):
    """Base class for device adapter errors"""


class DeviceParseError(DeviceError, ValueError):
    """A device attribute did not hold a well-formed non-negative integer"""


class DeviceNotFoundError(DeviceError, LookupError):
    """No device matched the request"""
