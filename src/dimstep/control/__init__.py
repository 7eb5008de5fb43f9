"""
dimstep Control - applying stepping strategies to devices
"""

from dimstep.control.adjuster import (
    AdjustmentResult,
    BatchPolicy,
    BatchResult,
    adjust_device,
    adjust_devices,
)

__all__ = [
    "AdjustmentResult",
    "BatchPolicy",
    "BatchResult",
    "adjust_device",
    "adjust_devices",
]
