"""
dimstep Device Interface - sysfs and mock light devices

This module provides device abstraction for:
- Backlight and LED class devices exposed through sysfs
- An in-memory mock device for testing

Both implement LightDevice, so the control layer never touches files directly.
"""

from dimstep.hardware.base import DeviceClass, LightDevice
from dimstep.hardware.mock import MockLight
from dimstep.hardware.sysfs import SysfsLight

__all__ = [
    "DeviceClass",
    "LightDevice",
    "MockLight",
    "SysfsLight",
]
