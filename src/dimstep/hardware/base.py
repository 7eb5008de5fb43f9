"""
Device Base Classes - Abstract interface for dimmable light devices

Defines the interface that all light devices must implement,
allowing for easy swapping between mock and sysfs implementations.
"""
from abc import ABC, abstractmethod
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class DeviceClass(Enum):
    """Device classes, named after their sysfs class directories"""
    BACKLIGHT = "backlight"
    LED = "leds"


class LightDevice(ABC):
    """Base class for all dimmable light devices"""

    def __init__(self, name: str, device_class: DeviceClass):
        """
        Initialize light device

        Args:
            name: Device name (e.g. intel_backlight)
            device_class: Class the device belongs to
        """
        self.name = name
        self.device_class = device_class

    @abstractmethod
    def read_current(self) -> int:
        """
        Read the current raw brightness

        Returns:
            Current brightness

        Raises:
            OSError: If the attribute cannot be read
            DeviceParseError: If the attribute is not a non-negative integer
        """
        pass

    @abstractmethod
    def read_max(self) -> int:
        """
        Read the maximum raw brightness

        Returns:
            Maximum brightness

        Raises:
            OSError: If the attribute cannot be read
            DeviceParseError: If the attribute is not a non-negative integer
        """
        pass

    @abstractmethod
    def write(self, value: int) -> None:
        """
        Write a new raw brightness

        Args:
            value: Brightness within [0, read_max()]

        Raises:
            OSError: If the device rejects the write
        """
        pass

    @property
    def location(self) -> str:
        """Where the device lives, for display"""
        return f"{self.device_class.value}/{self.name}"

    def is_mock(self) -> bool:
        """
        Check if this device is simulated

        Returns:
            True for mock devices
        """
        return False

    def describe(self) -> str:
        """
        Human readable summary of the device and its brightness

        Returns:
            Multi-line description
        """
        current = self.read_current()
        maximum = self.read_max()
        percent = current / maximum * 100.0 if maximum else 0.0
        return (
            f"Device: {self.location}\n"
            f"Current brightness: {current} ({percent:.0f}%)\n"
            f"Max brightness: {maximum}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, device_class={self.device_class.name})"
