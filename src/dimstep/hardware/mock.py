"""
Mock Light Driver - Simulated dimmable light for testing

Provides a simulated device that behaves like a sysfs light
but keeps its brightness in memory.
"""
from typing import List, Optional

import structlog

from dimstep.hardware.base import DeviceClass, LightDevice

logger = structlog.get_logger(__name__)


class MockLight(LightDevice):
    """
    Mock light device for testing

    Simulates brightness reads and writes without touching sysfs.
    """

    def __init__(
        self,
        name: str = "mock_backlight",
        brightness: int = 0,
        max_brightness: int = 255,
        device_class: DeviceClass = DeviceClass.BACKLIGHT,
    ):
        """
        Initialize mock light

        Args:
            name: Device name
            brightness: Initial brightness
            max_brightness: Maximum brightness
            device_class: Class the device pretends to belong to
        """
        super().__init__(name, device_class)

        self.brightness = brightness
        self.max_brightness = max_brightness

        # Injected failures
        self.read_error: Optional[OSError] = None
        self.write_error: Optional[OSError] = None

        # Statistics
        self.read_count = 0
        self.write_count = 0
        self.error_count = 0
        self.written_values: List[int] = []

        logger.debug("mock_light_initialized", device=name, max_brightness=max_brightness)

    def read_current(self) -> int:
        self._check_read()
        return self.brightness

    def read_max(self) -> int:
        self._check_read()
        return self.max_brightness

    def write(self, value: int) -> None:
        if self.write_error is not None:
            self.error_count += 1
            raise self.write_error

        if value < 0 or value > self.max_brightness:
            raise ValueError(
                f"Invalid brightness: {value} (must be 0-{self.max_brightness})"
            )

        self.brightness = value
        self.write_count += 1
        self.written_values.append(value)

        logger.debug("mock_light_written", device=self.name, brightness=value)

    def _check_read(self) -> None:
        self.read_count += 1
        if self.read_error is not None:
            self.error_count += 1
            raise self.read_error

    def get_statistics(self) -> dict:
        """
        Get mock device statistics

        Returns:
            Dictionary with statistics
        """
        return {
            "brightness": self.brightness,
            "max_brightness": self.max_brightness,
            "read_count": self.read_count,
            "write_count": self.write_count,
            "error_count": self.error_count,
        }

    def is_mock(self) -> bool:
        """Check if this is a mock device"""
        return True

    # Helper methods for testing

    def simulate_brightness(self, brightness: int) -> None:
        """
        Set the brightness as if changed outside dimstep

        Args:
            brightness: New brightness
        """
        self.brightness = brightness

    def simulate_read_failure(self, error: Optional[OSError] = None) -> None:
        """
        Make subsequent reads fail

        Args:
            error: Error to raise (defaults to an EIO OSError)
        """
        self.read_error = error or OSError(5, "Input/output error")

    def simulate_write_failure(self, error: Optional[OSError] = None) -> None:
        """
        Make subsequent writes fail

        Args:
            error: Error to raise (defaults to a permission error)
        """
        self.write_error = error or PermissionError(13, "Permission denied")
