"""
Sysfs Light Driver - Backlight and LED devices exposed by the kernel

Each device is a directory under /sys/class/<class>/<name> holding the
`brightness` and `max_brightness` attribute files.
"""
from pathlib import Path
from typing import Union

import structlog

from dimstep.errors import DeviceParseError
from dimstep.hardware.base import DeviceClass, LightDevice

logger = structlog.get_logger(__name__)


BRIGHTNESS_ATTRIBUTE = "brightness"
MAX_BRIGHTNESS_ATTRIBUTE = "max_brightness"


def read_attribute(path: Path) -> int:
    """
    Read a non-negative integer attribute file

    Args:
        path: Attribute file path

    Returns:
        Parsed value

    Raises:
        OSError: If the file cannot be read
        DeviceParseError: If the content is not a non-negative integer
    """
    text = path.read_text(encoding="utf-8").strip()
    if not (text.isascii() and text.isdigit()):
        raise DeviceParseError(f"{path}: expected a non-negative integer, got {text!r}")
    return int(text)


class SysfsLight(LightDevice):
    """Light device backed by sysfs attribute files"""

    def __init__(self, device_path: Union[str, Path], device_class: DeviceClass):
        """
        Initialize sysfs light

        Args:
            device_path: Device directory, e.g. /sys/class/backlight/intel_backlight
            device_class: Class the device belongs to
        """
        self.device_path = Path(device_path)
        super().__init__(self.device_path.name, device_class)

    @property
    def brightness_path(self) -> Path:
        return self.device_path / BRIGHTNESS_ATTRIBUTE

    @property
    def max_brightness_path(self) -> Path:
        return self.device_path / MAX_BRIGHTNESS_ATTRIBUTE

    def read_current(self) -> int:
        value = read_attribute(self.brightness_path)
        logger.debug("sysfs_brightness_read", device=self.name, brightness=value)
        return value

    def read_max(self) -> int:
        value = read_attribute(self.max_brightness_path)
        logger.debug("sysfs_max_brightness_read", device=self.name, max_brightness=value)
        return value

    def write(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Invalid brightness: {value} (must be >= 0)")

        self.brightness_path.write_text(f"{int(value)}\n", encoding="utf-8")
        logger.info("sysfs_brightness_written", device=self.name, brightness=value)

    @property
    def location(self) -> str:
        return str(self.device_path)
