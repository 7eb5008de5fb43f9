"""
Device Discovery

Finds backlight and LED devices in the sysfs class registry. A directory
counts as a device when both of its brightness attributes can be read.
"""
from pathlib import Path
from typing import Iterable, List, Optional

import structlog

from dimstep.errors import DeviceError, DeviceNotFoundError
from dimstep.hardware.base import DeviceClass
from dimstep.hardware.sysfs import SysfsLight

logger = structlog.get_logger(__name__)


DEFAULT_SYSFS_ROOT = Path("/sys/class")


def _probe(device_path: Path, device_class: DeviceClass) -> Optional[SysfsLight]:
    """Return a SysfsLight for device_path, or None if it is not readable"""
    device = SysfsLight(device_path, device_class)
    try:
        device.read_current()
        device.read_max()
    except (OSError, DeviceError) as e:
        logger.debug(
            "device_probe_skipped",
            path=str(device_path),
            error=str(e),
        )
        return None
    return device


def discover(
    device_class: DeviceClass, sysfs_root: Path = DEFAULT_SYSFS_ROOT
) -> List[SysfsLight]:
    """
    List every readable device of one class

    Args:
        device_class: Class to enumerate
        sysfs_root: Directory holding the class directories

    Returns:
        Devices sorted by name (empty if the class directory is missing)
    """
    class_path = Path(sysfs_root) / device_class.value
    try:
        entries = sorted(class_path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("device_class_unreadable", path=str(class_path), error=str(e))
        return []

    devices = [
        device
        for device in (_probe(entry, device_class) for entry in entries)
        if device is not None
    ]
    logger.debug(
        "devices_discovered",
        device_class=device_class.value,
        count=len(devices),
    )
    return devices


def _discover_classes(
    classes: Iterable[DeviceClass], sysfs_root: Path
) -> List[SysfsLight]:
    devices: List[SysfsLight] = []
    for device_class in classes:
        devices.extend(discover(device_class, sysfs_root))
    return devices


def discover_backlights(sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> List[SysfsLight]:
    """
    List every readable backlight

    Raises:
        DeviceNotFoundError: If there are none
    """
    devices = discover(DeviceClass.BACKLIGHT, sysfs_root)
    if not devices:
        raise DeviceNotFoundError("Couldn't find any backlight.")
    return devices


def discover_all(sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> List[SysfsLight]:
    """
    List every readable backlight, then every readable LED

    Raises:
        DeviceNotFoundError: If there are none
    """
    devices = _discover_classes((DeviceClass.BACKLIGHT, DeviceClass.LED), sysfs_root)
    if not devices:
        raise DeviceNotFoundError("Couldn't find any backlight or led devices.")
    return devices


def from_name(name: str, sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> SysfsLight:
    """
    Look a device up by name, backlights first

    Args:
        name: Device directory name, e.g. intel_backlight
        sysfs_root: Directory holding the class directories

    Returns:
        The matching device

    Raises:
        DeviceNotFoundError: If no readable device has that name
    """
    if not name or "/" in name or name in (".", ".."):
        raise DeviceNotFoundError(f"Invalid device name '{name}'")

    for device_class in (DeviceClass.BACKLIGHT, DeviceClass.LED):
        device = _probe(Path(sysfs_root) / device_class.value / name, device_class)
        if device is not None:
            return device

    raise DeviceNotFoundError(f"Couldn't find device with name '{name}'")


def default_device(sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> SysfsLight:
    """
    First discovered backlight

    Raises:
        DeviceNotFoundError: If there is no backlight
    """
    logger.info("no_device_name_supplied_discovering")
    device = discover_backlights(sysfs_root)[0]
    logger.info("using_first_device_found", device=device.name)
    return device
