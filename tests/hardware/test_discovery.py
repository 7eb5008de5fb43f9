"""
Unit tests for device discovery in the sysfs class registry.
"""
import pytest

from dimstep.errors import DeviceNotFoundError
from dimstep.hardware.base import DeviceClass
from dimstep.hardware.discovery import (
    default_device,
    discover,
    discover_all,
    discover_backlights,
    from_name,
)


class TestDiscover:
    """Tests for enumerating one device class."""

    def test_discover_backlights_sorted(self, fake_sysfs):
        """Test backlights are discovered sorted by name."""
        devices = discover(DeviceClass.BACKLIGHT, fake_sysfs)

        assert [d.name for d in devices] == ["acpi_video0", "intel_backlight"]
        assert all(d.device_class is DeviceClass.BACKLIGHT for d in devices)

    def test_discover_leds(self, fake_sysfs):
        """Test LED devices are discovered."""
        devices = discover(DeviceClass.LED, fake_sysfs)

        assert [d.name for d in devices] == ["tpacpi::kbd_backlight"]

    def test_unreadable_devices_skipped(self, sysfs_root, add_device):
        """Test devices with unreadable attributes are skipped."""
        add_device("backlight", "good", 1, 10)
        add_device("backlight", "no_max", 1, None)
        add_device("backlight", "garbage", "on", 10)

        devices = discover(DeviceClass.BACKLIGHT, sysfs_root)

        assert [d.name for d in devices] == ["good"]

    def test_missing_class_directory(self, tmp_path):
        """Test a missing class directory yields no devices."""
        assert discover(DeviceClass.LED, tmp_path / "nowhere") == []


class TestDiscoverMany:
    """Tests for multi-class discovery."""

    def test_discover_all_backlights_first(self, fake_sysfs):
        """Test backlights are listed before LEDs."""
        devices = discover_all(fake_sysfs)

        assert [d.name for d in devices] == [
            "acpi_video0",
            "intel_backlight",
            "tpacpi::kbd_backlight",
        ]

    def test_discover_all_empty(self, sysfs_root):
        """Test an empty tree raises DeviceNotFoundError."""
        with pytest.raises(DeviceNotFoundError):
            discover_all(sysfs_root)

    def test_discover_backlights_ignores_leds(self, sysfs_root, add_device):
        """Test LEDs do not count as backlights."""
        add_device("leds", "input3::capslock", 0, 1)

        with pytest.raises(DeviceNotFoundError, match="backlight"):
            discover_backlights(sysfs_root)


class TestLookup:
    """Tests for finding a device by name."""

    def test_from_name_backlight(self, fake_sysfs):
        """Test looking up a backlight by name."""
        device = from_name("intel_backlight", fake_sysfs)

        assert device.device_class is DeviceClass.BACKLIGHT
        assert device.read_max() == 1000

    def test_from_name_led(self, fake_sysfs):
        """Test falling back to the LED class."""
        device = from_name("tpacpi::kbd_backlight", fake_sysfs)

        assert device.device_class is DeviceClass.LED

    def test_from_name_prefers_backlight(self, sysfs_root, add_device):
        """Test a backlight wins over an LED of the same name."""
        add_device("backlight", "shared", 1, 10)
        add_device("leds", "shared", 1, 2)

        assert from_name("shared", sysfs_root).device_class is DeviceClass.BACKLIGHT

    def test_from_name_unknown(self, fake_sysfs):
        """Test an unknown name raises DeviceNotFoundError."""
        with pytest.raises(DeviceNotFoundError, match="nope"):
            from_name("nope", fake_sysfs)

    @pytest.mark.parametrize("name", ["", ".", "..", "../leds/tpacpi::kbd_backlight"])
    def test_from_name_rejects_paths(self, fake_sysfs, name):
        """Test names that escape the class directory are rejected."""
        with pytest.raises(DeviceNotFoundError):
            from_name(name, fake_sysfs)

    def test_default_device_is_first_backlight(self, fake_sysfs):
        """Test the default device is the first backlight."""
        assert default_device(fake_sysfs).name == "acpi_video0"

    def test_default_device_none(self, sysfs_root):
        """Test no backlight raises DeviceNotFoundError."""
        with pytest.raises(DeviceNotFoundError):
            default_device(sysfs_root)
