"""
Unit tests for SysfsLight

Tests reading and writing the brightness attribute files.
"""
import pytest

from dimstep.errors import DeviceParseError
from dimstep.hardware.base import DeviceClass
from dimstep.hardware.sysfs import SysfsLight, read_attribute


class TestSysfsLightRead:
    """Tests for attribute reads."""

    def test_read_current_and_max(self, add_device):
        """Test reading both brightness attributes."""
        path = add_device("backlight", "intel_backlight", 4437, 19393)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        assert light.read_current() == 4437
        assert light.read_max() == 19393

    def test_name_from_path(self, add_device):
        """Test the device name comes from its directory."""
        path = add_device("leds", "input3::capslock", 0, 1)
        light = SysfsLight(path, DeviceClass.LED)

        assert light.name == "input3::capslock"
        assert light.device_class is DeviceClass.LED
        assert light.is_mock() is False

    @pytest.mark.parametrize("content", ["", "abc", "-5", "12.5", "0x10"])
    def test_malformed_attribute(self, add_device, content):
        """Test malformed attribute text raises DeviceParseError."""
        path = add_device("backlight", "broken", content, 100)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        with pytest.raises(DeviceParseError):
            light.read_current()

    def test_missing_attribute_is_os_error(self, add_device):
        """Test a missing attribute file raises OSError."""
        path = add_device("backlight", "half", 10, None)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        with pytest.raises(FileNotFoundError):
            light.read_max()

    def test_read_attribute_strips_newline(self, tmp_path):
        """Test the trailing newline is ignored."""
        attribute = tmp_path / "brightness"
        attribute.write_text("120\n")

        assert read_attribute(attribute) == 120


class TestSysfsLightWrite:
    """Tests for brightness writes."""

    def test_write(self, add_device):
        """Test writing the decimal value with a newline."""
        path = add_device("backlight", "intel_backlight", 10, 100)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        light.write(65)

        assert (path / "brightness").read_text() == "65\n"
        assert light.read_current() == 65

    def test_write_negative_rejected(self, add_device):
        """Test negative values are never written."""
        path = add_device("backlight", "intel_backlight", 10, 100)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        with pytest.raises(ValueError):
            light.write(-1)

        assert light.read_current() == 10

    def test_write_to_removed_device(self, add_device):
        """A device vanishing between read and write surfaces as OSError."""
        path = add_device("backlight", "gone", 10, 100)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)
        (path / "brightness").unlink()
        (path / "max_brightness").unlink()
        path.rmdir()

        with pytest.raises(OSError):
            light.write(50)


class TestSysfsLightDescribe:
    """Tests for the human readable summary."""

    def test_describe(self, add_device):
        """Test the summary shows the device path."""
        path = add_device("backlight", "intel_backlight", 500, 1000)
        light = SysfsLight(path, DeviceClass.BACKLIGHT)

        text = light.describe()

        assert f"Device: {path}" in text
        assert "Current brightness: 500 (50%)" in text
        assert "Max brightness: 1000" in text
