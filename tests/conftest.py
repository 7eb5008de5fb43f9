"""
Shared test fixtures for dimstep tests.

Provides fixtures for:
- A fake sysfs class tree under tmp_path
- Mock light devices
- Settings pointed at the fake sysfs tree
- Logging isolation between tests
"""
import logging
from pathlib import Path

import pytest
import structlog

from dimstep.config import get_settings
from dimstep.hardware.mock import MockLight


def make_device(
    sysfs_root: Path,
    device_class: str,
    name: str,
    brightness="0",
    max_brightness="255",
) -> Path:
    """Create a device directory with its attribute files.

    Pass None for an attribute to leave its file out.
    """
    device_path = sysfs_root / device_class / name
    device_path.mkdir(parents=True)
    if brightness is not None:
        (device_path / "brightness").write_text(f"{brightness}\n")
    if max_brightness is not None:
        (device_path / "max_brightness").write_text(f"{max_brightness}\n")
    return device_path


# ============================================================================
# Sysfs Fixtures
# ============================================================================

@pytest.fixture
def sysfs_root(tmp_path) -> Path:
    """Empty sysfs class root with backlight and leds directories."""
    root = tmp_path / "class"
    (root / "backlight").mkdir(parents=True)
    (root / "leds").mkdir(parents=True)
    return root


@pytest.fixture
def fake_sysfs(sysfs_root) -> Path:
    """Sysfs tree with two backlights and one LED.

    - backlight/acpi_video0: 5 / 10
    - backlight/intel_backlight: 500 / 1000
    - leds/tpacpi::kbd_backlight: 1 / 2
    """
    make_device(sysfs_root, "backlight", "intel_backlight", 500, 1000)
    make_device(sysfs_root, "backlight", "acpi_video0", 5, 10)
    make_device(sysfs_root, "leds", "tpacpi::kbd_backlight", 1, 2)
    return sysfs_root


@pytest.fixture
def add_device(sysfs_root):
    """Factory adding a device directory to the sysfs tree."""
    def _add(device_class, name, brightness="0", max_brightness="255"):
        return make_device(sysfs_root, device_class, name, brightness, max_brightness)
    return _add


# ============================================================================
# Device Fixtures
# ============================================================================

@pytest.fixture
def mock_light() -> MockLight:
    """Mock backlight at 50 of 100."""
    return MockLight(name="mock_backlight", brightness=50, max_brightness=100)


# ============================================================================
# Settings & Logging Fixtures
# ============================================================================

@pytest.fixture
def settings_env(monkeypatch, fake_sysfs):
    """Point settings at the fake sysfs tree."""
    monkeypatch.setenv("DIMSTEP_SYSFS_ROOT", str(fake_sysfs))
    get_settings.cache_clear()
    yield fake_sysfs
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def isolate_logging():
    """Undo logging configuration done by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    # setup_logging() drops the handlers pytest installed
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
