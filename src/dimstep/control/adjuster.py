"""
Brightness Adjuster

Applies one stepping strategy to one or more devices. Each device is read,
computed and written independently; nothing is shared between devices.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

import structlog

from dimstep.hardware.base import DeviceClass, LightDevice
from dimstep.logic.clamp import compute_brightness
from dimstep.logic.stepping import StepStrategy, SteppingMode

logger = structlog.get_logger(__name__)


class BatchPolicy(Enum):
    """What a multi-device run does when one device fails."""
    CONTINUE = "continue"  # Record the failure, adjust the remaining devices
    ABORT = "abort"  # Re-raise the first failure


@dataclass(frozen=True)
class AdjustmentResult:
    """Before/after record of one device adjustment."""
    device: str
    device_class: DeviceClass
    previous: int
    new: int
    maximum: int
    mode: SteppingMode
    written: bool

    @property
    def previous_percent(self) -> float:
        return self.previous / self.maximum * 100.0 if self.maximum else 0.0

    @property
    def new_percent(self) -> float:
        return self.new / self.maximum * 100.0 if self.maximum else 0.0

    @property
    def changed(self) -> bool:
        return self.new != self.previous

    def describe(self) -> str:
        """Percent change, e.g. '50% -> 65%'"""
        return f"{self.previous_percent:.0f}% -> {self.new_percent:.0f}%"


@dataclass
class BatchResult:
    """Outcome of adjusting several devices."""
    results: List[AdjustmentResult] = field(default_factory=list)
    failures: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def adjust_device(
    device: LightDevice,
    strategy: StepStrategy,
    min_brightness: int = 0,
    dry_run: bool = False,
) -> AdjustmentResult:
    """
    Compute and apply a new brightness to one device.

    Args:
        device: Device to adjust
        strategy: Stepping model with its parameters
        min_brightness: Brightness floor
        dry_run: If True, compute but do not write

    Returns:
        AdjustmentResult describing the change

    Raises:
        OSError: Reading or writing the device failed
        DeviceParseError: A device attribute was malformed
        ComputationDivergence: The stepping model failed to converge
    """
    current = device.read_current()
    maximum = device.read_max()

    new = compute_brightness(strategy, current, maximum, min_brightness)

    if not dry_run:
        device.write(new)

    result = AdjustmentResult(
        device=device.name,
        device_class=device.device_class,
        previous=current,
        new=new,
        maximum=maximum,
        mode=strategy.mode,
        written=not dry_run,
    )

    logger.info(
        "brightness_adjusted",
        device=device.name,
        mode=strategy.mode.value,
        previous=current,
        new=new,
        maximum=maximum,
        change=result.describe(),
        dry_run=dry_run,
    )
    return result


def adjust_devices(
    devices: Iterable[LightDevice],
    strategy: StepStrategy,
    min_brightness: int = 0,
    dry_run: bool = False,
    policy: BatchPolicy = BatchPolicy.CONTINUE,
) -> BatchResult:
    """
    Adjust several devices one after another.

    Args:
        devices: Devices to adjust
        strategy: Stepping model with its parameters
        min_brightness: Brightness floor
        dry_run: If True, compute but do not write
        policy: Failure handling between devices

    Returns:
        BatchResult with successful results and per-device failures

    Raises:
        Exception: The first device failure, when policy is ABORT
    """
    batch = BatchResult()

    for device in devices:
        try:
            batch.results.append(
                adjust_device(device, strategy, min_brightness, dry_run)
            )
        except Exception as e:
            logger.error(
                "device_adjustment_failed",
                device=device.name,
                error=str(e),
                policy=policy.value,
            )
            if policy is BatchPolicy.ABORT:
                raise
            batch.failures.append((device.name, e))

    logger.info(
        "batch_adjustment_complete",
        adjusted=len(batch.results),
        failed=len(batch.failures),
    )
    return batch
