"""
dimstep - Main Entry Point

Command line surface: picks the device(s), resolves the stepping model and
applies it once.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import structlog
from pydantic import ValidationError

from dimstep import __version__
from dimstep.config import Settings, get_settings
from dimstep.control.adjuster import BatchPolicy, adjust_devices
from dimstep.errors import ConfigurationError, DeviceError, DimstepError
from dimstep.hardware import discovery
from dimstep.hardware.base import LightDevice
from dimstep.logging_config import configure_cli_logging, setup_logging
from dimstep.logic.selector import parse_blend_parameters, resolve_stepping
from dimstep.logic.stepping import StepStrategy

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="dimstep",
        description=(
            "Step the brightness of a backlight or LED device. By default STEP "
            "is +-% on the parabolic curve x^2."
        ),
    )
    parser.add_argument(
        "step",
        nargs="?",
        type=int,
        help=(
            "Step used by the chosen stepping: percent on a curve, a factor "
            "or a raw value. See the stepping options for details."
        ),
    )
    parser.add_argument(
        "--device-name",
        help="Backlight or LED class device to control, e.g. intel_backlight",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Apply the step to every backlight and LED device",
    )

    stepping = parser.add_argument_group("stepping")
    stepping.add_argument(
        "--set",
        action="store_true",
        dest="absolute",
        help="Set the brightness to STEP",
    )
    stepping.add_argument(
        "--linear",
        action="store_true",
        help="Add the raw STEP value onto the raw current brightness",
    )
    stepping.add_argument(
        "--geometric",
        action="store_true",
        help="Multiply the current brightness by (1 + STEP%%)",
    )
    stepping.add_argument(
        "--parabolic",
        type=float,
        metavar="EXPONENT",
        help="Advance STEP%% along the curve x^EXPONENT",
    )
    stepping.add_argument(
        "--blend",
        type=parse_blend_parameters,
        metavar="RATIO,A,B",
        help=(
            "Advance STEP%% along ratio*x^a + (1-ratio)*(1-(1-x)^(1/b)). "
            "Recommended: --blend (0.75,1.8,2.2)"
        ),
    )

    parser.add_argument(
        "--min-brightness",
        type=int,
        help="Never go below this raw brightness (default: 0)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show the brightness change",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write the new brightness. Implies --verbose",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available backlight and LED devices",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON formatted logs",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write JSON logs to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _strategy_from_args(args: argparse.Namespace, settings: Settings) -> StepStrategy:
    return resolve_stepping(
        args.step,
        absolute=args.absolute,
        linear=args.linear,
        geometric=args.geometric,
        parabolic=args.parabolic,
        blend=args.blend,
        default_exponent=settings.default_exponent,
        max_iterations=settings.max_bisection_iterations,
    )


def _select_devices(args: argparse.Namespace, sysfs_root: Path) -> List[LightDevice]:
    if args.all:
        return list(discovery.discover_all(sysfs_root))
    if args.device_name:
        return [discovery.from_name(args.device_name, sysfs_root)]
    return [discovery.default_device(sysfs_root)]


# Options that only make sense when adjusting a device
_ADJUST_OPTIONS = (
    ("step", "STEP"),
    ("device_name", "--device-name"),
    ("all", "--all"),
    ("absolute", "--set"),
    ("linear", "--linear"),
    ("geometric", "--geometric"),
    ("parabolic", "--parabolic"),
    ("blend", "--blend"),
    ("min_brightness", "--min-brightness"),
    ("dry_run", "--dry-run"),
)


def _check_list_alone(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Exit with a usage error if --list is combined with adjustment options."""
    given = [
        flag
        for dest, flag in _ADJUST_OPTIONS
        if getattr(args, dest) is not None and getattr(args, dest) is not False
    ]
    if given:
        parser.error(f"--list cannot be combined with {', '.join(given)}")


def _list_devices(sysfs_root: Path) -> int:
    try:
        devices = discovery.discover_all(sysfs_root)
    except DeviceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    status = EXIT_OK
    for device in devices:
        # The device may vanish or change between discovery and this read
        try:
            print(device.describe())
        except (OSError, DeviceError) as e:
            logger.error("device_describe_failed", device=device.name, error=str(e))
            print(f"Error: {device.name}: {e}", file=sys.stderr)
            status = EXIT_FAILURE
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the command line tool"""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list:
        _check_list_alone(parser, args)

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging(json_logs=args.json_logs)
        logger.error("invalid_settings", error=str(e))
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    verbose = args.verbose or args.dry_run

    # Initialize logging before touching devices
    configure_cli_logging(
        settings.log_level,
        verbose=verbose,
        json_logs=args.json_logs or settings.json_logs,
        log_file=args.log_file or settings.log_file,
    )

    if args.list:
        return _list_devices(settings.sysfs_root)

    try:
        strategy = _strategy_from_args(args, settings)
    except ConfigurationError as e:
        logger.error("configuration_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        devices = _select_devices(args, settings.sysfs_root)
    except DeviceError as e:
        logger.error("device_selection_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    min_brightness = (
        args.min_brightness if args.min_brightness is not None else settings.min_brightness
    )

    try:
        batch = adjust_devices(
            devices,
            strategy,
            min_brightness=min_brightness,
            dry_run=args.dry_run,
            policy=BatchPolicy(settings.batch_policy),
        )
    except (OSError, DimstepError) as e:
        logger.error("adjustment_aborted", error=str(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if verbose:
        for result in batch.results:
            print(f"{result.device}: {result.previous} -> {result.new} ({result.describe()})")

    for name, error in batch.failures:
        print(f"Error: {name}: {error}", file=sys.stderr)

    return EXIT_OK if batch.ok else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
