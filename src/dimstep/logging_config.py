"""
dimstep Logging Configuration

Records go to stderr so stdout only carries what the user asked for
(--list output and --verbose changes). Plain console rendering by default,
one JSON object per line with --json-logs, and optionally a JSON log file.
"""
import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

import structlog
from pythonjsonlogger import jsonlogger

FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def setup_logging(
    log_level: str = "WARNING",
    json_logs: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure structlog over the standard library root logger

    Safe to call more than once; the previous root handlers are replaced.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, render JSON. If False, render for a terminal.
        stream: Stream for log output (defaults to stderr)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=_level(log_level, logging.WARNING),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # ConsoleRenderer formats exc_info itself
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging between runs
        cache_logger_on_first_use=False,
    )


def get_file_handler(
    log_file: Union[str, Path], log_level: str = "INFO"
) -> logging.FileHandler:
    """
    Create a JSON lines file handler

    Args:
        log_file: Path to log file (appended to)
        log_level: Minimum log level

    Returns:
        Configured file handler
    """
    handler = logging.FileHandler(str(log_file))
    handler.setLevel(_level(log_level, logging.INFO))
    handler.setFormatter(
        jsonlogger.JsonFormatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    )
    return handler


def configure_cli_logging(
    log_level: str,
    verbose: bool = False,
    json_logs: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Logging setup for one command line run

    Args:
        log_level: Level used when not verbose
        verbose: Raise the level to INFO so every adjustment is logged
        json_logs: Render JSON on stderr
        log_file: Also append JSON records to this file
    """
    setup_logging("INFO" if verbose else log_level, json_logs=json_logs)

    if log_file is not None:
        logging.getLogger().addHandler(get_file_handler(log_file))
