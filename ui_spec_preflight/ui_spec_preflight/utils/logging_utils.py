import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "ui_spec_preflight"
DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _PreflightStreamHandler(logging.StreamHandler):
    """Stream handler owned by the preflight tools.

    ``max_level`` caps the records it accepts so progress and problems can
    be routed to different streams.
    """

    def __init__(self, stream: TextIO, min_level: int, max_level: Optional[int] = None) -> None:
        super().__init__(stream=stream)
        self.setLevel(min_level)
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        if self.max_level is not None and record.levelno > self.max_level:
            return False
        return super().filter(record)


def resolve_level(name: Optional[str], default: int) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    level = getattr(logging, str(name).upper(), None) if name else None
    return level if isinstance(level, int) else default


def remove_preflight_handlers() -> None:
    """Detach every handler a previous configuration installed."""
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _PreflightStreamHandler):
            package_logger.removeHandler(handler)
            handler.close()


def configure_preflight_logging(
    log_level: Optional[str] = "INFO",
    print_level: Optional[str] = "WARNING",
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route the package's log records to stdout and stderr.

    Records below ``print_level`` go to ``stdout``; records at or above it go
    to ``stderr``, so load failures stay visible when stdout is piped into a
    JSON report. Calling this again replaces the previous handlers, and
    handlers other loggers installed are left alone.
    """
    level = resolve_level(log_level, logging.INFO)
    split_level = max(resolve_level(print_level, logging.WARNING), logging.DEBUG)

    remove_preflight_handlers()
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)

    formatter = logging.Formatter(fmt)
    handlers = [
        _PreflightStreamHandler(stdout or sys.stdout, logging.DEBUG, split_level - 1),
        _PreflightStreamHandler(stderr or sys.stderr, split_level),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    return package_logger
