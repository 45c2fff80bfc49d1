import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def _stream_handler(
    stream: TextIO,
    level: int,
    formatter: logging.Formatter,
    max_level: Optional[int] = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    if max_level is not None:
        handler.addFilter(_MaxLevelFilter(max_level))
    handler.setFormatter(formatter)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging for the spec checker.

    Records below ``stderr_level`` go to stdout, the rest to stderr, so a
    report printed on stdout can be piped without the diagnostics mixed in.
    Existing root handlers are replaced.
    """
    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    stderr_level = max(stderr_level, logging.DEBUG)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(_stream_handler(sys.stdout, logging.DEBUG, formatter, max_level=stderr_level - 1))
    root.addHandler(_stream_handler(sys.stderr, stderr_level, formatter))
