"""
Leveled log sink used by the error classifier.

- NOTICE sits between INFO and WARNING and is registered with the logging
  module under the name "NOTICE".
- LogSink exposes error/warning/notice(template, context): "{key}" placeholders
  in the template are filled from the context before the record is emitted.
- configure() installs a rich handler on the root logger for command line
  applications that do not set up logging themselves.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import interpolate

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "notice": NOTICE,
}


class LogSink:
    """
    Thin adapter over a logging.Logger with template interpolation.

    The context mapping is attached to the record as `context` so handlers and
    filters can reach the raw fields (code, file, line, ...).
    """

    def __init__(self, logger):
        if isinstance(logger, str):
            logger = logging.getLogger(logger)
        if not isinstance(logger, logging.Logger | logging.LoggerAdapter):
            raise TypeError("log sink requires a logger or a logger name")
        self.logger = logger

    def log(self, level, template, context=None, /):
        if isinstance(level, str):
            try:
                level = LEVELS[level]
            except KeyError:
                raise ValueError(f"unknown log level {level!r}") from None
        context = dict(context or {})
        self.logger.log(level, "%s", interpolate(template, context), extra={"context": context})

    def error(self, template, context=None, /):
        self.log(logging.ERROR, template, context)

    def warning(self, template, context=None, /):
        self.log(logging.WARNING, template, context)

    def notice(self, template, context=None, /):
        self.log(NOTICE, template, context)

    def __repr__(self):
        return f"log-sink(logger={self.logger.name!r})"


def configure(level=logging.INFO, /, *, debug=False, console=None):
    """
    route the root logger through rich; tracebacks are rendered in debug mode.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    return handler


__all__ = (
    "NOTICE",
    "LEVELS",
    "LogSink",
    "configure",
)
