"""
Application context shared by the dispatcher, the renderer and the classifier.

An Application is built once, before any dispatch, and passed explicitly to the
components that need process-wide metadata:
- name, version: shown by the version banner.
- debug: selects the verbose log template of the error classifier.
- framework_version: defaults to the installed switchyard version.
- log: LogSink (or any object with error/warning/notice(template, context))
  receiving classified failures; a logger or logger name is wrapped, None
  means a sink over the logger named after the application.
- console: rich Console used for help, version and "not found" output (None
  means a stdout Console).
- levels: SeverityMap from numeric failure codes to log levels.
- epilog: footer printed under help screens (None to drop it).
- colorful: style terminal faults with the palette.
"""
import logging
from types import MappingProxyType

from rich.console import Console

from .logs import LEVELS, LogSink
from .options import SpecType
from .utils import *


class SeverityMap:
    """
    Map numeric failure codes to one of 'error', 'warning' or 'notice'.

    Resolution order
    - explicit entries given at construction,
    - ranges: 11xxx → error, 12xxx → warning, 13xxx → notice,
    - code 0 (failures without a code) → error,
    - otherwise the fallback level. fallback=None means "no level": the
      classifier then drops the failure.
    """

    RANGES = (
        (range(11000, 12000), "error"),
        (range(12000, 13000), "warning"),
        (range(13000, 14000), "notice"),
    )

    def __init__(self, mapping=None, /, fallback="error"):
        mapping = dict(mapping or {})
        for code, level in mapping.items():
            if not isinstance(code, int):
                raise TypeError("severity codes must be integers")
            if level not in LEVELS:
                raise ValueError(f"severity level must be one of {', '.join(LEVELS)}")
        if fallback is not None and fallback not in LEVELS:
            raise ValueError(f"severity fallback must be one of {', '.join(LEVELS)} or None")
        self.mapping = MappingProxyType({0: "error"} | mapping)
        self.fallback = fallback

    def mapped(self, code, /):
        """
        True when `code` has an explicit or range level (fallback not used).
        """
        return code in self.mapping or any(code in codes for codes, _ in self.RANGES)

    def level(self, code, /):
        try:
            return self.mapping[code]
        except KeyError:
            pass
        for codes, level in self.RANGES:
            if code in codes:
                return level
        return self.fallback

    def __repr__(self):
        return f"severity-map(mapping={dict(self.mapping)!r}, fallback={self.fallback!r})"


class Application(metaclass=SpecType):
    """
    Explicit application metadata and collaborators.
    """

    __introspectable__ = (
        "name",
        "version",
        "debug",
        "framework_version",
        "log",
        "console",
        "levels",
        "epilog",
        "colorful",
    )
    __displayable__ = (
        "name",
        "version",
        "debug",
        "framework_version",
    )

    def __init__(
            self,
            name,
            version,
            /,
            debug=False,
            *,
            framework_version=Unset,
            log=Unset,
            console=Unset,
            levels=Unset,
            epilog=Unset,
            colorful=False,
    ):
        for label, value in (("name", name), ("version", version)):
            if not isinstance(value, str):
                raise TypeError(f"{type(self).__typename__} {label!r} must be a string")
            elif not value.strip():
                raise ValueError(f"{type(self).__typename__} {label!r} cannot be empty")
        if not isinstance(epilog, str | None | Unset):
            raise TypeError(f"{type(self).__typename__} 'epilog' must be a string or None")
        if framework_version is Unset:
            from . import __version__ as framework_version

        self._name = name.strip()
        self._version = version.strip()
        self._debug = bool(debug)
        self._framework_version = framework_version
        if log is Unset or log is None:
            log = LogSink(self._name)
        elif isinstance(log, str | logging.Logger | logging.LoggerAdapter):
            log = LogSink(log)
        elif not all(callable(getattr(log, level, None)) for level in LEVELS):
            raise TypeError(f"{type(self).__typename__} 'log' must provide error, warning and notice methods")
        self._log = log
        self._console = Console() if console is Unset or console is None else console
        self._levels = levels if isinstance(levels, SeverityMap) else SeverityMap(coalesce(levels))
        self._epilog = coalesce(epilog, "Developed with switchyard.")
        self._colorful = bool(colorful)


__all__ = (
    "SeverityMap",
    "Application",
)
