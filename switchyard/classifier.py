"""
Error classifier: decide where an uncaught failure goes.

Policy
- NotFoundError (unknown command, unknown flag): an expected user mistake. The
  fault is restyled with the application color setting, printed on the
  application console, and nothing is logged.
- anything else: an ErrorRecord is built (code, label, message, file, line,
  type, trace) and sent to the application log sink at the level the severity map
  gives for the failure's numeric code. When the map yields no level (only
  possible with SeverityMap(fallback=None)) the failure is dropped.

Log templates
- debug:   "{message}\\n[code] {label} [type] {type}\\n[file] {file} [line] {line}\\n[trace] {trace}"
- regular: "{message} [{label}] {type} in {file} line {line}"

Numeric codes
- faults: their FaultCode.
- other exceptions: an integer `code` attribute, else an integer `errno`,
  else 0.
- label: the code as text; FaultCode members go through FaultCode.normalize(),
  so a __codes__ mapping in __main__ renames them in the logs.
"""
import sys
import traceback
from collections import namedtuple

from .faults import FaultCode, NotFoundError, restyle

DEBUG_TEMPLATE = "{message}\n[code] {label} [type] {type}\n[file] {file} [line] {line}\n[trace] {trace}"
COMPACT_TEMPLATE = "{message} [{label}] {type} in {file} line {line}"

ErrorRecord = namedtuple("ErrorRecord", ("code", "label", "message", "file", "line", "type", "trace", "level"))


def _code(exception, /):
    code = getattr(exception, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return int(code)
    errno = getattr(exception, "errno", None)
    if isinstance(errno, int) and not isinstance(errno, bool):
        return errno
    return 0


def _label(code, /):
    try:
        return FaultCode(code).normalize()
    except ValueError:
        return str(code)


def _origin(exception, /):
    """
    file and line where the exception was raised (innermost frame).
    """
    frames = traceback.extract_tb(exception.__traceback__)
    if not frames:
        return "<unknown>", 0
    return frames[-1].filename, frames[-1].lineno or 0


class ErrorClassifier:
    """
    Route failures to the console or to the log sink of an Application.
    """

    def __init__(self, application, /):
        self.application = application
        self._previous = None

    def classify(self, exception, /):
        """
        build the ErrorRecord of `exception` without routing it.
        """
        if not isinstance(exception, BaseException):
            raise TypeError("classify() argument must be an exception")
        code = _code(exception)
        file, line = _origin(exception)
        return ErrorRecord(
            code=code,
            label=_label(code),
            message=str(exception),
            file=file,
            line=line,
            type=type(exception).__qualname__,
            trace="".join(traceback.format_tb(exception.__traceback__)).rstrip(),
            level=self.application.levels.level(code),
        )

    def handle(self, exception, /):
        """
        route `exception`; returns its ErrorRecord, or None for "not found" faults.
        """
        if isinstance(exception, NotFoundError):
            fault = restyle(exception, colorful=self.application.colorful)
            self.application.console.print(fault, highlight=False, soft_wrap=True)
            return None

        record = self.classify(exception)
        if record.level is None:
            return record

        template = DEBUG_TEMPLATE if self.application.debug else COMPACT_TEMPLATE
        getattr(self.application.log, record.level)(template, record._asdict())
        return record

    def __call__(self, type, value, traceback, /):
        """
        sys.excepthook signature; base exceptions go to the previous hook.
        """
        if not issubclass(type, Exception):
            return (self._previous or sys.__excepthook__)(type, value, traceback)
        if value.__traceback__ is None:
            value = value.with_traceback(traceback)
        self.handle(value)

    def register(self):
        """
        install this classifier as sys.excepthook.
        """
        if sys.excepthook is not self:
            self._previous = sys.excepthook
            sys.excepthook = self
        return self

    def unregister(self):
        """
        restore the excepthook that was active before register().
        """
        if sys.excepthook is self:
            sys.excepthook = self._previous or sys.__excepthook__
        self._previous = None


__all__ = (
    "DEBUG_TEMPLATE",
    "COMPACT_TEMPLATE",
    "ErrorRecord",
    "ErrorClassifier",
)
