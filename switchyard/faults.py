"""
Switchyard faults (errors raised while routing a command) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  dispatcher can raise. Codes are grouped by domain and feed the severity
  mapping used when a fault ends up in the logs.
- CommandException: base type carrying a message + options; knows how to
  render itself with rich (plain or colorful).
- NotFoundError and its children: expected user mistakes (unknown command,
  unknown flag). Printed to the terminal, never logged.
- CommandConfigurationError: registry/handler wiring defects. Logged.

Integration
- The dispatcher raises faults; nothing here prints or exits on its own.
- The error classifier decides between the terminal and the log sink.
- A host application may expose in __main__:
  • __codes__: mapping FaultCode -> label, used by FaultCode.normalize().
  • __styles__: mapping of style keys overriding the default palette.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (111xx): UNKNOWN_COMMAND, UNKNOWN_FLAG
    - configuration (112xx): UNRESOLVED_HANDLER, MISSING_ENTRY

    the severity map sends the whole 11xxx range to 'error'; 12xxx and 13xxx
    are left for warning-like and notice-like codes of host applications.
    """
    # --- routing errors (111xx) ---
    UNKNOWN_COMMAND    = 11101
    UNKNOWN_FLAG       = 11112

    # --- configuration errors (112xx) ---
    UNRESOLVED_HANDLER = 11201
    MISSING_ENTRY      = 11202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault: a message plus read-only options (code, hint, and context).

    options commonly carried
    - code: FaultCode
    - hint: short actionable hint (rendered after the message when present)
    - colorful: style the rendering with the palette
    - any context the raiser wants to attach (script, key, flag, handler...)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", 0)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        styles = defaultdict(str, {
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(__import__("__main__"), "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        message = text(self.message, "error-message")
        if hint := self.options.get("hint"):
            message = Text.assemble(message, text(" → ", "hint-arrow"), text(hint, "hint"))
        return message

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NotFoundError(CommandException): ...
class UnknownCommandError(NotFoundError): ...
class UnknownFlagError(NotFoundError): ...
class CommandConfigurationError(CommandException): ...


def restyle(fault, /, **options):
    """
    return a copy of `fault` with extra options merged in (e.g. colorful=True).
    """
    if not hasattr(fault, "__replace__") or not callable(fault.__replace__):
        raise TypeError("restyle() argument must have a __replace__ method")
    return copy.replace(fault, **options)


__all__ = (
    "FaultCode",
    "CommandException",
    "NotFoundError",
    "UnknownCommandError",
    "UnknownFlagError",
    "CommandConfigurationError",
    "restyle",
)
