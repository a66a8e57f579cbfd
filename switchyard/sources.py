"""
Switchyard argument/flag source: scan argv into a parsed invocation.

Grammar
    <script> [-h|--help] [-v|--version]
    <script> <command> [<subcommand>] [-h|--help]
    <script> <command> [<subcommand>] [--flag|-f[=value]]...

Scanning rules
- argv[0] is the script; its basename is the display name.
- the first token, when not flag-shaped, is the command; the next one (when the
  command was found and it is not flag-shaped) is the subcommand; other bare
  tokens are operands and are never bound.
- "--name=value" / "-n=value" carry an inline value.
- "--name" / "-n" followed by a bare token take it as their value once the
  command tokens are settled; otherwise the value is "".
- "--" ends flag scanning; everything after it is an operand.
- a repeated flag keeps its first position and its last value.
"""
import os.path
import re
import shlex
import sys
from collections.abc import Iterable

from .options import SpecType
from .utils import *

_FLAG = re.compile(r"(--?)([^\W_](?:-?[^\W_]+)*)(?:=(.*))?", re.DOTALL)

_FALSY = frozenset({"false", "0", "no", "off"})


def _flagged(token, /):
    return token.startswith("-") and token not in ("-", "--")


class Invocation(metaclass=SpecType):
    """
    Parsed invocation: script, command, subcommand and the supplied flags.

    options maps each rendered flag ("-f", "--force") to its value, in the order
    the flags were first supplied. A flag given without value maps to "".
    """

    __introspectable__ = (
        "script",
        "command",
        "subcommand",
        "options",
        "operands",
    )

    def __init__(self, script, /, command="", subcommand="", options=(), operands=()):
        for name, value in (("script", script), ("command", command), ("subcommand", subcommand)):
            if not isinstance(value, str):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a string")
        if subcommand and not command:
            raise ValueError(f"{type(self).__typename__} cannot have a subcommand without a command")
        self._script = script
        self._command = command
        self._subcommand = subcommand
        self._options = dict(options)
        self._operands = list(operands)

    @property
    def key(self):
        """
        command and subcommand joined by one space and trimmed.
        """
        return " ".join((self._command, self._subcommand)).strip()

    def bool(self, *aliases, default=False):
        """
        presence test for any of `aliases` (bare "h" or rendered "-h"/"--help").

        a present flag is true unless its value is false-like ("false", "0",
        "no", "off"); when none of the aliases was supplied, `default` is
        returned.
        """
        for alias in aliases:
            if not alias.startswith("-"):
                alias = ("-" if len(alias) == 1 else "--") + alias
            try:
                value = self._options[alias]
            except KeyError:
                continue
            return str(value).strip().lower() not in _FALSY
        return default


def scan(argv=Unset, /, script=Unset):
    """
    scan an argv-like sequence into an Invocation.

    parameters
    - argv: Unset (sys.argv), a shell-like string (split with shlex, the first
      word is the script), or an iterable of strings (argv[0] included).
    - script: display name override; defaults to the basename of argv[0].

    raises
    - TypeError: argv is not a string or an iterable of strings.
    """
    if argv is Unset:
        tokens = list(sys.argv)
    elif isinstance(argv, str):
        tokens = shlex.split(argv)
    elif isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("scan() argument must be a string or an iterable of strings")
    else:
        raise TypeError("scan() argument must be a string or an iterable of strings")

    program = tokens.pop(0) if tokens else ""
    script = coalesce(script, os.path.basename(program) or program)

    command = subcommand = ""
    options = {}
    operands = []
    settled = False
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            operands.extend(tokens[index:])
            break

        if not _flagged(token):
            if not settled and not command:
                command = token
            elif not settled and not subcommand:
                subcommand = token
                settled = True
            else:
                operands.append(token)
            continue

        # any flag after the command closes the command tokens
        settled = settled or bool(command)

        if not (match := _FLAG.fullmatch(token)):
            # keep malformed tokens verbatim so the validator can name them
            options.setdefault(token, "")
            continue

        dashes, name, value = match.groups()
        flag = dashes + name
        if value is None:
            value = ""
            if settled and index < len(tokens) and not _flagged(tokens[index]) and tokens[index] != "--":
                value = tokens[index]
                index += 1
        options[flag] = value

    return Invocation(script, command, subcommand, options, operands)


__all__ = (
    "Invocation",
    "scan",
)
