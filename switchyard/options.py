r"""
Switchyard option specifications.

Overview
- Option: one declared flag with one or more aliases and a short description.
  Aliases are declared bare ("f", "force"); a single-character alias renders
  as "-f", a longer one as "--force".
- Schema: the ordered, immutable sequence of Options attached to one command.
  Aliases are unique across the whole schema.

Compact forms
- Schema(...) accepts Options directly or the compact layouts used in command
  tables:
    "x"                              → Option("x")
    ["f", "force"]                   → Option("f", "force")
    (["o", "output"], "output path") → Option("o", "output", descr="output path")
    {"names": [...], "descr": "..."} → Option(*names, descr=...)
  ("description" is accepted as an alias of "descr" in the mapping form.)

Validation highlights
- Alias format: r"[^\W_](-?[^\W_]+)*" (unicode letters/digits, inner hyphens).
- Prefixed aliases ("-f", "--force") are rejected; the prefix is derived.
- descr strings are trimmed; an empty description becomes None.

Quick example:
    >>> from switchyard.options import Option, Schema
    >>> schema = Schema([Option("f", "force", descr="overwrite files"), ["o", "output"]])
    >>> schema.flags
    frozenset({'-f', '--force', '-o', '--output'})
    >>> "--force" in schema
    True
"""
import functools
import operator
import re
from collections.abc import Iterable, Mapping, Sequence

from rich.text import Text

from .utils import *


class SpecType(type):
    """
    Metaclass giving specification classes stable representations.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Mirror every name listed in __introspectable__ as a read-only property
      over the matching "_name" backing field.
    - Provide __repr__/__rich_repr__ built from __displayable__ (or
      __introspectable__ when unset).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__typename__}({
                    ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
                })"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        return self


def _render(name, /):
    """
    render a bare alias with its dash prefix (one dash for single characters).
    """
    return "-" + name if len(name) == 1 else "--" + name


class Option(metaclass=SpecType):
    """
    Named, presence-or-value flag declared by a command.

    Options carry no type: the dispatcher only checks that a supplied flag is
    declared. Values (if any) are left to the handler.
    """

    __introspectable__ = (
        "names",
        "descr",
    )

    def __init__(self, *names, descr=Unset):
        if not names:
            raise TypeError(f"{type(self).__typename__} must specify at least one name")

        sanitized = []
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{type(self).__typename__} names must be strings")
            elif not (name := name.strip()):
                raise ValueError(f"{type(self).__typename__} names cannot be empty-strings")
            elif name.startswith("-"):
                raise ValueError(f"{type(self).__typename__} name {name!r} must be given without dashes")
            elif not re.fullmatch(r"[^\W_](-?[^\W_]+)*", name):
                raise ValueError(f"{type(self).__typename__} name {name!r} is not a valid flag name")
            elif name in sanitized:
                raise ValueError(f"{type(self).__typename__} names cannot contain duplicates")
            sanitized.append(name)

        if not isinstance(descr, str | Text | None | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string or None")
        if isinstance(descr, str):
            descr = descr.strip() or Unset

        self._names = sanitized
        self._descr = coalesce(descr)

    @property
    def flags(self):
        """
        rendered aliases in declaration order, e.g. ("-f", "--force").
        """
        return tuple(map(_render, self._names))

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return self.names == other.names and self.descr == other.descr

    def __hash__(self):
        return hash((self.names, str(self.descr)))


def _coerce(source, /):
    """
    turn one compact option layout into an Option.
    """
    if isinstance(source, Option):
        return source
    if isinstance(source, str):
        return Option(source)
    if isinstance(source, Mapping):
        names = source.get("names", ())
        if isinstance(names, str):
            names = (names,)
        return Option(*names, descr=source.get("descr", source.get("description", Unset)))
    if isinstance(source, Sequence) and source:
        head, *tail = source
        if isinstance(head, Sequence) and not isinstance(head, str):
            if len(tail) > 1:
                raise TypeError("compact option accepts names and an optional description only")
            return Option(*head, descr=tail[0] if tail else Unset)
        return Option(*source)
    raise TypeError(f"cannot build an option from {source!r}")


class Schema(metaclass=SpecType):
    """
    Ordered option schema of a single command.

    Behaves as an immutable sequence of Options and as a container of rendered
    flags ("-f" in schema).
    """

    __introspectable__ = (
        "options",
    )

    def __init__(self, options=(), /):
        if isinstance(options, Schema):
            options = options.options
        if isinstance(options, str | Mapping) or not isinstance(options, Iterable):
            raise TypeError(f"{type(self).__typename__} options must be an iterable of options")

        self._options = []
        self._lookup = {}

        for option in map(_coerce, options):
            for flag in option.flags:
                if flag in self._lookup:
                    raise ValueError(f"{type(self).__typename__} flag {flag!r} is already in use")
                self._lookup[flag] = option
            self._options.append(option)

    @property
    def flags(self):
        """
        every declared rendered alias of the schema.
        """
        return frozenset(self._lookup)

    def find(self, flag, /):
        """
        return the Option declaring `flag` (rendered form), or None.
        """
        return self._lookup.get(flag)

    def __contains__(self, flag):
        return flag in self._lookup

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __getitem__(self, index):
        return self._options[index]

    def __eq__(self, other):
        if not isinstance(other, Schema):
            return NotImplemented
        return self.options == other.options


__all__ = (
    "Option",
    "Schema",
)
