"""
Switchyard command registry: keys, entries, and handler resolution.

What this module provides
- CommandKey: structured (command, subcommand) pair. Its string form is the
  external key format, "name" or "name subname" (one level of subcommands).
- CommandEntry: a key bound to a handler reference, an option Schema and a
  one-line description.
- Registry: insertion-ordered mapping of keys to entries, built once at start
  up and frozen before the first dispatch.

Handler references
- a class exposing a no-argument main() (instantiated at dispatch time),
- an object exposing a callable main,
- any other no-argument callable,
- a string "package.module:Name" (or "package.module.Name"), imported the first
  time the command is dispatched. A leading dot makes it relative to the
  registry namespace; a bare "Name" is looked up inside the namespace itself.

Objects are checked when registered; string references when they are resolved.
Either way a wiring defect surfaces as CommandConfigurationError.

Quick start
    from switchyard import Registry

    registry = Registry(namespace="myapp.commands")

    @registry.command("build", options=[["f", "force"], ["o", "output"]], descr="Build the project")
    def build():
        ...

    registry.register("db migrate", ".database:MigrateCommand", descr="Apply migrations")
"""
import importlib
import importlib.util
from collections import namedtuple
from collections.abc import Mapping, Sequence

from rich.text import Text

from .faults import CommandConfigurationError, FaultCode
from .options import Schema, SpecType
from .utils import *


class CommandKey(namedtuple("CommandKey", ("command", "subcommand"))):
    """
    (command, subcommand) pair; subcommand is "" for top-level commands.
    """
    __slots__ = ()

    def __new__(cls, command, subcommand=""):
        if not isinstance(command, str) or not isinstance(subcommand, str):
            raise TypeError("command key parts must be strings")
        if not command:
            raise ValueError("command key must name a command")
        for part in (command, subcommand):
            if part != "".join(part.split()):
                raise ValueError(f"command key part {part!r} cannot contain whitespace")
        return super().__new__(cls, command, subcommand)

    @classmethod
    def parse(cls, source, /):
        """
        build a key from its external form ("name" or "name subname").
        """
        if isinstance(source, CommandKey):
            return source
        if not isinstance(source, str):
            raise TypeError("command key must be a string")
        command, _, subcommand = source.strip().partition(" ")
        return cls(command, subcommand)

    @property
    def nested(self):
        return bool(self.subcommand)

    def __str__(self):
        return f"{self.command} {self.subcommand}" if self.subcommand else self.command


def _import(reference, namespace, /):
    """
    import the object named by a string handler reference.
    """
    if ":" in reference:
        module, _, name = reference.partition(":")
    elif "." in reference.lstrip("."):
        module, _, name = reference.rpartition(".")
    else:
        module, name = "", reference.lstrip(".")

    if not module or module.startswith("."):
        if not namespace:
            raise CommandConfigurationError(
                f"'{reference}' handler not found.",
                code=FaultCode.UNRESOLVED_HANDLER,
                handler=reference,
                hint="relative handler references need a registry namespace",
            )
        module = importlib.util.resolve_name(module, namespace) if module else namespace

    try:
        object = importlib.import_module(module)
        for part in name.split("."):
            object = getattr(object, part)
    except (ImportError, AttributeError):
        raise CommandConfigurationError(
            f"'{module}:{name}' handler not found.",
            code=FaultCode.UNRESOLVED_HANDLER,
            handler=reference,
        ) from None
    return object


def _entrypoint(target, label, /):
    """
    return a zero-argument callable that runs the handler entry operation.

    classes are only instantiated when the returned callable runs.
    """
    if isinstance(target, type):
        if not callable(getattr(target, "main", None)):
            raise CommandConfigurationError(
                f"'{label}.main' method not found.",
                code=FaultCode.MISSING_ENTRY,
                handler=label,
            )

        @rename(f"{target.__name__}.main")
        def entrypoint():
            return target().main()

        return entrypoint
    if callable(main := getattr(target, "main", None)):
        return main
    if callable(target):
        return target
    raise CommandConfigurationError(
        f"'{label}.main' method not found.",
        code=FaultCode.MISSING_ENTRY,
        handler=label,
    )


def _label(handler, /):
    if isinstance(handler, str):
        return handler
    return getattr(handler, "__qualname__", None) or type(handler).__qualname__


class CommandEntry(metaclass=SpecType):
    """
    One registered command: key, handler reference, options and description.
    """

    __introspectable__ = (
        "key",
        "handler",
        "options",
        "descr",
    )

    def __init__(self, key, handler, /, options=(), descr=Unset, *, namespace=Unset):
        if not isinstance(descr, str | Text | None | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string or None")
        if isinstance(descr, str):
            descr = descr.strip() or Unset

        self._key = CommandKey.parse(key)
        self._handler = handler
        self._options = options if isinstance(options, Schema) else Schema(options)
        self._descr = coalesce(descr)
        self._namespace = coalesce(namespace)
        self._entrypoint = Unset

        if isinstance(handler, str):
            if not handler.strip():
                raise ValueError(f"{type(self).__typename__} handler reference cannot be empty")
        else:
            # objects are checked right away
            self._entrypoint = _entrypoint(handler, _label(handler))

    @property
    def name(self):
        return str(self._key)

    def resolve(self):
        """
        return the zero-argument entry operation of the handler.

        string references are imported once and cached.

        raises
        - CommandConfigurationError: reference cannot be imported, or the
          resolved object has no usable main().
        """
        if self._entrypoint is Unset:
            target = _import(self._handler, self._namespace)
            self._entrypoint = _entrypoint(target, self._handler)
        return self._entrypoint

    def __rich_repr__(self):
        yield "key", self.name
        yield "handler", _label(self._handler)
        yield "options", self.options
        yield "descr", self.descr


class Registry(metaclass=SpecType):
    """
    Insertion-ordered command table.

    Order is kept for help listings. Once frozen (the dispatcher freezes it
    before dispatching) no command can be added.
    """

    __introspectable__ = (
        "namespace",
        "entries",
        "frozen",
    )
    __displayable__ = (
        "namespace",
        "frozen",
    )

    def __init__(self, entries=(), /, namespace=Unset):
        if not isinstance(namespace, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'namespace' must be a string")
        self._namespace = coalesce(namespace)
        self._entries = {}
        self._frozen = False
        for entry in entries:
            self.add(entry)

    @classmethod
    def from_mapping(cls, mapping, /, namespace=Unset):
        """
        build a registry from a command table.

        layout
        - {"build": BuildCommand}
        - {"db migrate": (".db:Migrate", {"description": "...", "options": [...]})}
        - {"hello": {"handler": hello, "descr": "...", "options": [...]}}
        """
        if not isinstance(mapping, Mapping):
            raise TypeError("from_mapping() argument must be a mapping")
        self = cls(namespace=namespace)
        for key, value in mapping.items():
            if isinstance(value, Mapping):
                metadata = dict(value)
                try:
                    handler = metadata.pop("handler")
                except KeyError:
                    raise TypeError(f"command {key!r} must declare a handler") from None
            elif isinstance(value, Sequence) and not isinstance(value, str):
                handler, *rest = value
                if len(rest) > 1 or (rest and not isinstance(rest[0], Mapping)):
                    raise TypeError(f"command {key!r} must be (handler, metadata)")
                metadata = dict(rest[0]) if rest else {}
            else:
                handler, metadata = value, {}
            self.register(
                key,
                handler,
                options=metadata.get("options", ()),
                descr=metadata.get("descr", metadata.get("description", Unset)),
            )
        return self

    def add(self, entry, /):
        """
        insert a prepared CommandEntry.
        """
        if not isinstance(entry, CommandEntry):
            raise TypeError(f"{type(self).__typename__} entries must be command entries")
        if self._frozen:
            raise TypeError(f"{type(self).__typename__} is frozen, cannot register {entry.name!r}")
        if self._entries.setdefault(entry.key, entry) is not entry:
            raise ValueError(f"{type(self).__typename__} command {entry.name!r} is already registered")
        return entry

    def register(self, key, handler, /, options=(), descr=Unset):
        """
        insert a command; returns the new CommandEntry.
        """
        return self.add(CommandEntry(key, handler, options, descr, namespace=self._namespace or Unset))

    def command(self, key, /, options=(), descr=Unset):
        """
        decorator form of register(); the decorated object is returned unchanged.
        """
        def wrapper(handler):
            self.register(key, handler, options, descr)
            return handler

        return rename(wrapper, "command")

    def lookup(self, key, /):
        """
        return the entry registered under `key`, or None.

        lookups are exact and case-sensitive; malformed keys are simply absent.
        """
        try:
            return self._entries.get(CommandKey.parse(key))
        except ValueError:
            return None

    def has_any_subcommand(self):
        return any(key.nested for key in self._entries)

    def freeze(self):
        self._frozen = True
        return self

    def __contains__(self, key):
        return self.lookup(key) is not None

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self):
        return len(self._entries)


__all__ = (
    "CommandKey",
    "CommandEntry",
    "Registry",
)
