"""
Switchyard dispatcher: route a parsed invocation to a registered handler.

Decision order (every branch ends the invocation)
1. no command and no subcommand:
   a. -h/--help      → global help
   b. -v/--version   → version banner
   c. no flags at all → global help (a bare call asks "what can this do?")
   d. otherwise      → UnknownFlagError naming the first supplied flag
2. a command (and maybe a subcommand) was given:
   -  tokens that do not form a CommandKey (a token holding whitespace)
                     → UnknownCommandError
   a. -h/--help      → help of that command
   b. otherwise      → execute the CommandKey
3. execute:
   - unknown key     → UnknownCommandError
   - known key       → resolve the handler (CommandConfigurationError when it
                       cannot be resolved), validate the flags (UnknownFlagError
                       on the first undeclared one), run the handler and return
                       its result.

The dispatcher never catches what a handler raises; failures propagate to the
caller (usually the error classifier installed as the excepthook).
"""
from .faults import FaultCode, UnknownCommandError, UnknownFlagError
from .registry import CommandKey
from .rendering import Renderer
from .sources import Invocation, scan
from .utils import *
from .validation import validate


class Dispatcher:
    """
    Route invocations against a frozen Registry.

    The registry is frozen on construction: commands are configuration, not
    runtime state.
    """

    def __init__(self, registry, application, /, renderer=Unset):
        self.registry = registry.freeze()
        self.application = application
        self.renderer = coalesce(renderer) or Renderer(registry, application)

    def run(self, prompt=Unset, /, script=Unset):
        """
        scan `prompt` (sys.argv when Unset, a shell-like string, or an argv list)
        and dispatch it.
        """
        return self.dispatch(scan(prompt, script=script))

    def dispatch(self, invocation, /):
        if not isinstance(invocation, Invocation):
            raise TypeError("dispatch() argument must be an invocation")

        if not invocation.command and not invocation.subcommand:
            if invocation.bool("h", "help"):
                return self.help(invocation)
            if invocation.bool("v", "version"):
                return self.version()
            if not invocation.options:
                return self.help(invocation)
            flag = next(iter(invocation.options))
            raise UnknownFlagError(
                f"flag provided but not defined: '{flag}', see '{invocation.script} --help'.",
                code=FaultCode.UNKNOWN_FLAG,
                flag=flag,
                script=invocation.script,
                colorful=self.application.colorful,
            )

        try:
            key = CommandKey(invocation.command, invocation.subcommand)
        except ValueError:
            # a single argv token holding a space is never a registered command
            raise self._unknown(invocation.key, invocation) from None

        if invocation.bool("h", "help"):
            return self.command_help(invocation)

        return self.run_action(key, invocation)

    def run_action(self, key, invocation, /):
        """
        execute the command registered under `key` with the flags of `invocation`.
        """
        if (entry := self.registry.lookup(key)) is None:
            raise self._unknown(key, invocation)

        entrypoint = entry.resolve()

        try:
            validate(entry, invocation.options)
        except UnknownFlagError as exception:
            flag = exception.options["flag"]
            raise UnknownFlagError(
                f"flag provided but not defined: '{flag}', see '{invocation.script} {entry.name} --help'.",
                code=FaultCode.UNKNOWN_FLAG,
                flag=flag,
                key=entry.name,
                script=invocation.script,
                colorful=self.application.colorful,
            ) from None

        return entrypoint()

    def _unknown(self, key, invocation, /):
        return UnknownCommandError(
            f"'{key}' is not command, see '{invocation.script} --help'.",
            code=FaultCode.UNKNOWN_COMMAND,
            key=str(key),
            script=invocation.script,
            colorful=self.application.colorful,
        )

    def help(self, invocation, /):
        self._show(self.renderer.usage(invocation.script))

    def command_help(self, invocation, /):
        self._show(self.renderer.command_usage(invocation.script, invocation.key))

    def version(self):
        self._show(self.renderer.version())

    def _show(self, lines):
        console = self.application.console
        for text in self.renderer.texts(lines):
            console.print(text, markup=False, highlight=False, soft_wrap=True)


def invoke(dispatcher, prompt=Unset, /, script=Unset):
    """
    convenience runner: scan `prompt` and dispatch it through `dispatcher`.

    parameters
    - dispatcher: Dispatcher
    - prompt: Unset (sys.argv), a shell-like string including the script name,
      or an argv-like iterable of strings.

    returns the handler result (None for help/version screens); failures
    propagate.
    """
    if not isinstance(dispatcher, Dispatcher):
        raise TypeError("invoke() first argument must be a dispatcher")
    return dispatcher.run(prompt, script=script)


__all__ = (
    "Dispatcher",
    "invoke",
)
