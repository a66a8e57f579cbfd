"""
Dispatcher behavioral tests (routing, help/version screens, faults).

Scope
- Validate the decision order: global help/version, command help, execution.
- Validate the messages and codes of "not found" faults.
- Validate that handlers run only after their flags were validated.

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured through a rich Console writing to a StringIO.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from switchyard import (
    Application,
    CommandConfigurationError,
    Dispatcher,
    FaultCode,
    Invocation,
    NotFoundError,
    Registry,
    UnknownCommandError,
    UnknownFlagError,
    invoke,
)


class BuildCommand:
    runs = 0

    def __init__(self):
        type(self).runs += 1

    def main(self):
        return "built"


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class DispatcherTestCase(TestCase):

    def setUp(self):
        BuildCommand.runs = 0
        self.console = make_console()
        self.application = Application(
            "myapp",
            "1.2.0",
            framework_version="3.0.0",
            console=self.console,
        )
        registry = Registry()
        registry.register("build", BuildCommand, options=[["f", "force"], ["o", "output"]], descr="Build the project")
        registry.register("db migrate", lambda: "migrated", options=[["n", "dry-run"]], descr="Apply migrations")
        registry.register("ghost", "os:NoSuchThing")
        self.registry = registry
        self.dispatcher = Dispatcher(registry, self.application)

    def output(self):
        return self.console.file.getvalue()


class TestGlobalScreens(DispatcherTestCase):
    """Behavioral tests for calls without a command."""

    def testVersionBanner(self):
        self.assertIsNone(self.dispatcher.run("app --version"))
        self.assertEqual(self.output().strip(), "myapp version 1.2.0, framework version 3.0.0")

    def testShortVersionFlag(self):
        self.dispatcher.run("app -v")
        self.assertIn("framework version 3.0.0", self.output())

    def testHelpListsCommandsInRegistrationOrder(self):
        self.dispatcher.run("app --help")
        output = self.output()
        self.assertIn("Usage: app [OPTIONS] COMMAND [SUBCOMMAND] [opt...]", output)
        self.assertLess(output.index("build"), output.index("db migrate"))
        self.assertLess(output.index("db migrate"), output.index("ghost"))
        self.assertIn("Run 'app COMMAND [SUBCOMMAND] --help' for more information on a command.", output)
        self.assertIn("Developed with switchyard.", output)

    def testHelpWinsOverVersion(self):
        self.dispatcher.run("app --version --help")
        self.assertNotIn("framework version", self.output())
        self.assertIn("Usage: app", self.output())

    def testBareCallShowsHelp(self):
        self.dispatcher.run("app")
        bare = self.output()
        console = make_console()
        other = Dispatcher(self.registry, Application("myapp", "1.2.0", framework_version="3.0.0", console=console))
        other.run("app --help")
        self.assertEqual(bare, console.file.getvalue())

    def testUnknownGlobalFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            self.dispatcher.run("app --bogus")
        self.assertEqual(str(context.exception), "flag provided but not defined: '--bogus', see 'app --help'.")
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_FLAG)
        self.assertEqual(self.output(), "")

    def testUnknownGlobalFlagNamesFirstSuppliedFlag(self):
        with self.assertRaises(NotFoundError) as context:
            self.dispatcher.run("app -x --bogus")
        self.assertEqual(context.exception.options["flag"], "-x")


class TestCommandDispatch(DispatcherTestCase):
    """Behavioral tests for calls naming a command."""

    def testHandlerResultIsReturned(self):
        self.assertEqual(self.dispatcher.run("app build --force"), "built")
        self.assertEqual(BuildCommand.runs, 1)

    def testSubcommandHandler(self):
        self.assertEqual(self.dispatcher.run("app db migrate -n"), "migrated")

    def testFlagValuesAreAccepted(self):
        self.assertEqual(self.dispatcher.run("app build --output=dist -f"), "built")

    def testUnknownCommandFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            self.dispatcher.run("app build --force --bogus")
        self.assertEqual(
            str(context.exception),
            "flag provided but not defined: '--bogus', see 'app build --help'.",
        )
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_FLAG)
        self.assertEqual(BuildCommand.runs, 0)

    def testUnknownSubcommandFlagNamesFullKey(self):
        with self.assertRaises(UnknownFlagError) as context:
            self.dispatcher.run("app db migrate --force")
        self.assertIn("see 'app db migrate --help'.", str(context.exception))

    def testUnknownCommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.dispatcher.run("app deploy")
        self.assertEqual(str(context.exception), "'deploy' is not command, see 'app --help'.")
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_COMMAND)

    def testTokenHoldingSpaceIsNotACommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            invoke(self.dispatcher, ["app", "db migrate"])
        self.assertEqual(str(context.exception), "'db migrate' is not command, see 'app --help'.")
        with self.assertRaises(UnknownCommandError):
            invoke(self.dispatcher, ["app", "db migrate", "--help"])
        self.assertEqual(self.output(), "")

    def testUnknownSubcommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.dispatcher.run("app db rollback")
        self.assertEqual(str(context.exception), "'db rollback' is not command, see 'app --help'.")

    def testCommandHelp(self):
        self.assertIsNone(self.dispatcher.run("app build --help"))
        output = self.output()
        self.assertIn("Usage: app build [opt...]", output)
        self.assertIn("-f, --force", output)
        self.assertIn("-o, --output", output)
        self.assertEqual(BuildCommand.runs, 0)

    def testCommandHelpSkipsFlagValidation(self):
        self.dispatcher.run("app build --bogus -h")
        self.assertIn("Usage: app build [opt...]", self.output())

    def testUnresolvedHandler(self):
        with self.assertRaises(CommandConfigurationError) as context:
            self.dispatcher.run("app ghost")
        self.assertEqual(context.exception.code, FaultCode.UNRESOLVED_HANDLER)

    def testHandlerIsResolvedBeforeFlagsAreValidated(self):
        with self.assertRaises(CommandConfigurationError):
            self.dispatcher.run("app ghost --bogus")

    def testFaultsCarryApplicationColorFlag(self):
        dispatcher = Dispatcher(self.registry, Application("myapp", "1.2.0", console=self.console, colorful=True))
        with self.assertRaises(UnknownCommandError) as context:
            dispatcher.run("app deploy")
        self.assertTrue(context.exception.options["colorful"])

    def testRegistryIsFrozen(self):
        self.assertTrue(self.registry.frozen)
        with self.assertRaises(TypeError):
            self.registry.register("late", BuildCommand)


class TestEntryPoints(DispatcherTestCase):
    """Behavioral tests for dispatch() and invoke()."""

    def testDispatchPreparedInvocation(self):
        invocation = Invocation("app", "build", options={"--force": ""})
        self.assertEqual(self.dispatcher.dispatch(invocation), "built")

    def testDispatchRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            self.dispatcher.dispatch(["app", "build"])

    def testInvokeWithArgvList(self):
        self.assertEqual(invoke(self.dispatcher, ["/usr/bin/app", "build"]), "built")

    def testInvokeScriptOverrideAppearsInMessages(self):
        with self.assertRaises(UnknownCommandError) as context:
            invoke(self.dispatcher, ["./run.py", "deploy"], script="myapp")
        self.assertIn("see 'myapp --help'.", str(context.exception))

    def testInvokeRequiresDispatcher(self):
        with self.assertRaises(TypeError):
            invoke(self.registry, "app build")


if __name__ == "__main__":
    unittest.main()
