"""
Argument source tests (argv scanning into invocations).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase, mock

from switchyard import Invocation, scan


class TestScan(TestCase):
    """Behavioral tests for scan()."""

    def testScriptIsBasenameOfFirstToken(self):
        self.assertEqual(scan(["/usr/local/bin/app"]).script, "app")

    def testScriptOverride(self):
        self.assertEqual(scan(["./run.py", "build"], script="app").script, "app")

    def testCommandAndSubcommand(self):
        invocation = scan("app db migrate")
        self.assertEqual((invocation.command, invocation.subcommand), ("db", "migrate"))
        self.assertEqual(invocation.key, "db migrate")

    def testCommandOnly(self):
        invocation = scan("app build")
        self.assertEqual((invocation.command, invocation.subcommand), ("build", ""))
        self.assertEqual(invocation.key, "build")

    def testNoCommand(self):
        invocation = scan("app --version")
        self.assertEqual((invocation.command, invocation.subcommand, invocation.key), ("", "", ""))

    def testFlagsKeepSuppliedOrder(self):
        invocation = scan("app build --force --bogus -o")
        self.assertEqual(list(invocation.options), ["--force", "--bogus", "-o"])

    def testInlineValues(self):
        invocation = scan("app build --output=dist -n=3")
        self.assertEqual(dict(invocation.options), {"--output": "dist", "-n": "3"})

    def testSpacedValueAfterCommand(self):
        invocation = scan("app build --output dist")
        self.assertEqual(invocation.options["--output"], "dist")
        self.assertEqual(invocation.operands, ())

    def testFlagBeforeCommandDoesNotSwallowIt(self):
        invocation = scan("app --verbose build")
        self.assertEqual(invocation.command, "build")
        self.assertEqual(invocation.options["--verbose"], "")

    def testRepeatedFlagKeepsFirstPositionAndLastValue(self):
        invocation = scan("app build --mode=a --force --mode=b")
        self.assertEqual(list(invocation.options), ["--mode", "--force"])
        self.assertEqual(invocation.options["--mode"], "b")

    def testDoubleDashEndsFlags(self):
        invocation = scan("app db migrate -- --not-a-flag file")
        self.assertEqual(dict(invocation.options), {})
        self.assertEqual(invocation.operands, ("--not-a-flag", "file"))

    def testExtraBareTokensAreOperands(self):
        invocation = scan("app db migrate extra")
        self.assertEqual(invocation.operands, ("extra",))

    def testMalformedFlagIsKeptVerbatim(self):
        invocation = scan("app build --bad_flag")
        self.assertIn("--bad_flag", invocation.options)

    def testDefaultsToSysArgv(self):
        with mock.patch("sys.argv", ["app", "build", "-f"]):
            invocation = scan()
        self.assertEqual(invocation.command, "build")
        self.assertIn("-f", invocation.options)

    def testRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            scan(["app", 1])

    def testRejectsNonIterable(self):
        with self.assertRaises(TypeError):
            scan(42)


class TestInvocation(TestCase):
    """Behavioral tests for Invocation."""

    def testBoolAcceptsBareAndRenderedAliases(self):
        invocation = Invocation("app", options={"--help": ""})
        self.assertTrue(invocation.bool("h", "help"))
        self.assertTrue(invocation.bool("--help"))
        self.assertFalse(invocation.bool("v", "version"))

    def testBoolDefault(self):
        invocation = Invocation("app")
        self.assertTrue(invocation.bool("v", default=True))

    def testBoolFalseLikeValues(self):
        for value in ("false", "0", "No", "OFF"):
            with self.subTest(value=value):
                self.assertFalse(Invocation("app", options={"-v": value}).bool("v"))
        self.assertTrue(Invocation("app", options={"-v": "yes"}).bool("v"))

    def testOptionsAreReadOnly(self):
        invocation = Invocation("app", options={"-f": ""})
        with self.assertRaises(TypeError):
            invocation.options["-x"] = ""

    def testSubcommandRequiresCommand(self):
        with self.assertRaises(ValueError):
            Invocation("app", "", "migrate")

    def testKeyIsTrimmedJoin(self):
        self.assertEqual(Invocation("app", "build").key, "build")
        self.assertEqual(Invocation("app", "db", "migrate").key, "db migrate")


if __name__ == "__main__":
    unittest.main()
