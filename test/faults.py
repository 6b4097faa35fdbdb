"""
Faults module behavioral tests (codes, context, rendering, triggering).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with an in-memory rich Console.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from commandeer import (
    FaultCode,
    CommandException,
    InvalidOptionFlagError,
    MissingRequiredArgumentsError,
    trigger,
    getdoc,
)


def render(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeDefaultsToNumericValue(self):
        self.assertEqual(FaultCode.INVALID_OPTION_FLAG.normalize(), "11112")

    def testNormalizeHonoursHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.UNKNOWN_COMMAND: "E-CMD"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "E-CMD")

    def testCodesAreUnique(self):
        self.assertEqual(len(set(FaultCode)), len(FaultCode.__members__))


class TestCommandException(TestCase):
    """Behavioral tests for the user-facing fault base."""

    def testMessageAndOptions(self):
        fault = CommandException("bad things", title="oops", token="--x")
        self.assertEqual(fault.message, "bad things")
        self.assertEqual(str(fault), "bad things")
        self.assertEqual(fault.options["title"], "oops")

    def testContextReadableAsAttributes(self):
        fault = InvalidOptionFlagError("unknown option or flag '--x'", token="--x")
        self.assertEqual(fault.token, "--x")
        with self.assertRaises(AttributeError):
            fault.names

    def testOptionsAreReadOnly(self):
        fault = CommandException("x", title="t")
        with self.assertRaises(TypeError):
            fault.options["title"] = "u"  # type: ignore[index]

    def testReplaceMergesOptionsAndKeepsType(self):
        fault = MissingRequiredArgumentsError("missing required argument: a", names=("a",))
        replaced = copy.replace(fault, hint="pass it", shell=False)
        self.assertIsInstance(replaced, MissingRequiredArgumentsError)
        self.assertEqual(replaced.names, ("a",))
        self.assertEqual(replaced.hint, "pass it")
        self.assertEqual(replaced.message, fault.message)

    def testRenderPlainHeaderMessageAndHint(self):
        fault = InvalidOptionFlagError(
            "unknown option or flag '--bda' at first position",
            title="unknown option or flag",
            code=FaultCode.INVALID_OPTION_FLAG,
            hint="did you mean --bad?",
            prog="tool",
        )
        output = render(fault)
        self.assertIn("[ tool — 11112 | Unknown Option Or Flag ]", output)
        self.assertIn("unknown option or flag '--bda' at first position", output)
        self.assertIn("→ did you mean --bad?", output)

    def testRenderFancyUsesPanel(self):
        fault = CommandException("boom", title="boom", code=FaultCode.UNKNOWN_COMMAND, prog="tool", fancy=True)
        output = render(fault)
        self.assertIn("boom", output)
        self.assertIn("╭", output)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testNonShellRaises(self):
        with self.assertRaises(MissingRequiredArgumentsError) as context:
            trigger(MissingRequiredArgumentsError("missing required argument: a", names=("a",)), shell=False)
        self.assertFalse(context.exception.shell)

    def testShellRendersAndExits(self):
        stream = io.StringIO()
        with mock.patch("commandeer.faults.console", Console(file=stream, width=100, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(CommandException("broken", title="broken", code=FaultCode.UNKNOWN_COMMAND), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("broken", stream.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


class TestGetdoc(TestCase):
    """Behavioral tests for getdoc()."""

    def testMissingDocsGiveNone(self):
        self.assertIsNone(getdoc(FaultCode.TOO_MANY_ARGUMENTS))

    def testHostDocs(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__docs__", {FaultCode.TOO_MANY_ARGUMENTS: "see manual"}, create=True):
            self.assertEqual(getdoc(FaultCode.TOO_MANY_ARGUMENTS), "see manual")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11121)


if __name__ == "__main__":
    unittest.main()
