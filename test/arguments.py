"""
Definition model behavioral tests.

Scope
- Validate Argument construction, defaults, name rules and metavar rendering.
- Validate Option flags (short/long split, name derivation) and arguments.
- Validate the usage-form factories argument() and option().

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandeer import Argument, Option, argument, option


class TestArgument(TestCase):
    """Behavioral tests for positional Argument definitions."""

    def testArgumentDefaultsToRequiredSingle(self):
        a = Argument("file")
        self.assertTrue(a.required)
        self.assertFalse(a.variadic)
        self.assertIsNone(a.descr)

    def testArgumentNameIsTrimmed(self):
        self.assertEqual(Argument("  file ").name, "file")

    def testArgumentNameEmptyRejected(self):
        with self.assertRaises(ValueError):
            Argument("  ")

    def testArgumentNameMustBeString(self):
        with self.assertRaises(TypeError):
            Argument(42)

    def testArgumentNameCannotStartWithDigitOrDash(self):
        with self.assertRaises(ValueError):
            Argument("1st")
        with self.assertRaises(ValueError):
            Argument("-file")

    def testArgumentNameAllowsHyphens(self):
        self.assertEqual(Argument("output-dir").name, "output-dir")

    def testArgumentDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Argument("file", descr="   ")

    def testArgumentDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Argument("file", descr=None)

    def testArgumentFieldsAreReadOnly(self):
        a = Argument("file")
        with self.assertRaises(AttributeError):
            a.name = "other"  # type: ignore[misc]

    def testArgumentMetavarForms(self):
        self.assertEqual(Argument("file").metavar, "<file>")
        self.assertEqual(Argument("file", required=False).metavar, "[file]")
        self.assertEqual(Argument("files", variadic=True).metavar, "<files...>")
        self.assertEqual(Argument("files", required=False, variadic=True).metavar, "[files...]")

    def testArgumentReprMentionsFields(self):
        text = repr(Argument("file", descr="input file"))
        self.assertTrue(text.startswith("argument("))
        self.assertIn("name='file'", text)
        self.assertIn("descr='input file'", text)


class TestOption(TestCase):
    """Behavioral tests for flagged Option definitions."""

    def testOptionRequiresAtLeastOneFlag(self):
        with self.assertRaises(TypeError):
            Option()

    def testOptionShortAndLong(self):
        o = Option("-o", "--out")
        self.assertEqual(o.short, "-o")
        self.assertEqual(o.long, "--out")
        self.assertEqual(o.flags, ("-o", "--out"))

    def testOptionFlagsAreOrderedShortFirst(self):
        self.assertEqual(Option("--out", "-o").flags, ("-o", "--out"))

    def testOptionNameFromLongFlag(self):
        self.assertEqual(Option("-n", "--dry-run").name, "dry-run")

    def testOptionNameFromShortFlag(self):
        self.assertEqual(Option("-v").name, "v")

    def testOptionRejectsTwoShortFlags(self):
        with self.assertRaises(ValueError):
            Option("-v", "-V")

    def testOptionRejectsTwoLongFlags(self):
        with self.assertRaises(ValueError):
            Option("--verbose", "--loud")

    def testOptionRejectsMalformedFlags(self):
        for flag in ("v", "-", "--", "-vv", "--_x", "--1st", "---x", "--a--b"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    Option(flag)

    def testOptionRejectsNonStringFlags(self):
        with self.assertRaises(TypeError):
            Option(1)

    def testOptionDefaultsToNotRequiredFlag(self):
        o = Option("-v", "--verbose")
        self.assertFalse(o.required)
        self.assertEqual(o.arguments, ())

    def testOptionArgumentsAreKeptInOrder(self):
        start, end = Argument("start"), Argument("end", required=False)
        o = Option("--range", arguments=[start, end])
        self.assertEqual(o.arguments, (start, end))
        self.assertEqual(o.metavar, "<start> [end]")

    def testOptionArgumentsMustBeArguments(self):
        with self.assertRaises(TypeError):
            Option("--out", arguments=["path"])

    def testOptionArgumentsCannotBeString(self):
        with self.assertRaises(TypeError):
            Option("--out", arguments="path")

    def testOptionReprUsesDisplayableFields(self):
        text = repr(Option("-v", "--verbose"))
        self.assertTrue(text.startswith("option("))
        self.assertIn("flags=('-v', '--verbose')", text)
        self.assertNotIn("short=", text)


class TestUsageForms(TestCase):
    """Behavioral tests for argument() and option() factories."""

    def testArgumentRequiredForm(self):
        a = argument("<file>")
        self.assertEqual((a.name, a.required, a.variadic), ("file", True, False))

    def testArgumentOptionalForm(self):
        a = argument("[file]")
        self.assertEqual((a.name, a.required, a.variadic), ("file", False, False))

    def testArgumentVariadicForms(self):
        a = argument("<files...>")
        self.assertEqual((a.name, a.required, a.variadic), ("files", True, True))
        b = argument("[files...]")
        self.assertEqual((b.name, b.required, b.variadic), ("files", False, True))

    def testArgumentFormMirrorsMetavar(self):
        for source in ("<file>", "[file]", "<files...>", "[files...]"):
            with self.subTest(source=source):
                self.assertEqual(argument(source).metavar, source)

    def testArgumentFormCarriesDescr(self):
        self.assertEqual(argument("<file>", descr="input").descr, "input")

    def testArgumentMalformedFormRejected(self):
        for source in ("file", "<file", "[file>", "<>", "<a b>"):
            with self.subTest(source=source):
                with self.assertRaises(ValueError):
                    argument(source)

    def testOptionFormFlagsOnly(self):
        o = option("-v, --verbose")
        self.assertEqual(o.flags, ("-v", "--verbose"))
        self.assertEqual(o.arguments, ())

    def testOptionFormWithArguments(self):
        o = option("-r, --range <start> [end]", required=True, descr="line range")
        self.assertEqual(o.name, "range")
        self.assertTrue(o.required)
        self.assertEqual(o.descr, "line range")
        self.assertEqual([a.name for a in o.arguments], ["start", "end"])
        self.assertEqual([a.required for a in o.arguments], [True, False])

    def testOptionFormVariadicArgument(self):
        o = option("--include <paths...>")
        self.assertTrue(o.arguments[0].variadic)

    def testOptionFormWithoutFlagRejected(self):
        with self.assertRaises(ValueError):
            option("<path>")

    def testOptionFormFlagAfterArgumentRejected(self):
        with self.assertRaises(ValueError):
            option("--out <path> -o")


if __name__ == "__main__":
    unittest.main()
