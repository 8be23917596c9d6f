"""
Faults module behavioral tests (exception payloads, trigger, rendering, shell mode).

Conventions
- Test method names follow CamelCase per project convention.
- Shell mode output is captured by redirecting standard error.
"""

from __future__ import annotations

import contextlib
import copy
import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from gnuparse import (
    FaultCode,
    OptionException,
    InvalidCommandLineParametersError,
    UnknownOptionError,
    MissingParameterError,
    Parser,
    trigger,
    getdoc,
)
from gnuparse import faults


class TestFaults(TestCase):
    """Behavioral tests for fault objects and trigger()."""

    def testMessageAndOptions(self):
        fault = UnknownOptionError("invalid option --x", code=FaultCode.UNKNOWN_LONG_OPTION, hint="try again")
        self.assertEqual(str(fault), "invalid option --x")
        self.assertIs(fault.code, FaultCode.UNKNOWN_LONG_OPTION)
        self.assertEqual(fault.hint, "try again")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "other"

    def testReplaceMergesOptions(self):
        fault = copy.replace(MissingParameterError("missing", code=FaultCode.MISSING_PARAMETER), index=3)
        self.assertIsInstance(fault, MissingParameterError)
        self.assertEqual(fault.options["index"], 3)
        self.assertIs(fault.code, FaultCode.MISSING_PARAMETER)

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(InvalidCommandLineParametersError) as context:
            trigger(UnknownOptionError("invalid option -x"), shell=False)
        self.assertEqual(context.exception.message, "invalid option -x")

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testTriggerExitsInShell(self):
        buffer = io.StringIO()
        with patch.object(faults, "console", Console(file=buffer, width=120)):
            with self.assertRaises(SystemExit) as context:
                trigger(UnknownOptionError(
                    "invalid option --x",
                    title="unknown option",
                    code=FaultCode.UNKNOWN_LONG_OPTION,
                    hint="see the option list",
                ), shell=True, colorful=False, prog="tool")
        self.assertEqual(context.exception.code, 1)
        output = buffer.getvalue()
        self.assertIn("tool", output)
        self.assertIn("22101", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("invalid option --x", output)
        self.assertIn("see the option list", output)

    def testRichRenderingFancy(self):
        buffer = io.StringIO()
        Console(file=buffer, width=120).print(OptionException("boom", fancy=True, colorful=False))
        self.assertIn("boom", buffer.getvalue())

    def testNormalizeHonoursHostCodes(self):
        main = __import__("__main__")
        with patch.object(main, "__codes__", {FaultCode.INVALID_PARAMETER: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.INVALID_PARAMETER.normalize(), "E-VALUE")
        self.assertEqual(FaultCode.INVALID_PARAMETER.normalize(), "22122")

    def testGetdoc(self):
        main = __import__("__main__")
        self.assertIsNone(getdoc(FaultCode.MISSING_PARAMETER))
        with patch.object(main, "__docs__", {FaultCode.MISSING_PARAMETER: "docs"}, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_PARAMETER), "docs")
        with self.assertRaises(TypeError):
            getdoc(22121)


class TestParserShellMode(TestCase):
    """Behavioral tests for the conventional recovery of a shell-mode parser."""

    def testShellModePrintsDescriptionAndExits(self):
        parser = Parser(lambda name, value: None, shell=True, colorful=False, prog="tool")
        parser.add_flag_option("help", "print this help", short="h")
        stderr = io.StringIO()
        with patch.object(faults, "console", Console(file=stderr, width=120)):
            with contextlib.redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as context:
                    parser.parse(["--nope"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("-h  --help  print this help", stderr.getvalue())
        self.assertIn("invalid option --nope", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
