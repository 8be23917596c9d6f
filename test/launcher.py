"""
Example launcher behavioral tests (python -m gnuparse).

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured through a file-backed rich console.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from gnuparse import faults
from gnuparse.__main__ import Geometry, build, main


class TestLauncher(TestCase):
    """Behavioral tests for the example launcher."""

    def setUp(self):
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=200, color_system=None)

    def testHelpPrintsDescription(self):
        self.assertEqual(main(["-h"], console=self.console), 0)
        output = self.buffer.getvalue()
        self.assertIn("OPTIONS:", output)
        self.assertIn("-g  --geometry      main window geometry, e.g. 800x600-200+100", output)
        self.assertIn("                    (no path parameter to open nothing)", output)

    def testConfigurationReport(self):
        self.assertEqual(main(["-dv", "--geometry=800x600-200+100", "-o", "pictures", "one"], console=self.console), 0)
        output = self.buffer.getvalue()
        self.assertIn("configuration:", output)
        self.assertIn("'development': True", output)
        self.assertIn("'open': 'pictures'", output)
        self.assertIn("Geometry(width=800, height=600, x=-200, y=100)", output)
        self.assertIn("'arguments': ['one']", output)

    def testInvalidGeometryExits(self):
        stderr = io.StringIO()
        with patch.object(faults, "console", Console(file=stderr, width=200)):
            with contextlib.redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as context:
                    main(["--geometry=huge"], console=self.console)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("invalid parameter for option --geometry=huge", stderr.getvalue())

    def testGeometryFromMatch(self):
        calls = []
        parser = build(lambda *call: calls.append(call))
        parser.parse(["-g", "1024x768"])
        self.assertEqual(Geometry.from_match(parser.get_matcher("geometry")), Geometry(1024, 768))
        parser.parse(["-g", "1920X1080+0-15"])
        self.assertEqual(Geometry.from_match(parser.get_matcher("geometry")), Geometry(1920, 1080, 0, -15))


if __name__ == "__main__":
    unittest.main()
