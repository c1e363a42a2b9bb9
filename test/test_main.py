"""
Reference application behavioral tests (settings record, exit status).

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured through a rich Console writing to a StringIO.
"""

from __future__ import annotations

import io
import logging
import unittest
from unittest import TestCase

from rich.console import Console

from treeargs import parse
from treeargs.__main__ import CONTOUR, CaptureSettings, capture_settings, main


class TestCaptureSettings(TestCase):
    """Behavioral tests for the capture settings record."""

    def testResolvedSettings(self):
        flags = parse(CONTOUR, ["contour", "capture", "logical", "timeout", "2.5", "output", "screen.vt", "lines", "40"])
        self.assertEqual(capture_settings(flags), CaptureSettings(
            timeout=2.5,
            output_file="screen.vt",
            line_count=40,
            logical_lines=True,
        ))

    def testDefaults(self):
        flags = parse(CONTOUR, ["contour", "capture", "output", "screen.vt"])
        self.assertEqual(capture_settings(flags), CaptureSettings(1.0, "screen.vt", 0, False))


class TestMain(TestCase):
    """Behavioral tests for the application entry point."""

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=120, color_system=None)
        self.addCleanup(logging.basicConfig, force=True)

    @property
    def output(self):
        return self.console.file.getvalue()

    def testSuccess(self):
        status = main(["contour", "capture", "output", "screen.vt", "lines", "40"], console=self.console)
        self.assertEqual(status, 0)
        self.assertIn("output_file='screen.vt'", self.output)
        self.assertIn("line_count=40", self.output)

    def testRootOnly(self):
        status = main(["contour", "profile", "dark"], console=self.console)
        self.assertEqual(status, 0)
        self.assertIn("'contour.profile': 'dark'", self.output)

    def testFaultPrintsUsageOfInnermostCommand(self):
        status = main(["contour", "capture", "logical"], console=self.console)
        self.assertEqual(status, 1)
        self.assertIn("Required Option Missing", self.output)
        self.assertIn("usage:\ncapture [logical] timeout SECONDS output FILE lines COUNT\n", self.output)

    def testFaultAtRootPrintsFullUsage(self):
        status = main(["contour", "replay"], console=self.console)
        self.assertEqual(status, 1)
        self.assertIn(
            "usage:\ncontour debug TAGS config FILE profile NAME "
            "capture [logical] timeout SECONDS output FILE lines COUNT\n",
            self.output,
        )

    def testMistypedFloatIsAFault(self):
        status = main(["contour", "capture", "timeout", "abc", "output", "x.vt"], console=self.console)
        self.assertEqual(status, 1)
        self.assertIn("Mismatched Value", self.output)
        self.assertIn("value 'abc' of option 'timeout' at fourth position is not float", self.output)
        self.assertIn("usage:\ncapture [logical] timeout SECONDS output FILE lines COUNT\n", self.output)
        self.assertNotIn("CaptureSettings", self.output)

    def testNegativeLineCountIsAFault(self):
        status = main(["contour", "capture", "output", "x.vt", "lines", "-1"], console=self.console)
        self.assertEqual(status, 1)
        self.assertIn("value '-1' of option 'lines' at sixth position is not uint", self.output)
        self.assertIn("usage:\ncapture [logical] timeout SECONDS output FILE lines COUNT\n", self.output)


if __name__ == "__main__":
    unittest.main()
