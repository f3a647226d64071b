"""
Faults module behavioral tests (codes, trigger protocol, rendering).

Scope
- Validate FaultCode normalization through the host's __codes__ mapping.
- Validate trigger(): protocol checks, option merging, raise vs. print.
- Validate rich rendering of faults (plain, fancy) and of HelpRequested.
- Validate getdoc() lookups through the host's __docs__ mapping.

Conventions
- Test method names follow CamelCase per project convention.
- Host attributes are patched onto the real __main__ module and removed afterwards.
"""

from __future__ import annotations

import contextlib
import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from patternparse.faults import (
    FaultCode,
    PatternException,
    UnknownPatternError,
    CallbackFailureError,
    HelpRequested,
    trigger,
    getdoc,
)


def _render(renderable):
    console = Console(width=100, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaultCode(TestCase):
    """FaultCode identifiers and host normalization."""

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_PATTERN.normalize(), "21111")

    def testNormalizeHonorsHostCodes(self):
        codes = {FaultCode.UNKNOWN_PATTERN: "E-UNKNOWN"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNKNOWN_PATTERN.normalize(), "E-UNKNOWN")
            self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "21113")


class TestTrigger(TestCase):
    """trigger() dispatching and option merging."""

    def testRejectsObjectsWithoutProtocol(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testRaisesMergedCopyWhenNotShell(self):
        fault = UnknownPatternError("invalid argument pattern '-x'")
        with self.assertRaises(UnknownPatternError) as caught:
            trigger(fault, input="-x", code=FaultCode.UNKNOWN_PATTERN)
        self.assertIsNot(caught.exception, fault)
        self.assertEqual(caught.exception.options["input"], "-x")
        self.assertEqual(caught.exception.message, fault.message)

    def testChainsDelegatedException(self):
        cause = ValueError("bad")
        with self.assertRaises(CallbackFailureError) as caught:
            trigger(CallbackFailureError("bad"), exception=cause)
        self.assertIs(caught.exception.__cause__, cause)

    def testShellPrintsAndExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as caught:
            trigger(UnknownPatternError("invalid argument pattern '-x'"), shell=True, title="unknown pattern")
        self.assertEqual(caught.exception.code, 1)
        self.assertIn("invalid argument pattern '-x'", stderr.getvalue())

    def testReplaceKeepsType(self):
        fault = copy.replace(UnknownPatternError("message", a=1), b=2)
        self.assertIsInstance(fault, UnknownPatternError)
        self.assertEqual(dict(fault.options), {"a": 1, "b": 2})

    def testOptionsAreReadOnly(self):
        fault = PatternException("message", a=1)
        with self.assertRaises(TypeError):
            fault.options["a"] = 2


class TestRendering(TestCase):
    """Rich rendering of faults and help requests."""

    def testPlainRenderingHasHeaderMessageAndHint(self):
        fault = UnknownPatternError(
            "invalid argument pattern '-x' at first position",
            title="unknown pattern",
            code=FaultCode.UNKNOWN_PATTERN,
            hint="try 'tool --help'",
        )
        lines = _render(fault).splitlines()
        self.assertIn("21111", lines[0])
        self.assertIn("Unknown Pattern", lines[0])
        self.assertEqual(lines[1].rstrip(), "invalid argument pattern '-x' at first position")
        self.assertIn("try 'tool --help'", lines[2])

    def testHostProgOverridesHeader(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "host-tool", create=True):
            output = _render(PatternException("boom", title="error"))
        self.assertIn("host-tool", output)

    def testFancyRenderingUsesPanel(self):
        plain = _render(PatternException("boom", title="error"))
        output = _render(PatternException("boom", title="error", fancy=True))
        self.assertIn("Error", output.splitlines()[0])
        self.assertIn("boom", output)
        self.assertGreater(len(output.splitlines()), len(plain.splitlines()))

    def testColorfulRenderingKeepsText(self):
        output = _render(PatternException("boom", title="error", colorful=True, hint="do this"))
        self.assertIn("boom", output)
        self.assertIn("do this", output)

    def testHelpRequestedFallsBackToText(self):
        self.assertEqual(_render(HelpRequested("-a: alpha")).rstrip(), "-a: alpha")

    def testHelpRequestedShellPrintsToStdout(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), self.assertRaises(SystemExit) as caught:
            trigger(HelpRequested("-a: alpha"), shell=True)
        self.assertEqual(caught.exception.code, 0)
        self.assertEqual(stdout.getvalue().rstrip(), "-a: alpha")


class TestGetdoc(TestCase):
    """getdoc() lookups."""

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_ARGUMENT))

    def testHostDocs(self):
        docs = {FaultCode.MISSING_ARGUMENT: "argument-taking patterns need a value"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_ARGUMENT), "argument-taking patterns need a value")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(21113)


if __name__ == "__main__":
    unittest.main()
