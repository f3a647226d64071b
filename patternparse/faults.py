"""
patternparse faults (errors and help requests) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- PatternException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way.
- HelpRequested: the help short-circuit. It travels through trigger() like a
  fault but is NOT a PatternException, so callers can tell "user asked for help"
  apart from "parse failed" by type alone.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parse faults name the ordinal position of the token
  that caused them (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- Registry/consumer code builds a fault and calls Registry.trigger(fault, **ctx).
- In non-shell mode, faults are raised; in shell mode, they are rendered via rich
  and the process exits (1 for errors, 0 for help).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - registration (2110x)
      • DUPLICATE_REGISTRATION
    - token consumption (2111x)
      • UNKNOWN_PATTERN, DUPLICATED_PATTERN, MISSING_ARGUMENT, INCOMPLETE_COMPULSORY
    - delegated conversion (2113x)
      • CALLBACK_FAILURE
    - informational (2210x)
      • HELP_REQUESTED
    """
    # --- registration errors (211xx) ---
    DUPLICATE_REGISTRATION      = 21101

    # --- consumption errors (211xx) ---
    UNKNOWN_PATTERN             = 21111
    DUPLICATED_PATTERN          = 21112
    MISSING_ARGUMENT            = 21113
    INCOMPLETE_COMPULSORY       = 21114

    # --- delegated errors (211xx) ---
    CALLBACK_FAILURE            = 21131

    # --- informational (221xx) ---
    HELP_REQUESTED              = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program(options):
    registry = options.get("registry")
    return getattr(__import__("__main__"), "__prog__", getattr(registry, "prog", "patternparse"))


class PatternException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            text(_program(self.options), styler("prog-name")),
            " — ",
            text(code.normalize() if code else "", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from self.options.get("exception")
        console.print(self, soft_wrap=not self.options.get("fancy"))
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicatePatternError(PatternException): ...
class UnknownPatternError(PatternException): ...
class MissingArgumentError(PatternException): ...
class CallbackFailureError(PatternException): ...
class IncompleteCompulsoryPatternsError(PatternException): ...


class HelpRequested(Exception):
    """
    the caller asked for help instead of a parse.

    'help' holds the plain rendering of Registry.render_help(); in shell mode the
    registry itself is printed so colors and panels follow its runtime options.
    """

    def __init__(self, help=Unset, /, **options):
        assert isinstance(help, str | Unset)
        self.help = help
        self.options = MappingProxyType(options)

    def __rich__(self):
        if (registry := self.options.get("registry")) is not None:
            return registry
        return Text(str(self.help))

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        Console().print(self, soft_wrap=not self.options.get("fancy"))
        sys.exit(0)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.help, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.

    typical options
    - registry, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to keep (e.g., input/index/expected/actual).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "PatternException",
    "DuplicatePatternError",
    "UnknownPatternError",
    "MissingArgumentError",
    "CallbackFailureError",
    "IncompleteCompulsoryPatternsError",
    "HelpRequested",
    "FaultCode",
    "trigger",
    "getdoc",
)
