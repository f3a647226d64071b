"""
patternparse registry: declare flag patterns and render their help.

What this module provides
- Registry: owns the configuration object, the ordered list of PatternEntry and
  the compulsory counter. Registration order is preserved and drives help order.
  • register(...) appends a pattern (or returns a decorator that will).
  • find(flag) performs the linear, exact-match lookup used by the consumer.
  • render_help() builds the plain help text; __rich__ renders the same lines
    with the palette (and a titled panel when fancy=True).
  • parse(tokens) / parse_env_args(prompt) hand the registry to the consumer.
    A registry serves a single parse pass; afterwards it is 'consumed'.

Quick start
    from patternparse import Registry, PatternCategory

    class Settings:
        port = 8080
        verbose = False

    registry = Registry(Settings())

    @registry.register("-p", PatternCategory.OPTIONAL_WITH_ARG, "port to bind")
    def on_port(argument, settings):
        settings.port = int(argument)

    settings = registry.parse(["-p", "9000"])

Runtime flags (prog/shell/fancy/colorful)
- prog: program name used in headers (defaults to basename of sys.argv[0]).
- shell: print faults and exit instead of raising them.
- fancy: wrap help and faults in rich panels.
- colorful: apply the palette; __main__.__styles__ may override entries.
"""
import logging
import os.path
import sys
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .consumer import consume
from .faults import *
from .invocation import parse_env_args
from .patterns import PatternEntry
from .utils import *

log = logging.getLogger(__name__)


class Registry:
    """
    Set of declared flag patterns bound to one configuration object.

    Lifecycle
    - Construct around a configuration object (any mutable object).
    - register() zero or more times; duplicates are rejected with DuplicatePatternError.
    - parse()/parse_env_args() once; the registry is consumed by that pass and
      refuses any further registration or parsing.
    """

    __introspectable__ = (
        "prog",
        "patterns",
        "compulsory",
        "shell",
        "fancy",
        "colorful",
        "consumed",
    )

    patterns = mirror("patterns")
    compulsory = mirror("compulsory")
    prog = mirror("prog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    consumed = mirror("consumed")

    def __init__(self, config, /, *, prog=Unset, shell=False, fancy=False, colorful=False):
        if not isinstance(prog, str | UnsetType):
            raise TypeError("registry 'prog' must be a string")
        self._config = config
        self._patterns = []
        self._compulsory = 0
        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "patternparse")
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._consumed = False

    @property
    def config(self):
        """
        The configuration object handed to every callback (returned by a successful parse).
        """
        return self._config

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "registry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __len__(self):
        return len(self._patterns)

    def __contains__(self, flag):
        return self.find(flag) is not None

    def _ensure_unconsumed(self, action):
        if self._consumed:
            raise RuntimeError("cannot %s: registry was already consumed by a parse pass" % action)

    def register(self, flag, category, descr=Unset, callback=Unset):
        """
        Declare a flag pattern.

        Parameters
        - flag: str
          Exact token to match (non-empty, unique within the registry).
        - category: PatternCategory
          Whether the flag is compulsory and whether it consumes an argument.
        - descr: str | Unset
          Help description; plain functions default to their docstring.
        - callback: Callable[[str, config], None] | Unset
          Conversion logic. When omitted, a decorator is returned that registers
          the decorated function and hands it back unchanged.

        Returns
        - PatternEntry (direct form) or a decorator (when callback is Unset).

        Raises
        - DuplicatePatternError when the flag is already registered (state unchanged).
        - TypeError/ValueError on malformed arguments.
        - RuntimeError once the registry has been consumed.
        """
        if callback is Unset:
            @rename("register")
            def wrapper(callback, /):
                if not callable(callback):
                    raise TypeError("@register() must be applied to a callable")
                self.register(flag, category, descr, callback)
                return callback
            return wrapper

        self._ensure_unconsumed("register a pattern")

        # validate everything before touching the pattern list
        entry = PatternEntry(flag, category, callback, descr)

        if self.find(flag) is not None:
            return self.trigger(DuplicatePatternError(
                "argument pattern %r is already registered" % flag,
                title="duplicate pattern",
                code=FaultCode.DUPLICATE_REGISTRATION,
                input=flag,
                hint="register each flag once; %d patterns are already declared" % len(self._patterns),
                docs=getdoc(FaultCode.DUPLICATE_REGISTRATION),
            ))

        self._patterns.append(entry)
        if category.required:
            self._compulsory += 1
        log.debug("registered pattern %r as %s (%d compulsory)", flag, category.name, self._compulsory)
        return entry

    def find(self, flag):
        """
        Return the first pattern whose flag equals 'flag', or None.
        """
        for entry in self._patterns:
            if entry.flag == flag:
                return entry
        return None

    def render_help(self):
        """
        Plain help text: one line per pattern, in registration order.

        - required: "<flag>[ arg]: <descr>"
        - optional: "[<flag>[ arg]]: <descr>"
        """
        return "\n".join("%s: %s" % (entry.usage(), entry.descr) for entry in self._patterns)

    def __rich__(self):
        """
        Rich help rendering, line-for-line equivalent to render_help().

        Palette keys
        - pattern-name, optional-name, metavar, bracket, description, panel-title
        Define a mapping named __styles__ in __main__ to override any entry.
        """
        styles = defaultdict(str, {
            "pattern-name": "bold #00E6FF",  # CYAN for compulsory flags
            "optional-name": "bold #22C55E",  # GREEN for optional flags
            "metavar": "bold #FFD600",  # AMBER for the argument marker
            "bracket": "#737373",  # dim gray brackets around optional usage
            "description": "#9CA3AF",  # muted gray descriptions
            "panel-title": "bold #FF4D94",  # magenta branding
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        lines = []
        for entry in self._patterns:
            usage = Text(entry.flag, styler("pattern-name" if entry.category.required else "optional-name"))
            if entry.category.takes_argument:
                usage = Text.assemble(usage, " ", Text("arg", styler("metavar")))
            if not entry.category.required:
                usage = Text.assemble(Text("[", styler("bracket")), usage, Text("]", styler("bracket")))
            lines.append(Text.assemble(usage, ": ", Text(entry.descr, styler("description"))))

        if self._fancy:
            title = Text(" %s " % getattr(__import__("__main__"), "__prog__", self._prog), styler("panel-title"))
            return Panel(Group(*lines), title=title, title_align="left")
        return Group(*lines)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's runtime options merged in.

        Explicit 'shell', 'fancy' or 'colorful' options take precedence over the
        registry's own for this call only.
        """
        return trigger(fault, **{
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
            **options,
            "registry": self,
        })

    def parse(self, tokens, /):
        """
        Consume 'tokens' against the registered patterns and return the config.

        See patternparse.consumer.consume for the algorithm and the faults raised.
        """
        return consume(self, tokens)

    def parse_env_args(self, prompt=Unset, /):
        """
        Parse the process arguments (or 'prompt'), honoring -h/--help.

        See patternparse.invocation.parse_env_args.
        """
        return parse_env_args(self, prompt)


__all__ = (
    "Registry",
)
