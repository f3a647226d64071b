"""
patternparse invocation: feed process arguments (or a prompt) to a registry.

Outcomes
- success: the populated configuration object is returned.
- help: the first token is exactly '-h' or '--help' (and the registry does not
  declare that flag itself) → HelpRequested is triggered with the rendered help.
  HelpRequested is not a PatternException, so callers tell it apart by type:

      try:
          config = parse_env_args(registry)
      except HelpRequested as request:
          print(request.help)
      except PatternException as fault:
          print(fault.message)

- failure: any PatternException raised by the consumer.

invoke() is the shell-style runner: the same flow, but faults are printed to
stderr (exit status 1) and help to stdout (exit status 0).
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from .consumer import consume
from .faults import *
from .utils import *

log = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:] (the first element is the invoked command).
    - str: shell-like string split via shlex.split.
    - Iterable[str]: used as-is, each element must be a string.
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse_env_args() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse_env_args() argument must be a string or an iterable of strings")


def parse_env_args(registry, prompt=Unset, /, **options):
    """
    Parse the process arguments (or 'prompt') against 'registry'.

    Parameters
    - registry: Registry
    - prompt: Unset | str | Iterable[str] (see _tokenize)
    - options: runtime overrides for this call (see Registry.trigger)

    Returns
    - the registry's populated configuration object.

    Raises (non-shell registries)
    - HelpRequested when help was asked for; the consumer is not run.
    - any PatternException raised while consuming the tokens.
    """
    tokens = _tokenize(prompt)

    if tokens and tokens[0] in HELP_FLAGS and tokens[0] not in registry:
        registry._ensure_unconsumed("render help")
        log.debug("help requested through %r", tokens[0])
        return registry.trigger(HelpRequested(
            registry.render_help(),
            code=FaultCode.HELP_REQUESTED,
            input=tokens[0],
        ), **options)

    return consume(registry, tokens, **options)


def invoke(registry, prompt=Unset, /):
    """
    Shell-style runner around parse_env_args().

    The registry's own runtime options (fancy/colorful) are kept and the registry
    itself is left untouched; only this call runs in shell mode, so faults and
    help are printed and the process exits instead of raising.
    """
    return parse_env_args(registry, prompt, shell=True)


__all__ = (
    "parse_env_args",
    "invoke",
)
