r"""
patternparse pattern declarations.

Overview
- PatternCategory: the closed set of four pattern kinds. A category answers two
  questions for the consumer:
  • takes_argument: must the following token be consumed as the flag's argument?
  • required: does matching the flag count toward the compulsory total?

    category               required  takes_argument
    WITH_ARG               yes       yes
    WITHOUT_ARG            yes       no
    OPTIONAL_WITH_ARG      no        yes
    OPTIONAL_WITHOUT_ARG   no        no

- PatternEntry: one registered flag. Holds the flag string (match key), its
  category, the conversion callback, the description shown in help and the
  per-pass 'visited' marker.

Callback contract
- callback(argument, config) is called at most once per parse pass.
- argument is the raw token following the flag, or "" for bare categories.
- config is the registry's configuration object; mutate it in place.
- reject the argument by raising (ValueError and friends); the exception text is
  surfaced verbatim to the caller as a CallbackFailureError.
"""
import builtins
import inspect
from enum import Enum

from .utils import *


class PatternCategory(Enum):
    WITH_ARG = "required-with-arg"
    WITHOUT_ARG = "required-without-arg"
    OPTIONAL_WITH_ARG = "optional-with-arg"
    OPTIONAL_WITHOUT_ARG = "optional-without-arg"

    @property
    def required(self):
        return self in (PatternCategory.WITH_ARG, PatternCategory.WITHOUT_ARG)

    @property
    def takes_argument(self):
        return self in (PatternCategory.WITH_ARG, PatternCategory.OPTIONAL_WITH_ARG)


class PatternEntry:
    """
    A registered flag pattern.

    Properties
    - flag, category, callback and descr are read-only once constructed.
    - visited is flipped by the consumer the first time the flag is matched.
    """

    __introspectable__ = (
        "flag",
        "category",
        "descr",
        "visited",
    )

    flag = mirror("flag")
    category = mirror("category")
    callback = mirror("callback")
    descr = mirror("descr")

    def __init__(self, flag, category, callback, descr=Unset):
        if not isinstance(flag, str):
            raise TypeError("pattern 'flag' must be a string")
        elif not flag:
            raise ValueError("pattern 'flag' must be a non-empty string")
        if not isinstance(category, PatternCategory):
            raise TypeError("pattern 'category' must be a pattern-category")
        if not builtins.callable(callback):
            raise TypeError("pattern 'callback' must be callable")
        if not isinstance(descr, str | UnsetType):
            raise TypeError("pattern 'descr' must be a string")

        self._flag = flag
        self._category = category
        self._callback = callback
        # Plain functions fall back to their docstring, like decorated handlers do.
        self._descr = coalesce(descr, inspect.isfunction(callback) and inspect.getdoc(callback) or "")
        self.visited = False

    def __call__(self, argument, config, /):
        return self._callback(argument, config)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "pattern-entry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def usage(self):
        """
        Return the usage fragment for help: '-f arg' or '-f', bracketed when optional.
        """
        usage = "%s arg" % self._flag if self._category.takes_argument else self._flag
        return usage if self._category.required else "[%s]" % usage


__all__ = (
    "PatternCategory",
    "PatternEntry",
)
