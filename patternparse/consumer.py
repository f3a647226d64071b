"""
patternparse token consumer: walk a token stream against a registry.

Algorithm (single pass, no backtracking)
- pull the next token; stop when none remain.
- resolve it with Registry.find(); unknown tokens abort with UnknownPatternError.
- a pattern already visited in this pass aborts with DuplicatePatternError.
- argument-taking categories pull the following token (MissingArgumentError when
  the stream is exhausted); bare categories receive "".
- run the callback on (argument, config); any exception it raises aborts with
  CallbackFailureError carrying the exception text verbatim.
- compulsory categories add one to the satisfied count once their callback succeeds.
- at the end, the satisfied count must equal Registry.compulsory, otherwise
  IncompleteCompulsoryPatternsError.

Every fault aborts the pass: no partial result is returned and the configuration
object may be left partially mutated. The registry is consumed either way.
"""
import difflib
import functools
import logging
from collections import deque

from .faults import *

log = logging.getLogger(__name__)


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def consume(registry, tokens, /, **options):
    """
    Consume 'tokens' against 'registry' and return its configuration object.

    Parameters
    - registry: Registry
      Unconsumed registry; it is marked consumed once the tokens are validated.
    - tokens: Iterable[str]
      Pre-tokenized input (a plain string is rejected; split it first).
    - options:
      Runtime overrides forwarded to Registry.trigger for this pass (e.g. shell=True).

    Returns
    - the registry's configuration object, populated by the matched callbacks.

    Raises (non-shell registries; shell registries print the fault and exit)
    - UnknownPatternError, DuplicatePatternError, MissingArgumentError,
      CallbackFailureError, IncompleteCompulsoryPatternsError.
    - TypeError on a non-iterable or non-string token, RuntimeError on reuse.
    """
    if isinstance(tokens, str):
        raise TypeError("consume() tokens must be an iterable of strings, not a string")
    registry._ensure_unconsumed("parse")

    tokens = deque(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("consume() tokens must be strings")

    registry._consumed = True
    report = functools.partial(registry.trigger, **options)
    index = 0
    satisfied = 0

    while tokens:
        token = tokens.popleft()
        index += 1

        entry = registry.find(token)
        if entry is None:
            suggestions = difflib.get_close_matches(token, [pattern.flag for pattern in registry.patterns], 5)
            try:
                hint = "did you mean %r? try '%s --help' to see all patterns" % (suggestions[0], registry.prog)
            except IndexError:
                hint = "try '%s --help' to see all patterns" % registry.prog
            return report(UnknownPatternError(
                "invalid argument pattern %r at %s position" % (token, _ordinal(index)),
                title="unknown pattern",
                code=FaultCode.UNKNOWN_PATTERN,
                input=token,
                index=index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_PATTERN),
            ))

        if entry.visited:
            return report(DuplicatePatternError(
                "argument pattern %r at %s position is duplicated" % (token, _ordinal(index)),
                title="duplicated pattern",
                code=FaultCode.DUPLICATED_PATTERN,
                input=token,
                index=index,
                entry=entry,
                hint="keep a single %r; each pattern can be specified only once" % token,
                docs=getdoc(FaultCode.DUPLICATED_PATTERN),
            ))
        entry.visited = True

        if entry.category.takes_argument:
            if not tokens:
                return report(MissingArgumentError(
                    "no argument for pattern %r at %s position" % (token, _ordinal(index)),
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    input=token,
                    index=index,
                    entry=entry,
                    hint="pass a value after it (for example: %s <value>)" % token,
                    docs=getdoc(FaultCode.MISSING_ARGUMENT),
                ))
            argument = tokens.popleft()
            index += 1
        else:
            argument = ""

        try:
            entry(argument, registry.config)
        except Exception as exception:
            return report(CallbackFailureError(
                str(exception),
                title="rejected argument",
                code=FaultCode.CALLBACK_FAILURE,
                input=token,
                argument=argument,
                index=index,
                entry=entry,
                exception=exception,
                hint="check the value given to %r; try '%s --help' for its meaning" % (token, registry.prog),
                docs=getdoc(FaultCode.CALLBACK_FAILURE),
            ))

        if entry.category.required:
            satisfied += 1
        log.debug("matched pattern %r with argument %r at %s position", token, argument, _ordinal(index))

    if satisfied != registry.compulsory:
        missing = [entry.flag for entry in registry.patterns if entry.category.required and not entry.visited]
        return report(IncompleteCompulsoryPatternsError(
            "the number of compulsory argument patterns is %d, but only %d were found in the argument list" % (
                registry.compulsory, satisfied
            ),
            title="incomplete compulsory patterns",
            code=FaultCode.INCOMPLETE_COMPULSORY,
            expected=registry.compulsory,
            actual=satisfied,
            missing=missing,
            hint="add the missing patterns: %s" % ", ".join(missing),
            docs=getdoc(FaultCode.INCOMPLETE_COMPULSORY),
        ))

    log.debug("parse pass complete: %d of %d compulsory patterns satisfied", satisfied, registry.compulsory)
    return registry.config


__all__ = (
    "consume",
)
