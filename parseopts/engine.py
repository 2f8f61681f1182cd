# parseopts/engine.py
"""
parseopts.engine
----------------

Parse engine: runs a compiled :class:`~parseopts.compiler.ParsePlan` against
an argument vector, following getopts semantics.

- Options are scanned left to right. Flags may be grouped (``-ab``).
- A valued option takes the rest of its token (``-fx``) or, if that is
  empty, the next token verbatim (``-f x``, ``-f --``).
- ``--`` ends option recognition and is consumed. A token that does not
  start with ``-`` (or is ``-`` alone) ends it and is kept.
- The remaining tokens are the positional arguments; their count is checked
  against the plan's bounds.

Errors are raised as :class:`~parseopts.exceptions.UsageError` subclasses.
Nothing is printed here; callers decide how to report (see
:meth:`UsageError.show`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .compiler import Options, ParsePlan
from .exceptions import (
    InsufficientArguments,
    InvalidOptstring,
    MissingOptionArgument,
    TooManyArguments,
    UnknownOption,
)

log = logging.getLogger(__name__)

END_OF_OPTIONS = "--"


@dataclass
class ParseResult:
    """Outcome of a successful parse.

    Attributes:
        options: Value for every declared option (defaults for absent ones).
        args: Positional arguments left after option parsing, in order.
        given: Identifiers that actually appeared, in first-seen order.
        consumed: Number of argv tokens consumed by option parsing.
    """

    options: Options
    args: List[str] = field(default_factory=list)
    given: Tuple[str, ...] = ()
    consumed: int = 0


def parse(plan: ParsePlan, argv: Sequence[str], usage: Optional[str] = None) -> ParseResult:
    """
    Parse `argv` against `plan`.

    Args:
        plan: A plan from :func:`~parseopts.compiler.compile_optstring` or
              :meth:`~parseopts.compiler.OptionSchema.compile`.
        argv: Arguments to parse, not including a program name.
        usage: Optional usage text attached to errors as ``Usage: <usage>``.

    Returns:
        A :class:`ParseResult`.

    Raises:
        InvalidOptstring: If the plan failed to compile.
        UnknownOption: On an option character the plan does not declare.
        MissingOptionArgument: If a valued option is the last token.
        InsufficientArguments: If fewer than ``plan.min_args`` positionals remain.
        TooManyArguments: If more than ``plan.max_args`` positionals remain.
    """
    if plan.error is not None:
        raise InvalidOptstring(plan.error.optstring, plan.error.message)

    tokens = list(argv)
    options = plan.defaults()
    given = []
    index = _scan(plan, tokens, options, given, usage)
    remaining = tokens[index:]
    _check_count(plan, len(remaining), usage)

    log.debug(f"Parsed {index} option tokens; {len(remaining)} positional arguments remain")
    return ParseResult(options=options, args=remaining, given=tuple(given), consumed=index)


def _scan(plan: ParsePlan, tokens: List[str], options: Options, given: list, usage: Optional[str]) -> int:
    """Scan options and return the index of the first positional argument."""
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == END_OF_OPTIONS:
            log.debug(f"Option scan stopped by '{END_OF_OPTIONS}' at index {index}")
            return index + 1
        if token == "-" or not token.startswith("-"):
            break
        index = _scan_token(plan, tokens, index, options, given, usage)
    return index


def _scan_token(plan: ParsePlan, tokens: List[str], index: int, options: Options, given: list, usage: Optional[str]) -> int:
    """Handle one ``-xyz`` token, returning the index of the next token."""
    token = tokens[index]
    pos = 1
    while pos < len(token):
        char = token[pos]
        binding = plan.lookup(char)
        if binding is None:
            raise UnknownOption(char, usage)

        if not binding.takes_value:
            options[char] = 1
            pos += 1
        elif pos + 1 < len(token):
            options[char] = token[pos + 1:]
            pos = len(token)
        elif index + 1 < len(tokens):
            index += 1
            options[char] = tokens[index]
            pos = len(token)
        else:
            raise MissingOptionArgument(char, usage)

        if char not in given:
            given.append(char)
    return index + 1


def _check_count(plan: ParsePlan, count: int, usage: Optional[str]):
    if count < plan.min_args:
        raise InsufficientArguments(plan.min_args, count, usage)
    if plan.max_args is not None and count > plan.max_args:
        raise TooManyArguments(plan.max_args, count, usage)
