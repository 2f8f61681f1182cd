# parseopts/__init__.py
"""
parseopts – getopts-style option parsing for Python callables.

Compile an optstring with `compile_optstring` (or build one with
`OptionSchema`), then parse an argument list with `parse`. The `parse_opts`
decorator does both for a function and returns 2 on usage errors.
"""

__version__ = "0.1.0"

from .compiler import Binding, OptionSchema, Options, ParsePlan, compile_optstring
from .decorators import parse_opts
from .engine import ParseResult, parse
from .exceptions import (
    USAGE_ERROR_STATUS,
    ArgumentCountError,
    InsufficientArguments,
    InvalidOptstring,
    MissingOptionArgument,
    TooManyArguments,
    UnknownOption,
    UsageError,
)
