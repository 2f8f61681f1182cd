# parseopts/exceptions.py
"""
parseopts.exceptions
--------------------

Custom exceptions for parseopts.

Every failure the engine can report is a :class:`UsageError`: a malformed
optstring, an unknown option, a missing option argument or a positional
count violation. They all carry the same reserved exit status so callers can
tell "bad invocation" apart from their own failures.
"""

import click

USAGE_ERROR_STATUS = 2


class UsageError(Exception):
    """
    Raised when an argument list (or the spec describing it) is invalid.
    """

    exit_code = USAGE_ERROR_STATUS

    def __init__(self, message, usage=None):
        super().__init__(message)
        self.message = message
        self.usage = usage

    def format_lines(self):
        """Diagnostic lines, with a trailing ``Usage:`` line if usage is known."""
        lines = [self.message]
        if self.usage:
            lines.append(f"Usage: {self.usage}")
        return lines

    def show(self, file=None):
        """Write the diagnostic lines to `file` (stderr by default)."""
        for line in self.format_lines():
            click.echo(line, file=file, err=True)


class InvalidOptstring(UsageError):
    """
    Raised when an optstring or its positional bounds are malformed.
    """

    def __init__(self, optstring, message=None):
        super().__init__(message or f"Invalid optstring: {optstring}")
        self.optstring = optstring


class UnknownOption(UsageError):
    def __init__(self, option, usage=None):
        super().__init__(f"Unknown option '-{option}'", usage)
        self.option = option


class MissingOptionArgument(UsageError):
    def __init__(self, option, usage=None):
        super().__init__(f"Option '-{option}' requires an argument", usage)
        self.option = option


class ArgumentCountError(UsageError):
    """
    Raised when the number of positional arguments is outside the bounds.
    """

    def __init__(self, message, count, usage=None):
        super().__init__(message, usage)
        self.count = count


class InsufficientArguments(ArgumentCountError):
    def __init__(self, minimum, count, usage=None):
        super().__init__(f"Insufficient arguments; minimum {minimum}", count, usage)
        self.minimum = minimum


class TooManyArguments(ArgumentCountError):
    def __init__(self, maximum, count, usage=None):
        super().__init__(f"Too many arguments; maximum {maximum}", count, usage)
        self.maximum = maximum
