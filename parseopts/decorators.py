# parseopts/decorators.py
"""
parseopts.decorators
--------------------

``@parse_opts`` gives a function getopts-style argument handling::

    @parse_opts("ab:f:v", 1, 2, usage="foo [-a] [-b B] [-f F] [-v] SRC [DST]")
    def foo(opts, src, dst=None):
        if opts.a:
            ...

    foo("-a", "-f", "x", "src")   # -> foo(Options(...), "src")
    foo("-z")                     # prints "Unknown option '-z'" and returns 2

The plan is compiled fresh on every call, so nothing is shared between
invocations. On a usage error the diagnostics go to stderr, the function is
not called, and the reserved status (2) is returned instead.
"""

import functools
import logging

from .compiler import compile_optstring
from .exceptions import UsageError

log = logging.getLogger(__name__)


def parse_opts(optstring, min_args=0, max_args=None, usage=None):
    """
    Decorate a function so its positional arguments are parsed as options.

    The wrapped function receives the parsed
    :class:`~parseopts.compiler.Options` first, followed by the remaining
    positional arguments and any keyword arguments unchanged.

    If `usage` is not given, a ``_usage`` attribute set on the decorated
    function is used instead.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*argv, **kwargs):
            plan = compile_optstring(optstring, min_args, max_args)
            try:
                result = plan.execute([str(a) for a in argv],
                                      usage=usage or getattr(wrapper, "_usage", None))
            except UsageError as e:
                log.debug(f"{func.__qualname__}: usage error: {e.message}")
                e.show()
                return e.exit_code
            return func(result.options, *result.args, **kwargs)

        wrapper.compile_plan = lambda: compile_optstring(optstring, min_args, max_args)
        return wrapper
    return decorator
