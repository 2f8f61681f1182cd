# parseopts/compiler.py
"""
parseopts.compiler
------------------

Spec compiler: turns a compact getopts-style optstring (``"ab:f:v"``) and
optional positional bounds into an immutable :class:`ParsePlan`.

Each character of the optstring is an option identifier (``[a-zA-Z0-9]``),
optionally followed by ``:`` to mark it as taking a value. Flags default to
``0`` and valued options to the empty string.

Compilation never raises for a bad optstring. It returns a plan whose
``error`` is set instead, and executing that plan raises the stored
:class:`~parseopts.exceptions.InvalidOptstring` without touching any
arguments. :class:`OptionSchema` is the explicit builder API; it applies the
same rules but raises immediately.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .exceptions import InvalidOptstring

log = logging.getLogger(__name__)

_OPTSTRING_RE = re.compile(r"[a-zA-Z0-9:]*")
_IDENT_RE = re.compile(r"[a-zA-Z0-9]")

VALUE_MARKER = ":"


@dataclass(frozen=True)
class Binding:
    """One declared option.

    Attributes:
        ident: The single option character, e.g. ``"f"`` for ``-f``.
        takes_value: True if the option requires an argument.
    """

    ident: str
    takes_value: bool = False

    @property
    def kind(self) -> str:
        return "valued" if self.takes_value else "flag"

    @property
    def default(self) -> Any:
        return "" if self.takes_value else 0

    @property
    def attr_name(self) -> str:
        """Name usable as a Python attribute or shell variable.

        Digit options are exposed as ``o<digit>`` (``-0`` -> ``o0``), since
        ``opts.0`` is not valid syntax. Mapping keys stay the raw identifier.
        """
        return f"o{self.ident}" if self.ident.isdigit() else self.ident


class Options(dict):
    """
    Parsed option values keyed by option character, with attribute access.

    ``opts["f"]`` and ``opts.f`` are equivalent; digit options are also
    reachable as ``opts.o0`` for ``-0``.
    """

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        key = _attr_to_key(name)
        try:
            return self[key]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'") from None

    def __setattr__(self, name: str, value: Any):
        if name.startswith('_'):
            super().__setattr__(name, value)
            return
        self[_attr_to_key(name)] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({super().__repr__()})"


def _attr_to_key(name: str) -> str:
    if len(name) == 2 and name[0] == "o" and name[1].isdigit():
        return name[1]
    return name


@dataclass(frozen=True)
class ParsePlan:
    """The compiled form of an optstring plus positional bounds.

    Attributes:
        optstring: Normalized optstring (never starts with ``:``).
        bindings: One :class:`Binding` per identifier, in optstring order.
        min_args: Inclusive minimum number of positional arguments.
        max_args: Inclusive maximum, or ``None`` for unbounded.
        error: Set when compilation failed; executing the plan raises it.
    """

    optstring: str
    bindings: Tuple[Binding, ...] = ()
    min_args: int = 0
    max_args: Optional[int] = None
    error: Optional[InvalidOptstring] = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def lookup(self, char: str) -> Optional[Binding]:
        for binding in self.bindings:
            if binding.ident == char:
                return binding
        return None

    def defaults(self) -> Options:
        """Return a fresh Options holding every binding's default value."""
        return Options({b.ident: b.default for b in self.bindings})

    def execute(self, argv, usage: Optional[str] = None):
        """Run the parse engine against `argv`. See :func:`parseopts.engine.parse`."""
        from .engine import parse
        return parse(self, argv, usage=usage)


# --- Helper Functions ---

def _coerce_bounds(optstring: str, min_args: Any, max_args: Any) -> Tuple[int, Optional[int]]:
    """Validate positional bounds given as ints or numeric text.

    ``None`` or ``""`` means 0 for the minimum and unbounded for the maximum.
    """
    if min_args is None or min_args == "":
        minimum = 0
    else:
        minimum = _coerce_count(min_args)
        if minimum is None:
            raise InvalidOptstring(optstring, f"Invalid minimum argument count: {min_args}")

    if max_args is None or max_args == "":
        return minimum, None
    maximum = _coerce_count(max_args)
    if maximum is None:
        raise InvalidOptstring(optstring, f"Invalid maximum argument count: {max_args}")
    return minimum, maximum


def _coerce_count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def _normalize(optstring: str) -> str:
    # Strip getopts' silent-mode marker
    if optstring.startswith(VALUE_MARKER):
        optstring = optstring[1:]
    return optstring


def _scan_bindings(optstring: str) -> Tuple[Binding, ...]:
    """Derive bindings by scanning from the end toward the start.

    A marker is attributed to the identifier immediately before it. A
    repeated identifier yields one binding, valued if any occurrence is.
    """
    found = []
    last_char = ""
    for char in reversed(optstring):
        if char != VALUE_MARKER:
            takes_value = last_char == VALUE_MARKER
            if takes_value and char.isdigit():
                raise InvalidOptstring(optstring, f"Numeric option '-{char}' cannot take a value: {optstring}")
            found.append((char, takes_value))
        last_char = char
    found.reverse()

    merged = {}
    for char, takes_value in found:
        merged[char] = merged.get(char, False) or takes_value
    return tuple(Binding(char, takes_value) for char, takes_value in merged.items())


def compile_optstring(optstring: Optional[str] = "", min_args: Any = 0, max_args: Any = None) -> ParsePlan:
    """
    Compile an optstring and positional bounds into a :class:`ParsePlan`.

    Args:
        optstring: getopts-style optstring, e.g. ``"ab:f:v"``.
        min_args: Minimum number of positional arguments (int or numeric text).
        max_args: Maximum number of positional arguments; ``None`` or ``""``
                  for unbounded.

    Returns:
        A plan. If the optstring or bounds are malformed the plan has no
        bindings and its ``error`` is set; it is still safe to execute.
    """
    if optstring is not None and not isinstance(optstring, str):
        error = InvalidOptstring(optstring)
        log.warning("%s", error.message)
        return ParsePlan(optstring=str(optstring), error=error)

    normalized = _normalize(optstring or "")
    try:
        if not _OPTSTRING_RE.fullmatch(normalized) or VALUE_MARKER * 2 in normalized:
            raise InvalidOptstring(normalized)
        # Only possible for input that started with '::'
        normalized = normalized.lstrip(VALUE_MARKER)
        bindings = _scan_bindings(normalized)
        minimum, maximum = _coerce_bounds(normalized, min_args, max_args)
    except InvalidOptstring as e:
        log.warning("%s", e.message)
        return ParsePlan(optstring=normalized, error=e)

    log.debug(f"Compiled optstring '{normalized}' into {len(bindings)} bindings (min={minimum}, max={maximum})")
    return ParsePlan(optstring=normalized, bindings=bindings, min_args=minimum, max_args=maximum)


class OptionSchema:
    """
    Builder for option plans without writing an optstring.

    Example::

        plan = (OptionSchema()
                .flag("v")
                .valued("f")
                .bounds(1, 2)
                .compile())

    Unlike :func:`compile_optstring`, invalid declarations raise
    :class:`~parseopts.exceptions.InvalidOptstring` immediately.
    """

    def __init__(self, min_args: Any = 0, max_args: Any = None):
        self._bindings = []
        self.min_args, self.max_args = _coerce_bounds("", min_args, max_args)

    @classmethod
    def from_optstring(cls, optstring: str, min_args: Any = 0, max_args: Any = None) -> "OptionSchema":
        plan = compile_optstring(optstring, min_args, max_args)
        if plan.error is not None:
            raise plan.error
        schema = cls(plan.min_args, plan.max_args)
        schema._bindings.extend(plan.bindings)
        return schema

    def flag(self, ident: str) -> "OptionSchema":
        return self._declare(Binding(ident, takes_value=False))

    def valued(self, ident: str) -> "OptionSchema":
        return self._declare(Binding(ident, takes_value=True))

    def bounds(self, min_args: Any = 0, max_args: Any = None) -> "OptionSchema":
        self.min_args, self.max_args = _coerce_bounds(self.optstring, min_args, max_args)
        return self

    @property
    def bindings(self) -> Tuple[Binding, ...]:
        return tuple(self._bindings)

    @property
    def optstring(self) -> str:
        return "".join(b.ident + (VALUE_MARKER if b.takes_value else "") for b in self._bindings)

    def compile(self) -> ParsePlan:
        return ParsePlan(optstring=self.optstring, bindings=self.bindings,
                         min_args=self.min_args, max_args=self.max_args)

    def _declare(self, binding: Binding) -> "OptionSchema":
        ident = binding.ident
        if not isinstance(ident, str) or not _IDENT_RE.fullmatch(ident):
            raise InvalidOptstring(self.optstring, f"Invalid option identifier: {ident!r}")
        if binding.takes_value and ident.isdigit():
            raise InvalidOptstring(self.optstring, f"Numeric option '-{ident}' cannot take a value")
        for i, existing in enumerate(self._bindings):
            if existing.ident == ident:
                self._bindings[i] = Binding(ident, existing.takes_value or binding.takes_value)
                return self
        self._bindings.append(binding)
        return self
