import re
import shlex
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..defaults import (
    N_INT64_MAX,
    N_INT64_MIN,
    N_UINT64_MAX,
    TUP_BOOL_FALSE,
    TUP_BOOL_TRUE,
)

MSG_INVALID_SYNTAX = "invalid syntax"
MSG_OUT_OF_RANGE = "value out of range"


@runtime_checkable
class Value(Protocol):
    """
    Protocol for the typed storage behind a ``SpecVar``.

    ``set`` receives the raw string after unquoting and either stores the
    parsed result or raises ``ValueError`` describing why the text is not in
    the expected format. The parsers wrap that error with file/line or flag
    context.
    """

    def set(self, raw: str) -> None: ...


@runtime_checkable
class LineValue(Value, Protocol):
    """
    A ``Value`` usable with ``EnumArgKind.LINE_ARG``.

    ``set_line`` receives the residual argument list (mutable) and may
    consume items from its head.
    """

    def set_line(self, args: list[str]) -> None: ...


@dataclass(slots=True)
class StringValue:
    value: str = ""

    def set(self, raw: str) -> None:
        self.value = raw

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class BoolValue:
    """Boolean with synonyms: 0/false/f/off/no/n/disabled, 1/true/t/on/yes/y/enabled."""

    value: bool = False

    def set(self, raw: str) -> None:
        c_key = raw.casefold()
        if c_key in TUP_BOOL_FALSE:
            self.value = False
        elif c_key in TUP_BOOL_TRUE:
            self.value = True
        else:
            raise ValueError(MSG_INVALID_SYNTAX)

    def __str__(self) -> str:
        return "true" if self.value else "false"


# sign, then hex / octal (incl. bare "0") / decimal
_RE_INT_LITERAL = re.compile(r"([+-]?)(0[xX][0-9A-Fa-f]+|0[0-7]*|[1-9][0-9]*)")


def parse_int_literal(raw: str, *, n_min: int, n_max: int) -> int:
    """
    Parse a C-style integer literal (``255 == 0377 == 0xff``).

    Args:
        raw: Literal text, optionally signed.
        n_min: Smallest accepted value.
        n_max: Largest accepted value.

    Returns:
        int: Parsed value.

    Raises:
        ValueError: ``invalid syntax`` for malformed text, ``value out of
            range`` outside ``[n_min, n_max]``.
    """
    re_match = _RE_INT_LITERAL.fullmatch(raw)
    if re_match is None:
        raise ValueError(MSG_INVALID_SYNTAX)

    c_sign, c_digits = re_match.groups()
    if c_digits[:2] in ("0x", "0X"):
        n_value = int(c_digits[2:], 16)
    elif len(c_digits) > 1 and c_digits[0] == "0":
        n_value = int(c_digits[1:], 8)
    else:
        n_value = int(c_digits, 10)

    if c_sign == "-":
        n_value = -n_value
    if not n_min <= n_value <= n_max:
        raise ValueError(MSG_OUT_OF_RANGE)
    return n_value


@dataclass(slots=True)
class Int64Value:
    value: int = 0

    def set(self, raw: str) -> None:
        self.value = parse_int_literal(raw, n_min=N_INT64_MIN, n_max=N_INT64_MAX)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True)
class Uint64Value:
    value: int = 0

    def set(self, raw: str) -> None:
        self.value = parse_int_literal(raw, n_min=0, n_max=N_UINT64_MAX)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True)
class FuncValue:
    """
    Caller-supplied conversion.

    ``func`` parses the raw text and returns the value to store; raising
    ``ValueError`` rejects the input.

    Examples:
        >>> v = FuncValue(func=lambda s: int(s, 16))
        >>> v.set("ff")
        >>> v.value
        255
    """

    func: Callable[[str], Any]
    value: Any = None
    render: Callable[[Any], str] = str

    def set(self, raw: str) -> None:
        self.value = self.func(raw)

    def __str__(self) -> str:
        return "" if self.value is None else self.render(self.value)


@dataclass(slots=True)
class ArgsValue:
    """
    Collects the arguments that follow a LINE_ARG flag (``-e cmd arg ...``).

    From a configuration file the value is split with shell rules instead.
    """

    value: list[str] = field(default_factory=lambda: [])

    def set(self, raw: str) -> None:
        self.value = shlex.split(raw)

    def set_line(self, args: list[str]) -> None:
        self.value = list(args)
        args.clear()

    def __str__(self) -> str:
        return shlex.join(self.value)
