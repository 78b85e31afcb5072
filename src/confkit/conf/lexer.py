"""
Token grammar of configuration lines.

A line is ``ows ident ows "=" ows value ows ["#" comment]``, or blank, or a
comment. Identifiers match ``[-_A-Za-z][-_A-Za-z0-9]*``. Values are either
plain (no separators, no control characters, none of ``"#'=\\``) or
double-quoted with C-like escapes::

    \\a \\b \\f \\n \\r \\t \\v \\" \\\\   \\NNN (octal)   \\xHH
    \\uHHHH   \\UHHHHHHHH

Quoted values may not contain raw control characters (a tab must be written
as ``\\t``) and, unlike plain ones, may be empty.
"""

import unicodedata
from dataclasses import dataclass

from ..spec.var import RE_IDENT

_C_PLAIN_FORBIDDEN = "\"#'=\\"
_C_ASCII_SPACE = "\t\n\v\f\r \x85\xa0"
_SET_CTL_CATEGORIES = frozenset({"Cc", "Cf", "Co", "Cs"})

_DICT_SIMPLE_ESCAPES: dict[str, int] = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    '"': 0x22,
}
_DICT_QUOTE_ESCAPES: dict[str, str] = {
    chr(_code): f"\\{_ch}" for _ch, _code in _DICT_SIMPLE_ESCAPES.items()
}
_C_HEX_DIGITS = "0123456789abcdefABCDEF"
_C_OCT_DIGITS = "01234567"


class LexError(ValueError):
    """Malformed line; carries what was recognized before the failure."""

    def __init__(self, ident: str = "", value: str = "") -> None:
        super().__init__("syntax error")
        self.ident = ident
        self.value = value


@dataclass(frozen=True, slots=True)
class SpecLine:
    """One ``ident = value`` assignment.

    Attributes:
        ident: Identifier.
        value_raw: Value text as it appears in the line (quotes included).
        value: Decoded value handed to the setter.
    """

    ident: str
    value_raw: str
    value: str


def is_space(ch: str) -> bool:
    return ch in _C_ASCII_SPACE or unicodedata.category(ch).startswith("Z")


def is_ctl(ch: str) -> bool:
    return unicodedata.category(ch) in _SET_CTL_CATEGORIES


def _is_plain(ch: str) -> bool:
    c_cat = unicodedata.category(ch)
    return not (
        ch in _C_PLAIN_FORBIDDEN or c_cat.startswith("Z") or c_cat in _SET_CTL_CATEGORIES
    )


def skip_space(line: str, pos: int) -> int:
    n_len = len(line)
    while pos < n_len and is_space(line[pos]):
        pos += 1
    return pos


def match_ident(line: str, pos: int) -> int:
    """Return the end of the identifier at ``pos`` (``pos`` if none)."""
    re_match = RE_IDENT.match(line, pos)
    return re_match.end() if re_match else pos


def match_plain(line: str, pos: int) -> int:
    """Return the end of the plain value at ``pos`` (``pos`` if none)."""
    n_len = len(line)
    while pos < n_len and _is_plain(line[pos]):
        pos += 1
    return pos


def match_quoted(line: str, pos: int) -> int:
    """Return the end of the quoted value at ``pos``, or ``pos`` if unmatched.

    Only the shape is checked here: characters inside the quotes are not
    control characters, and every backslash is followed by a non-control
    character. Escape validity is left to ``unquote``.
    """
    n_len = len(line)
    if pos >= n_len or line[pos] != '"':
        return pos
    i = pos + 1
    while i < n_len:
        ch = line[i]
        if ch == '"':
            return i + 1
        if is_ctl(ch):
            return pos
        if ch == "\\":
            if i + 1 >= n_len or is_ctl(line[i + 1]):
                return pos
            i += 2
            continue
        i += 1
    return pos


def _take_digits(text: str, pos: int, n_digits: int, digits: str) -> str:
    c_chunk = text[pos : pos + n_digits]
    if len(c_chunk) != n_digits or any(_ch not in digits for _ch in c_chunk):
        raise ValueError(f"invalid escape at offset {pos - 1}")
    return c_chunk


def unquote(text: str) -> str:
    """
    Decode a double-quoted value.

    Byte escapes (``\\NNN``, ``\\xHH``) contribute raw bytes and the result
    is read as UTF-8; bytes that do not form valid UTF-8 are kept as
    surrogate escapes so that ``quote`` can restore them.

    Raises:
        ValueError: On a missing quote, an unescaped quote or an invalid escape.
    """
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise ValueError("missing quotes")

    c_body = text[1:-1]
    buf = bytearray()
    i = 0
    n_len = len(c_body)
    while i < n_len:
        ch = c_body[i]
        if ch == '"' or ch == "\n":
            raise ValueError(f"unexpected {ch!r} at offset {i}")
        if ch != "\\":
            buf += ch.encode("utf-8", "surrogateescape")
            i += 1
            continue

        if i + 1 >= n_len:
            raise ValueError("dangling backslash")
        c_esc = c_body[i + 1]
        i += 2
        if c_esc in _DICT_SIMPLE_ESCAPES:
            buf.append(_DICT_SIMPLE_ESCAPES[c_esc])
        elif c_esc in _C_OCT_DIGITS:
            c_oct = c_esc + _take_digits(c_body, i, 2, _C_OCT_DIGITS)
            n_byte = int(c_oct, 8)
            if n_byte > 0xFF:
                raise ValueError(f"octal escape out of range: \\{c_oct}")
            buf.append(n_byte)
            i += 2
        elif c_esc == "x":
            buf.append(int(_take_digits(c_body, i, 2, _C_HEX_DIGITS), 16))
            i += 2
        elif c_esc in ("u", "U"):
            n_digits = 4 if c_esc == "u" else 8
            n_code = int(_take_digits(c_body, i, n_digits, _C_HEX_DIGITS), 16)
            if n_code > 0x10FFFF or 0xD800 <= n_code <= 0xDFFF:
                raise ValueError(f"invalid code point: U+{n_code:04X}")
            buf += chr(n_code).encode("utf-8")
            i += n_digits
        else:
            raise ValueError(f"unknown escape: \\{c_esc}")

    return buf.decode("utf-8", "surrogateescape")


def quote(value: str) -> str:
    """
    Render ``value`` as a quoted configuration value; inverse of ``unquote``.

    Raises:
        ValueError: If ``value`` holds a lone surrogate that does not stand
            for an undecodable byte.
    """
    l_parts: list[str] = ['"']
    for ch in value:
        n_code = ord(ch)
        if ch in _DICT_QUOTE_ESCAPES:
            l_parts.append(_DICT_QUOTE_ESCAPES[ch])
        elif 0xDC80 <= n_code <= 0xDCFF:
            # surrogate escape of a raw byte
            l_parts.append(f"\\x{n_code - 0xDC00:02x}")
        elif 0xD800 <= n_code <= 0xDFFF:
            raise ValueError(f"cannot quote lone surrogate: U+{n_code:04X}")
        elif is_ctl(ch):
            if n_code < 0x80:
                l_parts.append(f"\\x{n_code:02x}")
            elif n_code <= 0xFFFF:
                l_parts.append(f"\\u{n_code:04x}")
            else:
                l_parts.append(f"\\U{n_code:08x}")
        else:
            l_parts.append(ch)
    l_parts.append('"')
    return "".join(l_parts)


def tokenize_line(line: str) -> SpecLine | None:
    """
    Split one configuration line into identifier and value.

    Args:
        line: Line text without its terminator.

    Returns:
        SpecLine | None: The assignment, or ``None`` for blank/comment lines.

    Raises:
        LexError: If the line does not follow the grammar.
    """
    pos = skip_space(line, 0)
    if pos == len(line) or line[pos] == "#":
        return None

    n_end = match_ident(line, pos)
    c_ident = line[pos:n_end]
    pos = skip_space(line, n_end)
    if not c_ident or pos == len(line) or line[pos] != "=":
        raise LexError(ident=c_ident)
    pos = skip_space(line, pos + 1)

    n_end = match_plain(line, pos)
    c_raw = line[pos:n_end]
    c_value = c_raw
    if not c_raw:
        n_end = match_quoted(line, pos)
        c_raw = line[pos:n_end]
        try:
            c_value = unquote(c_raw)
        except ValueError as e:
            raise LexError(ident=c_ident, value=c_raw) from e

    pos = skip_space(line, n_end)
    if pos < len(line) and line[pos] != "#":
        raise LexError(ident=c_ident, value=c_raw)
    return SpecLine(ident=c_ident, value_raw=c_raw, value=c_value)
