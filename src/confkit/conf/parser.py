import io
import os
from typing import IO

from loguru import logger

from ..defaults import C_FILE_STDIN, N_LEN_LINE_MAX
from ..errors import (
    MSG_ALREADY_DEFINED,
    MSG_LINE_TOO_LONG,
    MSG_REQUIRED,
    MSG_SYNTAX,
    MSG_UNKNOWN_VAR,
    ParseError,
)
from ..registry import RegistryVar
from ..spec import EnumOrigin
from .lexer import LexError, SpecLine, tokenize_line


class ParserConf:
    """Line-oriented configuration-file parser bound to one registry.

    Each call to :meth:`parse` reads a stream to its end or to the first
    error. Values go to the registry's ``Value`` setters; a var already set
    from the command line keeps its value and is only marked as seen.
    """

    def __init__(self, registry: RegistryVar, *, filename: str = "") -> None:
        self.registry = registry
        self.file = filename or C_FILE_STDIN
        self.n_line = 0

    def _error(self, message: str, *, ident: str = "", value: str = "") -> ParseError:
        return ParseError(self.file, self.n_line, ident, value, message)

    def _read_line(self, stream: IO[bytes] | IO[str]) -> bytes | None:
        """Read one line without its terminator; ``None`` at end of stream."""
        raw = stream.readline(N_LEN_LINE_MAX + 2)
        if not raw:
            return None
        if isinstance(raw, str):
            raw = raw.encode("utf-8", "surrogateescape")
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        if len(raw) > N_LEN_LINE_MAX:
            raise self._error(MSG_LINE_TOO_LONG)
        return raw

    def _assign(self, spec_line: SpecLine) -> None:
        c_ident = spec_line.ident
        idx = self.registry.select_by_name(c_ident)
        if idx is None:
            raise self._error(MSG_UNKNOWN_VAR, ident=c_ident, value=spec_line.value_raw)
        if self.registry.is_set(idx, EnumOrigin.FILE):
            raise self._error(MSG_ALREADY_DEFINED, ident=c_ident, value=spec_line.value_raw)

        if self.registry.is_set(idx, EnumOrigin.CMDLINE):
            logger.debug(
                "{}:{}: keep command-line value of `{}`", self.file, self.n_line, c_ident
            )
            self.registry.mark(idx, EnumOrigin.FILE)
            return

        spec = self.registry.select_var(idx)
        try:
            spec.val.set(spec_line.value)
        except ValueError as e:
            raise ParseError(
                self.file, self.n_line, c_ident, spec_line.value_raw, e
            ) from e
        self.registry.mark(idx, EnumOrigin.FILE)

    def parse_line(self, line: str) -> None:
        try:
            spec_line = tokenize_line(line)
        except LexError as e:
            raise self._error(MSG_SYNTAX, ident=e.ident, value=e.value) from e
        if spec_line is not None:
            self._assign(spec_line)

    def parse(self, stream: IO[bytes] | IO[str]) -> None:
        """Parse ``stream`` to its end.

        Raises:
            ParseError: On the first syntax or semantic error, or if a
                required var is set from neither origin afterwards.
            OSError: Read errors, unchanged.
        """
        self.n_line = 0
        while True:
            self.n_line += 1
            raw = self._read_line(stream)
            if raw is None:
                break
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise self._error(MSG_SYNTAX) from e
            self.parse_line(line)

        for spec in self.registry.iter_missing_required():
            raise ParseError(self.file, 0, spec.label, "", MSG_REQUIRED)


def parse(stream: IO[bytes] | IO[str], filename: str, registry: RegistryVar) -> None:
    """
    Parse a configuration stream into ``registry``.

    ``filename`` only appears in error messages (``"stdin"`` if empty).
    Parsing stops on the first error. Setting an unknown variable, setting a
    variable twice or leaving a required variable unset are errors. Values
    pass through quoting first, so the quoted ``"\\x32\\u0033"`` is the same as
    the plain ``23`` even for numeric vars.

    Raises:
        ParseError: Syntax and semantic errors.
        OSError: Read errors, propagated as-is.
    """
    ParserConf(registry, filename=filename).parse(stream)


def parse_text(text: str, registry: RegistryVar, *, filename: str = "") -> None:
    """Parse configuration held in memory."""
    parse(io.BytesIO(text.encode("utf-8")), filename, registry)


def parse_file(path: str | os.PathLike[str], registry: RegistryVar) -> None:
    """Open ``path``, parse it and close it on every exit path."""
    c_path = os.fspath(path)
    with open(c_path, "rb") as fh:
        parse(fh, c_path, registry)
