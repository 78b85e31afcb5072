from typing import Final

# Parser-level messages. Setter failures carry their own message instead.
MSG_SYNTAX: Final[str] = "syntax error"
MSG_LINE_TOO_LONG: Final[str] = "line too long"
MSG_UNKNOWN_VAR: Final[str] = "unknown variable"
MSG_ALREADY_DEFINED: Final[str] = "already defined"
MSG_REQUIRED: Final[str] = "required but not set"
MSG_ILLEGAL_OPTION: Final[str] = "illegal option"
MSG_NO_ARG: Final[str] = "option requires an argument"
MSG_END_JUNK: Final[str] = "junk at end of option"
MSG_ALREADY_SET: Final[str] = "option already set"


class ConfError(Exception):
    """Base class for configuration-file and command-line parsing errors."""


class MessageError(ConfError):
    """Bare parser message, used as the ``err`` of the structured errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(ConfError):
    """Configuration-file error.

    Renders as ``file:[line:][ ident:] err``. ``value`` is the value text as it
    appears in the input (possibly quoted); it is kept for callers and never
    printed.

    Attributes:
        file: Filename, or ``"stdin"``.
        line: 1-based line number, ``0`` when the error concerns the whole file.
        ident: Identifier, or ``""`` if not known yet.
        value: Raw value text, or ``""`` if not known yet.
        err: Underlying error.
    """

    def __init__(
        self,
        file: str,
        line: int,
        ident: str,
        value: str,
        err: Exception | str,
    ) -> None:
        self.file = file
        self.line = line
        self.ident = ident
        self.value = value
        self.err = MessageError(err) if isinstance(err, str) else err
        super().__init__(str(self))

    def __str__(self) -> str:
        c_line = f"{self.line}:" if self.line else ""
        c_ident = f" {self.ident}:" if self.ident else ""
        return f"{self.file}:{c_line}{c_ident} {self.err}"


class FlagError(ConfError):
    """Command-line error.

    Renders as ``err -- token`` where token is ``value`` if not empty, else
    ``long``, else ``flag``.

    Attributes:
        flag: Short flag character, or ``""``.
        long: Long flag name, or ``""``.
        value: Offending value text, or ``""``.
        err: Underlying error.
    """

    def __init__(
        self,
        flag: str = "",
        long: str = "",
        value: str = "",
        err: Exception | str = MSG_ILLEGAL_OPTION,
    ) -> None:
        self.flag = flag
        self.long = long
        self.value = value
        self.err = MessageError(err) if isinstance(err, str) else err
        super().__init__(str(self))

    @property
    def token(self) -> str:
        if self.value:
            return self.value
        if self.long:
            return self.long
        return self.flag

    def __str__(self) -> str:
        return f"{self.err} -- {self.token}"
