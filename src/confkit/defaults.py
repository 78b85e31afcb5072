# Limits and vocabulary shared by the configuration-file and command-line parsers.

from typing import Final

# Longest accepted configuration line, in bytes, line terminator excluded.
N_LEN_LINE_MAX: Final[int] = 4096

# Display name used in error messages when no filename is given.
C_FILE_STDIN: Final[str] = "stdin"

# Boolean synonyms (matched case-insensitively).
TUP_BOOL_FALSE: Final[tuple[str, ...]] = (
    "0",
    "false",
    "f",
    "off",
    "no",
    "n",
    "disabled",
)
TUP_BOOL_TRUE: Final[tuple[str, ...]] = (
    "1",
    "true",
    "t",
    "on",
    "yes",
    "y",
    "enabled",
)

# Parameters handed to NoArg setters ("-x" / "+x").
C_PARAM_TRUE: Final[str] = "true"
C_PARAM_FALSE: Final[str] = "false"

# Bounds for the built-in integer values.
N_INT64_MIN: Final[int] = -(1 << 63)
N_INT64_MAX: Final[int] = (1 << 63) - 1
N_UINT64_MAX: Final[int] = (1 << 64) - 1
