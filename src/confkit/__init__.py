from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

from .conf import parse, parse_file, parse_text
from .errors import ConfError, FlagError, ParseError
from .getopt import getopt, getopt_long, getopt_long_only
from .registry import RegistryVar
from .spec import (
    ArgsValue,
    BoolValue,
    EnumArgKind,
    EnumDialect,
    FuncValue,
    Int64Value,
    SpecVar,
    StringValue,
    Uint64Value,
    Value,
)

__all__ = [
    "__version__",
    # Model
    "SpecVar",
    "RegistryVar",
    "EnumArgKind",
    "EnumDialect",
    "Value",
    "StringValue",
    "BoolValue",
    "Int64Value",
    "Uint64Value",
    "FuncValue",
    "ArgsValue",
    # Parsers
    "parse",
    "parse_file",
    "parse_text",
    "getopt",
    "getopt_long",
    "getopt_long_only",
    # Errors
    "ConfError",
    "ParseError",
    "FlagError",
]

try:
    __version__ = version("confkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Library logs stay silent until the application calls logger.enable("confkit").
logger.disable(__name__)
