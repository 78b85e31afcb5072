from .enum import EnumArgKind, EnumDialect, EnumOrigin
from .value import (
    ArgsValue,
    BoolValue,
    FuncValue,
    Int64Value,
    LineValue,
    StringValue,
    Uint64Value,
    Value,
    parse_int_literal,
)
from .var import RE_IDENT, SpecVar

__all__ = [
    # Specs
    "SpecVar",
    "RE_IDENT",
    # Enums
    "EnumArgKind",
    "EnumDialect",
    "EnumOrigin",
    # Values
    "Value",
    "LineValue",
    "StringValue",
    "BoolValue",
    "Int64Value",
    "Uint64Value",
    "FuncValue",
    "ArgsValue",
    "parse_int_literal",
]
