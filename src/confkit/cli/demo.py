"""
Demo program: settings from the X11-style command line, then from a file.

    confkit-demo [-c FILE] [-string S] [-number N] [-bool|+bool] [-key HEX]
                 [-verbose] [args...]

``-c`` selects the file; ``key`` is required (64 hex digits) and must
come from one of the two sources. Values given on the command line win
over the file.
"""

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from ..conf import parse_file
from ..errors import ConfError
from ..getopt import EnumArgClass, classify_arg, getopt_long_only
from ..registry import RegistryVar
from ..spec import (
    BoolValue,
    EnumArgKind,
    EnumDialect,
    FuncValue,
    SpecVar,
    StringValue,
    Uint64Value,
)
from .console import ConsoleVars

C_CONF_FILE_DEFAULT = "example.conf"

_RE_NET_KEY = re.compile(r"[0-9a-fA-F]{64}")


def parse_net_key(raw: str) -> bytes:
    if not _RE_NET_KEY.fullmatch(raw):
        raise ValueError("invalid key (must be 64 hexadecimal digits)")
    return bytes.fromhex(raw)


@dataclass(slots=True)
class SpecDemoValues:
    conf_file: StringValue = field(
        default_factory=lambda: StringValue(C_CONF_FILE_DEFAULT)
    )
    string: StringValue = field(default_factory=lambda: StringValue("default value"))
    number: Uint64Value = field(default_factory=Uint64Value)
    flag_bool: BoolValue = field(default_factory=BoolValue)
    key: FuncValue = field(
        default_factory=lambda: FuncValue(func=parse_net_key, render=bytes.hex)
    )
    verbose: BoolValue = field(default_factory=BoolValue)


def build_registry(values: SpecDemoValues) -> RegistryVar:
    return RegistryVar().register_vars(
        # the file is read after the command line; `c` there has no effect
        SpecVar(val=values.conf_file, flag="c", name="c", help="configuration file"),
        SpecVar(val=values.verbose, flag="v", name="verbose", kind=EnumArgKind.NO_ARG),
        # command line and configuration file
        SpecVar(val=values.string, flag="s", name="string"),
        SpecVar(val=values.number, flag="n", name="number"),
        SpecVar(val=values.flag_bool, flag="b", name="bool", kind=EnumArgKind.NO_ARG),
        SpecVar(val=values.key, flag="k", name="key", required=True),
    )


def is_verbose_requested(registry: RegistryVar, argv: Sequence[str]) -> bool:
    """
    Look for ``-verbose`` before the command line is parsed.

    Follows ``getopt_long_only`` far enough to skip the parameters of HAS_ARG
    vars, so ``-string -verbose`` does not count.
    """
    it_args = iter(argv)
    for arg in it_args:
        arg_class, text = classify_arg(arg, EnumDialect.GETOPT_LONG_ONLY)
        if arg_class is not EnumArgClass.LONG_FLAG:
            if arg_class is EnumArgClass.FALSE_FLAG:
                continue
            return False
        if text == "verbose":
            return True
        idx = registry.select_by_name(text)
        if idx is None:
            return False
        kind = registry.select_var(idx).kind
        if kind is EnumArgKind.LINE_ARG:
            return False
        if kind is EnumArgKind.HAS_ARG:
            next(it_args, None)
    return False


def main(argv: Sequence[str] | None = None) -> int:
    console = ConsoleVars()
    values = SpecDemoValues()
    registry = build_registry(values)
    l_argv = list(sys.argv[1:] if argv is None else argv)

    # enabled up front so the command-line parse is logged too
    if is_verbose_requested(registry, l_argv):
        logger.enable("confkit")

    console.title("confkit demo")
    console.show_vars(registry, title="start")

    try:
        l_args = getopt_long_only(registry, l_argv)
    except ConfError as e:
        console.show_error(e)
        return 1
    console.show_vars(registry, title="after command line")

    logger.debug("Reading configuration from {}", values.conf_file.value)
    try:
        parse_file(values.conf_file.value, registry)
    except (ConfError, OSError) as e:
        console.show_error(e)
        return 1
    console.show_vars(registry, title="after configuration file")
    console.show_conf(registry, title="effective configuration")

    if l_args:
        console.show_args(l_args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
