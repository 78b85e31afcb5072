from dataclasses import dataclass
from enum import StrEnum

from ..spec import EnumDialect


class EnumArgClass(StrEnum):
    SHORT_FLAG = "short_flag"  # -abc: cluster of short flags
    LONG_FLAG = "long_flag"  # X11 -name
    GNU_LONG_FLAG = "gnu_long_flag"  # --name, --name=value
    FALSE_FLAG = "false_flag"  # X11 +name
    END_ARG = "end_arg"  # stop, keep the argument
    END_ARG_SKIP = "end_arg_skip"  # "--": stop, drop the argument


@dataclass(frozen=True, slots=True)
class SpecFlagToken:
    """One flag taken off the front of a cluster.

    Attributes:
        flag: Short flag character (short clusters only).
        long: Long name (long forms only).
        rest: Unconsumed text: the remainder of a short cluster, or the part
            after ``=`` of a GNU long flag.
        if_has_value: Whether a GNU long flag carried ``=``.
    """

    flag: str = ""
    long: str = ""
    rest: str = ""
    if_has_value: bool = False


def classify_arg(arg: str, dialect: EnumDialect) -> tuple[EnumArgClass, str]:
    """
    Classify one command-line argument.

    Returns:
        tuple[EnumArgClass, str]: The class and the flag text with its
        leading ``-``, ``--`` or ``+`` removed.
    """
    if len(arg) <= 1:
        return EnumArgClass.END_ARG, ""

    if arg[0] == "-":
        if arg[1] == "-":
            if len(arg) == 2:
                return EnumArgClass.END_ARG_SKIP, ""
            if dialect is EnumDialect.GETOPT_LONG:
                return EnumArgClass.GNU_LONG_FLAG, arg[2:]
        if dialect is EnumDialect.GETOPT_LONG_ONLY:
            return EnumArgClass.LONG_FLAG, arg[1:]
        return EnumArgClass.SHORT_FLAG, arg[1:]

    if arg[0] == "+" and dialect is EnumDialect.GETOPT_LONG_ONLY:
        return EnumArgClass.FALSE_FLAG, arg[1:]

    return EnumArgClass.END_ARG, ""


def split_flag(text: str, arg_class: EnumArgClass) -> SpecFlagToken:
    """Take the next flag off ``text`` (as returned by ``classify_arg``)."""
    if arg_class is EnumArgClass.SHORT_FLAG:
        return SpecFlagToken(flag=text[0], rest=text[1:])
    if arg_class is EnumArgClass.GNU_LONG_FLAG and "=" in text:
        c_long, c_value = text.split("=", 1)
        return SpecFlagToken(long=c_long, rest=c_value, if_has_value=True)
    # X11 long flags and bare GNU long flags
    return SpecFlagToken(long=text)
