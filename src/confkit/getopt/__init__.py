from .parser import ParserGetOpt, getopt, getopt_long, getopt_long_only
from .tokenizer import EnumArgClass, SpecFlagToken, classify_arg, split_flag

__all__ = [
    "ParserGetOpt",
    "getopt",
    "getopt_long",
    "getopt_long_only",
    # Tokenizer
    "EnumArgClass",
    "SpecFlagToken",
    "classify_arg",
    "split_flag",
]
