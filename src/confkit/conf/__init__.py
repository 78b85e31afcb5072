from .lexer import LexError, SpecLine, quote, tokenize_line, unquote
from .parser import ParserConf, parse, parse_file, parse_text

__all__ = [
    "ParserConf",
    "parse",
    "parse_file",
    "parse_text",
    # Lexer
    "SpecLine",
    "LexError",
    "tokenize_line",
    "quote",
    "unquote",
]
