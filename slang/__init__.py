# Slang language package
# This package provides a lexer, parser and tree-walking interpreter for Slang.
from .errors import (
    SlangError, LexError, ParseError, SlangNameError, SlangTypeError,
    SlangIndexError, SlangOverflowError, RecursionLimitError,
)
from .interpreter import run, run_program, Interpreter
from .lexer import tokenize
from .parser import parse_program, DEFAULT_MAX_DEPTH

__all__ = [
    'run',
    'run_program',
    'Interpreter',
    'tokenize',
    'parse_program',
    'DEFAULT_MAX_DEPTH',
    'SlangError',
    'LexError',
    'ParseError',
    'SlangNameError',
    'SlangTypeError',
    'SlangIndexError',
    'SlangOverflowError',
    'RecursionLimitError',
]
