"""Error types raised by the Slang lexer, parser and interpreter.

Every failure is described by an `ErrorVal` (an error name such as
'TypeError' plus a message) and propagated as a `SlangError` subclass.
The error name is what callers should report; the Python class only
exists so that callers can catch a specific category.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorVal:
    """Name and message describing a Slang error."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class SlangError(Exception):
    """Base exception for all Slang errors."""
    name = 'Error'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.err = ErrorVal(self.name, message)
        self.line = line
        self.column = column
        text = f"{self.name}: {message}"
        if line is not None:
            text += f" at {line}:{column}"
        super().__init__(text)

    @property
    def message(self) -> str:
        return self.err.message


class LexError(SlangError):
    name = 'LexError'


class ParseError(SlangError):
    """Structural mismatch in the token stream."""
    name = 'ParseError'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None,
                 expected: Optional[str] = None, found: Optional[str] = None):
        super().__init__(message, line, column)
        self.expected = expected
        self.found = found


class SlangNameError(SlangError):
    name = 'NameError'


class SlangTypeError(SlangError):
    name = 'TypeError'


class SlangIndexError(SlangError):
    name = 'IndexError'


class SlangOverflowError(SlangError):
    name = 'OverflowError'


class RecursionLimitError(SlangError):
    name = 'RecursionLimitError'
