"""Tokenizer for the Slang language.

The terminals of the language are declared as a Lark grammar and scanned
with Lark's basic (contextual-free) lexer. Lark tokens are then converted
into Slang `Token` records with one of the kinds NUMBER, STRING, IDENT,
KEYWORD, PUNCT or EOF. Whitespace and `#` line comments are dropped.

The minus sign is always tokenized as a separate PUNCT token; negative
numbers are handled by the parser's unary rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError

KEYWORDS = {'let'}

SLANG_TERMINALS = r"""
    start: _token*
    _token: NUMBER | STRING | NAME | PUNCT

    NUMBER: /[0-9]+/
    STRING: /"[^"]*"/
    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    PUNCT: "[" | "]" | "{" | "}" | "(" | ")" | "," | ";" | "=" | "+" | "-"

    COMMENT: /#[^\n]*/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""

SLANG_LEXER = Lark(SLANG_TERMINALS, parser='lalr', lexer='basic')


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int
    column: int

    def describe(self) -> str:
        """Short human readable form used in parse error messages."""
        if self.type == 'EOF':
            return 'end of input'
        if self.type == 'STRING':
            return f'string "{self.value}"'
        if self.type in ('PUNCT', 'KEYWORD'):
            return repr(self.value)
        return f"{self.type.lower()} {self.value}"


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    tokens: List[Token] = []
    try:
        for tok in SLANG_LEXER.lex(source):
            if tok.type == 'NAME':
                kind = 'KEYWORD' if tok.value in KEYWORDS else 'IDENT'
                tokens.append(Token(kind, tok.value, tok.line, tok.column))
            elif tok.type == 'STRING':
                tokens.append(Token('STRING', tok.value[1:-1], tok.line, tok.column))
            else:
                tokens.append(Token(tok.type, tok.value, tok.line, tok.column))
    except UnexpectedCharacters as e:
        if e.char == '"':
            raise LexError('unterminated string literal', e.line, e.column) from None
        raise LexError(f'unexpected character {e.char!r}', e.line, e.column) from None
    line, column = _end_position(source)
    tokens.append(Token('EOF', '', line, column))
    return tokens


def _end_position(source: str):
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return line, column
