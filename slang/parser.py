"""Recursive-descent parser for the Slang language.

The whole program is parsed as an implicit block: a sequence of
statements, each terminated by `;`, optionally followed by one bare
expression that becomes the block's value. Grammar, lowest precedence
first:

    statements := ( ';' | 'let' IDENT '=' expr ';' | expr ';' )* expr?
    expr       := unary (('+' | '-') unary)*
    unary      := '-' unary | postfix
    postfix    := primary ('[' expr ']')*
    primary    := NUMBER | STRING | IDENT | IDENT '(' args ')'
                | '[' args ']' | '{' statements '}' | '(' expr ')'

`parse_program` is the public entry point.
"""

from __future__ import annotations

from typing import List, Optional, Union

from .ast import (
    Node, NumberLiteral, StringLiteral, ListLiteral, Block, Identifier,
    BinaryOp, UnaryOp, Index, Call, LetStmt, ExprStmt,
)
from .errors import ParseError, RecursionLimitError
from .lexer import Token, tokenize

DEFAULT_MAX_DEPTH = 100


class Parser:
    def __init__(self, tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        if not tokens or tokens[-1].type != 'EOF':
            raise ValueError('token stream must end with an EOF token')
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.depth = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def match(self, expected: Union[str, List[str]]) -> bool:
        """Check the current token against token kinds or punctuation."""
        token = self.peek()
        if isinstance(expected, list):
            return any(_token_is(token, e) for e in expected)
        return _token_is(token, expected)

    def consume(self, expected: Union[str, List[str]]) -> Token:
        if not self.match(expected):
            if isinstance(expected, list):
                self.error(' or '.join(_describe_expected(e) for e in expected))
            self.error(_describe_expected(expected))
        token = self.peek()
        self.pos += 1
        return token

    def error(self, expected: str, token: Optional[Token] = None):
        token = token or self.peek()
        found = token.describe()
        raise ParseError(f"expected {expected}, found {found}", token.line, token.column,
                         expected=expected, found=found)

    def enter(self, token: Token):
        self.depth += 1
        if self.depth > self.max_depth:
            raise RecursionLimitError(f"expression nesting exceeds {self.max_depth} levels",
                                      token.line, token.column)

    def leave(self):
        self.depth -= 1

    # Statements

    def parse_program(self) -> Block:
        first = self.peek()
        statements, tail = self.parse_statements('EOF')
        self.consume('EOF')
        return Block(statements, tail, line=first.line, column=first.column)

    def parse_block(self) -> Block:
        start = self.consume('{')
        statements, tail = self.parse_statements('}')
        self.consume('}')
        return Block(statements, tail, line=start.line, column=start.column)

    def parse_statements(self, terminator: str):
        """Parse statements up to (not including) `terminator`.

        Returns the statement list and the optional trailing expression.
        """
        statements: List[Node] = []
        while not self.match(terminator):
            if self.match(';'):
                self.consume(';')
                continue
            if self.match('KEYWORD') and self.peek().value == 'let':
                statements.append(self.parse_let_stmt())
                self.consume(';')
                continue
            start = self.peek()
            expr = self.parse_expression()
            if self.match(';'):
                self.consume(';')
                statements.append(ExprStmt(expr, line=start.line, column=start.column))
                continue
            if self.match(terminator):
                return statements, expr
            self.error("';' or " + _describe_expected(terminator))
        return statements, None

    def parse_let_stmt(self) -> LetStmt:
        start = self.consume('KEYWORD')
        name = self.consume('IDENT')
        self.consume('=')
        expr = self.parse_expression()
        return LetStmt(name.value, expr, line=start.line, column=start.column)

    # Expressions

    def parse_expression(self) -> Node:
        self.enter(self.peek())
        try:
            node = self.parse_unary()
            while self.match(['+', '-']):
                op_token = self.consume(['+', '-'])
                right = self.parse_unary()
                node = BinaryOp(op_token.value, node, right, line=node.line, column=node.column)
            return node
        finally:
            self.leave()

    def parse_unary(self) -> Node:
        if self.match('-'):
            op_token = self.consume('-')
            self.enter(op_token)
            try:
                operand = self.parse_unary()
            finally:
                self.leave()
            # fold negative literals so that `-3` is a single number
            if isinstance(operand, NumberLiteral):
                return NumberLiteral(-operand.value, line=op_token.line, column=op_token.column)
            return UnaryOp('-', operand, line=op_token.line, column=op_token.column)
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        node = self.parse_primary()
        while self.match('['):
            bracket = self.consume('[')
            index_expr = self.parse_expression()
            self.consume(']')
            node = Index(node, index_expr, line=bracket.line, column=bracket.column)
        return node

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == 'NUMBER':
            self.consume('NUMBER')
            return NumberLiteral(int(token.value), line=token.line, column=token.column)
        if token.type == 'STRING':
            self.consume('STRING')
            return StringLiteral(token.value, line=token.line, column=token.column)
        if token.type == 'IDENT':
            self.consume('IDENT')
            if self.match('('):
                args = self.parse_sequence('(', ')')
                return Call(token.value, args, line=token.line, column=token.column)
            return Identifier(token.value, line=token.line, column=token.column)
        if self.match('['):
            elements = self.parse_sequence('[', ']')
            return ListLiteral(elements, line=token.line, column=token.column)
        if self.match('{'):
            return self.parse_block()
        if self.match('('):
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')')
            return expr
        self.error('expression', token)

    def parse_sequence(self, opening: str, closing: str) -> List[Node]:
        """Parse a comma separated expression list between delimiters."""
        self.consume(opening)
        items: List[Node] = []
        if not self.match(closing):
            items.append(self.parse_expression())
            while self.match(','):
                self.consume(',')
                items.append(self.parse_expression())
        if not self.match(closing):
            self.error(f"',' or {closing!r}")
        self.consume(closing)
        return items


TOKEN_KINDS = {'NUMBER', 'STRING', 'IDENT', 'KEYWORD', 'PUNCT', 'EOF'}

_KIND_NAMES = {
    'NUMBER': 'number',
    'STRING': 'string',
    'IDENT': 'identifier',
    'KEYWORD': 'keyword',
    'PUNCT': 'punctuation',
    'EOF': 'end of input',
}


def _token_is(token: Token, expected: str) -> bool:
    if expected in TOKEN_KINDS:
        return token.type == expected
    return token.type == 'PUNCT' and token.value == expected


def _describe_expected(expected: str) -> str:
    return _KIND_NAMES.get(expected, repr(expected))


def parse_program(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Block:
    """Parse Slang source code into the program's top-level Block."""
    tokens = tokenize(source)
    return Parser(tokens, max_depth=max_depth).parse_program()
