"""Abstract Syntax Tree (AST) definitions for the Slang language.

The parser produces a `Block` for the whole program. Expression nodes and
the two statement nodes (`LetStmt`, `ExprStmt`) are plain dataclasses; a
tree is built once per parse and never modified afterwards.

Every node records the line and column of its first token. Positions do
not take part in equality, so trees built by hand in tests compare equal
to parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    line: int = field(default=0, kw_only=True, compare=False, repr=False)
    column: int = field(default=0, kw_only=True, compare=False, repr=False)


@dataclass
class NumberLiteral(Node):
    value: int


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class ListLiteral(Node):
    elements: List[Node]


@dataclass
class Block(Node):
    statements: List[Node]
    tail: Optional[Node] = None  # value of the block, Unit when absent


@dataclass
class Identifier(Node):
    name: str


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class Index(Node):
    target: Node
    index: Node


@dataclass
class Call(Node):
    name: str
    args: List[Node]


@dataclass
class LetStmt(Node):
    name: str
    expr: Node


@dataclass
class ExprStmt(Node):
    expr: Node
