"""Tree-walking interpreter for the Slang language.

The interpreter evaluates the `Block` produced by the parser against a
chain of `Environment` scopes. Program-level bindings live in the
interpreter's own global scope, so separate `Interpreter` instances never
share state. Every nested evaluation goes through `evaluate`, which keeps
a depth counter and fails with `RecursionLimitError` once `max_depth` is
exceeded instead of growing the host stack without bound.

`run_program` and `run` are convenience entry points that lex, parse and
evaluate a source string in one call.
"""

from __future__ import annotations

import sys
from typing import Dict, List, Optional, TextIO

from .ast import (
    Node, NumberLiteral, StringLiteral, ListLiteral, Block, Identifier,
    BinaryOp, UnaryOp, Index, Call, LetStmt, ExprStmt,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    SlangError, SlangNameError, SlangTypeError, SlangIndexError,
    SlangOverflowError, RecursionLimitError,
)
from .parser import DEFAULT_MAX_DEPTH, parse_program
from .types import (
    Value, NumberVal, StrVal, ListVal, UnitVal,
    in_int_range, to_display, type_name,
)


class Interpreter:
    """Core interpreter that executes a Slang AST."""
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, out: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: Optional[str] = None):
        self.global_env = Environment()
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.max_depth = max_depth
        self.out = out
        self.depth = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None
        self.load_builtins()

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def load_builtins(self):
        def std_print(args: List[Value]) -> Value:
            line = ' '.join(to_display(a) for a in args)
            self.debug(f"print {line!r}", 2)
            # out=None writes to whatever sys.stdout is at call time
            print(line, file=self.out)
            return UnitVal()

        self.builtins['print'] = BuiltinFunction('print', None, std_print)

    # Public API
    def run(self, program: Block, env: Optional[Environment] = None) -> Value:
        """Execute a parsed program and return the value of its final expression."""
        if env is None:
            env = self.global_env
        self.debug(f"run: {len(program.statements)} statement(s)")
        try:
            result = self.execute_block(program, env)
            self.debug(f"run finished: {result!r}")
            return result
        except RecursionError as e:
            self.debug('error: host recursion limit reached')
            raise RecursionLimitError('host recursion limit reached') from e
        except SlangError as e:
            self.debug(f"error: {e}")
            raise
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, block: Block, env: Environment) -> Value:
        for stmt in block.statements:
            self.execute(stmt, env)
        if block.tail is None:
            return UnitVal()
        return self.evaluate(block.tail, env)

    def execute(self, node: Node, env: Environment):
        if isinstance(node, LetStmt):
            value = self.evaluate(node.expr, env)
            env.define(node.name, value)
            self.debug(f"let {node.name} = {value!r}", 2)
            return
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        raise TypeError(f"unsupported statement {type(node).__name__}")

    def evaluate(self, node: Node, env: Environment) -> Value:
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise RecursionLimitError(f"evaluation nesting exceeds {self.max_depth} levels",
                                          node.line, node.column)
            if self.debug_level >= 3:
                self.debug(f"eval {type(node).__name__} at {node.line}:{node.column}", 3)
            return self.evaluate_node(node, env)
        finally:
            self.depth -= 1

    def evaluate_node(self, node: Node, env: Environment) -> Value:
        if isinstance(node, NumberLiteral):
            return self.make_number(node.value, node)
        if isinstance(node, StringLiteral):
            return StrVal(node.value)
        if isinstance(node, Identifier):
            return env.get(node.name, node.line, node.column)
        if isinstance(node, ListLiteral):
            items = [self.evaluate(el, env) for el in node.elements]
            result = ListVal(items)
            if result.depth > self.max_depth:
                raise RecursionLimitError(f"list nesting exceeds {self.max_depth} levels",
                                          node.line, node.column)
            return result
        if isinstance(node, Block):
            # the child scope is dropped when this call returns or raises
            return self.execute_block(node, Environment(parent=env))
        if isinstance(node, BinaryOp):
            # walk the left spine iteratively so that a long `a + b + c ...`
            # does not count as deep nesting
            chain: List[BinaryOp] = []
            inner: Node = node
            while isinstance(inner, BinaryOp):
                chain.append(inner)
                inner = inner.left
            result = self.evaluate(inner, env)
            for op_node in reversed(chain):
                right = self.evaluate(op_node.right, env)
                result = self.apply_binary_op(op_node, result, right)
            return result
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op != '-':
                raise TypeError(f"unsupported unary operator {node.op}")
            if not isinstance(operand, NumberVal):
                raise SlangTypeError(f"unary - expects Number, got {type_name(operand)}",
                                     node.line, node.column)
            return self.make_number(-operand.value, node)
        if isinstance(node, Index):
            return self.index(node, env)
        if isinstance(node, Call):
            return self.call_function(node, env)
        raise TypeError(f"unsupported expression {type(node).__name__}")

    def make_number(self, n: int, node: Node) -> NumberVal:
        if not in_int_range(n):
            raise SlangOverflowError(f"integer {n} does not fit in 64 bits", node.line, node.column)
        return NumberVal(n)

    def apply_binary_op(self, node: BinaryOp, a: Value, b: Value) -> Value:
        if not isinstance(a, NumberVal) or not isinstance(b, NumberVal):
            raise SlangTypeError(
                f"unsupported operand types for {node.op}: {type_name(a)} and {type_name(b)}",
                node.line, node.column)
        if node.op == '+':
            return self.make_number(a.value + b.value, node)
        if node.op == '-':
            return self.make_number(a.value - b.value, node)
        raise TypeError(f"unsupported binary operator {node.op}")

    def index(self, node: Index, env: Environment) -> Value:
        target = self.evaluate(node.target, env)
        if not isinstance(target, ListVal):
            raise SlangTypeError(f"cannot index type {type_name(target)}", node.line, node.column)
        idx = self.evaluate(node.index, env)
        if not isinstance(idx, NumberVal):
            raise SlangTypeError(f"list index must be Number, got {type_name(idx)}",
                                 node.line, node.column)
        if idx.value < 0 or idx.value >= len(target):
            raise SlangIndexError(f"list index {idx.value} out of range for length {len(target)}",
                                  node.line, node.column)
        return target.items[idx.value]

    def call_function(self, node: Call, env: Environment) -> Value:
        func = self.builtins.get(node.name)
        if func is None:
            raise SlangNameError(f"unknown function {node.name}", node.line, node.column)
        args = [self.evaluate(arg, env) for arg in node.args]
        if func.arity is not None and len(args) != func.arity:
            raise SlangTypeError(f"{func.name} expects {func.arity} argument(s), got {len(args)}",
                                 node.line, node.column)
        return func.fn(args)


def run_program(source: str, out: Optional[TextIO] = None, max_depth: int = DEFAULT_MAX_DEPTH,
                debug_level: int = 0, debug_file: Optional[str] = None) -> Value:
    """Convenience function to parse and run a Slang program from source string."""
    try:
        ast_program = parse_program(source, max_depth=max_depth)
    except RecursionError as e:
        raise RecursionLimitError('host recursion limit reached while parsing') from e
    interpreter = Interpreter(max_depth=max_depth, out=out,
                              debug_level=debug_level, debug_file=debug_file)
    return interpreter.run(ast_program)


def run(source: str, out: Optional[TextIO] = None, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    """Run a Slang program, writing `print` output to `out` (stdout by default).

    Raises a `SlangError` subclass if lexing, parsing or evaluation fails.
    Output written before the failure is kept.
    """
    run_program(source, out=out, max_depth=max_depth)
