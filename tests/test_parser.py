import pytest

from slang.ast import (
    NumberLiteral, StringLiteral, ListLiteral, Block, Identifier,
    BinaryOp, UnaryOp, Index, Call, LetStmt, ExprStmt,
)
from slang.errors import ParseError, RecursionLimitError
from slang.lexer import tokenize
from slang.parser import Parser, parse_program


def tail_of(source):
    program = parse_program(source)
    assert program.statements == []
    return program.tail


def test_addition_is_left_associative():
    assert tail_of('1 - 2 - 3') == BinaryOp(
        '-', BinaryOp('-', NumberLiteral(1), NumberLiteral(2)), NumberLiteral(3))


def test_parentheses_group_without_extra_node():
    assert tail_of('(5 + 3)') == tail_of('5 + 3')
    assert tail_of('1 - (2 - 3)') == BinaryOp(
        '-', NumberLiteral(1), BinaryOp('-', NumberLiteral(2), NumberLiteral(3)))


def test_negative_literal_is_folded():
    assert tail_of('-3') == NumberLiteral(-3)
    assert tail_of('--3') == NumberLiteral(3)
    assert tail_of('-x') == UnaryOp('-', Identifier('x'))


def test_chained_indexing():
    assert tail_of('a[0][1]') == Index(Index(Identifier('a'), NumberLiteral(0)), NumberLiteral(1))


def test_index_binds_tighter_than_minus():
    assert tail_of('-a[0]') == UnaryOp('-', Index(Identifier('a'), NumberLiteral(0)))


def test_nested_list_with_block():
    assert tail_of('[1, [2, "s"], { let y = 5; y }, []]') == ListLiteral([
        NumberLiteral(1),
        ListLiteral([NumberLiteral(2), StringLiteral('s')]),
        Block([LetStmt('y', NumberLiteral(5))], Identifier('y')),
        ListLiteral([]),
    ])


def test_statements_and_tail():
    program = parse_program('let x = 1; print(x, "a"); x')
    assert program == Block(
        [
            LetStmt('x', NumberLiteral(1)),
            ExprStmt(Call('print', [Identifier('x'), StringLiteral('a')])),
        ],
        Identifier('x'),
    )


def test_trailing_semicolon_means_no_tail():
    program = parse_program('print();')
    assert program.tail is None
    assert program.statements == [ExprStmt(Call('print', []))]


def test_empty_statements_are_skipped():
    assert parse_program(';;1;;') == Block([ExprStmt(NumberLiteral(1))])


def test_empty_program_and_block():
    assert parse_program('') == Block([])
    assert tail_of('{}') == Block([])


def test_node_positions():
    program = parse_program('let x = 1;\n  x[0]')
    assert (program.statements[0].line, program.statements[0].column) == (1, 1)
    tail = program.tail
    assert isinstance(tail, Index)
    assert (tail.target.line, tail.target.column) == (2, 3)
    assert (tail.line, tail.column) == (2, 4)


@pytest.mark.parametrize('source, expected, found', [
    ('let x = 1 let y = 2;', "';'", "'let'"),
    ('1 2', "';' or end of input", 'number 2'),
    ('[1, 2', "',' or ']'", 'end of input'),
    ('(1', "')'", 'end of input'),
    ('{ 1', "';' or '}'", 'end of input'),
    (')', 'expression', "')'"),
    ('let = 5;', 'identifier', "'='"),
    ('let x 5;', "'='", 'number 5'),
    ('1 +', 'expression', 'end of input'),
    ('[let x = 1]', 'expression', "'let'"),
    ('print(1;', "',' or ')'", "';'"),
])
def test_parse_errors(source, expected, found):
    with pytest.raises(ParseError) as excinfo:
        parse_program(source)
    assert excinfo.value.expected == expected
    assert excinfo.value.found == found
    assert excinfo.value.err.name == 'ParseError'


def test_parse_error_position():
    with pytest.raises(ParseError) as excinfo:
        parse_program('let a = 1;\nlet b = [1, 2;')
    assert (excinfo.value.line, excinfo.value.column) == (2, 14)


def test_nesting_limit():
    source = '[' * 150 + ']' * 150
    with pytest.raises(RecursionLimitError):
        parse_program(source)
    parse_program('[' * 50 + ']' * 50)


def test_custom_nesting_limit():
    tokens = tokenize('{ { { 1 } } }')
    with pytest.raises(RecursionLimitError):
        Parser(tokens, max_depth=2).parse_program()
    assert Parser(tokens, max_depth=4).parse_program().tail is not None


def test_token_stream_must_end_with_eof():
    with pytest.raises(ValueError):
        Parser(tokenize('1')[:-1])
