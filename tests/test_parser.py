import pytest

from lox.ast import (
    Assign, Binary, Block, Call, Expression, Function, Grouping, If, Literal,
    Logical, Print, Return, Unary, Var, Variable, While,
)
from lox.errors import LoxError, ParseError
from lox.parser import parse_expression, parse_program
from lox.tokens import TokenType, identifier, symbol
from lox.types import NIL

T = TokenType


def test_precedence_with_grouping():
    assert parse_expression('3 * (4 + 2)') == Binary(
        Literal(3.0),
        symbol(T.STAR),
        Grouping(Binary(Literal(4.0), symbol(T.PLUS), Literal(2.0))),
    )


def test_factor_binds_tighter_than_term():
    assert parse_expression('1 + 2 * 3') == Binary(
        Literal(1.0),
        symbol(T.PLUS),
        Binary(Literal(2.0), symbol(T.STAR), Literal(3.0)),
    )


def test_binary_operators_are_left_associative():
    assert parse_expression('8 - 4 - 2') == Binary(
        Binary(Literal(8.0), symbol(T.MINUS), Literal(4.0)),
        symbol(T.MINUS),
        Literal(2.0),
    )


def test_assignment_is_right_associative():
    assert parse_expression('a = b = 1') == Assign(
        identifier('a'), Assign(identifier('b'), Literal(1.0)),
    )


def test_logical_operators():
    assert parse_expression('a or b and !c') == Logical(
        Variable(identifier('a')),
        symbol(T.OR),
        Logical(
            Variable(identifier('b')),
            symbol(T.AND),
            Unary(symbol(T.BANG), Variable(identifier('c'))),
        ),
    )


def test_chained_calls():
    assert parse_expression('f(1)(2, 3)') == Call(
        Call(Variable(identifier('f')), symbol(T.RIGHT_PAREN), (Literal(1.0),)),
        symbol(T.RIGHT_PAREN),
        (Literal(2.0), Literal(3.0)),
    )


def test_literals():
    assert parse_expression('nil') == Literal(NIL)
    assert parse_expression('true') == Literal(True)
    assert parse_expression('"s"') == Literal('s')


def test_leftover_tokens_in_expression():
    with pytest.raises(ParseError) as excinfo:
        parse_expression('1 2')
    assert excinfo.value.diagnostic.message == 'Expect end of expression.'


def test_invalid_assignment_target_in_expression():
    with pytest.raises(ParseError) as excinfo:
        parse_expression('1 = 2')
    assert excinfo.value.diagnostic.message == 'Invalid assignment target.'
    assert excinfo.value.token == symbol(T.EQUAL)


def test_scan_error_in_expression():
    with pytest.raises(LoxError):
        parse_expression('1 @ 2')


def test_statements():
    source = '''
    var x = 1;
    fun f(a, b) { return a; }
    if x < 2 print "small"; else { print "big"; }
    while x > 0 x = x - 1;
    '''
    statements, diagnostics = parse_program(source)
    assert diagnostics == []
    assert [type(s) for s in statements] == [Var, Function, If, While]
    var, fun, if_stmt, while_stmt = statements
    assert var == Var('x', Literal(1.0))
    assert fun.name == identifier('f')
    assert fun.params == (identifier('a'), identifier('b'))
    assert fun.body == (Return(symbol(T.RETURN), Variable(identifier('a'))),)
    assert isinstance(if_stmt.then_branch, Print)
    assert isinstance(if_stmt.else_branch, Block)
    assert while_stmt.body == Expression(Assign(
        identifier('x'),
        Binary(Variable(identifier('x')), symbol(T.MINUS), Literal(1.0)),
    ))


def test_dangling_else_binds_to_nearest_if():
    statements, _ = parse_program('if a if b print 1; else print 2;')
    outer = statements[0]
    assert outer.else_branch is None
    assert outer.then_branch.else_branch == Print(Literal(2.0))


def test_recovers_from_two_independent_errors():
    source = 'var a = ;\nprint 1;\nprint (2;\nprint 3;'
    statements, diagnostics = parse_program(source)
    assert [str(d) for d in diagnostics] == [
        "[line 1] Error at ';': Expect expression.",
        "[line 3] Error at ';': Expect ')' after expression.",
    ]
    assert statements == [Print(Literal(1.0)), Print(Literal(3.0))]


def test_invalid_assignment_target_does_not_stop_parsing():
    statements, diagnostics = parse_program('1 + 2 = 3;\nprint 4;')
    assert len(diagnostics) == 1
    assert diagnostics[0].message == 'Invalid assignment target.'
    assert diagnostics[0].where == '='
    assert len(statements) == 2


def test_var_requires_initializer():
    _, diagnostics = parse_program('var x;')
    assert [d.message for d in diagnostics] == ["Expect '=' after variable name."]


def test_error_at_end():
    _, diagnostics = parse_program('print 1')
    assert str(diagnostics[0]) == "[line 1] Error at end: Expect ';' after value."


def test_unclosed_block():
    _, diagnostics = parse_program('{\nprint 1;\n')
    assert diagnostics[-1].message == "Expect '}' after block."
    assert diagnostics[-1].where == 'end'


def test_scan_errors_come_first():
    _, diagnostics = parse_program('print @;')
    assert [d.kind for d in diagnostics] == ['scan', 'parse']
