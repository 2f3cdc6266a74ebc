from pathlib import Path

import pytest

from lox.grammar import parse_with_grammar
from lox.interpreter import Interpreter
from lox.parser import parse_program
from lox.types import Diagnostic

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'

VALID_PROGRAMS = [p for p in sorted(EXAMPLES.glob('*.lox')) if p.name != 'program_13.lox']


@pytest.mark.parametrize('path', VALID_PROGRAMS, ids=lambda p: p.stem)
def test_front_ends_build_the_same_ast(path):
    source = path.read_text(encoding='utf-8')
    expected, diagnostics = parse_program(source)
    assert diagnostics == []
    statements, diagnostics = parse_with_grammar(source)
    assert diagnostics == []
    assert statements == expected


@pytest.mark.parametrize('source', [
    'print 3 * (4 + 2);',
    'print -(1 + 2) * 2 - 3 / 4;',
    'a = b = c or d and !e;',
    'print f(1)(2, 3) == nil;',
    'if a if b print 1; else print 2;',
    'while x >= 1 { x = x - 1; }',
    'fun f() { return "s"; }',
    'var t = true != false;',
])
def test_expressions_and_statements_match(source):
    expected, _ = parse_program(source)
    statements, diagnostics = parse_with_grammar(source)
    assert diagnostics == []
    assert statements == expected


def test_keywords_are_not_identifiers():
    statements, diagnostics = parse_with_grammar('var orchid = 1; print orchid or nil;')
    assert diagnostics == []
    assert statements == parse_program('var orchid = 1; print orchid or nil;')[0]


def test_grammar_ast_runs(capsys):
    statements, _ = parse_with_grammar('fun sq(n) { return n * n; }\nprint sq(7);')
    assert Interpreter().run_statements(statements) == []
    assert capsys.readouterr().out.strip() == '49'


def test_syntax_error_stops_at_first():
    statements, diagnostics = parse_with_grammar('print 1;\nvar = 2;\nprint ;')
    assert statements == []
    assert diagnostics == [Diagnostic('parse', 2, 'Unexpected token.', '=')]


def test_unexpected_end_of_input():
    _, diagnostics = parse_with_grammar('print 1')
    assert len(diagnostics) == 1
    assert diagnostics[0].where == 'end'
    assert diagnostics[0].message == 'Unexpected end of input.'


def test_unexpected_character():
    _, diagnostics = parse_with_grammar('print @;')
    assert diagnostics == [Diagnostic('scan', 1, 'Unexpected character: @')]


def test_unterminated_string():
    _, diagnostics = parse_with_grammar('print 1;\nprint "oops;')
    assert diagnostics == [Diagnostic('scan', 2, 'Unterminated string.')]
