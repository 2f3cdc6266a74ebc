from pathlib import Path

from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_nested_scopes(capsys):
    source = (EXAMPLES / 'program_4.lox').read_text(encoding='utf-8')
    interp = Interpreter()
    assert interp.run(source) == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'inner a', 'outer b', 'global c',
        'outer a', 'outer b', 'global c',
        'global a', 'global b', 'global c',
    ]
