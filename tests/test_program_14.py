from pathlib import Path

from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_14_arity(capsys):
    source = (EXAMPLES / 'program_14.lox').read_text(encoding='utf-8')
    interp = Interpreter()
    diagnostics = interp.run(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['3', 'concat']
    assert len(diagnostics) == 1
    assert diagnostics[0].message == 'Expected 2 arguments but got 1.'
    assert diagnostics[0].line == 6
