from pathlib import Path

from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_logical_operands(capsys):
    source = (EXAMPLES / 'program_8.lox').read_text(encoding='utf-8')
    interp = Interpreter()
    assert interp.run(source) == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    # The right operand of the last 'or' is never evaluated
    assert out_lines == ['default', 'zero is falsy', 'b', 'false', '1']
