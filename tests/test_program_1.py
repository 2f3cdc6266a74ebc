from pathlib import Path

from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_hello(capsys):
    source = (EXAMPLES / 'program_1.lox').read_text(encoding='utf-8')
    interp = Interpreter()
    assert interp.run(source) == []
    out = capsys.readouterr().out.strip()
    assert out == 'Hello, Lox!'
