from pathlib import Path

from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_13_parse_errors_block_execution(capsys):
    source = (EXAMPLES / 'program_13.lox').read_text(encoding='utf-8')
    interp = Interpreter()
    diagnostics = interp.run(source)
    out = capsys.readouterr().out.strip()
    assert out == ''
    assert [d.kind for d in diagnostics] == ['parse', 'parse']
    assert [d.line for d in diagnostics] == [3, 4]
    assert str(diagnostics[0]) == "[line 3] Error at ';': Expect expression."
