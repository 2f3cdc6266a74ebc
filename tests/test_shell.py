import io

from lox.interpreter import Interpreter
from lox.reporter import Reporter
from lox.shell import Shell, open_groups


def make_shell():
    out = io.StringIO()
    err = io.StringIO()
    shell = Shell(Interpreter(out=out), Reporter(stream=err), stdout=io.StringIO())
    return shell, out, err


def test_open_groups():
    assert open_groups('print 1;') == 0
    assert open_groups('fun f(a) {') == 1
    assert open_groups('f((1') == 2
    assert open_groups('"{" + "("') == 0


def test_declarations_persist_between_entries():
    shell, out, _ = make_shell()
    shell.onecmd('var a = 40;')
    shell.onecmd('print a + 2;')
    assert out.getvalue() == '42\n'


def test_open_brace_continues_entry():
    shell, out, _ = make_shell()
    shell.onecmd('fun greet(name) {')
    assert shell.prompt == Shell.secondary_prompt
    shell.onecmd('print "hi " + name;')
    shell.onecmd('}')
    assert shell.prompt == Shell._tmp_prompt
    shell.onecmd('greet("lox");')
    assert out.getvalue() == 'hi lox\n'


def test_errors_are_reported_and_session_continues():
    shell, out, err = make_shell()
    shell.onecmd('print missing;')
    assert "Undefined variable 'missing'." in err.getvalue()
    shell.onecmd('print "still here";')
    assert out.getvalue() == 'still here\n'


def test_exit():
    shell, _, _ = make_shell()
    assert shell.onecmd('exit')
    assert shell.onecmd('EOF')


def test_exit_with_argument_is_lox_source():
    shell, out, err = make_shell()
    assert not shell.onecmd('exit = 1;')
    assert "Undefined variable 'exit'." in err.getvalue()
    assert out.getvalue() == ''


def test_empty_line_does_nothing():
    shell, out, _ = make_shell()
    shell.onecmd('print 1;')
    assert not shell.onecmd('')
    assert out.getvalue() == '1\n'
