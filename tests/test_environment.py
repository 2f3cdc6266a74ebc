import pytest

from lox.environment import Environment
from lox.errors import UndefinedVariable
from lox.tokens import identifier


def test_define_and_get():
    env = Environment()
    env.define('x', 1.0)
    assert env.get('x') == 1.0
    assert env.get(identifier('x')) == 1.0


def test_redefine_overwrites():
    env = Environment()
    env.define('x', 1.0)
    env.define('x', 'two')
    assert env.get('x') == 'two'


def test_lookup_walks_enclosing_scopes():
    outer = Environment()
    outer.define('x', 1.0)
    inner = Environment(Environment(outer))
    assert inner.get('x') == 1.0
    assert 'x' in inner
    assert 'y' not in inner


def test_inner_definition_shadows_outer():
    outer = Environment()
    outer.define('x', 1.0)
    inner = Environment(outer)
    inner.define('x', 2.0)
    assert inner.get('x') == 2.0
    assert outer.get('x') == 1.0


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define('x', 1.0)
    inner = Environment(outer)
    inner.assign('x', 5.0)
    assert outer.get('x') == 5.0
    assert 'x' not in inner.values


def test_assign_never_creates_binding():
    env = Environment(Environment())
    with pytest.raises(UndefinedVariable) as excinfo:
        env.assign(identifier('ghost', line=4), 1.0)
    assert excinfo.value.diagnostic.line == 4
    assert excinfo.value.message == "Undefined variable 'ghost'."
    assert 'ghost' not in env


def test_get_undefined():
    with pytest.raises(UndefinedVariable) as excinfo:
        Environment().get('nope')
    assert excinfo.value.name == 'nope'
