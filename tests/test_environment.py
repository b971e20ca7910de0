import pytest

from lox.environment import Environment
from lox.errors import LoxRuntimeError
from lox.tokens import Token, TokenType


def name(text, line=1):
    return Token(TokenType.IDENTIFIER, text, None, line)


def test_define_then_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get(name('a')) == 1.0


def test_define_shadows_at_same_level():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 'two')
    assert env.get(name('a')) == 'two'


def test_get_walks_outward():
    outer = Environment()
    outer.define('a', 'outer')
    inner = Environment(Environment(outer))
    assert inner.get(name('a')) == 'outer'


def test_inner_definition_does_not_leak():
    outer = Environment()
    outer.define('a', 'outer')
    inner = Environment(outer)
    inner.define('a', 'inner')
    assert inner.get(name('a')) == 'inner'
    assert outer.get(name('a')) == 'outer'


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(outer)
    inner.assign(name('a'), 2.0)
    assert outer.get(name('a')) == 2.0
    assert 'a' not in inner.values


def test_get_undefined_raises():
    env = Environment(Environment())
    with pytest.raises(LoxRuntimeError) as excinfo:
        env.get(name('missing', line=7))
    assert excinfo.value.message == "Undefined variable 'missing'."
    assert excinfo.value.diagnostic.line == 7


def test_assign_never_creates_binding():
    env = Environment()
    with pytest.raises(LoxRuntimeError) as excinfo:
        env.assign(name('ghost'), 1.0)
    assert "Undefined variable 'ghost'." in str(excinfo.value)
    assert 'ghost' not in env.values


def test_nil_binding_is_still_defined():
    env = Environment()
    env.define('a', None)
    assert env.get(name('a')) is None
