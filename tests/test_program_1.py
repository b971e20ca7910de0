from lox.interpreter import Interpreter
from lox.parser import parse_program


def test_program_1(capsys, example_source):
    result = parse_program(example_source('program_1.lox'))
    assert result.ok
    interp = Interpreter()
    assert interp.interpret(result.statements) is None
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
