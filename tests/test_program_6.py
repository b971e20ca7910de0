from lox.interpreter import Interpreter
from lox.parser import parse_program


def test_program_6_countdown(capsys, example_source):
    result = parse_program(example_source('program_6.lox'))
    interp = Interpreter()
    interp.interpret(result.statements)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['t=more', 't=more', 't=more', 't=more', 't=last', 'liftoff!']
