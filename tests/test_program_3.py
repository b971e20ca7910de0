from lox.interpreter import Interpreter
from lox.parser import parse_program


def test_program_3_counter_closures(capsys, example_source):
    result = parse_program(example_source('program_3.lox'))
    interp = Interpreter()
    interp.interpret(result.statements)
    out = capsys.readouterr().out.strip().split('\n')
    # each makeCounter() call gets its own captured `i`
    assert out == ['1', '2', '3', '1', '4']
