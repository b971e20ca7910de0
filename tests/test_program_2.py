from lox.interpreter import Interpreter
from lox.parser import parse_program


def test_program_2_block_shadowing(capsys, example_source):
    result = parse_program(example_source('program_2.lox'))
    interp = Interpreter()
    interp.interpret(result.statements)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == [
        'inner a', 'outer b', 'global c',
        'outer a', 'outer b', 'global c',
        'global a', 'global b', 'global c',
    ]
