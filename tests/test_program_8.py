from lox.interpreter import run_program


def test_program_8_runtime_error_aborts_rest(capsys, example_source):
    diagnostics = run_program(example_source('program_8.lox'))
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['1']
    assert len(diagnostics) == 1
    assert diagnostics[0].kind == 'RuntimeError'
    assert diagnostics[0].line == 3
    assert diagnostics[0].message == 'Operands must be two numbers or two strings.'
