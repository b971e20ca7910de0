import json
from pathlib import Path

import pytest

from lox.__main__ import EX_DATAERR, EX_NOINPUT, EX_SOFTWARE, main, run_line
from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_run_script(capsys):
    main([str(EXAMPLES / 'program_4.lox')])
    assert capsys.readouterr().out.split() == ['0', '1', '1', '2', '3', '5', '8', '13', '21', '34']


def test_runtime_error_exit_status(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES / 'program_8.lox')])
    assert excinfo.value.code == EX_SOFTWARE
    captured = capsys.readouterr()
    assert captured.out.strip() == '1'
    assert captured.err.strip() == 'Operands must be two numbers or two strings.\n[line 3]'


def test_syntax_error_exit_status(tmp_path, capsys):
    script = tmp_path / 'bad.lox'
    script.write_text('print "ok";\nvar 1 = 2;\n', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == EX_DATAERR
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.strip() == "[line 2] Error at '1': Expect variable name."


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.lox')])
    assert excinfo.value.code == EX_NOINPUT


def test_emit_and_run_ast(tmp_path, capsys):
    script = tmp_path / 'hello.lox'
    script.write_text('var who = "ast"; print "hello " + who;', encoding='utf-8')
    main(['--emit-ast', str(script)])
    out_path = tmp_path / 'hello.lox.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert [node['type'] for node in data] == ['VarStmt', 'PrintStmt']

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out.strip() == 'hello ast'


def test_print_ast(capsys):
    main(['--print-ast', str(EXAMPLES / 'program_1.lox')])
    assert capsys.readouterr().out.strip() == '(print "Hello World!!")'


def test_repl_lines_share_globals(capsys):
    interp = Interpreter()
    run_line('var a = 20;', interp)
    run_line('a + 22', interp)
    run_line('print a;', interp)
    run_line('b;', interp)
    run_line('print ;', interp)
    captured = capsys.readouterr()
    assert captured.out.split() == ['42', '20']
    assert captured.err.splitlines() == [
        "Undefined variable 'b'.",
        '[line 1]',
        "[line 1] Error at ';': Expect expression.",
    ]


def test_repl_session(monkeypatch, capsys):
    lines = iter(['fun sq(x) { return x * x; }', 'sq(9)'])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr('builtins.input', fake_input)
    main([])
    assert capsys.readouterr().out.split() == ['81']
