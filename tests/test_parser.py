import pytest

from lox.ast import Assign, Block, ExprStmt, FunctionStmt, Literal, VarStmt, WhileStmt
from lox.ast_printer import AstPrinter
from lox.parser import Parser, parse, parse_program
from lox.scanner import scan


def printed(source):
    result = parse_program(source)
    assert result.diagnostics == []
    printer = AstPrinter()
    return [printer.print(stmt) for stmt in result.statements]


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3;', '(; (+ 1 (* 2 3)))'),
    ('(1 + 2) * 3;', '(; (* (group (+ 1 2)) 3))'),
    ('1 - 2 - 3;', '(; (- (- 1 2) 3))'),
    ('-!x;', '(; (- (! x)))'),
    ('a == b != c;', '(; (!= (== a b) c))'),
    ('1 < 2 == 3 >= 4;', '(; (== (< 1 2) (>= 3 4)))'),
    ('a or b and c;', '(; (or a (and b c)))'),
    ('a = b = 3;', '(; (= a (= b 3)))'),
    ('f(1)(2, "s");', '(; (call (call f 1) 2 "s"))'),
    ('print nil;', '(print nil)'),
    ('print true;', '(print true)'),
])
def test_expression_precedence(source, expected):
    assert printed(source) == [expected]


def test_statements():
    assert printed('var a; var b = 2; { print a; }') == [
        '(var a)',
        '(var b = 2)',
        '(block (print a))',
    ]
    assert printed('fun f(x, y) { return x; }') == ['(fun f (x y) (return x))']
    assert printed('fun g() { return; }') == ['(fun g () (return))']


def test_dangling_else_binds_to_nearest_if():
    assert printed('if (a) if (b) print 1; else print 2;') == [
        '(if a (if-else b (print 1) (print 2)))',
    ]


def test_for_desugars_to_while():
    statements = parse_program('for (var i = 0; i < 3; i = i + 1) print i;').statements
    assert len(statements) == 1
    outer = statements[0]
    assert isinstance(outer, Block)
    init, loop = outer.statements
    assert isinstance(init, VarStmt)
    assert isinstance(loop, WhileStmt)
    assert isinstance(loop.body, Block)
    assert isinstance(loop.body.statements[1], ExprStmt)
    assert isinstance(loop.body.statements[1].expression, Assign)


def test_for_with_no_clauses_loops_on_true():
    (loop,) = parse_program('for (;;) print 1;').statements
    assert isinstance(loop, WhileStmt)
    assert loop.condition == Literal(True)
    assert AstPrinter().print(loop) == '(while true (print 1))'


def test_invalid_assignment_target_is_reported_but_parse_continues():
    result = parse_program('1 + 2 = 3; print 4;')
    assert [d.message for d in result.diagnostics] == ['Invalid assignment target.']
    assert result.diagnostics[0].where == "at '='"
    # the rest of the program still parses
    assert len(result.statements) == 2


def test_synchronize_recovers_at_statement_boundaries():
    result = parse_program('var = 1;\nprint 2;\nprint (3;\nvar ok = 4;')
    assert [(d.line, d.message) for d in result.diagnostics] == [
        (1, 'Expect variable name.'),
        (3, "Expect ')' after expression."),
    ]
    assert printed_statements(result.statements) == ['(print 2)', '(var ok = 4)']


def test_errors_inside_blocks_keep_collecting():
    result = parse_program('fun f() { print ; print 1; }\nprint );')
    assert [d.message for d in result.diagnostics] == ['Expect expression.', 'Expect expression.']
    assert printed_statements(result.statements) == ['(fun f () (print 1))']


def test_error_at_end():
    result = parse_program('print 1')
    assert len(result.diagnostics) == 1
    assert str(result.diagnostics[0]) == "[line 1] Error at end: Expect ';' after value."


def test_return_outside_function():
    result = parse_program('return 1;')
    assert [d.message for d in result.diagnostics] == ["Can't return from top-level code."]


def test_too_many_arguments_and_parameters():
    args = ', '.join(str(i) for i in range(256))
    result = parse_program(f'f({args});')
    assert [d.message for d in result.diagnostics] == ["Can't have more than 255 arguments."]
    assert len(result.statements) == 1

    params = ', '.join(f'p{i}' for i in range(256))
    result = parse_program(f'fun g({params}) {{}}')
    assert [d.message for d in result.diagnostics] == ["Can't have more than 255 parameters."]
    assert isinstance(result.statements[0], FunctionStmt)
    assert len(result.statements[0].params) == 256


def test_scan_errors_come_first():
    result = parse_program('print @;')
    assert [d.kind for d in result.diagnostics] == ['ScanError', 'ParseError']


def test_parsing_is_deterministic():
    tokens, _ = scan('fun f(a) { if (a > 1) return a * f(a - 1); return 1; } print f(5);')
    first, _ = parse(tokens)
    second, _ = parse(tokens)
    assert first == second
    assert first is not second
    assert printed_statements(first) == printed_statements(second)


def test_literals_of_different_types_are_not_equal():
    assert Literal(1.0) != Literal(True)
    assert Literal(0.0) != Literal(False)
    assert Literal(1.0) == Literal(1.0)
    assert parse_program('print 1;').statements != parse_program('print true;').statements


def test_deeply_nested_grouping_is_reported():
    depth = 500
    result = parse_program('print ' + '(' * depth + '1' + ')' * depth + '; print 2;')
    assert [d.message for d in result.diagnostics] == ['Too much nesting.']
    assert printed_statements(result.statements) == ['(print 2)']


def test_deeply_nested_blocks_are_reported():
    depth = 2000
    result = parse_program('{' * depth + '}' * depth)
    assert result.diagnostics[0].message == 'Too much nesting.'
    assert result.statements == []


def test_parse_expression_for_bare_expressions():
    tokens, _ = scan('1 + 2')
    parser = Parser(tokens)
    expr = parser.parse_expression()
    assert AstPrinter().print(expr) == '(+ 1 2)'

    tokens, _ = scan('1 + 2; 3')
    assert Parser(tokens).parse_expression() is None


def printed_statements(statements):
    printer = AstPrinter()
    return [printer.print(s) for s in statements]
