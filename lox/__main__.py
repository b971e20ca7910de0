"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>
    python -m lox --print-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --print-ast   Parse the given .lox file and print its AST

With no script the interpreter starts an interactive prompt. Each line is
run on its own against globals that persist for the whole session; a
line holding a bare expression echoes its value.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status follows the sysexits convention: 64 for bad usage, 65 for
syntax errors, 66 for a missing input file, 70 for runtime errors.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_from_obj, ast_to_obj
from .ast_printer import AstPrinter
from .errors import Diagnostic, LoxRuntimeError
from .interpreter import Interpreter
from .parser import Parser, parse_program
from .scanner import scan
from .types import to_string

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def report(diagnostics: List[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        print(str(diagnostic), file=sys.stderr)


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_file(path: Path, debug_level: int) -> int:
    source = read_source(path)
    result = parse_program(source)
    if not result.ok:
        report(result.diagnostics)
        return EX_DATAERR
    interpreter = Interpreter(debug_level=debug_level)
    try:
        error = interpreter.interpret(result.statements)
    finally:
        interpreter.close()
    if error is not None:
        report([error])
        return EX_SOFTWARE
    return 0


def run_line(line: str, interpreter: Interpreter) -> None:
    result = parse_program(line)
    if result.ok:
        error = interpreter.interpret(result.statements)
        if error is not None:
            report([error])
        return

    # A line that is exactly one expression is evaluated and echoed.
    tokens, scan_errors = scan(line)
    if not scan_errors:
        parser = Parser(tokens)
        expr = parser.parse_expression()
        if expr is not None and not parser.errors:
            try:
                print(to_string(interpreter.evaluate_expression(expr)))
            except LoxRuntimeError as error:
                report([error.diagnostic])
            return
    report(result.diagnostics)


def run_prompt(debug_level: int) -> int:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        while True:
            try:
                line = input('> ')
            except EOFError:
                print()
                break
            run_line(line, interpreter)
    finally:
        interpreter.close()
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the parsed AST of the given .lox file')
    parser.add_argument('script', nargs='?', help='Lox script (.lox) to execute; omit for a prompt')
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse exits with 2 on bad usage
        sys.exit(EX_USAGE if exc.code else 0)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        result = parse_program(read_source(program_file))
        if not result.ok:
            report(result.diagnostics)
            sys.exit(EX_DATAERR)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(result.statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.print_ast:
        result = parse_program(read_source(Path(args.print_ast)))
        if not result.ok:
            report(result.diagnostics)
            sys.exit(EX_DATAERR)
        printer = AstPrinter()
        for stmt in result.statements:
            print(printer.print(stmt))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(EX_NOINPUT)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        statements = ast_from_obj(data)
        interpreter = Interpreter(debug_level=args.v)
        try:
            error = interpreter.interpret(statements)
        finally:
            interpreter.close()
        if error is not None:
            report([error])
            sys.exit(EX_SOFTWARE)
        return

    if args.script:
        status = run_file(Path(args.script), args.v)
    else:
        status = run_prompt(args.v)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
