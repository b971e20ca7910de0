# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import Diagnostic, LoxError, LoxRuntimeError
from .interpreter import Interpreter, run_program
from .parser import parse, parse_program
from .scanner import scan
from .types import to_string as stringify

__all__ = [
    'scan',
    'parse',
    'parse_program',
    'run_program',
    'Interpreter',
    'Diagnostic',
    'LoxError',
    'LoxRuntimeError',
    'stringify',
]
