"""Tree-walking interpreter for the Lox language.

The interpreter evaluates expression nodes to values and executes
statement nodes for their effects. Every method takes the environment it
runs in explicitly; a block or call builds a child environment and hands
it down, so the caller's environment is untouched once the nested
execution finishes, however it finishes.

Statement execution returns ``None`` on normal completion or a
`ReturnSignal` carrying the value of a ``return``. Blocks and loops stop
at the first signal and pass it up; the function call that owns the body
unwraps it. Runtime errors are raised as `LoxRuntimeError` and caught by
`interpret`, which aborts the remaining statements and returns the
diagnostic to the host.
"""

from __future__ import annotations

import math
import time
from typing import Any, List, Optional, Sequence

from .ast import (
    Assign, Binary, Block, Call, Expr, ExprStmt, FunctionStmt, Grouping,
    IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt, Unary, Variable,
    VarStmt, WhileStmt,
)
from .callables import BuiltinFunction, LoxCallable
from .environment import Environment
from .errors import Diagnostic, LoxRuntimeError, ReturnSignal
from .parser import parse_program
from .tokens import Token, TokenType
from .types import is_callable, is_number, is_truthy, to_string, values_equal


class FunctionValue(LoxCallable):
    """A user-defined Lox function together with the scope it closes over."""
    def __init__(self, declaration: FunctionStmt, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        call_env = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            call_env.define(param.lexeme, argument)
        result = interpreter.execute_block(self.declaration.body, call_env)
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


def check_number_operand(operator: Token, operand: Any) -> None:
    if is_number(operand):
        return
    raise LoxRuntimeError(operator, 'Operand must be a number.')


def check_number_operands(operator: Token, left: Any, right: Any) -> None:
    if is_number(left) and is_number(right):
        return
    raise LoxRuntimeError(operator, 'Operands must be numbers.')


def divide(a: float, b: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Interpreter:
    """Core interpreter that executes a Lox statement list."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', out: Any = None):
        self.globals = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        # None means sys.stdout at the time of each print
        self.out = out
        self.load_natives()

    def debug(self, msg: str) -> None:
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def load_natives(self) -> None:
        def native_clock(args: List[Any]) -> Any:
            return time.time()

        self.globals.define('clock', BuiltinFunction('clock', 0, native_clock))

    # Public API
    def interpret(self, statements: Sequence[Stmt]) -> Optional[Diagnostic]:
        """Execute top-level statements in order against the globals.

        Returns the diagnostic of the runtime error that stopped execution,
        or ``None`` if every statement ran.
        """
        try:
            for stmt in statements:
                self.execute(stmt, self.globals)
        except LoxRuntimeError as error:
            self.debug(f"runtime error: {error.message} [line {error.token.line}]")
            return error.diagnostic
        return None

    def evaluate_expression(self, expr: Expr) -> Any:
        return self.evaluate(expr, self.globals)

    # Statements
    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, stmt: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(stmt, ExprStmt):
            self.evaluate(stmt.expression, env)
            return None
        if isinstance(stmt, PrintStmt):
            value = self.evaluate(stmt.expression, env)
            print(to_string(value), file=self.out)
            return None
        if isinstance(stmt, VarStmt):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer, env)
            env.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {stmt.name.lexeme} = {to_string(value)}")
            return None
        if isinstance(stmt, Block):
            return self.execute_block(stmt.statements, Environment(env))
        if isinstance(stmt, IfStmt):
            condition = self.evaluate(stmt.condition, env)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(condition)} -> {is_truthy(condition)}")
            if is_truthy(condition):
                return self.execute(stmt.then_branch, env)
            if stmt.else_branch is not None:
                return self.execute(stmt.else_branch, env)
            return None
        if isinstance(stmt, WhileStmt):
            while True:
                condition = self.evaluate(stmt.condition, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(condition)} -> {is_truthy(condition)}")
                if not is_truthy(condition):
                    break
                result = self.execute(stmt.body, env)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        if isinstance(stmt, FunctionStmt):
            env.define(stmt.name.lexeme, FunctionValue(stmt, env))
            if self.debug_level >= 2:
                self.debug(f"define function {stmt.name.lexeme}/{len(stmt.params)}")
            return None
        if isinstance(stmt, ReturnStmt):
            value = None
            if stmt.value is not None:
                value = self.evaluate(stmt.value, env)
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(stmt).__name__}")

    # Expressions
    def evaluate(self, expr: Expr, env: Environment) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression, env)
        if isinstance(expr, Variable):
            return env.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value, env)
            env.assign(expr.name, value)
            return value
        if isinstance(expr, Logical):
            try:
                left = self.evaluate(expr.left, env)
                if expr.operator.type == TokenType.OR:
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(expr.right, env)
            except RecursionError:
                raise LoxRuntimeError(expr.operator, 'Stack overflow.') from None
        if isinstance(expr, Unary):
            try:
                right = self.evaluate(expr.right, env)
            except RecursionError:
                raise LoxRuntimeError(expr.operator, 'Stack overflow.') from None
            if expr.operator.type == TokenType.BANG:
                return not is_truthy(right)
            if expr.operator.type == TokenType.MINUS:
                check_number_operand(expr.operator, right)
                return -right
            raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")
        if isinstance(expr, Binary):
            # a long operator chain nests as deep as it is long
            try:
                left = self.evaluate(expr.left, env)
                right = self.evaluate(expr.right, env)
            except RecursionError:
                raise LoxRuntimeError(expr.operator, 'Stack overflow.') from None
            return self.apply_binary_op(expr.operator, left, right)
        if isinstance(expr, Call):
            callee = self.evaluate(expr.callee, env)
            arguments = [self.evaluate(argument, env) for argument in expr.arguments]
            return self.call_function(callee, arguments, expr.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr).__name__}")

    def apply_binary_op(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, 'Operands must be two numbers or two strings.')
        if op == TokenType.MINUS:
            check_number_operands(operator, left, right)
            return left - right
        if op == TokenType.STAR:
            check_number_operands(operator, left, right)
            return left * right
        if op == TokenType.SLASH:
            check_number_operands(operator, left, right)
            return divide(left, right)
        if op == TokenType.GREATER:
            check_number_operands(operator, left, right)
            return left > right
        if op == TokenType.GREATER_EQUAL:
            check_number_operands(operator, left, right)
            return left >= right
        if op == TokenType.LESS:
            check_number_operands(operator, left, right)
            return left < right
        if op == TokenType.LESS_EQUAL:
            check_number_operands(operator, left, right)
            return left <= right
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(left, right)
        if op == TokenType.BANG_EQUAL:
            return not values_equal(left, right)
        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")

    def call_function(self, callee: Any, arguments: List[Any], paren: Token) -> Any:
        if not is_callable(callee):
            raise LoxRuntimeError(paren, 'Can only call functions and classes.')
        if len(arguments) != callee.arity:
            raise LoxRuntimeError(paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")
        if self.debug_level >= 3:
            self.debug(f"call {callee!r} with {len(arguments)} argument(s) [line {paren.line}]")
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise LoxRuntimeError(paren, 'Stack overflow.') from None


def run_program(source: str, interpreter: Optional[Interpreter] = None) -> List[Diagnostic]:
    """Scan, parse and run `source`, returning every diagnostic produced.

    Static diagnostics suppress execution entirely.
    """
    result = parse_program(source)
    if not result.ok:
        return result.diagnostics
    if interpreter is None:
        interpreter = Interpreter()
    error = interpreter.interpret(result.statements)
    return [error] if error is not None else []
