"""Parenthesized prefix rendering of Lox ASTs, for debugging.

``print 1 + 2 * 3;`` renders as ``(print (+ 1 (* 2 3)))``.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Assign, Binary, Block, Call, ExprStmt, FunctionStmt, Grouping, IfStmt,
    Literal, Logical, Node, PrintStmt, ReturnStmt, Unary, Variable, VarStmt,
    WhileStmt,
)
from .types import to_string


class AstPrinter:
    def print(self, node: Node) -> str:
        if isinstance(node, Literal):
            if isinstance(node.value, str):
                return f'"{node.value}"'
            return to_string(node.value)
        if isinstance(node, Variable):
            return node.name.lexeme
        if isinstance(node, Assign):
            return self.parenthesize('=', node.name.lexeme, node.value)
        if isinstance(node, (Binary, Logical)):
            return self.parenthesize(node.operator.lexeme, node.left, node.right)
        if isinstance(node, Unary):
            return self.parenthesize(node.operator.lexeme, node.right)
        if isinstance(node, Grouping):
            return self.parenthesize('group', node.expression)
        if isinstance(node, Call):
            return self.parenthesize('call', node.callee, *node.arguments)

        if isinstance(node, ExprStmt):
            return self.parenthesize(';', node.expression)
        if isinstance(node, PrintStmt):
            return self.parenthesize('print', node.expression)
        if isinstance(node, VarStmt):
            if node.initializer is None:
                return self.parenthesize('var', node.name.lexeme)
            return self.parenthesize('var', node.name.lexeme, '=', node.initializer)
        if isinstance(node, Block):
            return self.parenthesize('block', *node.statements)
        if isinstance(node, IfStmt):
            if node.else_branch is None:
                return self.parenthesize('if', node.condition, node.then_branch)
            return self.parenthesize('if-else', node.condition, node.then_branch, node.else_branch)
        if isinstance(node, WhileStmt):
            return self.parenthesize('while', node.condition, node.body)
        if isinstance(node, FunctionStmt):
            params = '(' + ' '.join(p.lexeme for p in node.params) + ')'
            return self.parenthesize('fun', node.name.lexeme, params, *node.body)
        if isinstance(node, ReturnStmt):
            if node.value is None:
                return '(return)'
            return self.parenthesize('return', node.value)
        raise TypeError(f"Unsupported node for printing: {type(node).__name__}")

    def parenthesize(self, name: str, *parts: Any) -> str:
        pieces = [name]
        for part in parts:
            pieces.append(part if isinstance(part, str) else self.print(part))
        return '(' + ' '.join(pieces) + ')'
