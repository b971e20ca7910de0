"""JSON serialization/deserialization for Lox ASTs.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node type and
`Token` round-trips; literal values map onto JSON numbers, strings,
booleans and null.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Assign,
    Binary,
    Block,
    Call,
    ExprStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Literal,
    Logical,
    PrintStmt,
    ReturnStmt,
    Unary,
    Variable,
    VarStmt,
    WhileStmt,
)
from .tokens import Token, TokenType


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "type": "Token",
        "kind": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    literal = o.get("literal")
    if isinstance(literal, int) and not isinstance(literal, bool):
        literal = float(literal)
    return Token(TokenType[o["kind"]], o["lexeme"], literal, o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": token_to_obj(node.paren),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    # Statements
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, VarStmt):
        return {"type": "VarStmt", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, FunctionStmt):
        return {
            "type": "FunctionStmt",
            "name": token_to_obj(node.name),
            "params": [token_to_obj(p) for p in node.params],
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "keyword": token_to_obj(node.keyword), "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Token":
        return token_from_obj(obj)

    if t == "Literal":
        value = obj["value"]
        # numbers are always doubles at runtime
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(value)
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Call":
        return Call(
            ast_from_obj(obj["callee"]),
            token_from_obj(obj["paren"]),
            tuple(ast_from_obj(a) for a in obj["arguments"]),
        )

    if t == "ExprStmt":
        return ExprStmt(ast_from_obj(obj["expression"]))
    if t == "PrintStmt":
        return PrintStmt(ast_from_obj(obj["expression"]))
    if t == "VarStmt":
        return VarStmt(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "IfStmt":
        return IfStmt(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "FunctionStmt":
        return FunctionStmt(
            token_from_obj(obj["name"]),
            tuple(token_from_obj(p) for p in obj["params"]),
            tuple(ast_from_obj(s) for s in obj["body"]),
        )
    if t == "ReturnStmt":
        return ReturnStmt(token_from_obj(obj["keyword"]), ast_from_obj(obj.get("value")))

    raise ValueError(f"Unknown AST node type: {t}")
