from dataclasses import dataclass
from typing import Any

from lox.tokens import Token, TokenType

SCAN_ERROR = 'ScanError'
PARSE_ERROR = 'ParseError'
RUNTIME_ERROR = 'RuntimeError'


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem: its kind, source line, message and location hint.

    `where` is empty, ``at end`` or ``at '<lexeme>'``. Hosts may format the
    fields however they like; `str()` gives the conventional rendering.
    """
    kind: str
    line: int
    message: str
    where: str = ''

    def __str__(self) -> str:
        if self.kind == RUNTIME_ERROR:
            return f"{self.message}\n[line {self.line}]"
        location = f" {self.where}" if self.where else ''
        return f"[line {self.line}] Error{location}: {self.message}"


def location_of(token: Token) -> str:
    if token.type == TokenType.EOF:
        return 'at end'
    return f"at '{token.lexeme}'"


class LoxError(Exception):
    """Exception type used to propagate a Lox diagnostic."""
    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class ParseError(LoxError):
    """Unwinds the parser to the nearest declaration boundary."""


class LoxRuntimeError(LoxError):
    """Raised during evaluation; carries the token the failure is reported at."""
    def __init__(self, token: Token, message: str):
        super().__init__(Diagnostic(RUNTIME_ERROR, token.line, message, location_of(token)))
        self.token = token
        self.message = message


class ReturnSignal:
    """Result of executing a `return` statement.

    Statement execution yields ``None`` on normal completion or an instance
    of this class, which blocks and loops hand back up to the call boundary.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
