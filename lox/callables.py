"""The callable protocol shared by native and user-defined functions."""

from dataclasses import dataclass
from typing import Any, List


class LoxCallable:
    """Anything a call expression can invoke.

    The interpreter checks `arity` against the argument count before
    `call` runs, so implementations can rely on receiving exactly that
    many evaluated arguments.
    """
    arity: int

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        raise NotImplementedError


@dataclass(eq=False)
class BuiltinFunction(LoxCallable):
    name: str
    arity: int
    fn: Any  # called with the list of evaluated arguments

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __repr__(self) -> str:
        return "<native fn>"
