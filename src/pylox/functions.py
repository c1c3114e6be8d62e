from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List

from .common import ReturnSignal
from .nodes import Function
from .scopes import Environment

if TYPE_CHECKING:
    from .classes import LoxInstance
    from .main import Interpreter


class LoxCallable:
    """Anything a Lox call expression can invoke: natives, functions, classes."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        raise NotImplementedError


class NativeFunction(LoxCallable):
    """A host-provided function with a fixed arity."""

    __slots__ = ("name", "_arity", "_fn")

    def __init__(self, name: str, arity: int, fn: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self._fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        return self._fn(*arguments)

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"<NativeFunction {self.name}/{self._arity}>"


class LoxFunction(LoxCallable):
    """
    A user-defined function: a declaration closed over the environment that was
    active when the declaration was executed.

    Methods are stored unbound on their class and bound per access, which wraps
    the closure in one extra environment holding `this`.
    """

    __slots__ = ("declaration", "closure", "is_initializer")

    def __init__(self, declaration: Function, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def bind(self, instance: "LoxInstance") -> "LoxFunction":
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnSignal as r:
            if self.is_initializer:
                return self.closure.get_at(0, "this")
            return r.value

        # An initializer always yields the instance, even when it falls through.
        if self.is_initializer:
            return self.closure.get_at(0, "this")
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        kind = "init" if self.is_initializer else "func"
        return f"<LoxFunction {self.name} ({kind})>"
