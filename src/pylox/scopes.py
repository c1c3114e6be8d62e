from __future__ import annotations

from typing import Any, Dict, Optional

from .common import LoxRuntimeError
from .tokens import Token


class Environment:
    """
    One scope in the parent-linked scope chain.

    Two lookup paths:
      - get/assign walk outward to the nearest environment defining the name
        (used for globals and anything the resolver left unresolved)
      - get_at/assign_at jump straight to ancestor(distance)
        (used for resolved locals; the distance is trusted)

    `enclosing` is fixed at construction, so chains are finite and acyclic.
    Closures hold a reference to the environment they were created in, which
    keeps it alive after the block that created it has finished.
    """

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: Optional["Environment"] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        self.values[name] = value

    def ancestor(self, distance: int) -> "Environment":
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
            if environment is None:
                raise IndexError(f"scope distance {distance} exceeds the environment chain")
        return environment

    def get(self, name: Token) -> Any:
        environment: Optional[Environment] = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment.values[name.lexeme]
            environment = environment.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any) -> None:
        environment: Optional[Environment] = self
        while environment is not None:
            if name.lexeme in environment.values:
                environment.values[name.lexeme] = value
                return
            environment = environment.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def get_at(self, distance: int, name: str) -> Any:
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, name: str, value: Any) -> None:
        self.ancestor(distance).values[name] = value

    def __repr__(self) -> str:
        depth = 0
        environment = self.enclosing
        while environment is not None:
            depth += 1
            environment = environment.enclosing
        return f"<Environment depth={depth} names={sorted(self.values)}>"
