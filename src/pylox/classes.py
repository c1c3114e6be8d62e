from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .common import LoxRuntimeError
from .functions import LoxCallable, LoxFunction
from .tokens import Token

if TYPE_CHECKING:
    from .main import Interpreter


class LoxClass(LoxCallable):
    """
    Runtime class: a name, an optional single superclass and a method table.

    Calling the class constructs an instance and runs `init` (own or inherited)
    bound to it.
    """

    __slots__ = ("name", "superclass", "methods")

    def __init__(
        self,
        name: str,
        superclass: Optional["LoxClass"],
        methods: Dict[str, LoxFunction],
    ):
        self.name = name
        self.superclass = superclass
        self.methods = dict(methods)

    def _lookup(self, name: str) -> Optional[LoxFunction]:
        klass: Optional[LoxClass] = self
        while klass is not None:
            method = klass.methods.get(name)
            if method is not None:
                return method
            klass = klass.superclass
        return None

    def find_method(self, instance: "LoxInstance", name: str) -> Optional[LoxFunction]:
        # Inherited methods still bind `this` to the original instance.
        method = self._lookup(name)
        if method is None:
            return None
        return method.bind(instance)

    def arity(self) -> int:
        initializer = self._lookup("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        instance = LoxInstance(self)
        initializer = self._lookup("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        parent = f" < {self.superclass.name}" if self.superclass is not None else ""
        return f"<LoxClass {self.name}{parent}>"


class LoxInstance:
    """An instance of a LoxClass with an open field mapping."""

    __slots__ = ("klass", "fields")

    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: Dict[str, Any] = {}

    def get(self, name: Token) -> Any:
        # Fields shadow methods.
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(self, name.lexeme)
        if method is not None:
            return method

        raise LoxRuntimeError(name, f"Undefined property '{name.lexeme}'.")

    def set(self, name: Token, value: Any) -> None:
        self.fields[name.lexeme] = value

    def __str__(self) -> str:
        return f"{self.klass.name} instance"

    def __repr__(self) -> str:
        return f"<LoxInstance of {self.klass.name}>"
