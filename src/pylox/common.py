from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .tokens import Token


class ControlFlowSignal(BaseException):
    """Internal non-user exceptions used for control flow (return)."""


class ReturnSignal(ControlFlowSignal):
    def __init__(self, value: Any):
        self.value = value


class LoxError(Exception):
    """Base class for errors reported to the user of a Lox program."""

    def report(self) -> str:
        raise NotImplementedError


class LoxSyntaxError(LoxError):
    """A static error found while scanning, parsing or resolving."""

    def __init__(self, line: int, message: str, where: str = ""):
        super().__init__(message)
        self.line = line
        self.where = where
        self.message = message

    @classmethod
    def at_token(cls, token: "Token", message: str) -> "LoxSyntaxError":
        from .tokens import TokenType

        if token.type is TokenType.EOF:
            return cls(token.line, message, " at end")
        return cls(token.line, message, f" at '{token.lexeme}'")

    def report(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __str__(self) -> str:
        return self.report()


class LoxRuntimeError(LoxError):
    """A failure raised while evaluating; carries the offending token."""

    def __init__(self, token: "Token", message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    def report(self) -> str:
        return f"{self.message}\n[line {self.token.line}]"
