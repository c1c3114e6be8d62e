from __future__ import annotations

import math
from typing import Any

from .common import LoxRuntimeError
from .nodes import Expr
from .tokens import Token, TokenType

_INTEGRAL_DISPLAY_BOUND = 1e21


def _divide(left: float, right: float) -> float:
    # IEEE-754 semantics instead of ZeroDivisionError.
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class HelperMixin:
    # ----------------------------
    # Value semantics
    # ----------------------------

    @staticmethod
    def is_truthy(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    @staticmethod
    def is_equal(a: Any, b: Any) -> bool:
        if a is None:
            return b is None
        # Python would call True == 1.0; Lox never equates different kinds.
        if type(a) is not type(b):
            return False
        if isinstance(a, (bool, float, str)):
            return a == b
        return a is b

    @staticmethod
    def stringify(value: Any) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            if math.isnan(value):
                return "nan"
            if math.isinf(value):
                return "inf" if value > 0 else "-inf"
            # repr switches to exponent form at 1e16; keep whole numbers digit-for-digit.
            if value and value.is_integer() and abs(value) < _INTEGRAL_DISPLAY_BOUND:
                return str(int(value))
            text = repr(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text
        return str(value)

    # ----------------------------
    # Operand checks
    # ----------------------------

    def _check_number_operand(self, operator: Token, operand: Any) -> None:
        if isinstance(operand, float):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def _check_number_operands(self, operator: Token, left: Any, right: Any) -> None:
        if isinstance(left, float) and isinstance(right, float):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")

    def _apply_binop(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op is TokenType.PLUS:
            if isinstance(left, float) and isinstance(right, float):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")
        if op is TokenType.EQUAL_EQUAL:
            return self.is_equal(left, right)
        if op is TokenType.BANG_EQUAL:
            return not self.is_equal(left, right)

        self._check_number_operands(operator, left, right)
        if op is TokenType.MINUS:
            return left - right
        if op is TokenType.STAR:
            return left * right
        if op is TokenType.SLASH:
            return _divide(left, right)
        if op is TokenType.GREATER:
            return left > right
        if op is TokenType.GREATER_EQUAL:
            return left >= right
        if op is TokenType.LESS:
            return left < right
        if op is TokenType.LESS_EQUAL:
            return left <= right
        raise NotImplementedError(f"Binary operator {op.name} not supported")

    # ----------------------------
    # Variable lookup
    # ----------------------------

    def _look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)
