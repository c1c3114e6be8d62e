from __future__ import annotations

from typing import Any

from . import nodes
from .classes import LoxClass, LoxInstance
from .common import LoxRuntimeError
from .functions import LoxCallable
from .tokens import TokenType


class ExpressionMixin:
    def eval_Literal(self, node: nodes.Literal) -> Any:
        return node.value

    def eval_Grouping(self, node: nodes.Grouping) -> Any:
        return self.eval_expr(node.expression)

    def eval_Unary(self, node: nodes.Unary) -> Any:
        right = self.eval_expr(node.right)
        if node.operator.type is TokenType.BANG:
            return not self.is_truthy(right)
        if node.operator.type is TokenType.MINUS:
            self._check_number_operand(node.operator, right)
            return -right
        raise NotImplementedError(f"Unary operator {node.operator.type.name} not supported")

    def eval_Binary(self, node: nodes.Binary) -> Any:
        left = self.eval_expr(node.left)
        right = self.eval_expr(node.right)
        return self._apply_binop(node.operator, left, right)

    def eval_Logical(self, node: nodes.Logical) -> Any:
        left = self.eval_expr(node.left)
        if node.operator.type is TokenType.OR:
            if self.is_truthy(left):
                return left
        elif not self.is_truthy(left):
            return left
        return self.eval_expr(node.right)

    def eval_Variable(self, node: nodes.Variable) -> Any:
        return self._look_up_variable(node.name, node)

    def eval_This(self, node: nodes.This) -> Any:
        return self._look_up_variable(node.keyword, node)

    def eval_Assign(self, node: nodes.Assign) -> Any:
        value = self.eval_expr(node.value)
        distance = self.locals.get(node)
        if distance is not None:
            self.environment.assign_at(distance, node.name.lexeme, value)
        else:
            self.globals.assign(node.name, value)
        return value

    def eval_Call(self, node: nodes.Call) -> Any:
        callee = self.eval_expr(node.callee)
        arguments = [self.eval_expr(argument) for argument in node.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(node.paren, "Can only call functions and classes.")

        arity = callee.arity()
        if len(arguments) != arity:
            raise LoxRuntimeError(
                node.paren, f"Expected {arity} arguments but got {len(arguments)}."
            )

        return callee.call(self, arguments)

    def eval_Get(self, node: nodes.Get) -> Any:
        obj = self.eval_expr(node.object)
        if isinstance(obj, LoxInstance):
            return obj.get(node.name)
        raise LoxRuntimeError(node.name, "Only instances have properties.")

    def eval_Set(self, node: nodes.Set) -> Any:
        obj = self.eval_expr(node.object)
        if not isinstance(obj, LoxInstance):
            raise LoxRuntimeError(node.name, "Only instances have fields.")
        value = self.eval_expr(node.value)
        obj.set(node.name, value)
        return value

    def eval_Super(self, node: nodes.Super) -> Any:
        distance = self.locals[node]
        superclass: LoxClass = self.environment.get_at(distance, "super")
        # `this` lives one environment nearer than `super`.
        instance: LoxInstance = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(instance, node.method.lexeme)
        if method is None:
            raise LoxRuntimeError(node.method, f"Undefined property '{node.method.lexeme}'.")
        return method
