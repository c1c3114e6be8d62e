from __future__ import annotations

import sys
from typing import Dict, Optional

from . import nodes
from .classes import LoxClass
from .common import LoxRuntimeError, ReturnSignal
from .functions import LoxFunction
from .scopes import Environment


class StatementMixin:
    def exec_Expression(self, node: nodes.Expression) -> None:
        self.eval_expr(node.expression)

    def exec_Print(self, node: nodes.Print) -> None:
        value = self.eval_expr(node.expression)
        print(self.stringify(value), file=self.stdout if self.stdout is not None else sys.stdout)

    def exec_Var(self, node: nodes.Var) -> None:
        value = None
        if node.initializer is not None:
            value = self.eval_expr(node.initializer)
        self.environment.define(node.name.lexeme, value)

    def exec_Block(self, node: nodes.Block) -> None:
        self.execute_block(node.statements, Environment(self.environment))

    def exec_If(self, node: nodes.If) -> None:
        if self.is_truthy(self.eval_expr(node.condition)):
            self.exec_stmt(node.then_branch)
        elif node.else_branch is not None:
            self.exec_stmt(node.else_branch)

    def exec_While(self, node: nodes.While) -> None:
        while self.is_truthy(self.eval_expr(node.condition)):
            self.exec_stmt(node.body)

    def exec_Function(self, node: nodes.Function) -> None:
        function = LoxFunction(node, self.environment, is_initializer=False)
        self.environment.define(node.name.lexeme, function)

    def exec_Return(self, node: nodes.Return) -> None:
        value = None
        if node.value is not None:
            value = self.eval_expr(node.value)
        raise ReturnSignal(value)

    def exec_Class(self, node: nodes.Class) -> None:
        defining = self.environment
        # Bound to nil first so method bodies can name their own class.
        defining.define(node.name.lexeme, None)

        superclass: Optional[LoxClass] = None
        if node.superclass is not None:
            value = self.eval_expr(node.superclass)
            if not isinstance(value, LoxClass):
                raise LoxRuntimeError(node.superclass.name, "Superclass must be a class.")
            superclass = value

        method_env = defining
        if superclass is not None:
            method_env = Environment(defining)
            method_env.define("super", superclass)

        methods: Dict[str, LoxFunction] = {}
        for method in node.methods:
            methods[method.name.lexeme] = LoxFunction(
                method, method_env, is_initializer=method.name.lexeme == "init"
            )

        defining.define(node.name.lexeme, LoxClass(node.name.lexeme, superclass, methods))
