"""Static resolution pass.

Computes, for every local variable reference, how many scopes separate the use
from the declaration and hands that distance to the interpreter. References
to globals are left unresolved and are looked up dynamically at run time.
Also reports the scoping mistakes that can be caught before running.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Dict, Iterable, List

from loguru import logger

from . import nodes
from .common import LoxSyntaxError
from .tokens import Token

if TYPE_CHECKING:
    from .core import InterpreterCore


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    def __init__(self, interpreter: "InterpreterCore"):
        self.interpreter = interpreter
        self.errors: List[LoxSyntaxError] = []
        # name -> "has finished being defined"
        self._scopes: List[Dict[str, bool]] = []
        self._current_function = FunctionType.NONE
        self._current_class = ClassType.NONE
        self._resolved = 0

    def resolve(self, statements: Iterable[nodes.Stmt]) -> List[LoxSyntaxError]:
        self._resolve_body(statements)
        logger.debug("resolved {} local references ({} errors)", self._resolved, len(self.errors))
        return self.errors

    # ----- dispatch -----

    def _resolve_body(self, statements: Iterable[nodes.Stmt]) -> None:
        for statement in statements:
            self._resolve_stmt(statement)

    def _resolve_stmt(self, node: nodes.Stmt) -> None:
        m = getattr(self, f"stmt_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        m(node)

    def _resolve_expr(self, node: nodes.Expr) -> None:
        m = getattr(self, f"expr_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        m(node)

    # ----- statements -----

    def stmt_Block(self, node: nodes.Block) -> None:
        self._begin_scope()
        self._resolve_body(node.statements)
        self._end_scope()

    def stmt_Class(self, node: nodes.Class) -> None:
        enclosing_class = self._current_class
        self._current_class = ClassType.CLASS

        self._declare(node.name)
        self._define(node.name)

        if node.superclass is not None:
            if node.name.lexeme == node.superclass.name.lexeme:
                self._error(node.superclass.name, "A class can't inherit from itself.")
            self._current_class = ClassType.SUBCLASS
            self._resolve_expr(node.superclass)
            self._begin_scope()
            self._scopes[-1]["super"] = True

        self._begin_scope()
        self._scopes[-1]["this"] = True

        for method in node.methods:
            declaration = FunctionType.METHOD
            if method.name.lexeme == "init":
                declaration = FunctionType.INITIALIZER
            self._resolve_function(method, declaration)

        self._end_scope()
        if node.superclass is not None:
            self._end_scope()

        self._current_class = enclosing_class

    def stmt_Expression(self, node: nodes.Expression) -> None:
        self._resolve_expr(node.expression)

    def stmt_Function(self, node: nodes.Function) -> None:
        # Defined before the body so the function can refer to itself.
        self._declare(node.name)
        self._define(node.name)
        self._resolve_function(node, FunctionType.FUNCTION)

    def stmt_If(self, node: nodes.If) -> None:
        self._resolve_expr(node.condition)
        self._resolve_stmt(node.then_branch)
        if node.else_branch is not None:
            self._resolve_stmt(node.else_branch)

    def stmt_Print(self, node: nodes.Print) -> None:
        self._resolve_expr(node.expression)

    def stmt_Return(self, node: nodes.Return) -> None:
        if self._current_function is FunctionType.NONE:
            self._error(node.keyword, "Can't return from top-level code.")

        if node.value is not None:
            if self._current_function is FunctionType.INITIALIZER:
                self._error(node.keyword, "Can't return a value from an initializer.")
            self._resolve_expr(node.value)

    def stmt_Var(self, node: nodes.Var) -> None:
        self._declare(node.name)
        if node.initializer is not None:
            self._resolve_expr(node.initializer)
        self._define(node.name)

    def stmt_While(self, node: nodes.While) -> None:
        self._resolve_expr(node.condition)
        self._resolve_stmt(node.body)

    # ----- expressions -----

    def expr_Assign(self, node: nodes.Assign) -> None:
        self._resolve_expr(node.value)
        self._resolve_local(node, node.name)

    def expr_Binary(self, node: nodes.Binary) -> None:
        self._resolve_expr(node.left)
        self._resolve_expr(node.right)

    def expr_Call(self, node: nodes.Call) -> None:
        self._resolve_expr(node.callee)
        for argument in node.arguments:
            self._resolve_expr(argument)

    def expr_Get(self, node: nodes.Get) -> None:
        self._resolve_expr(node.object)

    def expr_Grouping(self, node: nodes.Grouping) -> None:
        self._resolve_expr(node.expression)

    def expr_Literal(self, node: nodes.Literal) -> None:
        pass

    def expr_Logical(self, node: nodes.Logical) -> None:
        self._resolve_expr(node.left)
        self._resolve_expr(node.right)

    def expr_Set(self, node: nodes.Set) -> None:
        self._resolve_expr(node.value)
        self._resolve_expr(node.object)

    def expr_Super(self, node: nodes.Super) -> None:
        if self._current_class is ClassType.NONE:
            self._error(node.keyword, "Can't use 'super' outside of a class.")
        elif self._current_class is not ClassType.SUBCLASS:
            self._error(node.keyword, "Can't use 'super' in a class with no superclass.")
        self._resolve_local(node, node.keyword)

    def expr_This(self, node: nodes.This) -> None:
        if self._current_class is ClassType.NONE:
            self._error(node.keyword, "Can't use 'this' outside of a class.")
            return
        self._resolve_local(node, node.keyword)

    def expr_Unary(self, node: nodes.Unary) -> None:
        self._resolve_expr(node.right)

    def expr_Variable(self, node: nodes.Variable) -> None:
        if self._scopes and self._scopes[-1].get(node.name.lexeme) is False:
            self._error(node.name, "Can't read local variable in its own initializer.")
        self._resolve_local(node, node.name)

    # ----- scope bookkeeping -----

    def _resolve_function(self, function: nodes.Function, function_type: FunctionType) -> None:
        enclosing_function = self._current_function
        self._current_function = function_type

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self._resolve_body(function.body)
        self._end_scope()

        self._current_function = enclosing_function

    def _begin_scope(self) -> None:
        self._scopes.append({})

    def _end_scope(self) -> None:
        self._scopes.pop()

    def _declare(self, name: Token) -> None:
        if not self._scopes:
            return
        scope = self._scopes[-1]
        if name.lexeme in scope:
            self._error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name: Token) -> None:
        if not self._scopes:
            return
        self._scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr: nodes.Expr, name: Token) -> None:
        for depth, scope in enumerate(reversed(self._scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, depth)
                self._resolved += 1
                return
        # Not found locally: assume global.

    def _error(self, token: Token, message: str) -> None:
        error = LoxSyntaxError.at_token(token, message)
        logger.debug("resolve error: {}", error.report())
        self.errors.append(error)
