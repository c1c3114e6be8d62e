import sys
from typing import IO, Any, Dict, List, Optional

from loguru import logger

from pylox.lib import make_globals

from .common import LoxRuntimeError, LoxSyntaxError
from .nodes import Expr, Stmt
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner
from .scopes import Environment

DEFAULT_RECURSION_LIMIT = 10_000


class RunResult:
    """Outcome of `InterpreterCore.run`: static errors, or the runtime error if any."""

    __slots__ = ("statements", "static_errors", "exception")

    def __init__(
        self,
        statements: List[Stmt],
        static_errors: List[LoxSyntaxError],
        exception: Optional[LoxRuntimeError] = None,
    ):
        self.statements = statements
        self.static_errors = static_errors
        self.exception = exception

    @property
    def had_static_error(self) -> bool:
        return bool(self.static_errors)

    @property
    def had_runtime_error(self) -> bool:
        return self.exception is not None

    @property
    def ok(self) -> bool:
        return not self.static_errors and self.exception is None

    def raise_for_exception(self) -> None:
        if self.static_errors:
            raise self.static_errors[0]
        if self.exception is not None:
            raise self.exception

    def __repr__(self) -> str:
        return (
            f"<RunResult ok={self.ok} static_errors={len(self.static_errors)} "
            f"exception={self.exception!r}>"
        )


class InterpreterCore:
    def __init__(
        self,
        stdout: Optional[IO[str]] = None,
        recursion_limit: Optional[int] = DEFAULT_RECURSION_LIMIT,
    ):
        """
        stdout:
          - None -> print to sys.stdout, looked up at print time
          - any text stream -> print there (handy for embedding and tests)
        recursion_limit:
          - int -> raise the host recursion limit to at least this
            (each Lox call nests roughly ten Python frames)
          - None -> leave the host limit alone
        """
        self.stdout = stdout
        if recursion_limit is not None and sys.getrecursionlimit() < recursion_limit:
            sys.setrecursionlimit(recursion_limit)
        self.globals: Environment = make_globals()
        self.environment: Environment = self.globals
        # resolver output: reference node -> scope distance (absent = global)
        self.locals: Dict[Expr, int] = {}
        self.last_error: Optional[LoxRuntimeError] = None

    # ----- resolver contract -----

    def resolve(self, expr: Expr, depth: int) -> None:
        self.locals[expr] = depth

    # ----- run -----

    def run(self, source: str) -> RunResult:
        """
        Scan, parse, resolve and execute `source` in this interpreter's globals.

        Nothing executes if any static error is found. State persists between
        calls, so successive runs behave like lines typed at a prompt.
        """
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        parser = Parser(tokens)
        statements = parser.parse()
        static_errors = scanner.errors + parser.errors
        if static_errors:
            return RunResult(statements, static_errors)

        resolver = Resolver(self)
        static_errors = resolver.resolve(statements)
        if static_errors:
            return RunResult(statements, list(static_errors))

        return RunResult(statements, [], self.interpret(statements))

    def interpret(self, statements: List[Stmt]) -> Optional[LoxRuntimeError]:
        """
        Execute top-level statements in the global environment.

        The first runtime error aborts the remaining statements and is returned
        (and kept as `last_error`); the interpreter stays usable afterwards.
        """
        self.last_error = None
        try:
            for stmt in statements:
                self.exec_stmt(stmt)
        except LoxRuntimeError as error:
            logger.info("runtime error at line {}: {}", error.token.line, error.message)
            self.last_error = error
            return error
        return None

    # ----- dispatch -----

    def exec_stmt(self, node: Stmt) -> None:
        m = getattr(self, f"exec_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        m(node)

    def eval_expr(self, node: Expr) -> Any:
        m = getattr(self, f"eval_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        return m(node)

    def execute_block(self, stmts: List[Stmt], environment: Environment) -> None:
        previous = self.environment
        try:
            self.environment = environment
            for stmt in stmts:
                self.exec_stmt(stmt)
        finally:
            self.environment = previous
