from loguru import logger

from .classes import LoxClass, LoxInstance
from .common import LoxError, LoxRuntimeError, LoxSyntaxError
from .core import RunResult
from .functions import LoxCallable, LoxFunction, NativeFunction
from .main import Interpreter
from .scopes import Environment

# Library code stays silent unless the host opts in (see logging_utils).
logger.disable("pylox")

__all__ = [
    "Environment",
    "Interpreter",
    "LoxCallable",
    "LoxClass",
    "LoxError",
    "LoxFunction",
    "LoxInstance",
    "LoxRuntimeError",
    "LoxSyntaxError",
    "NativeFunction",
    "RunResult",
]
