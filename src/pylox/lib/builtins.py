import time
from typing import Any, Callable, Dict

from ..functions import NativeFunction
from ..scopes import Environment


def _clock() -> float:
    return time.time()


_NATIVES: tuple[tuple[str, int, Callable[..., Any]], ...] = (
    ("clock", 0, _clock),
)


def make_natives() -> Dict[str, NativeFunction]:
    """Fresh native function objects, keyed by their global name."""
    return {name: NativeFunction(name, arity, fn) for name, arity, fn in _NATIVES}


def make_globals(env: Environment | None = None) -> Environment:
    """
    Build (or populate) the global environment with every native function.

    Natives are ordinary bindings: a program may shadow or reassign them.
    """
    if env is None:
        env = Environment()
    for name, native in make_natives().items():
        env.define(name, native)
    return env
