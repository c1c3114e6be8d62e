from .builtins import make_globals, make_natives

__all__ = [
    "make_globals",
    "make_natives",
]
