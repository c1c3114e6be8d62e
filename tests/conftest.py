from __future__ import annotations

import io
import sys
from pathlib import Path

# Allow importing the package when running plain `pytest` without an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

import pytest
from loguru import logger

from pylox import Interpreter


@pytest.fixture
def run_lox():
    """Run Lox source in a fresh interpreter; return (printed lines, RunResult)."""

    def _run(source: str, *, interpreter: Interpreter | None = None):
        out = io.StringIO()
        if interpreter is None:
            interpreter = Interpreter(stdout=out)
        else:
            interpreter.stdout = out
        result = interpreter.run(source)
        return out.getvalue().splitlines(), result

    return _run


@pytest.fixture
def lox_output(run_lox):
    """Run Lox source that must succeed; return its printed lines."""

    def _run(source: str) -> list[str]:
        lines, result = run_lox(source)
        result.raise_for_exception()
        return lines

    return _run


@pytest.fixture(autouse=True)
def _silence_pylox_logging():
    yield
    # CLI tests call configure_logging(); drop their sinks between tests.
    logger.remove()
    logger.disable("pylox")
