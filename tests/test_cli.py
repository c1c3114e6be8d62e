from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from pylox.__main__ import main

ROOT = Path(__file__).resolve().parents[1]


def _run_module(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(ROOT / "src") + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-m", "pylox", *args],
        check=False,
        capture_output=True,
        text=True,
        input=stdin,
        env=env,
    )


def test_module_executes_kitchen_sink_script() -> None:
    script = Path(__file__).parent / "fixtures" / "kitchen_sink.lox"
    proc = _run_module(str(script))
    assert proc.returncode == 0, proc.stderr
    assert proc.stderr == ""
    assert proc.stdout.splitlines() == [
        "14",
        "square with area small",
        "square with area big",
        "10",
        "ababab",
        "fallback",
        "3.5",
    ]


def test_module_rejects_unknown_option() -> None:
    proc = _run_module("--bogus")
    assert proc.returncode == 2
    assert "usage: pylox" in proc.stderr


def test_prompt_keeps_state_and_survives_errors() -> None:
    proc = _run_module(stdin='var a = 1;\nprint a + nil;\nprint a + 1;\n')
    assert proc.returncode == 0
    assert "2" in proc.stdout.split()
    assert "Operands must be two numbers or two strings.\n[line 1]" in proc.stderr


def test_missing_script_returns_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "nope.lox")]) == 2
    assert "script not found" in capsys.readouterr().err


def test_static_error_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = tmp_path / "bad.lox"
    script.write_text("print 1\n")
    assert main([str(script)]) == 65
    assert capsys.readouterr().err.strip() == "[line 2] Error at end: Expect ';' after value."


def test_runtime_error_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = tmp_path / "boom.lox"
    script.write_text('print "ok";\n\nprint -"no";\nprint "unreached";\n')
    assert main([str(script)]) == 70
    captured = capsys.readouterr()
    assert captured.out == "ok\n"
    assert captured.err.strip() == "Operand must be a number.\n[line 3]"


def test_runaway_recursion_is_reported(tmp_path: Path) -> None:
    script = tmp_path / "deep.lox"
    script.write_text("fun down() { down(); }\ndown();\n")
    proc = _run_module(str(script))
    assert proc.returncode == 70
    assert proc.stderr.strip() == "Stack overflow."
