import argparse
import sys
from pathlib import Path

from .core import RunResult
from .logging_utils import configure_logging
from .main import Interpreter

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70
_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pylox",
        usage="pylox [--log-level LEVEL] [script.lox]",
        description="Run a Lox script, or start an interactive prompt when no script is given.",
    )
    parser.add_argument("script", nargs="?")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=None,
        help="diagnostic log level on stderr (default: $PYLOX_LOG_LEVEL or WARNING)",
    )
    return parser


def _report(result: RunResult) -> None:
    for error in result.static_errors:
        print(error.report(), file=sys.stderr)
    if result.exception is not None:
        print(result.exception.report(), file=sys.stderr)


def run_file(path: Path, interpreter: Interpreter) -> int:
    source = path.read_text()
    try:
        result = interpreter.run(source)
    except RecursionError:
        print("Stack overflow.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    _report(result)
    if result.had_static_error:
        return EXIT_STATIC_ERROR
    if result.had_runtime_error:
        return EXIT_RUNTIME_ERROR
    return 0


def run_prompt(interpreter: Interpreter) -> int:
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            return 0
        # Resolver entries for earlier lines stay: functions declared there
        # may still be called from later lines.
        try:
            result = interpreter.run(line)
        except RecursionError:
            # The block stack unwound cleanly; keep the session going.
            print("Stack overflow.", file=sys.stderr)
            continue
        _report(result)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args_list = sys.argv[1:] if argv is None else argv
    try:
        args = parser.parse_args(args_list)
    except SystemExit as exc:
        return int(exc.code)

    configure_logging(args.log_level)
    interpreter = Interpreter()

    if args.script is None:
        return run_prompt(interpreter)

    script_path = Path(args.script).resolve()
    if not script_path.is_file():
        print(f"pylox: script not found: {script_path}", file=sys.stderr)
        return 2
    return run_file(script_path, interpreter)


if __name__ == "__main__":
    raise SystemExit(main())
