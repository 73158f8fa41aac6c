"""
objparse checker CLI Entrypoint.

This module provides the command-line interface for checking Wavefront OBJ files.
It parses a file, prints every error with its location, and reports the outcome
through the process exit code.

Features:
    - Errors printed as `error: <file>:<line>:<column>: <message>`, followed by the
      offending line and a caret under the reported column.
    - Optional dump of every parse event as JSON lines.
    - Optional debug logging of the parser's progress.

Exit codes:
    0: The file parsed without errors.
    1: One or more recoverable errors were reported.
    127: I/O failure, fatal parse error, or invalid arguments.

Example usage:
    objparse-check model.obj
    objparse-check model.obj --events
    objparse-check model.obj --encoding latin-1 -v

Functions:
    check_file(path: str, encoding: str = "utf-8", events: bool = False) -> int:
        Parses one file, printing diagnostics, and returns the exit code.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes `check_file`.
"""

import argparse
import json
import logging
import sys
from typing import Any

from objparse.objparse_constants import ErrorCode
from objparse.objparse_events import RecordingListener
from objparse.objparse_lexer import LexicalPosition
from objparse.objparse_parser import Parser

log = logging.getLogger("objparse.cli")

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_FAILURE = 127

ERROR_LABELS: dict[ErrorCode, str] = {
    ErrorCode.BAD_COMMAND_SYNTAX: "Bad command syntax",
    ErrorCode.BAD_VERTEX_SYNTAX: "Bad vertex syntax",
    ErrorCode.UNRECOGNIZED_COMMAND: "Unrecognized command",
    ErrorCode.NONEXISTENT_V: "Nonexistent v component",
    ErrorCode.NONEXISTENT_VT: "Nonexistent vt component",
    ErrorCode.NONEXISTENT_VN: "Nonexistent vn component",
}


class CheckerListener(RecordingListener):
    """Prints diagnostics for errors as they arrive.

    Events are kept only when `record` is set, and only the current logical
    line is held for the caret display.

    Attributes:
        record (bool): Whether to keep every event in `events`.
        line (tuple[int, str] | None): The current line number and text.
        error_count (int): Number of recoverable errors reported.
        fatal (bool): True if a fatal error was reported.
    """

    def __init__(self, record: bool = False) -> None:
        super().__init__()
        self.record = record
        self.line: tuple[int, str] | None = None
        self.error_count = 0
        self.fatal = False

    def _record(self, kind: str, position: LexicalPosition, **payload: Any) -> None:
        if self.record:
            super()._record(kind, position, **payload)

    def show(self, severity: str, position: LexicalPosition, message: str) -> None:
        """Prints a diagnostic, with the source line and a caret if known."""
        print(f"{severity}: {position}: {message}", file=sys.stderr)
        if self.line is not None and self.line[0] == position.line:
            print(self.line[1], file=sys.stderr)
            print(" " * (position.column - 1) + "^", file=sys.stderr)

    def on_line(self, position: LexicalPosition, line: str) -> None:
        super().on_line(position, line)
        self.line = (position.line, line)

    def on_error(
        self, position: LexicalPosition, code: ErrorCode, message: str
    ) -> None:
        super().on_error(position, code, message)
        self.error_count += 1
        self.show("error", position, f"{ERROR_LABELS[code]}: {message}")

    def on_fatal_error(
        self, position: LexicalPosition, cause: BaseException | None, message: str
    ) -> None:
        super().on_fatal_error(position, cause, message)
        self.fatal = True
        self.show("fatal", position, message)


def check_file(path: str, encoding: str = "utf-8", events: bool = False) -> int:
    """
    Check one OBJ file, printing diagnostics to stderr.

    Args:
        path (str): The file to check.
        encoding (str): Text encoding of the file. Defaults to "utf-8".
        events (bool): If True, print every parse event to stdout as a JSON object
            per line. Defaults to False.

    Returns:
        int: The process exit code (see module docstring).
    """
    listener = CheckerListener(record=events)
    try:
        parser = Parser.from_path(path, listener, encoding=encoding)
    except (OSError, LookupError) as e:
        print(f"error: i/o error: {type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    log.debug("checking %s", path)
    parser.run()

    if events:
        for event in listener.events:
            print(json.dumps(event.to_dict()))

    if listener.fatal:
        return EXIT_FAILURE
    if listener.error_count > 0:
        print(f"error: Encountered {listener.error_count} errors.", file=sys.stderr)
        return EXIT_ERRORS
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the objparse checker.

    Supported flags:
        - `file`: The OBJ file to check.
        - `--encoding`: Text encoding of the file (default: utf-8).
        - `--events`: Print every parse event as JSON lines on stdout.
        - `-v`, `--verbose`: Enable debug logging on stderr.

    Returns:
        int: The process exit code. Invalid arguments yield 127.
    """
    parser = argparse.ArgumentParser(
        prog="objparse-check", description="Check a Wavefront OBJ file."
    )
    parser.add_argument("file", help="The file that will be checked")
    parser.add_argument(
        "--encoding", default="utf-8", help="Text encoding (default: utf-8)"
    )
    parser.add_argument(
        "--events", action="store_true", help="Print parse events as JSON lines"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_OK if e.code == 0 else EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return check_file(args.file, encoding=args.encoding, events=args.events)


if __name__ == "__main__":
    sys.exit(main())
