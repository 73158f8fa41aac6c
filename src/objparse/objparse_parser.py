"""
objparse Wavefront OBJ Parser

Streams Wavefront OBJ text into listener events.

The parser reads logical lines, reports each one, splits off a trailing comment,
tokenizes the remainder and dispatches on the first token. Recognized commands
are validated and reported as structured events; everything else is reported
as an error and parsing carries on with the next line.

Supported Commands
------------------
- Declarations: `v`, `vn`, `vt`
    * `v x y z [w]` (w defaults to 1.0)
    * `vn x y z`
    * `vt u [v] [w]` (missing components default to 0.0)
- Faces: `f` with at least three vertex references of a single layout:
  `v/vt/vn`, `v/vt/`, `v//vn` or `v//`
- Grouping and materials: `o <name>`, `s <integer>|off`, `usemtl <name>`,
  `mtllib <file>`

Parser Behavior
---------------
- Every attempt of a `v`, `vn`, `vt` or `f` command consumes one index of its
  category, whether or not the command is valid.
- A face reference is valid only if each of its indices refers to an element
  already declared earlier in the input.
- Recoverable errors are reported through `on_error` and never raised.
- I/O and decoding failures, and input ending inside a line continuation, are
  reported through `on_fatal_error` and end the run.
- Exceptions raised by the listener propagate out of `run()` unchanged.

Entry Points
------------
- `Parser(lines, listener, source_name=None)`: Parse any iterable of lines.
- `Parser.from_string(text, listener)`: Parse in-memory text.
- `Parser.from_path(path, listener)`: Parse a file; the file is closed by `run()`.
- `run()`: Parse the whole input, once.
"""

from __future__ import annotations

import io
import logging
import os
import re
from collections.abc import Iterable
from typing import IO

from objparse.objparse_constants import (
    COMMANDS,
    FACE_PATTERNS,
    SMOOTHING_OFF,
    SYNTAX_F,
    SYNTAX_F_VERTEX,
    SYNTAX_MTLLIB,
    SYNTAX_O,
    SYNTAX_S,
    SYNTAX_USEMTL,
    SYNTAX_V,
    SYNTAX_VN,
    SYNTAX_VT,
    UNEXPECTED_EOF,
    ErrorCode,
    FaceShape,
)
from objparse.objparse_lexer import LexicalPosition, LineReader, Token, tokenize
from objparse.objparse_listener import LISTENER_METHODS, ParserEventListener

log = logging.getLogger("objparse.parser")

FACE_COMPONENTS: dict[FaceShape, tuple[str, ...]] = {
    FaceShape.V_VT_VN: ("v", "vt", "vn"),
    FaceShape.V_VT: ("v", "vt"),
    FaceShape.V_VN: ("v", "vn"),
    FaceShape.V: ("v",),
}

FACE_PATTERN_BY_SHAPE: dict[FaceShape, re.Pattern[str]] = dict(FACE_PATTERNS)

NONEXISTENT: dict[str, ErrorCode] = {
    "v": ErrorCode.NONEXISTENT_V,
    "vt": ErrorCode.NONEXISTENT_VT,
    "vn": ErrorCode.NONEXISTENT_VN,
}


class TokenSyntaxError(ValueError):
    """Raised internally when a single token cannot be interpreted.

    Attributes:
        token (Token): The offending token.
    """

    def __init__(self, message: str, token: Token):
        super().__init__(message)
        self.token = token


def parse_float(token: Token) -> float:
    """Interprets a token as a floating-point number.

    Raises:
        TokenSyntaxError: If the token is not a valid number.
    """
    if "_" not in token.text:
        try:
            return float(token.text)
        except ValueError:
            pass
    raise TokenSyntaxError(f"Invalid number: {token.text!r}", token)


def face_shape(token: Token) -> FaceShape | None:
    """Classifies a face vertex reference, trying each layout in priority order.

    Returns:
        FaceShape | None: The first layout that matches the whole token, or None.
    """
    for shape, pattern in FACE_PATTERNS:
        if pattern.fullmatch(token.text):
            return shape
    return None


class Parser:
    """
    objparse Parser Class

    Reads Wavefront OBJ input and reports everything it finds to a listener.
    An instance parses exactly one input, once.

    Attributes
    ----------
    reader : LineReader
        Source of logical lines; owns the current lexical position.
    listener : ParserEventListener
        Receiver of all parse events.
    v_current : int
        Index the next `v` command will receive.
    vn_current : int
        Index the next `vn` command will receive.
    vt_current : int
        Index the next `vt` command will receive.
    f_current : int
        Index the next `f` command will receive.
    """

    def __init__(
        self,
        lines: Iterable[str],
        listener: ParserEventListener,
        source_name: str | None = None,
    ) -> None:
        """Initializes the parser.

        Args:
            lines: Physical input lines, with or without line terminators.
            listener: The event receiver.
            source_name: Optional input name carried in every position.

        Raises:
            TypeError: If the listener lacks part of the listener contract.
        """
        missing = [
            name
            for name in LISTENER_METHODS
            if not callable(getattr(listener, name, None))
        ]
        if missing:
            raise TypeError(
                f"Listener {type(listener).__name__} is missing: {', '.join(missing)}"
            )
        self.reader = LineReader(lines, source_name)
        self.listener = listener
        self.v_current = 1
        self.vn_current = 1
        self.vt_current = 1
        self.f_current = 1
        self._resource: IO[str] | None = None
        self._started = False

    @classmethod
    def from_string(
        cls,
        text: str,
        listener: ParserEventListener,
        source_name: str | None = None,
    ) -> Parser:
        """Creates a parser over in-memory text, with universal newline handling."""
        return cls(io.StringIO(text, newline=None), listener, source_name)

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike[str],
        listener: ParserEventListener,
        encoding: str = "utf-8",
    ) -> Parser:
        """Creates a parser over a file. The file is closed when `run()` returns.

        Raises:
            OSError: If the file cannot be opened.
        """
        stream = open(path, encoding=encoding)
        try:
            parser = cls(stream, listener, os.fspath(path))
        except TypeError:
            stream.close()
            raise
        parser._resource = stream
        return parser

    def position(self, column: int | None = None) -> LexicalPosition:
        return self.reader.position(column)

    def run(self) -> None:
        """Parses the whole input, reporting events to the listener.

        Raises:
            RuntimeError: If the parser has already been run.
        """
        if self._started:
            raise RuntimeError("Parser.run() may only be called once")
        self._started = True
        try:
            self._run()
        finally:
            if self._resource is not None:
                self._resource.close()

    def _run(self) -> None:
        while True:
            try:
                line = self.reader.next_line()
            except (OSError, UnicodeDecodeError) as e:
                log.warning("%s: read failed: %s", self.position(), e)
                self.listener.on_fatal_error(self.position(), e, str(e))
                self.listener.on_eof(self.position())
                return

            if line is None:
                if self.reader.dangling:
                    log.warning("%s: %s", self.position(), UNEXPECTED_EOF)
                    self.listener.on_fatal_error(self.position(), None, UNEXPECTED_EOF)
                self.listener.on_eof(self.position())
                return

            self.parse_line(line)

    def parse_line(self, line: str) -> None:
        """Processes one logical line and moves to the next line."""
        text = line.strip()
        log.debug("[%d]: %s", self.reader.line, text)
        self.listener.on_line(self.position(), text)

        command, hash_, comment = text.partition("#")
        self.parse_command(tokenize(command))
        if hash_:
            self.listener.on_comment(self.position(), hash_ + comment)
        self.reader.advance_line()

    def parse_command(self, tokens: list[Token]) -> None:
        """Dispatches a tokenized command to its handler."""
        if not tokens:
            return
        name = tokens[0].text
        log.debug("[%d]: command: %s", self.reader.line, name)
        if name not in COMMANDS:
            self.listener.on_error(
                self.position(), ErrorCode.UNRECOGNIZED_COMMAND, name
            )
            return
        getattr(self, f"parse_{name}")(tokens)

    def _bad_syntax(self, message: str, column: int | None = None) -> None:
        self.listener.on_error(
            self.position(column), ErrorCode.BAD_COMMAND_SYNTAX, message
        )

    def parse_o(self, tokens: list[Token]) -> None:
        if len(tokens) == 2:
            self.listener.on_command_o(self.position(), tokens[1].text)
            return
        self._bad_syntax(SYNTAX_O)

    def parse_usemtl(self, tokens: list[Token]) -> None:
        if len(tokens) == 2:
            self.listener.on_command_usemtl(self.position(), tokens[1].text)
            return
        self._bad_syntax(SYNTAX_USEMTL)

    def parse_mtllib(self, tokens: list[Token]) -> None:
        if len(tokens) == 2:
            self.listener.on_command_mtllib(self.position(), tokens[1].text)
            return
        self._bad_syntax(SYNTAX_MTLLIB)

    def parse_s(self, tokens: list[Token]) -> None:
        if len(tokens) == 2:
            arg = tokens[1].text
            if arg == SMOOTHING_OFF:
                self.listener.on_command_s(self.position(), 0)
                return
            digits = arg[1:] if arg.startswith("+") else arg
            if digits.isdecimal():
                try:
                    group = int(digits)
                except ValueError:  # exceeds the interpreter's digit limit
                    pass
                else:
                    self.listener.on_command_s(self.position(), group)
                    return
        self._bad_syntax(SYNTAX_S)

    def parse_v(self, tokens: list[Token]) -> None:
        try:
            if len(tokens) in (4, 5):
                x, y, z = (parse_float(t) for t in tokens[1:4])
                w = parse_float(tokens[4]) if len(tokens) == 5 else 1.0
                self.listener.on_command_v(self.position(), self.v_current, x, y, z, w)
                return
            self._bad_syntax(SYNTAX_V)
        except TokenSyntaxError as e:
            self._bad_syntax(str(e), e.token.column)
        finally:
            self.v_current += 1

    def parse_vn(self, tokens: list[Token]) -> None:
        try:
            if len(tokens) == 4:
                x, y, z = (parse_float(t) for t in tokens[1:4])
                self.listener.on_command_vn(self.position(), self.vn_current, x, y, z)
                return
            self._bad_syntax(SYNTAX_VN)
        except TokenSyntaxError as e:
            self._bad_syntax(str(e), e.token.column)
        finally:
            self.vn_current += 1

    def parse_vt(self, tokens: list[Token]) -> None:
        try:
            if 2 <= len(tokens) <= 4:
                values = [parse_float(t) for t in tokens[1:]]
                x, y, z = values + [0.0] * (3 - len(values))
                self.listener.on_command_vt(self.position(), self.vt_current, x, y, z)
                return
            self._bad_syntax(SYNTAX_VT)
        except TokenSyntaxError as e:
            self._bad_syntax(str(e), e.token.column)
        finally:
            self.vt_current += 1

    def parse_f(self, tokens: list[Token]) -> None:
        index = self.f_current
        try:
            if len(tokens) < 4:
                self._bad_syntax(SYNTAX_F)
                return

            self.listener.on_command_f_started(self.position(), index)
            shape = face_shape(tokens[1])
            if shape is None:
                self.listener.on_error(
                    self.position(tokens[1].column),
                    ErrorCode.BAD_VERTEX_SYNTAX,
                    SYNTAX_F_VERTEX,
                )
                return

            valid = True
            for token in tokens[1:]:
                valid = self.parse_face_vertex(index, shape, token) and valid
            if valid:
                self.listener.on_command_f_finished(self.position(), index)
        finally:
            self.f_current += 1

    def parse_face_vertex(self, index: int, shape: FaceShape, token: Token) -> bool:
        """Parses and validates one vertex reference of face `index`.

        Every component is checked, so one reference may report several errors.

        Returns:
            bool: True if the reference was reported as a face vertex event.
        """
        match = FACE_PATTERN_BY_SHAPE[shape].fullmatch(token.text)
        if match is None:
            self.listener.on_error(
                self.position(token.column),
                ErrorCode.BAD_VERTEX_SYNTAX,
                SYNTAX_F_VERTEX,
            )
            return False

        limits = {"v": self.v_current, "vt": self.vt_current, "vn": self.vn_current}
        components = FACE_COMPONENTS[shape]
        values: list[int] = []
        valid = True
        for group, component in enumerate(components, start=1):
            value = self._index_value(match, group)
            if value is None or not 0 < value < limits[component]:
                self.listener.on_error(
                    self.position(token.offset + match.start(group) + 1),
                    NONEXISTENT[component],
                    match.group(group) if value is None else str(value),
                )
                valid = False
                continue
            values.append(value)

        if valid:
            name = "_".join(components)
            event = getattr(self.listener, f"on_command_f_vertex_{name}")
            event(self.position(token.column), index, *values)
        return valid

    @staticmethod
    def _index_value(match: re.Match[str], group: int) -> int | None:
        try:
            return int(match.group(group))
        except ValueError:  # exceeds the interpreter's digit limit
            return None


__all__ = ["Parser", "TokenSyntaxError", "face_shape", "parse_float"]
