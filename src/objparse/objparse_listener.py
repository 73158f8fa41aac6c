"""
Defines the listener contract between the objparse engine and its consumers.

Every construct the parser recognizes, and every error it detects, is delivered
as one synchronous method call on a listener. Listeners return nothing; the only
way for a listener to influence the run is to raise, which aborts `Parser.run()`.

Classes:
    ParserEventListener (Protocol): The full callback surface.
    BaseParserEventListener: A listener whose methods all do nothing, for
        consumers interested in a subset of events.

Event order guarantees:
    - `on_line` precedes every event raised for that line.
    - `on_comment` follows the events raised for the command portion of the line.
    - `on_command_f_started` precedes the face's vertex events, and
      `on_command_f_finished` is raised only if the whole face was valid.
    - `on_eof` is raised exactly once, last.
"""

from typing import Protocol

from objparse.objparse_constants import ErrorCode
from objparse.objparse_lexer import LexicalPosition


class ParserEventListener(Protocol):  # pragma: no cover
    """Protocol for all objparse event listeners."""

    def on_fatal_error(
        self, position: LexicalPosition, cause: BaseException | None, message: str
    ) -> None:
        """An unrecoverable error occurred. Parsing stops once this returns.

        Args:
            position: Where the error was detected.
            cause: The underlying exception, if any.
            message: A description of the error.
        """
        ...

    def on_error(
        self, position: LexicalPosition, code: ErrorCode, message: str
    ) -> None:
        """A recoverable error occurred. Parsing continues with the next line."""
        ...

    def on_line(self, position: LexicalPosition, line: str) -> None:
        """A logical line (trimmed, comment included) is about to be parsed."""
        ...

    def on_eof(self, position: LexicalPosition) -> None:
        """End of input was reached."""
        ...

    def on_comment(self, position: LexicalPosition, text: str) -> None:
        """A comment was found. `text` includes the leading `#`."""
        ...

    def on_command_o(self, position: LexicalPosition, name: str) -> None: ...

    def on_command_s(self, position: LexicalPosition, group_number: int) -> None:
        """A smoothing group was selected. `s off` is reported as group 0."""
        ...

    def on_command_usemtl(self, position: LexicalPosition, name: str) -> None: ...

    def on_command_mtllib(self, position: LexicalPosition, name: str) -> None: ...

    def on_command_v(
        self,
        position: LexicalPosition,
        index: int,
        x: float,
        y: float,
        z: float,
        w: float,
    ) -> None:
        """A geometric vertex was declared. `w` defaults to 1.0."""
        ...

    def on_command_vn(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        """A vertex normal was declared."""
        ...

    def on_command_vt(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        """A texture coordinate was declared. Missing `y` and `z` default to 0.0."""
        ...

    def on_command_f_started(self, position: LexicalPosition, index: int) -> None:
        """A face with the given index begins.

        Vertices follow through the `on_command_f_vertex_*` methods. If every
        vertex is valid, `on_command_f_finished` closes the face; otherwise
        one or more `on_error` calls are raised instead.
        """
        ...

    def on_command_f_vertex_v(
        self, position: LexicalPosition, index: int, v: int
    ) -> None: ...

    def on_command_f_vertex_v_vt(
        self, position: LexicalPosition, index: int, v: int, vt: int
    ) -> None: ...

    def on_command_f_vertex_v_vn(
        self, position: LexicalPosition, index: int, v: int, vn: int
    ) -> None: ...

    def on_command_f_vertex_v_vt_vn(
        self, position: LexicalPosition, index: int, v: int, vt: int, vn: int
    ) -> None: ...

    def on_command_f_finished(self, position: LexicalPosition, index: int) -> None:
        """The face with the given index was parsed and validated successfully."""
        ...


class BaseParserEventListener:
    """A `ParserEventListener` that ignores every event.

    Subclass it and override only the events of interest.
    """

    def on_fatal_error(
        self, position: LexicalPosition, cause: BaseException | None, message: str
    ) -> None:
        pass

    def on_error(
        self, position: LexicalPosition, code: ErrorCode, message: str
    ) -> None:
        pass

    def on_line(self, position: LexicalPosition, line: str) -> None:
        pass

    def on_eof(self, position: LexicalPosition) -> None:
        pass

    def on_comment(self, position: LexicalPosition, text: str) -> None:
        pass

    def on_command_o(self, position: LexicalPosition, name: str) -> None:
        pass

    def on_command_s(self, position: LexicalPosition, group_number: int) -> None:
        pass

    def on_command_usemtl(self, position: LexicalPosition, name: str) -> None:
        pass

    def on_command_mtllib(self, position: LexicalPosition, name: str) -> None:
        pass

    def on_command_v(
        self,
        position: LexicalPosition,
        index: int,
        x: float,
        y: float,
        z: float,
        w: float,
    ) -> None:
        pass

    def on_command_vn(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        pass

    def on_command_vt(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        pass

    def on_command_f_started(self, position: LexicalPosition, index: int) -> None:
        pass

    def on_command_f_vertex_v(
        self, position: LexicalPosition, index: int, v: int
    ) -> None:
        pass

    def on_command_f_vertex_v_vt(
        self, position: LexicalPosition, index: int, v: int, vt: int
    ) -> None:
        pass

    def on_command_f_vertex_v_vn(
        self, position: LexicalPosition, index: int, v: int, vn: int
    ) -> None:
        pass

    def on_command_f_vertex_v_vt_vn(
        self, position: LexicalPosition, index: int, v: int, vt: int, vn: int
    ) -> None:
        pass

    def on_command_f_finished(self, position: LexicalPosition, index: int) -> None:
        pass


LISTENER_METHODS: tuple[str, ...] = tuple(
    name for name in vars(BaseParserEventListener) if name.startswith("on_")
)
"""Names of every callback in the listener contract, in declaration order."""


__all__ = ["BaseParserEventListener", "LISTENER_METHODS", "ParserEventListener"]
