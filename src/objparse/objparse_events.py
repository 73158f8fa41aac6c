"""
Record types for objparse listener events.

Classes:
    EventDict:
        TypedDict representation of a ParseEvent, suitable for JSON output.

    ParseEvent:
        One listener callback captured as data: its kind, position and payload.

    RecordingListener:
        A listener that appends a ParseEvent for every callback it receives.

Each ParseEvent tracks:
    kind (str): The callback name without its `on_` prefix (e.g. "command_v", "error").
    position (LexicalPosition): The position snapshot delivered with the event.
    payload (dict[str, Any]): The remaining callback arguments, by name.

Usage:
    The checker CLI uses RecordingListener for its `--events` dump, and the test
    suite uses it to compare whole event streams.

Example:
    >>> recorder = RecordingListener()
    >>> Parser.from_string("o Cube\\n", recorder).run()
    >>> [e.kind for e in recorder.events]
    ['line', 'command_o', 'eof']
"""

import math
from typing import Any, TypedDict

from objparse.objparse_constants import ErrorCode
from objparse.objparse_lexer import LexicalPosition
from objparse.objparse_listener import BaseParserEventListener


class EventDict(TypedDict):
    """
    Serialized form of a ParseEvent.

    Fields:
        kind (str): The event kind.
        line (int): Line number of the event position.
        col (int): Column number of the event position.
        source (str | None): Source name of the event position.
        payload (dict[str, Any]): JSON-compatible payload values.
    """

    kind: str
    line: int
    col: int
    source: str | None
    payload: dict[str, Any]


def _plain(value: Any) -> Any:
    if isinstance(value, ErrorCode):
        return value.value
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return value


def _same(a: Any, b: Any) -> bool:
    a, b = _plain(a), _plain(b)
    if isinstance(a, float) and isinstance(b, float):
        return a == b or (math.isnan(a) and math.isnan(b))
    return a == b


class ParseEvent:
    """
    A single listener callback, captured as data.

    Args:
        kind (str): The event kind (callback name without `on_`).
        position (LexicalPosition): The position delivered with the event.
        payload (dict[str, Any], optional): Remaining callback arguments.
    """

    def __init__(
        self,
        kind: str,
        position: LexicalPosition,
        payload: dict[str, Any] | None = None,
    ):
        self.kind = kind
        self.position = position
        self.payload: dict[str, Any] = payload or {}

    def __repr__(self) -> str:
        parts = [self.kind, f"{self.position.line}:{self.position.column}"]
        parts.extend(f"{k}={v!r}" for k, v in self.payload.items())
        return f"ParseEvent({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParseEvent):
            return False
        return (
            self.kind == other.kind
            and self.position == other.position
            and self.payload.keys() == other.payload.keys()
            and all(_same(v, other.payload[k]) for k, v in self.payload.items())
        )

    def to_dict(self) -> EventDict:
        return {
            "kind": self.kind,
            "line": self.position.line,
            "col": self.position.column,
            "source": self.position.source_name,
            "payload": {k: _plain(v) for k, v in self.payload.items()},
        }


class RecordingListener(BaseParserEventListener):
    """Captures every event as a ParseEvent, in order.

    Attributes:
        events (list[ParseEvent]): The recorded events.
    """

    def __init__(self) -> None:
        self.events: list[ParseEvent] = []

    def kinds(self) -> list[str]:
        """Returns the kinds of the recorded events, in order."""
        return [e.kind for e in self.events]

    def of_kind(self, kind: str) -> list[ParseEvent]:
        """Returns the recorded events of one kind, in order."""
        return [e for e in self.events if e.kind == kind]

    def _record(self, kind: str, position: LexicalPosition, **payload: Any) -> None:
        self.events.append(ParseEvent(kind, position, payload))

    def on_fatal_error(
        self, position: LexicalPosition, cause: BaseException | None, message: str
    ) -> None:
        self._record("fatal_error", position, cause=cause, message=message)

    def on_error(
        self, position: LexicalPosition, code: ErrorCode, message: str
    ) -> None:
        self._record("error", position, code=code, message=message)

    def on_line(self, position: LexicalPosition, line: str) -> None:
        self._record("line", position, line=line)

    def on_eof(self, position: LexicalPosition) -> None:
        self._record("eof", position)

    def on_comment(self, position: LexicalPosition, text: str) -> None:
        self._record("comment", position, text=text)

    def on_command_o(self, position: LexicalPosition, name: str) -> None:
        self._record("command_o", position, name=name)

    def on_command_s(self, position: LexicalPosition, group_number: int) -> None:
        self._record("command_s", position, group_number=group_number)

    def on_command_usemtl(self, position: LexicalPosition, name: str) -> None:
        self._record("command_usemtl", position, name=name)

    def on_command_mtllib(self, position: LexicalPosition, name: str) -> None:
        self._record("command_mtllib", position, name=name)

    def on_command_v(
        self,
        position: LexicalPosition,
        index: int,
        x: float,
        y: float,
        z: float,
        w: float,
    ) -> None:
        self._record("command_v", position, index=index, x=x, y=y, z=z, w=w)

    def on_command_vn(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        self._record("command_vn", position, index=index, x=x, y=y, z=z)

    def on_command_vt(
        self, position: LexicalPosition, index: int, x: float, y: float, z: float
    ) -> None:
        self._record("command_vt", position, index=index, x=x, y=y, z=z)

    def on_command_f_started(self, position: LexicalPosition, index: int) -> None:
        self._record("command_f_started", position, index=index)

    def on_command_f_vertex_v(
        self, position: LexicalPosition, index: int, v: int
    ) -> None:
        self._record("command_f_vertex_v", position, index=index, v=v)

    def on_command_f_vertex_v_vt(
        self, position: LexicalPosition, index: int, v: int, vt: int
    ) -> None:
        self._record("command_f_vertex_v_vt", position, index=index, v=v, vt=vt)

    def on_command_f_vertex_v_vn(
        self, position: LexicalPosition, index: int, v: int, vn: int
    ) -> None:
        self._record("command_f_vertex_v_vn", position, index=index, v=v, vn=vn)

    def on_command_f_vertex_v_vt_vn(
        self, position: LexicalPosition, index: int, v: int, vt: int, vn: int
    ) -> None:
        self._record(
            "command_f_vertex_v_vt_vn", position, index=index, v=v, vt=vt, vn=vn
        )

    def on_command_f_finished(self, position: LexicalPosition, index: int) -> None:
        self._record("command_f_finished", position, index=index)


__all__ = ["EventDict", "ParseEvent", "RecordingListener"]
