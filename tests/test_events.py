import json

from hypothesis import given
from hypothesis import strategies as st

from objparse.objparse_constants import ErrorCode
from objparse.objparse_events import ParseEvent, RecordingListener
from objparse.objparse_lexer import LexicalPosition
from objparse.objparse_parser import Parser


def test_parse_event_repr() -> None:
    e = ParseEvent("command_o", LexicalPosition(3, 1), {"name": "Cube"})
    assert repr(e) == "ParseEvent(command_o, 3:1, name='Cube')"


def test_parse_event_eq() -> None:
    p = LexicalPosition(1, 1)
    assert ParseEvent("eof", p) == ParseEvent("eof", p)
    assert ParseEvent("eof", p) != ParseEvent("eof", LexicalPosition(2, 1))
    assert ParseEvent("command_o", p, {"name": "a"}) != ParseEvent(
        "command_o", p, {"name": "b"}
    )
    assert ParseEvent("eof", p) != "eof"


def test_parse_event_eq_compares_causes_by_text() -> None:
    p = LexicalPosition(1, 1)
    a = ParseEvent("fatal_error", p, {"cause": OSError("x"), "message": "x"})
    b = ParseEvent("fatal_error", p, {"cause": OSError("x"), "message": "x"})
    assert a == b


def test_parse_event_eq_nan_payload() -> None:
    p = LexicalPosition(1, 1)
    nan = {"index": 1, "x": float("nan"), "y": 0.0, "z": 0.0, "w": 1.0}
    assert ParseEvent("command_v", p, nan) == ParseEvent("command_v", p, dict(nan))
    assert ParseEvent("command_v", p, nan) != ParseEvent(
        "command_v", p, {**nan, "x": 0.0}
    )


def test_nan_input_parses_identically_twice() -> None:
    first, second = RecordingListener(), RecordingListener()
    Parser.from_string("v nan 0 0\n", first).run()
    Parser.from_string("v nan 0 0\n", second).run()
    assert first.events == second.events


def test_to_dict_is_json_ready() -> None:
    e = ParseEvent(
        "error",
        LexicalPosition(2, 5, "cube.obj"),
        {"code": ErrorCode.NONEXISTENT_V, "message": "9"},
    )
    d = e.to_dict()
    assert d == {
        "kind": "error",
        "line": 2,
        "col": 5,
        "source": "cube.obj",
        "payload": {"code": "NONEXISTENT_V", "message": "9"},
    }
    assert json.loads(json.dumps(d)) == d


def test_to_dict_fatal_cause() -> None:
    e = ParseEvent(
        "fatal_error",
        LexicalPosition(1, 1),
        {"cause": OSError("gone"), "message": "gone"},
    )
    assert e.to_dict()["payload"]["cause"] == "OSError: gone"


def test_recording_listener_helpers() -> None:
    recorder = RecordingListener()
    Parser.from_string("o Cube\nusemtl wood\no Sphere\n", recorder).run()
    assert recorder.kinds() == [
        "line",
        "command_o",
        "line",
        "command_usemtl",
        "line",
        "command_o",
        "eof",
    ]
    assert [e.payload["name"] for e in recorder.of_kind("command_o")] == [
        "Cube",
        "Sphere",
    ]


@given(st.text(min_size=1).filter(lambda s: s.strip() == s and " " not in s))  # type: ignore[misc]
def test_to_dict_keeps_names(name: str) -> None:
    e = ParseEvent("command_mtllib", LexicalPosition(1, 1), {"name": name})
    assert e.to_dict()["payload"]["name"] == name
