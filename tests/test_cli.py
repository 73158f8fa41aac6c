import json
from pathlib import Path

import pytest

from objparse import objparse_cli
from objparse.objparse_cli import EXIT_ERRORS, EXIT_FAILURE, EXIT_OK
from objparse.objparse_parser import Parser

CUBE = "o Cube\nv 0 0 0\nv 1 0 0\nv 0 1 0\nf 1// 2// 3//\n"


def write(tmp_path: Path, text: str, name: str = "model.obj") -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_clean_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert objparse_cli.main([write(tmp_path, CUBE)]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error" not in captured.err


def test_errors_are_counted_and_located(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = write(tmp_path, CUBE + "f 1// 2// 9//\nbogus\n")
    assert objparse_cli.main([path]) == EXIT_ERRORS
    err = capsys.readouterr().err.splitlines()
    assert f"error: {path}:6:11: Nonexistent v component: 9" in err
    assert f"error: {path}:7:1: Unrecognized command: bogus" in err
    assert "error: Encountered 2 errors." in err


def test_caret_under_column(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = write(tmp_path, "v 1.0 x 3.0\n")
    objparse_cli.main([path])
    err = capsys.readouterr().err.splitlines()
    assert err[0].startswith(f"error: {path}:1:7: Bad command syntax:")
    assert err[1] == "v 1.0 x 3.0"
    assert err[2] == "      ^"


def test_fatal_error_exit_code(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = write(tmp_path, "v 1 \\\n")
    assert objparse_cli.main([path]) == EXIT_FAILURE
    assert f"fatal: {path}:2:1: Unexpected EOF" in capsys.readouterr().err


def test_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert objparse_cli.main([str(tmp_path / "nope.obj")]) == EXIT_FAILURE
    assert "i/o error: FileNotFoundError" in capsys.readouterr().err


def test_unknown_encoding(tmp_path: Path) -> None:
    path = write(tmp_path, CUBE)
    assert objparse_cli.main([path, "--encoding", "no-such-codec"]) == EXIT_FAILURE


def test_bad_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    assert objparse_cli.main([]) == EXIT_FAILURE
    assert objparse_cli.main(["a.obj", "--bogus"]) == EXIT_FAILURE


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert objparse_cli.main(["--help"]) == EXIT_OK
    assert "objparse-check" in capsys.readouterr().out


def test_events_dump(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = write(tmp_path, "o Cube\n")
    assert objparse_cli.main([path, "--events"]) == EXIT_OK
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [e["kind"] for e in events] == ["line", "command_o", "eof"]
    assert events[1] == {
        "kind": "command_o",
        "line": 1,
        "col": 1,
        "source": path,
        "payload": {"name": "Cube"},
    }


def test_latin1_file(tmp_path: Path) -> None:
    path = tmp_path / "latin.obj"
    path.write_bytes("o Würfel\n".encode("latin-1"))
    assert objparse_cli.main([str(path)]) == EXIT_FAILURE
    assert objparse_cli.main([str(path), "--encoding", "latin-1"]) == EXIT_OK


def test_verbose_logs_progress(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = write(tmp_path, "o Cube\n")
    with caplog.at_level("DEBUG", logger="objparse"):
        assert objparse_cli.main([path, "-v"]) == EXIT_OK
    assert any("command: o" in r.getMessage() for r in caplog.records)


def test_checker_keeps_only_current_line(capsys: pytest.CaptureFixture[str]) -> None:
    listener = objparse_cli.CheckerListener()
    Parser.from_string(CUBE + "bogus\n" + "v 0 0 0\n" * 50, listener).run()
    assert listener.events == []
    assert listener.line == (56, "v 0 0 0")
    assert listener.error_count == 1
    err = capsys.readouterr().err.splitlines()
    assert err == ["error: 6:1: Unrecognized command: bogus", "bogus", "^"]


def test_checker_records_events_on_request() -> None:
    listener = objparse_cli.CheckerListener(record=True)
    Parser.from_string("o Cube\n", listener).run()
    assert listener.kinds() == ["line", "command_o", "eof"]
