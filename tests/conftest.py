import os
from collections.abc import Callable
from typing import Any

import pytest

from objparse.objparse_events import ParseEvent, RecordingListener
from objparse.objparse_parser import Parser

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Nukes the teardown assertion that fails in act
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


class UnreachableListener(RecordingListener):
    """Records events, failing the test on any event kind not explicitly allowed."""

    def __init__(self, *allowed: str) -> None:
        super().__init__()
        self.allowed = {"eof", *allowed}

    def _record(self, kind: str, position: Any, **payload: Any) -> None:
        if kind not in self.allowed:
            pytest.fail(f"unreachable event {kind} at {position}: {payload}")
        super()._record(kind, position, **payload)


def parse(text: str, listener: RecordingListener | None = None) -> RecordingListener:
    recorder = listener if listener is not None else RecordingListener()
    Parser.from_string(text, recorder).run()
    return recorder


@pytest.fixture  # type: ignore[misc]
def parse_text() -> Callable[..., RecordingListener]:
    return parse


@pytest.fixture  # type: ignore[misc]
def parse_only() -> Callable[..., list[ParseEvent]]:
    """Parses text through an UnreachableListener allowing only the given kinds."""

    def run(text: str, *allowed: str) -> list[ParseEvent]:
        return parse(text, UnreachableListener(*allowed)).events

    return run
