"""
Lexical layer of the objparse Wavefront OBJ parser.

This module turns raw input lines into the units the parser dispatches on:

Classes:
    LexicalPosition: Immutable line/column/source snapshot handed to listeners.
    Token: A maximal run of non-whitespace within a logical line, with its offset.
    LineReader: Assembles logical lines from physical lines, tracking position.

Functions:
    tokenize(text): Splits a command string on runs of Unicode whitespace.

Features:
    - Backslash continuation: a physical line ending in `\\` with no `#` on it is
      joined with the next physical line.
    - Line terminators (`\\n`, `\\r\\n`, `\\r`) are removed before inspection.
    - Positions are 1-based for both line and column.

Example:
    >>> reader = LineReader(["v 1 2 \\\\", "3"])
    >>> reader.next_line()
    'v 1 2 3'
    >>> reader.line
    2

Exports:
    - LexicalPosition
    - Token
    - LineReader
    - tokenize
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

log = logging.getLogger("objparse.lexer")

WHITESPACE_RUN = re.compile(r"\S+")


@dataclass(frozen=True)
class LexicalPosition:
    """A point in the input, as reported to listeners.

    Attributes:
        line (int): The 1-based line number.
        column (int): The 1-based column number.
        source_name (str | None): Name of the input (e.g. a file path), if any.
    """

    line: int
    column: int
    source_name: str | None = None

    def __str__(self) -> str:
        prefix = f"{self.source_name}:" if self.source_name else ""
        return f"{prefix}{self.line}:{self.column}"


class Token:
    """A whitespace-delimited word of a logical line.

    Attributes:
        text (str): The raw token text.
        offset (int): The 0-based character offset of the token in its line.
    """

    def __init__(self, text: str, offset: int = 0):
        self.text = text
        self.offset = offset

    @property
    def column(self) -> int:
        """The 1-based column at which the token starts."""
        return self.offset + 1

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.offset})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.text == other.text
            and self.offset == other.offset
        )

    def __hash__(self) -> int:
        return hash((self.text, self.offset))


def tokenize(text: str) -> list[Token]:
    """Splits `text` into tokens on runs of whitespace.

    Args:
        text (str): The command portion of a logical line.

    Returns:
        list[Token]: The tokens in order, each carrying its starting offset.
    """
    return [Token(m.group(), m.start()) for m in WHITESPACE_RUN.finditer(text)]


class LineReader:
    """Reads logical lines from an iterable of physical lines.

    The reader owns the running line and column counters used for every
    position reported during a parse run.

    Attributes:
        line (int): Current 1-based line number.
        column (int): Current 1-based column number.
        source_name (str | None): Optional input name carried into positions.
        dangling (bool): True if input ended while a continuation was pending.
    """

    def __init__(
        self,
        lines: Iterable[str],
        source_name: str | None = None,
        line: int = 1,
        column: int = 1,
    ) -> None:
        """Initializes the reader.

        Args:
            lines (Iterable[str]): Physical lines, with or without terminators.
            source_name (str | None, optional): Name used in positions.
            line (int, optional): Starting line number. Defaults to 1.
            column (int, optional): Starting column number. Defaults to 1.
        """
        self._lines: Iterator[str] = iter(lines)
        self.source_name = source_name
        self.line = line
        self.column = column
        self.dangling = False

    def position(self, column: int | None = None) -> LexicalPosition:
        """Returns a snapshot of the current position.

        Args:
            column (int | None, optional): Overrides the column of the snapshot.

        Returns:
            LexicalPosition: An immutable copy of the current position.
        """
        return LexicalPosition(
            self.line, self.column if column is None else column, self.source_name
        )

    def advance_line(self) -> None:
        """Moves to the start of the next line."""
        self.line += 1
        self.column = 1

    def next_line(self) -> str | None:
        """Reads the next logical line.

        Physical lines ending in a backslash (and containing no `#`) are joined
        with their successor; the backslash itself is dropped. Each joined
        physical line advances the line counter.

        Returns:
            str | None: The logical line, or None at end of input. When None is
            returned after a pending continuation, `dangling` is set.

        Raises:
            OSError: If reading the underlying input fails.
            UnicodeDecodeError: If the underlying input cannot be decoded.
        """
        buffer: list[str] = []
        slash = False
        while True:
            physical = next(self._lines, None)
            if physical is None:
                log.debug("eof at line %d", self.line)
                self.dangling = slash
                return None

            physical = physical.rstrip("\r\n")
            if physical.endswith("\\") and "#" not in physical:
                slash = True
                buffer.append(physical[:-1])
                self.advance_line()
                continue

            buffer.append(physical)
            return "".join(buffer)


__all__ = ["LexicalPosition", "LineReader", "Token", "tokenize"]
