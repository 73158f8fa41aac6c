"""
Shared constants for the objparse Wavefront OBJ parser.

Exports:
    - COMMANDS: The recognized command vocabulary (case-sensitive).
    - ErrorCode: Classification of recoverable parse errors.
    - FaceShape: The four face vertex reference layouts.
    - FACE_PATTERNS: Anchored patterns for each FaceShape, in priority order.
    - Syntax help strings used as error messages.
"""

import re
from enum import Enum


class ErrorCode(Enum):
    """Kinds of recoverable errors reported through `on_error`."""

    UNRECOGNIZED_COMMAND = "UNRECOGNIZED_COMMAND"
    BAD_COMMAND_SYNTAX = "BAD_COMMAND_SYNTAX"
    BAD_VERTEX_SYNTAX = "BAD_VERTEX_SYNTAX"
    NONEXISTENT_V = "NONEXISTENT_V"
    NONEXISTENT_VT = "NONEXISTENT_VT"
    NONEXISTENT_VN = "NONEXISTENT_VN"


class FaceShape(Enum):
    """Layout of a face vertex reference, fixed per face by its first reference."""

    V_VT_VN = "v/vt/vn"
    V_VT = "v/vt/"
    V_VN = "v//vn"
    V = "v//"


COMMANDS = frozenset({"v", "vn", "vt", "f", "o", "s", "usemtl", "mtllib"})

# Order matters: the first full match decides the shape of the face.
FACE_PATTERNS: tuple[tuple[FaceShape, re.Pattern[str]], ...] = (
    (FaceShape.V_VT_VN, re.compile(r"(\d+)/(\d+)/(\d+)")),
    (FaceShape.V_VT, re.compile(r"(\d+)/(\d+)/")),
    (FaceShape.V_VN, re.compile(r"(\d+)//(\d+)")),
    (FaceShape.V, re.compile(r"(\d+)//")),
)

SMOOTHING_OFF = "off"

SYNTAX_O = "Syntax: 'o' <name>"
SYNTAX_S = "Syntax: 's' (<integer> | 'off')"
SYNTAX_USEMTL = "Syntax: 'usemtl' <name>"
SYNTAX_MTLLIB = "Syntax: 'mtllib' <file>"
SYNTAX_V = "Syntax: 'v' <float> <float> <float> [<float>]"
SYNTAX_VN = "Syntax: 'vn' <float> <float> <float>"
SYNTAX_VT = "Syntax: 'vt' <float> [<float>] [<float>]"
SYNTAX_F = "Syntax: 'f' <vertex> <vertex> <vertex> [<vertex> ...]"
SYNTAX_F_VERTEX = (
    "Syntax:\n"
    "  <integer>/<integer>/<integer>\n"
    "| <integer>/<integer>/\n"
    "| <integer>//<integer>\n"
    "| <integer>//\n"
)

UNEXPECTED_EOF = "Unexpected EOF"


__all__ = [
    "COMMANDS",
    "ErrorCode",
    "FACE_PATTERNS",
    "FaceShape",
    "SMOOTHING_OFF",
    "SYNTAX_F",
    "SYNTAX_F_VERTEX",
    "SYNTAX_MTLLIB",
    "SYNTAX_O",
    "SYNTAX_S",
    "SYNTAX_USEMTL",
    "SYNTAX_V",
    "SYNTAX_VN",
    "SYNTAX_VT",
    "UNEXPECTED_EOF",
]
