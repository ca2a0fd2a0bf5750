"""
G-code command tokenizer and motion parser.

A line is split on whitespace after its inline ``;`` comment is removed.
The first token is the opcode (letter + integer code, so ``G1``, ``G01``
and ``g1`` are the same command); every later token is one field, a
single letter immediately followed by a decimal number:

    G1 X10.5 Y3 E0.42 F1800 ; perimeter

Tokens that do not parse are dropped without error.  Non-finite numbers
(``nan``, ``inf``) count as malformed, so the axis keeps its value.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

from .models import Position

COMMENT_MARKER = ";"

MOTION_OPCODES = frozenset({("G", 0), ("G", 1)})
RESET_OPCODE = ("G", 92)

AXES = ("X", "Y", "Z", "E")


@dataclass(frozen=True)
class Command:
    """One tokenized G-code line."""

    letter: str
    code: int | None
    fields: dict[str, float] = field(default_factory=dict)

    @property
    def opcode(self) -> tuple[str, int | None]:
        return (self.letter, self.code)

    @property
    def is_motion(self) -> bool:
        return self.opcode in MOTION_OPCODES

    @property
    def is_reset(self) -> bool:
        return self.opcode == RESET_OPCODE

    def has(self, axis: str) -> bool:
        return axis in self.fields


def is_comment_or_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_MARKER)


def _parse_opcode(token: str) -> tuple[str, int | None]:
    letter = token[0].upper()
    try:
        return letter, int(token[1:])
    except ValueError:
        return letter, None


def _parse_field(token: str) -> tuple[str, float] | None:
    if len(token) < 2 or not token[0].isalpha():
        return None
    try:
        value = float(token[1:])
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return token[0].upper(), value


def tokenize(line: str) -> Command | None:
    """Split one line into a ``Command``; ``None`` for blank/comment lines."""
    code_part, _, _ = line.partition(COMMENT_MARKER)
    tokens = code_part.split()
    if not tokens:
        return None

    letter, code = _parse_opcode(tokens[0])
    fields: dict[str, float] = {}
    for token in tokens[1:]:
        parsed = _parse_field(token)
        if parsed is not None:
            key, value = parsed
            fields[key] = value

    return Command(letter=letter, code=code, fields=fields)


def apply_fields(position: Position, command: Command) -> Position:
    """Overwrite the axes present on ``command``; keep the rest."""
    updates = {axis.lower(): command.fields[axis]
               for axis in AXES if axis in command.fields}
    if not updates:
        return position
    return dataclasses.replace(position, **updates)


def parse_motion(line: str, position: Position) -> Position | None:
    """Return the updated position for a G0/G1 line, else ``None``."""
    command = tokenize(line)
    if command is None or not command.is_motion:
        return None
    return apply_fields(position, command)


def is_extruding_command(line: str) -> bool:
    """True for a G0/G1 line that carries an ``E`` field."""
    command = tokenize(line)
    return command is not None and command.is_motion and command.has("E")


def z_trigger(line: str) -> float | None:
    """Z value of a G0/G1 line that carries a ``Z`` field, else ``None``."""
    command = tokenize(line)
    if command is None or not command.is_motion or not command.has("Z"):
        return None
    return command.fields["Z"]
