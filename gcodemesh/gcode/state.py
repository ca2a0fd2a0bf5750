"""Extrusion state tracker — carries position and extrusion across layers.

One ``ToolpathState`` is threaded through the whole file.  It is never
reset at a layer boundary: the running extrusion maximum decides whether
a move deposits material, and that maximum is a property of the file,
not of a layer.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .models import Position
from .parser import tokenize, parse_motion


@dataclass
class ToolpathState:
    """Mutable parser state shared by every layer of one file."""

    current: Position = field(default_factory=Position)
    previous: Position = field(default_factory=Position)
    max_extrusion: float = 0.0
    tolerance: float = 0.0

    def apply_reset(self, line: str) -> bool:
        """Handle ``G92 E<v>``: redefine the extrusion origin.

        Sets both ``current.e`` and ``max_extrusion`` to ``v``.  Not a
        move; other axes on the command are ignored.
        """
        command = tokenize(line)
        if command is None or not command.is_reset or not command.has("E"):
            return False
        value = command.fields["E"]
        self.max_extrusion = value
        self.current = dataclasses.replace(self.current, e=value)
        return True

    def classify(self, point: Position, previous: Position) -> tuple[bool, bool]:
        """Return ``(is_extruding, did_move)`` and update the maximum.

        ``is_extruding`` is a strict comparison against the maximum seen
        *before* this point.
        """
        is_extruding = point.e > self.max_extrusion + self.tolerance
        did_move = not point.same_place(previous, self.tolerance)
        self.max_extrusion = max(self.max_extrusion, point.e)
        return is_extruding, did_move

    def advance(self, line: str) -> Position | None:
        """Parse a motion line into ``current``; ``None`` if not a move."""
        point = parse_motion(line, self.current)
        if point is not None:
            self.current = point
        return point
