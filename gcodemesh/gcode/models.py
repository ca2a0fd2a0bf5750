"""Toolpath dataclasses shared by the parser, segmenter and path extractor."""

from __future__ import annotations

from dataclasses import dataclass, field

from gcodemesh.geometry import Vec3


@dataclass(frozen=True)
class Position:
    """Nozzle position plus the extrusion axis.

    Updated by replacement: a command that omits an axis carries the
    previous value forward.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    e: float = 0.0

    @property
    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def same_place(self, other: Position, tolerance: float = 0.0) -> bool:
        """Compare X/Y/Z only; the extrusion axis is ignored."""
        if tolerance <= 0.0:
            return self.x == other.x and self.y == other.y and self.z == other.z
        return (abs(self.x - other.x) <= tolerance
                and abs(self.y - other.y) <= tolerance
                and abs(self.z - other.z) <= tolerance)


@dataclass
class Segment:
    """One extruding move from ``start`` to ``end``."""

    start: Position
    end: Position
    direction: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        self.direction = (self.end.xyz - self.start.xyz).normalize()


@dataclass
class Layer:
    """Raw G-code lines that share one effective print height."""

    lines: list[str] = field(default_factory=list)
    z_height: float = 0.0
