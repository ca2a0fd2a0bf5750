"""Mesh output dataclass and builder error."""

from __future__ import annotations

from dataclasses import dataclass, field

from gcodemesh.geometry import Vec3


@dataclass
class Mesh:
    """Vertices plus quad faces indexing into this mesh's own vertices."""

    vertices: list[Vec3] = field(default_factory=list)
    faces: list[tuple[int, int, int, int]] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)


class GeometryError(Exception):
    """Raised when a layer's path cannot be turned into a mitered ribbon."""

    def __init__(self, segment_count: int, reason: str,
                 layer_index: int | None = None) -> None:
        self.segment_count = segment_count
        self.reason = reason
        self.layer_index = layer_index
        where = f"layer {layer_index}" if layer_index is not None else "path"
        super().__init__(f"Cannot build mesh for {where} "
                         f"({segment_count} segments): {reason}")
