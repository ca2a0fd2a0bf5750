"""Per-layer toolpath statistics for logging and the pipeline result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from shapely.geometry import MultiLineString

from gcodemesh.gcode.models import Segment


@dataclass
class LayerSummary:
    """What one retained layer contributed to the mesh."""

    index: int
    z_height: float
    segment_count: int
    path_length_mm: float                               # XY length of extruding moves
    bounds: tuple[float, float, float, float] | None    # (min_x, min_y, max_x, max_y)
    meshed: bool = False

    def describe(self) -> str:
        if self.bounds is None:
            return f"Layer {self.index} @ Z={self.z_height:.3f}: no extrusion"
        min_x, min_y, max_x, max_y = self.bounds
        return (
            f"Layer {self.index} @ Z={self.z_height:.3f}: "
            f"{self.segment_count} segments, {self.path_length_mm:.1f} mm, "
            f"X {min_x:.1f}..{max_x:.1f} Y {min_y:.1f}..{max_y:.1f}"
        )


def summarize_layer(index: int, z_height: float,
                    segments: Sequence[Segment]) -> LayerSummary:
    if not segments:
        return LayerSummary(index, z_height, 0, 0.0, None)

    lines = MultiLineString([
        [(s.start.x, s.start.y), (s.end.x, s.end.y)]
        for s in segments
    ])
    return LayerSummary(
        index=index,
        z_height=z_height,
        segment_count=len(segments),
        path_length_mm=lines.length,
        bounds=tuple(lines.bounds),
    )
