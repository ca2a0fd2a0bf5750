"""Shared reconstruction parameters for the G-code → mesh pipeline.

The layer segmenter, path extractor and mesh builder all read their
tolerances and cross-section dimensions from ``MeshRules``.  The CLI
derives a variant with ``dataclasses.replace``; library callers pass
their own instance or fall back to ``MESH_RULES``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class SingleSegmentPolicy(str, Enum):
    """What the pipeline does with a layer that has exactly one segment."""

    ABORT = "abort"     # re-raise GeometryError, write nothing
    SKIP = "skip"       # log a warning, emit no mesh for that layer


@dataclass(frozen=True)
class MeshRules:
    """Reconstruction parameters.

    All distances are in millimetres.
    """

    extrusion_width_mm: float = 0.4
    """Width of the rectangular cross-section of every extruded ribbon."""

    max_miter_scale: float = 10.0
    """Upper bound on the miter widening factor at a joint.  Bounds the
    spike length when the path nearly reverses on itself."""

    tolerance: float = 0.0
    """Epsilon for position, extrusion and layer-height comparisons.
    ``0.0`` means exact float equality."""

    single_segment_policy: SingleSegmentPolicy = SingleSegmentPolicy.ABORT
    """ABORT re-raises GeometryError; SKIP drops the layer with a warning."""

    def __post_init__(self) -> None:
        if not (math.isfinite(self.extrusion_width_mm) and self.extrusion_width_mm > 0.0):
            raise ValueError(f"extrusion width must be positive, got {self.extrusion_width_mm}")
        if not (math.isfinite(self.max_miter_scale) and self.max_miter_scale >= 1.0):
            raise ValueError(f"miter clamp must be at least 1, got {self.max_miter_scale}")
        if not (math.isfinite(self.tolerance) and self.tolerance >= 0.0):
            raise ValueError(f"tolerance must be a non-negative number, got {self.tolerance}")


# Module-level default, shared by the CLI and the pipeline.
MESH_RULES = MeshRules()
