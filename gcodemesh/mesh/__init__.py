"""Mesh building: mitered ribbons, PLY output and layer statistics.

Submodules:
  models    Mesh dataclass and GeometryError.
  builder   Miter mesh builder (8 vertices / 4 quads per segment).
  ply       ASCII PLY writer.
  stats     Per-layer path length and bounds.
"""

from .models import Mesh, GeometryError
from .builder import build_layer_mesh, layer_thickness, miter_scale
from .ply import format_ply, write_ply, mesh_totals
from .stats import LayerSummary, summarize_layer

__all__ = [
    "Mesh", "GeometryError",
    "build_layer_mesh", "layer_thickness", "miter_scale",
    "format_ply", "write_ply", "mesh_totals",
    "LayerSummary", "summarize_layer",
]
