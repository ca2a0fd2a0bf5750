"""
Miter mesh builder — turns a layer's segments into quad ribbons.

Every segment becomes a box of ``width`` × ``height`` cross-section
without end caps: 8 vertices and 4 side-wall quads.  At a joint the
cross-section is rotated onto the bisector of the two directions and
widened by ``1 / cos(angle / 2)`` so neighbouring ribbons line up.

Cross-section corner order (looking along the path):

    1 ─── 0        0 = +right +up
    │     │        1 = -right +up
    2 ─── 3        2 = -right -up,  3 = +right -up

Segments are not welded: each one owns its 8 vertices.
"""

from __future__ import annotations

import math
from typing import Sequence

from gcodemesh.config import MESH_RULES
from gcodemesh.gcode.models import Segment
from gcodemesh.geometry import UP, X_AXIS, Vec3, angle_between

from .models import Mesh, GeometryError

# Corner order of a cross-section: (right sign, up sign)
_CORNERS = ((1, 1), (-1, 1), (-1, -1), (1, -1))

# Side walls, as offsets into a segment's 8 vertices (0-3 start, 4-7 end)
_SIDE_FACES = (
    (1, 0, 4, 5),
    (2, 1, 5, 6),
    (3, 2, 6, 7),
    (0, 3, 7, 4),
)


def layer_thickness(current_z: float, previous_z: float) -> float:
    """Height of a layer's ribbons.

    A layer below its predecessor (the file jumped down in Z) is
    measured from 0.
    """
    if current_z < previous_z:
        previous_z = 0.0
    return current_z - previous_z


def miter_scale(a: Vec3, b: Vec3, max_scale: float = MESH_RULES.max_miter_scale) -> float:
    """Widening factor for the joint between directions ``a`` and ``b``.

    Always in ``[1.0, max_scale]``.
    """
    angle = angle_between(a, b)
    if angle is None:
        return 1.0
    half_cos = math.cos(angle / 2.0)
    if half_cos <= 0.0:
        return max_scale
    scale = 1.0 / half_cos
    if not math.isfinite(scale):
        return 1.0
    return min(scale, max_scale)


def _joint(direction: Vec3, neighbour: Segment | None,
           max_scale: float) -> tuple[Vec3, float]:
    """Cap direction and miter scale at one end of a segment."""
    if neighbour is None or not neighbour.direction.is_well_defined():
        return direction, 1.0

    blended = (direction + neighbour.direction).normalize()
    cap_dir = blended if blended.is_well_defined() else direction
    return cap_dir, miter_scale(direction, neighbour.direction, max_scale)


def _right_vector(cap_dir: Vec3, fallback: Vec3) -> Vec3:
    right = cap_dir.cross(UP).normalize()
    if right.is_well_defined():
        return right
    right = fallback.cross(UP).normalize()
    if right.is_well_defined():
        return right
    # Vertical move: any horizontal axis will do
    return X_AXIS


def _cap(center: Vec3, right: Vec3, half_width: float,
         half_height: float) -> list[Vec3]:
    return [
        center + right * (rs * half_width) + UP * (us * half_height)
        for rs, us in _CORNERS
    ]


def build_layer_mesh(
    segments: Sequence[Segment],
    height: float,
    width: float = MESH_RULES.extrusion_width_mm,
    max_miter: float = MESH_RULES.max_miter_scale,
    *,
    layer_index: int | None = None,
) -> Mesh:
    """Build the ribbon mesh for one layer's ordered segments.

    Parameters
    ----------
    segments : sequence of Segment
        Extruding segments in print order.  Every direction must be well
        defined (the path extractor guarantees this).
    height : float
        Layer thickness, see ``layer_thickness``.
    width : float
        Cross-section width.
    max_miter : float
        Clamp for the miter widening factor.
    layer_index : int, optional
        Only used in the error message.

    Returns
    -------
    Mesh
        ``8 * len(segments)`` vertices and ``4 * len(segments)`` faces.

    Raises
    ------
    GeometryError
        If exactly one segment is given: there is nothing to miter
        against.
    """
    if len(segments) == 1:
        raise GeometryError(1, "a single segment has no joint to miter",
                            layer_index=layer_index)

    mesh = Mesh()
    half_width = width / 2.0
    half_height = height / 2.0
    last = len(segments) - 1

    for i, seg in enumerate(segments):
        prev_seg = segments[i - 1] if i > 0 else None
        next_seg = segments[i + 1] if i < last else None

        start_dir, start_scale = _joint(seg.direction, prev_seg, max_miter)
        end_dir, end_scale = _joint(seg.direction, next_seg, max_miter)

        right_start = _right_vector(start_dir, seg.direction) * start_scale
        right_end = _right_vector(end_dir, seg.direction) * end_scale

        base = len(mesh.vertices)
        mesh.vertices.extend(_cap(seg.start.xyz, right_start, half_width, half_height))
        mesh.vertices.extend(_cap(seg.end.xyz, right_end, half_width, half_height))
        mesh.faces.extend(
            (base + a, base + b, base + c, base + d)
            for a, b, c, d in _SIDE_FACES
        )

    return mesh
