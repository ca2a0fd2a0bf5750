"""
ASCII PLY writer for the per-layer meshes.

Meshes are concatenated in order.  Each mesh indexes its own vertices,
so face indices are shifted by the number of vertices written before
that mesh.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Sequence

from .models import Mesh

log = logging.getLogger("gcodemesh.mesh.ply")


def mesh_totals(meshes: Sequence[Mesh]) -> tuple[int, int]:
    """Return ``(vertex_count, face_count)`` across all meshes."""
    return (
        sum(m.vertex_count for m in meshes),
        sum(m.face_count for m in meshes),
    )


def ply_header(vertex_count: int, face_count: int) -> list[str]:
    return [
        "ply",
        "format ascii 1.0",
        f"element vertex {vertex_count}",
        "property float x",
        "property float y",
        "property float z",
        f"element face {face_count}",
        "property list uchar int vertex_index",
        "end_header",
    ]


def format_ply(meshes: Sequence[Mesh]) -> Iterator[str]:
    """Yield the PLY file line by line (without newlines)."""
    vertex_count, face_count = mesh_totals(meshes)
    yield from ply_header(vertex_count, face_count)

    for mesh in meshes:
        for v in mesh.vertices:
            yield f"{v.x:g} {v.y:g} {v.z:g}"

    offset = 0
    for mesh in meshes:
        for face in mesh.faces:
            yield "4 " + " ".join(str(i + offset) for i in face)
        offset += mesh.vertex_count


def write_ply(meshes: Sequence[Mesh], path: Path | str) -> bool:
    """Write ``meshes`` to an ASCII PLY file.

    Returns ``False`` (after logging) if the file cannot be created.
    """
    path = Path(path)
    try:
        with path.open("w", encoding="ascii", newline="\n") as f:
            for line in format_ply(meshes):
                f.write(line + "\n")
    except OSError as exc:
        log.error("Failed to create PLY file: %s (%s)", path, exc)
        return False

    vertex_count, face_count = mesh_totals(meshes)
    log.info("Wrote %s: %d vertices, %d faces", path.name, vertex_count, face_count)
    return True
