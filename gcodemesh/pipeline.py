"""
G-code → mesh pipeline orchestrator.

This is the single entry point the CLI calls.  It:

1. Reads the G-code and segments it into retained layers
2. Replays every layer through one ToolpathState to collect segments
3. Builds a mitered ribbon mesh per layer
4. Writes all meshes to one ASCII PLY file
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from gcodemesh.config import MESH_RULES, MeshRules, SingleSegmentPolicy
from gcodemesh.gcode import Layer, Segment, ToolpathState, extract_layer_paths, read_layers
from gcodemesh.mesh import (
    GeometryError,
    LayerSummary,
    Mesh,
    build_layer_mesh,
    layer_thickness,
    mesh_totals,
    summarize_layer,
    write_ply,
)

log = logging.getLogger("gcodemesh.pipeline")


@dataclass
class MeshPipelineResult:
    """Full result of one G-code → PLY run."""

    success: bool
    message: str
    layer_count: int = 0
    mesh_count: int = 0
    vertex_count: int = 0
    face_count: int = 0
    skipped_layers: list[int] = field(default_factory=list)
    summaries: list[LayerSummary] = field(default_factory=list)


def build_meshes(
    layers: Sequence[Layer],
    paths: Sequence[Sequence[Segment]],
    rules: MeshRules = MESH_RULES,
) -> tuple[list[Mesh], list[int]]:
    """Build one mesh per layer that has segments.

    Returns ``(meshes, skipped_layer_indices)``.  Under the ABORT policy
    a single-segment layer raises ``GeometryError``.
    """
    meshes: list[Mesh] = []
    skipped: list[int] = []

    for i, (layer, segments) in enumerate(zip(layers, paths)):
        if not segments:
            continue
        previous_z = layers[i - 1].z_height if i > 0 else 0.0
        height = layer_thickness(layer.z_height, previous_z)
        try:
            mesh = build_layer_mesh(
                segments,
                height,
                rules.extrusion_width_mm,
                rules.max_miter_scale,
                layer_index=i,
            )
        except GeometryError as exc:
            if rules.single_segment_policy is SingleSegmentPolicy.ABORT:
                raise
            log.warning("Skipping layer %d (Z=%.3f): %s", i, layer.z_height, exc.reason)
            skipped.append(i)
            continue
        meshes.append(mesh)

    return meshes, skipped


def run_mesh_pipeline(
    input_path: Path | str,
    output_path: Path | str,
    rules: MeshRules = MESH_RULES,
) -> MeshPipelineResult:
    """Convert a G-code file into a PLY mesh.

    Parameters
    ----------
    input_path : Path
        G-code file to read.  If it cannot be opened the run continues
        with no layers and writes an empty mesh.
    output_path : Path
        PLY file to create.
    rules : MeshRules
        Cross-section width, miter clamp, tolerance and single-segment
        policy.

    Returns
    -------
    MeshPipelineResult

    Raises
    ------
    GeometryError
        A layer has exactly one segment and the policy is ABORT.  No
        output file is written in that case.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    # ── 1. Layers ─────────────────────────────────────────────────
    layers = read_layers(input_path, rules.tolerance)

    # ── 2. Segments ───────────────────────────────────────────────
    state = ToolpathState(tolerance=rules.tolerance)
    paths = extract_layer_paths(layers, state)

    summaries = [
        summarize_layer(i, layer.z_height, segments)
        for i, (layer, segments) in enumerate(zip(layers, paths))
    ]

    # ── 3. Meshes ─────────────────────────────────────────────────
    meshes, skipped = build_meshes(layers, paths, rules)
    for summary in summaries:
        summary.meshed = summary.segment_count > 0 and summary.index not in skipped
        log.debug("%s", summary.describe())

    total_length = sum(s.path_length_mm for s in summaries)
    log.info(
        "%d layers, %d meshed, %.1f mm of extrusion path",
        len(layers), len(meshes), total_length,
    )

    # ── 4. Output ─────────────────────────────────────────────────
    vertex_count, face_count = mesh_totals(meshes)
    written = write_ply(meshes, output_path)
    if written:
        message = f"Saved {len(meshes)} layers to PLY file: {output_path}"
    else:
        message = f"Failed to create PLY file: {output_path}"

    return MeshPipelineResult(
        success=written,
        message=message,
        layer_count=len(layers),
        mesh_count=len(meshes),
        vertex_count=vertex_count,
        face_count=face_count,
        skipped_layers=skipped,
        summaries=summaries,
    )
