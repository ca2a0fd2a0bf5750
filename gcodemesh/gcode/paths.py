"""Path extractor — replays layers and collects extruding segments.

The same ``ToolpathState`` is used for every layer, so position and
extrusion maximum carry across layer boundaries.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models import Layer, Segment
from .parser import is_comment_or_blank
from .state import ToolpathState

log = logging.getLogger("gcodemesh.gcode.paths")


def extract_segments(layer: Layer, state: ToolpathState) -> list[Segment]:
    """Extruding segments of one layer, in file order.

    ``state`` is updated in place and must be passed on to the next
    layer.
    """
    segments: list[Segment] = []
    for line in layer.lines:
        if is_comment_or_blank(line):
            continue
        state.apply_reset(line)
        point = state.advance(line)
        if point is None:
            continue

        is_extruding, did_move = state.classify(point, state.previous)
        if is_extruding and did_move:
            segment = Segment(state.previous, point)
            # Zero-length or NaN moves have no usable direction
            if segment.direction.is_well_defined():
                segments.append(segment)
        state.previous = point
    return segments


def extract_layer_paths(
    layers: Sequence[Layer],
    state: ToolpathState | None = None,
    tolerance: float = 0.0,
) -> list[list[Segment]]:
    """One segment list per layer (possibly empty), in layer order."""
    if state is None:
        state = ToolpathState(tolerance=tolerance)
    paths = [extract_segments(layer, state) for layer in layers]
    log.debug(
        "Extracted %d segments across %d layers",
        sum(len(p) for p in paths), len(paths),
    )
    return paths
