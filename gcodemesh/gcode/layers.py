"""
Layer segmenter — groups raw G-code lines into print layers.

Pass 1 starts a new layer at every G0/G1 move that carries a ``Z``
field.  Pass 2 folds back layers that would only fragment the mesh:

  - layers without any extruding move (Z hops, travel-only lifts)
  - layers at the same height as the layer they follow (probing,
    purge lines, Z-hop returns)

A leading layer that never extrudes (the start G-code, or the empty
accumulator before the first Z move) is carried forward into the first
layer that does.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .models import Layer
from .parser import is_extruding_command, z_trigger

log = logging.getLogger("gcodemesh.gcode.layers")


def split_layers(lines: Iterable[str]) -> list[Layer]:
    """Pass 1: cut the line stream at every Z move."""
    layers: list[Layer] = []
    layer = Layer()
    for line in lines:
        z = z_trigger(line)
        if z is not None:
            layers.append(layer)
            layer = Layer(z_height=z)
        layer.lines.append(line)
    layers.append(layer)
    return layers


def _same_height(a: float, b: float, tolerance: float) -> bool:
    if tolerance <= 0.0:
        return a == b
    return abs(a - b) <= tolerance


def _has_extrusion(layer: Layer) -> bool:
    return any(is_extruding_command(line) for line in layer.lines)


def merge_layers(layers: list[Layer], tolerance: float = 0.0) -> list[Layer]:
    """Pass 2: fold travel-only and same-height layers into the retained one."""
    if not layers:
        return []

    merged: list[Layer] = []
    retained = Layer(lines=list(layers[0].lines), z_height=layers[0].z_height)
    retained_extrudes = _has_extrusion(retained)

    for layer in layers[1:]:
        extrudes = _has_extrusion(layer)
        if not extrudes or _same_height(layer.z_height, retained.z_height, tolerance):
            retained.lines.extend(layer.lines)
            retained_extrudes = retained_extrudes or extrudes
        elif not retained_extrudes:
            # Nothing printed yet: carry the preamble forward
            retained = Layer(lines=retained.lines + layer.lines,
                             z_height=layer.z_height)
            retained_extrudes = True
        else:
            merged.append(retained)
            retained = Layer(lines=list(layer.lines), z_height=layer.z_height)
            retained_extrudes = True

    merged.append(retained)
    log.debug("Merged %d raw layers into %d", len(layers), len(merged))
    return merged


def segment_layers(lines: Iterable[str], tolerance: float = 0.0) -> list[Layer]:
    """Run both passes over an in-memory line sequence."""
    return merge_layers(split_layers(lines), tolerance)


def read_layers(path: Path | str, tolerance: float = 0.0) -> list[Layer]:
    """Read a G-code file and segment it into layers.

    An unreadable file is logged and yields an empty list.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            lines = [line.rstrip("\r\n") for line in f]
    except OSError as exc:
        log.error("Failed to open file: %s (%s)", path, exc)
        return []

    layers = segment_layers(lines, tolerance)
    log.info("Read %d lines from %s → %d layers", len(lines), path.name, len(layers))
    return layers
