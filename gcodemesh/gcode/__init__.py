"""G-code reading: tokenizer, extrusion tracking, layers and paths.

Submodules:
  models   Position, Segment and Layer dataclasses.
  parser   Whitespace tokenizer and G0/G1 motion parser.
  state    ToolpathState (carry-forward position + extrusion maximum).
  layers   Two-pass layer segmenter.
  paths    Per-layer extruding segment extraction.
"""

from .models import Position, Segment, Layer
from .parser import Command, tokenize, parse_motion
from .state import ToolpathState
from .layers import split_layers, merge_layers, segment_layers, read_layers
from .paths import extract_segments, extract_layer_paths

__all__ = [
    # Models
    "Position", "Segment", "Layer",
    # Parsing
    "Command", "tokenize", "parse_motion",
    "ToolpathState",
    # Layers
    "split_layers", "merge_layers", "segment_layers", "read_layers",
    # Paths
    "extract_segments", "extract_layer_paths",
]
