"""
Rebuild a printable-looking surface mesh from G-code.

Each extruding G0/G1 move becomes a ribbon with a rectangular
cross-section; ribbons are mitered at path joints and written out,
layer by layer, as one ASCII PLY file.
"""
