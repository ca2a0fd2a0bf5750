"""Tests for the ASCII PLY writer."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from gcodemesh.gcode import Position, Segment
from gcodemesh.geometry import Vec3
from gcodemesh.mesh import Mesh, build_layer_mesh, format_ply, mesh_totals, write_ply

HEADER_LEN = 9


def _square_mesh(z: float) -> Mesh:
    pts = [Position(0, 0, z), Position(10, 0, z), Position(10, 10, z)]
    return build_layer_mesh([Segment(pts[0], pts[1]), Segment(pts[1], pts[2])], height=0.2)


class TestFormatPly(unittest.TestCase):

    def setUp(self):
        self.meshes = [_square_mesh(0.2), _square_mesh(0.4)]
        self.lines = list(format_ply(self.meshes))

    def test_header(self):
        self.assertEqual(self.lines[:HEADER_LEN], [
            "ply",
            "format ascii 1.0",
            "element vertex 32",
            "property float x",
            "property float y",
            "property float z",
            "element face 16",
            "property list uchar int vertex_index",
            "end_header",
        ])

    def test_declared_counts_match_body(self):
        vertices, faces = mesh_totals(self.meshes)
        self.assertEqual((vertices, faces), (32, 16))
        self.assertEqual(len(self.lines), HEADER_LEN + vertices + faces)

    def test_face_indices_offset_per_mesh(self):
        face_lines = self.lines[HEADER_LEN + 32:]
        self.assertEqual(face_lines[0], "4 1 0 4 5")
        # First face of the second mesh is shifted by 16 vertices
        self.assertEqual(face_lines[8], "4 17 16 20 21")
        for line in face_lines:
            count, *indices = (int(tok) for tok in line.split())
            self.assertEqual(count, 4)
            self.assertTrue(all(0 <= i < 32 for i in indices))

    def test_vertex_lines_drop_extrusion(self):
        mesh = Mesh(vertices=[Vec3(0.0, -0.2, 0.30000000000000004)], faces=[])
        lines = list(format_ply([mesh]))
        self.assertEqual(lines[HEADER_LEN], "0 -0.2 0.3")

    def test_empty(self):
        lines = list(format_ply([]))
        self.assertEqual(len(lines), HEADER_LEN)
        self.assertIn("element vertex 0", lines)
        self.assertIn("element face 0", lines)


class TestWritePly(unittest.TestCase):

    def test_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.ply"
            self.assertTrue(write_ply([_square_mesh(0.2)], path))
            text = path.read_text(encoding="ascii")
        self.assertTrue(text.startswith("ply\nformat ascii 1.0\n"))
        self.assertTrue(text.endswith("\n"))
        self.assertEqual(len(text.splitlines()), HEADER_LEN + 16 + 8)

    def test_unwritable_path_returns_false(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "no_such_dir" / "out.ply"
            with self.assertLogs("gcodemesh.mesh.ply", level="ERROR"):
                self.assertFalse(write_ply([], path))
            self.assertFalse(path.exists())
