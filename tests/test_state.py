"""Tests for ToolpathState: extrusion reset and move classification."""

from __future__ import annotations

import unittest

from gcodemesh.gcode import Position, ToolpathState


class TestApplyReset(unittest.TestCase):

    def test_g92_sets_extrusion_and_maximum(self):
        state = ToolpathState(current=Position(1.0, 2.0, 0.2, 40.0), max_extrusion=40.0)
        self.assertTrue(state.apply_reset("G92 E0"))
        self.assertEqual(state.max_extrusion, 0.0)
        self.assertEqual(state.current, Position(1.0, 2.0, 0.2, 0.0))

    def test_g92_without_e_is_ignored(self):
        state = ToolpathState(max_extrusion=3.0)
        self.assertFalse(state.apply_reset("G92 X0 Y0"))
        self.assertEqual(state.max_extrusion, 3.0)

    def test_non_finite_reset_is_ignored(self):
        state = ToolpathState(current=Position(0.0, 0.0, 0.2, 3.0), max_extrusion=3.0)
        for line in ("G92 Enan", "G92 Einf"):
            self.assertFalse(state.apply_reset(line), line)
        self.assertEqual(state.max_extrusion, 3.0)
        self.assertEqual(state.current.e, 3.0)

    def test_other_commands_are_not_resets(self):
        state = ToolpathState(max_extrusion=3.0)
        for line in ("G1 E0", "M82", "; G92 E0"):
            self.assertFalse(state.apply_reset(line), line)
        self.assertEqual(state.max_extrusion, 3.0)

    def test_reset_value_is_not_extruding(self):
        """After G92 E<v>, a move to E<v> is travel (strictly greater only)."""
        state = ToolpathState(max_extrusion=12.0)
        state.apply_reset("G92 E2.5")
        point = Position(5.0, 0.0, 0.2, 2.5)
        is_extruding, did_move = state.classify(point, Position())
        self.assertFalse(is_extruding)
        self.assertTrue(did_move)


class TestClassify(unittest.TestCase):

    def test_extrusion_compares_before_updating_max(self):
        state = ToolpathState()
        prev = Position()
        self.assertEqual(state.classify(Position(1, 0, 0, 1.0), prev), (True, True))
        self.assertEqual(state.max_extrusion, 1.0)
        # Same E again: not extruding
        self.assertEqual(state.classify(Position(2, 0, 0, 1.0), prev), (False, True))

    def test_retraction_keeps_maximum(self):
        state = ToolpathState(max_extrusion=5.0)
        is_extruding, _ = state.classify(Position(0, 0, 0, 4.2), Position())
        self.assertFalse(is_extruding)
        self.assertEqual(state.max_extrusion, 5.0)

    def test_did_move_ignores_extrusion(self):
        state = ToolpathState()
        here = Position(3.0, 4.0, 0.2, 0.0)
        is_extruding, did_move = state.classify(Position(3.0, 4.0, 0.2, 1.0), here)
        self.assertTrue(is_extruding)
        self.assertFalse(did_move)

    def test_exact_equality_by_default(self):
        state = ToolpathState()
        _, did_move = state.classify(Position(3.0000001, 4.0, 0.2), Position(3.0, 4.0, 0.2))
        self.assertTrue(did_move)

    def test_tolerance(self):
        state = ToolpathState(tolerance=1e-3)
        is_extruding, did_move = state.classify(
            Position(3.0001, 4.0, 0.2, 0.0005), Position(3.0, 4.0, 0.2),
        )
        self.assertFalse(did_move)
        self.assertFalse(is_extruding)

    def test_advance_updates_current(self):
        state = ToolpathState()
        self.assertIsNone(state.advance("M106 S255"))
        self.assertEqual(state.advance("G1 X4 E1"), Position(4.0, 0.0, 0.0, 1.0))
        self.assertEqual(state.current, Position(4.0, 0.0, 0.0, 1.0))
