import random
import unittest

import numpy as np

from falling_blocks.game import BASE_SHAPES, Piece, TetrominoType, random_piece_kind, rotate_cw


class RotationTests(unittest.TestCase):
    def test_rotate_cw_turns_t_piece_clockwise(self):
        rotated = rotate_cw(BASE_SHAPES[TetrominoType.T])
        np.testing.assert_array_equal(rotated, [[0, 1], [1, 1], [0, 1]])

    def test_rotate_cw_swaps_dimensions(self):
        rotated = rotate_cw(BASE_SHAPES[TetrominoType.I])
        self.assertEqual(rotated.shape, (4, 1))

    def test_four_rotations_restore_every_shape(self):
        for kind, shape in BASE_SHAPES.items():
            out = shape
            for _ in range(4):
                out = rotate_cw(out)
            np.testing.assert_array_equal(out, shape, err_msg=kind.name)

    def test_rotation_does_not_touch_input(self):
        shape = BASE_SHAPES[TetrominoType.L].copy()
        rotate_cw(shape)
        np.testing.assert_array_equal(shape, BASE_SHAPES[TetrominoType.L])

    def test_base_shapes_are_read_only(self):
        with self.assertRaises(ValueError):
            BASE_SHAPES[TetrominoType.O][0, 0] = 0


class SpawnTests(unittest.TestCase):
    def test_spawn_is_centered_at_top(self):
        self.assertEqual(Piece.spawn(TetrominoType.I, 10).x, 3)
        self.assertEqual(Piece.spawn(TetrominoType.O, 10).x, 4)
        self.assertEqual(Piece.spawn(TetrominoType.T, 10).x, 4)
        self.assertEqual(Piece.spawn(TetrominoType.T, 10).y, 0)

    def test_color_matches_kind(self):
        self.assertEqual(Piece.spawn(TetrominoType.J, 10).color, 7)

    def test_cells_are_board_coordinates(self):
        piece = Piece.spawn(TetrominoType.O, 10)
        self.assertEqual(sorted(piece.cells()), [(4, 0), (4, 1), (5, 0), (5, 1)])

    def test_spawned_shape_is_a_private_copy(self):
        piece = Piece.spawn(TetrominoType.S, 10)
        piece.shape[0, 0] = 0
        self.assertEqual(BASE_SHAPES[TetrominoType.S][0, 0], 1)

    def test_random_kind_draws_every_kind(self):
        rng = random.Random(7)
        seen = {random_piece_kind(rng) for _ in range(500)}
        self.assertEqual(seen, set(TetrominoType))


if __name__ == "__main__":
    unittest.main()
