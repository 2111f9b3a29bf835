import unittest

from falling_blocks.game import InputMapper, Intent, TetrominoType

from helpers import place, running_session, safe_next


class InputMapperTests(unittest.TestCase):
    def setUp(self):
        self.session = running_session()
        self.mapper = InputMapper(self.session)
        place(self.session, TetrominoType.O)
        safe_next(self.session)

    def test_intents_reach_the_session(self):
        self.assertTrue(self.mapper.handle(Intent.MOVE_LEFT))
        self.assertTrue(self.mapper.handle(Intent.MOVE_RIGHT))
        self.assertTrue(self.mapper.handle(Intent.MOVE_RIGHT))
        self.assertEqual(self.session.current_piece.x, 5)
        self.assertTrue(self.mapper.handle(Intent.SOFT_DROP))
        self.assertEqual(self.session.current_piece.y, 1)
        self.assertTrue(self.mapper.handle(Intent.ROTATE))
        self.assertTrue(self.mapper.handle(Intent.HARD_DROP))
        self.assertEqual(self.session.pieces_locked, 1)

    def test_blocked_move_reports_false(self):
        for _ in range(4):
            self.mapper.handle(Intent.MOVE_LEFT)
        self.assertFalse(self.mapper.handle(Intent.MOVE_LEFT))

    def test_ignored_while_paused(self):
        self.session.pause()
        for intent in Intent:
            self.assertFalse(self.mapper.handle(intent))
        self.assertEqual(self.session.current_piece.x, 4)
        self.assertEqual(self.session.current_piece.y, 0)

    def test_ignored_after_stop(self):
        self.session.stop()
        self.assertFalse(self.mapper.handle(Intent.HARD_DROP))
        self.assertFalse(self.session.grid.grid.any())


if __name__ == "__main__":
    unittest.main()
