import unittest

import pygame

from falling_blocks.game import GameEvent, Intent, TetrominoType
from falling_blocks.visualization.human_play import KEY_TO_INTENT, MessageBoard, build_parser

from helpers import place, running_session


class MessageBoardTests(unittest.TestCase):
    def test_messages_follow_events(self):
        session = running_session()
        board = MessageBoard(session)
        session.pause()
        self.assertEqual(board.text, "Game Paused")
        session.resume()
        self.assertIsNone(board.text)
        session.stop()
        self.assertEqual(board.text, "Game Stopped")
        session.start()
        self.assertIsNone(board.text)

    def test_game_over_messages(self):
        session = running_session()
        board = MessageBoard(session)
        session.events.emit(GameEvent.GAME_OVER, is_new_high_score=True, final_score=900)
        self.assertEqual(board.text, "New High Score: 900!")
        session.events.emit(GameEvent.GAME_OVER, is_new_high_score=False, final_score=40)
        self.assertEqual(board.text, "Game Over! Your Score: 40")

    def test_natural_game_over_message(self):
        session = running_session()
        board = MessageBoard(session)
        session.grid.grid[1, 4] = 3
        place(session, TetrominoType.O, x=4, y=-1)
        session.soft_drop()
        self.assertEqual(board.text, "Game Over! Your Score: 0")


class KeyBindingTests(unittest.TestCase):
    def test_arrows_and_space(self):
        self.assertIs(KEY_TO_INTENT[pygame.K_LEFT], Intent.MOVE_LEFT)
        self.assertIs(KEY_TO_INTENT[pygame.K_UP], Intent.ROTATE)
        self.assertIs(KEY_TO_INTENT[pygame.K_SPACE], Intent.HARD_DROP)
        self.assertEqual(set(KEY_TO_INTENT.values()), set(Intent))

    def test_cli_flags(self):
        args = build_parser().parse_args(["--seed", "3", "--high-score-file", "x.json"])
        self.assertEqual(args.seed, 3)
        self.assertEqual(args.high_score_file, "x.json")


if __name__ == "__main__":
    unittest.main()
