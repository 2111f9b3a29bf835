from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, List, Optional

import pygame

from falling_blocks.game import (
    GameConfig,
    GameEvent,
    GameLoop,
    GameSession,
    InputMapper,
    Intent,
    JsonHighScoreStore,
    ManualFrameScheduler,
)
from .renderer import Renderer


KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_UP: Intent.ROTATE,
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_SPACE: Intent.HARD_DROP,
}

DEFAULT_HIGH_SCORE_FILE = os.path.join(os.path.expanduser("~"), ".falling_blocks", "highscore.json")


class MessageBoard:
    """Keeps the overlay text in step with session events."""

    def __init__(self, session: GameSession) -> None:
        self.text: Optional[str] = "Press Enter to start"
        session.events.subscribe(GameEvent.STARTED, self.clear)
        session.events.subscribe(GameEvent.RESUMED, self.clear)
        session.events.subscribe(GameEvent.PAUSED, self.on_paused)
        session.events.subscribe(GameEvent.STOPPED, self.on_stopped)
        session.events.subscribe(GameEvent.GAME_OVER, self.on_game_over)

    def clear(self) -> None:
        self.text = None

    def on_paused(self) -> None:
        self.text = "Game Paused"

    def on_stopped(self, final_score: int) -> None:
        self.text = "Game Stopped"

    def on_game_over(self, is_new_high_score: bool, final_score: int) -> None:
        if is_new_high_score:
            self.text = f"New High Score: {final_score}!"
        else:
            self.text = f"Game Over! Your Score: {final_score}"


def run(seed: Optional[int] = None, high_score_file: str = DEFAULT_HIGH_SCORE_FILE, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(GameConfig(random_seed=seed), store=JsonHighScoreStore(high_score_file))
        scheduler = ManualFrameScheduler()
        loop = GameLoop(session, scheduler)
        mapper = InputMapper(session)
        messages = MessageBoard(session)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(session.grid.height, session.grid.width))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                    elif event.key == pygame.K_RETURN:
                        # Same button starts, resumes, or restarts after game over
                        if session.paused:
                            loop.resume(now)
                        elif not session.running:
                            loop.start(now)
                    elif event.key == pygame.K_p:
                        loop.toggle_pause(now)
                    elif event.key == pygame.K_ESCAPE:
                        if not loop.stop() and session.game_over:
                            running = False
                    else:
                        intent = KEY_TO_INTENT.get(event.key)
                        if intent is not None:
                            mapper.handle(intent)

            scheduler.advance(now)
            renderer.draw(screen, session.snapshot(), messages.text)
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--high-score-file", type=str, default=DEFAULT_HIGH_SCORE_FILE)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    run(seed=args.seed, high_score_file=args.high_score_file, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
