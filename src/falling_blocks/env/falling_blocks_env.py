from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLORS, Action, GameConfig, GameSession, ScoringRules


class FallingBlocksEnv(gym.Env):
    """Headless session driven one action per step.

    Each step applies one `Action` and then advances the gravity clock by
    `gravity_ms`, so automatic descent is simulated deterministically.
    Reward is the engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        gravity_ms: float = 100.0,
        max_episode_steps: int = 10_000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.session = GameSession(config, rules)
        self.render_mode = render_mode
        self.gravity_ms = float(gravity_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.session.grid.height, self.session.grid.width
        n_kinds = len(COLORS)

        # Observation: board with falling piece as negative ids, next kind, level
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds + 1),
                "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.session.get_state().astype(np.int8),
            "next_piece": int(self.session.next_piece.kind),
            "level": np.array([self.session.level], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "level": self.session.level,
            "lines_cleared_total": self.session.lines_cleared_total,
            "pieces_locked": self.session.pieces_locked,
            "max_height": self.session.grid.get_max_height(),
            "holes": self.session.grid.count_holes(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.start(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.session.score

        self.session.step(Action(int(action)))
        self.session.tick(self.gravity_ms)
        self._steps += 1

        terminated = bool(self.session.game_over)
        truncated = self._steps >= self.max_episode_steps
        reward = float(self.session.score - score_before)
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["engine_score_delta"] = self.session.score - score_before
        if terminated:
            info["final_stats"] = self.session.get_game_stats()
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.session.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = COLORS.get(abs(int(state[y, x])), (30, 30, 36))
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
