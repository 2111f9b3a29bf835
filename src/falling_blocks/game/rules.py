from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    points_per_level: int = 1000
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 50
    min_drop_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        """Points for clearing `lines` rows at once, scaled by the level before any level-up."""
        if lines <= 0:
            return 0
        lines = min(lines, len(self.line_clear_scores) - 1)
        return self.line_clear_scores[lines] * level

    def level_for_score(self, score: int) -> int:
        return 1 + score // self.points_per_level

    def drop_interval_for_level(self, level: int) -> int:
        interval = self.base_drop_interval_ms - (level - 1) * self.drop_interval_step_ms
        return max(self.min_drop_interval_ms, interval)
