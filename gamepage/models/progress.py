"""Completion progress data models."""

from dataclasses import dataclass
from enum import Enum


class BadgeTier(Enum):
    """Award tier shown next to a progress bar."""
    NONE = "none"
    COMPLETED = "completed"
    MASTERED = "mastered"


@dataclass(frozen=True)
class GameProgress:
    """Completion percentages for a player on a game."""
    pct_complete: int
    pct_hardcore: int
    pct_hardcore_proportion: int
    badge_tier: BadgeTier
    has_casual_and_hardcore: bool = False

    @property
    def is_mastered(self) -> bool:
        return self.badge_tier is BadgeTier.MASTERED

    @property
    def label(self) -> str:
        """Text under the progress bar."""
        if self.pct_hardcore >= 100:
            return "Mastered"
        return f"{self.pct_complete}% complete"

    @property
    def title_hint(self) -> str:
        """Hover text of the bar, only set for mixed casual/hardcore progress."""
        if self.has_casual_and_hardcore:
            return f"{self.pct_hardcore}% hardcore"
        return ""
