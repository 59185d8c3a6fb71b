"""
Score Tracker — running total, history, and the council's final rating.

The end-game bonus is a pure function of the final world state:
  +10 per Allied species
  -5  per Hostile species
  +5  per Discovery
Each non-zero component is logged as its own categorized entry.
"""

from typing import Dict, List, Optional

from council_kernel.models.scoring import RatingTier, ScoreCategory, ScoreEntry
from council_kernel.models.world import WorldState

ALLIED_BONUS = 10
HOSTILE_PENALTY = -5
DISCOVERY_BONUS = 5

# (minimum total, tier), highest first
RATING_THRESHOLDS = [
    (200, RatingTier.LEGENDARY),
    (150, RatingTier.DISTINGUISHED),
    (100, RatingTier.COMPETENT),
    (50, RatingTier.STRUGGLING),
]


def rating_for(total: int) -> RatingTier:
    """Look up the rating tier for a total score."""
    for minimum, tier in RATING_THRESHOLDS:
        if total >= minimum:
            return tier
    return RatingTier.DYSFUNCTIONAL


def compute_end_game_bonus(state: WorldState) -> Dict[ScoreCategory, int]:
    """Bonus components earned by the final world state."""
    return {
        ScoreCategory.ALLIED_BONUS: state.allied_count() * ALLIED_BONUS,
        ScoreCategory.HOSTILE_PENALTY: state.hostile_count() * HOSTILE_PENALTY,
        ScoreCategory.DISCOVERY_BONUS: len(state.discoveries) * DISCOVERY_BONUS,
    }


class ScoreTracker:
    """Tracks cumulative score throughout a run."""

    def __init__(self):
        self._total = 0
        self._log: List[ScoreEntry] = []

    @property
    def total(self) -> int:
        return self._total

    @property
    def log(self) -> List[ScoreEntry]:
        """Ordered history of score changes."""
        return list(self._log)

    @property
    def rating(self) -> RatingTier:
        return rating_for(self._total)

    def add(
        self,
        round: int,
        delta: int,
        description: str,
        category: ScoreCategory = ScoreCategory.OUTCOME,
    ) -> ScoreEntry:
        """Record a score change."""
        entry = ScoreEntry(
            round=round, delta=delta, description=description, category=category
        )
        self._log.append(entry)
        self._total += delta
        return entry

    def best_entry(self) -> Optional[ScoreEntry]:
        """Highest single delta (earliest on ties)."""
        return max(self._log, key=lambda e: e.delta, default=None)

    def worst_entry(self) -> Optional[ScoreEntry]:
        """Lowest single delta (earliest on ties)."""
        return min(self._log, key=lambda e: e.delta, default=None)

    def apply_end_game_bonus(self, state: WorldState, round: int) -> int:
        """Log the end-game bonus for the final world state; return its sum."""
        descriptions = {
            ScoreCategory.ALLIED_BONUS: f"Allied species bonus ({state.allied_count()})",
            ScoreCategory.HOSTILE_PENALTY: f"Hostile species penalty ({state.hostile_count()})",
            ScoreCategory.DISCOVERY_BONUS: f"Discovery bonus ({len(state.discoveries)})",
        }
        bonus = 0
        for category, delta in compute_end_game_bonus(state).items():
            if delta == 0:
                continue
            self.add(round, delta, descriptions[category], category)
            bonus += delta
        return bonus
