"""Score models — log entries and rating tiers."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ScoreCategory(str, Enum):
    OUTCOME = "outcome"
    THREATS = "threats"
    ALLIED_BONUS = "allied_bonus"
    HOSTILE_PENALTY = "hostile_penalty"
    DISCOVERY_BONUS = "discovery_bonus"


class RatingTier(str, Enum):
    LEGENDARY = "Legendary"
    DISTINGUISHED = "Distinguished"
    COMPETENT = "Competent"
    STRUGGLING = "Struggling"
    DYSFUNCTIONAL = "Dysfunctional"


class ScoreEntry(BaseModel):
    """A single immutable score change."""

    model_config = ConfigDict(frozen=True)

    round: int
    delta: int
    description: str
    category: ScoreCategory = ScoreCategory.OUTCOME
