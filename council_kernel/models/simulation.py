"""Simulation configuration and run results."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from council_kernel.models.scoring import RatingTier, ScoreEntry
from council_kernel.models.voting import Vote
from council_kernel.models.world import WorldState


class SimulationConfig(BaseModel):
    """Configuration for one simulation run. Fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    rounds: int = Field(ge=1, default=25)
    seed: int = 0


class RoundRecord(BaseModel):
    """What happened in one round, for inspection after the run."""

    round: int
    event_description: str
    option_descriptions: List[str]
    votes: List[Vote]
    winning_option: int
    outcome_description: str
    score_delta: int
    threat_penalty: int = 0


class SimulationResult(BaseModel):
    """Final output of a completed run."""

    seed: int
    rounds_played: int
    final_world_state: WorldState
    score_log: List[ScoreEntry]
    total_score: int
    end_game_bonus: int
    rating: RatingTier
    rounds: List[RoundRecord] = []
