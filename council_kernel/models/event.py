"""Event — a generated decision point the council must respond to."""

from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator

from council_kernel.models.changes import StateChange


class Outcome(BaseModel):
    """What happens if a response option wins the vote."""

    description: str
    score_delta: int
    state_changes: List[StateChange] = []   # Applied strictly in order


class ResponseOption(BaseModel):
    """A single choice offered to the council."""

    description: str
    outcome: Outcome


class Event(BaseModel):
    """A concrete event synthesized by a template for one round."""

    description: str
    relevant_expertise: List[Tuple[str, float]] = []   # (tag, weight in [0, 1])
    options: List[ResponseOption] = Field(min_length=1)

    @field_validator("relevant_expertise")
    @classmethod
    def _check_tag_weights(cls, value: List[Tuple[str, float]]) -> List[Tuple[str, float]]:
        for tag, weight in value:
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"Expertise weight for '{tag}' must be in [0, 1], got {weight}")
        return value
