"""Vote — one council member's weighted ballot for a single round."""

from pydantic import BaseModel, Field


class Vote(BaseModel):
    """A ballot cast by a council member."""

    agent: str
    chosen_option: int                      # Range-checked only at resolution
    weight: float = Field(ge=0.1)
