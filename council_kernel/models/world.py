"""World State — the galaxy the council explores and reshapes."""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class SectorType(str, Enum):
    HABITABLE = "habitable"
    ASTEROID_FIELD = "asteroid_field"
    NEBULA = "nebula"
    VOID = "void"
    ANOMALY = "anomaly"


class Relation(str, Enum):
    """Diplomatic standing label. Not an ordered scale."""
    UNKNOWN = "unknown"
    HOSTILE = "hostile"
    WARY = "wary"
    NEUTRAL = "neutral"
    FRIENDLY = "friendly"
    ALLIED = "allied"


class Sector(BaseModel):
    """A region of space that has been explored."""

    name: str
    sector_type: SectorType


class Species(BaseModel):
    """A spacefaring species encountered by the council."""

    name: str
    traits: List[str] = []                  # Ordered for stable serialization


class Discovery(BaseModel):
    """A technology or artifact the council has secured."""

    name: str
    category: str                           # e.g., "salvage", "research"


class Threat(BaseModel):
    """A persistent adverse condition, penalized every round until removed."""

    name: str
    severity: int = Field(ge=0)
    rounds_active: int = Field(ge=0, default=0)


class WorldState(BaseModel):
    """The shared world model mutated by council decisions."""

    round: int = Field(ge=0, default=0)
    explored_sectors: List[Sector] = []
    known_species: List[Species] = []
    relations: Dict[str, Relation] = {}     # species name -> standing
    discoveries: List[Discovery] = []
    threats: List[Threat] = []

    def relation_of(self, species_name: str) -> Relation:
        """Standing with a species; Unknown when no entry exists."""
        return self.relations.get(species_name, Relation.UNKNOWN)

    def allied_count(self) -> int:
        return sum(1 for r in self.relations.values() if r == Relation.ALLIED)

    def hostile_count(self) -> int:
        return sum(1 for r in self.relations.values() if r == Relation.HOSTILE)
