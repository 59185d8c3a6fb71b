"""Council Kernel data models."""

from council_kernel.models.changes import (
    AddDiscovery,
    AddSector,
    AddSpecies,
    AddThreat,
    ModifyThreatSeverity,
    RemoveThreat,
    SetRelation,
    StateChange,
)
from council_kernel.models.event import Event, Outcome, ResponseOption
from council_kernel.models.scoring import RatingTier, ScoreCategory, ScoreEntry
from council_kernel.models.simulation import (
    RoundRecord,
    SimulationConfig,
    SimulationResult,
)
from council_kernel.models.voting import Vote
from council_kernel.models.world import (
    Discovery,
    Relation,
    Sector,
    SectorType,
    Species,
    Threat,
    WorldState,
)

__all__ = [
    "AddDiscovery",
    "AddSector",
    "AddSpecies",
    "AddThreat",
    "Discovery",
    "Event",
    "ModifyThreatSeverity",
    "Outcome",
    "RatingTier",
    "Relation",
    "RemoveThreat",
    "ResponseOption",
    "RoundRecord",
    "ScoreCategory",
    "ScoreEntry",
    "Sector",
    "SectorType",
    "SetRelation",
    "SimulationConfig",
    "SimulationResult",
    "Species",
    "StateChange",
    "Threat",
    "Vote",
    "WorldState",
]
