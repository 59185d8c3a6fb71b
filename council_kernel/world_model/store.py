"""
World State Store — owns the galaxy and applies outcome mutations.

Updated by: Round Orchestrator (between rounds only)
Queried by: Event templates + Council members (via detached snapshots)

Behavioral Contract:
- State changes are applied strictly in list order; later changes observe
  earlier ones from the same list.
- Every StateChange variant has a registered applier. An unregistered change
  type is an error, never a silent no-op.
- AddThreat always appends; RemoveThreat removes every same-named threat;
  ModifyThreatSeverity adjusts every same-named threat and clamps at zero.
- Threat accounting never removes threats.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

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
from council_kernel.models.world import Relation, WorldState

logger = logging.getLogger(__name__)

THREAT_PENALTY_PER_SEVERITY = 3


class UnhandledChangeError(Exception):
    """Raised when a state change has no registered applier."""
    pass


class WorldStateStore:
    """
    In-memory store for a single simulation run.
    Created at run start with an empty galaxy at round 0.
    """

    def __init__(self, state: Optional[WorldState] = None):
        self._state = state if state is not None else WorldState()
        self._appliers: Dict[type, Callable] = {}
        self._register_default_appliers()

    def _register_default_appliers(self) -> None:
        """Register one applier per StateChange variant."""
        self._appliers[AddSector] = self._apply_add_sector
        self._appliers[AddSpecies] = self._apply_add_species
        self._appliers[SetRelation] = self._apply_set_relation
        self._appliers[AddDiscovery] = self._apply_add_discovery
        self._appliers[AddThreat] = self._apply_add_threat
        self._appliers[RemoveThreat] = self._apply_remove_threat
        self._appliers[ModifyThreatSeverity] = self._apply_modify_threat_severity

    @property
    def state(self) -> WorldState:
        """The live world state. Only the orchestrator should mutate it."""
        return self._state

    @property
    def handled_change_types(self) -> List[type]:
        return list(self._appliers)

    def advance_round(self) -> int:
        """Increment the round counter and return the new round number."""
        self._state.round += 1
        return self._state.round

    def apply_changes(self, changes: Sequence[StateChange]) -> None:
        """Apply an ordered list of state changes."""
        for change in changes:
            applier = self._appliers.get(type(change))
            if applier is None:
                raise UnhandledChangeError(
                    f"No applier registered for state change type: {type(change).__name__}"
                )
            applier(change)
            logger.debug("Round %d: applied %s", self._state.round, change.kind)

    def process_threats(self) -> int:
        """
        Age every active threat by one round and return the round's penalty
        (-3 per point of severity). Threats are never removed here.
        """
        penalty = 0
        for threat in self._state.threats:
            threat.rounds_active += 1
            penalty -= THREAT_PENALTY_PER_SEVERITY * threat.severity
        return penalty

    # --- Appliers ---

    def _apply_add_sector(self, change: AddSector) -> None:
        self._state.explored_sectors.append(change.sector.model_copy(deep=True))

    def _apply_add_species(self, change: AddSpecies) -> None:
        self._state.known_species.append(change.species.model_copy(deep=True))

    def _apply_set_relation(self, change: SetRelation) -> None:
        self._state.relations[change.species] = change.relation

    def _apply_add_discovery(self, change: AddDiscovery) -> None:
        self._state.discoveries.append(change.discovery.model_copy(deep=True))

    def _apply_add_threat(self, change: AddThreat) -> None:
        self._state.threats.append(change.threat.model_copy(deep=True))

    def _apply_remove_threat(self, change: RemoveThreat) -> None:
        self._state.threats = [
            t for t in self._state.threats if t.name != change.name
        ]

    def _apply_modify_threat_severity(self, change: ModifyThreatSeverity) -> None:
        for threat in self._state.threats:
            if threat.name == change.name:
                threat.severity = max(0, threat.severity + change.delta)

    # --- Read-only queries ---

    def relation_of(self, species_name: str) -> Relation:
        """Standing with a species; Unknown when no entry exists."""
        return self._state.relation_of(species_name)

    def allied_count(self) -> int:
        return self._state.allied_count()

    def hostile_count(self) -> int:
        return self._state.hostile_count()

    def species_names(self) -> List[str]:
        return [s.name for s in self._state.known_species]

    def threat_names(self) -> List[str]:
        return [t.name for t in self._state.threats]

    def snapshot(self) -> WorldState:
        """A detached deep copy; mutating it never touches the store."""
        return self._state.model_copy(deep=True)

    def get_state_snapshot(self) -> dict:
        """Get a serializable snapshot of the current world state."""
        return self._state.model_dump(mode="json")

    def summary(self) -> dict:
        """Counts of everything the council has accumulated so far."""
        return {
            "round": self._state.round,
            "sectors": len(self._state.explored_sectors),
            "species": len(self._state.known_species),
            "discoveries": len(self._state.discoveries),
            "threats": len(self._state.threats),
            "allied": self.allied_count(),
            "hostile": self.hostile_count(),
        }
