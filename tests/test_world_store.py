"""Tests for the World State Store."""

from typing import get_args

import pytest

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
from council_kernel.models.world import (
    Discovery,
    Relation,
    Sector,
    SectorType,
    Species,
    Threat,
    WorldState,
)
from council_kernel.world_model.store import UnhandledChangeError, WorldStateStore


def _add_threat(name: str, severity: int) -> AddThreat:
    return AddThreat(threat=Threat(name=name, severity=severity))


class TestApplyChanges:
    def test_every_change_variant_has_an_applier(self):
        store = WorldStateStore()
        union_members = get_args(get_args(StateChange)[0])
        assert set(union_members) == set(store.handled_change_types)

    def test_unregistered_change_type_raises(self):
        class Teleport:
            kind = "teleport"

        store = WorldStateStore()
        with pytest.raises(UnhandledChangeError):
            store.apply_changes([Teleport()])

    def test_add_sector_appends_without_dedup(self):
        store = WorldStateStore()
        sector = Sector(name="Alpha Quadrant", sector_type=SectorType.NEBULA)
        store.apply_changes([AddSector(sector=sector), AddSector(sector=sector)])
        assert len(store.state.explored_sectors) == 2

    def test_add_species_does_not_touch_relations(self):
        store = WorldStateStore()
        store.apply_changes([
            AddSpecies(species=Species(name="Zorblax", traits=["curious"])),
        ])
        assert store.species_names() == ["Zorblax"]
        assert store.state.relations == {}
        assert store.relation_of("Zorblax") == Relation.UNKNOWN

    def test_set_relation_upserts(self):
        store = WorldStateStore()
        store.apply_changes([
            SetRelation(species="Velari", relation=Relation.WARY),
            SetRelation(species="Velari", relation=Relation.ALLIED),
        ])
        assert store.state.relations == {"Velari": Relation.ALLIED}

    def test_set_relation_independent_of_roster(self):
        store = WorldStateStore()
        store.apply_changes([SetRelation(species="Ghosts", relation=Relation.HOSTILE)])
        assert store.state.known_species == []
        assert store.hostile_count() == 1

    def test_add_discovery_appends(self):
        store = WorldStateStore()
        crystal = Discovery(name="Power Crystal", category="salvage")
        store.apply_changes([AddDiscovery(discovery=crystal), AddDiscovery(discovery=crystal)])
        assert len(store.state.discoveries) == 2

    def test_add_then_modify_threat(self):
        store = WorldStateStore()
        store.apply_changes([
            _add_threat("X", 5),
            ModifyThreatSeverity(name="X", delta=-2),
        ])
        assert len(store.state.threats) == 1
        assert store.state.threats[0].name == "X"
        assert store.state.threats[0].severity == 3

    def test_later_changes_observe_earlier_ones(self):
        store = WorldStateStore()
        store.apply_changes([
            ModifyThreatSeverity(name="X", delta=4),   # Nothing to modify yet
            _add_threat("X", 1),
            ModifyThreatSeverity(name="X", delta=1),
        ])
        assert store.state.threats[0].severity == 2

    def test_add_threat_always_appends(self):
        store = WorldStateStore()
        store.apply_changes([_add_threat("Space Pirates", 1), _add_threat("Space Pirates", 3)])
        assert store.threat_names() == ["Space Pirates", "Space Pirates"]

    def test_remove_threat_removes_all_matches(self):
        store = WorldStateStore()
        store.apply_changes([
            _add_threat("Space Pirates", 1),
            _add_threat("Void Swarm", 2),
            _add_threat("Space Pirates", 3),
            RemoveThreat(name="Space Pirates"),
        ])
        assert store.threat_names() == ["Void Swarm"]

    def test_remove_missing_threat_is_noop(self):
        store = WorldStateStore()
        store.apply_changes([_add_threat("Void Swarm", 2), RemoveThreat(name="Cosmic Storm")])
        assert store.threat_names() == ["Void Swarm"]

    def test_modify_applies_to_every_match(self):
        store = WorldStateStore()
        store.apply_changes([
            _add_threat("Space Pirates", 1),
            _add_threat("Space Pirates", 4),
            ModifyThreatSeverity(name="Space Pirates", delta=2),
        ])
        assert [t.severity for t in store.state.threats] == [3, 6]

    def test_modify_clamps_at_zero_and_keeps_threat(self):
        store = WorldStateStore()
        store.apply_changes([
            _add_threat("Minor Issue", 1),
            ModifyThreatSeverity(name="Minor Issue", delta=-5),
        ])
        assert len(store.state.threats) == 1
        assert store.state.threats[0].severity == 0

    def test_applied_models_are_copied(self):
        store = WorldStateStore()
        threat = Threat(name="Void Swarm", severity=2)
        store.apply_changes([AddThreat(threat=threat)])
        threat.severity = 9
        assert store.state.threats[0].severity == 2


class TestThreatAccounting:
    def test_penalty_and_aging(self):
        store = WorldStateStore()
        store.apply_changes([_add_threat("A", 4), _add_threat("B", 2)])
        penalty = store.process_threats()
        assert penalty == -18
        assert [t.rounds_active for t in store.state.threats] == [1, 1]

    def test_no_threats_no_penalty(self):
        store = WorldStateStore()
        assert store.process_threats() == 0

    def test_threats_are_never_auto_removed(self):
        store = WorldStateStore()
        store.apply_changes([_add_threat("Dormant", 0)])
        for _ in range(3):
            assert store.process_threats() == 0
        assert store.state.threats[0].rounds_active == 3


class TestQueries:
    def test_advance_round(self):
        store = WorldStateStore()
        assert store.advance_round() == 1
        assert store.advance_round() == 2
        assert store.state.round == 2

    def test_snapshot_is_detached(self):
        store = WorldStateStore()
        store.apply_changes([_add_threat("Void Swarm", 2)])
        snapshot = store.snapshot()
        snapshot.threats.clear()
        snapshot.relations["Zorix"] = Relation.ALLIED
        assert store.threat_names() == ["Void Swarm"]
        assert store.state.relations == {}

    def test_summary_counts(self):
        store = WorldStateStore(WorldState(
            explored_sectors=[Sector(name="Home", sector_type=SectorType.HABITABLE)],
            relations={"A": Relation.ALLIED, "B": Relation.HOSTILE, "C": Relation.ALLIED},
        ))
        summary = store.summary()
        assert summary["sectors"] == 1
        assert summary["allied"] == 2
        assert summary["hostile"] == 1
        assert summary["threats"] == 0

    def test_state_snapshot_is_serializable(self):
        store = WorldStateStore()
        store.apply_changes([SetRelation(species="Zorix", relation=Relation.FRIENDLY)])
        assert store.get_state_snapshot()["relations"] == {"Zorix": "friendly"}
