"""Tests for the Voting Engine."""

import pytest

from council_kernel.models.event import Event, Outcome, ResponseOption
from council_kernel.models.voting import Vote
from council_kernel.models.world import Relation, Threat, WorldState
from council_kernel.voting.engine import (
    BASE_WEIGHT,
    AgentError,
    InvalidVoteError,
    collect_votes,
    resolve_votes,
    vote_weight,
)


class _StubAgent:
    def __init__(self, name, expertise, choice=0):
        self._name = name
        self._expertise = expertise
        self._choice = choice

    def name(self):
        return self._name

    def expertise(self):
        return self._expertise

    def vote(self, event, state):
        return self._choice


class _MeddlingAgent(_StubAgent):
    """Vandalizes whatever it is handed."""

    def vote(self, event, state):
        event.options.clear()
        event.relevant_expertise.clear()
        state.threats.clear()
        state.relations["Zorix"] = Relation.HOSTILE
        state.round = 999
        return self._choice


class _BrokenAgent(_StubAgent):
    def vote(self, event, state):
        raise RuntimeError("sensor array offline")


def _make_event(num_options: int = 3, expertise=None) -> Event:
    return Event(
        description="A test event",
        relevant_expertise=expertise or [],
        options=[
            ResponseOption(
                description=f"Option {i}",
                outcome=Outcome(description=f"Outcome {i}", score_delta=i),
            )
            for i in range(num_options)
        ],
    )


class TestVoteWeight:
    def test_no_overlap_gets_floor_weight(self):
        agent = _StubAgent("a", [("engineering", 0.9)])
        event = _make_event(expertise=[("diplomacy", 1.0)])
        assert vote_weight(agent, event) == BASE_WEIGHT == 0.1

    def test_no_expertise_at_all(self):
        agent = _StubAgent("a", [])
        assert vote_weight(agent, _make_event()) == 0.1

    def test_shared_tags_add_up(self):
        agent = _StubAgent("a", [("diplomacy", 0.8), ("engineering", 0.9)])
        event = _make_event(
            expertise=[("diplomacy", 0.5), ("science", 0.3), ("military", 0.2)]
        )
        assert vote_weight(agent, event) == pytest.approx(0.5)

    def test_multiple_shared_tags(self):
        agent = _StubAgent("a", [("military", 0.8), ("strategy", 0.6)])
        event = _make_event(expertise=[("military", 0.5), ("strategy", 0.5)])
        assert vote_weight(agent, event) == pytest.approx(0.1 + 0.4 + 0.3)

    def test_first_declaration_of_a_tag_wins(self):
        agent = _StubAgent("a", [("science", 0.2), ("science", 1.0)])
        event = _make_event(expertise=[("science", 1.0)])
        assert vote_weight(agent, event) == pytest.approx(0.3)


class TestResolveVotes:
    def test_tie_goes_to_lowest_index(self):
        votes = [
            Vote(agent="a", chosen_option=0, weight=0.4),
            Vote(agent="b", chosen_option=1, weight=0.6),
            Vote(agent="c", chosen_option=2, weight=0.6),
        ]
        assert resolve_votes(votes, 3) == 1

    def test_weights_beat_headcount(self):
        votes = [
            Vote(agent="a", chosen_option=0, weight=0.1),
            Vote(agent="b", chosen_option=0, weight=0.1),
            Vote(agent="c", chosen_option=2, weight=0.9),
        ]
        assert resolve_votes(votes, 3) == 2

    def test_empty_ballot_picks_first_option(self):
        assert resolve_votes([], 3) == 0

    def test_out_of_range_vote_raises(self):
        votes = [Vote(agent="a", chosen_option=5, weight=0.5)]
        with pytest.raises(InvalidVoteError):
            resolve_votes(votes, 3)

    def test_negative_vote_raises(self):
        votes = [Vote(agent="a", chosen_option=-1, weight=0.5)]
        with pytest.raises(InvalidVoteError):
            resolve_votes(votes, 3)


class TestCollectVotes:
    def test_votes_in_council_order(self):
        agents = [
            _StubAgent("alpha", [("science", 1.0)], choice=2),
            _StubAgent("beta", [], choice=1),
        ]
        event = _make_event(expertise=[("science", 0.5)])
        votes = collect_votes(agents, event, WorldState(round=3))
        assert [v.agent for v in votes] == ["alpha", "beta"]
        assert [v.chosen_option for v in votes] == [2, 1]
        assert votes[0].weight == pytest.approx(0.6)
        assert votes[1].weight == pytest.approx(0.1)

    def test_out_of_range_choice_is_recorded(self):
        votes = collect_votes([_StubAgent("a", [], choice=7)], _make_event(), WorldState())
        assert votes[0].chosen_option == 7

    def test_agent_cannot_mutate_engine_data(self):
        event = _make_event(expertise=[("military", 0.5)])
        state = WorldState(round=4, threats=[Threat(name="Void Swarm", severity=2)])
        agent = _MeddlingAgent("vandal", [("military", 1.0)], choice=1)

        votes = collect_votes([agent], event, state)

        assert len(event.options) == 3
        assert event.relevant_expertise == [("military", 0.5)]
        assert state.round == 4
        assert len(state.threats) == 1
        assert state.relations == {}
        assert votes[0].weight == pytest.approx(0.6)

    def test_agent_failure_is_reported(self):
        with pytest.raises(AgentError):
            collect_votes([_BrokenAgent("broken", [])], _make_event(), WorldState())

    @pytest.mark.parametrize("choice", [None, 1.5, "first"])
    def test_non_integer_ballot_is_agent_error(self, choice):
        with pytest.raises(AgentError):
            collect_votes([_StubAgent("sloppy", [], choice=choice)], _make_event(), WorldState())
