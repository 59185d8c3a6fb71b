"""
Voting Engine — expertise-weighted ballots and their resolution.

Every council member always has some say: a member with no relevant
expertise still votes with the floor weight. Members with matching expertise
add event_weight * proficiency for each tag they share with the event.

Resolution sums weights per option. The strictly greatest total wins and
ties go to the lowest option index.
"""

import logging
from typing import List, Protocol, Sequence, Tuple

from council_kernel.models.event import Event
from council_kernel.models.voting import Vote
from council_kernel.models.world import WorldState

logger = logging.getLogger(__name__)

BASE_WEIGHT = 0.1


class InvalidVoteError(Exception):
    """Raised when a vote names an option the event does not have."""
    pass


class AgentError(Exception):
    """Raised when a council member's capability call fails."""
    pass


class CouncilMember(Protocol):
    """Protocol for council members — pluggable decision strategies."""

    def name(self) -> str: ...

    def expertise(self) -> Sequence[Tuple[str, float]]: ...

    def vote(self, event: Event, state: WorldState) -> int: ...


def vote_weight(agent: CouncilMember, event: Event) -> float:
    """Floor weight plus event_weight * proficiency for every shared tag."""
    proficiencies = {}
    for tag, proficiency in agent.expertise():
        # First declaration of a tag wins
        proficiencies.setdefault(tag, proficiency)

    weight = BASE_WEIGHT
    for tag, event_weight in event.relevant_expertise:
        if tag in proficiencies:
            weight += event_weight * proficiencies[tag]
    return weight


def resolve_votes(votes: Sequence[Vote], num_options: int) -> int:
    """
    Return the index of the winning option.

    An empty ballot returns 0. A vote for an index outside
    [0, num_options) raises InvalidVoteError.
    """
    totals = [0.0] * num_options

    for vote in votes:
        if not 0 <= vote.chosen_option < num_options:
            raise InvalidVoteError(
                f"{vote.agent} voted for option {vote.chosen_option}, "
                f"but the event only has {num_options} options."
            )
        totals[vote.chosen_option] += vote.weight

    winner = 0
    for index, total in enumerate(totals):
        if total > totals[winner]:
            winner = index
    return winner


def collect_votes(
    agents: Sequence[CouncilMember],
    event: Event,
    state: WorldState,
) -> List[Vote]:
    """
    Ask every council member for a ballot.

    Each member sees its own detached copy of the event and world state.
    Chosen indices are not validated here; see resolve_votes.
    """
    votes = []
    for agent in agents:
        try:
            agent_name = agent.name()
            choice = agent.vote(event.model_copy(deep=True), state.model_copy(deep=True))
            weight = vote_weight(agent, event)
            # Rejects non-integer ballots
            vote = Vote(agent=agent_name, chosen_option=choice, weight=weight)
        except Exception as e:
            raise AgentError(f"Council member {agent!r} failed to vote: {e}") from e

        logger.debug(
            "Round %d: %s votes [%s] (weight: %.2f)",
            state.round, agent_name, choice, weight,
        )
        votes.append(vote)
    return votes
