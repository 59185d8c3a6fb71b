"""
Reference council members.

Deterministic voting strategies that satisfy the CouncilMember protocol.
They only read the event and world state they are handed and keep no
memory between calls.
"""

from typing import List, Sequence, Tuple

from council_kernel.models.event import Event
from council_kernel.models.world import WorldState
from council_kernel.voting.engine import CouncilMember

THREAT_TAGS = {"military", "strategy"}
DIPLOMACY_TAGS = {"diplomacy", "culture", "linguistics"}
EXPLORATION_TAGS = {"exploration", "science"}


def _last_option(event: Event) -> int:
    return max(0, len(event.options) - 1)


class ExampleBot:
    """Methodical engineer: alternates between the first two options by round parity."""

    def name(self) -> str:
        return "example-bot"

    def expertise(self) -> Sequence[Tuple[str, float]]:
        return [("engineering", 0.6), ("science", 0.4)]

    def vote(self, event: Event, state: WorldState) -> int:
        pick = 0 if state.round % 2 == 0 else 1
        return min(pick, _last_option(event))


class FirstBot:
    """Bold explorer: boldest option early on, the cautious last option after round 10."""

    def name(self) -> str:
        return "first-bot"

    def expertise(self) -> Sequence[Tuple[str, float]]:
        return [("exploration", 0.8), ("science", 0.5)]

    def vote(self, event: Event, state: WorldState) -> int:
        if state.round <= 10:
            return 0
        return _last_option(event)


class CycleBot:
    """Cultural diplomat: rotates through the options round by round."""

    def name(self) -> str:
        return "cycle-bot"

    def expertise(self) -> Sequence[Tuple[str, float]]:
        return [("culture", 0.7), ("linguistics", 0.5), ("archaeology", 0.3)]

    def vote(self, event: Event, state: WorldState) -> int:
        return state.round % len(event.options)


class ContrarianBot:
    """
    Always picks the last option. Most templates put the cautious or
    avoidant choice last, so this bot pulls against the bold majority.
    """

    def name(self) -> str:
        return "contrarian-bot"

    def expertise(self) -> Sequence[Tuple[str, float]]:
        return [("military", 0.8), ("strategy", 0.6)]

    def vote(self, event: Event, state: WorldState) -> int:
        return _last_option(event)


class OracleBot:
    """Reads the situation: threat pressure, diplomatic balance and progress."""

    def name(self) -> str:
        return "oracle-bot"

    def expertise(self) -> Sequence[Tuple[str, float]]:
        return [
            ("strategy", 0.9),
            ("science", 0.7),
            ("diplomacy", 0.6),
            ("exploration", 0.5),
            ("engineering", 0.4),
        ]

    def vote(self, event: Event, state: WorldState) -> int:
        tags = {tag for tag, _ in event.relevant_expertise}
        threat_pressure = sum(t.severity for t in state.threats)

        # Act decisively under pressure
        if tags & THREAT_TAGS and threat_pressure >= 3:
            return 0
        # Hostiles outnumber allies: try the peaceful overture
        if tags & DIPLOMACY_TAGS and state.hostile_count() > state.allied_count():
            return 0
        if tags & EXPLORATION_TAGS and len(state.explored_sectors) < 4:
            return 0
        # Stable and well-researched, or nothing pressing: the measured option
        return measured_option(len(event.options))


def measured_option(num_options: int) -> int:
    """The careful middle choice, index 1 when there is one."""
    return 1 if num_options >= 2 else 0


def default_council() -> List[CouncilMember]:
    """The five reference council members, in seating order."""
    return [ExampleBot(), FirstBot(), CycleBot(), ContrarianBot(), OracleBot()]
