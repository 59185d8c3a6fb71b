"""
Round Orchestrator — the council's turn loop.

Per round, strictly in order:
  ADVANCE ROUND → GENERATE EVENT → COLLECT VOTES → RESOLVE →
  SCORE + APPLY CHANGES → THREAT ACCOUNTING
After the final round, the end-game bonus pass runs once.

The orchestrator owns the only rng for the run. It is advanced during
template selection and generation and nowhere else, so a run is fully
reproducible from its seed and council.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from council_kernel.models.scoring import ScoreCategory
from council_kernel.models.simulation import (
    RoundRecord,
    SimulationConfig,
    SimulationResult,
)
from council_kernel.scoring.tracker import ScoreTracker
from council_kernel.templates.catalog import EventTemplate, TemplateCatalog
from council_kernel.voting.engine import CouncilMember, collect_votes, resolve_votes
from council_kernel.world_model.store import WorldStateStore

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 25


class SimulationStateError(Exception):
    """Raised when a simulation is driven out of order."""
    pass


class CouncilSimulation:
    """
    One run of the council simulation.

    States:
      READY → RUNNING (round 1..N) → COMPLETE
                      ↘ FAILED (any error escaping a round; terminal)
    """

    def __init__(
        self,
        agents: Sequence[CouncilMember],
        catalog: TemplateCatalog,
        config: Optional[SimulationConfig] = None,
    ):
        self.agents = list(agents)
        self.catalog = catalog
        self.config = config or SimulationConfig()

        self.world_store = WorldStateStore()
        self.score = ScoreTracker()
        self._rng = random.Random(self.config.seed)
        self._records: List[RoundRecord] = []
        self._complete = False
        self._failed = False

    @property
    def status(self) -> str:
        if self._failed:
            return "failed"
        if self._complete:
            return "complete"
        return "running" if self.world_store.state.round > 0 else "ready"

    def _check_playable(self) -> None:
        if self._failed:
            raise SimulationStateError(
                f"Simulation failed in round {self.world_store.state.round} and cannot resume"
            )
        if self._complete:
            raise SimulationStateError("Simulation already complete")

    def run_round(self) -> RoundRecord:
        """Play a single round and return what happened."""
        self._check_playable()
        if self.world_store.state.round >= self.config.rounds:
            raise SimulationStateError(
                f"All {self.config.rounds} rounds have been played"
            )

        try:
            return self._play_round()
        except Exception:
            self._failed = True
            logger.error(
                "Round %d failed; simulation aborted", self.world_store.state.round
            )
            raise

    def _play_round(self) -> RoundRecord:
        # 1. Advance the round counter
        round_number = self.world_store.advance_round()

        # 2. Generate an event conditioned on the current state
        event = self.catalog.generate_event(self.world_store.snapshot(), self._rng)

        # 3. Collect votes from every council member
        votes = collect_votes(self.agents, event, self.world_store.state)

        # 4. Resolve the winning option
        winner = resolve_votes(votes, len(event.options))
        outcome = event.options[winner].outcome

        # 5. Score the outcome and apply its changes
        self.score.add(round_number, outcome.score_delta, outcome.description)
        self.world_store.apply_changes(outcome.state_changes)

        # 6. Threat accounting
        penalty = self.world_store.process_threats()
        if penalty != 0:
            self.score.add(
                round_number, penalty, "Unresolved threats", ScoreCategory.THREATS
            )

        logger.info(
            "Round %d/%d: council chooses [%d] (%+d), threat penalty %d, total %d",
            round_number, self.config.rounds, winner,
            outcome.score_delta, penalty, self.score.total,
        )

        record = RoundRecord(
            round=round_number,
            event_description=event.description,
            option_descriptions=[o.description for o in event.options],
            votes=votes,
            winning_option=winner,
            outcome_description=outcome.description,
            score_delta=outcome.score_delta,
            threat_penalty=penalty,
        )
        self._records.append(record)
        return record

    def run(self) -> SimulationResult:
        """Play every remaining round, then the end-game bonus pass."""
        self._check_playable()

        while self.world_store.state.round < self.config.rounds:
            self.run_round()

        final_state = self.world_store.state
        bonus = self.score.apply_end_game_bonus(final_state, final_state.round)
        self._complete = True

        logger.info(
            "Simulation complete after %d rounds: score %d (%s), %s",
            final_state.round, self.score.total, self.score.rating.value,
            self.world_store.summary(),
        )

        return SimulationResult(
            seed=self.config.seed,
            rounds_played=final_state.round,
            final_world_state=self.world_store.snapshot(),
            score_log=self.score.log,
            total_score=self.score.total,
            end_game_bonus=bonus,
            rating=self.score.rating,
            rounds=list(self._records),
        )


def run(
    agents: Sequence[CouncilMember],
    templates: Iterable[EventTemplate],
    seed: int,
    rounds: int = DEFAULT_ROUNDS,
) -> SimulationResult:
    """Run a complete simulation for a council and template set."""
    simulation = CouncilSimulation(
        agents=agents,
        catalog=TemplateCatalog(templates),
        config=SimulationConfig(rounds=rounds, seed=seed),
    )
    return simulation.run()
