"""
Council Kernel API — FastAPI endpoints.

Exposes the simulation via a REST API for:
- Template and council inspection
- Launching seeded runs
- Score log and final world state queries

Runs are kept in memory for the lifetime of the process only.
"""

from typing import Dict, List, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from council_kernel.agents.builtin import default_council
from council_kernel.models.simulation import SimulationConfig, SimulationResult
from council_kernel.orchestrator.loop import DEFAULT_ROUNDS, CouncilSimulation
from council_kernel.templates.builtin import default_catalog
from council_kernel.templates.catalog import (
    NoApplicableTemplateError,
    TemplateCatalog,
    selection_weight,
)
from council_kernel.voting.engine import AgentError, InvalidVoteError


# --- Request/Response Models ---

class RunCreateRequest(BaseModel):
    seed: int = 0
    rounds: int = Field(ge=1, default=DEFAULT_ROUNDS)
    agents: Optional[List[str]] = None     # Council member names; all when omitted


class RunSummary(BaseModel):
    id: str
    seed: int
    rounds_played: int
    total_score: int
    end_game_bonus: int
    rating: str


def _summarize(run_id: str, result: SimulationResult) -> RunSummary:
    return RunSummary(
        id=run_id,
        seed=result.seed,
        rounds_played=result.rounds_played,
        total_score=result.total_score,
        end_game_bonus=result.end_game_bonus,
        rating=result.rating.value,
    )


# --- Application Factory ---

def create_app(catalog: Optional[TemplateCatalog] = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Council Kernel API",
        description="Galactic council decision simulation",
        version="0.1.0",
    )

    templates = catalog if catalog is not None else default_catalog()
    runs: Dict[str, SimulationResult] = {}

    app.state.catalog = templates
    app.state.runs = runs

    def _get_run(run_id: str) -> SimulationResult:
        if run_id not in runs:
            raise HTTPException(404, "Run not found")
        return runs[run_id]

    # === CATALOG ===

    @app.get("/templates")
    def list_templates():
        """Registered event templates and their selection weights."""
        return [
            {"name": getattr(t, "name", type(t).__name__), "selection_weight": selection_weight(t)}
            for t in templates.templates
        ]

    @app.get("/agents")
    def list_agents():
        """The reference council and its declared expertise."""
        return [
            {"name": a.name(), "expertise": [list(e) for e in a.expertise()]}
            for a in default_council()
        ]

    # === RUNS ===

    @app.post("/runs", response_model=RunSummary)
    def create_run(req: RunCreateRequest):
        """Run a full simulation with a seed and (a subset of) the reference council."""
        council = default_council()
        if req.agents is not None:
            by_name = {a.name(): a for a in council}
            unknown = [n for n in req.agents if n not in by_name]
            if unknown:
                raise HTTPException(422, f"Unknown council members: {', '.join(unknown)}")
            council = [by_name[n] for n in req.agents]

        simulation = CouncilSimulation(
            agents=council,
            catalog=templates,
            config=SimulationConfig(rounds=req.rounds, seed=req.seed),
        )
        try:
            result = simulation.run()
        except (NoApplicableTemplateError, InvalidVoteError, AgentError) as e:
            raise HTTPException(422, f"Simulation aborted: {e}")

        run_id = f"run_{uuid4().hex[:12]}"
        runs[run_id] = result
        return _summarize(run_id, result)

    @app.get("/runs")
    def list_runs():
        """All runs held by this process."""
        return [_summarize(run_id, r) for run_id, r in runs.items()]

    @app.get("/runs/{run_id}")
    def get_run(run_id: str):
        """Full result of a run, including per-round records."""
        return _get_run(run_id).model_dump(mode="json")

    @app.get("/runs/{run_id}/score-log")
    def get_score_log(run_id: str):
        """Ordered score log of a run."""
        return [e.model_dump(mode="json") for e in _get_run(run_id).score_log]

    @app.get("/runs/{run_id}/world")
    def get_world(run_id: str):
        """Final world state of a run."""
        return _get_run(run_id).final_world_state.model_dump(mode="json")

    return app


# Default application instance
app = create_app()
