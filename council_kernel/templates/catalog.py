"""
Template Catalog — conditioned event templates and weighted selection.

Per round:
  1. Filter registered templates to those applicable to the world state
  2. Draw one with a single rng draw (cumulative-weight roulette)
  3. Let the chosen template generate the concrete Event

The rng is always passed in explicitly. Templates must not consult any
other source of entropy.
"""

import logging
import random
from typing import Iterable, List, Optional, Protocol

from council_kernel.models.event import Event
from council_kernel.models.world import WorldState

logger = logging.getLogger(__name__)

DEFAULT_SELECTION_WEIGHT = 1.0


class NoApplicableTemplateError(Exception):
    """Raised when no registered template applies to the world state."""
    pass


class EventTemplate(Protocol):
    """Protocol for event templates — pluggable event factories."""

    name: str

    def is_applicable(self, state: WorldState) -> bool: ...

    def generate(self, state: WorldState, rng: random.Random) -> Event: ...


def selection_weight(template: EventTemplate) -> float:
    """A template's relative selection weight (1.0 unless it declares one)."""
    return getattr(template, "selection_weight", DEFAULT_SELECTION_WEIGHT)


class TemplateCatalog:
    """Registry of event templates for one simulation."""

    def __init__(self, templates: Optional[Iterable[EventTemplate]] = None):
        self._templates: List[EventTemplate] = []
        for template in templates or []:
            self.register(template)

    @property
    def templates(self) -> List[EventTemplate]:
        return list(self._templates)

    def register(self, template: EventTemplate) -> None:
        """Register a template. Its selection weight must be positive."""
        weight = selection_weight(template)
        if weight <= 0:
            raise ValueError(
                f"Template {getattr(template, 'name', template)!r} has "
                f"non-positive selection weight {weight}"
            )
        self._templates.append(template)

    def applicable(self, state: WorldState) -> List[EventTemplate]:
        """Templates that can generate an event for this world state."""
        return [t for t in self._templates if t.is_applicable(state)]

    def select(self, state: WorldState, rng: random.Random) -> EventTemplate:
        """Pick one applicable template using exactly one rng draw."""
        candidates = self.applicable(state)
        if not candidates:
            raise NoApplicableTemplateError(
                f"No applicable event template for round {state.round}; "
                f"the catalog needs an unconditional fallback."
            )

        total = sum(selection_weight(t) for t in candidates)
        roll = rng.random() * total
        cumulative = 0.0
        for template in candidates:
            cumulative += selection_weight(template)
            if roll < cumulative:
                return template
        # Float rounding can leave roll == total
        return candidates[-1]

    def generate_event(self, state: WorldState, rng: random.Random) -> Event:
        """Select an applicable template and generate its event."""
        template = self.select(state, rng)
        logger.debug(
            "Round %d: selected template %s", state.round, getattr(template, "name", template)
        )
        return template.generate(state, rng)
