"""
Built-in galaxy event templates.

Each template declares when it applies, how likely it is to be picked
relative to the others, and how it turns the world state plus rng draws into
a concrete Event. Anomaly and Resource Scarcity are always applicable, so the
default catalog can always produce an event.
"""

import random
from typing import List, Optional, Sequence

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
from council_kernel.models.world import (
    Discovery,
    Relation,
    Sector,
    SectorType,
    Species,
    Threat,
    WorldState,
)
from council_kernel.templates.catalog import EventTemplate, TemplateCatalog

SECTOR_PREFIXES = [
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Theta", "Omega", "Nova", "Sigma",
]
SECTOR_SUFFIXES = [
    "Quadrant", "Nebula", "Cluster", "Expanse", "Reach", "Void", "Drift", "Sector",
]
SPECIES_PREFIXES = [
    "Zor", "Krel", "Xan", "Vel", "Mur", "Thal", "Qor", "Nex", "Pax", "Dra",
]
SPECIES_SUFFIXES = [
    "ians", "oids", "ax", "uri", "eni", "oni", "ari", "eki", "oth", "ix",
]
THREAT_NAMES = [
    "Space Pirates",
    "Void Swarm",
    "Rogue AI Fleet",
    "Cosmic Storm",
    "Hostile Probes",
    "Dark Matter Entity",
    "Quantum Anomaly",
    "Stellar Plague",
]
DISCOVERY_TYPES = [
    "Ancient Archive",
    "Power Crystal",
    "Navigation Chart",
    "Shield Technology",
    "Propulsion Upgrade",
    "Communication Array",
    "Medical Breakthrough",
    "Weapons System",
]
RESEARCH_DISCOVERIES = [
    "Quantum Entanglement Drive",
    "Subspace Field Theory",
    "Graviton Lens Array",
    "Chrono-Spatial Mapping",
    "Plasma Containment Matrix",
    "Bio-Neural Computing",
    "Dark Energy Harvesting",
    "Dimensional Fold Navigation",
]
SIGNAL_SECTOR_TYPES = [
    SectorType.NEBULA,
    SectorType.ASTEROID_FIELD,
    SectorType.HABITABLE,
    SectorType.VOID,
]
SPECIES_TRAITS = [
    ["curious", "peaceful"],
    ["cautious", "territorial"],
    ["aggressive", "expansionist"],
]


def random_sector_name(rng: random.Random) -> str:
    return f"{rng.choice(SECTOR_PREFIXES)} {rng.choice(SECTOR_SUFFIXES)}"


def random_species_name(rng: random.Random) -> str:
    return f"{rng.choice(SPECIES_PREFIXES)}{rng.choice(SPECIES_SUFFIXES)}"


def improve_relation(current: Relation) -> Relation:
    """One step warmer: Hostile -> Wary, Unknown/Wary -> Neutral -> Friendly -> Allied."""
    if current == Relation.HOSTILE:
        return Relation.WARY
    if current in (Relation.UNKNOWN, Relation.WARY):
        return Relation.NEUTRAL
    if current == Relation.NEUTRAL:
        return Relation.FRIENDLY
    return Relation.ALLIED


def degrade_relation(current: Relation) -> Relation:
    """One step colder: Allied -> Friendly -> Neutral -> Wary, Unknown/Wary -> Hostile."""
    if current == Relation.ALLIED:
        return Relation.FRIENDLY
    if current == Relation.FRIENDLY:
        return Relation.NEUTRAL
    if current == Relation.NEUTRAL:
        return Relation.WARY
    return Relation.HOSTILE


def greatly_improve_relation(current: Relation) -> Relation:
    return improve_relation(improve_relation(current))


def _option(
    description: str,
    outcome: str,
    score_delta: int,
    changes: Optional[List[StateChange]] = None,
) -> ResponseOption:
    return ResponseOption(
        description=description,
        outcome=Outcome(
            description=outcome,
            score_delta=score_delta,
            state_changes=changes or [],
        ),
    )


# --- Exploration ---

class UnknownSignalTemplate:
    """Detect a signal from an unexplored region."""

    name = "Unknown Signal"
    selection_weight = 1.0

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.explored_sectors) < 10

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        sector_name = random_sector_name(rng)
        sector_type = rng.choice(SIGNAL_SECTOR_TYPES)

        return Event(
            description=(
                "Long-range sensors detect an unusual signal emanating from an "
                f"unexplored region. Analysis suggests it originates from the {sector_name}."
            ),
            relevant_expertise=[("science", 0.4), ("exploration", 0.4), ("engineering", 0.2)],
            options=[
                _option(
                    "Dispatch a crewed expedition to investigate",
                    f"The expedition successfully charts the {sector_name} and returns with valuable data.",
                    15,
                    [AddSector(sector=Sector(name=sector_name, sector_type=sector_type))],
                ),
                _option(
                    "Send an unmanned probe first",
                    "The probe returns preliminary data. The region is noted for future exploration.",
                    5,
                ),
                _option(
                    "Log the signal but focus on known priorities",
                    "The signal is archived. Perhaps another time.",
                    0,
                ),
            ],
        )


class DerelictTemplate:
    """Discover a derelict vessel drifting through a known sector."""

    name = "Derelict Vessel"
    selection_weight = 0.6

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.explored_sectors) > 0

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        sector = rng.choice(state.explored_sectors)
        discovery = rng.choice(DISCOVERY_TYPES)
        threat_name = rng.choice(THREAT_NAMES)
        risky_salvage = rng.randrange(5) == 0
        threat_severity = rng.randint(1, 3)

        salvage = AddDiscovery(discovery=Discovery(name=discovery, category="salvage"))
        if risky_salvage:
            board = _option(
                "Board the vessel and salvage anything useful",
                f"The boarding team recovers a {discovery}, but triggers dormant systems. "
                f"A new threat emerges: {threat_name}.",
                6,
                [salvage, AddThreat(threat=Threat(name=threat_name, severity=threat_severity))],
            )
        else:
            board = _option(
                "Board the vessel and salvage anything useful",
                f"The salvage operation is a success. The council secures a {discovery} from the wreck.",
                14,
                [salvage],
            )

        return Event(
            description=(
                f"Scanners pick up a derelict vessel drifting within the {sector.name}. "
                "Its hull markings don't match any known registry."
            ),
            relevant_expertise=[
                ("exploration", 0.35),
                ("engineering", 0.35),
                ("science", 0.2),
                ("security", 0.1),
            ],
            options=[
                board,
                _option(
                    "Scan it remotely and leave it undisturbed",
                    "Long-range scans yield useful telemetry and material analysis. Low risk, modest gain.",
                    6,
                ),
                _option(
                    "Mark the location and move on",
                    "The derelict is logged for future expeditions. "
                    "The council stays focused on current priorities.",
                    1,
                ),
            ],
        )


class AnomalyTemplate:
    """Encounter a spatial anomaly. Always applicable."""

    name = "Spatial Anomaly"
    selection_weight = 0.8

    def is_applicable(self, state: WorldState) -> bool:
        return True

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        if rng.randrange(3) == 0:
            study = _option(
                "Send a research team to study it closely",
                "The research team makes a breakthrough discovery about spatial physics!",
                20,
                [AddDiscovery(discovery=Discovery(name="Spatial Dynamics Theory", category="science"))],
            )
        else:
            study = _option(
                "Send a research team to study it closely",
                "The team gathers useful data, though the anomaly remains mysterious.",
                8,
            )

        return Event(
            description=(
                "A spatial anomaly has been detected nearby. It appears to be a stable "
                "wormhole or dimensional rift. Energy readings are off the charts."
            ),
            relevant_expertise=[("science", 0.5), ("engineering", 0.3), ("exploration", 0.2)],
            options=[
                study,
                _option(
                    "Observe from a safe distance with long-range sensors",
                    "Remote observations provide some data. Playing it safe.",
                    3,
                ),
                _option(
                    "Mark as hazardous and establish exclusion zone",
                    "The anomaly is marked on charts as a navigation hazard.",
                    0,
                ),
            ],
        )


# --- Contact ---

class FirstContactTemplate:
    """First contact with a new species."""

    name = "First Contact"
    selection_weight = 1.2

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.known_species) < 5

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        species_name = random_species_name(rng)
        traits = list(rng.choice(SPECIES_TRAITS))
        species = Species(name=species_name, traits=traits)

        if "aggressive" in traits:
            contact = _option(
                "Initiate peaceful diplomatic contact",
                f"The {species_name} view our overtures as weakness and become hostile.",
                -10,
                [
                    AddSpecies(species=species),
                    SetRelation(species=species_name, relation=Relation.HOSTILE),
                ],
            )
        else:
            contact = _option(
                "Initiate peaceful diplomatic contact",
                f"The {species_name} respond positively. A new friendship begins!",
                15,
                [
                    AddSpecies(species=species),
                    SetRelation(species=species_name, relation=Relation.FRIENDLY),
                ],
            )

        return Event(
            description=(
                f"Our explorers have encountered the {species_name}, a previously unknown "
                f"spacefaring species. Initial observations suggest they are {' and '.join(traits)}."
            ),
            relevant_expertise=[("diplomacy", 0.5), ("culture", 0.3), ("linguistics", 0.2)],
            options=[
                contact,
                _option(
                    "Maintain cautious observation before contact",
                    f"We observe the {species_name} from afar, learning about them "
                    "before deciding on contact.",
                    5,
                    [AddSpecies(species=species)],
                ),
                _option(
                    "Withdraw and avoid contact for now",
                    "We retreat quietly. The species remains unaware of us.",
                    0,
                ),
            ],
        )


# --- Crisis ---

class ThreatEmergenceTemplate:
    """A new threat approaches council territory."""

    name = "Threat Emergence"
    selection_weight = 0.6

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.threats) < 3

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        threat_name = rng.choice(THREAT_NAMES)
        severity = rng.randint(1, 3)

        if rng.randrange(2) == 0:
            confront = _option(
                "Confront the threat with immediate military response",
                f"Our forces engage the {threat_name}. After a fierce battle, the threat is neutralized!",
                12,
            )
        else:
            confront = _option(
                "Confront the threat with immediate military response",
                f"Our forces engage but cannot fully repel the {threat_name}. The threat persists.",
                -5,
                [AddThreat(threat=Threat(name=threat_name, severity=severity // 2 + 1))],
            )

        return Event(
            description=(
                f"Alert! {threat_name} have been detected approaching our territory. "
                f"Threat assessment: severity level {severity}."
            ),
            relevant_expertise=[("military", 0.5), ("strategy", 0.3), ("engineering", 0.2)],
            options=[
                confront,
                _option(
                    "Fortify defenses and prepare for siege",
                    f"We strengthen our defenses. The {threat_name} probe our perimeter "
                    "but find no weakness.",
                    3,
                    [AddThreat(threat=Threat(name=threat_name, severity=severity))],
                ),
                _option(
                    "Attempt diplomatic resolution",
                    f"Negotiations with the {threat_name} fail. They attack while our guard is down!",
                    -15,
                    [AddThreat(threat=Threat(name=threat_name, severity=severity + 1))],
                ),
            ],
        )


class CounteroffensiveTemplate:
    """An opening appears to strike back at an active threat."""

    name = "Counteroffensive"
    selection_weight = 0.6

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.threats) > 0

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        target = rng.choice(state.threats)
        decisive = rng.randrange(3) != 0

        if decisive:
            strike = _option(
                "Launch a full counteroffensive",
                f"The strike breaks the {target.name}. The threat is eliminated.",
                10,
                [RemoveThreat(name=target.name)],
            )
        else:
            strike = _option(
                "Launch a full counteroffensive",
                f"The offensive stalls. The {target.name} regroup and grow bolder.",
                -8,
                [ModifyThreatSeverity(name=target.name, delta=1)],
            )

        return Event(
            description=(
                f"Intelligence reports a weakness in the {target.name} "
                f"(severity {target.severity}, active for {target.rounds_active} rounds). "
                "The council can strike now or keep containing them."
            ),
            relevant_expertise=[("military", 0.5), ("strategy", 0.4), ("security", 0.1)],
            options=[
                strike,
                _option(
                    "Contain and wear them down",
                    f"Patrols blunt the {target.name}. The threat weakens.",
                    4,
                    [ModifyThreatSeverity(name=target.name, delta=-1)],
                ),
                _option(
                    "Hold position",
                    f"The council waits. The {target.name} press their advantage.",
                    0,
                    [ModifyThreatSeverity(name=target.name, delta=1)],
                ),
            ],
        )


class ResourceScarcityTemplate:
    """Supplies are running low. Always applicable."""

    name = "Resource Scarcity"
    selection_weight = 0.5

    def is_applicable(self, state: WorldState) -> bool:
        return True

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        severity = rng.randint(1, 3)

        partner = None
        current_relation = Relation.UNKNOWN
        if state.known_species:
            partner = rng.choice(state.known_species).name
            current_relation = state.relation_of(partner)

        trade_success = (
            partner is not None
            and current_relation != Relation.HOSTILE
            and rng.randrange(4) != 0
        )
        discovery = f"Closed-Loop Recycling v{severity}"

        if partner is None:
            trade = _option(
                "Seek emergency trade and resupply agreements",
                "We have no established contacts to trade with. "
                "The council must rely on internal measures.",
                -2,
            )
        elif trade_success:
            trade = _option(
                "Seek emergency trade and resupply agreements",
                f"The {partner} agree to a resupply deal. Relations improve and the crisis eases.",
                8,
                [SetRelation(species=partner, relation=improve_relation(current_relation))],
            )
        else:
            trade = _option(
                "Seek emergency trade and resupply agreements",
                f"Negotiations with the {partner} stall. The shortage worsens and trust erodes.",
                -6,
                [SetRelation(species=partner, relation=degrade_relation(current_relation))],
            )

        if rng.randrange(3) == 0:
            retrofit = _option(
                "Attempt a rapid engineering breakthrough to replace the missing resources",
                f"A rushed but successful retrofit delivers {discovery}. "
                "The supply crunch is largely mitigated.",
                12,
                [AddDiscovery(discovery=Discovery(name=discovery, category="engineering"))],
            )
        else:
            retrofit = _option(
                "Attempt a rapid engineering breakthrough to replace the missing resources",
                "The retrofit program fails and causes cascading shortages. "
                "A long-term crisis is now active.",
                -10,
                [AddThreat(threat=Threat(name="Resource Shortfall", severity=severity))],
            )

        return Event(
            description=(
                "A critical shortage is developing in fuel and critical materials. "
                f"Internal forecasts rate it severity {severity}."
            ),
            relevant_expertise=[("engineering", 0.4), ("strategy", 0.35), ("diplomacy", 0.25)],
            options=[
                _option(
                    "Impose rationing and efficiency measures",
                    "Consumption drops and reserves stabilize. Nobody loves it, but it works.",
                    3,
                ),
                trade,
                retrofit,
            ],
        )


# --- Discovery ---

class ArtifactTemplate:
    """Find a valuable artifact in an explored sector."""

    name = "Artifact Discovery"
    selection_weight = 0.7

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.explored_sectors) > 1

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        sector = rng.choice(state.explored_sectors)
        artifact = rng.choice(DISCOVERY_TYPES)
        secured = AddDiscovery(discovery=Discovery(name=artifact, category="artifact"))

        if rng.randrange(4) == 0:
            activate = _option(
                "Attempt to activate the artifact immediately",
                f"The {artifact} activates but overloads, causing damage before failing.",
                -10,
            )
        else:
            activate = _option(
                "Attempt to activate the artifact immediately",
                f"The {artifact} activates successfully! Its knowledge is integrated into our systems.",
                18,
                [secured],
            )

        return Event(
            description=(
                f"Survey teams in {sector.name} have discovered what appears to be an "
                f"ancient {artifact}. Initial scans suggest it may still be functional."
            ),
            relevant_expertise=[("archaeology", 0.4), ("science", 0.3), ("engineering", 0.3)],
            options=[
                activate,
                _option(
                    "Carefully study it before attempting activation",
                    f"Careful analysis reveals the {artifact}'s secrets safely.",
                    10,
                    [secured],
                ),
                _option(
                    "Secure the site for later investigation",
                    "The artifact is secured. We'll return to it when resources allow.",
                    2,
                ),
            ],
        )


# --- Diplomacy ---

class DiplomaticRequestTemplate:
    """A known species requests a diplomatic summit."""

    name = "Diplomatic Request"
    selection_weight = 0.9

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.known_species) > 0

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        species_name = rng.choice(state.known_species).name
        current = state.relation_of(species_name)

        return Event(
            description=(
                f"The {species_name} have sent an envoy requesting a formal diplomatic summit. "
                "They wish to discuss trade agreements and cultural exchange. "
                f"Current relations are {current.value}."
            ),
            relevant_expertise=[("diplomacy", 0.5), ("culture", 0.3), ("strategy", 0.2)],
            options=[
                _option(
                    "Accept generously, offering trade and cultural exchange",
                    f"The {species_name} are delighted by our generosity. Relations improve significantly!",
                    12,
                    [SetRelation(species=species_name, relation=greatly_improve_relation(current))],
                ),
                _option(
                    "Negotiate cautiously and seek mutual benefit",
                    f"Careful negotiations with the {species_name} yield a modest agreement.",
                    5,
                    [SetRelation(species=species_name, relation=improve_relation(current))],
                ),
                _option(
                    "Decline the summit",
                    f"The {species_name} are offended by our refusal. Relations deteriorate.",
                    -2,
                    [SetRelation(species=species_name, relation=degrade_relation(current))],
                ),
            ],
        )


def _non_hostile_species(state: WorldState) -> List[Species]:
    return [
        s for s in state.known_species
        if state.relation_of(s.name) != Relation.HOSTILE
    ]


class CulturalExchangeTemplate:
    """A friendly-enough species proposes a cultural exchange."""

    name = "Cultural Exchange"
    selection_weight = 0.7

    def is_applicable(self, state: WorldState) -> bool:
        # Only with someone we are not openly at war with
        return len(_non_hostile_species(state)) > 0

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        candidates = _non_hostile_species(state) or state.known_species
        species_name = rng.choice(candidates).name
        current = state.relation_of(species_name)
        lexicon = AddDiscovery(
            discovery=Discovery(name=f"{species_name} Cultural Lexicon", category="culture")
        )
        mishap = rng.randrange(6) == 0

        if mishap:
            commit = _option(
                "Commit fully: exchange scholars and share archives",
                "A translation mishap causes offense during the exchange. "
                "Relations cool despite useful insights.",
                2,
                [
                    lexicon,
                    SetRelation(
                        species=species_name,
                        relation=degrade_relation(improve_relation(current)),
                    ),
                ],
            )
        else:
            commit = _option(
                "Commit fully: exchange scholars and share archives",
                f"The exchange succeeds. We compile the {species_name} Cultural Lexicon "
                "and relations improve.",
                10,
                [lexicon, SetRelation(species=species_name, relation=improve_relation(current))],
            )

        return Event(
            description=(
                f"The {species_name} invite us to a structured cultural exchange: language "
                "mapping, art archives, and diplomatic protocol training. "
                f"Current relations are {current.value}."
            ),
            relevant_expertise=[("culture", 0.4), ("diplomacy", 0.4), ("science", 0.2)],
            options=[
                commit,
                _option(
                    "Accept cautiously and run a limited exchange",
                    "A small exchange program runs smoothly. Incremental trust is built.",
                    5,
                    [SetRelation(species=species_name, relation=current)],
                ),
                _option(
                    "Decline and focus on strategic priorities",
                    "We politely decline. The relationship suffers from the missed opportunity.",
                    -1,
                    [SetRelation(species=species_name, relation=degrade_relation(current))],
                ),
            ],
        )


# --- Research ---

class TechBreakthroughTemplate:
    """Accumulated discoveries open the path to a major breakthrough."""

    name = "Tech Breakthrough"
    selection_weight = 0.7

    def is_applicable(self, state: WorldState) -> bool:
        return len(state.discoveries) >= 3

    def generate(self, state: WorldState, rng: random.Random) -> Event:
        breakthrough = rng.choice(RESEARCH_DISCOVERIES)
        research = AddDiscovery(discovery=Discovery(name=breakthrough, category="research"))

        return Event(
            description=(
                "Our scientists report that recent discoveries have opened a path to a "
                f"major breakthrough: {breakthrough}. Significant resources would be "
                "required to pursue it."
            ),
            relevant_expertise=[("science", 0.5), ("engineering", 0.3), ("exploration", 0.2)],
            options=[
                _option(
                    "Full investment: redirect all research capacity",
                    f"Massive investment pays off! {breakthrough} is achieved, "
                    "revolutionizing our capabilities.",
                    18,
                    [research],
                ),
                _option(
                    "Methodical research with steady progress over time",
                    f"Patient research yields results. {breakthrough} is added to our knowledge base.",
                    8,
                    [research],
                ),
                _option(
                    "Archive the findings for later",
                    "The research notes are filed away. Perhaps we'll revisit them.",
                    2,
                ),
            ],
        )


def default_templates() -> List[EventTemplate]:
    """Fresh instances of every built-in template, in registration order."""
    return [
        UnknownSignalTemplate(),
        DerelictTemplate(),
        AnomalyTemplate(),
        FirstContactTemplate(),
        ThreatEmergenceTemplate(),
        CounteroffensiveTemplate(),
        ResourceScarcityTemplate(),
        ArtifactTemplate(),
        DiplomaticRequestTemplate(),
        CulturalExchangeTemplate(),
        TechBreakthroughTemplate(),
    ]


def default_catalog(extra: Sequence[EventTemplate] = ()) -> TemplateCatalog:
    """A catalog of the built-in templates plus any extras."""
    return TemplateCatalog(list(default_templates()) + list(extra))
