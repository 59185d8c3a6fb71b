"""State Changes — the closed set of mutations an outcome can carry."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from council_kernel.models.world import Discovery, Relation, Sector, Species, Threat


class AddSector(BaseModel):
    kind: Literal["add_sector"] = "add_sector"
    sector: Sector


class AddSpecies(BaseModel):
    kind: Literal["add_species"] = "add_species"
    species: Species


class SetRelation(BaseModel):
    kind: Literal["set_relation"] = "set_relation"
    species: str                            # Species name; roster membership not required
    relation: Relation


class AddDiscovery(BaseModel):
    kind: Literal["add_discovery"] = "add_discovery"
    discovery: Discovery


class AddThreat(BaseModel):
    kind: Literal["add_threat"] = "add_threat"
    threat: Threat


class RemoveThreat(BaseModel):
    kind: Literal["remove_threat"] = "remove_threat"
    name: str


class ModifyThreatSeverity(BaseModel):
    kind: Literal["modify_threat_severity"] = "modify_threat_severity"
    name: str
    delta: int


StateChange = Annotated[
    Union[
        AddSector,
        AddSpecies,
        SetRelation,
        AddDiscovery,
        AddThreat,
        RemoveThreat,
        ModifyThreatSeverity,
    ],
    Field(discriminator="kind"),
]
