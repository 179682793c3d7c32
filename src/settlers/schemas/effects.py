from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from settlers.domain import effects as de
from settlers.domain.enums import DevelopmentCard
from settlers.domain.models import PlayerID

from .common import ResourceAmounts, RoadSchema, VertexSchema


class AddResourcesSchema(BaseModel):
    kind: Literal["add_resources"] = "add_resources"
    player_id: int
    resources: ResourceAmounts

    @classmethod
    def from_domain(cls, effect: de.AddResources) -> AddResourcesSchema:
        return cls(player_id=int(effect.player_id), resources=dict(effect.resources))

    def to_domain(self) -> de.AddResources:
        return de.AddResources(player_id=PlayerID(self.player_id), resources=dict(self.resources))


class RemoveResourcesSchema(BaseModel):
    kind: Literal["remove_resources"] = "remove_resources"
    player_id: int
    resources: ResourceAmounts

    @classmethod
    def from_domain(cls, effect: de.RemoveResources) -> RemoveResourcesSchema:
        return cls(player_id=int(effect.player_id), resources=dict(effect.resources))

    def to_domain(self) -> de.RemoveResources:
        return de.RemoveResources(
            player_id=PlayerID(self.player_id), resources=dict(self.resources)
        )


class AddDevCardSchema(BaseModel):
    kind: Literal["add_dev_card"] = "add_dev_card"
    player_id: int
    card: DevelopmentCard

    @classmethod
    def from_domain(cls, effect: de.AddDevCard) -> AddDevCardSchema:
        return cls(player_id=int(effect.player_id), card=effect.card)

    def to_domain(self) -> de.AddDevCard:
        return de.AddDevCard(player_id=PlayerID(self.player_id), card=self.card)


class AddRoadSchema(BaseModel):
    kind: Literal["add_road"] = "add_road"
    player_id: int
    road: RoadSchema

    @classmethod
    def from_domain(cls, effect: de.AddRoad) -> AddRoadSchema:
        return cls(player_id=int(effect.player_id), road=RoadSchema.from_domain(effect.road))

    def to_domain(self) -> de.AddRoad:
        return de.AddRoad(player_id=PlayerID(self.player_id), road=self.road.to_domain())


class AddSettlementSchema(BaseModel):
    kind: Literal["add_settlement"] = "add_settlement"
    player_id: int
    settlement: VertexSchema

    @classmethod
    def from_domain(cls, effect: de.AddSettlement) -> AddSettlementSchema:
        return cls(
            player_id=int(effect.player_id),
            settlement=VertexSchema.from_domain(effect.settlement),
        )

    def to_domain(self) -> de.AddSettlement:
        return de.AddSettlement(
            player_id=PlayerID(self.player_id), settlement=self.settlement.to_settlement()
        )


class AddCitySchema(BaseModel):
    kind: Literal["add_city"] = "add_city"
    player_id: int
    city: VertexSchema

    @classmethod
    def from_domain(cls, effect: de.AddCity) -> AddCitySchema:
        return cls(player_id=int(effect.player_id), city=VertexSchema.from_domain(effect.city))

    def to_domain(self) -> de.AddCity:
        return de.AddCity(player_id=PlayerID(self.player_id), city=self.city.to_city())


EffectSchema = Annotated[
    AddResourcesSchema
    | RemoveResourcesSchema
    | AddDevCardSchema
    | AddRoadSchema
    | AddSettlementSchema
    | AddCitySchema,
    Field(discriminator="kind"),
]

EFFECT_LIST_ADAPTER: TypeAdapter[list[EffectSchema]] = TypeAdapter(list[EffectSchema])

_SCHEMA_FOR_EFFECT: dict[type, Any] = {
    de.AddResources: AddResourcesSchema,
    de.RemoveResources: RemoveResourcesSchema,
    de.AddDevCard: AddDevCardSchema,
    de.AddRoad: AddRoadSchema,
    de.AddSettlement: AddSettlementSchema,
    de.AddCity: AddCitySchema,
}


def dump_effects(effects: Sequence[de.Effect]) -> list[dict[str, Any]]:
    """Convert effects to JSON-compatible dictionaries, preserving order."""

    dumped = []
    for effect in effects:
        schema = _SCHEMA_FOR_EFFECT.get(type(effect))
        if schema is None:
            raise TypeError(f"unsupported effect type: {type(effect).__name__}")
        dumped.append(schema.from_domain(effect).model_dump(mode="json"))
    return dumped


def load_effects(data: Iterable[Mapping[str, Any]]) -> list[de.Effect]:
    """Validate serialized effects and convert them back to domain effects.

    Raises:
        pydantic.ValidationError: If any entry is malformed
    """

    return [schema.to_domain() for schema in EFFECT_LIST_ADAPTER.validate_python(list(data))]
