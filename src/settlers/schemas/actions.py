from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from settlers.domain import actions as da
from settlers.domain.enums import DevelopmentCard
from settlers.domain.models import PlayerID

from .common import ResourceAmounts, RoadSchema, VertexSchema


class RollSchema(BaseModel):
    kind: Literal["roll"] = "roll"
    a: int = Field(..., ge=1, description="First die")
    b: int = Field(..., ge=1, description="Second die")

    def to_domain(self) -> da.Roll:
        return da.Roll(a=self.a, b=self.b)


class RobSchema(BaseModel):
    kind: Literal["rob"] = "rob"
    robber: int
    victim: int

    def to_domain(self) -> da.Rob:
        return da.Rob(robber=PlayerID(self.robber), victim=PlayerID(self.victim))


class OfferSchema(BaseModel):
    player_id: int
    resources: ResourceAmounts = Field(default_factory=dict)

    def to_domain(self) -> da.Offer:
        return da.Offer(player_id=PlayerID(self.player_id), resources=dict(self.resources))


class TradeSchema(BaseModel):
    kind: Literal["trade"] = "trade"
    party: OfferSchema
    counterparty: OfferSchema

    def to_domain(self) -> da.Trade:
        return da.Trade(party=self.party.to_domain(), counterparty=self.counterparty.to_domain())


class BuyDevCardSchema(BaseModel):
    kind: Literal["buy_dev_card"] = "buy_dev_card"
    player_id: int
    card: DevelopmentCard

    def to_domain(self) -> da.BuyDevCard:
        return da.BuyDevCard(player_id=PlayerID(self.player_id), card=self.card)


class BuildRoadSchema(BaseModel):
    kind: Literal["build_road"] = "build_road"
    player_id: int
    road: RoadSchema

    def to_domain(self) -> da.BuildRoad:
        return da.BuildRoad(player_id=PlayerID(self.player_id), road=self.road.to_domain())


class BuildSettlementSchema(BaseModel):
    kind: Literal["build_settlement"] = "build_settlement"
    player_id: int
    settlement: VertexSchema

    def to_domain(self) -> da.BuildSettlement:
        return da.BuildSettlement(
            player_id=PlayerID(self.player_id), settlement=self.settlement.to_settlement()
        )


class BuildCitySchema(BaseModel):
    kind: Literal["build_city"] = "build_city"
    player_id: int
    city: VertexSchema

    def to_domain(self) -> da.BuildCity:
        return da.BuildCity(player_id=PlayerID(self.player_id), city=self.city.to_city())


ActionSchema = Annotated[
    RollSchema
    | RobSchema
    | TradeSchema
    | BuyDevCardSchema
    | BuildRoadSchema
    | BuildSettlementSchema
    | BuildCitySchema,
    Field(discriminator="kind"),
]

ACTION_ADAPTER: TypeAdapter[ActionSchema] = TypeAdapter(ActionSchema)


def parse_action(data: Mapping[str, Any]) -> da.Action:
    """Validate a raw action payload and convert it to a domain action.

    Raises:
        pydantic.ValidationError: If the payload is malformed
    """

    return ACTION_ADAPTER.validate_python(data).to_domain()
