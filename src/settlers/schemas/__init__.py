"""Pydantic schemas for actions coming in and effects going out."""

from .actions import (
    BuildCitySchema,
    BuildRoadSchema,
    BuildSettlementSchema,
    BuyDevCardSchema,
    OfferSchema,
    RobSchema,
    RollSchema,
    TradeSchema,
    parse_action,
)
from .common import HexSchema, RoadSchema, VertexSchema
from .effects import (
    AddCitySchema,
    AddDevCardSchema,
    AddResourcesSchema,
    AddRoadSchema,
    AddSettlementSchema,
    RemoveResourcesSchema,
    dump_effects,
    load_effects,
)

__all__ = [
    "AddCitySchema",
    "AddDevCardSchema",
    "AddResourcesSchema",
    "AddRoadSchema",
    "AddSettlementSchema",
    "BuildCitySchema",
    "BuildRoadSchema",
    "BuildSettlementSchema",
    "BuyDevCardSchema",
    "HexSchema",
    "OfferSchema",
    "RemoveResourcesSchema",
    "RobSchema",
    "RollSchema",
    "RoadSchema",
    "TradeSchema",
    "VertexSchema",
    "dump_effects",
    "load_effects",
    "parse_action",
]
