from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, NonNegativeInt

from settlers.domain.enums import Resource
from settlers.domain.models import City, Road, Settlement
from settlers.utils.hex_math import Hex


def _only_productive(bundle: dict[Resource, int]) -> dict[Resource, int]:
    for resource in bundle:
        if not resource.is_productive:
            raise ValueError(f"{resource} is not a tradeable resource")
    return bundle


ResourceAmounts = Annotated[dict[Resource, NonNegativeInt], AfterValidator(_only_productive)]


class HexSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: int = Field(..., description="Axial column")
    r: int = Field(..., description="Axial row")

    @classmethod
    def from_domain(cls, coord: Hex) -> HexSchema:
        return cls(q=coord.q, r=coord.r)

    def to_domain(self) -> Hex:
        return Hex(q=self.q, r=self.r)


class RoadSchema(BaseModel):
    a: HexSchema
    b: HexSchema

    @classmethod
    def from_domain(cls, road: Road) -> RoadSchema:
        return cls(a=HexSchema.from_domain(road.a), b=HexSchema.from_domain(road.b))

    def to_domain(self) -> Road:
        return Road(a=self.a.to_domain(), b=self.b.to_domain())


class VertexSchema(BaseModel):
    a: HexSchema
    b: HexSchema
    c: HexSchema

    @classmethod
    def from_domain(cls, vertex: Settlement | City) -> VertexSchema:
        return cls(
            a=HexSchema.from_domain(vertex.a),
            b=HexSchema.from_domain(vertex.b),
            c=HexSchema.from_domain(vertex.c),
        )

    def to_settlement(self) -> Settlement:
        return Settlement(a=self.a.to_domain(), b=self.b.to_domain(), c=self.c.to_domain())

    def to_city(self) -> City:
        return City(a=self.a.to_domain(), b=self.b.to_domain(), c=self.c.to_domain())
