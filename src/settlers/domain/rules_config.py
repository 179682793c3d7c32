"""Declarative rule configuration for the resolver and board setup."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from .enums import DevelopmentCard, Resource


def _bundle(**amounts: int) -> Mapping[Resource, int]:
    return MappingProxyType({Resource(name): amount for name, amount in amounts.items()})


@dataclass(frozen=True, slots=True)
class CostRules:
    """Price of every purchasable piece."""

    road: Mapping[Resource, int] = field(default_factory=lambda: _bundle(lumber=1, brick=1))
    settlement: Mapping[Resource, int] = field(
        default_factory=lambda: _bundle(lumber=1, brick=1, grain=1, wool=1)
    )
    city: Mapping[Resource, int] = field(default_factory=lambda: _bundle(ore=3, grain=2))
    development_card: Mapping[Resource, int] = field(
        default_factory=lambda: _bundle(grain=1, wool=1, ore=1)
    )


@dataclass(frozen=True, slots=True)
class DiceRules:
    """Dice thrown on a roll."""

    count: int = 2
    sides: int = 6

    @property
    def notation(self) -> str:
        return f"{self.count}d{self.sides}"


@dataclass(frozen=True, slots=True)
class ProductionRules:
    """Payout per structure touching a producing tile."""

    settlement_yield: int = 1
    city_yield: int = 2
    robber_blocks_production: bool = True


@dataclass(frozen=True, slots=True)
class PieceLimits:
    """Pieces available to each player."""

    roads: int = 15
    settlements: int = 5
    cities: int = 4


@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Optional checks; all off reproduces the permissive classic resolver."""

    trade_holdings: bool = False  # both sides must hold what they offer
    placement: bool = False  # geometry, occupancy, city upgrade and piece limits
    dev_card_stock: bool = False  # bought card must still be in the stock


@dataclass(frozen=True, slots=True)
class RobberyRules:
    """Robbery edge cases."""

    empty_victim_is_error: bool = False  # otherwise robbing nobody yields no effects


@dataclass(frozen=True, slots=True)
class SetupRules:
    """Composition of a standard board."""

    land_radius: int = 2
    terrain: Mapping[Resource, int] = field(
        default_factory=lambda: _bundle(lumber=4, grain=4, wool=4, brick=3, ore=3, desert=1)
    )
    # Laid out in spiral order over the non-desert tiles
    number_tokens: tuple[int, ...] = (5, 2, 6, 3, 8, 10, 9, 12, 11, 4, 8, 10, 9, 4, 5, 6, 3, 11)
    development_cards: Mapping[DevelopmentCard, int] = field(
        default_factory=lambda: MappingProxyType(
            {
                DevelopmentCard.KNIGHT: 14,
                DevelopmentCard.VICTORY_POINT: 5,
                DevelopmentCard.MONOPOLY: 2,
                DevelopmentCard.YEAR_OF_PLENTY: 2,
                DevelopmentCard.ROAD_BUILDING: 2,
            }
        )
    )


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    costs: CostRules = field(default_factory=CostRules)
    dice: DiceRules = DiceRules()
    production: ProductionRules = ProductionRules()
    limits: PieceLimits = PieceLimits()
    validation: ValidationRules = ValidationRules()
    robbery: RobberyRules = RobberyRules()
    setup: SetupRules = field(default_factory=SetupRules)

    def strict(self) -> RulesConfig:
        """Return a copy with every optional validation switched on."""
        return replace(
            self,
            validation=ValidationRules(trade_holdings=True, placement=True, dev_card_stock=True),
            robbery=RobberyRules(empty_victim_is_error=True),
        )


DEFAULT_RULES = RulesConfig()
STRICT_RULES = DEFAULT_RULES.strict()
