"""Environment-driven configuration for the settlement engine."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from settlers.domain.rules_config import (
    DEFAULT_RULES,
    ProductionRules,
    RobberyRules,
    RulesConfig,
    ValidationRules,
)


class Settings(BaseSettings):
    """Rule switches a host application can set through ``SETTLERS_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="SETTLERS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    strict_trades: bool = Field(
        default=False, description="Reject trades where a side does not hold its offer"
    )
    strict_placement: bool = Field(
        default=False,
        description="Check geometry, occupancy, city upgrades and piece limits when building",
    )
    strict_dev_card_stock: bool = Field(
        default=False, description="Only sell development cards still in the stock"
    )
    robber_blocks_production: bool = Field(
        default=True, description="The tile under the robber produces nothing on a roll"
    )
    empty_rob_is_error: bool = Field(
        default=False, description="Robbing a player with no resources is rejected"
    )
    default_seed: str = Field(
        default="standard", description="Seed used for board setup when none is given"
    )

    def rules(self, base: RulesConfig = DEFAULT_RULES) -> RulesConfig:
        """Build a :class:`RulesConfig` from ``base`` with these switches applied."""

        return RulesConfig(
            costs=base.costs,
            dice=base.dice,
            production=ProductionRules(
                settlement_yield=base.production.settlement_yield,
                city_yield=base.production.city_yield,
                robber_blocks_production=self.robber_blocks_production,
            ),
            limits=base.limits,
            validation=ValidationRules(
                trade_holdings=self.strict_trades,
                placement=self.strict_placement,
                dev_card_stock=self.strict_dev_card_stock,
            ),
            robbery=RobberyRules(empty_victim_is_error=self.empty_rob_is_error),
            setup=base.setup,
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
