# normalarb/core/config.py
"""Simulation settings loaded from normalarb.toml and NORMALARB_* environment variables.

Precedence, highest first: keyword arguments, environment, TOML file.
Nested fields use a double underscore in the environment, e.g.
NORMALARB_ECONOMIC__POOL_FEE_BASIS_POINTS=30.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Tuple, Type, Union

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .curve import BASIS_POINT_DIVISOR, SECONDS_PER_YEAR
from .fixedpoint import to_wad
from .models import PoolConfig

DEFAULT_TOML_FILE = "normalarb.toml"


class EconomicSettings(BaseModel):
    """Parameters of the normal strategy pool under simulation."""
    pool_volatility_basis_points: int = Field(default=1_000, gt=0)
    pool_strike_price: Decimal = Field(default=Decimal("1.0"), gt=0)
    pool_time_remaining_years: Decimal = Field(default=Decimal("1.0"), ge=0)
    pool_is_perpetual: bool = True
    pool_fee_basis_points: int = Field(default=10, ge=0, le=10_000)

    def to_pool_config(self, creation_timestamp: int) -> PoolConfig:
        duration = int(self.pool_time_remaining_years * SECONDS_PER_YEAR)
        return PoolConfig(
            strike_price_wad=to_wad(self.pool_strike_price),
            volatility_basis_points=self.pool_volatility_basis_points,
            duration_seconds=duration,
            creation_timestamp=creation_timestamp,
            is_perpetual=self.pool_is_perpetual,
        )


class ArbitrageSettings(BaseModel):
    """Retry and filtering policy of the arbitrage agent."""
    caller: str = "arbitrageur"
    max_swap_attempts: int = Field(default=100, gt=0)
    # each rejected swap asks for this much less output on the next attempt
    retry_output_haircut_basis_points: int = Field(default=10, ge=0, lt=10_000)
    no_arb_fee_multiplier: int = Field(default=2, ge=0)
    check_arb_bounds: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NORMALARB_",
        env_nested_delimiter="__",
        toml_file=DEFAULT_TOML_FILE,
        extra="ignore",
    )

    economic: EconomicSettings = Field(default_factory=EconomicSettings)
    arbitrage: ArbitrageSettings = Field(default_factory=ArbitrageSettings)

    @model_validator(mode="after")
    def check_no_arb_band(self) -> "Settings":
        # the pre-check divides by 1 - multiplier * fee
        if not self.arbitrage.check_arb_bounds:
            return self
        charged = self.economic.pool_fee_basis_points * self.arbitrage.no_arb_fee_multiplier
        if charged >= BASIS_POINT_DIVISOR:
            raise ValueError(
                f"pool fee of {self.economic.pool_fee_basis_points} bps times "
                f"no_arb_fee_multiplier {self.arbitrage.no_arb_fee_multiplier} "
                f"leaves no no-arbitrage band")
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls))


def load_settings(toml_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load the settings, optionally from a TOML file other than normalarb.toml.
    A missing file is not an error; defaults apply.
    """
    if toml_file is None:
        return Settings()

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=Path(toml_file))

    return FileSettings()
