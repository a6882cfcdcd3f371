"""Engine configuration via pydantic-settings.

Values are loaded from environment variables (.env file). Settings are
organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuctionSettings(BaseSettings):
    """Dynamic auction timing, decay and ranking parameters."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NEZA_AUCTION_", extra="ignore")

    tick_interval_seconds: float = Field(default=30.0, gt=0, description="Driver tick period")
    min_tick_interval_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Offers ticked more recently than this are not decayed again",
    )
    expiry_min_minutes: float = Field(default=30.0, gt=0, description="Shortest offer lifetime")
    expiry_max_minutes: float = Field(default=90.0, gt=0, description="Longest offer lifetime")
    catalog_decay_min: float = Field(default=0.2, ge=0, description="Per-tick decay floor, catalog offers (pp)")
    catalog_decay_max: float = Field(default=0.6, ge=0, description="Per-tick decay ceiling, catalog offers (pp)")
    feed_decay_min: float = Field(default=0.1, ge=0, description="Per-tick decay floor, live feed offers (pp)")
    feed_decay_max: float = Field(default=0.4, ge=0, description="Per-tick decay ceiling, live feed offers (pp)")
    rate_floor: float = Field(default=8.0, ge=0, description="No offer decays below this annual rate")
    max_offers: int = Field(default=5, ge=1, description="Eligible matches admitted to one auction")
    random_seed: int | None = Field(default=None, description="Seed for reproducible auctions")

    @model_validator(mode="after")
    def validate_ranges(self) -> AuctionSettings:
        """Reject ranges whose lower bound exceeds the upper bound."""
        pairs = {
            "expiry": (self.expiry_min_minutes, self.expiry_max_minutes),
            "catalog_decay": (self.catalog_decay_min, self.catalog_decay_max),
            "feed_decay": (self.feed_decay_min, self.feed_decay_max),
        }
        for name, (low, high) in pairs.items():
            if low > high:
                msg = f"Invalid {name} range: {low} > {high}"
                raise ValueError(msg)
        return self


class MatchingSettings(BaseSettings):
    """Live feed supplementation thresholds."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NEZA_MATCHING_", extra="ignore")

    min_live_matches: int = Field(
        default=5,
        ge=0,
        description="Below this many live matches, catalog matches are added",
    )
    max_supplemented_matches: int = Field(
        default=8,
        ge=0,
        description="Upper bound on live + catalog matches after supplementation",
    )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.auction.tick_interval_seconds
        settings.matching.min_live_matches
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NEZA_", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    auction: AuctionSettings = Field(default_factory=AuctionSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton; tests pass explicit settings instead.
settings = Settings()
