"""Configuration management for the query engine."""

from __future__ import annotations

import re
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from query_engine.domain.errors import InvalidBucketSchemeError
from query_engine.domain.value_objects import BucketScheme, PriceBand


class PriceBandSettings(BaseModel):
    """One price band as it appears in settings."""

    label: str = Field(min_length=1, description="Band label")
    upper_bound: Decimal | None = Field(
        default=None, ge=0, description="Upper bound, None for the last band"
    )
    inclusive: bool = Field(default=False, description="Whether the bound itself belongs to the band")

    def to_band(self) -> PriceBand:
        return PriceBand(self.label, self.upper_bound, self.inclusive)


def _reference_bands() -> list[PriceBandSettings]:
    return [
        PriceBandSettings(label=band.label, upper_bound=band.upper_bound, inclusive=band.inclusive)
        for band in BucketScheme.reference()
    ]


class QuerySettings(BaseModel):
    """Named constants that parameterize the analytical queries."""

    turnover_threshold: Decimal = Field(
        default=Decimal("80000"), ge=0, description="Minimum customer turnover (exclusive)"
    )
    order_total_threshold: Decimal = Field(
        default=Decimal("8000"), ge=0, description="Minimum single order total (exclusive)"
    )
    price_bands: list[PriceBandSettings] = Field(
        default_factory=_reference_bands, description="Product price bands, cheapest first"
    )
    postal_code_pattern: str = Field(
        default=r"[0-9]+", description="Regex a valid postal code must fully match"
    )
    phone_prefix: str = Field(
        default="(", min_length=1, description="Prefix marking a phone with an operator code"
    )

    @field_validator("postal_code_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid postal_code_pattern: {e}") from e
        return value

    @model_validator(mode="after")
    def _check_bands(self) -> QuerySettings:
        try:
            self.bucket_scheme()
        except InvalidBucketSchemeError as e:
            raise ValueError(str(e)) from e
        return self

    def bucket_scheme(self) -> BucketScheme:
        """Build the domain bucket scheme from the configured bands."""
        return BucketScheme([band.to_band() for band in self.price_bands])


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="query_engine", description="Service name for tracing")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for the query engine."""

    model_config = SettingsConfigDict(
        env_prefix="QUERY_ENGINE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    queries: QuerySettings = Field(default_factory=QuerySettings)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
