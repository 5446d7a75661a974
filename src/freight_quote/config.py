"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .services.pricing.engine import DEFAULT_EQUIPMENT_MULTIPLIERS, PricingConfig


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FQ_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Freight Quote API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for stored quote files.")

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the Nominatim geocoding service.",
    )
    nominatim_user_agent: str = Field(
        default="FreightQuoteCalculator/1.0",
        description="User-Agent sent to Nominatim (required by its usage policy).",
    )
    nominatim_email: Optional[str] = Field(default=None, description="Contact email forwarded to Nominatim.")
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)

    osrm_base_url: str = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service (e.g., http://localhost:5000).",
    )
    osrm_profile: Literal["driving", "driving-hgv"] = Field(
        default="driving",
        description="OSRM profile to use when computing road distance.",
    )
    routing_timeout_seconds: float = Field(default=5.0, gt=0.0)

    base_rate_per_mile: float = Field(default=2.00, ge=0.0)
    minimum_quote: float = Field(default=100.00, ge=0.0)
    weight_threshold_lb: float = Field(default=10000, ge=0.0)
    weight_surcharge_per_hundred_lb: float = Field(default=0.10, ge=0.0)
    equipment_multipliers: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_EQUIPMENT_MULTIPLIERS),
        description="Price multiplier per equipment type.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("equipment_multipliers", mode="before")
    @classmethod
    def _merge_multipliers(cls, value: Any) -> dict[str, float]:
        """Accept a JSON object string and fill in defaults for omitted equipment types."""
        if value is None or value == "":
            return dict(DEFAULT_EQUIPMENT_MULTIPLIERS)
        if isinstance(value, str):
            value = json.loads(value)
        if not isinstance(value, dict):
            raise ValueError("equipment_multipliers must be a mapping of equipment type to multiplier")
        merged = dict(DEFAULT_EQUIPMENT_MULTIPLIERS)
        merged.update({str(key): float(multiplier) for key, multiplier in value.items()})
        return merged

    def pricing_config(self) -> PricingConfig:
        """Build the pricing configuration handed to the pricing engine."""
        return PricingConfig(
            base_rate_per_mile=self.base_rate_per_mile,
            minimum_quote=self.minimum_quote,
            weight_threshold_lb=self.weight_threshold_lb,
            weight_surcharge_per_hundred_lb=self.weight_surcharge_per_hundred_lb,
            equipment_multipliers=dict(self.equipment_multipliers),
        )


settings = Settings()
