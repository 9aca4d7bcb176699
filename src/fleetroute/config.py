"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FLEETROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Fleet Route Quote API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted quote outputs.")
    hubs_file: Optional[Path] = Field(
        default=None,
        description="Optional workbook with Hub/Latitude/Longitude columns replacing the built-in hub registry.",
    )
    hub_handling_minutes: float = Field(default=10.0, ge=0.0, description="Dwell time added for every hub transfer.")
    hub_pooling_discount: float = Field(default=0.25, ge=0.0, lt=1.0)
    direct_pooling_discount: float = Field(default=0.15, ge=0.0, lt=1.0)
    fleet_composition: Annotated[dict[str, int], NoDecode] = Field(
        default={"Van": 3, "Tempo": 2, "Truck": 1, "2W": 4},
        description="Vehicle instances seeded per class at every hub.",
    )
    shared_fleet: bool = Field(
        default=True,
        description="Keep one in-process fleet across quotes to simulate utilization.",
    )
    persist_quotes: bool = False

    geocoding_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocoding_api_key: Optional[str] = Field(default=None, description="Google Geocoding API key.")
    geocoding_region: str = "in"
    geocoding_max_retries: int = Field(default=2, ge=0)
    geocoding_backoff_seconds: float = Field(default=0.5, ge=0.0)
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_data_root(cls, value: Any) -> Path:
        if value is None or value == "":
            return Path("data").resolve()
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("hubs_file", mode="before")
    @classmethod
    def _expand_optional_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
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
            return tuple(item.strip() for item in value.split(",") if item.strip())
        return tuple()

    @field_validator("fleet_composition", mode="before")
    @classmethod
    def _normalize_composition(cls, value: Any) -> dict[str, int]:
        """Parse composition from a mapping, a JSON object or `Class=N,Class=N` pairs."""
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return {}
            if text.startswith("{"):
                value = json.loads(text)
            else:
                pairs = {}
                for item in text.split(","):
                    if not item.strip():
                        continue
                    name, sep, count = item.partition("=")
                    if not sep:
                        raise ValueError(f"Expected Class=N, got '{item.strip()}'")
                    pairs[name.strip()] = count.strip()
                value = pairs
        if isinstance(value, dict):
            return {str(name): int(count) for name, count in value.items()}
        return value


settings = Settings()
