"""Mini README: Centralised configuration models and helpers for FinX.

Structure:
    * FinxSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``FINX_`` environment variables (or a
    ``.env`` file), locate the ledger file, and pick the dashboard address.
    The configuration is cached so validation runs once per process; tests
    construct ``FinxSettings`` directly instead.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CHART_JS_CDN = "https://cdn.jsdelivr.net/npm/chart.js"


class FinxSettings(BaseSettings):
    """Runtime configuration for the FinX ledger."""

    model_config = SettingsConfigDict(
        env_prefix="FINX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the durable key-value file.",
    )
    ledger_filename: str = Field(
        "ledger.json",
        description="Name of the key-value file inside the data directory.",
    )
    storage_key: str = Field(
        "finx_transactions",
        description="Key under which the serialised transaction list is stored.",
    )
    currency_symbol: str = Field(
        "$",
        description="Fixed prefix used when formatting money values.",
    )
    placeholder_text: str = Field(
        "-",
        description="Text stored for blank categories and descriptions.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the dashboard exposes.",
        ge=1,
        le=65535,
    )
    chart_script_url: Optional[str] = Field(
        CHART_JS_CDN,
        description=(
            "Script URL of the charting library used by the dashboard."
            " Leave empty to disable the category chart."
        ),
    )
    log_level: str = Field("INFO", description="Root logging level name.")

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value if value is not None else "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("chart_script_url", mode="before")
    @classmethod
    def _blank_disables_chart(cls, value: Optional[str]) -> Optional[str]:
        """Treat an empty string as "no charting library"."""

        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @property
    def ledger_path(self) -> Path:
        """Full path of the durable key-value file."""

        return self.data_directory / self.ledger_filename


@lru_cache()
def get_settings() -> FinxSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FinxSettings()
