from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from roomgraph.exceptions import ConfigurationError
from roomgraph.geometry.contract import AREA_EPSILON, DEFAULT_SNAP_SIZE

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class GraphSettings(BaseModel):
    snap_size: float = Field(DEFAULT_SNAP_SIZE, gt=0.0, allow_inf_nan=False)
    area_epsilon: float = Field(AREA_EPSILON, gt=0.0, allow_inf_nan=False)


class LabelSettings(BaseModel):
    text_height: float = Field(80.0, gt=0.0)
    line_gap_ratio: float = Field(0.9, ge=0.0)
    area_height_ratio: float = Field(0.5, gt=0.0)
    id_color: int = Field(1, ge=0, le=256)
    area_color: int = Field(3, ge=0, le=256)
    area_format: str = "{area:.2f} m2"
    layer: str = "ROOM_LABELS"

    @field_validator("area_format")
    @classmethod
    def _check_area_format(cls, value: str) -> str:  # noqa: D401
        try:
            value.format(area=1.0, index=1)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"area_format must only use {{area}} and {{index}}: {exc}") from exc
        return value


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return "INFO"
        return str(value).upper()


class Settings(BaseModel):
    graph: GraphSettings = Field(default_factory=GraphSettings)
    labels: LabelSettings = Field(default_factory=LabelSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                ROOMGRAPH_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file does not exist or the configuration is invalid.
        """
        config_path = path or Path(os.getenv("ROOMGRAPH_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}", {"path": str(config_path)}) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}", {"path": str(config_path)})
        try:
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


_DEFAULT_CONFIG = Path("config/default.yaml")


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    # Built-in defaults apply only when no file was asked for explicitly
    if path is None and not os.getenv("ROOMGRAPH_CONFIG") and not _DEFAULT_CONFIG.exists():
        return Settings()
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "GraphSettings",
    "LabelSettings",
    "LoggingSettings",
    "get_settings",
]
