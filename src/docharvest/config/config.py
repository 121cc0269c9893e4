"""
Configuration management for docharvest using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, Literal, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class DiscoveryConfig(BaseModel):
    """Limits used by the discovery pass."""

    min_data_rows: int = Field(default=2, ge=1, description="Rows with content required for a data table.")
    min_data_columns: int = Field(default=2, ge=1, description="Columns required for a data table.")
    preview_rows: int = Field(default=3, ge=0, description="Rows included in a table preview.")
    preview_cell_length: int = Field(default=50, ge=4, description="Longest preview cell before truncation.")
    max_name_length: int = Field(default=100, ge=4, description="Longest table name before truncation.")
    content_preview_length: int = Field(default=200, ge=1, description="Length of the main content preview.")
    soft_budget_ms: float = Field(default=500.0, description="Discovery duration that triggers a warning.")
    parser: Literal["html.parser", "lxml", "html5lib"] = Field(
        default="html.parser", description="BeautifulSoup tree builder."
    )


class ScoringConfig(BaseModel):
    """Weights for the main content scorer."""

    article_bonus: float = 15.0
    main_bonus: float = 10.0
    role_bonus: float = 10.0
    excluded_pattern_penalty: float = 10.0
    content_pattern_bonus: float = 5.0
    density_weight: float = 20.0
    paragraph_weight: float = 2.0
    max_counted_paragraphs: int = 10
    link_density_limit: float = 0.3
    link_density_penalty: float = 15.0
    min_content_length: int = Field(default=100, description="Minimum trimmed text for a content region.")
    candidate_threshold: float = Field(default=5.0, description="Score a candidate must exceed to be chosen.")
    min_paragraph_length: int = Field(default=20, description="Shortest paragraph kept by extraction.")

    @field_validator("link_density_limit")
    @classmethod
    def validate_link_density(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("link_density_limit must be between 0.0 and 1.0")
        return v


class ResolverConfig(BaseModel):
    """Download URL resolution settings."""

    scrape_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Bounded wait for a page context to answer a scrape request."
    )


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "docharvest"
    version: str = "0.1.0"
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="DOCHARVEST_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "docharvest.yaml", current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return Config.from_yaml(config_path)
            except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. Falling back to default settings.",
                    config_path,
                    e,
                    exc_info=log.getEffectiveLevel() <= logging.DEBUG,
                )
        else:
            log.debug("No config file found. Using default settings for lazy load.")

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
