"""Configuration management for approute using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".approute.json"


class OutputFormat(str, Enum):
    """Output format types."""
    MERMAID = "mermaid"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class CatalogConfig(BaseModel):
    """Catalog configuration section."""
    path: str = "catalog.json"


class SearchConfig(BaseModel):
    """Route search limits."""
    max_expansions: int = Field(alias="maxExpansions", default=100_000)
    timeout_seconds: float = Field(alias="timeoutSeconds", default=10.0)
    max_depth: int = Field(alias="maxDepth", default=500)

    @field_validator("max_expansions")
    @classmethod
    def validate_max_expansions(cls, v):
        if v < 1:
            raise ValueError("max_expansions must be >= 1")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.MERMAID
    dir: str = "."  # base for relative --out paths

    model_config = ConfigDict(use_enum_values=True)


class ApiConfig(BaseModel):
    """HTTP API configuration section."""
    enabled: bool = True
    bind: str = "127.0.0.1"  # Localhost only
    port: int = 8080

    @field_validator("bind")
    @classmethod
    def validate_bind_address(cls, v):
        """Validate bind address - only localhost addresses allowed."""
        allowed_localhost = ["127.0.0.1", "localhost", "::1"]
        if v not in allowed_localhost:
            raise ValueError(f"bind address must be localhost only, got: {v}")
        return v

    @field_validator("port")
    @classmethod
    def validate_port_range(cls, v):
        """Validate port is in valid range."""
        if not (1024 <= v <= 65535):
            raise ValueError(f"port must be between 1024-65535, got: {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class ApprouteConfig(BaseModel):
    """Complete approute configuration model."""
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ApprouteConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .approute.json

    Returns:
        ApprouteConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ApprouteConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return ApprouteConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .approute.json by searching up the directory tree."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
