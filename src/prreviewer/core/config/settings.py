"""Configuration management for the reviewer assignment service."""
import random
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReviewerServiceConfig(BaseSettings):
    """Main configuration for the reviewer assignment service.

    Configuration can be loaded from:
    1. Environment variables (prefixed with PRREVIEWER_)
    2. YAML configuration file (prreviewer.yaml)
    3. Default values
    """

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host address")
    api_port: int = Field(default=8080, description="API port")

    # Database Configuration
    storage: str = Field(default="sqlite", description="Storage backend (sqlite or postgresql)")
    db_path: str = Field(default="./prreviewer.db", description="Database file path for SQLite")
    db_url: Optional[str] = Field(default=None, description="Database URL for PostgreSQL")
    db_echo: bool = Field(default=False, description="Log every SQL statement")

    # Assignment Configuration
    max_reviewers: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Number of reviewers assigned to a new pull request"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for reviewer selection; unset means OS entropy"
    )
    bulk_deactivate_warn_ms: int = Field(
        default=100,
        ge=0,
        description="Bulk deactivations slower than this are logged as warnings"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(
        env_prefix="PRREVIEWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    def get_database_url(self) -> str:
        """Get the database URL based on configuration.

        Returns:
            Database URL string
        """
        if self.db_url:
            return self.db_url

        if self.storage == "sqlite":
            if self.db_path == ":memory:":
                return "sqlite+aiosqlite:///:memory:"
            # Ensure path is absolute
            db_path = Path(self.db_path)
            if not db_path.is_absolute():
                db_path = Path.cwd() / db_path
            return f"sqlite+aiosqlite:///{db_path}"
        elif self.storage == "postgresql":
            raise ValueError(
                "PostgreSQL selected but db_url not provided. "
                "Set PRREVIEWER_DB_URL or db_url in config file."
            )
        else:
            raise ValueError(f"Unknown storage backend: {self.storage}")

    def make_random(self) -> random.Random:
        """Random source for reviewer selection, seeded once per process."""
        return random.Random(self.random_seed)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ReviewerServiceConfig":
        """Build a config from a YAML mapping of field names to values.

        ``PRREVIEWER_*`` environment variables still fill in any field the
        file leaves out.

        Raises:
            FileNotFoundError: If the file is missing
            ValueError: If the file does not hold a mapping
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        data = yaml.safe_load(config_path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping of settings in {config_path}")
        return cls(**data)

    def to_yaml(self, config_path: str | Path) -> None:
        """Write every set field to ``config_path``; unset optional fields are left out."""
        Path(config_path).write_text(
            yaml.safe_dump(self.model_dump(exclude_none=True), default_flow_style=False, sort_keys=False)
        )

    @classmethod
    def create_default_config(cls, config_path: str | Path) -> "ReviewerServiceConfig":
        """Write the defaults (plus any ``PRREVIEWER_*`` overrides) for ``pr-reviewer init``."""
        config = cls()
        config.to_yaml(config_path)
        return config


# Searched in order when no file is given; the first one found wins
DEFAULT_CONFIG_PATHS = (
    Path("prreviewer.yaml"),
    Path("prreviewer.yml"),
    Path(".prreviewer.yaml"),
    Path.home() / ".prreviewer" / "config.yaml",
)

_config: Optional[ReviewerServiceConfig] = None


def init_config(config_path: Optional[str | Path] = None) -> ReviewerServiceConfig:
    """Load the process-wide config used by the CLI and ``create_app()``.

    Args:
        config_path: Explicit YAML file. Without one, the first of
            ``DEFAULT_CONFIG_PATHS`` that exists is used, and with none of
            them present the config comes from the environment alone.
    """
    global _config

    if config_path is None:
        config_path = next((path for path in DEFAULT_CONFIG_PATHS if path.exists()), None)

    _config = ReviewerServiceConfig.from_yaml(config_path) if config_path else ReviewerServiceConfig()
    return _config


def get_config() -> ReviewerServiceConfig:
    """Get the global configuration instance, initializing it on first use."""
    if _config is None:
        return init_config()
    return _config
