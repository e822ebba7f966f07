"""
Environment configuration loader with validation for the aviation record store.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class StoreConfig(BaseModel):
    """Configuration model for the record store with validation."""

    # Store files
    database_dir: str = Field(
        default="database", description="Directory holding persistent store files"
    )
    customers_db: str = Field(
        default="customers_database.db", description="Customer store file name"
    )
    sales_db: str = Field(
        default="sales_database.db", description="Reservation and sale record store file name"
    )
    airplanes_db: str = Field(default="airplanes.db", description="Airplane store file name")
    flights_db: str = Field(default="flights.db", description="Flight store file name")

    # Behaviour
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    strict: bool = Field(
        default=False,
        description="Re-raise failures from store convenience methods instead of returning them",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("customers_db", "sales_db", "airplanes_db", "flights_db")
    @classmethod
    def validate_db_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Store file name must not be empty")
        return v

    def resolve_path(self, name: str) -> Path:
        """Resolve a store file name against the database directory."""
        path = Path(name)
        if path.is_absolute():
            return path
        return Path(self.database_dir) / path


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


def load_config(env_file: Optional[str] = None) -> StoreConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        StoreConfig: Validated configuration object

    Raises:
        ValueError: If configuration is invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    config_data: Dict[str, Any] = {
        "database_dir": os.getenv("STORE_DATABASE_DIR", "database"),
        "customers_db": os.getenv("STORE_CUSTOMERS_DB", "customers_database.db"),
        "sales_db": os.getenv("STORE_SALES_DB", "sales_database.db"),
        "airplanes_db": os.getenv("STORE_AIRPLANES_DB", "airplanes.db"),
        "flights_db": os.getenv("STORE_FLIGHTS_DB", "flights.db"),
        "echo_sql": _env_flag("STORE_ECHO_SQL", "false"),
        "strict": _env_flag("STORE_STRICT", "false"),
        "log_level": os.getenv("STORE_LOG_LEVEL", "INFO"),
    }

    try:
        return StoreConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for store tools and scripts."""
    logging.basicConfig(
        level=getattr(logging, (level or get_config().log_level).upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# Global configuration instance
_config: Optional[StoreConfig] = None


def get_config() -> StoreConfig:
    """
    Get the global configuration instance, loading it if necessary.

    Returns:
        StoreConfig: The global configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next lookup reloads it."""
    global _config
    _config = None
