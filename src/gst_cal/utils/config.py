"""
Configuration utilities for the GST Cal tool.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

ENVIRONMENT_ALIASES = {
    "staging": "stg",
    "stg": "stg",
    "production": "prod",
    "prod": "prod",
}


class Config:
    """Configuration manager for the GST Cal project."""

    def __init__(self, env_file: Optional[str] = None) -> None:
        """Initialize configuration.

        If an env_file path is provided, load environment variables from it.
        Otherwise, do not auto-load a .env file to keep defaults predictable.
        """
        self.env_file = env_file
        self._load_environment()
        self._config = self._load_config()

    def _load_environment(self) -> None:
        """Load environment variables from explicit .env file if provided."""
        if not self.env_file:
            return
        env_path = Path(self.env_file)
        if env_path.exists():
            load_dotenv(env_path)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        return {
            # Core settings
            "log_level": self._get_str("LOG_LEVEL", default="INFO"),
            # MongoDB settings for the order and catalog store
            "mongo_url": self._get_str("DB_CONNECTION_URL", default=""),
            "mongo_db": self._get_str("DB_NAME", default="QUICKBITE_STG"),
            "orders_collection": self._get_str("ORDERS_COLLECTION", default="orders"),
            "menu_items_collection": self._get_str("MENU_ITEMS_COLLECTION", default="menu_items"),
            "categories_collection": self._get_str("MENU_CATEGORIES_COLLECTION", default="menu_categories"),
            "vendors_collection": self._get_str("VENDORS_COLLECTION", default="vendors"),
            # Tax calculation settings
            "zero_gst_is_explicit": self._get_bool("ZERO_GST_IS_EXPLICIT", default=False),
            "reconcile_tolerance": self._get_float("RECONCILE_TOLERANCE", default=0.01),
        }

    def _get_str(self, key: str, default: str = "") -> str:
        """Get string configuration value."""
        if self.env_file is None:
            return default
        return os.getenv(key, default)

    def _get_float(self, key: str, default: float = 0.0) -> float:
        """Get float configuration value."""
        if self.env_file is None:
            return default
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean configuration value."""
        if self.env_file is None:
            return default
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def environment_settings(self, environment: str) -> Dict[str, Optional[str]]:
        """Resolve database name and connection URL for staging/production."""
        env_key = ENVIRONMENT_ALIASES.get(environment.lower(), "stg")
        suffix = env_key.upper()
        db_name = os.getenv(f"DB_NAME_{suffix}") or self.get("mongo_db")
        mongo_url = os.getenv(f"DB_CONNECTION_URL_{suffix}") or self.get("mongo_url")
        return {"env": env_key, "db_name": db_name, "mongo_url": mongo_url}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get configuration value using bracket notation."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config
