"""
Settings
Configuration management for the Pattern Library MCP Server.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Profiles and their content ship inside the package
BUNDLED_CONTENT_ROOT = Path(__file__).resolve().parent.parent / "content"

DEFAULT_PROFILE = "agency"


def get_content_root() -> Path:
    """
    Get the directory holding server profiles.

    PATTERN_LIBRARY_CONTENT_ROOT overrides the bundled content.
    """
    env_root = os.getenv("PATTERN_LIBRARY_CONTENT_ROOT")
    if env_root:
        return Path(os.path.expanduser(env_root))
    return BUNDLED_CONTENT_ROOT


@dataclass
class Config:
    """Server configuration."""
    environment: str = "development"
    log_level: str = "DEBUG"
    http_host: str = "0.0.0.0"
    http_port: int = 8000
    profile: str = DEFAULT_PROFILE
    content_root: Path = field(default_factory=get_content_root)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


class ConfigManager:
    """Configuration manager - loads and provides config."""

    _instance: Optional["ConfigManager"] = None

    def __init__(self):
        self._config: Optional[Config] = None

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load(self) -> Config:
        """Load configuration from environment (and a .env file if present)."""
        load_dotenv()
        env = os.getenv("ENVIRONMENT", "development")
        self._config = Config(
            environment=env,
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env != "production" else "INFO"),
            http_host=os.getenv("MCP_HOST", "0.0.0.0"),
            http_port=int(os.getenv("MCP_PORT", os.getenv("HTTP_PORT", "8000"))),
            profile=os.getenv("PATTERN_LIBRARY_PROFILE", DEFAULT_PROFILE),
            content_root=get_content_root(),
        )
        return self._config

    def get(self) -> Config:
        """Get current configuration."""
        if self._config is None:
            # Create default config if not loaded
            self._config = Config()
        return self._config
