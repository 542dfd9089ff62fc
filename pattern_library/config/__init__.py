"""
Config Module
Configuration management and server profiles.
"""

from .settings import ConfigManager, Config, get_content_root, BUNDLED_CONTENT_ROOT, DEFAULT_PROFILE
from .profiles import ServerProfile, load_profile, available_profiles

__all__ = [
    "ConfigManager",
    "Config",
    "get_content_root",
    "BUNDLED_CONTENT_ROOT",
    "DEFAULT_PROFILE",
    # Profiles
    "ServerProfile",
    "load_profile",
    "available_profiles",
]
