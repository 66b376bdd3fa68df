"""
Configuration for KUALITAS
"""

from .app_config import AppConfig
from .settings import ApplicationSettings, get_settings, reload_settings

__all__ = ["AppConfig", "ApplicationSettings", "get_settings", "reload_settings"]
