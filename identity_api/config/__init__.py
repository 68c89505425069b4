"""Configuration module for the Identity API."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
