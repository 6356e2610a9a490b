"""Configuration module for CogniCare."""

from cognicare.config.settings import Environment, Settings, get_settings

__all__ = ["Environment", "Settings", "get_settings"]
