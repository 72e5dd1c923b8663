"""Configuration helpers for restfully services."""

from .settings import get_settings, Settings

__all__ = ["get_settings", "Settings"]
