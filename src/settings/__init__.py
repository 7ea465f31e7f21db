"""Environment settings for the picker CLI."""

from .app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
