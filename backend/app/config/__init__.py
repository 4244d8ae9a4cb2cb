"""Configuration package for the Basketwise service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
