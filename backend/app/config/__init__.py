"""Configuration package for the sign-off dashboard service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
