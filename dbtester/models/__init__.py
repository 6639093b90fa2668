"""Data models for dbtester."""

from .server import ServerConfig

__all__ = ["ServerConfig"]
