"""Snapshot storage backed by DuckDB."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]
