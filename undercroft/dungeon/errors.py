"""Exception hierarchy for dungeon generation and the structures it owns."""

from __future__ import annotations


class DungeonError(Exception):
    """Base class for every error raised by the dungeon package."""


class OutOfRange(DungeonError, IndexError):
    """Coordinate or label outside the valid range (never silently clamped)."""


class InvalidConfig(DungeonError, ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ReadOnlyGrid(DungeonError):
    """Write attempted on a grid whose generation has finished."""


class GeneratorSpent(DungeonError):
    """A generator instance only runs once; build a new one to regenerate."""


__all__ = ["DungeonError", "OutOfRange", "InvalidConfig", "ReadOnlyGrid", "GeneratorSpent"]
