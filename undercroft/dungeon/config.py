import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .errors import InvalidConfig

# Environment variable -> config field
ENV_MAP = {
    'DUNGEON_WIDTH': 'width',
    'DUNGEON_HEIGHT': 'height',
    'DUNGEON_ROOM_ATTEMPTS': 'room_attempts',
    'DUNGEON_SIZE_MODIFIER': 'size_modifier',
    'DUNGEON_DIRECTION_CHANCE': 'direction_chance',
    'DUNGEON_CONNECTION_CHANCE': 'connection_chance',
    'DUNGEON_SEED': 'seed',
    'DUNGEON_ENABLE_GENERATION_METRICS': 'enable_metrics',
}


@dataclass
class DungeonConfig:
    width: int = 501
    height: int = 501
    room_attempts: int = 500
    # Higher = bigger rooms
    size_modifier: int = 0
    # Percent chance a maze corridor turns instead of running straight
    direction_chance: int = 0
    # Percent chance each leftover connector is opened as an extra loop
    connection_chance: int = 30
    seed: Optional[int] = None
    enable_metrics: bool = True

    def validate(self) -> "DungeonConfig":
        """Raise ``InvalidConfig`` for the first bad field; return self otherwise."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidConfig(name, f"must be a positive integer, got {value!r}")
            if value % 2 == 0:
                raise InvalidConfig(name, f"must be odd, got {value}")
        for name in ('room_attempts', 'size_modifier'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidConfig(name, f"must be a non-negative integer, got {value!r}")
        for name in ('direction_chance', 'connection_chance'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 100:
                raise InvalidConfig(name, f"must be a percentage 0-100, got {value!r}")
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool)):
            raise InvalidConfig('seed', f"must be an integer or None, got {self.seed!r}")
        return self

    def with_overrides(self, **overrides) -> "DungeonConfig":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise InvalidConfig(sorted(unknown)[0], "unknown config field")
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "DungeonConfig":
        """Build a config from ``DUNGEON_*`` environment variables.

        Explicit keyword overrides win over the environment. Values that do not
        parse as integers raise ``InvalidConfig`` naming the offending field.
        """
        if environ is None:
            environ = os.environ
        values = {}
        for env_key, attr in ENV_MAP.items():
            if env_key not in environ:
                continue
            raw = environ.get(env_key, '').strip()
            if attr == 'enable_metrics':
                values[attr] = raw.lower() not in {'0', 'false', 'no', ''}
                continue
            if attr == 'seed' and raw == '':
                continue
            try:
                values[attr] = int(raw)
            except ValueError:
                raise InvalidConfig(attr, f"{env_key}={raw!r} is not an integer") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls().with_overrides(**values)


__all__ = ["DungeonConfig", "ENV_MAP"]
