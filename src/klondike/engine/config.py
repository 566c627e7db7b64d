"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Optional


class ConfigError(ValueError):
    """Invalid engine configuration."""

    pass


ENV_PREFIX = "KLONDIKE_"


@dataclass
class EngineConfig:
    """Configuration for a Klondike engine."""

    draw_count: int = 3  # Cards moved from stock to waste per draw
    max_stock_recycles: int = 5  # Waste-to-stock resets before the game is over
    recent_activity_limit: int = 5  # Entries kept in the recent-activity log
    history_limit: Optional[int] = None  # None = unbounded undo history
    stalemate_interval: float = 10.0  # Seconds between periodic stalemate checks
    stalemate_threshold: int = 2  # Consecutive empty checks before notifying
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate values."""
        if self.draw_count != 3:
            raise ConfigError(f"Only three-card draw is supported, got {self.draw_count}")
        if self.max_stock_recycles < 1:
            raise ConfigError(f"max_stock_recycles must be >= 1, got {self.max_stock_recycles}")
        if self.recent_activity_limit < 1:
            raise ConfigError(
                f"recent_activity_limit must be >= 1, got {self.recent_activity_limit}"
            )
        if self.history_limit is not None and self.history_limit < 1:
            raise ConfigError(f"history_limit must be >= 1 or None, got {self.history_limit}")
        if self.stalemate_interval <= 0:
            raise ConfigError(
                f"stalemate_interval must be positive, got {self.stalemate_interval}"
            )
        if self.stalemate_threshold < 1:
            raise ConfigError(
                f"stalemate_threshold must be >= 1, got {self.stalemate_threshold}"
            )

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None, **overrides: Any) -> "EngineConfig":
        """Build a config from KLONDIKE_* environment variables.

        Keyword overrides win over the environment; unset variables keep the
        dataclass defaults.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            values[f.name] = _parse_env_value(f.name, raw)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _parse_env_value(name: str, raw: str) -> Any:
    """Parse one environment value for the named field."""
    try:
        if name == "stalemate_interval":
            return float(raw)
        if name == "history_limit" and raw.lower() in ("none", "unbounded"):
            return None
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a number") from e
