"""
Scrollbar Configuration

This module defines the configuration for the scroll estimation core, the
scroll controller and the reference list host.
"""

import json
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger

from .errors import ConfigurationError


class SplitRounding(Enum):
    """How an evicted entry's remaining size is shared between its remainders."""
    CONSERVE = "conserve"  # bottom share truncated, top takes the rest
    TRUNCATE = "truncate"  # both shares truncated independently


_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ScrollbarConfig:
    """Configuration for estimated scrollbars."""

    # Thumb geometry
    min_thumb_size: float = 16.0
    thickness: float = 8.0

    # Estimation
    use_range_cache: bool = True
    split_rounding: SplitRounding = SplitRounding.CONSERVE
    verify_invariants: bool = False

    # Scrolling
    smooth_scroll: bool = False
    scroll_duration: float = 0.3
    frame_interval: float = 0.016  # ~60fps

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration values."""
        if isinstance(self.split_rounding, str):
            try:
                self.split_rounding = SplitRounding(self.split_rounding)
            except ValueError:
                logger.warning(f"Unknown split rounding {self.split_rounding!r}, using conserve")
                self.split_rounding = SplitRounding.CONSERVE
        if self.min_thumb_size < 0:
            logger.warning(f"Invalid min_thumb_size {self.min_thumb_size}, using 16.0")
            self.min_thumb_size = 16.0
        if self.thickness <= 0:
            logger.warning(f"Invalid thickness {self.thickness}, using 8.0")
            self.thickness = 8.0
        if self.scroll_duration < 0:
            logger.warning(f"Invalid scroll_duration {self.scroll_duration}, using 0.3")
            self.scroll_duration = 0.3
        if self.frame_interval <= 0:
            logger.warning(f"Invalid frame_interval {self.frame_interval}, using 0.016")
            self.frame_interval = 0.016
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            logger.warning(f"Invalid log_level {self.log_level!r}, using INFO")
            self.log_level = "INFO"

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        data = asdict(self)
        data["split_rounding"] = self.split_rounding.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScrollbarConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, path: str | Path) -> "ScrollbarConfig":
        """
        Load configuration from a JSON file.

        Missing files yield the defaults.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        config_path = Path(path)
        if not config_path.exists():
            logger.info(f"No config file at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config from {config_path}: {e}",
                operation="load",
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a JSON object",
                operation="load",
            )

        logger.debug(f"Configuration loaded from {config_path}")
        return cls.from_dict(data)

    def save(self, path: str | Path) -> None:
        """Save configuration to a JSON file."""
        config_path = Path(path)
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save config to {config_path}: {e}",
                operation="save",
            ) from e

        logger.debug(f"Configuration saved to {config_path}")
