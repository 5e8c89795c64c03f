"""
Centralized configuration for op-export.

All configuration is loaded from environment variables with sensible defaults.

Usage:
    from opexport.config import get_config
    cfg = get_config()
    print(cfg.op.bin)            # "op" or $OPEXPORT_OP_BIN
    print(cfg.tick_interval)     # 0.5
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class OPConfig:
    """1Password CLI invocation parameters."""

    bin: str = "op"
    use_cache: bool = True  # pass --cache so repeated gets hit the op daemon

    @property
    def output_args(self) -> list[str]:
        """Arguments appended to every op invocation."""
        args = ["--cache"] if self.use_cache else []
        return args + ["--format", "json"]


@dataclass(frozen=True)
class LoggingConfig:
    """Logging destination and level."""

    level: str = "WARNING"
    file: Path | None = None

    @property
    def level_no(self) -> int:
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.WARNING


@dataclass(frozen=True)
class Config:
    """Top-level op-export configuration."""

    op: OPConfig = field(default_factory=OPConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)

    # Loading indicator period (seconds)
    tick_interval: float = 0.5


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    op_cfg = OPConfig(
        bin=os.environ.get("OPEXPORT_OP_BIN", "op"),
        use_cache=os.environ.get("OPEXPORT_USE_CACHE", "1").strip().lower() in _TRUTHY,
    )

    log_file = os.environ.get("OPEXPORT_LOG_FILE", "")
    logging_cfg = LoggingConfig(
        level=os.environ.get("OPEXPORT_LOG_LEVEL", "WARNING"),
        file=Path(log_file) if log_file else None,
    )

    return Config(
        op=op_cfg,
        log=logging_cfg,
        tick_interval=float(os.environ.get("OPEXPORT_TICK_INTERVAL", "0.5")),
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
