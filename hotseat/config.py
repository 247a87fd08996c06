from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_PREFIX = "HOTSEAT_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from ``HOTSEAT_*`` environment variables.

    Attributes:
        host (str): Interface uvicorn binds to.
        port (int): TCP port uvicorn listens on.
        log_level (str): Root logging level name.
        animation_timeout (float): Seconds after which an unacknowledged move
            animation stops blocking activations.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    animation_timeout: float = 2.0

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")
        if self.animation_timeout <= 0:
            raise ValueError("animation_timeout must be > 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment, falling back to defaults.

        Raises:
            ValueError: If a variable is present but cannot be parsed or is out
                of range.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            port = int(env.get(ENV_PREFIX + "PORT", defaults.port))
            timeout = float(env.get(ENV_PREFIX + "ANIMATION_TIMEOUT", defaults.animation_timeout))
        except ValueError as e:
            raise ValueError(f"invalid {ENV_PREFIX}* setting: {e}") from e
        return cls(
            host=env.get(ENV_PREFIX + "HOST", defaults.host),
            port=port,
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
            animation_timeout=timeout,
        )
