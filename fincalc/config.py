"""Environment-driven settings for the API process."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@dataclass(frozen=True)
class Settings:
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    log_level: str = "INFO"
    # longest schedule the API will build (100 years of monthly periods by default)
    max_periods: int = 1200

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = env.get("FINCALC_CORS_ORIGINS")
        return cls(
            cors_origins=(
                [origin.strip() for origin in origins.split(",") if origin.strip()]
                if origins
                else list(DEFAULT_ORIGINS)
            ),
            log_level=env.get("FINCALC_LOG_LEVEL", "INFO").upper(),
            max_periods=int(env.get("FINCALC_MAX_PERIODS", 1200)),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install a basic handler on the root logger unless one is already there."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
