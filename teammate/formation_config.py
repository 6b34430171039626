"""Team formation settings with environment overrides.

Reads ``TEAMMATE_*`` environment variables (a ``.env`` file is loaded by the
CLI via python-dotenv) on top of the built-in defaults.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class FormationConfig(BaseModel):
    """Search parameters for the parallel team builder."""

    attempts: int = Field(default=4, ge=1, le=64)
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    default_team_size: int = Field(default=5, ge=1)
    # 0 keeps any non-empty team; 0.8 keeps only teams at >= 80% of target.
    min_fill_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    seed: int | None = None


_ENV_FIELDS: dict[str, tuple[str, type]] = {
    "TEAMMATE_ATTEMPTS": ("attempts", int),
    "TEAMMATE_TIMEOUT_SECONDS": ("timeout_seconds", float),
    "TEAMMATE_DEFAULT_TEAM_SIZE": ("default_team_size", int),
    "TEAMMATE_MIN_FILL_RATIO": ("min_fill_ratio", float),
    "TEAMMATE_SEED": ("seed", int),
}


def load_formation_config() -> FormationConfig:
    """Build a FormationConfig from TEAMMATE_* environment variables.

    Unset or empty variables keep their defaults.

    Raises:
        ValueError: If a variable is not a valid number or out of range.
    """
    values: dict[str, int | float] = {}
    for env_name, (field_name, cast) in _ENV_FIELDS.items():
        raw = os.getenv(env_name, "").strip()
        if not raw:
            continue
        try:
            values[field_name] = cast(raw)
        except ValueError as e:
            raise ValueError(f"{env_name} must be a {cast.__name__}, got {raw!r}") from e

    config = FormationConfig(**values)
    logger.info(
        "Formation config: attempts=%d timeout=%.1fs default_size=%d min_fill=%.2f seed=%s",
        config.attempts,
        config.timeout_seconds,
        config.default_team_size,
        config.min_fill_ratio,
        config.seed if config.seed is not None else "(random)",
    )
    return config
