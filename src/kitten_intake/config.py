from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .models import PANACUR_DAY_OPTIONS, PONAZURIL_DAY_OPTIONS, TOPICALS, Topical


@dataclass(frozen=True)
class IntakeDefaults:
    """Form defaults applied when an intake entry leaves a field blank."""

    panacur_days: int = 3
    ponazuril_days: int = 3
    topical: Topical = "revolution"


def _int_env(env: Mapping[str, str], key: str, default: int, allowed: tuple[int, ...]) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
    if value not in allowed:
        raise ValueError(f"{key} must be one of: {', '.join(str(x) for x in allowed)}")
    return value


def load_defaults(env: Mapping[str, str] | None = None) -> IntakeDefaults:
    env = os.environ if env is None else env
    topical = env.get("INTAKE_DEFAULT_TOPICAL", "").strip().lower() or "revolution"
    if topical not in TOPICALS:
        raise ValueError("INTAKE_DEFAULT_TOPICAL must be one of: revolution, advantage, none")
    return IntakeDefaults(
        panacur_days=_int_env(env, "INTAKE_PANACUR_DAYS", 3, PANACUR_DAY_OPTIONS),
        ponazuril_days=_int_env(env, "INTAKE_PONAZURIL_DAYS", 3, PONAZURIL_DAY_OPTIONS),
        topical=topical,
    )
