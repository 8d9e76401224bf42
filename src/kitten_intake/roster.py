from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from .config import IntakeDefaults, load_defaults
from .models import Animal

logger = logging.getLogger(__name__)

_LIST_KEYS = ("animals", "kittens")


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any, default: int) -> int:
    number = _to_float(value)
    return default if number is None else int(number)


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _extract_entries(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        for key in _LIST_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                data = value
                break
    if not isinstance(data, list):
        raise ValueError("roster must be a list of animals or an object with an 'animals' list")
    return [x for x in data if isinstance(x, dict)]


def animal_from_dict(raw: dict[str, Any], index: int = 0, defaults: IntakeDefaults | None = None) -> Animal | None:
    """Build an Animal from one roster entry, or None when it has no usable weight."""
    defaults = defaults or load_defaults()
    weight = _to_float(_pick(raw, "weight_grams", "weightGrams", "weight"))
    if weight is None or not math.isfinite(weight) or weight <= 0:
        return None

    raw_status = _pick(raw, "medication_status", "medicationStatus") or {}
    if not isinstance(raw_status, dict):
        raise ValueError("medication_status must be an object")
    # Unknown medication names are passed through so Animal rejects them.
    status = {str(med).strip().lower(): str(value).strip().lower() for med, value in raw_status.items() if value}

    return Animal(
        weight_grams=weight,
        name=str(raw.get("name") or "").strip(),
        animal_id=str(_pick(raw, "id", "animal_id") or f"kitten-{index + 1}"),
        topical=str(raw.get("topical") or defaults.topical).strip().lower(),
        panacur_days=_to_int(_pick(raw, "panacur_days", "panacurDays"), defaults.panacur_days),
        ponazuril_days=_to_int(_pick(raw, "ponazuril_days", "ponazurilDays"), defaults.ponazuril_days),
        medication_status=status,
        ringworm_status=str(_pick(raw, "ringworm_status", "ringwormStatus") or "not-scanned").strip().lower(),
    )


def parse_roster(data: Any, defaults: IntakeDefaults | None = None) -> list[Animal]:
    defaults = defaults or load_defaults()
    animals: list[Animal] = []
    seen: set[str] = set()
    for index, raw in enumerate(_extract_entries(data)):
        animal = animal_from_dict(raw, index=index, defaults=defaults)
        if animal is None:
            logger.info("skipping roster entry %d: missing or non-positive weight", index)
            continue
        if animal.animal_id in seen:
            raise ValueError(f"duplicate animal id in roster: {animal.animal_id!r}")
        seen.add(animal.animal_id)
        animals.append(animal)
    return animals


def load_roster(path: Path, defaults: IntakeDefaults | None = None) -> list[Animal]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid roster JSON in {path}: {exc}") from exc
    return parse_roster(data, defaults=defaults)
