from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Mapping, Union, get_args

Medication = Literal["flea", "capstar", "panacur", "ponazuril", "drontal"]
Status = Literal["todo", "delay", "done", "skip"]
Topical = Literal["revolution", "advantage", "none"]
RingwormStatus = Literal["not-scanned", "positive", "negative"]

MEDICATIONS: tuple[Medication, ...] = get_args(Medication)
STATUSES: tuple[Status, ...] = get_args(Status)
TOPICALS: tuple[Topical, ...] = get_args(Topical)
RINGWORM_STATUSES: tuple[RingwormStatus, ...] = get_args(RingwormStatus)

GRAMS_PER_POUND = 453.59237

PANACUR_DAY_OPTIONS = (1, 3, 5)
PONAZURIL_DAY_OPTIONS = (1, 3)

# Reserved marker for "no safe dose known at this weight".
OUT_OF_RANGE = "Out of range"

# mL as float, tablet labels ("½", "1½") as str, or OUT_OF_RANGE.
Dose = Union[float, str]


@dataclass(frozen=True)
class Animal:
    """One kitten/cat on the intake form."""

    weight_grams: float
    name: str = ""
    animal_id: str = "kitten-1"
    topical: Topical = "revolution"
    panacur_days: int = 3
    ponazuril_days: int = 3
    medication_status: Mapping[Medication, Status] = field(default_factory=dict)
    ringworm_status: RingwormStatus = "not-scanned"

    def __post_init__(self) -> None:
        if self.weight_grams is None or not math.isfinite(self.weight_grams) or self.weight_grams <= 0:
            raise ValueError("weight_grams must be a finite number greater than 0")
        if self.topical not in TOPICALS:
            raise ValueError("topical must be one of: revolution, advantage, none")
        if self.panacur_days not in PANACUR_DAY_OPTIONS:
            raise ValueError("panacur_days must be one of: 1, 3, 5")
        if self.ponazuril_days not in PONAZURIL_DAY_OPTIONS:
            raise ValueError("ponazuril_days must be one of: 1, 3")
        if self.ringworm_status not in RINGWORM_STATUSES:
            raise ValueError("ringworm_status must be one of: not-scanned, positive, negative")
        for med, status in self.medication_status.items():
            if med not in MEDICATIONS:
                raise ValueError(f"unknown medication: {med}")
            if status not in STATUSES:
                raise ValueError(f"{med} status must be one of: todo, delay, done, skip")

    @property
    def weight_lb(self) -> float:
        return self.weight_grams / GRAMS_PER_POUND

    @property
    def display_name(self) -> str:
        return self.name.strip() or "Unnamed Kitten"

    def status_of(self, medication: Medication) -> Status:
        return self.medication_status.get(medication, "todo")


@dataclass(frozen=True)
class DoseSet:
    panacur: float
    ponazuril: float
    revolution: Dose
    advantage: float
    drontal: Dose
    capstar: Dose

    def topical(self, choice: Topical) -> Dose:
        if choice == "revolution":
            return self.revolution
        if choice == "advantage":
            return self.advantage
        return 0.0


@dataclass(frozen=True)
class DosedAnimal:
    animal: Animal
    doses: DoseSet
