from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Sequence

from .doses import is_dose_valid, tablet_count
from .models import Animal, Dose, DosedAnimal, Medication

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y"

# Schedule keys in display order. "topical" is the flea medication.
SCHEDULE_KEYS = ("panacur", "ponazuril", "drontal", "capstar", "topical")
DAY_BASED = ("panacur", "ponazuril")
TABLET_MEDS = ("drontal", "capstar")
FLEA_DELAY_DAYS = 2

TOTAL_KEYS = ("panacur", "ponazuril", "revolution", "advantage", "drontal", "capstar")


@dataclass(frozen=True)
class MedicationSchedule:
    dose: Dose
    days: list[str]
    topical_type: str | None = None


@dataclass(frozen=True)
class AnimalSchedule:
    animal_id: str
    animal_name: str
    medications: dict[str, MedicationSchedule] = field(default_factory=dict)


@dataclass(frozen=True)
class RemainingMedication:
    medication: str
    dose: Dose
    remaining: int
    total: float
    topical_type: str | None = None


@dataclass(frozen=True)
class ScheduleResult:
    schedules: list[AnimalSchedule]
    all_dates: list[str]
    totals: dict[str, float]
    out_of_range: list[tuple[str, str]]


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def generate_days(count: int, today: date, start_offset: int = 0) -> list[str]:
    """``count`` consecutive dates starting ``start_offset`` days after today."""
    start = today + timedelta(days=start_offset)
    return [format_date(start + timedelta(days=i)) for i in range(count)]


def _status_key(key: str) -> Medication:
    return "flea" if key == "topical" else key  # type: ignore[return-value]


def remaining_days(animal: Animal, key: str) -> int:
    """Doses still owed to the foster for one schedule key."""
    status = animal.status_of(_status_key(key))
    if status == "skip":
        return 0
    if key == "topical" and animal.topical == "none":
        return 0
    if key in DAY_BASED:
        configured = animal.panacur_days if key == "panacur" else animal.ponazuril_days
        return configured - 1 if status == "done" else configured
    return 0 if status == "done" else 1


def start_offset(animal: Animal, key: str) -> int:
    status = animal.status_of(_status_key(key))
    if key in DAY_BASED:
        # Day 1 was given at intake, the foster picks up tomorrow.
        return 1 if status == "done" else 0
    if key == "topical" and status == "delay":
        return FLEA_DELAY_DAYS
    return 0


def _dose_for(dosed: DosedAnimal, key: str) -> Dose:
    if key == "topical":
        return dosed.doses.topical(dosed.animal.topical)
    return getattr(dosed.doses, key)


def _owed(dosed: DosedAnimal, key: str) -> tuple[int, Dose, bool]:
    """(remaining, dose, in_range) for one animal and schedule key."""
    remaining = remaining_days(dosed.animal, key)
    dose = _dose_for(dosed, key)
    if remaining <= 0:
        return 0, dose, True
    if not is_dose_valid(dose):
        return 0, dose, False
    if key == "topical" and not dose:
        return 0, dose, True
    return remaining, dose, True


def schedule_for_animal(dosed: DosedAnimal, today: date) -> AnimalSchedule:
    animal = dosed.animal
    medications: dict[str, MedicationSchedule] = {}
    for key in SCHEDULE_KEYS:
        remaining, dose, _ = _owed(dosed, key)
        if remaining <= 0:
            continue
        days = generate_days(remaining, today, start_offset(animal, key))
        topical_type = animal.topical if key == "topical" else None
        medications[key] = MedicationSchedule(dose=dose, days=days, topical_type=topical_type)
    logger.debug("schedule for %s: %s", animal.animal_id, sorted(medications))
    return AnimalSchedule(animal_id=animal.animal_id, animal_name=animal.display_name, medications=medications)


def generate_schedule(animals: Sequence[DosedAnimal], today: date | None = None) -> list[AnimalSchedule]:
    today = today or date.today()
    return [schedule_for_animal(dosed, today) for dosed in animals]


def get_all_schedule_days(schedules: Sequence[AnimalSchedule]) -> list[str]:
    """Every scheduled date across all animals, oldest first."""
    all_days = {day for schedule in schedules for med in schedule.medications.values() for day in med.days}
    return sorted(all_days, key=parse_date)


def calculate_remaining(dosed: DosedAnimal) -> dict[str, RemainingMedication]:
    remaining_by_key: dict[str, RemainingMedication] = {}
    for key in SCHEDULE_KEYS:
        remaining, dose, _ = _owed(dosed, key)
        if remaining <= 0:
            continue
        per_dose = tablet_count(dose) if key in TABLET_MEDS else float(dose)
        remaining_by_key[key] = RemainingMedication(
            medication=key,
            dose=dose,
            remaining=remaining,
            total=per_dose * remaining,
            topical_type=dosed.animal.topical if key == "topical" else None,
        )
    return remaining_by_key


def find_out_of_range(animals: Sequence[DosedAnimal]) -> list[tuple[str, str]]:
    """(animal_id, medication) pairs owed a dose that has no safe value."""
    flagged: list[tuple[str, str]] = []
    for dosed in animals:
        for key in SCHEDULE_KEYS:
            _, _, in_range = _owed(dosed, key)
            if not in_range:
                flagged.append((dosed.animal.animal_id, dosed.animal.topical if key == "topical" else key))
    return flagged


def aggregate_totals(animals: Sequence[DosedAnimal]) -> dict[str, float]:
    """Quantity to dispense to the foster, per medication, across all animals."""
    totals = {key: 0.0 for key in TOTAL_KEYS}
    for dosed in animals:
        for key, item in calculate_remaining(dosed).items():
            total_key = item.topical_type if key == "topical" else key
            totals[total_key] += item.total
    return totals


def compute_schedule(animals: Sequence[DosedAnimal], today: date | None = None) -> ScheduleResult:
    today = today or date.today()
    schedules = generate_schedule(animals, today)
    out_of_range = find_out_of_range(animals)
    for animal_id, medication in out_of_range:
        logger.info("%s: %s dose out of range, excluded from totals", animal_id, medication)
    return ScheduleResult(
        schedules=schedules,
        all_dates=get_all_schedule_days(schedules),
        totals=aggregate_totals(animals),
        out_of_range=out_of_range,
    )
