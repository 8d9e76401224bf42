"""Foster checklist and dispense summary data, ready for any renderer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from .models import Animal, Dose, DosedAnimal
from .schedule import (
    TOTAL_KEYS,
    AnimalSchedule,
    MedicationSchedule,
    calculate_remaining,
    get_all_schedule_days,
    start_offset,
)

MEDICATION_NAMES = {
    "panacur": "Panacur",
    "ponazuril": "Ponazuril",
    "drontal": "Drontal",
    "capstar": "Capstar",
    "revolution": "Revolution",
    "advantage": "Advantage II",
}


@dataclass(frozen=True)
class ChecklistMedication:
    key: str
    name: str
    dose: str


@dataclass(frozen=True)
class ChecklistHeader:
    animal_id: str
    name: str
    weight_grams: float
    weight_lb: float
    medications: list[ChecklistMedication]


@dataclass(frozen=True)
class ChecklistCell:
    animal_id: str
    medication: str
    due: bool
    first_column: bool


@dataclass(frozen=True)
class ChecklistRow:
    date: str
    display_date: str
    cells: list[ChecklistCell]


@dataclass(frozen=True)
class FosterChecklist:
    days: list[str]
    headers: list[ChecklistHeader]
    rows: list[ChecklistRow]
    is_empty: bool


@dataclass(frozen=True)
class SummaryLine:
    medication: str
    dose: str
    days: int
    total: str
    timing: str | None = None


def format_number(value: float, decimals: int = 0) -> str:
    """en-US style: thousands separators, fixed decimals."""
    return f"{value:,.{decimals}f}"


def format_date_for_display(value: str) -> str:
    month, day, _ = value.split("/")
    return f"{month}/{day}"


def medication_display_name(key: str, entry: MedicationSchedule | None = None) -> str:
    if key == "topical":
        topical_type = entry.topical_type if entry is not None else None
        return MEDICATION_NAMES.get(topical_type or "", "Flea Med")
    return MEDICATION_NAMES.get(key, key)


def dose_display(key: str, dose: Dose) -> str:
    if key == "drontal":
        return f"{dose} tablet(s)"
    if key == "capstar":
        return f"{dose} tablet"
    if isinstance(dose, str):
        return dose
    return f"{format_number(dose, 2)} mL"


def consolidate_drontal(schedules: Sequence[AnimalSchedule], all_days: Sequence[str]) -> list[AnimalSchedule]:
    """Move every owed Drontal dose onto the first day of the checklist."""
    if not all_days:
        return list(schedules)
    first_day = all_days[0]
    consolidated: list[AnimalSchedule] = []
    for schedule in schedules:
        drontal = schedule.medications.get("drontal")
        if drontal is None:
            consolidated.append(schedule)
            continue
        medications = dict(schedule.medications)
        medications["drontal"] = replace(drontal, days=[first_day])
        consolidated.append(replace(schedule, medications=medications))
    return consolidated


def prepare_foster_checklist(animals: Sequence[Animal], schedules: Sequence[AnimalSchedule]) -> FosterChecklist:
    schedules = consolidate_drontal(schedules, get_all_schedule_days(schedules))
    days = get_all_schedule_days(schedules)
    by_id = {schedule.animal_id: schedule for schedule in schedules}

    headers: list[ChecklistHeader] = []
    for animal in animals:
        schedule = by_id.get(animal.animal_id)
        if schedule is None or not schedule.medications:
            continue
        headers.append(
            ChecklistHeader(
                animal_id=animal.animal_id,
                name=animal.display_name,
                weight_grams=animal.weight_grams,
                weight_lb=animal.weight_lb,
                medications=[
                    ChecklistMedication(key=key, name=medication_display_name(key, entry), dose=dose_display(key, entry.dose))
                    for key, entry in schedule.medications.items()
                ],
            )
        )

    rows: list[ChecklistRow] = []
    for day in days:
        cells: list[ChecklistCell] = []
        for header in headers:
            medications = by_id[header.animal_id].medications
            for index, (key, entry) in enumerate(medications.items()):
                cells.append(ChecklistCell(animal_id=header.animal_id, medication=key, due=day in entry.days, first_column=index == 0))
        rows.append(ChecklistRow(date=day, display_date=format_date_for_display(day), cells=cells))

    return FosterChecklist(days=days, headers=headers, rows=rows, is_empty=not days)


def prepare_dispense_summary(totals: dict[str, float]) -> list[tuple[str, str]]:
    lines: list[tuple[str, str]] = []
    for key in TOTAL_KEYS:
        amount = totals.get(key, 0.0)
        if amount <= 0:
            continue
        if key in ("drontal", "capstar"):
            lines.append((MEDICATION_NAMES[key], f"{amount:g} tablet(s)"))
        else:
            lines.append((MEDICATION_NAMES[key], f"{format_number(amount, 2)} mL"))
    return lines


def schedule_summary(dosed: DosedAnimal) -> list[SummaryLine]:
    """What the foster still has to give one animal."""
    lines: list[SummaryLine] = []
    for key, item in calculate_remaining(dosed).items():
        if key == "topical":
            offset = start_offset(dosed.animal, key)
            lines.append(
                SummaryLine(
                    medication=MEDICATION_NAMES[item.topical_type or "revolution"],
                    dose=dose_display(key, item.dose),
                    days=1,
                    total=dose_display(key, item.dose),
                    timing=f"on Day +{offset}" if offset else "today",
                )
            )
            continue
        total = f"{item.total:g} tablet(s)" if key in ("drontal", "capstar") else f"{format_number(item.total, 2)} mL total"
        lines.append(
            SummaryLine(
                medication=MEDICATION_NAMES[key],
                dose=dose_display(key, item.dose),
                days=item.remaining,
                total=total,
            )
        )
    return lines
