from __future__ import annotations

from .models import GRAMS_PER_POUND, OUT_OF_RANGE, Animal, Dose, DosedAnimal, DoseSet, Topical

# Dosing tables by weight in pounds.
# Each row: (low, high, dose, high_inclusive). Low bounds are always inclusive.
REVOLUTION_TABLE: list[tuple[float, float, Dose, bool]] = [
    (1.1, 2.2, 0.05, False),
    (2.2, 4.4, 0.1, False),
    (4.4, 9.0, 0.2, False),
    (9.0, 19.9, 0.45, True),
]

ADVANTAGE_II_TABLE: list[tuple[float, float, Dose, bool]] = [
    (0.0, 1.0, 0.05, False),
    (1.0, 5.0, 0.1, False),
    (5.0, 9.0, 0.2, False),
    (9.0, float("inf"), 0.45, True),
]

# Drontal tablets are split by hand, so doses are tablet labels.
DRONTAL_TABLE: list[tuple[float, float, Dose, bool]] = [
    (1.5, 2.0, "¼", False),
    (2.0, 4.0, "½", False),
    (4.0, 9.0, "1", False),
    (9.0, 13.0, "1½", False),
    (13.0, 16.0, "2", True),
]

PANACUR_ML_PER_LB = 0.2
PONAZURIL_ML_PER_LB = 0.23
CAPSTAR_TABLETS = "1"

TABLET_FRACTIONS: dict[str, float] = {
    "¼": 0.25,
    "½": 0.5,
    "1": 1.0,
    "1½": 1.5,
    "2": 2.0,
}


def convert_to_pounds(weight_grams: float) -> float:
    return weight_grams / GRAMS_PER_POUND


def convert_to_grams(weight_lb: float) -> float:
    return weight_lb * GRAMS_PER_POUND


def _lookup(table: list[tuple[float, float, Dose, bool]], weight_lb: float, default: Dose) -> Dose:
    for low, high, dose, high_inclusive in table:
        if weight_lb < low:
            continue
        if weight_lb < high or (high_inclusive and weight_lb == high):
            return dose
    return default


def calculate_panacur_dose(weight_lb: float) -> float:
    """Panacur (fenbendazole) in mL per day."""
    return weight_lb * PANACUR_ML_PER_LB


def calculate_ponazuril_dose(weight_lb: float) -> float:
    """Ponazuril in mL per day."""
    return weight_lb * PONAZURIL_ML_PER_LB


def calculate_revolution_dose(weight_lb: float) -> Dose:
    return _lookup(REVOLUTION_TABLE, weight_lb, OUT_OF_RANGE)


def calculate_advantage_ii_dose(weight_lb: float) -> float:
    # No upper bound: the top bracket covers every heavier cat.
    return float(_lookup(ADVANTAGE_II_TABLE, weight_lb, 0.0))


def calculate_drontal_dose(weight_lb: float) -> Dose:
    return _lookup(DRONTAL_TABLE, weight_lb, OUT_OF_RANGE)


def calculate_capstar_dose(weight_lb: float) -> Dose:
    """One Capstar tablet regardless of weight."""
    return CAPSTAR_TABLETS


def is_dose_valid(dose: Dose | None) -> bool:
    return dose is not None and dose != OUT_OF_RANGE


def tablet_count(dose: Dose) -> float:
    """Physical tablet quantity for a tablet label, e.g. "1½" -> 1.5."""
    if isinstance(dose, str):
        if dose not in TABLET_FRACTIONS:
            raise ValueError(f"not a tablet dose: {dose!r}")
        return TABLET_FRACTIONS[dose]
    return float(dose)


def compute_doses(weight_lb: float, topical_choice: Topical = "none") -> dict[str, Dose]:
    """Every medication's dose for one weight.

    The chosen topical's dose is repeated under ``topical`` unless the
    choice is ``none``.
    """
    doses: dict[str, Dose] = {
        "panacur": calculate_panacur_dose(weight_lb),
        "ponazuril": calculate_ponazuril_dose(weight_lb),
        "drontal": calculate_drontal_dose(weight_lb),
        "revolution": calculate_revolution_dose(weight_lb),
        "advantage": calculate_advantage_ii_dose(weight_lb),
        "capstar": calculate_capstar_dose(weight_lb),
    }
    if topical_choice != "none":
        doses["topical"] = doses[topical_choice]
    return doses


def doses_for_animal(animal: Animal) -> DoseSet:
    weight_lb = animal.weight_lb
    return DoseSet(
        panacur=calculate_panacur_dose(weight_lb),
        ponazuril=calculate_ponazuril_dose(weight_lb),
        revolution=calculate_revolution_dose(weight_lb),
        advantage=calculate_advantage_ii_dose(weight_lb),
        drontal=calculate_drontal_dose(weight_lb),
        capstar=calculate_capstar_dose(weight_lb),
    )


def dose_animals(animals: list[Animal]) -> list[DosedAnimal]:
    return [DosedAnimal(animal=animal, doses=doses_for_animal(animal)) for animal in animals]
