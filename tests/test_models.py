import pytest

from kitten_intake.config import IntakeDefaults, load_defaults
from kitten_intake.models import Animal


def test_weight_lb_is_derived() -> None:
    animal = Animal(weight_grams=453.59237)
    assert animal.weight_lb == pytest.approx(1.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"weight_grams": 0},
        {"weight_grams": -5},
        {"weight_grams": float("nan")},
        {"weight_grams": float("inf")},
        {"weight_grams": 1000, "topical": "frontline"},
        {"weight_grams": 1000, "panacur_days": 2},
        {"weight_grams": 1000, "ponazuril_days": 5},
        {"weight_grams": 1000, "medication_status": {"panacur": "later"}},
        {"weight_grams": 1000, "medication_status": {"ivermectin": "todo"}},
        {"weight_grams": 1000, "ringworm_status": "maybe"},
    ],
)
def test_invalid_animal(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Animal(**kwargs)


def test_status_defaults_to_todo() -> None:
    animal = Animal(weight_grams=1000, medication_status={"flea": "skip"})
    assert animal.status_of("flea") == "skip"
    assert animal.status_of("drontal") == "todo"


def test_display_name() -> None:
    assert Animal(weight_grams=1000, name="  ").display_name == "Unnamed Kitten"
    assert Animal(weight_grams=1000, name="Pip").display_name == "Pip"


def test_load_defaults_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INTAKE_PANACUR_DAYS", raising=False)
    monkeypatch.delenv("INTAKE_PONAZURIL_DAYS", raising=False)
    monkeypatch.delenv("INTAKE_DEFAULT_TOPICAL", raising=False)
    assert load_defaults() == IntakeDefaults()

    monkeypatch.setenv("INTAKE_PANACUR_DAYS", "5")
    monkeypatch.setenv("INTAKE_DEFAULT_TOPICAL", "Advantage")
    assert load_defaults() == IntakeDefaults(panacur_days=5, ponazuril_days=3, topical="advantage")


@pytest.mark.parametrize(
    "env",
    [
        {"INTAKE_PANACUR_DAYS": "4"},
        {"INTAKE_PONAZURIL_DAYS": "three"},
        {"INTAKE_DEFAULT_TOPICAL": "frontline"},
    ],
)
def test_load_defaults_rejects_invalid(env: dict) -> None:
    with pytest.raises(ValueError):
        load_defaults(env)
