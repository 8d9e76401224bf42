import json
from pathlib import Path

import pytest

from kitten_intake.config import IntakeDefaults
from kitten_intake.roster import animal_from_dict, load_roster, parse_roster


def test_load_roster_skips_entries_without_weight(tmp_path: Path) -> None:
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            {
                "animals": [
                    {"id": "k1", "name": "Mochi", "weight_grams": 2000, "medication_status": {"flea": "delay"}},
                    {"id": "k2", "name": "No weight"},
                    {"id": "k3", "weight_grams": 0},
                    {"id": "k4", "weightGrams": "850", "panacurDays": 5, "medicationStatus": {"drontal": "DONE"}},
                ]
            }
        ),
        encoding="utf-8",
    )
    animals = load_roster(path)
    assert [a.animal_id for a in animals] == ["k1", "k4"]
    assert animals[0].status_of("flea") == "delay"
    assert animals[1].weight_grams == 850.0
    assert animals[1].panacur_days == 5
    assert animals[1].status_of("drontal") == "done"
    assert animals[1].status_of("panacur") == "todo"


def test_defaults_fill_missing_fields() -> None:
    defaults = IntakeDefaults(panacur_days=5, ponazuril_days=1, topical="advantage")
    (animal,) = parse_roster([{"weight_grams": 1200}], defaults=defaults)
    assert animal.animal_id == "kitten-1"
    assert animal.panacur_days == 5
    assert animal.ponazuril_days == 1
    assert animal.topical == "advantage"
    assert animal.ringworm_status == "not-scanned"


def test_invalid_values_raise() -> None:
    with pytest.raises(ValueError):
        animal_from_dict({"weight_grams": 1000, "topical": "frontline"})
    with pytest.raises(ValueError):
        animal_from_dict({"weight_grams": 1000, "medication_status": {"panacur": "maybe"}})
    with pytest.raises(ValueError):
        parse_roster({"cats": []})


def test_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_roster(path)


def test_non_finite_weights_are_skipped() -> None:
    animals = parse_roster(
        [
            {"id": "nan", "weight_grams": "nan"},
            {"id": "inf", "weight_grams": "inf"},
            {"id": "ok", "weight_grams": 2000},
        ]
    )
    assert [a.animal_id for a in animals] == ["ok"]


def test_duplicate_ids_raise() -> None:
    with pytest.raises(ValueError, match="duplicate animal id"):
        parse_roster([{"weight_grams": 2000}, {"id": "kitten-1", "weight_grams": 900}])
    with pytest.raises(ValueError, match="duplicate animal id"):
        parse_roster([{"id": "k1", "weight_grams": 2000}, {"id": "k1", "weight_grams": 900}])


def test_unknown_medication_name_is_rejected() -> None:
    with pytest.raises(ValueError, match="unknown medication"):
        animal_from_dict({"weight_grams": 1000, "medication_status": {"fleas": "done"}})
