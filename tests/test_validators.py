import sys
from pathlib import Path

import jsonschema
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from character_creation.builder import Selection, assemble
from character_creation.catalog import GameData, load_game_data
from character_creation.stats import Pools
from character_creation.validators import (
    ValidationReport,
    validate_final_character,
    validate_game_data,
    validate_type_abilities,
)


def test_shipped_tables_pass():
    report = validate_game_data(load_game_data())
    assert report.ok, report.errors
    # Tough grants a weapon that the equipment table does not price
    assert any("Medium weapon" in w for w in report.warnings)


def test_cross_reference_findings(catalog):
    report = validate_game_data(catalog)
    assert report.ok
    assert "Type 'Glaive' weapon 'Mystery blade' is not in equipment" in report.warnings
    assert "Descriptor 'Tough' has no initial links" in report.info
    assert report.info[-1] == "2 types, 3 descriptors, 2 species, 2 foci checked"


def test_empty_catalog_is_an_error():
    report = validate_game_data(GameData())
    assert not report.ok
    assert "No character types loaded" in report.errors
    assert "No cyphers loaded" in report.errors


def test_duplicates_and_missing_tier(catalog):
    glaive = catalog.find_type("Glaive")
    no_tiers = glaive.model_copy(update={"name": "Empty", "tier_abilities": []})
    broken = GameData(types=[glaive, glaive, no_tiers], descriptors=catalog.descriptors, foci=catalog.foci, cyphers=catalog.cyphers)
    report = validate_game_data(broken)
    assert "Duplicate type name 'Glaive'" in report.errors
    assert "Character type 'Empty' has no tier abilities" in report.errors


def test_unknown_focus_type_warns(catalog):
    focus = catalog.find_focus("Masters Weaponry").model_copy(update={"suitable_types": ["Glaive", "Seskii"]})
    report = validate_game_data(GameData(types=catalog.types, descriptors=catalog.descriptors, foci=[focus], cyphers=catalog.cyphers))
    assert "Focus 'Masters Weaponry' references unknown type 'Seskii'" in report.warnings
    assert "No focus lists 'Nano' as suitable; all foci will be offered" in report.info


def test_report_lines_are_prefixed():
    report = ValidationReport(errors=["bad"], warnings=["odd"], info=["fine"])
    assert report.lines() == ["[ERROR] bad", "[WARN] odd", "[INFO] fine"]


def test_type_abilities_canonicalised(catalog):
    assert validate_type_abilities(catalog, "glaive", ["bash", "PIERCE"]) == ["Bash", "Pierce"]


@pytest.mark.parametrize(
    "type_name,abilities,message",
    [
        ("Wizard", ["Bash"], "Unknown character type"),
        ("Glaive", ["Bash", "Fireball"], "Unknown Glaive abilities"),
        ("Glaive", ["Bash", "bash"], "must not repeat"),
        ("Glaive", ["Bash"], "must choose 2"),
    ],
)
def test_type_abilities_rejected(catalog, type_name, abilities, message):
    with pytest.raises(ValueError, match=message):
        validate_type_abilities(catalog, type_name, abilities)


def test_type_abilities_missing_tier(catalog):
    with pytest.raises(ValueError, match="no tier 3 abilities"):
        validate_type_abilities(catalog, "Glaive", ["Bash"], tier=3)


def test_final_character_matches_schema(catalog):
    selection = Selection(
        name="Aric",
        archetype="Glaive",
        focus="Masters Weaponry",
        descriptor="Charming",
        bonus=Pools(might=2, speed=2, intellect=2),
    )
    character = assemble(selection, catalog).model_dump(mode="json")
    assert validate_final_character(character) is character

    character["species"] = "Varjellen"
    with pytest.raises(jsonschema.ValidationError):
        validate_final_character(character)
