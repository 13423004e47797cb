import random
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from character_creation.builder import Selection, assemble
from character_creation.stats import Pools
from dice.levels import instantiate_artifact, instantiate_cypher
from output.markdown import (
    FOOTER,
    format_character_sheet,
    format_compact,
    sanitize_filename,
    save_character_sheet,
    save_multiple_sheets,
)


@pytest.fixture()
def sheet(catalog):
    selection = Selection(
        name="Aric Stone",
        archetype="Glaive",
        focus="Masters Weaponry",
        descriptor="Charming",
        bonus=Pools(might=2, speed=2, intellect=2),
        type_abilities=["Bash", "Pierce"],
        connection="Owes the Nano a favor",
    )
    return assemble(selection, catalog)


def test_full_sheet_sections(sheet):
    text = format_character_sheet(sheet)
    assert text.startswith("# Aric Stone\n\n**I am a Charming Glaive who Masters Weaponry**\n")
    assert "- **Descriptor:** Charming" in text
    assert "- **Species:**" not in text
    assert "- **Gender:** Female" in text
    assert "| **Might**     | 12 | 12 |" in text
    assert "- **Might Edge:** 1" in text
    assert "- **Armor:** 1" in text
    assert "- **Damage Track:** Hale" in text
    assert "### Trained\n\n- Athletics\n- Persuasion" in text
    assert "### Type Abilities\n\n- Bash\n- Pierce" in text
    assert "- Weapon Master (0, Enabler): +1 damage." in text
    assert "**Shins:** 8" in text
    assert "### Shield" not in text
    assert "**Limit:** 2 | **Current:** 0" in text
    assert "*No cyphers currently carried*" in text
    assert "## Artifacts" not in text
    assert "## Advancement" not in text
    assert "### Connection to Party\n\nOwes the Nano a favor" in text
    assert text.rstrip().endswith(FOOTER)


def test_carried_items_are_listed(catalog, sheet):
    rng = random.Random(3)
    sheet.add_cypher(instantiate_cypher(catalog.find_cypher("Sheen"), rng))
    sheet.add_artifact(instantiate_artifact(catalog.find_artifact("lightning-bolter"), rng))
    sheet.add_oddity(catalog.find_oddity("singing-stone"))
    sheet.advances.append("Increase Capabilities")

    text = format_character_sheet(sheet)
    assert "**Limit:** 2 | **Current:** 1" in text
    assert "1. Sheen (Level 3, Anoetic): +1 Armor." in text
    assert "## Artifacts" in text
    assert "- Singing Stone: Hums softly." in text
    assert "## Advancement\n\n- Increase Capabilities" in text


def test_species_sheet(catalog):
    selection = Selection(
        name="Mira",
        archetype="Glaive",
        focus="Masters Weaponry",
        species="Varjellen",
        bonus=Pools(might=3),
    )
    text = format_character_sheet(assemble(selection, catalog))
    assert "- **Species:** Varjellen" in text
    assert "- **Descriptor:**" not in text
    assert "### Descriptor Link" not in text


def test_empty_equipment_placeholders(catalog):
    selection = Selection(name="Vex", archetype="Nano", focus="Talks to Machines", descriptor="Charming", bonus=Pools(intellect=6))
    sheet = assemble(selection, catalog)
    sheet.equipment.weapons = []
    text = format_character_sheet(sheet)
    assert "### Weapons\n\n*None*" in text
    assert "### Armor\n\nHeavy armor (+3 Armor, Speed Effort +3)" in text


def test_compact_format(sheet):
    text = format_compact(sheet)
    assert text.startswith("# Aric Stone (Tier 1)")
    assert "**Pools:** M:12/12 S:12/12 I:12/12 | **Edge:** M:1 S:1 I:0 | **Effort:** 1 | **Armor:** 1" in text
    assert "**Skills:** *Trained:* Athletics, Persuasion" in text
    assert "**Shins:** 8 | **Cyphers:** 0/2" in text
    assert "- Focus: Weapon Master (0, Enabler): +1 damage." in text


@pytest.mark.parametrize(
    "name,expected",
    [("Aric Stone", "Aric_Stone"), ("Zeph/../etc", "Zeph----etc"), ("Kael-7", "Kael-7")],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_save_sheets(tmp_path, sheet):
    path = save_character_sheet(sheet, tmp_path / "sheets")
    assert path == tmp_path / "sheets" / "Aric_Stone.md"
    assert path.read_text(encoding="utf-8") == format_character_sheet(sheet)

    compact = save_multiple_sheets([sheet], tmp_path / "compact", compact=True)
    assert compact[0].read_text(encoding="utf-8") == format_compact(sheet)
