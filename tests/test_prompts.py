import dataclasses
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from character_creation.builder import assemble
from character_creation.stats import Pools
from tools.prompts import InteractiveFlow


def _scripted(answers):
    pending = list(answers)
    prompts = []

    def input_fn(prompt):
        prompts.append(prompt)
        return pending.pop(0)

    return input_fn, prompts


def _flow(catalog, answers):
    input_fn, prompts = _scripted(answers)
    output = []
    return InteractiveFlow(catalog, input_fn=input_fn, output_fn=output.append), prompts, output


def test_full_run_builds_a_selection(catalog):
    flow, _, output = _flow(catalog, ["Aric", "1", "1", "2", "2", "1", "1", "3"])
    selection = flow.run(connection="Met the Nano in Qi")

    assert selection.name == "Aric"
    assert selection.archetype == "Glaive"
    assert selection.descriptor == "Charming"
    assert selection.species is None
    assert selection.bonus == Pools(might=2, speed=2, intellect=2)
    assert selection.focus == "Masters Weaponry"
    assert selection.type_abilities == ["Bash", "Pierce"]
    assert selection.connection == "Met the Nano in Qi"
    assert "Intellect: +2" in output

    sheet = assemble(selection, catalog)
    assert sheet.character_sentence() == "I am a Charming Glaive who Masters Weaponry"


def test_species_follow_descriptors(catalog):
    # three descriptors, so the fourth entry is the first species
    flow, _, output = _flow(catalog, ["4"])
    assert flow.select_descriptor_or_species() == ("Varjellen", True)
    assert "4. Varjellen (species) - Mutable visitant" in output


def test_species_budget_is_offered(catalog):
    flow, prompts, output = _flow(catalog, ["1", "2"])
    bonus = flow.allocate_bonus_points("Glaive", "Varjellen", True)
    assert bonus == Pools(might=1, speed=2, intellect=0)
    assert "Step 4: Allocate Bonus Points (3 available)" in output


def test_invalid_answers_are_asked_again(catalog):
    flow, prompts, output = _flow(catalog, ["", "Mira", "x", "9", "2"])
    assert flow.prompt_name() == "Mira"
    assert flow.select_type() == "Nano"
    assert "Character name cannot be empty" in output
    assert "Please enter a valid number" in output
    assert "Please enter a number between 1 and 2" in output
    assert prompts.count("Enter choice (1-2): ") == 3


def test_speed_cannot_exceed_remaining(catalog):
    flow, _, output = _flow(catalog, ["5", "2", "1"])
    assert flow.allocate_bonus_points("Glaive", "Charming", False) == Pools(might=5, speed=1, intellect=0)
    assert "Please enter a number between 0 and 1" in output


def test_duplicate_abilities_rejected(catalog):
    flow, _, output = _flow(catalog, ["2", "2", "1"])
    assert flow.select_type_abilities("Glaive") == ["Fleet of Foot", "Bash"]
    assert "Already selected! Choose a different ability." in output


def test_focus_falls_back_to_all(catalog):
    only_nano = dataclasses.replace(catalog, foci=[catalog.find_focus("Talks to Machines")])
    flow, _, output = _flow(only_nano, ["1"])
    assert flow.select_focus("Glaive") == "Talks to Machines"
    assert "Warning: No suitable foci found for this type. Showing all foci." in output


def test_type_without_tier_one(catalog):
    glaive = catalog.find_type("Glaive").model_copy(update={"tier_abilities": []})
    flow, _, _ = _flow(dataclasses.replace(catalog, types=[glaive]), [])
    with pytest.raises(ValueError, match="No Tier 1 abilities"):
        flow.select_type_abilities("Glaive")
