import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from character_creation.catalog import GameData  # noqa: E402
from character_creation.models import (  # noqa: E402
    Artifact,
    CharacterType,
    Cypher,
    Descriptor,
    EquipmentData,
    Focus,
    Oddity,
    Species,
)


def _ability(name: str, cost: str = "1 Might point", kind: str = "Action") -> dict:
    return {"name": name, "cost": cost, "type": kind, "description": f"{name} description"}


GLAIVE = {
    "name": "Glaive",
    "tagline": "Warrior",
    "stat_pools": {"might": 10, "speed": 10, "intellect": 8, "bonus_points": 6},
    "edge": {"might": 1, "speed": 1, "intellect": 0},
    "starting_tier": {"effort": 1, "cypher_limit": 2},
    "equipment": {
        "weapons": ["Sword", "Mystery blade"],
        "armor": "Light armor",
        "explorer_pack": True,
        "shins": 5,
        "other": ["Whetstone"],
    },
    "skills": {"trained": ["Athletics"], "specialized": [], "inabilities": []},
    "special_abilities": ["Practiced With All Weapons: No penalty with any weapon."],
    "tier_abilities": [
        {
            "tier": 1,
            "count": 2,
            "abilities": [_ability("Bash"), _ability("Fleet of Foot"), _ability("Pierce", "1 Speed point")],
        }
    ],
}

NANO = {
    "name": "Nano",
    "tagline": "Sorcerer",
    "stat_pools": {"might": 7, "speed": 9, "intellect": 12, "bonus_points": 6},
    "edge": {"might": 0, "speed": 0, "intellect": 1},
    "starting_tier": {"effort": 1, "cypher_limit": 3},
    "equipment": {"weapons": ["Dagger"], "armor": None, "explorer_pack": False, "shins": 2, "other": []},
    "tier_abilities": [
        {"tier": 1, "count": 1, "abilities": [_ability("Onslaught", "1 Intellect point"), _ability("Ward", "0", "Enabler")]}
    ],
}

CHARMING = {
    "name": "Charming",
    "tagline": "Smooth talker",
    "stat_modifiers": {"might": 0, "speed": 0, "intellect": 2},
    "skills": {"trained": ["Persuasion", "Athletics"], "specialized": [], "inabilities": {"hindered": ["Lore"]}},
    "special_abilities": [{"name": "Skill", "description": "Trained in persuasion."}],
    "equipment": {"shins": 3, "weapons": [], "armor": ["Heavy armor"], "other": ["Hand mirror"]},
    "initial_links": [{"text": "You convinced another PC to come along."}, {"text": "Second link"}],
}

TOUGH = {
    "name": "Tough",
    "tagline": "Resilient",
    "stat_modifiers": {"might": 2, "speed": 0, "intellect": 0},
    "equipment": {"shins": 0, "weapons": ["Dagger"], "armor": ["Light armor"], "other": []},
}

FRAIL = {
    "name": "Frail",
    "tagline": "Sickly",
    "stat_modifiers": {"might": -12, "speed": 0, "intellect": 0},
}

VARJELLEN = {
    "name": "Varjellen",
    "tagline": "Mutable visitant",
    "stat_modifiers": {"might": 0, "speed": 1, "intellect": 2, "initial_bonus_points": 3},
    "abilities": [{"name": "Mutable Form", "type": "Enabler", "cost": "0", "description": "Reshape your body."}],
    "skills": {"trained": ["Perception"], "specialized": [], "hindered": ["Social"]},
    "equipment": {"starting_shins": 3, "items": ["Varjellen crystal"]},
}

LATTIMOR = {
    "name": "Lattimor",
    "tagline": "Two minds",
    "stat_modifiers": {"might": 2, "speed": 0, "intellect": 0},
    "abilities": [{"name": "Bursk", "type": "Action", "cost": "0", "description": "Enter the bursk state."}],
}

MASTERS_WEAPONRY = {
    "name": "Masters Weaponry",
    "theme": "Combat",
    "suitable_types": ["Glaive"],
    "connections": ["Pick one other PC who shows promise with weapons."],
    "equipment": ["High-quality weapon"],
    "tier_1_ability": {"name": "Weapon Master", "cost": "0", "type": "Enabler", "description": "+1 damage."},
}

TALKS_TO_MACHINES = {
    "name": "Talks to Machines",
    "theme": "Technology",
    "suitable_types": ["Nano"],
    "connections": [],
    "tier_1_ability": {"name": "Machine Affinity", "cost": "0", "type": "Enabler", "description": "Trained with machines."},
}

EQUIPMENT = {
    "weapons": [
        {"name": "Sword", "category": "medium", "damage": 4, "cost": 5},
        {"name": "Dagger", "category": "light", "damage": 2, "cost": 2},
    ],
    "armor": [
        {"name": "Light armor", "category": "light", "armor_bonus": 1, "speed_effort_cost": 1, "cost": 5},
        {"name": "Heavy armor", "category": "heavy", "armor_bonus": 3, "speed_effort_cost": 3, "cost": 20},
    ],
    "shields": [{"name": "Buckler", "armor_bonus": 0, "speed_defense_asset": True, "cost": 3}],
    "gear": [{"name": "Rope (15m)", "category": "adventuring", "cost": 1}],
    "consumables": [{"name": "Rations", "category": "food", "cost": 1}],
    "clothing": [{"name": "Fine clothing", "category": "clothing", "cost": 4}],
}

CYPHERS = [
    {"name": "Detonation", "level_formula": "1d6+2", "type": "Anoetic", "category": "Combat", "effect": "Explodes."},
    {"name": "Stim", "level_formula": "1d6", "type": "Anoetic", "category": "Utility", "effect": "Eases a task."},
    {"name": "Sheen", "level_formula": "3", "type": "Anoetic", "category": "Defense", "effect": "+1 Armor."},
]

ARTIFACTS = [
    {"id": "lightning-bolter", "name": "Lightning Bolter", "level_formula": "1d6+2", "depletion": "1 in 1d20", "effect": "Zap."},
]

ODDITIES = [
    {"id": "singing-stone", "name": "Singing Stone", "description": "Hums softly.", "value": 1},
]


@pytest.fixture()
def catalog() -> GameData:
    return GameData(
        types=[CharacterType.model_validate(GLAIVE), CharacterType.model_validate(NANO)],
        descriptors=[Descriptor.model_validate(d) for d in (CHARMING, TOUGH, FRAIL)],
        species=[Species.model_validate(VARJELLEN), Species.model_validate(LATTIMOR)],
        foci=[Focus.model_validate(MASTERS_WEAPONRY), Focus.model_validate(TALKS_TO_MACHINES)],
        equipment=EquipmentData.model_validate(EQUIPMENT),
        cyphers=[Cypher.model_validate(c) for c in CYPHERS],
        artifacts=[Artifact.model_validate(a) for a in ARTIFACTS],
        oddities=[Oddity.model_validate(o) for o in ODDITIES],
    )


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def repo_root(tmp_path, monkeypatch):
    monkeypatch.setenv("CHARGEN_REPO_ROOT", str(tmp_path))
    monkeypatch.setenv("CHARGEN_TABLES_DIR", str(ROOT / "character_creation" / "tables"))
    monkeypatch.setenv("CHARGEN_SCHEMAS_DIR", str(ROOT / "schemas"))
    monkeypatch.setenv("CHARGEN_OUTPUT_DIR", "sheets")
    monkeypatch.setenv("CHARGEN_CHARACTERS_DIR", "characters")
    monkeypatch.delenv("CHARGEN_RANDOM_SEED", raising=False)

    from service.config import get_settings

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture()
def settings(repo_root):
    from service.config import get_settings

    return get_settings()


@pytest.fixture()
def client(repo_root):
    from fastapi.testclient import TestClient
    from service.app import app

    with TestClient(app) as test_client:
        yield test_client
