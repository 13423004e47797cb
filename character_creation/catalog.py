import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TypeVar

import jsonschema
from pydantic import ValidationError

from character_creation.models import (
    Ability,
    Armor,
    Artifact,
    CharacterType,
    Cypher,
    Descriptor,
    Discovery,
    EquipmentData,
    Focus,
    Oddity,
    Species,
    Weapon,
)

logger = logging.getLogger(__name__)

TABLES_DIR = Path(__file__).resolve().parent / "tables"
SCHEMAS_DIR = Path(__file__).resolve().parents[1] / "schemas"

# table file -> (top-level key, schema file)
TABLE_FILES = {
    "types.json": ("types", "types.schema.json"),
    "descriptors.json": ("descriptors", "descriptors.schema.json"),
    "species.json": ("species", "species.schema.json"),
    "foci.json": ("foci", "foci.schema.json"),
    "equipment.json": (None, "equipment.schema.json"),
    "cyphers.json": ("cyphers", "cyphers.schema.json"),
    "artifacts.json": ("artifacts", "artifacts.schema.json"),
    "oddities.json": ("oddities", "oddities.schema.json"),
    "discoveries.json": ("discoveries", "discoveries.schema.json"),
}

T = TypeVar("T")


class CatalogError(ValueError):
    pass


def _find_by_name(entries: Sequence[T], name: str) -> Optional[T]:
    wanted = name.strip().lower()
    for entry in entries:
        if entry.name.lower() == wanted:
            return entry
    return None


@dataclass(frozen=True)
class GameData:
    """Every game-data table, loaded once and queried by name."""

    types: List[CharacterType] = field(default_factory=list)
    descriptors: List[Descriptor] = field(default_factory=list)
    species: List[Species] = field(default_factory=list)
    foci: List[Focus] = field(default_factory=list)
    equipment: EquipmentData = field(default_factory=EquipmentData)
    cyphers: List[Cypher] = field(default_factory=list)
    artifacts: List[Artifact] = field(default_factory=list)
    oddities: List[Oddity] = field(default_factory=list)
    discoveries: List[Discovery] = field(default_factory=list)

    def find_type(self, name: str) -> Optional[CharacterType]:
        return _find_by_name(self.types, name)

    def find_descriptor(self, name: str) -> Optional[Descriptor]:
        return _find_by_name(self.descriptors, name)

    def find_species(self, name: str) -> Optional[Species]:
        return _find_by_name(self.species, name)

    def find_focus(self, name: str) -> Optional[Focus]:
        return _find_by_name(self.foci, name)

    def find_weapon(self, name: str) -> Optional[Weapon]:
        return _find_by_name(self.equipment.weapons, name)

    def find_armor(self, name: str) -> Optional[Armor]:
        return _find_by_name(self.equipment.armor, name)

    def find_cypher(self, name: str) -> Optional[Cypher]:
        return _find_by_name(self.cyphers, name)

    def find_artifact(self, name_or_id: str) -> Optional[Artifact]:
        wanted = name_or_id.strip().lower()
        for artifact in self.artifacts:
            if artifact.id.lower() == wanted:
                return artifact
        return _find_by_name(self.artifacts, name_or_id)

    def find_oddity(self, name_or_id: str) -> Optional[Oddity]:
        wanted = name_or_id.strip().lower()
        for oddity in self.oddities:
            if oddity.id.lower() == wanted:
                return oddity
        return _find_by_name(self.oddities, name_or_id)

    def suitable_foci(self, type_name: str) -> List[Focus]:
        return [focus for focus in self.foci if focus.suits(type_name)]

    def weapons_by_category(self, category: str) -> List[Weapon]:
        wanted = category.lower()
        return [w for w in self.equipment.weapons if w.category.lower() == wanted]

    def armor_by_category(self, category: str) -> List[Armor]:
        wanted = category.lower()
        return [a for a in self.equipment.armor if a.category.lower() == wanted]

    def cyphers_by_category(self, category: str) -> List[Cypher]:
        wanted = category.lower()
        return [c for c in self.cyphers if c.category.lower() == wanted]

    def tier_abilities(self, type_name: str, tier: int = 1) -> List[Ability]:
        character_type = self.find_type(type_name)
        if character_type is None:
            return []
        entry = character_type.abilities_for_tier(tier)
        return list(entry.abilities) if entry else []

    def bonus_budget(self, character_type: CharacterType, species: Optional[Species] = None) -> int:
        if species is not None and species.stat_modifiers.initial_bonus_points is not None:
            return species.stat_modifiers.initial_bonus_points
        return character_type.stat_pools.bonus_points

    def summary(self) -> str:
        return "\n".join([
            "Loaded Game Data:",
            f"- {len(self.types)} character types",
            f"- {len(self.descriptors)} descriptors",
            f"- {len(self.foci)} foci",
            f"- {len(self.equipment.weapons)} weapons",
            f"- {len(self.equipment.armor)} armor pieces",
            f"- {len(self.cyphers)} cyphers",
            f"- {len(self.artifacts)} artifacts",
            f"- {len(self.oddities)} oddities",
            f"- {len(self.discoveries)} discoveries",
            f"- {len(self.species)} species options",
        ])


def validate_data_files(tables_dir: Path = TABLES_DIR) -> List[Path]:
    missing = [tables_dir / name for name in TABLE_FILES if not (tables_dir / name).exists()]
    if missing:
        raise CatalogError(f"Required data file not found: {', '.join(str(p) for p in missing)}")
    return [tables_dir / name for name in TABLE_FILES]


def _load_table(path: Path, schema_path: Path) -> Dict:
    try:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Failed to parse {path}: {exc}") from exc
    if schema_path.exists():
        with schema_path.open(encoding="utf-8") as handle:
            schema = json.load(handle)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as exc:
            raise CatalogError(f"{path.name} does not match {schema_path.name}: {exc.message}") from exc
    return data


def load_game_data(tables_dir: Path = TABLES_DIR, schemas_dir: Path = SCHEMAS_DIR) -> GameData:
    validate_data_files(tables_dir)
    raw = {}
    for filename, (key, schema_name) in TABLE_FILES.items():
        data = _load_table(tables_dir / filename, schemas_dir / schema_name)
        raw[filename] = data if key is None else data.get(key, [])

    try:
        game_data = GameData(
            types=[CharacterType.model_validate(t) for t in raw["types.json"]],
            descriptors=[Descriptor.model_validate(d) for d in raw["descriptors.json"]],
            species=[Species.model_validate(s) for s in raw["species.json"]],
            foci=[Focus.model_validate(f) for f in raw["foci.json"]],
            equipment=EquipmentData.model_validate(raw["equipment.json"]),
            cyphers=[Cypher.model_validate(c) for c in raw["cyphers.json"]],
            artifacts=[Artifact.model_validate(a) for a in raw["artifacts.json"]],
            oddities=[Oddity.model_validate(o) for o in raw["oddities.json"]],
            discoveries=[Discovery.model_validate(d) for d in raw["discoveries.json"]],
        )
    except ValidationError as exc:
        raise CatalogError(f"Invalid game data in {tables_dir}: {exc}") from exc

    logger.info(
        "Loaded %d types, %d descriptors, %d species, %d foci from %s",
        len(game_data.types),
        len(game_data.descriptors),
        len(game_data.species),
        len(game_data.foci),
        tables_dir,
    )
    return game_data


@lru_cache(maxsize=4)
def get_game_data(tables_dir: Path = TABLES_DIR, schemas_dir: Path = SCHEMAS_DIR) -> GameData:
    return load_game_data(tables_dir, schemas_dir)
