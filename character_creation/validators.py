import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import jsonschema

from character_creation.catalog import SCHEMAS_DIR, GameData


@dataclass
class ValidationReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def lines(self) -> List[str]:
        out = [f"[ERROR] {msg}" for msg in self.errors]
        out.extend(f"[WARN] {msg}" for msg in self.warnings)
        out.extend(f"[INFO] {msg}" for msg in self.info)
        return out


def _check_populated(catalog: GameData, report: ValidationReport) -> None:
    for label, entries in (
        ("character types", catalog.types),
        ("descriptors", catalog.descriptors),
        ("foci", catalog.foci),
        ("cyphers", catalog.cyphers),
    ):
        if not entries:
            report.errors.append(f"No {label} loaded")


def _check_types(catalog: GameData, report: ValidationReport) -> None:
    for character_type in catalog.types:
        if not character_type.tier_abilities:
            report.errors.append(f"Character type '{character_type.name}' has no tier abilities")
            continue
        tier_1 = character_type.abilities_for_tier(1)
        if tier_1 is None:
            report.errors.append(f"Character type '{character_type.name}' has no tier 1 abilities")
        elif len(tier_1.abilities) < tier_1.count:
            report.errors.append(
                f"Character type '{character_type.name}' requires {tier_1.count} tier 1 abilities "
                f"but only offers {len(tier_1.abilities)}"
            )
        for weapon in character_type.equipment.weapons:
            if catalog.find_weapon(weapon) is None:
                report.warnings.append(f"Type '{character_type.name}' weapon '{weapon}' is not in equipment")
        armor = character_type.equipment.armor
        if armor and catalog.find_armor(armor) is None:
            report.warnings.append(f"Type '{character_type.name}' armor '{armor}' is not in equipment")


def _check_descriptors(catalog: GameData, report: ValidationReport) -> None:
    for descriptor in catalog.descriptors:
        for weapon in descriptor.equipment.weapons:
            if catalog.find_weapon(weapon) is None:
                report.warnings.append(f"Descriptor '{descriptor.name}' weapon '{weapon}' is not in equipment")
        for armor in descriptor.equipment.armor:
            if catalog.find_armor(armor) is None:
                report.warnings.append(f"Descriptor '{descriptor.name}' armor '{armor}' is not in equipment")
        if not descriptor.initial_links:
            report.info.append(f"Descriptor '{descriptor.name}' has no initial links")


def _check_foci(catalog: GameData, report: ValidationReport) -> None:
    for focus in catalog.foci:
        if not focus.suitable_types:
            report.warnings.append(f"Focus '{focus.name}' lists no suitable types")
        for type_name in focus.suitable_types:
            if catalog.find_type(type_name) is None:
                report.warnings.append(f"Focus '{focus.name}' references unknown type '{type_name}'")
    for character_type in catalog.types:
        if not catalog.suitable_foci(character_type.name):
            report.info.append(f"No focus lists '{character_type.name}' as suitable; all foci will be offered")


def _check_duplicates(catalog: GameData, report: ValidationReport) -> None:
    for label, entries in (
        ("type", catalog.types),
        ("descriptor", catalog.descriptors),
        ("species", catalog.species),
        ("focus", catalog.foci),
        ("cypher", catalog.cyphers),
    ):
        seen = set()
        for entry in entries:
            key = entry.name.lower()
            if key in seen:
                report.errors.append(f"Duplicate {label} name '{entry.name}'")
            seen.add(key)
    for label, entries in (("artifact", catalog.artifacts), ("oddity", catalog.oddities)):
        ids = [entry.id for entry in entries]
        for dup in sorted({i for i in ids if ids.count(i) > 1}):
            report.errors.append(f"Duplicate {label} id '{dup}'")


def validate_game_data(catalog: GameData) -> ValidationReport:
    """Cross-reference pass over a loaded catalog.

    Errors make character generation impossible; warnings point at names that
    will fall back to bare text on a sheet.
    """
    report = ValidationReport()
    _check_populated(catalog, report)
    _check_types(catalog, report)
    _check_descriptors(catalog, report)
    _check_foci(catalog, report)
    _check_duplicates(catalog, report)
    report.info.append(
        f"{len(catalog.types)} types, {len(catalog.descriptors)} descriptors, "
        f"{len(catalog.species)} species, {len(catalog.foci)} foci checked"
    )
    return report


def validate_type_abilities(catalog: GameData, type_name: str, abilities: List[str], tier: int = 1) -> List[str]:
    character_type = catalog.find_type(type_name)
    if character_type is None:
        raise ValueError(f"Unknown character type: {type_name}")
    entry = character_type.abilities_for_tier(tier)
    if entry is None:
        raise ValueError(f"{character_type.name} has no tier {tier} abilities")
    known = {a.name.lower(): a.name for a in entry.abilities}
    unknown = [a for a in abilities if a.lower() not in known]
    if unknown:
        raise ValueError(f"Unknown {character_type.name} abilities: {unknown}")
    if len({a.lower() for a in abilities}) != len(abilities):
        raise ValueError("Abilities must not repeat")
    if len(abilities) != entry.count:
        raise ValueError(f"{character_type.name} must choose {entry.count} tier {tier} abilities, got {len(abilities)}")
    return [known[a.lower()] for a in abilities]


def validate_final_character(character: Dict[str, object], schemas_dir: Path = SCHEMAS_DIR) -> Dict[str, object]:
    with (schemas_dir / "character.schema.json").open("r", encoding="utf-8") as f:
        schema = json.load(f)
    jsonschema.validate(character, schema)
    return character
