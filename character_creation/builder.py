"""Assemble a tier-1 character sheet from a set of selections.

``assemble`` is deterministic given a ``Selection`` and the loaded
``GameData``. Cyphers and artifacts arrive already instanced (their levels
were rolled by ``dice.levels``), so nothing here touches randomness.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from character_creation.catalog import GameData
from character_creation.models import (
    ArtifactInstance,
    CharacterType,
    CypherInstance,
    Descriptor,
    Focus,
    Oddity,
    Species,
)
from character_creation.sheet import (
    Background,
    CharacterPools,
    CharacterSheet,
    CypherLimitExceeded,
    Equipment,
    Gender,
    Skills,
)
from character_creation.stats import Edge, Effort, Pools, classify_damage_track, pools_valid, sum_pools

logger = logging.getLogger(__name__)

EXPLORER_PACK = [
    "Explorer's Pack",
    "Rope (15m)",
    "Rations x3",
    "Spikes (10)",
    "Hammer",
    "Boots",
    "Torches x3",
    "Glowglobes x2",
]


class AssemblyError(ValueError):
    pass


class MissingField(AssemblyError):
    pass


class NotFound(AssemblyError):
    pass


class SelectionConflict(AssemblyError):
    pass


class InvalidPools(AssemblyError):
    pass


class BudgetMismatch(AssemblyError):
    pass


@dataclass
class Selection:
    name: str
    archetype: str
    focus: str
    descriptor: Optional[str] = None
    species: Optional[str] = None
    gender: Gender = Gender.FEMALE
    bonus: Pools = field(default_factory=Pools)
    type_abilities: List[str] = field(default_factory=list)
    connection: Optional[str] = None
    cyphers: List[CypherInstance] = field(default_factory=list)
    artifacts: List[ArtifactInstance] = field(default_factory=list)
    oddities: List[Oddity] = field(default_factory=list)


@dataclass(frozen=True)
class DescriptorOrigin:
    descriptor: Descriptor

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass(frozen=True)
class SpeciesOrigin:
    species: Species

    @property
    def name(self) -> str:
        return self.species.name


Origin = Union[DescriptorOrigin, SpeciesOrigin]


@dataclass
class AttachmentOutcome:
    item: CypherInstance
    accepted: bool
    reason: str = ""


@dataclass
class AssemblyResult:
    sheet: CharacterSheet
    attachments: List[AttachmentOutcome] = field(default_factory=list)

    @property
    def rejected(self) -> List[AttachmentOutcome]:
        return [outcome for outcome in self.attachments if not outcome.accepted]


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

def _require(value: Optional[str], label: str) -> str:
    if value is None or not value.strip():
        raise MissingField(f"Character {label} is required")
    return value


def resolve_origin(selection: Selection, catalog: GameData) -> Origin:
    has_descriptor = bool(selection.descriptor and selection.descriptor.strip())
    has_species = bool(selection.species and selection.species.strip())
    if has_descriptor == has_species:
        raise SelectionConflict("Must select either a descriptor or a species, not both")
    if has_species:
        species = catalog.find_species(selection.species)
        if species is None:
            raise NotFound(f"Species not found: {selection.species}")
        return SpeciesOrigin(species)
    descriptor = catalog.find_descriptor(selection.descriptor)
    if descriptor is None:
        raise NotFound(f"Descriptor not found: {selection.descriptor}")
    return DescriptorOrigin(descriptor)


def origin_modifier(origin: Origin) -> Pools:
    mods = origin.species.stat_modifiers if isinstance(origin, SpeciesOrigin) else origin.descriptor.stat_modifiers
    return Pools(might=mods.might, speed=mods.speed, intellect=mods.intellect)


def calculate_pools(character_type: CharacterType, origin: Origin, bonus: Pools, budget: int) -> Pools:
    if not pools_valid(bonus):
        raise InvalidPools(f"Bonus points cannot be negative: {bonus}")
    base = Pools(
        might=character_type.stat_pools.might,
        speed=character_type.stat_pools.speed,
        intellect=character_type.stat_pools.intellect,
    )
    pools = sum_pools(base, origin_modifier(origin), bonus)
    if not pools_valid(pools):
        raise InvalidPools(f"Invalid stat pools - all pools must be >= 0 ({pools})")
    if bonus.total() != budget:
        raise BudgetMismatch(f"Bonus points must total {budget}. Current: {bonus.total()}")
    return pools


def build_skills(character_type: CharacterType, origin: Origin) -> Skills:
    skills = Skills()
    for skill in character_type.skills.trained:
        skills.add_trained(skill)
    for skill in character_type.skills.specialized:
        skills.add_specialized(skill)
    for skill in character_type.skills.inabilities:
        skills.add_inability(skill)

    if isinstance(origin, DescriptorOrigin):
        trained = origin.descriptor.skills.trained
        specialized = origin.descriptor.skills.specialized
        hindered = origin.descriptor.skills.inabilities.hindered
    else:
        trained = origin.species.skills.trained
        specialized = origin.species.skills.specialized
        hindered = origin.species.skills.hindered
    for skill in trained:
        skills.add_trained(skill)
    for skill in specialized:
        skills.add_specialized(skill)
    for skill in hindered:
        skills.add_inability(skill)
    return skills


# -----------------------------------------------------------------------------
# Equipment
# -----------------------------------------------------------------------------

def weapon_display(name: str, catalog: GameData) -> str:
    weapon = catalog.find_weapon(name)
    if weapon is None:
        return name
    return f"{weapon.name} ({weapon.damage} damage)"


def armor_display(name: str, catalog: GameData) -> str:
    armor = catalog.find_armor(name)
    if armor is None:
        return name
    return f"{armor.name} (+{armor.armor_bonus} Armor, Speed Effort +{armor.speed_effort_cost})"


def build_equipment(character_type: CharacterType, origin: Origin, focus: Focus, catalog: GameData) -> Equipment:
    equipment = Equipment()

    for weapon_name in character_type.equipment.weapons:
        equipment.add_weapon(weapon_display(weapon_name, catalog))
    if character_type.equipment.armor:
        equipment.armor = armor_display(character_type.equipment.armor, catalog)
    if character_type.equipment.explorer_pack:
        for item in EXPLORER_PACK:
            equipment.add_gear(item)
    equipment.add_shins(character_type.equipment.shins)
    for item in character_type.equipment.other:
        equipment.add_gear(item)

    if isinstance(origin, DescriptorOrigin):
        grant = origin.descriptor.equipment
        equipment.add_shins(grant.shins)
        for weapon_name in grant.weapons:
            equipment.add_weapon(weapon_display(weapon_name, catalog))
        for armor_name in grant.armor:
            # first armor wins; the archetype's is never replaced
            if equipment.armor is None:
                equipment.armor = armor_display(armor_name, catalog)
        for item in grant.other:
            equipment.add_gear(item)
    else:
        equipment.add_shins(origin.species.equipment.starting_shins)
        for item in origin.species.equipment.items:
            equipment.add_gear(item)

    for item in focus.equipment:
        equipment.add_gear(item)
    return equipment


def calculate_armor_value(character_type: CharacterType, origin: Origin, catalog: GameData) -> int:
    """Armor bonus of the archetype's armor, else the descriptor's first known armor.

    Species armor is not consulted.
    """
    if character_type.equipment.armor:
        armor = catalog.find_armor(character_type.equipment.armor)
        if armor is not None:
            return armor.armor_bonus
    if isinstance(origin, DescriptorOrigin):
        for armor_name in origin.descriptor.equipment.armor:
            armor = catalog.find_armor(armor_name)
            if armor is not None:
                return armor.armor_bonus
    return 0


def build_special_abilities(character_type: CharacterType, origin: Origin) -> List[str]:
    abilities = list(character_type.special_abilities)
    if isinstance(origin, DescriptorOrigin):
        abilities.extend(f"{a.name}: {a.description}" for a in origin.descriptor.special_abilities)
    else:
        abilities.extend(a.describe() for a in origin.species.abilities)
    return abilities


def attach_cyphers(sheet: CharacterSheet, cyphers: List[CypherInstance]) -> List[AttachmentOutcome]:
    outcomes = []
    for cypher in cyphers:
        try:
            sheet.add_cypher(cypher)
        except CypherLimitExceeded as exc:
            logger.warning("Could not add cypher: %s", exc)
            outcomes.append(AttachmentOutcome(item=cypher, accepted=False, reason=str(exc)))
            continue
        outcomes.append(AttachmentOutcome(item=cypher, accepted=True))
    return outcomes


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------

def assemble_with_report(selection: Selection, catalog: GameData) -> AssemblyResult:
    name = _require(selection.name, "name")
    type_name = _require(selection.archetype, "type")
    focus_name = _require(selection.focus, "focus")

    character_type = catalog.find_type(type_name)
    if character_type is None:
        raise NotFound(f"Character type not found: {type_name}")
    focus = catalog.find_focus(focus_name)
    if focus is None:
        raise NotFound(f"Focus not found: {focus_name}")
    origin = resolve_origin(selection, catalog)

    species = origin.species if isinstance(origin, SpeciesOrigin) else None
    maximum = calculate_pools(character_type, origin, selection.bonus, catalog.bonus_budget(character_type, species))

    background = Background(connection_to_party=selection.connection or "")
    if isinstance(origin, DescriptorOrigin) and origin.descriptor.initial_links:
        background.descriptor_link = origin.descriptor.initial_links[0].text
    if focus.connections:
        background.focus_link = focus.connections[0]

    sheet = CharacterSheet(
        name=name,
        gender=selection.gender,
        tier=1,
        character_type=character_type.name,
        descriptor=origin.name if isinstance(origin, DescriptorOrigin) else None,
        species=origin.name if isinstance(origin, SpeciesOrigin) else None,
        focus=focus.name,
        pools=CharacterPools.from_maximum(maximum),
        edge=Edge(
            might=character_type.edge.might,
            speed=character_type.edge.speed,
            intellect=character_type.edge.intellect,
        ),
        effort=Effort(max_effort=character_type.starting_tier.effort),
        armor=calculate_armor_value(character_type, origin, catalog),
        damage_track=classify_damage_track(maximum),
        skills=build_skills(character_type, origin),
        special_abilities=build_special_abilities(character_type, origin),
        type_abilities=list(selection.type_abilities),
        focus_ability=focus.tier_1_ability.describe(),
        equipment=build_equipment(character_type, origin, focus, catalog),
        cypher_limit=character_type.starting_tier.cypher_limit,
        background=background,
    )

    attachments = attach_cyphers(sheet, selection.cyphers)
    for artifact in selection.artifacts:
        sheet.add_artifact(artifact)
    for oddity in selection.oddities:
        sheet.add_oddity(oddity)

    logger.info("Assembled %s: %s", sheet.name, sheet.character_sentence())
    return AssemblyResult(sheet=sheet, attachments=attachments)


def assemble(selection: Selection, catalog: GameData) -> CharacterSheet:
    return assemble_with_report(selection, catalog).sheet


def build_character(
    catalog: GameData,
    name: str,
    type_name: str,
    descriptor_or_species: str,
    focus_name: str,
    might: int,
    speed: int,
    intellect: int,
    abilities: Optional[List[str]] = None,
    gender: Gender = Gender.FEMALE,
    connection: Optional[str] = None,
) -> CharacterSheet:
    """Build from a single descriptor-or-species name; species names are checked first."""
    selection = Selection(
        name=name,
        archetype=type_name,
        focus=focus_name,
        gender=gender,
        bonus=Pools(might=might, speed=speed, intellect=intellect),
        type_abilities=list(abilities or []),
        connection=connection,
    )
    if catalog.find_species(descriptor_or_species) is not None:
        selection.species = descriptor_or_species
    elif catalog.find_descriptor(descriptor_or_species) is not None:
        selection.descriptor = descriptor_or_species
    else:
        raise NotFound(f"Descriptor or species not found: {descriptor_or_species}")
    return assemble(selection, catalog)
