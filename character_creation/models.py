"""Pydantic models for the static game-data tables.

Every model is frozen: the catalog is loaded once and shared read-only.
Field names follow the JSON tables under ``character_creation/tables``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Ability(CatalogModel):
    name: str
    cost: str
    kind: str = Field(alias="type")
    description: str

    def describe(self) -> str:
        return f"{self.name} ({self.cost}, {self.kind}): {self.description}"


# -----------------------------------------------------------------------------
# Types (archetypes)
# -----------------------------------------------------------------------------

class StatPools(CatalogModel):
    might: int = Field(ge=0)
    speed: int = Field(ge=0)
    intellect: int = Field(ge=0)
    bonus_points: int = Field(ge=0)


class EdgeValues(CatalogModel):
    might: int = Field(0, ge=0)
    speed: int = Field(0, ge=0)
    intellect: int = Field(0, ge=0)


class StartingTier(CatalogModel):
    effort: int = Field(ge=0)
    cypher_limit: int = Field(ge=0)


class PlayerIntrusions(CatalogModel):
    cost: str = "1 XP"
    examples: List[str] = []


class TypeEquipment(CatalogModel):
    weapons: List[str] = []
    armor: Optional[str] = None
    explorer_pack: bool = False
    shins: int = Field(0, ge=0)
    other: List[str] = []


class TypeSkills(CatalogModel):
    trained: List[str] = []
    specialized: List[str] = []
    inabilities: List[str] = []


class TierAbilities(CatalogModel):
    tier: int = Field(ge=1)
    count: int = Field(ge=0)
    abilities: List[Ability]


class TierProgression(CatalogModel):
    tier: int = Field(ge=1)
    effort: int = Field(ge=0)
    cypher_limit: int = Field(ge=0)


class CharacterType(CatalogModel):
    name: str
    source: str = ""
    tagline: str = ""
    stat_pools: StatPools
    edge: EdgeValues
    starting_tier: StartingTier
    intrusions: Optional[PlayerIntrusions] = None
    equipment: TypeEquipment = TypeEquipment()
    skills: TypeSkills = TypeSkills()
    special_abilities: List[str] = []
    tier_abilities: List[TierAbilities] = []
    tier_progression: List[TierProgression] = []

    def abilities_for_tier(self, tier: int) -> Optional[TierAbilities]:
        for entry in self.tier_abilities:
            if entry.tier == tier:
                return entry
        return None


# -----------------------------------------------------------------------------
# Descriptors
# -----------------------------------------------------------------------------

class StatModifiers(CatalogModel):
    might: int = 0
    speed: int = 0
    intellect: int = 0


class DescriptorInabilities(CatalogModel):
    hindered: List[str] = []


class DescriptorSkills(CatalogModel):
    trained: List[str] = []
    specialized: List[str] = []
    inabilities: DescriptorInabilities = DescriptorInabilities()


class SpecialAbility(CatalogModel):
    name: str
    description: str


class DescriptorEquipment(CatalogModel):
    shins: int = Field(0, ge=0)
    weapons: List[str] = []
    armor: List[str] = []
    other: List[str] = []


class InitialLink(CatalogModel):
    text: str


class Descriptor(CatalogModel):
    name: str
    source: str = ""
    tagline: str = ""
    stat_modifiers: StatModifiers = StatModifiers()
    skills: DescriptorSkills = DescriptorSkills()
    special_abilities: List[SpecialAbility] = []
    equipment: DescriptorEquipment = DescriptorEquipment()
    initial_links: List[InitialLink] = []


# -----------------------------------------------------------------------------
# Species
# -----------------------------------------------------------------------------

class SpeciesDescription(CatalogModel):
    appearance: str = ""
    culture: str = ""
    lifespan: int = 0


class SpeciesStatModifiers(CatalogModel):
    might: int = 0
    speed: int = 0
    intellect: int = 0
    initial_bonus_points: Optional[int] = Field(None, ge=0)
    notes: str = ""


class SpeciesSkills(CatalogModel):
    trained: List[str] = []
    specialized: List[str] = []
    hindered: List[str] = []


class SpeciesEquipment(CatalogModel):
    starting_shins: int = Field(0, ge=0)
    items: List[str] = []


class Species(CatalogModel):
    name: str
    category: str = ""
    replaces_descriptor: bool = True
    tagline: str = ""
    description: Optional[SpeciesDescription] = None
    stat_modifiers: SpeciesStatModifiers = SpeciesStatModifiers()
    abilities: List[Ability] = []
    skills: SpeciesSkills = SpeciesSkills()
    equipment: SpeciesEquipment = SpeciesEquipment()


# -----------------------------------------------------------------------------
# Foci
# -----------------------------------------------------------------------------

class Focus(CatalogModel):
    name: str
    source: str = ""
    theme: str = ""
    suitable_types: List[str] = []
    connections: List[str] = []
    equipment: List[str] = []
    tier_1_ability: Ability

    def suits(self, type_name: str) -> bool:
        wanted = type_name.lower()
        return any(t.lower() == wanted for t in self.suitable_types)


# -----------------------------------------------------------------------------
# Equipment
# -----------------------------------------------------------------------------

class Weapon(CatalogModel):
    name: str
    category: str
    damage: int = Field(ge=0)
    cost: int = Field(ge=0)
    range: str = ""
    notes: str = ""


class Armor(CatalogModel):
    name: str
    category: str
    armor_bonus: int = Field(ge=0)
    speed_effort_cost: int = Field(ge=0)
    cost: int = Field(ge=0)
    notes: str = ""


class Shield(CatalogModel):
    name: str
    category: str = "shield"
    armor_bonus: int = Field(0, ge=0)
    speed_defense_asset: bool = False
    cost: int = Field(ge=0)
    notes: str = ""


class Gear(CatalogModel):
    name: str
    category: str
    cost: int = Field(ge=0)
    notes: str = ""


class Consumable(Gear):
    pass


class Clothing(Gear):
    pass


class EquipmentData(CatalogModel):
    weapons: List[Weapon] = []
    armor: List[Armor] = []
    shields: List[Shield] = []
    gear: List[Gear] = []
    consumables: List[Consumable] = []
    clothing: List[Clothing] = []


# -----------------------------------------------------------------------------
# Numenera: cyphers, artifacts, oddities, discoveries
# -----------------------------------------------------------------------------

class Cypher(CatalogModel):
    name: str
    level_formula: str
    kind: str = Field(alias="type")
    category: str = ""
    effect: str
    form: str = ""


class Artifact(CatalogModel):
    id: str
    name: str
    level_formula: str
    depletion: str
    form_type: str = ""
    effect: str
    form: str = ""


class Oddity(CatalogModel):
    id: str
    name: str
    description: str
    value: int = Field(0, ge=0)


class Discovery(CatalogModel):
    id: str
    name: str
    category: str = ""
    description: str = ""


class CypherInstance(CatalogModel):
    """A carried cypher: the template fields plus one rolled level."""

    name: str
    level: int
    kind: str = Field(alias="type")
    category: str = ""
    effect: str
    form: str = ""

    def describe(self) -> str:
        return f"{self.name} (Level {self.level}, {self.kind}): {self.effect}"


class ArtifactInstance(CatalogModel):
    id: str
    name: str
    level: int
    depletion: str
    form_type: str = ""
    effect: str
    form: str = ""

    def describe(self) -> str:
        return f"{self.name} (Level {self.level}, Depletion {self.depletion}): {self.effect}"
