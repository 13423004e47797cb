from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from character_creation.models import ArtifactInstance, CypherInstance, Oddity
from character_creation.stats import DamageTrack, Edge, Effort, Pools, classify_damage_track


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


class CypherLimitExceeded(ValueError):
    pass


class CharacterPools(BaseModel):
    current: Pools
    maximum: Pools

    @classmethod
    def from_maximum(cls, pools: Pools) -> "CharacterPools":
        return cls(current=pools.model_copy(), maximum=pools.model_copy())

    def reset(self) -> None:
        self.current = self.maximum.model_copy()

    def has_zero_pool(self) -> bool:
        return 0 in (self.current.might, self.current.speed, self.current.intellect)


class Skills(BaseModel):
    trained: List[str] = []
    specialized: List[str] = []
    inabilities: List[str] = []

    def add_trained(self, skill: str) -> None:
        if skill not in self.trained:
            self.trained.append(skill)

    def add_specialized(self, skill: str) -> None:
        if skill not in self.specialized:
            self.specialized.append(skill)

    def add_inability(self, skill: str) -> None:
        if skill not in self.inabilities:
            self.inabilities.append(skill)

    def skill_level(self, skill: str) -> int:
        """-1 inability, 0 untrained, 1 trained, 2 specialized."""
        wanted = skill.lower()
        if any(s.lower() == wanted for s in self.specialized):
            return 2
        if any(s.lower() == wanted for s in self.trained):
            return 1
        if any(s.lower() == wanted for s in self.inabilities):
            return -1
        return 0


class Equipment(BaseModel):
    weapons: List[str] = []
    armor: Optional[str] = None
    shield: Optional[str] = None
    gear: List[str] = []
    shins: int = Field(0, ge=0)

    def add_shins(self, amount: int) -> None:
        self.shins += amount

    def add_weapon(self, weapon: str) -> None:
        self.weapons.append(weapon)

    def add_gear(self, item: str) -> None:
        self.gear.append(item)


class Background(BaseModel):
    connection_to_party: str = ""
    descriptor_link: Optional[str] = None
    focus_link: Optional[str] = None
    notes: List[str] = []


class CharacterSheet(BaseModel):
    name: str
    gender: Gender = Gender.FEMALE
    tier: int = 1

    # "I am a [descriptor|species] [type] who [focus]"
    character_type: str = ""
    descriptor: Optional[str] = None
    species: Optional[str] = None
    focus: str = ""

    pools: CharacterPools = Field(default_factory=lambda: CharacterPools.from_maximum(Pools()))
    edge: Edge = Field(default_factory=Edge)
    effort: Effort = Field(default_factory=Effort)

    armor: int = Field(0, ge=0)
    damage_track: DamageTrack = DamageTrack.HALE

    skills: Skills = Field(default_factory=Skills)

    special_abilities: List[str] = []
    type_abilities: List[str] = []
    focus_ability: str = ""

    equipment: Equipment = Field(default_factory=Equipment)

    cypher_limit: int = Field(2, ge=0)
    cyphers: List[CypherInstance] = []
    artifacts: List[ArtifactInstance] = []
    oddities: List[Oddity] = []

    background: Background = Field(default_factory=Background)

    xp: int = Field(0, ge=0)
    advances: List[str] = []

    @model_validator(mode="after")
    def _descriptor_or_species(self) -> "CharacterSheet":
        if self.descriptor is not None and self.species is not None:
            raise ValueError("A character has a descriptor or a species, never both")
        if len(self.cyphers) > self.cypher_limit:
            raise ValueError(f"Carrying {len(self.cyphers)} cyphers exceeds the limit of {self.cypher_limit}")
        return self

    def character_sentence(self) -> str:
        adjective = self.species or self.descriptor or "Unknown"
        return f"I am a {adjective} {self.character_type} who {self.focus}"

    def uses_species(self) -> bool:
        return self.species is not None

    # -- cyphers, artifacts, oddities ----------------------------------------

    def cypher_count(self) -> int:
        return len(self.cyphers)

    def can_carry_cypher(self) -> bool:
        return len(self.cyphers) < self.cypher_limit

    def add_cypher(self, cypher: CypherInstance) -> None:
        if not self.can_carry_cypher():
            raise CypherLimitExceeded(
                f"Cannot carry {cypher.name}: cypher limit of {self.cypher_limit} reached"
            )
        self.cyphers.append(cypher)

    def remove_cypher(self, index: int) -> CypherInstance:
        if index < 0 or index >= len(self.cyphers):
            raise IndexError(f"No cypher at position {index}")
        return self.cyphers.pop(index)

    def add_artifact(self, artifact: ArtifactInstance) -> None:
        self.artifacts.append(artifact)

    def remove_artifact(self, index: int) -> ArtifactInstance:
        if index < 0 or index >= len(self.artifacts):
            raise IndexError(f"No artifact at position {index}")
        return self.artifacts.pop(index)

    def add_oddity(self, oddity: Oddity) -> None:
        self.oddities.append(oddity)

    def remove_oddity(self, index: int) -> Oddity:
        if index < 0 or index >= len(self.oddities):
            raise IndexError(f"No oddity at position {index}")
        return self.oddities.pop(index)

    # -- pools ----------------------------------------------------------------

    def reset_pools(self) -> None:
        self.pools.reset()
        self.update_damage_track()

    def update_damage_track(self) -> None:
        self.damage_track = classify_damage_track(self.pools.current)

    def can_spend(self, pool_name: str, cost: int) -> bool:
        current = self.pools.current.get_pool(pool_name)
        if current is None:
            return False
        return current >= self.edge.apply_to_cost(pool_name, cost)

    def add_xp(self, amount: int) -> None:
        self.xp += amount

    def summary(self) -> str:
        return "\n".join([
            self.name,
            self.character_sentence(),
            f"Tier {self.tier} | XP: {self.xp}",
            "",
            f"Pools: {self.pools.maximum}",
            f"Edge: {self.edge}",
            f"Effort: {self.effort.max_effort}",
            f"Armor: {self.armor}",
            "",
            f"Cypher Limit: {self.cypher_limit} | Current: {self.cypher_count()}",
            f"Shins: {self.equipment.shins}",
        ])
