from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from character_creation.sheet import CharacterSheet, Gender


class BonusAllocation(BaseModel):
    might: int = 0
    speed: int = 0
    intellect: int = 0


class CharacterRequest(BaseModel):
    name: str
    type: str
    descriptor: Optional[str] = None
    species: Optional[str] = None
    focus: str
    gender: Gender = Gender.FEMALE
    bonus: BonusAllocation = Field(default_factory=BonusAllocation)
    abilities: List[str] = []
    connection: Optional[str] = None
    cyphers: List[str] = Field(default_factory=list, description="Cypher names; levels are rolled server side")
    artifacts: List[str] = Field(default_factory=list, description="Artifact ids or names")
    oddities: List[str] = Field(default_factory=list, description="Oddity ids or names")
    save: bool = True


class RandomCharacterRequest(BaseModel):
    type: Optional[str] = None
    descriptor_or_species: Optional[str] = None
    seed: Optional[int] = None
    count: int = Field(1, ge=1, le=20)
    save: bool = True


class RejectedCypher(BaseModel):
    name: str
    reason: str


class CharacterResponse(BaseModel):
    sheet: CharacterSheet
    filename: Optional[str] = None
    rejected_cyphers: List[RejectedCypher] = []


class CharacterSummary(BaseModel):
    filename: str
    name: str
    character_type: str
    tier: int = Field(ge=1)
    updated_at: float


class CatalogEntry(BaseModel):
    name: str
    tagline: Optional[str] = None
    detail: Optional[str] = None
