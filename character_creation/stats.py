from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

POOL_NAMES = ("might", "speed", "intellect")


class Pools(BaseModel):
    might: int = 0
    speed: int = 0
    intellect: int = 0

    def total(self) -> int:
        return self.might + self.speed + self.intellect

    def is_valid(self) -> bool:
        return pools_valid(self)

    def get_pool(self, pool_name: str) -> Optional[int]:
        key = pool_name.lower()
        if key not in POOL_NAMES:
            return None
        return getattr(self, key)

    def __str__(self) -> str:
        return f"Might: {self.might}, Speed: {self.speed}, Intellect: {self.intellect}"


class Edge(BaseModel):
    might: int = Field(0, ge=0)
    speed: int = Field(0, ge=0)
    intellect: int = Field(0, ge=0)

    def get_edge(self, pool_name: str) -> Optional[int]:
        key = pool_name.lower()
        if key not in POOL_NAMES:
            return None
        return getattr(self, key)

    def apply_to_cost(self, pool_name: str, cost: int) -> int:
        return effective_cost(self.get_edge(pool_name) or 0, cost)

    def __str__(self) -> str:
        return f"Might: {self.might}, Speed: {self.speed}, Intellect: {self.intellect}"


class Effort(BaseModel):
    max_effort: int = Field(1, ge=0)

    def calculate_cost(self, levels: int) -> int:
        return effort_cost(levels)

    def damage_bonus(self, levels: int) -> int:
        return effort_damage_bonus(levels)

    def is_valid(self, levels: int) -> bool:
        return 0 <= levels <= self.max_effort


class DamageTrack(str, Enum):
    HALE = "Hale"
    IMPAIRED = "Impaired"
    DEBILITATED = "Debilitated"
    DEAD = "Dead"

    def worsen(self) -> "DamageTrack":
        order = list(DamageTrack)
        return order[min(order.index(self) + 1, len(order) - 1)]

    def improve(self) -> "DamageTrack":
        # the dead stay dead
        if self is DamageTrack.DEAD:
            return self
        order = list(DamageTrack)
        return order[max(order.index(self) - 1, 0)]

    def can_act(self) -> bool:
        return self is not DamageTrack.DEAD

    def difficulty_modifier(self) -> Optional[int]:
        """Steps of hindrance on every task; ``None`` when no action is possible."""
        return {
            DamageTrack.HALE: 0,
            DamageTrack.IMPAIRED: 1,
            DamageTrack.DEBILITATED: 1,
            DamageTrack.DEAD: None,
        }[self]

    def description(self) -> str:
        return _DAMAGE_DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


_DAMAGE_DESCRIPTIONS = {
    DamageTrack.HALE: "Healthy and unharmed",
    DamageTrack.IMPAIRED: "Injured - all tasks hindered by one step",
    DamageTrack.DEBILITATED: "Severely wounded - all tasks hindered, cannot move more than an immediate distance",
    DamageTrack.DEAD: "Dead",
}


class RecoveryRoll(BaseModel):
    roll: int
    tier: int

    def total(self) -> int:
        return self.roll + self.tier

    @classmethod
    def simulate(cls, tier: int) -> "RecoveryRoll":
        # 1d6 averages 3.5, rounded up
        return cls(roll=4, tier=tier)


def sum_pools(*contributions: Pools) -> Pools:
    return Pools(
        might=sum(p.might for p in contributions),
        speed=sum(p.speed for p in contributions),
        intellect=sum(p.intellect for p in contributions),
    )


def pools_valid(pools: Pools) -> bool:
    return pools.might >= 0 and pools.speed >= 0 and pools.intellect >= 0


def effective_cost(edge_value: int, cost: int) -> int:
    return max(0, cost - edge_value)


def effort_cost(levels: int) -> int:
    """First level of Effort costs 3 points, each additional level costs 2."""
    if levels <= 0:
        return 0
    return 3 + 2 * (levels - 1)


def effort_damage_bonus(levels: int) -> int:
    return 3 * levels


def classify_damage_track(pools: Pools) -> DamageTrack:
    zeros = sum(1 for name in POOL_NAMES if getattr(pools, name) == 0)
    if zeros == 0:
        return DamageTrack.HALE
    if zeros == 1:
        return DamageTrack.IMPAIRED
    if zeros == 2:
        return DamageTrack.DEBILITATED
    return DamageTrack.DEAD


def calculate_armor(base_armor: int, additional_armor: Iterable[int] = ()) -> int:
    return base_armor + sum(additional_armor)
