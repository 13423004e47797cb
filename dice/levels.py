"""Roll item levels for cyphers and artifacts.

Level formulas in the tables look like ``"1d6"``, ``"1d6+2"`` or a fixed
``"3"``. Rolling never fails: a malformed bonus counts as 0 and a base
that is neither a die nor a number counts as level 1.
"""
import random
import re
from typing import Optional

from character_creation.models import Artifact, ArtifactInstance, Cypher, CypherInstance

DIE_SIDES = 6

_DIE_PATTERN = re.compile(r"^\s*(\d*)\s*d\s*(\d+)\s*$", re.IGNORECASE)

_default_rng = random.Random()


def seed_default_rng(seed: Optional[int]) -> None:
    """Reseed the process-local generator used when no ``rng`` is passed."""
    _default_rng.seed(seed)


def _parse_int(raw: str, fallback: int) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return fallback


def _roll_base(base: str, rng: random.Random) -> int:
    match = _DIE_PATTERN.match(base)
    if match:
        # a single d6, whatever the count and sides in the token say
        return rng.randint(1, DIE_SIDES)
    return _parse_int(base, 1)


def roll_level(formula: str, rng: Optional[random.Random] = None) -> int:
    rng = rng or _default_rng
    base, plus, bonus = formula.partition("+")
    level = _roll_base(base, rng)
    if plus:
        level += _parse_int(bonus, 0)
    return level


def instantiate_cypher(template: Cypher, rng: Optional[random.Random] = None) -> CypherInstance:
    return CypherInstance(
        name=template.name,
        level=roll_level(template.level_formula, rng),
        kind=template.kind,
        category=template.category,
        effect=template.effect,
        form=template.form,
    )


def instantiate_artifact(template: Artifact, rng: Optional[random.Random] = None) -> ArtifactInstance:
    return ArtifactInstance(
        id=template.id,
        name=template.name,
        level=roll_level(template.level_formula, rng),
        depletion=template.depletion,
        form_type=template.form_type,
        effect=template.effect,
        form=template.form,
    )
