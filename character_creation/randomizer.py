import random
from typing import List, Optional, Tuple

from character_creation.builder import NotFound, Selection, assemble_with_report
from character_creation.catalog import GameData
from character_creation.models import CharacterType
from character_creation.sheet import CharacterSheet, Gender
from character_creation.stats import Pools
from dice.levels import instantiate_artifact, instantiate_cypher

FIRST_NAMES = [
    "Aric", "Beren", "Calla", "Dara", "Elara", "Finn", "Galen", "Hela", "Ira", "Joren",
    "Kael", "Luna", "Mira", "Nox", "Orion", "Pyra", "Quinn", "Rhen", "Sera", "Tal",
    "Uma", "Vex", "Wren", "Xander", "Yara", "Zephyr", "Ash", "Blade", "Crow", "Drake",
]

SURNAMES = [
    "Ashworth", "Blackwood", "Cloudstrider", "Dawnbringer", "Emberforge", "Frostwhisper",
    "Goldleaf", "Hawkwind", "Ironheart", "Jadewing", "Keenedge", "Lightbringer",
    "Moonshadow", "Nightfall", "Oakenshield", "Proudfoot", "Quicksilver", "Ravenwood",
    "Starfire", "Thornblade", "Undercroft", "Valeheart", "Windrunner", "Wyrmcaller",
    "Yellowhammer", "Zenithar",
]

FULL_NAME_CHANCE = 0.7


def random_name(rng: random.Random) -> str:
    if rng.random() < FULL_NAME_CHANCE:
        return f"{rng.choice(FIRST_NAMES)} {rng.choice(SURNAMES)}"
    return rng.choice(FIRST_NAMES)


def random_gender(rng: random.Random) -> Gender:
    return rng.choice(list(Gender))


def distribute_bonus_points(rng: random.Random, total: int) -> Pools:
    """Hand out ``total`` points one at a time, each to a uniformly chosen pool."""
    counts = {"might": 0, "speed": 0, "intellect": 0}
    for _ in range(max(total, 0)):
        counts[rng.choice(("might", "speed", "intellect"))] += 1
    return Pools(**counts)


def select_random_abilities(rng: random.Random, character_type: CharacterType, tier: int = 1) -> List[str]:
    entry = character_type.abilities_for_tier(tier)
    if entry is None:
        raise ValueError(f"No Tier {tier} abilities found for {character_type.name}")
    if len(entry.abilities) < entry.count:
        raise ValueError("Not enough abilities available for selection")
    return [ability.name for ability in rng.sample(list(entry.abilities), entry.count)]


def _pick_origin(
    catalog: GameData,
    rng: random.Random,
    descriptor_or_species: Optional[str],
    species_chance: float,
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(descriptor, species)`` with exactly one set."""
    if descriptor_or_species:
        if catalog.find_species(descriptor_or_species) is not None:
            return None, descriptor_or_species
        if catalog.find_descriptor(descriptor_or_species) is not None:
            return descriptor_or_species, None
        raise NotFound(f"Descriptor or species not found: {descriptor_or_species}")
    if catalog.species and rng.random() < species_chance:
        return None, rng.choice(catalog.species).name
    return rng.choice(catalog.descriptors).name, None


def generate_random(
    catalog: GameData,
    rng: Optional[random.Random] = None,
    type_name: Optional[str] = None,
    descriptor_or_species: Optional[str] = None,
    species_chance: float = 0.2,
    max_artifacts: int = 2,
    max_oddities: int = 2,
) -> CharacterSheet:
    rng = rng or random.Random()

    if type_name:
        character_type = catalog.find_type(type_name)
        if character_type is None:
            raise NotFound(f"Character type not found: {type_name}")
    else:
        character_type = rng.choice(catalog.types)

    name = random_name(rng)
    gender = random_gender(rng)
    descriptor, species = _pick_origin(catalog, rng, descriptor_or_species, species_chance)

    foci = catalog.suitable_foci(character_type.name) or list(catalog.foci)
    focus = rng.choice(foci)

    budget = catalog.bonus_budget(character_type, catalog.find_species(species) if species else None)
    bonus = distribute_bonus_points(rng, budget)
    abilities = select_random_abilities(rng, character_type)

    limit = character_type.starting_tier.cypher_limit
    cyphers = []
    if catalog.cyphers:
        for _ in range(rng.randint(max(limit - 1, 0), limit)):
            cyphers.append(instantiate_cypher(rng.choice(catalog.cyphers), rng))
    artifacts = []
    if catalog.artifacts:
        for _ in range(rng.randint(0, max_artifacts)):
            artifacts.append(instantiate_artifact(rng.choice(catalog.artifacts), rng))
    oddities = []
    if catalog.oddities:
        for _ in range(rng.randint(0, max_oddities)):
            oddities.append(rng.choice(catalog.oddities))

    selection = Selection(
        name=name,
        archetype=character_type.name,
        focus=focus.name,
        descriptor=descriptor,
        species=species,
        gender=gender,
        bonus=bonus,
        type_abilities=abilities,
        cyphers=cyphers,
        artifacts=artifacts,
        oddities=oddities,
    )
    return assemble_with_report(selection, catalog).sheet


def generate_batch(
    catalog: GameData,
    count: int,
    rng: Optional[random.Random] = None,
    type_name: Optional[str] = None,
    **knobs,
) -> List[CharacterSheet]:
    rng = rng or random.Random()
    return [generate_random(catalog, rng, type_name=type_name, **knobs) for _ in range(count)]
