"""Question-and-answer flow that collects a character selection on the terminal."""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from character_creation.builder import Selection
from character_creation.catalog import GameData
from character_creation.stats import Pools

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class InteractiveFlow:
    """Ask for name, type, descriptor or species, bonus points, focus and abilities.

    ``input_fn`` and ``output_fn`` default to ``input`` and ``print``; tests
    pass scripted replacements. Invalid answers are reported and asked again.
    """

    def __init__(self, catalog: GameData, input_fn: InputFn = input, output_fn: OutputFn = print):
        self.catalog = catalog
        self.input_fn = input_fn
        self.output_fn = output_fn

    def ask(self, prompt: str) -> str:
        return self.input_fn(prompt).strip()

    def read_number(self, prompt: str, low: int, high: int) -> int:
        while True:
            raw = self.ask(prompt)
            try:
                value = int(raw)
            except ValueError:
                self.output_fn("Please enter a valid number")
                continue
            if low <= value <= high:
                return value
            self.output_fn(f"Please enter a number between {low} and {high}")

    def choose(self, options: Sequence[str]) -> int:
        """Print a numbered list and return the 0-based index picked."""
        for i, label in enumerate(options, start=1):
            self.output_fn(f"{i}. {label}")
        return self.read_number(f"Enter choice (1-{len(options)}): ", 1, len(options)) - 1

    # -- steps ---------------------------------------------------------------

    def prompt_name(self) -> str:
        self.output_fn("Step 1: Character Name")
        while True:
            name = self.ask("Enter your character's name: ")
            if name:
                return name
            self.output_fn("Character name cannot be empty")

    def select_type(self) -> str:
        self.output_fn("Step 2: Select Character Type")
        types = self.catalog.types
        index = self.choose([f"{t.name} - {t.tagline}" for t in types])
        return types[index].name

    def select_descriptor_or_species(self) -> Tuple[str, bool]:
        """Descriptors are listed first, species continue the same numbering."""
        self.output_fn("Step 3: Select Descriptor or Species")
        descriptors = self.catalog.descriptors
        species = self.catalog.species
        labels = [f"{d.name} - {d.tagline}" for d in descriptors]
        labels.extend(f"{s.name} (species) - {s.tagline}" for s in species)
        index = self.choose(labels)
        if index < len(descriptors):
            return descriptors[index].name, False
        return species[index - len(descriptors)].name, True

    def allocate_bonus_points(self, type_name: str, origin_name: str, is_species: bool) -> Pools:
        character_type = self.catalog.find_type(type_name)
        species = self.catalog.find_species(origin_name) if is_species else None
        total = self.catalog.bonus_budget(character_type, species)
        self.output_fn(f"Step 4: Allocate Bonus Points ({total} available)")
        might = self.read_number("Might: ", 0, total)
        remaining = total - might
        self.output_fn(f"Remaining: {remaining}")
        speed = self.read_number("Speed: ", 0, remaining)
        intellect = remaining - speed
        self.output_fn(f"Intellect: +{intellect}")
        return Pools(might=might, speed=speed, intellect=intellect)

    def select_focus(self, type_name: str) -> str:
        self.output_fn("Step 5: Select Focus")
        foci = self.catalog.suitable_foci(type_name)
        if not foci:
            self.output_fn("Warning: No suitable foci found for this type. Showing all foci.")
            foci = list(self.catalog.foci)
        index = self.choose([f"{f.name} - {f.theme}" for f in foci])
        return foci[index].name

    def select_type_abilities(self, type_name: str) -> List[str]:
        self.output_fn("Step 6: Select Type Abilities")
        character_type = self.catalog.find_type(type_name)
        tier_1 = character_type.abilities_for_tier(1) if character_type else None
        if tier_1 is None:
            raise ValueError(f"No Tier 1 abilities found for {type_name}")
        self.output_fn(f"Select {tier_1.count} abilities from your type's Tier 1 options:")
        for i, ability in enumerate(tier_1.abilities, start=1):
            self.output_fn(f"{i}. {ability.name} ({ability.cost}, {ability.kind})")

        selected: List[str] = []
        while len(selected) < tier_1.count:
            choice = self.read_number(
                f"Select ability {len(selected) + 1} of {tier_1.count}: ", 1, len(tier_1.abilities)
            )
            name = tier_1.abilities[choice - 1].name
            if name in selected:
                self.output_fn("Already selected! Choose a different ability.")
                continue
            selected.append(name)
        return selected

    def run(self, connection: Optional[str] = None) -> Selection:
        name = self.prompt_name()
        type_name = self.select_type()
        origin_name, is_species = self.select_descriptor_or_species()
        bonus = self.allocate_bonus_points(type_name, origin_name, is_species)
        focus = self.select_focus(type_name)
        abilities = self.select_type_abilities(type_name)
        return Selection(
            name=name,
            archetype=type_name,
            focus=focus,
            descriptor=None if is_species else origin_name,
            species=origin_name if is_species else None,
            bonus=bonus,
            type_abilities=abilities,
            connection=connection,
        )
