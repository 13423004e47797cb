"""Spend a character's starting shins on catalog equipment."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from character_creation.builder import armor_display, weapon_display
from character_creation.catalog import GameData
from character_creation.sheet import CharacterSheet

CATEGORIES = ("weapons", "armor", "shields", "gear", "consumables", "clothing")


class InsufficientShins(ValueError):
    pass


class UnknownItem(KeyError):
    pass


@dataclass(frozen=True)
class ShopItem:
    name: str
    category: str
    cost: int
    display: str
    armor_bonus: int = 0


def shop_catalog(catalog: GameData, category: Optional[str] = None) -> List[ShopItem]:
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"Unknown shop category: {category}")
    items: List[ShopItem] = []
    equipment = catalog.equipment
    if category in (None, "weapons"):
        items.extend(ShopItem(w.name, "weapons", w.cost, weapon_display(w.name, catalog)) for w in equipment.weapons)
    if category in (None, "armor"):
        items.extend(ShopItem(a.name, "armor", a.cost, armor_display(a.name, catalog), a.armor_bonus) for a in equipment.armor)
    if category in (None, "shields"):
        items.extend(
            ShopItem(s.name, "shields", s.cost, f"{s.name} (+{s.armor_bonus} Armor)") for s in equipment.shields
        )
    for name in ("gear", "consumables", "clothing"):
        if category in (None, name):
            items.extend(ShopItem(g.name, name, g.cost, g.name) for g in getattr(equipment, name))
    return items


@dataclass
class Cart:
    catalog: GameData
    quantities: Dict[str, int] = field(default_factory=dict)

    def _lookup(self, name: str) -> ShopItem:
        wanted = name.strip().lower()
        for item in shop_catalog(self.catalog):
            if item.name.lower() == wanted:
                return item
        raise UnknownItem(name)

    def add(self, name: str, quantity: int = 1) -> ShopItem:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        item = self._lookup(name)
        self.quantities[item.name] = self.quantities.get(item.name, 0) + quantity
        return item

    def remove(self, name: str) -> None:
        item = self._lookup(name)
        self.quantities.pop(item.name, None)

    def items(self) -> List[ShopItem]:
        return [self._lookup(name) for name in self.quantities]

    def total(self) -> int:
        return sum(item.cost * self.quantities[item.name] for item in self.items())


def checkout(sheet: CharacterSheet, cart: Cart) -> int:
    """Deduct the cart total from the sheet and file the purchases.

    Returns the shins left. Armor and shields replace what the sheet carried.
    """
    total = cart.total()
    if total > sheet.equipment.shins:
        raise InsufficientShins(f"Cart costs {total} shins but only {sheet.equipment.shins} available")

    for item in cart.items():
        quantity = cart.quantities[item.name]
        if item.category == "weapons":
            for _ in range(quantity):
                sheet.equipment.add_weapon(item.display)
        elif item.category == "armor":
            sheet.equipment.armor = item.display
            sheet.armor = item.armor_bonus
        elif item.category == "shields":
            sheet.equipment.shield = item.display
        else:
            sheet.equipment.add_gear(item.display if quantity == 1 else f"{item.display} x{quantity}")

    sheet.equipment.shins -= total
    cart.quantities.clear()
    return sheet.equipment.shins
