"""Render character sheets as Markdown documents."""
import re
from pathlib import Path
from typing import Iterable, List

from character_creation.sheet import CharacterSheet

FOOTER = "*Generated by Numenera Character Generator*"

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_filename(name: str) -> str:
    return _UNSAFE.sub("-", name.replace(" ", "_"))


def _bullets(items: Iterable[str]) -> List[str]:
    return [f"- {item}" for item in items]


def _section(lines: List[str], title: str, body: List[str]) -> None:
    lines.append(title)
    lines.append("")
    lines.extend(body)
    lines.append("")


def format_character_sheet(sheet: CharacterSheet) -> str:
    lines: List[str] = [f"# {sheet.name}", "", f"**{sheet.character_sentence()}**", "", "---", ""]

    basic = [f"- **Tier:** {sheet.tier}", f"- **Type:** {sheet.character_type}"]
    if sheet.descriptor:
        basic.append(f"- **Descriptor:** {sheet.descriptor}")
    if sheet.species:
        basic.append(f"- **Species:** {sheet.species}")
    basic.append(f"- **Focus:** {sheet.focus}")
    basic.append(f"- **Gender:** {sheet.gender}")
    basic.append(f"- **Experience Points:** {sheet.xp}")
    _section(lines, "## Basic Information", basic)

    current, maximum = sheet.pools.current, sheet.pools.maximum
    _section(lines, "## Stat Pools", [
        "| Stat          | Current | Maximum |",
        "|---------------|---------|---------|",
        f"| **Might**     | {current.might} | {maximum.might} |",
        f"| **Speed**     | {current.speed} | {maximum.speed} |",
        f"| **Intellect** | {current.intellect} | {maximum.intellect} |",
    ])

    _section(lines, "## Edge", [
        f"- **Might Edge:** {sheet.edge.might}",
        f"- **Speed Edge:** {sheet.edge.speed}",
        f"- **Intellect Edge:** {sheet.edge.intellect}",
    ])

    _section(lines, "## Combat Statistics", [
        f"- **Effort:** {sheet.effort.max_effort}",
        f"- **Armor:** {sheet.armor}",
        f"- **Damage Track:** {sheet.damage_track}",
        f"- **Cypher Limit:** {sheet.cypher_limit}",
    ])

    lines.extend(["## Skills", ""])
    for title, skills in (
        ("### Specialized", sheet.skills.specialized),
        ("### Trained", sheet.skills.trained),
        ("### Inabilities", sheet.skills.inabilities),
    ):
        if skills:
            _section(lines, title, _bullets(skills))

    lines.extend(["## Abilities", ""])
    if sheet.special_abilities:
        _section(lines, "### Special Abilities", _bullets(sheet.special_abilities))
    if sheet.type_abilities:
        _section(lines, "### Type Abilities", _bullets(sheet.type_abilities))
    _section(lines, "### Focus Ability", [f"- {sheet.focus_ability}"])

    equipment = sheet.equipment
    lines.extend(["## Equipment", ""])
    _section(lines, "### Weapons", _bullets(equipment.weapons) or ["*None*"])
    _section(lines, "### Armor", [equipment.armor or "*None*"])
    if equipment.shield:
        _section(lines, "### Shield", [equipment.shield])
    _section(lines, "### Gear", _bullets(equipment.gear) or ["*None*"])
    _section(lines, "### Currency", [f"**Shins:** {equipment.shins}"])

    cyphers = [f"**Limit:** {sheet.cypher_limit} | **Current:** {sheet.cypher_count()}", ""]
    if sheet.cyphers:
        cyphers.extend(f"{i}. {c.describe()}" for i, c in enumerate(sheet.cyphers, start=1))
    else:
        cyphers.append("*No cyphers currently carried*")
    _section(lines, "## Cyphers", cyphers)

    if sheet.artifacts:
        _section(lines, "## Artifacts", _bullets(a.describe() for a in sheet.artifacts))
    if sheet.oddities:
        _section(lines, "## Oddities", _bullets(f"{o.name}: {o.description}" for o in sheet.oddities))

    background = sheet.background
    lines.extend(["## Background", ""])
    if background.connection_to_party:
        _section(lines, "### Connection to Party", [background.connection_to_party])
    if background.descriptor_link:
        _section(lines, "### Descriptor Link", [background.descriptor_link])
    if background.focus_link:
        _section(lines, "### Focus Link", [background.focus_link])
    if background.notes:
        _section(lines, "### Notes", _bullets(background.notes))

    if sheet.advances:
        _section(lines, "## Advancement", _bullets(sheet.advances))

    lines.extend(["---", "", FOOTER])
    return "\n".join(lines) + "\n"


def format_compact(sheet: CharacterSheet) -> str:
    """One-page summary: header, a single stats line, then equipment and abilities."""
    current, maximum, edge = sheet.pools.current, sheet.pools.maximum, sheet.edge
    lines = [
        f"# {sheet.name} (Tier {sheet.tier})",
        "",
        f"*{sheet.character_sentence()}*",
        "",
        f"**Pools:** M:{current.might}/{maximum.might} S:{current.speed}/{maximum.speed} "
        f"I:{current.intellect}/{maximum.intellect} | **Edge:** M:{edge.might} S:{edge.speed} "
        f"I:{edge.intellect} | **Effort:** {sheet.effort.max_effort} | **Armor:** {sheet.armor}",
        "",
    ]

    skills = []
    if sheet.skills.specialized:
        skills.append("*Specialized:* " + ", ".join(sheet.skills.specialized))
    if sheet.skills.trained:
        skills.append("*Trained:* " + ", ".join(sheet.skills.trained))
    if skills:
        lines.extend(["**Skills:** " + " | ".join(skills), ""])

    equipment = sheet.equipment
    if equipment.weapons:
        lines.append("**Weapons:** " + ", ".join(equipment.weapons))
    protection = [item for item in (equipment.armor, equipment.shield) if item]
    if protection:
        lines.append("**Armor:** " + ", ".join(protection))
    if equipment.gear:
        lines.append("**Gear:** " + ", ".join(equipment.gear))
    lines.extend([
        f"**Shins:** {equipment.shins} | **Cyphers:** {sheet.cypher_count()}/{sheet.cypher_limit}",
        "",
        "**Abilities:**",
        f"- Focus: {sheet.focus_ability}",
    ])
    lines.extend(_bullets(sheet.type_abilities))
    return "\n".join(lines) + "\n"


def save_character_sheet(sheet: CharacterSheet, output_dir: Path, compact: bool = False) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{sanitize_filename(sheet.name)}.md"
    text = format_compact(sheet) if compact else format_character_sheet(sheet)
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path


def save_multiple_sheets(sheets: Iterable[CharacterSheet], output_dir: Path, compact: bool = False) -> List[Path]:
    return [save_character_sheet(sheet, output_dir, compact=compact) for sheet in sheets]
