#!/usr/bin/env python
"""Numenera character generator command line."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from character_creation.builder import AssemblyError, assemble_with_report
from character_creation.catalog import CatalogError, GameData, load_game_data
from character_creation.randomizer import generate_random
from character_creation.validators import validate_game_data
from output.markdown import save_character_sheet, save_multiple_sheets
from service import storage
from service.config import Settings, get_settings
from tools.prompts import InteractiveFlow

VERSION = "0.1.0"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chargen", description="Numenera character generator")
    parser.add_argument("-o", "--output", default=None, help="Directory for Markdown sheets")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log library activity")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("interactive", help="Step-by-step character creation")

    random_parser = subparsers.add_parser("random", help="Generate random characters")
    random_parser.add_argument("-t", "--type", dest="type_name", help="Character type")
    random_parser.add_argument("-d", "--descriptor", help="Descriptor or species")
    random_parser.add_argument("-c", "--count", type=int, default=1, help="Number of characters")
    random_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    random_parser.add_argument("--compact", action="store_true", help="Write the one-page format")

    list_parser = subparsers.add_parser("list", help="List game data")
    list_parser.add_argument("category", choices=["types", "descriptors", "foci", "species", "all"])

    subparsers.add_parser("validate", help="Validate data files")
    subparsers.add_parser("info", help="Show generator information")
    return parser.parse_args(argv)


def _output_dir(args: argparse.Namespace, settings: Settings) -> Path:
    return Path(args.output) if args.output else settings.output_path


def interactive_mode(catalog: GameData, settings: Settings, output_dir: Path, input_fn=input) -> int:
    print("NUMENERA CHARACTER GENERATOR")
    selection = InteractiveFlow(catalog, input_fn=input_fn).run()
    try:
        result = assemble_with_report(selection, catalog)
    except AssemblyError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    sheet = result.sheet
    print()
    print(sheet.summary())
    json_path = storage.save_character(settings, sheet)
    md_path = save_character_sheet(sheet, output_dir)
    print(f"[INFO] Saved {json_path}")
    print(f"[INFO] Character sheet written to {md_path}")
    return 0


def random_mode(catalog: GameData, settings: Settings, output_dir: Path, args: argparse.Namespace) -> int:
    seed = args.seed if args.seed is not None else settings.random_seed
    rng = random.Random(seed)
    print(f"[INFO] Generating {args.count} random character(s)")
    sheets = []
    for _ in range(args.count):
        try:
            sheet = generate_random(
                catalog,
                rng,
                type_name=args.type_name,
                descriptor_or_species=args.descriptor,
                species_chance=settings.species_chance,
                max_artifacts=settings.max_artifacts,
                max_oddities=settings.max_oddities,
            )
        except (AssemblyError, ValueError) as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 1
        print(f"{sheet.name}: {sheet.character_sentence()}")
        sheets.append(sheet)
    for path in save_multiple_sheets(sheets, output_dir, compact=args.compact):
        print(f"[INFO] Saved {path}")
    return 0


def list_mode(catalog: GameData, category: str) -> int:
    if category in ("types", "all"):
        print("=== CHARACTER TYPES ===")
        for t in catalog.types:
            print(f"{t.name} - {t.tagline}")
            print(
                f"  Pools: Might {t.stat_pools.might}, Speed {t.stat_pools.speed}, "
                f"Intellect {t.stat_pools.intellect} (+{t.stat_pools.bonus_points} bonus)"
            )
        print()
    if category in ("descriptors", "all"):
        print("=== DESCRIPTORS ===")
        for d in catalog.descriptors:
            print(f"{d.name} - {d.tagline}")
        print()
    if category in ("foci", "all"):
        print("=== FOCI ===")
        for f in catalog.foci:
            print(f"{f.name} - {f.theme}")
            print(f"  Suitable for: {', '.join(f.suitable_types)}")
        print()
    if category in ("species", "all"):
        print("=== SPECIES ===")
        for s in catalog.species:
            print(f"{s.name} - {s.tagline}")
            if s.description and s.description.appearance:
                print(f"  {s.description.appearance}")
        print()
    return 0


def validate_mode(catalog: GameData) -> int:
    print("[INFO] All data files loaded successfully")
    print(catalog.summary())
    report = validate_game_data(catalog)
    for line in report.lines():
        print(line, file=sys.stderr if line.startswith("[ERROR]") else sys.stdout)
    if not report.ok:
        print(f"[ERROR] Validation failed with {len(report.errors)} error(s)", file=sys.stderr)
        return 1
    print(f"[INFO] All validation checks passed ({len(report.warnings)} warning(s))")
    return 0


def info_mode(catalog: GameData) -> int:
    print(f"Numenera Character Generator v{VERSION}")
    print()
    print(catalog.summary())
    print()
    print("Usage:")
    print("  chargen interactive         # Step-by-step creation")
    print("  chargen random              # Generate random character")
    print("  chargen random -t Glaive    # Random Glaive")
    print("  chargen random -c 5         # Generate 5 characters")
    print("  chargen list types          # List all types")
    print("  chargen validate            # Validate data files")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    settings = get_settings()

    try:
        catalog = load_game_data(settings.tables_path, settings.schemas_path)
    except CatalogError as exc:
        print(f"[ERROR] Failed to load data files: {exc}", file=sys.stderr)
        return 1

    output_dir = _output_dir(args, settings)
    if args.command == "interactive":
        try:
            return interactive_mode(catalog, settings, output_dir)
        except (EOFError, KeyboardInterrupt):
            print("\n[WARN] Character creation cancelled", file=sys.stderr)
            return 1
    if args.command == "random":
        return random_mode(catalog, settings, output_dir, args)
    if args.command == "list":
        return list_mode(catalog, args.category)
    if args.command == "validate":
        return validate_mode(catalog)
    return info_mode(catalog)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
