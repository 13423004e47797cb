import json
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import jsonschema
from pydantic import ValidationError

from character_creation.sheet import CharacterSheet
from output.markdown import format_character_sheet, sanitize_filename

from .config import Settings

_FILENAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+(\.json)?$")


def validate_data(data: Dict, schema_name: str, settings: Settings) -> List[str]:
    """Validate data against JSON schema. Return list of error messages."""
    schema_path = settings.schemas_path / f"{schema_name}.schema.json"
    if not schema_path.exists():
        return []
    with schema_path.open(encoding="utf-8") as f:
        schema = json.load(f)
    validator = jsonschema.Draft7Validator(schema)
    return [error.message for error in validator.iter_errors(data)]


def character_filename(sheet: CharacterSheet, when: Optional[datetime] = None) -> str:
    stamp = (when or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    return f"{sanitize_filename(sheet.name)}_{stamp}.json"


def _resolve(settings: Settings, filename: str) -> Path:
    if not _FILENAME_PATTERN.match(filename):
        raise ValueError("Invalid character filename. Use letters, numbers, hyphens, or underscores.")
    if not filename.endswith(".json"):
        filename = f"{filename}.json"
    return settings.characters_path / filename


def _create_unique(directory: Path, filename: str, text: str) -> Path:
    stem = filename[: -len(".json")]
    path = directory / filename
    counter = 1
    while True:
        try:
            with path.open("x", encoding="utf-8") as f:
                f.write(text)
            return path
        except FileExistsError:
            counter += 1
            path = directory / f"{stem}_{counter}.json"


def save_character(settings: Settings, sheet: CharacterSheet, filename: Optional[str] = None) -> Path:
    """Write the sheet as JSON.

    An explicit ``filename`` is overwritten; generated names never replace an
    existing file and get a ``_2``, ``_3``... suffix instead.
    """
    payload = sheet.model_dump(mode="json")
    errors = validate_data(payload, "character", settings)
    if errors:
        raise ValueError(f"Character validation failed: {'; '.join(errors)}")

    text = json.dumps(payload, indent=2)
    settings.characters_path.mkdir(parents=True, exist_ok=True)
    if not filename:
        return _create_unique(settings.characters_path, character_filename(sheet), text)
    path = _resolve(settings, filename)
    path.write_text(text, encoding="utf-8")
    return path


def list_characters(settings: Settings) -> List[Dict]:
    if not settings.characters_path.exists():
        return []
    characters = []
    for p in sorted(settings.characters_path.glob("*.json")):
        try:
            data = json.loads(p.read_text(encoding="utf-8-sig"))
        except json.JSONDecodeError:
            continue
        characters.append({
            "filename": p.name,
            "name": data.get("name", p.stem),
            "character_type": data.get("character_type", ""),
            "tier": data.get("tier", 1),
            "updated_at": p.stat().st_mtime,
        })
    return characters


def load_character(settings: Settings, filename: str) -> CharacterSheet:
    path = _resolve(settings, filename)
    if not path.exists():
        raise FileNotFoundError(f"Character '{filename}' not found")
    content = path.read_text(encoding="utf-8-sig")
    try:
        return CharacterSheet.model_validate_json(content)
    except ValidationError as exc:
        raise ValueError(f"Invalid character data for '{filename}': {exc}") from exc


def export_markdown(settings: Settings, sheet: CharacterSheet) -> Path:
    settings.output_path.mkdir(parents=True, exist_ok=True)
    path = settings.output_path / f"{sanitize_filename(sheet.name)}.md"
    path.write_text(format_character_sheet(sheet), encoding="utf-8")
    return path
