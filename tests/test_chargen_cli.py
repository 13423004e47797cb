import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from character_creation.catalog import load_game_data
from tools import chargen


def test_list_types(repo_root, capsys):
    assert chargen.main(["list", "types"]) == 0
    out = capsys.readouterr().out
    assert "=== CHARACTER TYPES ===" in out
    assert "Glaive - " in out
    assert "=== FOCI ===" not in out


def test_list_all(repo_root, capsys):
    assert chargen.main(["list", "all"]) == 0
    out = capsys.readouterr().out
    for heading in ("TYPES", "DESCRIPTORS", "FOCI", "SPECIES"):
        assert heading in out


def test_validate(repo_root, capsys):
    assert chargen.main(["validate"]) == 0
    out = capsys.readouterr().out
    assert "[INFO] All data files loaded successfully" in out
    assert "[INFO] All validation checks passed" in out


def test_info(repo_root, capsys):
    assert chargen.main(["info"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(f"Numenera Character Generator v{chargen.VERSION}")
    assert "Loaded Game Data:" in out


def test_random_writes_sheets(repo_root, tmp_path, capsys):
    out_dir = tmp_path / "out"
    assert chargen.main(["-o", str(out_dir), "random", "-t", "Nano", "-c", "2", "--seed", "5"]) == 0
    out = capsys.readouterr().out
    assert "[INFO] Generating 2 random character(s)" in out
    assert out.count(" Nano who ") == 2
    assert list(out_dir.glob("*.md"))


def test_random_compact_uses_settings_output(repo_root, capsys):
    assert chargen.main(["random", "--compact", "--seed", "1", "-d", "Swift"]) == 0
    sheets = list((repo_root / "sheets").glob("*.md"))
    assert len(sheets) == 1
    assert "(Tier 1)" in sheets[0].read_text(encoding="utf-8")


def test_random_unknown_type(repo_root, capsys):
    assert chargen.main(["random", "-t", "Wizard"]) == 1
    assert "[ERROR] Character type not found: Wizard" in capsys.readouterr().err


def test_broken_tables(repo_root, tmp_path, monkeypatch, capsys):
    from service.config import get_settings

    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.setenv("CHARGEN_TABLES_DIR", str(empty))
    get_settings.cache_clear()

    assert chargen.main(["validate"]) == 1
    assert "[ERROR] Failed to load data files" in capsys.readouterr().err


def test_interactive_mode(settings, tmp_path):
    answers = iter(["Aric", "1", "1", "2", "2", "1", "1", "2"])
    code = chargen.interactive_mode(load_game_data(), settings, tmp_path / "md", input_fn=lambda _: next(answers))
    assert code == 0

    assert (tmp_path / "md" / "Aric.md").exists()
    saved = list(settings.characters_path.glob("Aric_*.json"))
    assert len(saved) == 1
    data = json.loads(saved[0].read_text(encoding="utf-8"))
    assert data["character_type"] == "Glaive"
    assert data["descriptor"] == "Charming"
    assert data["focus"] == "Masters Weaponry"
    assert data["type_abilities"] == ["Bash", "Fleet of Foot"]
