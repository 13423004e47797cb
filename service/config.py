from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the character generator."""

    model_config = SettingsConfigDict(env_prefix="CHARGEN_")

    repo_root: Path = Path(__file__).resolve().parent.parent
    tables_dir: str = "character_creation/tables"
    schemas_dir: str = "schemas"
    output_dir: str = "output/sheets"
    characters_dir: str = "data/characters"

    # Random generation
    random_seed: Optional[int] = None
    species_chance: float = 0.2
    max_artifacts: int = 2
    max_oddities: int = 2

    @property
    def tables_path(self) -> Path:
        return self.repo_root / self.tables_dir

    @property
    def schemas_path(self) -> Path:
        return self.repo_root / self.schemas_dir

    @property
    def output_path(self) -> Path:
        return self.repo_root / self.output_dir

    @property
    def characters_path(self) -> Path:
        return self.repo_root / self.characters_dir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
