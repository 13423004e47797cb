import json
import random
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse

from character_creation.builder import AssemblyError, NotFound, Selection, assemble_with_report
from character_creation.catalog import CatalogError, GameData, get_game_data
from character_creation.randomizer import generate_random
from character_creation.stats import Pools
from character_creation.validators import validate_type_abilities
from dice.levels import instantiate_artifact, instantiate_cypher
from output.markdown import format_character_sheet

from . import storage
from .config import Settings, get_settings
from .models import (
    CatalogEntry,
    CharacterRequest,
    CharacterResponse,
    CharacterSummary,
    RandomCharacterRequest,
    RejectedCypher,
)

app = FastAPI(
    title="Numenera Character Generator",
    description="Assemble, randomize and store tier-1 Numenera character sheets",
)

CATALOG_KINDS = ("types", "descriptors", "species", "foci", "cyphers", "artifacts", "oddities")


def get_settings_dep() -> Settings:
    return get_settings()


def get_catalog_dep(settings: Settings = Depends(get_settings_dep)) -> GameData:
    try:
        return get_game_data(settings.tables_path, settings.schemas_path)
    except CatalogError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def _assembly_error(exc: AssemblyError) -> HTTPException:
    status_code = 404 if isinstance(exc, NotFound) else 422
    return HTTPException(status_code=status_code, detail=str(exc))


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/schemas/{schema_name}")
def get_schema(schema_name: str, settings: Settings = Depends(get_settings_dep)) -> dict:
    schema_path = settings.schemas_path / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise HTTPException(status_code=404, detail="Schema not found")
    with schema_path.open(encoding="utf-8") as f:
        return json.load(f)


@app.get("/catalog/summary", response_class=PlainTextResponse)
def catalog_summary(catalog: GameData = Depends(get_catalog_dep)) -> str:
    return catalog.summary()


@app.get("/catalog/{kind}")
def catalog_listing(
    kind: str,
    type: Optional[str] = Query(None, description="Only foci suitable for this character type"),
    catalog: GameData = Depends(get_catalog_dep),
) -> List[CatalogEntry]:
    if kind not in CATALOG_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown catalog '{kind}'")
    if kind == "types":
        return [
            CatalogEntry(
                name=t.name,
                tagline=t.tagline,
                detail=(
                    f"Might {t.stat_pools.might}, Speed {t.stat_pools.speed}, "
                    f"Intellect {t.stat_pools.intellect}, bonus {t.stat_pools.bonus_points}"
                ),
            )
            for t in catalog.types
        ]
    if kind == "descriptors":
        return [CatalogEntry(name=d.name, tagline=d.tagline) for d in catalog.descriptors]
    if kind == "species":
        return [CatalogEntry(name=s.name, tagline=s.tagline, detail=s.stat_modifiers.notes or None) for s in catalog.species]
    if kind == "foci":
        foci = catalog.suitable_foci(type) if type else catalog.foci
        return [CatalogEntry(name=f.name, tagline=f.theme, detail=f.tier_1_ability.describe()) for f in foci]
    if kind == "cyphers":
        return [CatalogEntry(name=c.name, tagline=c.category, detail=c.effect) for c in catalog.cyphers]
    if kind == "artifacts":
        return [CatalogEntry(name=a.name, tagline=a.form_type, detail=a.effect) for a in catalog.artifacts]
    return [CatalogEntry(name=o.name, detail=o.description) for o in catalog.oddities]


def _selection_from_request(request: CharacterRequest, catalog: GameData) -> Selection:
    abilities = list(request.abilities)
    # unknown types are left for assembly to report as 404
    if catalog.find_type(request.type) is not None:
        try:
            abilities = validate_type_abilities(catalog, request.type, abilities)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

    cyphers = []
    for name in request.cyphers:
        template = catalog.find_cypher(name)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Cypher not found: {name}")
        cyphers.append(instantiate_cypher(template))
    artifacts = []
    for name in request.artifacts:
        template = catalog.find_artifact(name)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Artifact not found: {name}")
        artifacts.append(instantiate_artifact(template))
    oddities = []
    for name in request.oddities:
        oddity = catalog.find_oddity(name)
        if oddity is None:
            raise HTTPException(status_code=404, detail=f"Oddity not found: {name}")
        oddities.append(oddity)

    return Selection(
        name=request.name,
        archetype=request.type,
        focus=request.focus,
        descriptor=request.descriptor,
        species=request.species,
        gender=request.gender,
        bonus=Pools(**request.bonus.model_dump()),
        type_abilities=abilities,
        connection=request.connection,
        cyphers=cyphers,
        artifacts=artifacts,
        oddities=oddities,
    )


@app.post("/characters", status_code=201, response_model_by_alias=False)
def create_character(
    request: CharacterRequest,
    settings: Settings = Depends(get_settings_dep),
    catalog: GameData = Depends(get_catalog_dep),
) -> CharacterResponse:
    selection = _selection_from_request(request, catalog)
    try:
        result = assemble_with_report(selection, catalog)
    except AssemblyError as exc:
        raise _assembly_error(exc)

    filename = storage.save_character(settings, result.sheet).name if request.save else None
    return CharacterResponse(
        sheet=result.sheet,
        filename=filename,
        rejected_cyphers=[RejectedCypher(name=o.item.name, reason=o.reason) for o in result.rejected],
    )


@app.post("/characters/random", status_code=201, response_model_by_alias=False)
def create_random_characters(
    request: RandomCharacterRequest,
    settings: Settings = Depends(get_settings_dep),
    catalog: GameData = Depends(get_catalog_dep),
) -> List[CharacterResponse]:
    seed = request.seed if request.seed is not None else settings.random_seed
    rng = random.Random(seed)
    responses = []
    for _ in range(request.count):
        try:
            sheet = generate_random(
                catalog,
                rng,
                type_name=request.type,
                descriptor_or_species=request.descriptor_or_species,
                species_chance=settings.species_chance,
                max_artifacts=settings.max_artifacts,
                max_oddities=settings.max_oddities,
            )
        except AssemblyError as exc:
            raise _assembly_error(exc)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        filename = storage.save_character(settings, sheet).name if request.save else None
        responses.append(CharacterResponse(sheet=sheet, filename=filename))
    return responses


@app.get("/characters")
def list_characters(settings: Settings = Depends(get_settings_dep)) -> List[CharacterSummary]:
    return [CharacterSummary(**c) for c in storage.list_characters(settings)]


def _load_or_raise(settings: Settings, filename: str):
    try:
        return storage.load_character(settings, filename)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.get("/characters/{filename}")
def get_character(filename: str, settings: Settings = Depends(get_settings_dep)) -> dict:
    return _load_or_raise(settings, filename).model_dump(mode="json")


@app.get("/characters/{filename}/markdown", response_class=PlainTextResponse)
def get_character_markdown(filename: str, settings: Settings = Depends(get_settings_dep)) -> str:
    return format_character_sheet(_load_or_raise(settings, filename))
