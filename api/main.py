"""
Sengoku Chronicles FastAPI backend.

Dev:        uvicorn api.main:app --host 127.0.0.1 --port 8000 --reload
"""

from __future__ import annotations

import json
import logging
import random
import shutil
import sys
from functools import lru_cache
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# ---------------------------------------------------------------------------
#  Path setup: ensures project root is importable in dev and when frozen
# ---------------------------------------------------------------------------

if getattr(sys, "frozen", False):
    _project_root = Path(sys._MEIPASS)  # type: ignore[attr-defined]
else:
    _project_root = Path(__file__).parent.parent

if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from api.models import (  # noqa: E402
    AdvanceRequest,
    ChoiceRequest,
    CreateCharacterRequest,
    PendingEventResponse,
    RulesConfig,
    SecretPathSummary,
    TravelRequest,
    TurnResponse,
)
from sengoku import combat, secret_society  # noqa: E402
from sengoku.config_loader import ConfigLoader  # noqa: E402
from sengoku.creation import create_character  # noqa: E402
from sengoku.game import (  # noqa: E402
    CharacterDeceasedError,
    EventPendingError,
    GameError,
    InvalidChoiceError,
    LifeSession,
    NoPendingEventError,
    PersistenceError,
    TurnResult,
)
from sengoku.models import Character, GameEventRecord, TimeSnapshot  # noqa: E402
from sengoku.paths import CONFIG_DIR, FALLBACK_CONFIG_DIR, SAVE_DIR  # noqa: E402
from sengoku.repository import (  # noqa: E402
    CharacterNotFoundError,
    CharacterRepository,
    JsonCharacterRepository,
    RepositoryError,
)
from sengoku.travel import MapLocation, TravelError  # noqa: E402

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
#  App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Sengoku Chronicles API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
#  Dependencies
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_config() -> ConfigLoader:
    return ConfigLoader(CONFIG_DIR)


@lru_cache(maxsize=1)
def get_repository() -> CharacterRepository:
    return JsonCharacterRepository(SAVE_DIR)


def get_rng() -> random.Random:
    return random.Random()


def _load_session(
    character_id: str,
    repository: CharacterRepository,
    config: ConfigLoader,
    rng: random.Random,
) -> LifeSession:
    try:
        return LifeSession.load(character_id, repository, rng=rng, rules=config.get_life_rules())
    except CharacterNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


def _http_error(exc: Exception) -> HTTPException:
    """Translate a domain error into the matching HTTP status."""
    if isinstance(exc, CharacterNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (CharacterDeceasedError, NoPendingEventError, EventPendingError)):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (InvalidChoiceError, TravelError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, (PersistenceError, RepositoryError)):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _turn_response(result: TurnResult) -> TurnResponse:
    return TurnResponse(
        character=result.character,
        log=result.log,
        died=result.died,
        death_reason=result.death_reason,
        next_event=result.next_event,
    )


# ---------------------------------------------------------------------------
#  Config helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> dict:
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"Config file not found: {path.name}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, ensure_ascii=False)


# ---------------------------------------------------------------------------
#  Rules config endpoints
# ---------------------------------------------------------------------------


@app.get("/config/rules")
def get_rules() -> dict:
    return _read_json(CONFIG_DIR / "rules.json")


@app.put("/config/rules")
def put_rules(body: RulesConfig) -> dict[str, str]:
    _write_json(CONFIG_DIR / "rules.json", body.model_dump(mode="json", by_alias=True))
    get_config.cache_clear()
    return {"status": "saved"}


@app.post("/config/rules/reset")
def reset_rules() -> dict[str, str]:
    src = FALLBACK_CONFIG_DIR / "rules.json"
    dst = CONFIG_DIR / "rules.json"
    if not src.exists():
        raise HTTPException(status_code=404, detail="Fallback rules config not found")
    shutil.copy2(src, dst)
    get_config.cache_clear()
    return {"status": "reset"}


# ---------------------------------------------------------------------------
#  Character endpoints
# ---------------------------------------------------------------------------


@app.post("/characters", status_code=201)
def post_character(
    body: CreateCharacterRequest,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
) -> Character:
    character = create_character(
        name=body.name,
        clan=body.clan,
        profession=body.profession,
        user_id=body.user_id,
        travel_reason=body.travel_reason,
        rules=config.get_life_rules(),
    )
    try:
        return repository.add_character(character)
    except RepositoryError as exc:
        logger.error("Error creating character %s: %s", character.name, exc)
        raise _http_error(exc)


@app.get("/characters")
def list_characters(
    user_id: str | None = None,
    repository: CharacterRepository = Depends(get_repository),
) -> list[Character]:
    return repository.list_characters(user_id)


@app.get("/characters/{character_id}")
def get_character(
    character_id: str,
    repository: CharacterRepository = Depends(get_repository),
) -> Character:
    try:
        return repository.get_character(character_id)
    except RepositoryError as exc:
        raise _http_error(exc)


@app.get("/characters/{character_id}/time")
def get_character_time(
    character_id: str,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
    rng: random.Random = Depends(get_rng),
) -> TimeSnapshot:
    return _load_session(character_id, repository, config, rng).time


@app.get("/characters/{character_id}/event")
def get_pending_event(
    character_id: str,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
    rng: random.Random = Depends(get_rng),
) -> PendingEventResponse:
    session = _load_session(character_id, repository, config, rng)
    return PendingEventResponse(time=session.time, event=session.pending_event())


@app.post("/characters/{character_id}/choices")
def post_choice(
    character_id: str,
    body: ChoiceRequest,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
    rng: random.Random = Depends(get_rng),
) -> TurnResponse:
    session = _load_session(character_id, repository, config, rng)
    try:
        return _turn_response(session.choose(body.choice_index))
    except GameError as exc:
        raise _http_error(exc)


@app.post("/characters/{character_id}/advance")
def post_advance(
    character_id: str,
    body: AdvanceRequest,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
    rng: random.Random = Depends(get_rng),
) -> TurnResponse:
    session = _load_session(character_id, repository, config, rng)
    try:
        return _turn_response(session.advance_year(body.months))
    except GameError as exc:
        raise _http_error(exc)


@app.get("/characters/{character_id}/history")
def get_history(
    character_id: str,
    repository: CharacterRepository = Depends(get_repository),
) -> list[GameEventRecord]:
    try:
        return repository.list_events(character_id)
    except RepositoryError as exc:
        raise _http_error(exc)


# ---------------------------------------------------------------------------
#  Map endpoints
# ---------------------------------------------------------------------------


@app.get("/map/locations")
def list_locations(config: ConfigLoader = Depends(get_config)) -> list[MapLocation]:
    return config.get_map_locations()


@app.post("/characters/{character_id}/travel")
def post_travel(
    character_id: str,
    body: TravelRequest,
    repository: CharacterRepository = Depends(get_repository),
    config: ConfigLoader = Depends(get_config),
    rng: random.Random = Depends(get_rng),
) -> TurnResponse:
    location = config.get_location(body.location_id)
    if location is None:
        raise HTTPException(status_code=404, detail=f"Unknown location: {body.location_id}")
    session = _load_session(character_id, repository, config, rng)
    try:
        return _turn_response(session.travel(location))
    except (GameError, TravelError) as exc:
        raise _http_error(exc)


# ---------------------------------------------------------------------------
#  Mini-system endpoints
# ---------------------------------------------------------------------------


@app.get("/combat/enemies")
def list_enemies() -> list[combat.Enemy]:
    return list(combat.COMMON_ENEMIES)


@app.post("/combat/{enemy_id}/fight")
def post_fight(enemy_id: str, rng: random.Random = Depends(get_rng)) -> combat.CombatResult:
    enemy = combat.get_enemy(enemy_id)
    if enemy is None:
        raise HTTPException(status_code=404, detail=f"Unknown enemy: {enemy_id}")
    return combat.fight(enemy, rng)


@app.get("/secrets")
def list_secrets() -> list[SecretPathSummary]:
    return [
        SecretPathSummary(
            id=path.id,
            name=path.name,
            type=path.type.value,
            description=path.description,
            accessible=secret_society.can_access(path),
        )
        for path in secret_society.SECRET_PATHS
    ]


# ---------------------------------------------------------------------------
#  Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
