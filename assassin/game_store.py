from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from contextlib import AbstractContextManager, nullcontext
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

import redis
from pydantic import ValidationError

from assassin.api.models import GamePhase, GameState
from assassin.config import Settings
from assassin.core.ring import build_roster
from assassin.errors import GameExistsError, GameNotFoundError, StoreError
from assassin.infra.redis_client import create_redis
from assassin.lock import game_lock

logger = logging.getLogger(__name__)

GAMES_SET_KEY = "assassin:games"
GAME_KEY_PREFIX = "assassin:game:"  # + {game_name}


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _game_key(game_name: str) -> str:
    return f"{GAME_KEY_PREFIX}{game_name}"


class PlayerStore(Protocol):
    """Persists one full GameState snapshot per game name."""

    def load(self, game_name: str) -> GameState: ...

    def save(self, state: GameState) -> None: ...

    def exists(self, game_name: str) -> bool: ...

    def list_games(self) -> list[str]: ...

    def lock(self, game_name: str) -> AbstractContextManager[None]: ...


class RedisPlayerStore:
    def __init__(self, r: redis.Redis):
        self.r = r

    def load(self, game_name: str) -> GameState:
        try:
            raw = self.r.get(_game_key(game_name))
        except redis.RedisError as e:
            raise StoreError(f"Error loading the game: {e}") from e
        if not raw:
            raise GameNotFoundError(game_name)
        try:
            return GameState.model_validate_json(raw)
        except ValidationError as e:
            raise StoreError(f"Error loading the game: {game_name} is corrupt") from e

    def save(self, state: GameState) -> None:
        state.last_updated_at = _now()
        try:
            pipe = self.r.pipeline()
            pipe.set(_game_key(state.game_name), state.model_dump_json())
            pipe.sadd(GAMES_SET_KEY, state.game_name)
            pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f"Error saving the game: {e}") from e
        logger.debug("saved game %s to redis", state.game_name)

    def exists(self, game_name: str) -> bool:
        try:
            return bool(self.r.exists(_game_key(game_name)))
        except redis.RedisError as e:
            raise StoreError(f"Error reaching the game store: {e}") from e

    def list_games(self) -> list[str]:
        try:
            return sorted(self.r.smembers(GAMES_SET_KEY))
        except redis.RedisError as e:
            raise StoreError(f"Error listing games: {e}") from e

    def lock(self, game_name: str) -> AbstractContextManager[None]:
        return game_lock(r=self.r, game_name=game_name)


class JsonFilePlayerStore:
    """One pretty-printed JSON file per game: `<games_dir>/<game_name>.json`."""

    def __init__(self, games_dir: Path):
        self.games_dir = games_dir

    def _path(self, game_name: str) -> Path:
        if not game_name or any(c in game_name for c in "/\\\x00") or game_name in {".", ".."}:
            raise StoreError(f"Invalid game name: {game_name!r}")
        return self.games_dir / f"{game_name}.json"

    def load(self, game_name: str) -> GameState:
        path = self._path(game_name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise GameNotFoundError(game_name) from e
        except OSError as e:
            raise StoreError(f"Error loading the game: {e}") from e
        try:
            return GameState.model_validate_json(raw)
        except ValidationError as e:
            raise StoreError(f"Error loading the game: {path} is corrupt") from e

    def save(self, state: GameState) -> None:
        path = self._path(state.game_name)
        state.last_updated_at = _now()
        try:
            self.games_dir.mkdir(parents=True, exist_ok=True)
            # Write-then-rename so a crash never leaves a half-written game.
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(state.model_dump_json(indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StoreError(f"Error saving the game: {e}") from e
        logger.debug("saved game %s to %s", state.game_name, path)

    def exists(self, game_name: str) -> bool:
        return self._path(game_name).exists()

    def list_games(self) -> list[str]:
        if not self.games_dir.exists():
            return []
        return sorted(p.stem for p in self.games_dir.glob("*.json"))

    def lock(self, game_name: str) -> AbstractContextManager[None]:
        # Single-process access only.
        return nullcontext()


def validate_roster_names(*, names: Sequence[str], min_players: int = 2) -> None:
    if len(names) < min_players:
        raise ValueError(f"At least {min_players} players required")
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate player names: {', '.join(duplicates)}")


def create_game(
    *,
    store: PlayerStore,
    game_name: str,
    names: Sequence[str],
    min_players: int = 2,
    seed: int | None = None,
) -> GameState:
    """Build the target ring for a new roster and persist it."""

    game_name = game_name.strip()
    if not game_name:
        raise ValueError("Game name is required")

    validate_roster_names(names=names, min_players=min_players)

    if seed is None:
        seed = random.SystemRandom().randint(1, 2**31 - 1)
    rng = random.Random(seed)

    with store.lock(game_name):
        if store.exists(game_name):
            raise GameExistsError(game_name)

        now = _now()
        state = GameState(
            game_name=game_name,
            created_at=now,
            last_updated_at=now,
            seed=seed,
            players=build_roster(names=names, rng=rng),
            phase=GamePhase.active,
        )
        store.save(state)

    logger.info("created game %s with %d players", game_name, len(state.players))
    return state


def make_store(settings: Settings, *, r: redis.Redis | None = None) -> PlayerStore:
    """Pick the store backend named by `settings.store`.

    A Redis client is only created (or used) for the redis backend.
    """

    logger.debug("using %s player store", settings.store)
    if settings.store == "file":
        return JsonFilePlayerStore(settings.games_dir)
    return RedisPlayerStore(r if r is not None else create_redis())
