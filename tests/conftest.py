from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

import fakeredis
import pytest
from fastapi.testclient import TestClient

from assassin.api.models import GamePhase, GameState, PlayerState
from assassin.game_store import RedisPlayerStore


def make_state(
    links: dict[str, str | None],
    *,
    game_name: str = "office",
    phase: GamePhase = GamePhase.active,
) -> GameState:
    """Build an all-alive GameState from a name -> target mapping (in roster order)."""

    now = datetime(2025, 1, 1, tzinfo=UTC)
    return GameState(
        game_name=game_name,
        created_at=now,
        last_updated_at=now,
        seed=123,
        players=[PlayerState(name=name, target=target) for name, target in links.items()],
        phase=phase,
    )


def player(state: GameState, name: str) -> PlayerState:
    return next(p for p in state.players if p.name == name)


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def down_redis() -> fakeredis.FakeRedis:
    """A client whose server is unreachable: every command raises redis.ConnectionError."""

    server = fakeredis.FakeServer()
    server.connected = False
    return fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture()
def redis_store(redis_client: fakeredis.FakeRedis) -> RedisPlayerStore:
    return RedisPlayerStore(redis_client)


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to fakeredis."""

    from assassin.api.deps import get_redis
    from assassin.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
