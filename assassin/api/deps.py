from __future__ import annotations

from collections.abc import Generator

import redis
from fastapi import Depends

from assassin.config import Settings, load_settings
from assassin.game_store import PlayerStore, make_store
from assassin.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    # Lazy: redis-py does not connect until the first command.
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_settings() -> Settings:
    return load_settings()


def get_store(
    settings: Settings = Depends(get_settings),
    r: redis.Redis = Depends(get_redis),
) -> PlayerStore:
    return make_store(settings, r=r)
