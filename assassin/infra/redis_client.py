from __future__ import annotations

import os

import redis


def get_redis_url() -> str:
    return os.environ.get("REDIS_URL", "redis://localhost:6379/0")


def get_redis_timeout() -> float:
    # Seconds, applied to both connect and reads.
    return float(os.environ.get("ASSASSIN_REDIS_TIMEOUT", "2.0"))


def create_redis(url: str | None = None) -> redis.Redis:
    """Client for the game store and locks.

    decode_responses=True => strings in/out; game_lock compares its token as str.
    """

    timeout = get_redis_timeout()
    return redis.Redis.from_url(
        url or get_redis_url(),
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )
