from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager

import redis

from assassin.errors import GameBusyError, StoreError

logger = logging.getLogger(__name__)


def lock_key(game_name: str) -> str:
    return f"assassin:lock:game:{game_name}"


@contextmanager
def game_lock(*, r: redis.Redis, game_name: str, ttl_ms: int = 5_000):
    """Per-game mutual exclusion around a load -> mutate -> save cycle.

    Raises GameBusyError instead of waiting if another holder has the lock, and
    StoreError if Redis cannot be reached. Expects a client created with
    decode_responses=True.
    """

    key = lock_key(game_name)
    token = uuid.uuid4().hex
    try:
        acquired = r.set(key, token, nx=True, px=ttl_ms)
    except redis.RedisError as e:
        raise StoreError(f"Error locking the game: {e}") from e
    if not acquired:
        raise GameBusyError()
    try:
        yield
    finally:
        try:
            # Leave the key alone if it expired and someone else now holds it.
            if r.get(key) == token:
                r.delete(key)
        except redis.RedisError:
            # The key still expires after ttl_ms.
            logger.warning("could not release lock for game %s", game_name, exc_info=True)
