from __future__ import annotations

import random
from collections.abc import Sequence

from assassin.api.models import PlayerState


def build_roster(*, names: Sequence[str], rng: random.Random) -> list[PlayerState]:
    """Create fresh player records and wire them into one randomized target ring.

    The returned list is in the shuffled order the ring was built in.
    """

    if not names:
        raise ValueError("At least one player is required")

    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate player name: {name}")
        seen.add(name)

    players = [PlayerState(name=name) for name in names]
    return assign_targets(players=players, rng=rng)


def assign_targets(*, players: list[PlayerState], rng: random.Random) -> list[PlayerState]:
    """Shuffle `players` in place and point each one at the next in shuffled order.

    `random.Random.shuffle` is a Fisher-Yates shuffle, so every permutation is
    equally likely. Following the successor in a single permutation always
    yields one cycle over everyone (never disjoint sub-cycles).

    A lone player has nobody to hunt, so their target stays None rather than
    pointing at themselves.
    """

    rng.shuffle(players)

    n = len(players)
    if n == 1:
        players[0].target = None
        return players

    for i, p in enumerate(players):
        p.target = players[(i + 1) % n].name
    return players
