from __future__ import annotations

from assassin.api.models import PlayerState

NO_ALIVE_PLAYERS = "No alive players to display."


def live_chain(players: list[PlayerState]) -> list[str]:
    """Walk the target ring from the first alive player back to itself.

    Returns names in hunting order, with the start repeated at the end when the
    loop closes. A lone survivor (target None or themselves) yields just their
    name. An empty list means nobody is alive.

    The walk stops early on a target that is missing or eliminated, and never
    revisits a player, so a corrupt roster renders as an open chain rather than
    looping forever.
    """

    alive = {p.name: p for p in players if p.alive}
    start = next((p for p in players if p.alive), None)
    if start is None:
        return []

    if start.target is None or start.target == start.name:
        return [start.name]

    chain = [start.name]
    seen = {start.name}
    current = start
    while True:
        nxt = alive.get(current.target) if current.target is not None else None
        if nxt is None:
            return chain
        if nxt.name == start.name:
            chain.append(start.name)
            return chain
        if nxt.name in seen:
            return chain
        chain.append(nxt.name)
        seen.add(nxt.name)
        current = nxt


def render_chain(players: list[PlayerState]) -> str:
    chain = live_chain(players)
    if not chain:
        return NO_ALIVE_PLAYERS
    return " -> ".join(chain)
