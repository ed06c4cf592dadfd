from __future__ import annotations

from assassin.api.models import LeaderboardEntry, PlayerState


def leaderboard(players: list[PlayerState]) -> list[LeaderboardEntry]:
    # sorted() is stable, so ties keep roster order.
    ranked = sorted(players, key=lambda p: p.kills, reverse=True)
    return [LeaderboardEntry(name=p.name, kills=p.kills, alive=p.alive) for p in ranked]


def format_leaderboard(players: list[PlayerState]) -> list[str]:
    return [f"{e.name}: {e.kills} kills" for e in leaderboard(players)]
