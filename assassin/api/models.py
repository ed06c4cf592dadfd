from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class PlayerState(BaseModel):
    name: str
    alive: bool = True
    kills: int = Field(default=0, ge=0)

    # Append-only, in elimination order.
    victims: list[str] = Field(default_factory=list)

    # Who eliminated this player; None while alive.
    assassin: str | None = None

    # Who this player must eliminate next. None means "no active target"
    # (eliminated players, or the sole player of a one-player roster).
    target: str | None = None


class GamePhase(StrEnum):
    active = "active"
    completed = "completed"


class GameState(BaseModel):
    game_name: str
    created_at: datetime
    last_updated_at: datetime

    # Seed used to shuffle the target ring, for reproducibility/debugging.
    seed: int

    # Roster order (the shuffled order the ring was built in).
    players: list[PlayerState]

    phase: GamePhase = GamePhase.active

    # When completed by a final elimination.
    winner: str | None = None


class GameCreateRequest(BaseModel):
    game_name: str = Field(..., min_length=1, max_length=200)

    # Either explicit names or a comma-separated roster (as in players.csv).
    names: list[str] | None = None
    roster_csv: str | None = None


class RecordKillRequest(BaseModel):
    assassin: str
    victim: str


class KillResponse(BaseModel):
    state: GameState
    message: str
    new_target: str | None
    game_over: bool


class ChainResponse(BaseModel):
    chain: list[str]
    text: str
    game_over: bool


class LeaderboardEntry(BaseModel):
    name: str
    kills: int
    alive: bool


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry]


class GameListResponse(BaseModel):
    games: list[str]
