from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

StoreBackend = Literal["redis", "file"]


@dataclass(frozen=True, slots=True)
class Settings:
    store: StoreBackend = "redis"
    games_dir: Path = Path("Games")
    roster_csv: Path = Path("Players/players.csv")
    min_players: int = 2
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Read settings from the environment (see .env for local overrides)."""

    store = os.environ.get("ASSASSIN_STORE", "redis").strip().lower()
    if store not in ("redis", "file"):
        raise ValueError(f"ASSASSIN_STORE must be 'redis' or 'file', got {store!r}")

    min_players = int(os.environ.get("ASSASSIN_MIN_PLAYERS", "2"))
    if min_players < 1:
        raise ValueError("ASSASSIN_MIN_PLAYERS must be at least 1")

    return Settings(
        store=store,  # type: ignore[arg-type]
        games_dir=Path(os.environ.get("ASSASSIN_GAMES_DIR", "Games")),
        roster_csv=Path(os.environ.get("ASSASSIN_ROSTER_CSV", "Players/players.csv")),
        min_players=min_players,
        log_level=os.environ.get("ASSASSIN_LOG_LEVEL", "WARNING").upper(),
    )
