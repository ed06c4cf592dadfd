from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from assassin.actions import dispatch_kill, end_game
from assassin.api.deps import get_settings, get_store
from assassin.api.models import (
    ChainResponse,
    GameCreateRequest,
    GameListResponse,
    GamePhase,
    GameState,
    KillResponse,
    LeaderboardResponse,
    RecordKillRequest,
)
from assassin.config import Settings
from assassin.core.chain import live_chain, render_chain
from assassin.core.leaderboard import leaderboard
from assassin.errors import (
    GameBusyError,
    GameCompletedError,
    GameExistsError,
    GameNotFoundError,
    KillRejected,
    StoreError,
)
from assassin.game_store import PlayerStore, create_game
from assassin.roster_import import import_roster

router = APIRouter()


def _store_unavailable(e: StoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def _load_or_404(store: PlayerStore, game_name: str) -> GameState:
    try:
        return store.load(game_name)
    except GameNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise _store_unavailable(e) from e


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameState, status_code=status.HTTP_201_CREATED)
def create_game_route(
    payload: GameCreateRequest,
    store: PlayerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> GameState:
    names = [n.strip() for n in payload.names or [] if n.strip()]
    if payload.roster_csv:
        names.extend(import_roster(payload.roster_csv))

    try:
        return create_game(
            store=store,
            game_name=payload.game_name,
            names=names,
            min_players=settings.min_players,
        )
    except (GameExistsError, GameBusyError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    except StoreError as e:
        raise _store_unavailable(e) from e


@router.get("/game", response_model=GameListResponse)
def list_games_route(store: PlayerStore = Depends(get_store)) -> GameListResponse:
    try:
        return GameListResponse(games=store.list_games())
    except StoreError as e:
        raise _store_unavailable(e) from e


@router.get("/game/{game_name}", response_model=GameState)
def get_game_route(game_name: str, store: PlayerStore = Depends(get_store)) -> GameState:
    return _load_or_404(store, game_name)


@router.post("/game/{game_name}/kill", response_model=KillResponse)
def record_kill_route(
    game_name: str,
    payload: RecordKillRequest,
    store: PlayerStore = Depends(get_store),
) -> KillResponse:
    try:
        result = dispatch_kill(
            store=store,
            game_name=game_name,
            assassin_name=payload.assassin,
            victim_name=payload.victim,
        )
    except GameNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except KillRejected as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"reason": e.reason.value, "message": e.message},
        ) from e
    except (GameCompletedError, GameBusyError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StoreError as e:
        raise _store_unavailable(e) from e

    return KillResponse(
        state=result.state,
        message=result.message,
        new_target=result.new_target,
        game_over=result.game_over,
    )


@router.post("/game/{game_name}/end", response_model=GameState)
def end_game_route(game_name: str, store: PlayerStore = Depends(get_store)) -> GameState:
    try:
        return end_game(store=store, game_name=game_name)
    except GameNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (GameCompletedError, GameBusyError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StoreError as e:
        raise _store_unavailable(e) from e


@router.get("/game/{game_name}/chain", response_model=ChainResponse)
def chain_route(game_name: str, store: PlayerStore = Depends(get_store)) -> ChainResponse:
    state = _load_or_404(store, game_name)
    return ChainResponse(
        chain=live_chain(state.players),
        text=render_chain(state.players),
        game_over=state.phase == GamePhase.completed,
    )


@router.get("/game/{game_name}/leaderboard", response_model=LeaderboardResponse)
def leaderboard_route(game_name: str, store: PlayerStore = Depends(get_store)) -> LeaderboardResponse:
    state = _load_or_404(store, game_name)
    return LeaderboardResponse(entries=leaderboard(state.players))
