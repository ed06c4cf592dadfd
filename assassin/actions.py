from __future__ import annotations

import logging

from assassin.api.models import GameState
from assassin.core.elimination import KillRecord, record_kill
from assassin.errors import GameCompletedError, KillRejected
from assassin.fsm import GameFSM
from assassin.game_store import PlayerStore

logger = logging.getLogger(__name__)


def dispatch_kill(*, store: PlayerStore, game_name: str, assassin_name: str, victim_name: str) -> KillRecord:
    """Entry point for the CLI and the API.

    Applies a kill by:
    - acquiring the per-game lock
    - loading game state
    - checking the game still accepts kills (FSM)
    - running the elimination engine on a copy
    - moving the game to completed on the last survivor
    - persisting the new state

    Rejections raise before anything is saved.
    """

    with store.lock(game_name):
        state = store.load(game_name)

        fsm = GameFSM(state)
        if not fsm.accepting_kills:
            raise GameCompletedError()

        try:
            result = record_kill(state=state, assassin_name=assassin_name, victim_name=victim_name)
        except KillRejected as e:
            logger.info("game %s: rejected kill %s -> %s (%s)", game_name, assassin_name, victim_name, e.reason)
            raise

        new_state = result.state
        if result.game_over:
            fsm = GameFSM(new_state)
            fsm.last_survivor()
            fsm.sync_phase_to_model()
            new_state.winner = result.winner

        store.save(new_state)

    logger.info("game %s: %s eliminated %s", game_name, assassin_name, victim_name)
    if result.game_over:
        logger.info("game %s: completed, winner %s", game_name, result.winner)
    return result


def end_game(*, store: PlayerStore, game_name: str) -> GameState:
    """Operator decision to stop the game before a single survivor remains."""

    with store.lock(game_name):
        state = store.load(game_name)
        fsm = GameFSM(state)
        if not fsm.accepting_kills:
            raise GameCompletedError()
        fsm.end()
        fsm.sync_phase_to_model()
        store.save(state)

    logger.info("game %s: ended by operator", game_name)
    return state
