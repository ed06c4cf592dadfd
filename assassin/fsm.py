from __future__ import annotations

from statemachine import State, StateMachine

from assassin.api.models import GamePhase, GameState


class GameFSM(StateMachine):
    """FSM wrapper around GameState.

    - phases: active -> completed
    - `last_survivor` fires when a kill leaves one player alive; `end` is the
      operator calling the game early.
    - eliminations are applied by the elimination engine; the FSM only guards transitions.
    """

    active = State(GamePhase.active.value, value=GamePhase.active.value, initial=True)
    completed = State(GamePhase.completed.value, value=GamePhase.completed.value, final=True)

    last_survivor = active.to(completed)
    end = active.to(completed)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    @property
    def accepting_kills(self) -> bool:
        return self.current_state == self.active

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))
