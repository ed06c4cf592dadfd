from __future__ import annotations

from dataclasses import dataclass

from assassin.api.models import GameState, PlayerState
from assassin.errors import KillRejected, RejectionReason


@dataclass(frozen=True, slots=True)
class KillRecord:
    """Result of a successful elimination.

    - `state`: a new GameState; the caller's state is never mutated.
    - `new_target`: the assassin's inherited target.
    - `game_over`: the assassin is the last player alive.
    """

    state: GameState
    assassin: str
    victim: str
    new_target: str | None
    game_over: bool

    @property
    def winner(self) -> str | None:
        return self.assassin if self.game_over else None

    @property
    def message(self) -> str:
        lines = [f"{self.assassin} has successfully eliminated {self.victim}."]
        if self.game_over:
            lines.append(f"{self.assassin} is the last player standing!")
        else:
            lines.append(f"{self.assassin}'s new target is: {self.new_target}.")
        return "\n".join(lines)


def find_alive(players: list[PlayerState], name: str) -> PlayerState | None:
    return next((p for p in players if p.name == name and p.alive), None)


def validate_kill(
    *, players: list[PlayerState], assassin_name: str, victim_name: str
) -> tuple[PlayerState, PlayerState]:
    """Return the (assassin, victim) records, or raise KillRejected if the kill is not allowed.

    Checks run in order and the first failure wins.
    """

    assassin = find_alive(players, assassin_name)
    victim = find_alive(players, victim_name)
    if assassin is None or victim is None:
        raise KillRejected(
            RejectionReason.not_found,
            "Invalid names or player(s) not found or already eliminated. Please try again.",
        )

    # A survivor left pointing at themselves is not their own legal victim.
    if assassin.target != victim.name or assassin.name == victim.name:
        raise KillRejected(
            RejectionReason.not_assigned,
            f"{assassin_name} is not allowed to kill {victim_name}.",
        )

    return assassin, victim


def record_kill(*, state: GameState, assassin_name: str, victim_name: str) -> KillRecord:
    """Apply one elimination and repair the ring.

    The assassin inherits the victim's target, which drops the victim out of the
    cycle while keeping it a single cycle over the remaining alive players.
    All updates are made on a copy, so a rejection leaves `state` untouched.
    """

    new_state = state.model_copy(deep=True)
    assassin, victim = validate_kill(
        players=new_state.players,
        assassin_name=assassin_name,
        victim_name=victim_name,
    )

    assassin.kills += 1
    assassin.victims.append(victim_name)
    assassin.target = victim.target

    victim.alive = False
    victim.assassin = assassin_name
    victim.target = None

    # Final opponent: the assassin inherited their own name.
    game_over = assassin.target == assassin.name
    return KillRecord(
        state=new_state,
        assassin=assassin_name,
        victim=victim_name,
        new_target=assassin.target,
        game_over=game_over,
    )
