from __future__ import annotations

import pytest

from assassin.core.chain import render_chain
from assassin.core.elimination import record_kill, validate_kill
from assassin.errors import KillRejected, RejectionReason

from conftest import make_state, player


def test_kill_repairs_ring_and_updates_both_players() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})

    result = record_kill(state=state, assassin_name="A", victim_name="B")

    new = result.state
    a, b, c = player(new, "A"), player(new, "B"), player(new, "C")
    assert (a.kills, a.victims, a.target) == (1, ["B"], "C")
    assert (b.alive, b.assassin, b.target) == (False, "A", None)
    assert c.target == "A"
    assert result.new_target == "C"
    assert result.game_over is False
    assert result.winner is None
    assert render_chain(new.players) == "A -> C -> A"


def test_kill_does_not_touch_input_state() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})
    before = state.model_dump_json()

    record_kill(state=state, assassin_name="A", victim_name="B")

    assert state.model_dump_json() == before


def test_kill_outside_assignment_is_rejected_and_roster_unchanged() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})
    before = state.model_dump_json()

    with pytest.raises(KillRejected) as e:
        record_kill(state=state, assassin_name="A", victim_name="C")

    assert e.value.reason == RejectionReason.not_assigned
    assert str(e.value) == "A is not allowed to kill C."
    assert state.model_dump_json() == before


@pytest.mark.parametrize(
    ("assassin", "victim"),
    [("A", "Zed"), ("Zed", "B"), ("a", "B"), ("A", "b")],
)
def test_unknown_names_are_not_found(assassin: str, victim: str) -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})

    with pytest.raises(KillRejected) as e:
        record_kill(state=state, assassin_name=assassin, victim_name=victim)

    assert e.value.reason == RejectionReason.not_found


def test_eliminated_players_cannot_kill_or_be_killed() -> None:
    state = make_state({"A": "B", "B": "C", "C": "D", "D": "A"})
    state = record_kill(state=state, assassin_name="A", victim_name="B").state

    # B is dead: neither side of a kill.
    with pytest.raises(KillRejected) as e1:
        record_kill(state=state, assassin_name="B", victim_name="C")
    with pytest.raises(KillRejected) as e2:
        record_kill(state=state, assassin_name="D", victim_name="B")

    assert e1.value.reason == RejectionReason.not_found
    assert e2.value.reason == RejectionReason.not_found


def test_not_found_wins_over_not_assigned() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})

    with pytest.raises(KillRejected) as e:
        record_kill(state=state, assassin_name="B", victim_name="Nobody")

    assert e.value.reason == RejectionReason.not_found


def test_final_kill_leaves_self_loop_and_single_node_chain() -> None:
    state = make_state({"A": "B", "B": "A"})

    result = record_kill(state=state, assassin_name="A", victim_name="B")

    assert player(result.state, "A").target == "A"
    assert result.game_over is True
    assert result.winner == "A"
    assert "last player standing" in result.message
    assert render_chain(result.state.players) == "A"


def test_survivor_cannot_kill_themselves() -> None:
    state = make_state({"A": "B", "B": "A"})
    state = record_kill(state=state, assassin_name="A", victim_name="B").state

    with pytest.raises(KillRejected) as e:
        record_kill(state=state, assassin_name="A", victim_name="A")

    assert e.value.reason == RejectionReason.not_assigned


def test_full_game_keeps_invariants() -> None:
    state = make_state({"A": "B", "B": "C", "C": "D", "D": "E", "E": "A"})

    for assassin, victim in [("A", "B"), ("C", "D"), ("A", "C"), ("E", "A")]:
        state = record_kill(state=state, assassin_name=assassin, victim_name=victim).state

        alive = {p.name for p in state.players if p.alive}
        for p in state.players:
            assert p.kills == len(p.victims)
            if p.alive:
                assert p.target in alive
            else:
                assert p.target is None
                assert p.assassin

    e = player(state, "E")
    assert e.target == "E"
    assert player(state, "A").victims == ["B", "C"]
    assert player(state, "A").assassin == "E"


def test_kill_message_names_new_target() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})

    result = record_kill(state=state, assassin_name="A", victim_name="B")

    assert result.message == "A has successfully eliminated B.\nA's new target is: C."


def test_validate_kill_returns_live_records_without_mutating() -> None:
    state = make_state({"A": "B", "B": "C", "C": "A"})

    assassin, victim = validate_kill(players=state.players, assassin_name="A", victim_name="B")

    assert assassin is player(state, "A")
    assert victim is player(state, "B")
    assert victim.alive and assassin.kills == 0
