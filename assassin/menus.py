from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

from assassin.errors import InvalidChoiceError


class MainMenuChoice(StrEnum):
    new_game = "1"
    existing_game = "2"


class RosterSource(StrEnum):
    manual = "1"
    import_csv = "2"


class DashboardChoice(StrEnum):
    leaderboard = "1"
    record_kill = "2"
    game_tree = "3"
    end_game = "4"


MAIN_MENU_PROMPT = "Do you want to start a new game or continue an existing game? (1 for New, 2 for Existing): "
ROSTER_SOURCE_PROMPT = "Choose an option: 1. Enter Names manually 2. Import from CSV: "
DASHBOARD_PROMPT = "Choose an option:\n 1. Leaderboard \n 2. Record a kill \n 3. Display Game Tree \n 4. End Game: \n"

_C = TypeVar("_C", bound=StrEnum)


def parse_choice(choices: type[_C], raw: str) -> _C:
    """Map a typed menu selection onto its enum member.

    Raises InvalidChoiceError listing the accepted values; the caller decides
    whether to re-prompt.
    """

    value = raw.strip()
    try:
        return choices(value)
    except ValueError:
        allowed = [c.value for c in choices]
        listed = ", ".join(allowed[:-1]) + f", or {allowed[-1]}" if len(allowed) > 2 else " or ".join(allowed)
        raise InvalidChoiceError(f"Invalid option, please choose {listed}.") from None
