from __future__ import annotations

import logging
import sys
from typing import Protocol

from dotenv import load_dotenv

from assassin.actions import dispatch_kill
from assassin.api.models import GamePhase
from assassin.config import Settings, load_settings
from assassin.core.chain import render_chain
from assassin.core.leaderboard import format_leaderboard
from assassin.errors import GameError, GameNotFoundError, InvalidChoiceError, StoreError
from assassin.game_store import PlayerStore, create_game, make_store
from assassin.menus import (
    DASHBOARD_PROMPT,
    MAIN_MENU_PROMPT,
    ROSTER_SOURCE_PROMPT,
    DashboardChoice,
    MainMenuChoice,
    RosterSource,
    parse_choice,
)
from assassin.roster_import import read_roster_file

logger = logging.getLogger(__name__)

DONE_SENTINEL = "done"
CONTINUE_PROMPT = "Press enter or type any input to continue... \n"


class LineInterface(Protocol):
    def prompt(self, message: str) -> str: ...

    def display(self, message: str) -> None: ...


class ConsoleLineInterface:
    def prompt(self, message: str) -> str:
        return input(message)

    def display(self, message: str) -> None:
        print(message)


class GameCLI:
    """Prompt-driven game master console.

    Every menu is a loop: an invalid selection shows a message and asks again,
    errors return to the previous menu, and nothing here recurses.
    """

    def __init__(self, *, io: LineInterface, store: PlayerStore, settings: Settings):
        self.io = io
        self.store = store
        self.settings = settings

    def run(self) -> None:
        while True:
            try:
                choice = parse_choice(MainMenuChoice, self.io.prompt(MAIN_MENU_PROMPT))
            except InvalidChoiceError:
                self.io.display('Invalid option. Please type "1" for New or "2" for Existing.')
                continue

            if choice == MainMenuChoice.new_game:
                game_name = self.start_new_game()
            else:
                game_name = self.continue_game()

            if game_name is not None:
                self.dashboard(game_name)
                return

    def start_new_game(self) -> str | None:
        """Collect a roster, build the ring, and save. Returns the game name, or None to go back."""

        game_name = self.io.prompt("Enter game name: ").strip()
        if not game_name:
            self.io.display("Game name is required. Returning to main menu.")
            return None
        try:
            taken = self.store.exists(game_name)
        except StoreError as e:
            logger.warning("store unavailable: %s", e)
            self.io.display(f"{e}. Returning to main menu.")
            return None
        if taken:
            self.io.display(f"A game named {game_name} already exists. Returning to main menu.")
            return None

        try:
            source = parse_choice(RosterSource, self.io.prompt(ROSTER_SOURCE_PROMPT))
        except InvalidChoiceError:
            self.io.display("Invalid option. Returning to main menu.")
            return None

        if source == RosterSource.manual:
            names = self._prompt_player_names()
        else:
            try:
                names = read_roster_file(self.settings.roster_csv)
            except GameError as e:
                self.io.display(str(e))
                return None

        try:
            state = create_game(
                store=self.store,
                game_name=game_name,
                names=names,
                min_players=self.settings.min_players,
            )
        except (ValueError, StoreError) as e:
            self.io.display(f"Could not create game: {e}")
            return None

        self.io.display(f"Game {state.game_name} created with {len(state.players)} players.")
        return state.game_name

    def _prompt_player_names(self) -> list[str]:
        names: list[str] = []
        while True:
            name = self.io.prompt("Enter player's name (type 'Done' to finish): ").strip()
            if name.casefold() == DONE_SENTINEL:
                return names
            if name:
                names.append(name)

    def continue_game(self) -> str | None:
        game_name = self.io.prompt("Enter game name: ").strip()
        try:
            self.store.load(game_name)
        except (GameNotFoundError, StoreError) as e:
            self.io.display(f"Error loading the game: {e}")
            return None
        return game_name

    def dashboard(self, game_name: str) -> None:
        while True:
            self.io.display("\nGame Dashboard:")
            try:
                choice = parse_choice(DashboardChoice, self.io.prompt(DASHBOARD_PROMPT))
            except InvalidChoiceError as e:
                self.io.display(str(e))
                continue

            try:
                if choice == DashboardChoice.leaderboard:
                    self.show_leaderboard(game_name)
                elif choice == DashboardChoice.record_kill:
                    self.record_kill(game_name)
                elif choice == DashboardChoice.game_tree:
                    self.show_game_tree(game_name)
                else:
                    self.io.display("Ending game...")
                    return
            except StoreError as e:
                logger.warning("store unavailable: %s", e)
                self.io.display(str(e))
            except GameError as e:
                self.io.display(str(e))

    def show_leaderboard(self, game_name: str) -> None:
        state = self.store.load(game_name)
        self.io.display("\nLeaderboard:")
        for line in format_leaderboard(state.players):
            self.io.display(line)
        self.io.display("\n")
        self.io.prompt(CONTINUE_PROMPT)

    def record_kill(self, game_name: str) -> None:
        assassin_name = self.io.prompt("Enter Assassin's name: ").strip()
        victim_name = self.io.prompt("Enter Victim's name: ").strip()

        result = dispatch_kill(
            store=self.store,
            game_name=game_name,
            assassin_name=assassin_name,
            victim_name=victim_name,
        )
        self.io.display(result.message)
        if result.state.phase == GamePhase.completed:
            self.io.display("Game over.")

    def show_game_tree(self, game_name: str) -> None:
        state = self.store.load(game_name)
        self.io.display(render_chain(state.players))
        self.io.display("\n")
        self.io.prompt(CONTINUE_PROMPT)


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)

    cli = GameCLI(io=ConsoleLineInterface(), store=make_store(settings), settings=settings)
    try:
        cli.run()
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
