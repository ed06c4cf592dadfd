from __future__ import annotations

from enum import StrEnum


class RejectionReason(StrEnum):
    not_found = "not_found"
    not_assigned = "not_assigned"
    invalid_choice = "invalid_choice"


class GameError(ValueError):
    """Base class for recoverable game errors.

    These are surfaced to the operator as a message; none of them are fatal.
    """


class GameNotFoundError(GameError):
    def __init__(self, game_name: str):
        super().__init__(f"Game not found: {game_name}")
        self.game_name = game_name


class GameExistsError(GameError):
    def __init__(self, game_name: str):
        super().__init__(f"Game already exists: {game_name}")
        self.game_name = game_name


class GameCompletedError(GameError):
    def __init__(self) -> None:
        super().__init__("Game is completed")


class GameBusyError(GameError):
    def __init__(self) -> None:
        super().__init__("Game is busy")


class KillRejected(GameError):
    """An elimination outside the rules. The roster is left untouched."""

    def __init__(self, reason: RejectionReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class InvalidChoiceError(GameError):
    reason = RejectionReason.invalid_choice


class RosterParseError(GameError):
    pass


class StoreError(RuntimeError):
    pass
