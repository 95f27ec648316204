"""Exceptions raised by the blackjack engine."""

from decimal import Decimal


class BlackjackError(Exception):
    """Recoverable failure caused by player input. Game state is unchanged."""


class InvalidBet(BlackjackError):
    """Bet amount is not a positive number."""


class InvalidAction(BlackjackError):
    """Action is not legal for the active hand."""


class InsufficientFunds(BlackjackError):
    """Stake exceeds the seat's bankroll."""

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(f"Stake of {required} exceeds bankroll of {available}")
        self.required = required
        self.available = available


class GameStateError(RuntimeError):
    """Command invoked in a phase that does not accept it."""


class ShoeExhaustedError(IndexError):
    """Draw attempted on an empty shoe."""
