"""Game state, player action and dealer step enumerations."""

from enum import Enum, auto


class GameState(Enum):
    """
    Round state machine states.

    Flow: WAITING_FOR_BET → WAITING_TO_DEAL → PLAYER_TURN → DEALER_TURN → ROUND_COMPLETE
    """

    # Bets are collected seat by seat
    WAITING_FOR_BET = auto()

    # All bets in, cards not yet dealt
    WAITING_TO_DEAL = auto()

    # Player decisions, one active hand at a time
    PLAYER_TURN = auto()

    # Dealer reveals and draws one step per call
    DEALER_TURN = auto()

    # Hands settled, ready for the next round
    ROUND_COMPLETE = auto()

    # Every seat is out of money
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Action(Enum):
    """Player decisions on the active hand."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value


class DealerStep(Enum):
    """What a single dealer-turn step did."""

    REVEAL = auto()
    HIT = auto()
    STAND = auto()
    BUST = auto()

    @property
    def ends_turn(self) -> bool:
        return self in (DealerStep.STAND, DealerStep.BUST)
