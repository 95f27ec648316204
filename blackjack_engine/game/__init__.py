"""Round state machine, events and snapshots."""

from blackjack_engine.game.events import EventEmitter, EventType, GameEvent
from blackjack_engine.game.state import Action, DealerStep, GameState
from blackjack_engine.game.snapshot import (
    DealerTurnView,
    DealerView,
    GameOverView,
    GameView,
    HandView,
    PlayerTurnView,
    RoundCompleteView,
    SeatView,
    WaitingForBetView,
    WaitingToDealView,
)
from blackjack_engine.game.engine import BlackjackGame, Seat

__all__ = [
    "Action",
    "BlackjackGame",
    "DealerStep",
    "DealerTurnView",
    "DealerView",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GameOverView",
    "GameState",
    "GameView",
    "HandView",
    "PlayerTurnView",
    "RoundCompleteView",
    "Seat",
    "SeatView",
    "WaitingForBetView",
    "WaitingToDealView",
]
