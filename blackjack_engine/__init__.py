"""Blackjack round engine - 100% UI-agnostic."""

from blackjack_engine.cards import Card, Shoe, Rank, Suit
from blackjack_engine.errors import (
    BlackjackError,
    GameStateError,
    InsufficientFunds,
    InvalidAction,
    InvalidBet,
    ShoeExhaustedError,
)
from blackjack_engine.hand import Hand
from blackjack_engine.settings import GameSettings
from blackjack_engine.settlement import Outcome, Settlement, settle

__all__ = [
    "BlackjackError",
    "Card",
    "GameSettings",
    "GameStateError",
    "Hand",
    "InsufficientFunds",
    "InvalidAction",
    "InvalidBet",
    "Outcome",
    "Rank",
    "Settlement",
    "ShoeExhaustedError",
    "Shoe",
    "Suit",
    "settle",
]
