"""Pytest fixtures for blackjack engine tests."""

from decimal import Decimal
from random import Random

import pytest

from blackjack_engine.cards import Card, Shoe
from blackjack_engine.game import BlackjackGame
from blackjack_engine.hand import Hand
from blackjack_engine.settings import GameSettings


def _cards(cards: str) -> list[Card]:
    """Build cards from a string like '10C 9S AH'."""
    return [Card.from_string(token) for token in cards.split()]


def _make_hand(cards: str, bet: str = "10", **flags) -> Hand:
    return Hand(cards=_cards(cards), bet=Decimal(bet), **flags)


def _stacked_game(
    cards: str,
    bankroll: str = "1000",
    player_count: int = 1,
    deck_count: int = 1,
) -> BlackjackGame:
    """
    A game whose shoe deals exactly the given cards, front first.

    With one seat the deal order is player, dealer, player, dealer (hole card).
    """
    game = BlackjackGame(
        GameSettings(
            player_name="Alice",
            deck_count=deck_count,
            player_count=player_count,
            starting_bankroll=Decimal(bankroll),
        ),
        rng=Random(7),
    )
    game.shoe._cards = _cards(cards)
    return game


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(num_decks=6, penetration=0.75, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def settings():
    return GameSettings(player_name="Alice", deck_count=1)


@pytest.fixture
def game(settings, rng):
    """A new single-seat game."""
    return BlackjackGame(settings, rng=rng)


@pytest.fixture
def empty_hand():
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return _make_hand("AS KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return _make_hand("AS 6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return _make_hand("10S 6H")


@pytest.fixture
def pair_8s_hand():
    return _make_hand("8S 8H")


@pytest.fixture
def bust_hand():
    return _make_hand("10S 6H KC")


@pytest.fixture
def build_cards():
    """Factory: '10C 9S' -> [Card, Card]."""
    return _cards


@pytest.fixture
def hand_of():
    """Factory: hand_of('8S 8H', bet='10') -> Hand."""
    return _make_hand


@pytest.fixture
def stacked_game():
    """Factory for games whose shoe deals a fixed card sequence."""
    return _stacked_game
