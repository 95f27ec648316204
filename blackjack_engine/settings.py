"""Immutable game settings."""

from dataclasses import dataclass
from decimal import Decimal

from blackjack_engine.settlement import is_whole_cents

MAX_DECKS = 8
MAX_PLAYERS = 7


@dataclass(frozen=True)
class GameSettings:
    """
    Table configuration read once when a game is constructed.

    Seats are played in order by the same caller; the first seat carries
    the player's name.
    """

    player_name: str
    deck_count: int = 1
    player_count: int = 1
    starting_bankroll: Decimal = Decimal("1000")
    penetration: float = 0.75

    def __post_init__(self) -> None:
        """Validate settings."""
        if not self.player_name or not self.player_name.strip():
            raise ValueError("player_name must not be empty")
        if not 1 <= self.deck_count <= MAX_DECKS:
            raise ValueError(f"deck_count must be between 1 and {MAX_DECKS}")
        if not 1 <= self.player_count <= MAX_PLAYERS:
            raise ValueError(f"player_count must be between 1 and {MAX_PLAYERS}")
        if Decimal(self.starting_bankroll) <= 0:
            raise ValueError("starting_bankroll must be positive")
        if not is_whole_cents(Decimal(self.starting_bankroll)):
            raise ValueError("starting_bankroll must be in whole cents")
        if not 0.0 < self.penetration <= 1.0:
            raise ValueError("penetration must be between 0 and 1")

    @property
    def seat_names(self) -> list[str]:
        """Display names for every seat."""
        return [self.player_name.strip()] + [
            f"Player {n}" for n in range(2, self.player_count + 1)
        ]
