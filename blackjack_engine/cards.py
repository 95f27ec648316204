"""Cards and the multi-deck shoe they are dealt from."""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator

from blackjack_engine.errors import ShoeExhaustedError

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52


class Suit(Enum):
    """Suits, valued by their printed symbol."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Ranks numbered Ace low through King."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return _RANK_LABELS.get(self, str(self.value))

    @property
    def hard_value(self) -> int:
        """Points with the Ace counted as 1."""
        return min(self.value, 10)

    @property
    def blackjack_value(self) -> int:
        """Points with the Ace counted as 11."""
        return 11 if self.is_ace else self.hard_value

    @property
    def is_ace(self) -> bool:
        return self is Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        return self.hard_value == 10


_RANK_LABELS = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}

# Accepted spellings when parsing: printed labels, "T" for ten, suit initials or symbols
_RANK_CODES = {str(rank): rank for rank in Rank} | {"T": Rank.TEN}
_SUIT_CODES = {suit.name[0]: suit for suit in Suit} | {suit.value: suit for suit in Suit}


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card. Equal cards from different decks compare equal."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        return self.rank.blackjack_value

    @property
    def hard_value(self) -> int:
        return self.rank.hard_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse '10C', 'TD', 'ah' or 'K♣'. The suit is the last character."""
        code = s.strip().upper()
        rank = _RANK_CODES.get(code[:-1])
        suit = _SUIT_CODES.get(code[-1:])
        if rank is None or suit is None:
            raise ValueError(f"Invalid card string: {s!r}")
        return cls(rank, suit)


def standard_deck() -> list[Card]:
    """One deck, suit by suit, Ace to King."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Shoe:
    """
    One or more decks dealt from the front.

    A new shoe holds its decks in order; shuffle it before dealing. The cut
    card sits at ``penetration`` of the full shoe.
    """

    def __init__(
        self,
        num_decks: int = 1,
        penetration: float = 0.75,
        rng: Random | None = None,
    ) -> None:
        """
        Args:
            num_decks: Number of decks in the shoe
            penetration: Fraction of the shoe dealt before the cut card comes out
            rng: Source of randomness for shuffling; seed it for a reproducible shoe
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self._num_decks = num_decks
        self._penetration = penetration
        self._cut_card = int(num_decks * CARDS_PER_DECK * penetration)
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Return every card to the shoe, unshuffled."""
        self._cards = standard_deck() * self._num_decks

    def shuffle(self, in_play: Iterable[Card] = ()) -> None:
        """
        Collect every card except those in play and shuffle them.

        Args:
            in_play: Cards on the table; one copy of each is left out of the shoe
        """
        self.reset()
        remaining = Counter(self._cards)
        remaining.subtract(in_play)
        self._cards = list(remaining.elements())
        self._rng.shuffle(self._cards)
        logger.debug("Shuffled %d of %d cards", len(self._cards), self.total_cards)

    def draw(self) -> Card:
        """Take the front card."""
        if not self._cards:
            raise ShoeExhaustedError("Cannot draw from empty shoe")
        return self._cards.pop(0)

    @property
    def needs_shuffle(self) -> bool:
        """True once the cut card has been reached."""
        return self.cards_dealt >= self._cut_card

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def cards_dealt(self) -> int:
        return self.total_cards - len(self._cards)

    @property
    def total_cards(self) -> int:
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def penetration(self) -> float:
        return self._penetration

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
