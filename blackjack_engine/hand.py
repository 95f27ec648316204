"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator

from blackjack_engine.cards import Card

if TYPE_CHECKING:
    from blackjack_engine.settlement import Outcome


@dataclass
class Hand:
    """
    A blackjack hand: cards plus a wager.

    Totals are derived from the cards on every read.
    """

    cards: list[Card] = field(default_factory=list)
    bet: Decimal = Decimal("0")
    is_doubled: bool = False
    is_split_hand: bool = False
    is_stood: bool = False
    outcome: "Outcome | None" = None
    payout: Decimal | None = None

    @classmethod
    def with_card(cls, card: Card) -> "Hand":
        """Create a one-card hand (e.g. the dealer's up-card on its own)."""
        return cls(cards=[card])

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards and reset round state."""
        self.cards.clear()
        self.bet = Decimal("0")
        self.is_doubled = False
        self.is_split_hand = False
        self.is_stood = False
        self.outcome = None
        self.payout = None

    @property
    def hard_total(self) -> int:
        """Total with every ace counted as 1."""
        return sum(card.hard_value for card in self.cards)

    @property
    def soft_total(self) -> int:
        """Total with one ace counted as 11 (equals hard_total without aces)."""
        if any(card.is_ace for card in self.cards):
            return self.hard_total + 10
        return self.hard_total

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        One ace counts as 11 unless that would bust the hand; two aces can
        never both count as 11, so the soft total is the only candidate.
        """
        soft = self.soft_total
        if soft <= 21:
            return soft
        return self.hard_total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is currently counted as 11."""
        return self.value != self.hard_total

    @property
    def is_busted(self) -> bool:
        return self.hard_total > 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with 2 cards, never split)."""
        return len(self.cards) == 2 and self.value == 21 and not self.is_split_hand

    @property
    def is_finished(self) -> bool:
        """Check if the hand takes no further cards this round."""
        return self.is_stood or self.is_busted

    @property
    def is_pair(self) -> bool:
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def can_split(self) -> bool:
        """Check if the hand can be split. Split hands do not split again."""
        return self.is_pair and not self.is_split_hand and not self.is_finished

    @property
    def can_double(self) -> bool:
        """Check if the hand is a two-card hand that has not been acted upon."""
        return len(self.cards) == 2 and not self.is_doubled and not self.is_finished

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, bet={self.bet})"
