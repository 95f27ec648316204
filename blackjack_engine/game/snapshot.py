"""
Read-only views of a game, one view class per phase.

Views copy everything they expose, so holding on to one (or mutating the
tuples it was built from) never touches the running game.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar

from blackjack_engine.cards import Card
from blackjack_engine.game.state import Action, GameState
from blackjack_engine.hand import Hand
from blackjack_engine.settlement import Outcome


@dataclass(frozen=True, slots=True)
class HandView:
    """Render data for one player hand."""

    cards: tuple[Card, ...]
    bet: Decimal
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    is_doubled: bool
    is_split_hand: bool
    is_finished: bool
    is_active: bool = False
    outcome: Outcome | None = None
    payout: Decimal | None = None

    @classmethod
    def from_hand(cls, hand: Hand, is_active: bool = False) -> "HandView":
        return cls(
            cards=tuple(hand.cards),
            bet=hand.bet,
            value=hand.value,
            is_soft=hand.is_soft,
            is_blackjack=hand.is_blackjack,
            is_busted=hand.is_busted,
            is_doubled=hand.is_doubled,
            is_split_hand=hand.is_split_hand,
            is_finished=hand.is_finished,
            is_active=is_active,
            outcome=hand.outcome,
            payout=hand.payout,
        )


@dataclass(frozen=True, slots=True)
class DealerView:
    """
    Render data for the dealer.

    Until the hole card is revealed only the up-card is listed and
    ``value`` is the up-card's value.
    """

    cards: tuple[Card, ...]
    hidden_cards: int
    value: int
    is_revealed: bool
    is_blackjack: bool
    is_busted: bool

    @classmethod
    def from_hand(cls, hand: Hand, revealed: bool) -> "DealerView":
        if revealed or len(hand.cards) < 2:
            visible = hand
        else:
            visible = Hand.with_card(hand.cards[0])
        return cls(
            cards=tuple(visible.cards),
            hidden_cards=len(hand.cards) - len(visible.cards),
            value=visible.value,
            is_revealed=revealed,
            is_blackjack=revealed and hand.is_blackjack,
            is_busted=hand.is_busted,
        )


@dataclass(frozen=True, slots=True)
class SeatView:
    """Render data for one seat."""

    name: str
    bankroll: Decimal
    hands: tuple[HandView, ...]

    @property
    def total_bet(self) -> Decimal:
        return sum((hand.bet for hand in self.hands), Decimal("0"))


@dataclass(frozen=True, slots=True)
class GameView:
    """Data common to every phase."""

    state: ClassVar[GameState]

    seats: tuple[SeatView, ...]
    dealer: DealerView
    cards_remaining: int


@dataclass(frozen=True, slots=True)
class WaitingForBetView(GameView):
    state: ClassVar[GameState] = GameState.WAITING_FOR_BET

    seat_index: int


@dataclass(frozen=True, slots=True)
class WaitingToDealView(GameView):
    state: ClassVar[GameState] = GameState.WAITING_TO_DEAL


@dataclass(frozen=True, slots=True)
class PlayerTurnView(GameView):
    state: ClassVar[GameState] = GameState.PLAYER_TURN

    seat_index: int
    hand_index: int
    legal_actions: frozenset[Action]

    @property
    def active_hand(self) -> HandView:
        return self.seats[self.seat_index].hands[self.hand_index]


@dataclass(frozen=True, slots=True)
class DealerTurnView(GameView):
    state: ClassVar[GameState] = GameState.DEALER_TURN


@dataclass(frozen=True, slots=True)
class RoundCompleteView(GameView):
    state: ClassVar[GameState] = GameState.ROUND_COMPLETE

    @property
    def net_results(self) -> tuple[Decimal, ...]:
        """Net win or loss per seat for the round."""
        return tuple(
            sum(
                ((hand.payout or Decimal("0")) - hand.bet for hand in seat.hands),
                Decimal("0"),
            )
            for seat in self.seats
        )


@dataclass(frozen=True, slots=True)
class GameOverView(GameView):
    state: ClassVar[GameState] = GameState.GAME_OVER
