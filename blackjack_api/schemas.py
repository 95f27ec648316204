"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from blackjack_engine.cards import Card
from blackjack_engine.game.snapshot import (
    DealerView,
    GameView,
    HandView,
    PlayerTurnView,
    WaitingForBetView,
)
from blackjack_engine.game.state import Action
from blackjack_engine.settings import MAX_DECKS, MAX_PLAYERS


class NewGameRequest(BaseModel):
    """Request to open a table."""

    player_name: str = Field(..., min_length=1, description="Display name of the first seat")
    deck_count: int = Field(default=1, ge=1, le=MAX_DECKS)
    player_count: int = Field(default=1, ge=1, le=MAX_PLAYERS)
    starting_bankroll: Decimal = Field(default=Decimal("1000"), gt=0)
    seed: int | None = Field(default=None, description="Seed for a reproducible shoe")


class NewGameResponse(BaseModel):
    session_id: str


class BetRequest(BaseModel):
    """Request to place a bet for the betting seat."""

    amount: Decimal = Field(..., description="Bet amount")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split"]
    hand_index: int | None = Field(default=None, ge=0)


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(rank=str(card.rank), suit=str(card.suit), value=card.value)


class HandResponse(BaseModel):
    """Player hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    is_doubled: bool
    is_split_hand: bool
    is_finished: bool
    is_active: bool
    bet: Decimal
    outcome: Literal["player_win", "dealer_win", "push"] | None = None
    payout: Decimal | None = None

    @classmethod
    def from_view(cls, hand: HandView) -> "HandResponse":
        return cls(
            cards=[CardResponse.from_card(c) for c in hand.cards],
            value=hand.value,
            is_soft=hand.is_soft,
            is_blackjack=hand.is_blackjack,
            is_busted=hand.is_busted,
            is_doubled=hand.is_doubled,
            is_split_hand=hand.is_split_hand,
            is_finished=hand.is_finished,
            is_active=hand.is_active,
            bet=hand.bet,
            outcome=hand.outcome.name.lower() if hand.outcome else None,
            payout=hand.payout,
        )


class DealerResponse(BaseModel):
    """Dealer hand as visible to the player."""

    cards: list[CardResponse]
    hidden_cards: int
    value: int
    is_revealed: bool
    is_blackjack: bool
    is_busted: bool

    @classmethod
    def from_view(cls, dealer: DealerView) -> "DealerResponse":
        return cls(
            cards=[CardResponse.from_card(c) for c in dealer.cards],
            hidden_cards=dealer.hidden_cards,
            value=dealer.value,
            is_revealed=dealer.is_revealed,
            is_blackjack=dealer.is_blackjack,
            is_busted=dealer.is_busted,
        )


class SeatResponse(BaseModel):
    name: str
    bankroll: Decimal
    hands: list[HandResponse]


class GameStateResponse(BaseModel):
    """Current game state."""

    state: str
    seats: list[SeatResponse]
    dealer: DealerResponse
    cards_remaining: int
    betting_seat_index: int | None = None
    active_seat_index: int | None = None
    active_hand_index: int | None = None
    legal_actions: list[str] = []

    @classmethod
    def from_view(cls, view: GameView) -> "GameStateResponse":
        response = cls(
            state=view.state.name,
            seats=[
                SeatResponse(
                    name=seat.name,
                    bankroll=seat.bankroll,
                    hands=[HandResponse.from_view(h) for h in seat.hands],
                )
                for seat in view.seats
            ],
            dealer=DealerResponse.from_view(view.dealer),
            cards_remaining=view.cards_remaining,
        )
        if isinstance(view, WaitingForBetView):
            response.betting_seat_index = view.seat_index
        elif isinstance(view, PlayerTurnView):
            response.active_seat_index = view.seat_index
            response.active_hand_index = view.hand_index
            response.legal_actions = [a.value for a in Action if a in view.legal_actions]
        return response


class DealerStepResponse(BaseModel):
    """Dealer steps taken and the resulting state."""

    steps: list[Literal["reveal", "hit", "stand", "bust"]]
    game: GameStateResponse
