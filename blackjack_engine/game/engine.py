"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from random import Random
from typing import Callable

from transitions import Machine

from blackjack_engine.cards import Card, Shoe
from blackjack_engine.errors import (
    GameStateError,
    InsufficientFunds,
    InvalidAction,
    InvalidBet,
)
from blackjack_engine.game.events import EventEmitter, EventType, GameEvent
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
from blackjack_engine.game.state import Action, DealerStep, GameState
from blackjack_engine.hand import Hand
from blackjack_engine.settings import GameSettings
from blackjack_engine.settlement import Outcome, is_whole_cents, settle

logger = logging.getLogger(__name__)

DEALER_STANDS_ON = 17


@dataclass
class Seat:
    """A player seat: one bankroll, one or more hands after a split."""

    name: str
    bankroll: Decimal
    hands: list[Hand] = field(default_factory=list)
    current_hand_index: int = 0

    @property
    def current_hand(self) -> Hand | None:
        """Get the current active hand."""
        if 0 <= self.current_hand_index < len(self.hands):
            return self.hands[self.current_hand_index]
        return None

    @property
    def in_round(self) -> bool:
        """Check if the seat placed a bet this round."""
        return bool(self.hands)

    @property
    def is_broke(self) -> bool:
        return self.bankroll <= 0

    def add_hand(self, bet: Decimal) -> Hand:
        hand = Hand(bet=bet)
        self.hands.append(hand)
        return hand

    def reset_hands(self) -> None:
        """Reset all hands for a new round."""
        self.hands.clear()
        self.current_hand_index = 0


class BlackjackGame:
    """
    Blackjack round engine using a state machine.

    The caller drives every step: place bets, deal, act on the active
    hand, step the dealer, start the next round. Nothing blocks and
    nothing runs in the background. Read state through ``snapshot()``
    or subscribe to events.
    """

    STATES = [s.name.lower() for s in GameState]

    TRANSITIONS = [
        {"trigger": "close_betting", "source": "waiting_for_bet", "dest": "waiting_to_deal"},
        {"trigger": "start_player_turn", "source": "waiting_to_deal", "dest": "player_turn"},
        {"trigger": "settle_naturals", "source": "waiting_to_deal", "dest": "round_complete"},
        {"trigger": "start_dealer_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "skip_dealer_turn", "source": "player_turn", "dest": "round_complete"},
        {"trigger": "finish_dealer_turn", "source": "dealer_turn", "dest": "round_complete"},
        {"trigger": "reopen_betting", "source": "round_complete", "dest": "waiting_for_bet"},
        {"trigger": "end_game", "source": "round_complete", "dest": "game_over"},
    ]

    def __init__(self, settings: GameSettings, rng: Random | None = None) -> None:
        """
        Initialize a new game.

        Args:
            settings: Table configuration
            rng: Random number generator for reproducible shoes
        """
        self.settings = settings
        self.shoe = Shoe(
            num_decks=settings.deck_count,
            penetration=settings.penetration,
            rng=rng,
        )
        self.shoe.shuffle()

        self.seats = [
            Seat(name=name, bankroll=Decimal(settings.starting_bankroll))
            for name in settings.seat_names
        ]
        self.dealer_hand = Hand()
        self.dealer_revealed = False
        self.events = EventEmitter()

        self._betting_seat_index = 0
        self._seat_index = 0

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_log_state_change",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore[attr-defined]

    def _log_state_change(self) -> None:
        logger.debug("Game state -> %s", self.state.name)

    def _require(self, state: GameState) -> None:
        if self.state is not state:
            raise GameStateError(f"Cannot do that in state {self.state.name}")

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """Subscribe to game events; returns a function that unsubscribes."""
        return self.events.subscribe(handler, event_type)

    # Betting

    @property
    def betting_seat(self) -> Seat:
        """The seat whose bet is awaited."""
        self._require(GameState.WAITING_FOR_BET)
        return self.seats[self._betting_seat_index]

    def accept_bet(self, amount: Decimal | int | str) -> Hand:
        """
        Place the betting seat's wager and reserve it from the bankroll.

        Once every solvent seat has bet, the game waits to deal.

        Raises:
            InvalidBet: amount is not a positive number of whole cents
            InsufficientFunds: amount exceeds the seat's bankroll
        """
        seat = self.betting_seat

        try:
            stake = Decimal(str(amount))
        except InvalidOperation:
            stake = None
        if stake is None or not stake.is_finite() or stake <= 0:
            self.events.emit(EventType.INVALID_BET, amount=str(amount))
            raise InvalidBet(f"Bet must be a positive amount, got {amount!r}")

        if stake > seat.bankroll:
            self.events.emit(
                EventType.INSUFFICIENT_FUNDS,
                required=stake,
                available=seat.bankroll,
            )
            raise InsufficientFunds(stake, seat.bankroll)

        if not is_whole_cents(stake):
            self.events.emit(EventType.INVALID_BET, amount=str(amount))
            raise InvalidBet(f"Bet must be in whole cents, got {amount!r}")

        seat.bankroll -= stake
        hand = seat.add_hand(bet=stake)
        self.events.emit(EventType.BET_PLACED, seat=seat.name, amount=stake)

        next_index = self._next_solvent_seat(self._betting_seat_index + 1)
        if next_index is None:
            self.close_betting()
        else:
            self._betting_seat_index = next_index
        return hand

    def _next_solvent_seat(self, start: int) -> int | None:
        for index in range(start, len(self.seats)):
            if not self.seats[index].is_broke:
                return index
        return None

    @property
    def _seats_in_round(self) -> list[Seat]:
        return [seat for seat in self.seats if seat.in_round]

    # Dealing

    def deal_initial_cards(self) -> None:
        """
        Deal two cards to every seat in the round and to the dealer.

        Naturals are frozen straight away. If every seat holds a natural
        the dealer's hole card is checked and the round settles at once.
        """
        self._require(GameState.WAITING_TO_DEAL)
        seats = self._seats_in_round

        # Deal: each seat, dealer, each seat, dealer (face down)
        for _ in range(2):
            for seat in seats:
                self._deal_card_to_hand(seat.hands[0])
            self._deal_card_to_hand(self.dealer_hand)

        self.events.emit(EventType.ROUND_STARTED, seats=len(seats))

        for seat in seats:
            hand = seat.hands[0]
            if hand.is_blackjack:
                hand.is_stood = True
                self.events.emit(EventType.PLAYER_BLACKJACK, seat=seat.name)

        if all(seat.hands[0].is_blackjack for seat in seats):
            self._reveal_dealer()
            self.settle_naturals()
            self._resolve_round()
            return

        self.start_player_turn()
        self._seat_index = 0
        self._move_to_open_hand()

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        """Deal a card to a hand, reshuffling mid-round if the shoe runs dry."""
        if not self.shoe.cards_remaining:
            self.shoe.shuffle(in_play=self._cards_in_play())
            logger.info("Shoe ran out mid-round; reshuffled %d cards", len(self.shoe))
            self.events.emit(EventType.SHOE_SHUFFLED, mid_round=True)

        card = self.shoe.draw()
        hand.add_card(card)

        is_hole_card = hand is self.dealer_hand and len(hand) == 2 and not self.dealer_revealed
        self.events.emit(
            EventType.CARD_DEALT,
            card="??" if is_hole_card else str(card),
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def _cards_in_play(self) -> list[Card]:
        cards = list(self.dealer_hand.cards)
        for seat in self.seats:
            for hand in seat.hands:
                cards.extend(hand.cards)
        return cards

    # Player turn

    @property
    def active_seat(self) -> Seat:
        self._require(GameState.PLAYER_TURN)
        return self.seats[self._seat_index]

    @property
    def active_hand(self) -> Hand:
        seat = self.active_seat
        hand = seat.current_hand
        if hand is None:
            raise GameStateError(f"{seat.name} has no hand at index {seat.current_hand_index}")
        return hand

    def legal_actions(self) -> frozenset[Action]:
        """Actions the active hand may take, funds considered."""
        seat = self.active_seat
        hand = self.active_hand
        actions = {Action.HIT, Action.STAND}
        if hand.can_double and hand.bet <= seat.bankroll:
            actions.add(Action.DOUBLE)
        if hand.can_split and hand.bet <= seat.bankroll:
            actions.add(Action.SPLIT)
        return frozenset(actions)

    def process_player_action(self, action: Action, hand_index: int | None = None) -> None:
        """
        Apply a player decision to the active hand.

        Args:
            action: The decision
            hand_index: Optional index of the hand being played; must be the active one

        Raises:
            InvalidAction: the action is not legal for the active hand
            InsufficientFunds: doubling or splitting needs more than the bankroll
        """
        self._require(GameState.PLAYER_TURN)
        seat = self.active_seat

        if hand_index is not None and hand_index != seat.current_hand_index:
            self.events.emit(EventType.INVALID_ACTION, message=f"Hand {hand_index} is not active")
            raise InvalidAction(f"Hand {hand_index} is not active")

        handlers = {
            Action.HIT: self._hit,
            Action.STAND: self._stand,
            Action.DOUBLE: self._double_down,
            Action.SPLIT: self._split,
        }
        handlers[Action(action)](seat, self.active_hand)

    def _hit(self, seat: Seat, hand: Hand) -> None:
        self._deal_card_to_hand(hand)
        self.events.emit(EventType.PLAYER_HIT, seat=seat.name, hand_value=hand.value)

        if hand.is_busted:
            self.events.emit(
                EventType.PLAYER_BUSTS,
                seat=seat.name,
                hand_index=seat.current_hand_index,
            )
            self._advance_to_next_hand()

    def _stand(self, seat: Seat, hand: Hand) -> None:
        hand.is_stood = True
        self.events.emit(EventType.PLAYER_STAND, seat=seat.name, hand_value=hand.value)
        self._advance_to_next_hand()

    def _double_down(self, seat: Seat, hand: Hand) -> None:
        if not hand.can_double:
            self.events.emit(EventType.INVALID_ACTION, message="Cannot double")
            raise InvalidAction("Can only double a two-card hand that has not been played")
        self._reserve(seat, hand.bet)

        hand.bet *= 2
        hand.is_doubled = True
        self._deal_card_to_hand(hand)
        hand.is_stood = True
        self.events.emit(
            EventType.PLAYER_DOUBLE,
            seat=seat.name,
            hand_value=hand.value,
            new_bet=hand.bet,
        )

        if hand.is_busted:
            self.events.emit(
                EventType.PLAYER_BUSTS,
                seat=seat.name,
                hand_index=seat.current_hand_index,
            )
        self._advance_to_next_hand()

    def _split(self, seat: Seat, hand: Hand) -> None:
        if not hand.can_split:
            self.events.emit(EventType.INVALID_ACTION, message="Cannot split")
            raise InvalidAction("Can only split a pair that has not been split")
        self._reserve(seat, hand.bet)

        second_card = hand.cards.pop()
        new_hand = Hand(cards=[second_card], bet=hand.bet, is_split_hand=True)
        hand.is_split_hand = True
        seat.hands.insert(seat.current_hand_index + 1, new_hand)

        self._deal_card_to_hand(hand)
        self._deal_card_to_hand(new_hand)

        self.events.emit(
            EventType.PLAYER_SPLIT,
            seat=seat.name,
            hand1_value=hand.value,
            hand2_value=new_hand.value,
        )

    def _reserve(self, seat: Seat, amount: Decimal) -> None:
        """Take an additional stake from the bankroll."""
        if amount > seat.bankroll:
            self.events.emit(
                EventType.INSUFFICIENT_FUNDS,
                required=amount,
                available=seat.bankroll,
            )
            raise InsufficientFunds(amount, seat.bankroll)
        seat.bankroll -= amount

    def _move_to_open_hand(self) -> bool:
        """Point at the first unfinished hand from the current position on."""
        while self._seat_index < len(self.seats):
            seat = self.seats[self._seat_index]
            while seat.current_hand is not None:
                if not seat.current_hand.is_finished:
                    return True
                seat.current_hand_index += 1
            self._seat_index += 1
            if self._seat_index < len(self.seats):
                self.seats[self._seat_index].current_hand_index = 0
        self._finish_player_turn()
        return False

    def _advance_to_next_hand(self) -> None:
        self.seats[self._seat_index].current_hand_index += 1
        self._move_to_open_hand()

    def _finish_player_turn(self) -> None:
        """Hand over to the dealer, or settle if the dealer has nothing to play for."""
        live_hands = [
            hand
            for seat in self._seats_in_round
            for hand in seat.hands
            if not hand.is_busted and not hand.is_blackjack
        ]
        if live_hands:
            self.start_dealer_turn()
            return

        self._reveal_dealer()
        self.skip_dealer_turn()
        self._resolve_round()

    # Dealer turn

    def _reveal_dealer(self) -> None:
        self.dealer_revealed = True
        self.events.emit(
            EventType.DEALER_REVEALS,
            card=str(self.dealer_hand.cards[1]),
            hand_value=self.dealer_hand.value,
        )
        if self.dealer_hand.is_blackjack:
            self.events.emit(EventType.DEALER_BLACKJACK)

    def _dealer_should_hit(self) -> bool:
        """Dealer draws below 17 and stands on every 17, soft or hard."""
        return self.dealer_hand.value < DEALER_STANDS_ON

    def next_dealer_turn(self) -> DealerStep:
        """
        Advance the dealer by one step.

        The first call reveals the hole card, each following call draws one
        card while the dealer is below 17, and the final call stands (or
        reports the bust) and settles the round.
        """
        self._require(GameState.DEALER_TURN)

        if not self.dealer_revealed:
            self._reveal_dealer()
            return DealerStep.REVEAL

        if self._dealer_should_hit():
            self._deal_card_to_hand(self.dealer_hand)
            self.events.emit(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)
            return DealerStep.HIT

        if self.dealer_hand.is_busted:
            self.events.emit(EventType.DEALER_BUSTS)
            step = DealerStep.BUST
        else:
            self.events.emit(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)
            step = DealerStep.STAND

        self.finish_dealer_turn()
        self._resolve_round()
        return step

    def play_dealer(self) -> list[DealerStep]:
        """Run the dealer's remaining steps and return them."""
        steps = [self.next_dealer_turn()]
        while not steps[-1].ends_turn:
            steps.append(self.next_dealer_turn())
        return steps

    # Settlement

    def _resolve_round(self) -> None:
        """Settle every hand against the final dealer hand and pay out."""
        for seat in self._seats_in_round:
            round_net = Decimal("0")
            for i, hand in enumerate(seat.hands):
                result = settle(hand, self.dealer_hand)
                hand.outcome = result.outcome
                hand.payout = result.payout
                seat.bankroll += result.payout
                round_net += result.net

                if result.outcome is Outcome.PLAYER_WIN:
                    self.events.emit(
                        EventType.PLAYER_WINS, seat=seat.name, hand_index=i, amount=result.net
                    )
                elif result.outcome is Outcome.DEALER_WIN:
                    self.events.emit(
                        EventType.PLAYER_LOSES, seat=seat.name, hand_index=i, amount=-result.net
                    )
                else:
                    self.events.emit(EventType.PUSH, seat=seat.name, hand_index=i)

            logger.info("%s settles %s, bankroll %s", seat.name, round_net, seat.bankroll)
            self.events.emit(
                EventType.ROUND_ENDED,
                seat=seat.name,
                result=round_net,
                bankroll=seat.bankroll,
            )

    # Next round

    @property
    def _cards_for_deal(self) -> int:
        return 2 * (len(self.seats) + 1)

    def next_round(self) -> None:
        """
        Clear the table and open betting again.

        Bankrolls and the shoe carry over; the shoe is reshuffled only at the
        cut card or when it cannot cover another deal. When no seat has money
        left the game ends instead.
        """
        self._require(GameState.ROUND_COMPLETE)

        for seat in self.seats:
            seat.reset_hands()
        self.dealer_hand.clear()
        self.dealer_revealed = False

        first = self._next_solvent_seat(0)
        if first is None:
            self.events.emit(EventType.GAME_ENDED, reason="bankrupt")
            self.end_game()
            return

        self.events.begin_round()
        if self.shoe.needs_shuffle or self.shoe.cards_remaining < self._cards_for_deal:
            self.shoe.shuffle()
            self.events.emit(EventType.SHOE_SHUFFLED, mid_round=False)

        self._betting_seat_index = first
        self.reopen_betting()

    # Snapshots

    def snapshot(self) -> GameView:
        """Return a read-only view of the current phase."""
        state = self.state
        active = (
            (self._seat_index, self.seats[self._seat_index].current_hand_index)
            if state is GameState.PLAYER_TURN
            else None
        )
        seats = tuple(
            SeatView(
                name=seat.name,
                bankroll=seat.bankroll,
                hands=tuple(
                    HandView.from_hand(hand, is_active=active == (s, h))
                    for h, hand in enumerate(seat.hands)
                ),
            )
            for s, seat in enumerate(self.seats)
        )
        common = dict(
            seats=seats,
            dealer=DealerView.from_hand(self.dealer_hand, self.dealer_revealed),
            cards_remaining=self.shoe.cards_remaining,
        )

        if state is GameState.WAITING_FOR_BET:
            return WaitingForBetView(seat_index=self._betting_seat_index, **common)
        if state is GameState.WAITING_TO_DEAL:
            return WaitingToDealView(**common)
        if state is GameState.PLAYER_TURN:
            return PlayerTurnView(
                seat_index=self._seat_index,
                hand_index=self.seats[self._seat_index].current_hand_index,
                legal_actions=self.legal_actions(),
                **common,
            )
        if state is GameState.DEALER_TURN:
            return DealerTurnView(**common)
        if state is GameState.ROUND_COMPLETE:
            return RoundCompleteView(**common)
        return GameOverView(**common)
