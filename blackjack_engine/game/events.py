"""Typed event stream published by the round engine."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable


class EventType(Enum):
    """What happened at the table."""

    # Table
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"
    GAME_ENDED = "game_ended"
    SHOE_SHUFFLED = "shoe_shuffled"
    CARD_DEALT = "card_dealt"

    # Seats
    BET_PLACED = "bet_placed"
    PLAYER_HIT = "player_hit"
    PLAYER_STAND = "player_stand"
    PLAYER_DOUBLE = "player_double"
    PLAYER_SPLIT = "player_split"
    PLAYER_BLACKJACK = "player_blackjack"
    PLAYER_BUSTS = "player_busts"

    # Dealer
    DEALER_REVEALS = "dealer_reveals"
    DEALER_HITS = "dealer_hits"
    DEALER_STANDS = "dealer_stands"
    DEALER_BUSTS = "dealer_busts"
    DEALER_BLACKJACK = "dealer_blackjack"

    # Settlement
    PLAYER_WINS = "player_wins"
    PLAYER_LOSES = "player_loses"
    PUSH = "push"

    # Rejected commands; state is unchanged
    INVALID_BET = "invalid_bet"
    INVALID_ACTION = "invalid_action"
    INSUFFICIENT_FUNDS = "insufficient_funds"


@dataclass(frozen=True)
class GameEvent:
    """One entry in the event stream, tagged with the round it belongs to."""

    event_type: EventType
    round_number: int
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[round {self.round_number}] {self.event_type.value}: {self.data}"


EventHandler = Callable[[GameEvent], None]

# Events kept per game; older ones are dropped
HISTORY_LIMIT = 1000


class EventEmitter:
    """
    Fans events out to subscribers and keeps a history.

    A handler subscribed with ``event_type=None`` receives every event,
    after the handlers registered for that specific type. Only the most
    recent ``history_limit`` events are kept.
    """

    def __init__(self, history_limit: int = HISTORY_LIMIT) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: deque[GameEvent] = deque(maxlen=history_limit)
        self.round_number = 1

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Only deliver this type, or None for everything

        Returns:
            A function that removes the subscription
        """
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(handler, event_type)

        return unsubscribe

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        """Record an event for the current round and deliver it."""
        event = GameEvent(event_type=event_type, round_number=self.round_number, data=data)
        self._history.append(event)

        for handler in [*self._handlers[event_type], *self._handlers[None]]:
            handler(event)
        return event

    def begin_round(self) -> None:
        self.round_number += 1

    @property
    def history(self) -> list[GameEvent]:
        """Copy of the retained events, oldest first."""
        return list(self._history)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        return [event for event in self._history if event.event_type is event_type]

    def clear_history(self) -> None:
        self._history.clear()
