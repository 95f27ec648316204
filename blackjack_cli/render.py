"""Plain-text rendering of game views."""

from blackjack_engine.game.snapshot import (
    DealerView,
    GameView,
    HandView,
    PlayerTurnView,
    RoundCompleteView,
)
from blackjack_engine.game.state import Action
from blackjack_engine.settlement import Outcome

ACTION_LABELS = {
    Action.HIT: "(H)it",
    Action.STAND: "(S)tand",
    Action.DOUBLE: "(D)ouble",
    Action.SPLIT: "S(p)lit",
}

OUTCOME_LABELS = {
    Outcome.PLAYER_WIN: "WIN",
    Outcome.DEALER_WIN: "LOSE",
    Outcome.PUSH: "PUSH",
}


def format_cards(cards) -> str:
    return " ".join(str(card) for card in cards)


def format_hand(hand: HandView) -> str:
    value = f"soft {hand.value}" if hand.is_soft else str(hand.value)
    if hand.is_blackjack:
        value = "BLACKJACK"
    elif hand.is_busted:
        value = f"BUST {hand.value}"

    parts = [f"{format_cards(hand.cards)} ({value})", f"bet {hand.bet}"]
    if hand.is_doubled:
        parts.append("doubled")
    if hand.outcome is not None:
        parts.append(OUTCOME_LABELS[hand.outcome])
    marker = "> " if hand.is_active else "  "
    return marker + " | ".join(parts)


def format_dealer(dealer: DealerView) -> str:
    if not dealer.cards:
        return "Dealer: -"
    hidden = " ??" * dealer.hidden_cards
    value = "BLACKJACK" if dealer.is_blackjack else str(dealer.value)
    if dealer.is_busted:
        value = f"BUST {dealer.value}"
    return f"Dealer: {format_cards(dealer.cards)}{hidden} ({value})"


def format_table(view: GameView) -> str:
    """Render the dealer and every seat."""
    lines = [format_dealer(view.dealer)]
    for seat in view.seats:
        lines.append(f"{seat.name} - bankroll {seat.bankroll}")
        lines.extend(format_hand(hand) for hand in seat.hands)
    return "\n".join(lines)


def format_prompt(view: PlayerTurnView) -> str:
    seat = view.seats[view.seat_index]
    options = ", ".join(ACTION_LABELS[a] for a in Action if a in view.legal_actions)
    label = seat.name
    if len(seat.hands) > 1:
        label = f"{seat.name} (hand {view.hand_index + 1})"
    return f"{label}: {options}? "


def format_results(view: RoundCompleteView) -> str:
    lines = []
    for seat, net in zip(view.seats, view.net_results):
        if not seat.hands:
            continue
        sign = "+" if net > 0 else ""
        lines.append(f"{seat.name}: {sign}{net}, bankroll {seat.bankroll}")
    return "\n".join(lines)
