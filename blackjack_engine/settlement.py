"""Settlement of a finished player hand against the dealer."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, auto

from blackjack_engine.hand import Hand

# Natural pays 3:2
BLACKJACK_PAYOUT = Decimal("1.5")

# Smallest stake unit
CENT = Decimal("0.01")


class Outcome(Enum):
    """Result of one settled hand."""

    PLAYER_WIN = auto()
    DEALER_WIN = auto()
    PUSH = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, slots=True)
class Settlement:
    """
    Settlement of one hand.

    The stake is taken from the bankroll when the bet is placed, so
    ``payout`` is what goes back: stake plus winnings on a win, the stake
    on a push, nothing on a loss.
    """

    outcome: Outcome
    payout: Decimal
    net: Decimal


def is_whole_cents(amount: Decimal) -> bool:
    """True if the amount has no digits below one cent."""
    try:
        return amount == amount.quantize(CENT)
    except InvalidOperation:
        # Too many digits to hold at cent precision
        return False


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """Classify a finished player hand against the final dealer hand."""
    # Player busts first, so a double bust still loses
    if player_hand.is_busted:
        return Outcome.DEALER_WIN
    if dealer_hand.is_busted:
        return Outcome.PLAYER_WIN

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack
    if player_bj and dealer_bj:
        return Outcome.PUSH
    if player_bj:
        return Outcome.PLAYER_WIN
    if dealer_bj:
        return Outcome.DEALER_WIN

    if player_hand.value > dealer_hand.value:
        return Outcome.PLAYER_WIN
    if player_hand.value < dealer_hand.value:
        return Outcome.DEALER_WIN
    return Outcome.PUSH


def settle(player_hand: Hand, dealer_hand: Hand) -> Settlement:
    """
    Settle a player hand against the dealer hand.

    Pure function: neither hand is modified.
    """
    stake = player_hand.bet
    outcome = compare_hands(player_hand, dealer_hand)

    if outcome is Outcome.PLAYER_WIN:
        winnings = stake * BLACKJACK_PAYOUT if player_hand.is_blackjack else stake
        payout = stake + winnings
    elif outcome is Outcome.PUSH:
        payout = stake
    else:
        payout = Decimal("0")

    return Settlement(outcome=outcome, payout=payout, net=payout - stake)
