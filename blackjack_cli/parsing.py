"""Turn typed console input into engine commands."""

from decimal import Decimal, InvalidOperation

from blackjack_engine.game.state import Action

ACTION_TOKENS = {
    "h": Action.HIT,
    "hit": Action.HIT,
    "s": Action.STAND,
    "stand": Action.STAND,
    "d": Action.DOUBLE,
    "double": Action.DOUBLE,
    "p": Action.SPLIT,
    "split": Action.SPLIT,
}


def parse_action(text: str) -> Action | None:
    """Map a token such as 'h' or ' Stand ' to an action, or None if unrecognized."""
    return ACTION_TOKENS.get(text.strip().lower())


def parse_bet(text: str) -> Decimal | None:
    """
    Parse a bet amount.

    Returns None for anything that is not a finite number; range checks
    (positive, within bankroll) are left to the engine.
    """
    cleaned = text.strip().lstrip("$").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def is_yes(text: str) -> bool:
    return text.strip().lower() in ("y", "yes")
