"""Text console front end for the blackjack engine."""

from blackjack_cli.console import Console
from blackjack_cli.parsing import parse_action, parse_bet

__all__ = ["Console", "parse_action", "parse_bet"]
