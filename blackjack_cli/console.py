"""Interactive console loop around a BlackjackGame."""

import logging
import time
from typing import Callable

from blackjack_engine.errors import InsufficientFunds, InvalidAction, InvalidBet
from blackjack_engine.game.engine import BlackjackGame
from blackjack_engine.game.snapshot import PlayerTurnView, RoundCompleteView, WaitingForBetView
from blackjack_engine.game.state import GameState
from blackjack_cli.parsing import is_yes, parse_action, parse_bet
from blackjack_cli.render import format_prompt, format_results, format_table

logger = logging.getLogger(__name__)


class Console:
    """
    Drives a game from typed input.

    Recoverable errors are reported and the same question is asked again;
    engine contract errors propagate.
    """

    def __init__(
        self,
        game: BlackjackGame,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.game = game
        self._input = input_fn
        self._output = output
        self._delay = delay
        self._sleep = sleep

    def run(self) -> None:
        """Play rounds until the player declines or every seat is broke."""
        while True:
            self.play_round()
            if self.game.state is GameState.ROUND_COMPLETE:
                answer = self._input("\nWould you like to play another round? (Y/N) ")
                if not is_yes(answer):
                    break
                self.game.next_round()
            if self.game.state is GameState.GAME_OVER:
                self._output("Everyone is out of money.")
                break
        self._output("Thanks for playing!")

    def play_round(self) -> None:
        """Take bets, deal, play every hand and show the results."""
        self._collect_bets()
        self.game.deal_initial_cards()

        view = self.game.snapshot()
        while isinstance(view, PlayerTurnView):
            self._player_decision(view)
            view = self.game.snapshot()

        while self.game.state is GameState.DEALER_TURN:
            self._output(format_table(self.game.snapshot()))
            if self._delay:
                self._sleep(self._delay)
            step = self.game.next_dealer_turn()
            logger.debug("Dealer step: %s", step.name)

        view = self.game.snapshot()
        self._output(format_table(view))
        if isinstance(view, RoundCompleteView):
            self._output(format_results(view))

    def _collect_bets(self) -> None:
        view = self.game.snapshot()
        while isinstance(view, WaitingForBetView):
            self._ask_bet(view)
            view = self.game.snapshot()

    def _ask_bet(self, view: WaitingForBetView) -> None:
        seat = view.seats[view.seat_index]
        text = self._input(f"{seat.name}, you have {seat.bankroll}. Your bet: ")

        amount = parse_bet(text)
        if amount is None:
            self._output("Please enter a number.")
            return
        try:
            self.game.accept_bet(amount)
        except InsufficientFunds as exc:
            self._output(f"You only have {exc.available}.")
        except InvalidBet:
            if amount > 0:
                self._output("Bets are in whole cents.")
            else:
                self._output("Your bet must be more than zero.")

    def _player_decision(self, view: PlayerTurnView) -> None:
        self._output(format_table(view))

        action = parse_action(self._input(format_prompt(view)))
        if action is None:
            self._output("Please choose one of the listed actions.")
            return
        try:
            self.game.process_player_action(action, view.hand_index)
        except InsufficientFunds as exc:
            self._output(f"Not enough money to {action}: you have {exc.available}.")
        except InvalidAction as exc:
            self._output(f"You can't {action} now ({exc}).")
