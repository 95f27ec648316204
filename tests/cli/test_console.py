"""Tests for the interactive console."""

from decimal import Decimal

import pytest

from blackjack_cli.__main__ import build_parser, main
from blackjack_cli.console import Console
from blackjack_engine.game.state import GameState


class Script:
    """Feeds canned answers to the console and records everything it prints."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def output(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _console(game, script: Script) -> Console:
    return Console(game, input_fn=script.input, output=script.output)


def test_play_round_stand_and_dealer_busts(stacked_game):
    game = stacked_game("10C 9S 7D 7H KC")
    script = Script("100", "s")

    _console(game, script).play_round()

    assert game.state is GameState.ROUND_COMPLETE
    assert game.seats[0].bankroll == Decimal("1100")
    assert script.prompts[0] == "Alice, you have 1000. Your bet: "
    assert script.prompts[1] == "Alice: (H)it, (S)tand, (D)ouble? "
    assert "Alice: +100, bankroll 1100" in script.text


def test_bet_prompt_repeats_on_bad_input(stacked_game):
    game = stacked_game("10C 9S 7D 8H", bankroll="100")
    script = Script("lots", "0", "500", "50", "s")

    _console(game, script).play_round()

    assert "Please enter a number." in script.lines
    assert "Your bet must be more than zero." in script.lines
    assert "You only have 100." in script.lines
    assert game.seats[0].hands[0].bet == Decimal("50")


def test_sub_cent_bet_asks_again(stacked_game):
    game = stacked_game("10C 9S 7D 8H")
    script = Script("0.001", "5.25", "s")

    _console(game, script).play_round()

    assert "Bets are in whole cents." in script.lines
    assert game.seats[0].hands[0].bet == Decimal("5.25")
    assert game.seats[0].bankroll == Decimal("1000")


def test_unknown_action_asks_again(stacked_game):
    game = stacked_game("10C 9S 7D 8H")
    script = Script("100", "fold", "p", "s")

    _console(game, script).play_round()

    assert "Please choose one of the listed actions." in script.lines
    assert any(line.startswith("You can't split now") for line in script.lines)
    assert game.state is GameState.ROUND_COMPLETE


def test_split_prompts_name_each_hand(stacked_game):
    game = stacked_game("8C 10H 8D 7S 10C 2H")
    script = Script("100", "p", "s", "s")

    _console(game, script).play_round()

    assert "Alice (hand 1): (H)it, (S)tand, (D)ouble? " in script.prompts
    assert "Alice (hand 2): (H)it, (S)tand, (D)ouble? " in script.prompts
    assert len(game.seats[0].hands) == 2


def test_natural_needs_no_decision(stacked_game):
    game = stacked_game("AS 10H KD 6C")
    script = Script("100")

    _console(game, script).play_round()

    assert len(script.prompts) == 1
    assert game.seats[0].bankroll == Decimal("1150")
    assert "BLACKJACK" in script.text


def test_dealer_delay_sleeps_between_steps(stacked_game):
    game = stacked_game("10C 9S 7D 6H 5C")
    script = Script("100", "s")
    pauses = []

    console = Console(
        game,
        input_fn=script.input,
        output=script.output,
        delay=0.5,
        sleep=pauses.append,
    )
    console.play_round()

    # Reveal, hit to 20, stand
    assert pauses == [0.5, 0.5, 0.5]


def test_run_stops_when_player_declines(stacked_game):
    game = stacked_game("10C 9S 7D 8H")
    script = Script("100", "s", "n")

    _console(game, script).run()

    assert script.prompts[-1] == "\nWould you like to play another round? (Y/N) "
    assert script.lines[-1] == "Thanks for playing!"
    assert game.state is GameState.ROUND_COMPLETE


def test_run_ends_when_everyone_is_broke(stacked_game):
    game = stacked_game("10S 9C 6H 8D 9H", bankroll="100")
    script = Script("100", "h", "y")

    _console(game, script).run()

    assert game.state is GameState.GAME_OVER
    assert script.lines[-2:] == ["Everyone is out of money.", "Thanks for playing!"]


def test_build_parser_defaults():
    args = build_parser().parse_args(["-n", "Alice"])

    assert args.player_name == "Alice"
    assert args.player_count == 1
    assert args.seed is None


def test_build_parser_requires_name():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_rejects_bad_settings(capsys):
    assert main(["-n", "Alice", "-d", "9"]) == 2
    assert "deck_count" in capsys.readouterr().out


def test_main_welcomes_and_exits_on_eof(monkeypatch, capsys):
    def no_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(
        "blackjack_cli.__main__.Console",
        lambda game, delay: Console(game, input_fn=no_input, delay=delay),
    )

    assert main(["-n", "Alice", "-p", "2", "-d", "2", "--seed", "1", "--delay", "0"]) == 0

    out = capsys.readouterr().out
    assert "Welcome to Blackjack, Alice!" in out
    assert "Starting a game with 2 players and 2 decks" in out
    assert "Thanks for playing!" in out
