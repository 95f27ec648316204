"""Command-line entry point: ``blackjack -n NAME``."""

import argparse
import logging
from decimal import Decimal
from random import Random

from blackjack_engine.game.engine import BlackjackGame
from blackjack_engine.settings import GameSettings
from blackjack_cli.console import Console
from config import config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blackjack", description="Play blackjack in the terminal.")
    parser.add_argument("-n", "--name", dest="player_name", required=True, help="Name of the player")
    parser.add_argument(
        "-d",
        "--deck-count",
        type=int,
        default=config.table.deck_count,
        help="Number of decks in the shoe",
    )
    parser.add_argument(
        "-p",
        "--player-count",
        type=int,
        default=1,
        help="Number of seats at the table",
    )
    parser.add_argument(
        "--bankroll",
        type=Decimal,
        default=config.table.starting_bankroll,
        help="Starting bankroll for every seat",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible shoe")
    parser.add_argument(
        "--delay",
        type=float,
        default=config.table.dealer_delay,
        help="Seconds to pause between dealer cards",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.logging.level)

    try:
        settings = GameSettings(
            player_name=args.player_name,
            deck_count=args.deck_count,
            player_count=args.player_count,
            starting_bankroll=args.bankroll,
            penetration=config.table.penetration,
        )
    except ValueError as exc:
        print(f"error: {exc}")
        return 2

    print(f"Welcome to Blackjack, {settings.player_name}!")
    print(
        f"Starting a game with {settings.player_count} players "
        f"and {settings.deck_count} decks"
    )

    rng = Random(args.seed) if args.seed is not None else None
    game = BlackjackGame(settings, rng=rng)
    try:
        Console(game, delay=args.delay).run()
    except (KeyboardInterrupt, EOFError):
        print("\nThanks for playing!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
