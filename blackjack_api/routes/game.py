"""
Game API endpoints.

Every command returns the resulting game state. Engine errors are turned
into HTTP responses by the handlers registered on the app.
"""

import logging
from random import Random
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException

from blackjack_api.schemas import (
    ActionRequest,
    BetRequest,
    DealerStepResponse,
    GameStateResponse,
    NewGameRequest,
    NewGameResponse,
)
from blackjack_api.session import create_session, get_session_game
from blackjack_engine.game.engine import BlackjackGame
from blackjack_engine.game.state import Action
from blackjack_engine.settings import GameSettings
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


def session_game(session_id: Annotated[str, Header(alias="X-Session-ID")]) -> BlackjackGame:
    """Resolve the X-Session-ID header to a live game."""
    game = get_session_game(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return game


SessionGame = Annotated[BlackjackGame, Depends(session_game)]


@router.post("/new")
async def new_game(request: NewGameRequest) -> NewGameResponse:
    """Open a table and return its session token."""
    try:
        settings = GameSettings(
            player_name=request.player_name,
            deck_count=request.deck_count,
            player_count=request.player_count,
            starting_bankroll=request.starting_bankroll,
            penetration=config.table.penetration,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    rng = Random(request.seed) if request.seed is not None else None
    session_id = create_session(BlackjackGame(settings, rng=rng))
    logger.info("Opened table for %s", settings.player_name)
    return NewGameResponse(session_id=session_id)


@router.get("/state")
async def get_state(game: SessionGame) -> GameStateResponse:
    return GameStateResponse.from_view(game.snapshot())


@router.post("/bet")
async def place_bet(request: BetRequest, game: SessionGame) -> GameStateResponse:
    """Place a bet for the seat whose bet is awaited."""
    game.accept_bet(request.amount)
    return GameStateResponse.from_view(game.snapshot())


@router.post("/deal")
async def deal(game: SessionGame) -> GameStateResponse:
    game.deal_initial_cards()
    return GameStateResponse.from_view(game.snapshot())


@router.post("/action")
async def player_action(request: ActionRequest, game: SessionGame) -> GameStateResponse:
    """Hit, stand, double or split the active hand."""
    game.process_player_action(Action(request.action), request.hand_index)
    return GameStateResponse.from_view(game.snapshot())


@router.post("/dealer/step")
async def dealer_step(game: SessionGame) -> DealerStepResponse:
    """Advance the dealer by one step."""
    step = game.next_dealer_turn()
    return DealerStepResponse(
        steps=[step.name.lower()],
        game=GameStateResponse.from_view(game.snapshot()),
    )


@router.post("/dealer/play")
async def dealer_play(game: SessionGame) -> DealerStepResponse:
    """Play out the rest of the dealer's hand."""
    steps = game.play_dealer()
    return DealerStepResponse(
        steps=[step.name.lower() for step in steps],
        game=GameStateResponse.from_view(game.snapshot()),
    )


@router.post("/next-round")
async def next_round(game: SessionGame) -> GameStateResponse:
    """Clear the table and reopen betting, or end the game if every seat is broke."""
    game.next_round()
    return GameStateResponse.from_view(game.snapshot())
