"""Tests for the event stream."""

from blackjack_engine.game import Action, EventEmitter, EventType


def test_typed_and_catch_all_subscribers():
    emitter = EventEmitter()
    typed, everything = [], []
    emitter.subscribe(typed.append, EventType.BET_PLACED)
    emitter.subscribe(everything.append)

    emitter.emit(EventType.BET_PLACED, amount=10)
    emitter.emit(EventType.CARD_DEALT, card="AS")

    assert [e.event_type for e in typed] == [EventType.BET_PLACED]
    assert [e.event_type for e in everything] == [EventType.BET_PLACED, EventType.CARD_DEALT]
    assert typed[0].data == {"amount": 10}


def test_unsubscribe_handle():
    emitter = EventEmitter()
    seen = []
    unsubscribe = emitter.subscribe(seen.append)

    emitter.emit(EventType.PUSH)
    unsubscribe()
    unsubscribe()
    emitter.emit(EventType.PUSH)

    assert len(seen) == 1
    assert len(emitter.history) == 2


def test_history_is_a_copy():
    emitter = EventEmitter()
    emitter.emit(EventType.PUSH)

    emitter.history.clear()
    assert len(emitter.history) == 1

    emitter.clear_history()
    assert emitter.history == []


def test_events_carry_round_number(stacked_game):
    game = stacked_game("10C 9S 7D 8H 10H 9D 7S 8C")
    game.accept_bet(100)
    game.deal_initial_cards()
    game.process_player_action(Action.STAND)
    game.play_dealer()
    game.next_round()
    game.accept_bet(100)

    bets = game.events.of_type(EventType.BET_PLACED)
    assert [e.round_number for e in bets] == [1, 2]
    assert str(bets[0]).startswith("[round 1] bet_placed")


def test_game_subscription(stacked_game):
    game = stacked_game("10C 9S 7D 8H")
    dealt = []
    unsubscribe = game.subscribe(dealt.append, EventType.CARD_DEALT)

    game.accept_bet(100)
    game.deal_initial_cards()
    unsubscribe()
    game.process_player_action(Action.STAND)
    game.play_dealer()

    # The hole card is masked until the dealer reveals it
    assert [e.data["card"] for e in dealt] == ["10♣", "9♠", "7♦", "??"]


def test_history_keeps_most_recent_events():
    emitter = EventEmitter(history_limit=3)
    for amount in range(5):
        emitter.emit(EventType.BET_PLACED, amount=amount)

    assert [e.data["amount"] for e in emitter.history] == [2, 3, 4]
