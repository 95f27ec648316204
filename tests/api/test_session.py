"""Tests for session management."""

import time
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

import blackjack_api.session as session_module
from blackjack_api.session import (
    GameSessionStore,
    SessionSigner,
    create_session,
    get_session_game,
    get_session_signer,
)
from blackjack_engine.game.engine import BlackjackGame
from blackjack_engine.settings import GameSettings


@pytest.fixture
def new_game():
    return BlackjackGame(GameSettings(player_name="Alice"))


class TestSessionSigner:
    """Tests for SessionSigner class."""

    def test_sign_creates_token(self):
        signer = SessionSigner(secret_key="test-secret")
        session_id = "test-session-123"

        token = signer.sign(session_id)

        assert token
        assert token != session_id

    def test_unsign_returns_original_id(self):
        signer = SessionSigner(secret_key="test-secret")

        token = signer.sign("test-session-456")

        assert signer.unsign(token, max_age=3600) == "test-session-456"

    def test_unsign_invalid_token_returns_none(self):
        signer = SessionSigner(secret_key="test-secret")

        assert signer.unsign("invalid-token-data", max_age=3600) is None

    def test_unsign_wrong_secret_returns_none(self):
        """A token signed with another key is rejected."""
        token = SessionSigner(secret_key="secret-one").sign("test-session")

        assert SessionSigner(secret_key="secret-two").unsign(token, max_age=3600) is None

    def test_unsign_expired_token_returns_none(self):
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session")

        original_time = time.time

        def two_hours_later():
            return original_time() + 7200

        with patch("time.time", two_hours_later):
            result = signer.unsign(token, max_age=3600)

        assert result is None

    def test_get_session_signer_returns_singleton(self):
        session_module._session_signer = None

        assert get_session_signer() is get_session_signer()


class TestGameSessionStore:
    """Tests for GameSessionStore class."""

    def test_create_and_get(self, new_game):
        store = GameSessionStore(ttl=3600)

        session_id = store.create(new_game)

        assert store.get(session_id) is new_game
        assert len(store) == 1

    def test_get_unknown_returns_none(self):
        assert GameSessionStore(ttl=3600).get("nonexistent-session") is None

    def test_delete(self, new_game):
        store = GameSessionStore(ttl=3600)
        session_id = store.create(new_game)

        store.delete(session_id)
        store.delete(session_id)

        assert store.get(session_id) is None

    def test_expired_session_is_dropped(self, new_game):
        store = GameSessionStore(ttl=60)
        session_id = store.create(new_game)

        later = datetime.now() + timedelta(seconds=120)
        with patch("blackjack_api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert store.get(session_id) is None

        assert len(store) == 0

    def test_get_extends_session(self, new_game):
        store = GameSessionStore(ttl=60)
        session_id = store.create(new_game)
        start = datetime.now()

        with patch("blackjack_api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = start + timedelta(seconds=45)
            assert store.get(session_id) is new_game

            mock_datetime.now.return_value = start + timedelta(seconds=90)
            assert store.get(session_id) is new_game

    def test_cleanup_expired(self, new_game):
        store = GameSessionStore(ttl=60)
        store.create(new_game)
        store.create(new_game)
        start = datetime.now()

        with patch("blackjack_api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = start + timedelta(seconds=120)
            keep = store.create(new_game)
            count = store.cleanup_expired()

        assert count == 2
        assert len(store) == 1
        assert store.get(keep) is new_game


class TestModuleFunctions:
    """Tests for module-level session functions."""

    def test_create_session_returns_signed_token(self, new_game):
        session_module._session_store = None

        token = create_session(new_game)

        # Signed tokens are longer than a bare UUID
        assert len(token) > 36
        assert get_session_game(token) is new_game

    def test_tampered_token_returns_none(self, new_game):
        token = create_session(new_game)

        assert get_session_game(token + "x") is None
        assert get_session_game("not-a-token") is None
