"""Signed, expiring in-memory game sessions."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from blackjack_engine.game.engine import BlackjackGame
from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class GameSessionStore:
    """
    Games keyed by session ID, dropped after ``ttl`` seconds of inactivity.

    Games live only as long as the process.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._sessions: dict[str, tuple[BlackjackGame, datetime]] = {}

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    def create(self, game: BlackjackGame) -> str:
        """Store a game under a new session ID and return the ID."""
        session_id = str(uuid4())
        self._sessions[session_id] = (game, self._expiry())
        return session_id

    def get(self, session_id: str) -> BlackjackGame | None:
        """Get a live game and extend its session."""
        if session_id not in self._sessions:
            return None

        game, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            self.delete(session_id)
            return None

        self._sessions[session_id] = (game, self._expiry())
        return game

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Dropped %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
_session_store: GameSessionStore | None = None


def get_session_store() -> GameSessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = GameSessionStore()
    return _session_store


def create_session(game: BlackjackGame) -> str:
    """Store a game and return a signed session token for it."""
    store = get_session_store()
    store.cleanup_expired()
    session_id = store.create(game)
    return get_session_signer().sign(session_id)


def get_session_game(token: str) -> BlackjackGame | None:
    """Return the game behind a signed token, or None if the token is bad or expired."""
    session_id = get_session_signer().unsign(token)
    if session_id is None:
        return None
    return get_session_store().get(session_id)
