"""Tests for configuration classes."""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert "http://localhost:8000" in config.allowed_origins

    def test_cors_parses_env_var(self):
        env_origins = "http://example.com,http://localhost:3000,http://app.test.com"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            origins = _parse_cors_origins()

            assert origins == [
                "http://example.com",
                "http://localhost:3000",
                "http://app.test.com",
            ]

    def test_cors_parses_origins_with_whitespace(self):
        with patch.dict(os.environ, {"CORS_ORIGINS": "  http://example.com  ,  , "}):
            from config import _parse_cors_origins

            assert _parse_cors_origins() == ["http://example.com"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "FALSE", "RATE_LIMIT_RPM": "120"}):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_auto_generates(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import SecurityConfig

            assert SecurityConfig().secret_key

    def test_secret_key_from_env(self):
        with patch.dict(os.environ, {"SECRET_KEY": "my-super-secret-key-12345"}):
            from config import SecurityConfig

            assert SecurityConfig().secret_key == "my-super-secret-key-12345"


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_level(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import LoggingConfig

            assert LoggingConfig().level == "WARNING"

    def test_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            from config import LoggingConfig

            assert LoggingConfig().level == "DEBUG"


class TestTableConfig:
    """Tests for TableConfig class."""

    def test_table_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import TableConfig

            config = TableConfig()

            assert config.deck_count == 1
            assert config.starting_bankroll == Decimal("1000")
            assert config.penetration == 0.75
            assert config.dealer_delay == 0.75

    def test_table_from_env(self):
        with patch.dict(
            os.environ,
            {
                "BLACKJACK_DECKS": "6",
                "BLACKJACK_BANKROLL": "250.50",
                "BLACKJACK_PENETRATION": "0.8",
                "BLACKJACK_DEALER_DELAY": "0",
            },
        ):
            from config import TableConfig

            config = TableConfig()

            assert config.deck_count == 6
            assert config.starting_bankroll == Decimal("250.50")
            assert config.penetration == 0.8
            assert config.dealer_delay == 0.0

    def test_table_config_frozen(self):
        from config import TableConfig

        config = TableConfig()

        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            config.deck_count = 8


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is False
            assert config.host == "0.0.0.0"
            assert config.port == 8000
            assert config.session_ttl == 3600

    def test_app_config_debug_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from config import AppConfig

            assert AppConfig().debug is True

    def test_app_config_has_nested_configs(self):
        from config import AppConfig

        config = AppConfig()

        assert hasattr(config, "table")
        assert hasattr(config, "logging")
        assert hasattr(config, "cors")
        assert hasattr(config, "rate_limit")
        assert hasattr(config, "security")
