"""Tests for configuration classes."""

import os
import pytest
from unittest.mock import patch

from config import AppConfig, CORSConfig, GameConfig, LoggingConfig, RateLimitConfig, _parse_cors_origins


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Test that default CORS origins are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            config = CORSConfig()

            assert config.allowed_origins == ["http://localhost:8000"]

    def test_cors_parses_env_var(self):
        """Test that CORS origins are parsed and stripped."""
        env_origins = "  http://example.com  ,http://localhost:3000,,"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            origins = _parse_cors_origins()

            assert origins == ["http://example.com", "http://localhost:3000"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_disabled(self):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "false", "RATE_LIMIT_RPM": "5"}):
            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 5


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_defaults(self):
        """Test the house defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = GameConfig()

            assert config.min_bet == 10
            assert config.max_bet == 1_000_000
            assert config.default_bet == 10
            assert config.blackjack_payout == 1.0
            assert config.dealer_hits_soft_17 is False
            assert config.action_timeout == 60
            assert config.starting_balance == 1000

    def test_env_overrides(self):
        env = {
            "MIN_BET": "5",
            "MAX_BET": "500",
            "BLACKJACK_PAYOUT": "1.5",
            "DEALER_HITS_SOFT_17": "true",
            "ACTION_TIMEOUT": "30",
        }
        with patch.dict(os.environ, env, clear=True):
            config = GameConfig()

            assert config.min_bet == 5
            assert config.max_bet == 500
            assert config.blackjack_payout == 1.5
            assert config.dealer_hits_soft_17 is True
            assert config.action_timeout == 30

    def test_frozen(self):
        config = GameConfig()
        with pytest.raises(AttributeError):
            config.min_bet = 1


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert LoggingConfig().level == "DEBUG"

    def test_app_config_nests_sections(self):
        config = AppConfig()

        assert isinstance(config.game, GameConfig)
        assert isinstance(config.logging, LoggingConfig)
