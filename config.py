"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class GameConfig:
    """Game configuration."""

    min_bet: int = field(default_factory=lambda: int(os.getenv("MIN_BET", "10")))
    max_bet: int = field(default_factory=lambda: int(os.getenv("MAX_BET", "1000000")))
    default_bet: int = field(default_factory=lambda: int(os.getenv("DEFAULT_BET", "10")))
    blackjack_payout: float = field(
        default_factory=lambda: float(os.getenv("BLACKJACK_PAYOUT", "1.0"))
    )
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: os.getenv("DEALER_HITS_SOFT_17", "false").lower() == "true"
    )
    action_timeout: float = field(
        default_factory=lambda: float(os.getenv("ACTION_TIMEOUT", "60"))
    )
    starting_balance: int = field(
        default_factory=lambda: int(os.getenv("STARTING_BALANCE", "1000"))
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
