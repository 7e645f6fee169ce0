"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from bjengine.strategy.rules import RoundConfig


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


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

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class TableConfig:
    """House rules and table defaults."""

    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_flag("DEALER_HITS_SOFT_17", "true")
    )
    surrender_allowed: bool = field(
        default_factory=lambda: _env_flag("SURRENDER_ALLOWED", "true")
    )
    blackjack_payout_multiplier: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("BLACKJACK_PAYOUT_MULTIPLIER", "2.5"))
    )
    default_bet: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("DEFAULT_BET", "25"))
    )
    initial_bankroll: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("INITIAL_BANKROLL", "1000"))
    )
    num_decks: int = field(default_factory=lambda: int(os.getenv("SHOE_DECKS", "6")))
    penetration: float = field(
        default_factory=lambda: float(os.getenv("SHOE_PENETRATION", "0.75"))
    )
    max_hands: int = 4

    def to_round_config(self) -> RoundConfig:
        """Build the rules object used by the engine."""
        return RoundConfig(
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            surrender_allowed=self.surrender_allowed,
            blackjack_payout_multiplier=self.blackjack_payout_multiplier,
            default_bet=self.default_bet,
            max_hands=self.max_hands,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))

    table: TableConfig = field(default_factory=TableConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
