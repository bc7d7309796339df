"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from twentyone.rules import RoundConfig


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class TableConfig:
    """Table defaults for the terminal game."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("TWENTYONE_DECKS", "6")))
    starting_bankroll: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_BANKROLL", "1000"))
    )
    hit_soft_17: bool = field(default_factory=lambda: _env_flag("TWENTYONE_HIT_SOFT_17"))
    blackjack_payout: float = field(
        default_factory=lambda: float(os.getenv("TWENTYONE_BLACKJACK_PAYOUT", "1.5"))
    )
    # Replace the shoe when fewer cards than this remain
    low_cards_threshold: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_LOW_CARDS", "52"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    table: TableConfig = field(default_factory=TableConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def round_config(self) -> RoundConfig:
        """Build the round rules from the table settings."""
        return RoundConfig(
            stand_on_soft_17=not self.table.hit_soft_17,
            blackjack_payout=self.table.blackjack_payout,
            low_cards_threshold=self.table.low_cards_threshold,
            shoe_decks=self.table.num_decks,
        )


# Global configuration instance
config = AppConfig()
