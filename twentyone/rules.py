"""House rule configuration for a round."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoundConfig:
    """
    Table rules for a blackjack round.

    A config is immutable; build a new one to change the rules between rounds.
    """

    # Dealer rules (S17 when True, H17 when False)
    stand_on_soft_17: bool = True

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Split and double rules
    splitting_enabled: bool = True
    doubling_enabled: bool = True
    double_after_split_enabled: bool = True  # DAS

    # Betting limits (max_bet None means no cap beyond the bankroll)
    min_bet: int = 0
    max_bet: int | None = None

    # Replace the card source with a fresh shoe below this many cards (0 disables)
    low_cards_threshold: int = 0
    shoe_decks: int = 6

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.min_bet < 0:
            raise ValueError("min_bet must not be negative")
        if self.max_bet is not None and self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if self.low_cards_threshold < 0:
            raise ValueError("low_cards_threshold must not be negative")
        if self.shoe_decks < 1:
            raise ValueError("shoe_decks must be at least 1")

    def accepts_bet(self, amount: int) -> bool:
        """Check if a bet amount is inside the table limits."""
        if amount < self.min_bet:
            return False
        return self.max_bet is None or amount <= self.max_bet

    @classmethod
    def vegas_strip(cls) -> "RoundConfig":
        """Standard Vegas Strip rules."""
        return cls(
            stand_on_soft_17=True,
            blackjack_payout=1.5,
            double_after_split_enabled=True,
        )

    @classmethod
    def downtown_vegas(cls) -> "RoundConfig":
        """Downtown Las Vegas rules (typically H17)."""
        return cls(
            stand_on_soft_17=False,
            blackjack_payout=1.5,
            double_after_split_enabled=True,
        )

    @classmethod
    def six_to_five(cls) -> "RoundConfig":
        """H17 table paying 6:5 on naturals."""
        return cls(
            stand_on_soft_17=False,
            blackjack_payout=1.2,
        )

    @classmethod
    def no_double_after_split(cls) -> "RoundConfig":
        """Default rules without doubling on split hands."""
        return cls(double_after_split_enabled=False)


def default_config() -> RoundConfig:
    """Stand on soft 17, 3:2 blackjack, splitting and doubling enabled."""
    return RoundConfig(
        stand_on_soft_17=True,
        blackjack_payout=1.5,
        splitting_enabled=True,
        doubling_enabled=True,
        double_after_split_enabled=True,
    )


DEFAULT_CONFIG = default_config()
