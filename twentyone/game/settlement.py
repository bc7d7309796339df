"""Payout computation at the end of a round."""

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from enum import Enum, auto

from twentyone.hand import Hand


class Outcome(Enum):
    """Result of one player hand against the dealer."""

    BLACKJACK = auto()
    WIN = auto()
    PUSH = auto()
    LOSE = auto()
    BUST = auto()

    def __str__(self) -> str:
        return self.name.title()


@dataclass(frozen=True)
class HandResult:
    """Outcome and amount returned for a single hand."""

    hand_index: int
    outcome: Outcome
    share: Decimal
    returned: Decimal


@dataclass(frozen=True)
class Settlement:
    """What one player wagered and got back in a round."""

    seat: int
    wagered: int
    returned: int
    hands: list[HandResult] = field(default_factory=list)

    @property
    def net(self) -> int:
        """Return the change to the bankroll over the whole round."""
        return self.returned - self.wagered


def is_natural(hand: Hand, split: bool = False) -> bool:
    """Check for a two-card 21 that was not produced by a split."""
    return not split and len(hand) == 2 and hand.value == 21


def settle_hand(
    hand: Hand,
    share: Decimal,
    dealer_hand: Hand,
    dealer_busted: bool,
    blackjack_payout: float,
    split: bool = False,
) -> tuple[Outcome, Decimal]:
    """
    Compare one hand against the dealer.

    Args:
        hand: The player hand
        share: The part of the player's wager riding on this hand
        dealer_hand: The dealer's final hand
        dealer_busted: Whether the dealer went over 21
        blackjack_payout: Bonus multiplier for a natural (1.5 for 3:2)
        split: Whether the hand came from a split (no natural possible)

    Returns:
        The outcome and the amount returned to the bankroll, stake included.
    """
    value = hand.value
    if value > 21:
        return Outcome.BUST, Decimal("0")

    if is_natural(hand, split):
        if len(dealer_hand) == 2 and dealer_hand.value == 21:
            return Outcome.PUSH, share
        return Outcome.BLACKJACK, share + share * Decimal(str(blackjack_payout))

    dealer_value = dealer_hand.value
    if dealer_busted or value > dealer_value:
        return Outcome.WIN, share * 2
    if value == dealer_value:
        return Outcome.PUSH, share
    return Outcome.LOSE, Decimal("0")


def settle_player(
    seat: int,
    hands: list[Hand],
    wagered: int,
    dealer_hand: Hand,
    dealer_busted: bool,
    blackjack_payout: float,
) -> Settlement:
    """
    Settle every hand of one player.

    The total wager is prorated evenly over the player's hands. The amount
    returned is truncated to whole currency units.
    """
    split = len(hands) > 1
    share = Decimal(wagered) / len(hands)

    results = []
    total = Decimal("0")
    for i, hand in enumerate(hands):
        outcome, returned = settle_hand(
            hand, share, dealer_hand, dealer_busted, blackjack_payout, split=split
        )
        results.append(HandResult(i, outcome, share, returned))
        total += returned

    return Settlement(
        seat=seat,
        wagered=wagered,
        returned=int(total.to_integral_value(rounding=ROUND_DOWN)),
        hands=results,
    )
