"""Player state carried across rounds."""

from dataclasses import dataclass, field

from twentyone.hand import Hand


@dataclass
class Player:
    """
    A seated player.

    `hands[0]` is the original hand; later hands only come from splitting.
    The bankroll is checked against every wager but is otherwise unbounded.
    """

    bankroll: int = 1000
    hands: list[Hand] = field(default_factory=list)
    name: str = ""

    def reset_hands(self) -> None:
        """Replace all hands with a single empty hand."""
        self.hands = [Hand()]

    def add_hand(self) -> Hand:
        """Append a new empty hand and return it."""
        hand = Hand()
        self.hands.append(hand)
        return hand

    def can_afford(self, amount: int) -> bool:
        """Check if the bankroll covers a wager."""
        return amount <= self.bankroll

    def __str__(self) -> str:
        label = self.name or "Player"
        return f"{label} (${self.bankroll})"
