"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from twentyone.cards import Card, CardSource


def hand_value(cards: Sequence[Card], auto_aces: bool = True) -> int:
    """
    Calculate the value of a hand.

    Non-ace cards are summed first. Each ace then adds 11, or 1 when
    `auto_aces` is set and 11 would take the running total past 21.
    Aces are never revisited, so A-A-T counts 22.

    Args:
        cards: The cards in the hand
        auto_aces: Count an ace as 1 where 11 would bust the running total.
            When False every ace counts as 11.

    Returns:
        The hand total, which may exceed 21.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        else:
            total += card.value

    for _ in range(aces):
        if auto_aces and total + 11 > 21:
            total += 1
        else:
            total += 11

    return total


def is_soft(cards: Sequence[Card]) -> bool:
    """
    Check if a hand is soft (has an ace counted as 11).

    A hand is soft if it contains an ace that can be counted as 11
    without busting.
    """
    if not any(card.is_ace for card in cards):
        return False

    total_hard = sum(1 if card.is_ace else card.value for card in cards)
    return total_hard + 10 <= 21


def can_split(cards: Sequence[Card]) -> bool:
    """Check if a hand is two cards of the same rank."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_codes(cls, *codes: str) -> "Hand":
        """Build a hand from card tokens like 'SA', 'HK'."""
        return cls([Card.from_code(code) for code in codes])

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def pop(self) -> Card:
        """Remove and return the last card."""
        return self.cards.pop()

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def value(self) -> int:
        """Return the best hand value (aces counted automatically)."""
        return hand_value(self.cards)

    @property
    def hard_value(self) -> int:
        """Return the value with every ace counted as 11."""
        return hand_value(self.cards, auto_aces=False)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        return can_split(self.cards)

    @property
    def has_ace(self) -> bool:
        return any(card.is_ace for card in self.cards)

    @property
    def codes(self) -> list[str]:
        """Return the card tokens in hand order."""
        return [card.code for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def hit_card(source: CardSource, hand: Hand) -> Card:
    """Draw the front card of `source` into `hand` and return it."""
    card = source.draw()
    hand.add_card(card)
    return card
