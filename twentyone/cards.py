"""Card, CardSource, and deck/shoe builders."""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator

from twentyone.errors import EmptyCardSource


class Suit(Enum):
    """Card suits, in deck order."""

    SPADES = auto()
    HEARTS = auto()
    CLUBS = auto()
    DIAMONDS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
        }
        return symbols[self]

    @property
    def code(self) -> str:
        """Return the single-letter token code (S, H, C, D)."""
        return self.name[0]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.code

    @property
    def code(self) -> str:
        """Return the single-character token code (2-9, T, J, Q, K, A)."""
        if self.value < 10:
            return str(self.value)
        return {
            Rank.TEN: "T",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANKS_BY_CODE = {rank.code: rank for rank in Rank}
_SUITS_BY_CODE = {suit.code: suit for suit in Suit}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.suit}{self.rank}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def code(self) -> str:
        """Return the two-character token, suit first (e.g. 'SA', 'HT')."""
        return f"{self.suit.code}{self.rank.code}"

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Create a card from a two-character token like 'SA' or 'dq'."""
        code = code.strip().upper()
        if len(code) != 2:
            raise ValueError(f"Invalid card code: {code!r}")

        suit_str, rank_str = code[0], code[1]
        if suit_str not in _SUITS_BY_CODE:
            raise ValueError(f"Invalid suit: {suit_str}")
        if rank_str not in _RANKS_BY_CODE:
            raise ValueError(f"Invalid rank: {rank_str}")

        return cls(_RANKS_BY_CODE[rank_str], _SUITS_BY_CODE[suit_str])


def create_deck() -> list[Card]:
    """Return a 52-card deck in order (suits S, H, C, D; ranks 2 to A)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def create_shoe(num_decks: int = 6) -> list[Card]:
    """Return the cards of `num_decks` ordered decks, one after another."""
    if num_decks < 1:
        raise ValueError("Shoe must have at least 1 deck")
    return [card for _ in range(num_decks) for card in create_deck()]


class CardSource:
    """
    An ordered, mutable sequence of cards.

    Cards are drawn from the front and appended at the back.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        """Initialize the source with cards in draw order."""
        self._cards: deque[Card] = deque(cards)

    @classmethod
    def shoe(
        cls,
        num_decks: int = 6,
        rng: Random | None = None,
        shuffled: bool = True,
    ) -> "CardSource":
        """
        Build a multi-deck shoe.

        Args:
            num_decks: Number of decks in the shoe
            rng: Random number generator for shuffling
            shuffled: Shuffle the shoe before returning it
        """
        source = cls(create_shoe(num_decks))
        if shuffled:
            source.shuffle(rng)
        return source

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> "CardSource":
        """Build a source from card tokens, first token drawn first."""
        return cls(Card.from_code(code) for code in codes)

    def draw(self) -> Card:
        """Remove and return the front card."""
        if not self._cards:
            raise EmptyCardSource()
        return self._cards.popleft()

    def peek(self) -> Card:
        """Return the front card without removing it."""
        if not self._cards:
            raise EmptyCardSource("Cannot peek at an empty card source")
        return self._cards[0]

    def extend(self, cards: Iterable[Card]) -> None:
        """Append cards to the back of the source."""
        self._cards.extend(cards)

    def shuffle(self, rng: Random | None = None) -> None:
        """Shuffle the remaining cards in place."""
        cards = list(self._cards)
        (rng or Random()).shuffle(cards)
        self._cards = deque(cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __repr__(self) -> str:
        return f"CardSource({len(self._cards)} cards)"
