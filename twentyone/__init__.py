"""Blackjack round engine - 100% UI-agnostic."""

from twentyone.cards import Card, CardSource, Rank, Suit, create_deck, create_shoe
from twentyone.errors import EmptyCardSource, RoundInProgressError, TwentyOneError
from twentyone.hand import Hand, can_split, hand_value, hit_card, is_soft
from twentyone.rules import DEFAULT_CONFIG, RoundConfig, default_config

__all__ = [
    "Card",
    "CardSource",
    "Rank",
    "Suit",
    "create_deck",
    "create_shoe",
    "EmptyCardSource",
    "RoundInProgressError",
    "TwentyOneError",
    "Hand",
    "can_split",
    "hand_value",
    "hit_card",
    "is_soft",
    "DEFAULT_CONFIG",
    "RoundConfig",
    "default_config",
]
