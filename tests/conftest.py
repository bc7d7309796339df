"""Pytest fixtures for round engine tests."""

import pytest
from random import Random

from twentyone.cards import CardSource
from twentyone.hand import Hand
from twentyone.rules import RoundConfig, default_config
from twentyone.game import Dealer, Player
from twentyone.game.providers import ScriptedProvider


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return CardSource.shoe(6, rng=rng)


@pytest.fixture
def rules():
    """Default ruleset."""
    return default_config()


@pytest.fixture
def h17_rules():
    """Dealer hits soft 17."""
    return RoundConfig(stand_on_soft_17=False)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand.from_codes("SA", "HK")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand.from_codes("SA", "H6")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand.from_codes("ST", "H6")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand.from_codes("S8", "H8")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand.from_codes("ST", "H6", "CK")


def stacked_dealer(codes, script=(), rules=None, bankrolls=(1000,)):
    """
    Build a dealer whose source deals `codes` in order.

    With one player the deal order is dealer, player, dealer, player, then
    player hits, then dealer hits.
    """
    provider = ScriptedProvider(script)
    dealer = Dealer(CardSource.from_codes(codes), rules or default_config(), provider)
    for bankroll in bankrolls:
        dealer.add_player(Player(bankroll=bankroll))
    return dealer, provider


@pytest.fixture
def make_dealer():
    """Factory fixture for dealers with a stacked card source."""
    return stacked_dealer
