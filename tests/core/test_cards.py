"""Tests for Card and CardSource."""

import pytest
from random import Random

from twentyone.cards import Card, CardSource, Rank, Suit, create_deck, create_shoe
from twentyone.errors import EmptyCardSource
from twentyone.hand import Hand, hit_card


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_code_is_suit_then_rank(self):
        """Test two-character card tokens."""
        assert Card(Rank.ACE, Suit.SPADES).code == "SA"
        assert Card(Rank.TEN, Suit.HEARTS).code == "HT"
        assert Card(Rank.TWO, Suit.CLUBS).code == "C2"
        assert Card(Rank.QUEEN, Suit.DIAMONDS).code == "DQ"

    def test_from_code(self):
        """Test creating cards from tokens."""
        assert Card.from_code("SA") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_code("ht") == Card(Rank.TEN, Suit.HEARTS)
        assert Card.from_code(" C9 ") == Card(Rank.NINE, Suit.CLUBS)

    @pytest.mark.parametrize("code", ["", "S", "AS", "X5", "S1", "S10", "SAA"])
    def test_from_code_rejects_bad_tokens(self, code):
        """Test that malformed tokens raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_code(code)

    def test_every_card_code_parses_back(self):
        """Test that all 52 tokens are distinct and parse to their card."""
        deck = create_deck()
        assert len({card.code for card in deck}) == 52
        assert all(Card.from_code(card.code) == card for card in deck)

    def test_card_str(self):
        """Test string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert "A" in str(card)
        assert "♠" in str(card)

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestDeckBuilders:
    """Tests for create_deck and create_shoe."""

    def test_deck_has_52_unique_cards(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_deck_order(self):
        """Test that the deck runs S, H, C, D with ranks 2 to A."""
        deck = create_deck()
        assert deck[0].code == "S2"
        assert deck[12].code == "SA"
        assert deck[13].code == "H2"
        assert deck[-1].code == "DA"

    def test_deck_value_of_one_suit(self):
        """Thirteen cards of a suit total 95 with every ace counted as 11."""
        assert sum(card.value for card in create_deck()[:13]) == 95

    def test_shoe_size(self):
        assert len(create_shoe(6)) == 312
        assert len(create_shoe(1)) == 52

    def test_shoe_requires_a_deck(self):
        with pytest.raises(ValueError):
            create_shoe(0)


class TestCardSource:
    """Tests for the CardSource class."""

    def test_draw_removes_front_card(self, shoe):
        """Test FIFO draw semantics."""
        front = shoe.peek()
        size = len(shoe)
        assert shoe.draw() == front
        assert len(shoe) == size - 1

    def test_draw_order(self):
        source = CardSource.from_codes(["SA", "H2", "C3"])
        assert [source.draw().code for _ in range(3)] == ["SA", "H2", "C3"]

    def test_draw_empty_raises(self):
        """Test that drawing from an empty source is an error, not a sentinel."""
        source = CardSource()
        with pytest.raises(EmptyCardSource):
            source.draw()

    def test_empty_card_source_is_an_index_error(self):
        with pytest.raises(IndexError):
            CardSource().draw()

    def test_extend_appends_to_back(self):
        source = CardSource.from_codes(["SA"])
        source.extend([Card.from_code("HK"), Card.from_code("D5")])
        assert [card.code for card in source] == ["SA", "HK", "D5"]

    def test_shoe_is_shuffled(self):
        shuffled = CardSource.shoe(6, rng=Random(1))
        ordered = CardSource.shoe(6, shuffled=False)
        assert len(shuffled) == len(ordered) == 312
        assert list(shuffled) != list(ordered)
        assert sorted(c.code for c in shuffled) == sorted(c.code for c in ordered)

    def test_shuffle_is_reproducible(self):
        first = CardSource.shoe(2, rng=Random(7))
        second = CardSource.shoe(2, rng=Random(7))
        assert list(first) == list(second)

    def test_hit_card_moves_front_card_into_hand(self):
        source = CardSource.from_codes(["SA", "H2"])
        hand = Hand()
        card = hit_card(source, hand)
        assert card.code == "SA"
        assert hand.codes == ["SA"]
        assert len(source) == 1
