"""Property-based tests for hand evaluation."""

from hypothesis import given, strategies as st

from twentyone.cards import Card, Rank, Suit
from twentyone.hand import Hand, can_split, hand_value

NON_ACES = [rank for rank in Rank if not rank.is_ace]


@st.composite
def card_strategy(draw, ranks=tuple(Rank)):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(ranks)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=8):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand(cards)


@given(hand_strategy())
def test_value_without_auto_aces_counts_aces_as_eleven(hand):
    expected = sum(11 if card.is_ace else card.value for card in hand)
    assert hand_value(hand, auto_aces=False) == expected


@given(st.lists(card_strategy(NON_ACES), max_size=4), card_strategy([Rank.ACE]))
def test_single_ace_stays_eleven_on_low_totals(others, ace):
    hand = Hand(others + [ace])
    if sum(card.value for card in others) <= 10:
        assert hand_value(hand, auto_aces=True) == hand_value(hand, auto_aces=False)


@given(hand_strategy())
def test_auto_aces_drops_ten_per_ace(hand):
    soft = hand_value(hand, auto_aces=True)
    hard = hand_value(hand, auto_aces=False)
    aces = sum(1 for card in hand if card.is_ace)
    difference = hard - soft
    assert difference % 10 == 0
    assert 0 <= difference // 10 <= aces
    if hard > 21 and aces:
        assert soft < hard


@given(hand_strategy())
def test_auto_aces_matches_running_total_rule(hand):
    total = sum(card.value for card in hand if not card.is_ace)
    for card in hand:
        if card.is_ace:
            total += 1 if total + 11 > 21 else 11
    assert hand_value(hand) == total


@given(hand_strategy(), st.randoms(use_true_random=False))
def test_value_ignores_card_order(hand, rnd):
    cards = list(hand)
    rnd.shuffle(cards)
    assert hand_value(Hand(cards)) == hand_value(hand)


@given(hand_strategy(max_cards=4))
def test_can_split_matches_rank_pairs(hand):
    expected = len(hand) == 2 and hand[0].rank == hand[1].rank
    assert can_split(hand) == expected
