"""Tests for round state transitions."""

from twentyone.game.state import BETWEEN_ROUNDS, RoundState, is_valid_transition


class TestRoundState:

    def test_normal_flow(self):
        flow = [
            RoundState.IDLE,
            RoundState.BETTING,
            RoundState.DEALING,
            RoundState.PLAYER_TURN,
            RoundState.DEALER_TURN,
            RoundState.SETTLING,
            RoundState.ROUND_COMPLETE,
            RoundState.BETTING,
        ]
        for from_state, to_state in zip(flow, flow[1:]):
            assert is_valid_transition(from_state, to_state)

    def test_cannot_skip_phases(self):
        assert not is_valid_transition(RoundState.BETTING, RoundState.PLAYER_TURN)
        assert not is_valid_transition(RoundState.PLAYER_TURN, RoundState.SETTLING)

    def test_abort_from_inside_a_round(self):
        assert is_valid_transition(RoundState.DEALING, RoundState.ABORTED)
        assert not is_valid_transition(RoundState.IDLE, RoundState.ABORTED)
        assert is_valid_transition(RoundState.ABORTED, RoundState.BETTING)

    def test_between_rounds(self):
        assert RoundState.IDLE in BETWEEN_ROUNDS
        assert RoundState.PLAYER_TURN not in BETWEEN_ROUNDS

    def test_str(self):
        assert str(RoundState.PLAYER_TURN) == "Player Turn"

    def test_engine_states_match_enum(self):
        from twentyone.game.engine import Dealer

        assert Dealer.STATES == [s.name.lower() for s in RoundState]
        for transition in Dealer.TRANSITIONS:
            sources = transition["source"]
            if isinstance(sources, str):
                sources = [sources]
            dest = RoundState[transition["dest"].upper()]
            for source in sources:
                assert is_valid_transition(RoundState[source.upper()], dest)
