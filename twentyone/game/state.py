"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: IDLE → BETTING → DEALING → PLAYER_TURN → DEALER_TURN → SETTLING → ROUND_COMPLETE
    """

    # No round played yet
    IDLE = auto()

    # Collecting bets from every player
    BETTING = auto()

    # Cards being dealt
    DEALING = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer plays
    DEALER_TURN = auto()

    # Paying out
    SETTLING = auto()

    # Round finished, ready for next
    ROUND_COMPLETE = auto()

    # Round stopped by a fatal error (card source ran out)
    ABORTED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# States in which the table may be changed
BETWEEN_ROUNDS = (RoundState.IDLE, RoundState.ROUND_COMPLETE, RoundState.ABORTED)

# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.IDLE: [RoundState.BETTING],
    RoundState.BETTING: [RoundState.DEALING, RoundState.ABORTED],
    RoundState.DEALING: [RoundState.PLAYER_TURN, RoundState.ABORTED],
    RoundState.PLAYER_TURN: [RoundState.DEALER_TURN, RoundState.ABORTED],
    RoundState.DEALER_TURN: [RoundState.SETTLING, RoundState.ABORTED],
    RoundState.SETTLING: [RoundState.ROUND_COMPLETE, RoundState.ABORTED],
    RoundState.ROUND_COMPLETE: [RoundState.BETTING],
    RoundState.ABORTED: [RoundState.BETTING],
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
