"""Ready-made decision providers."""

from collections import deque
from typing import Iterable

from twentyone.game.protocol import (
    HIT,
    NO_ACTION,
    STAND,
    DealerRequest,
    DecisionProvider,
    PlayerAction,
    PlayerContext,
    RequestBet,
    RequestContext,
    RequestPlay,
)


class ThresholdStrategy(DecisionProvider):
    """
    Flat-bet policy that hits below a fixed total.

    Bets `bet` every round (or the whole bankroll when less is left),
    hits while the hand is below `stand_at` and stands otherwise.
    """

    def __init__(self, bet: int = 10, stand_at: int = 17) -> None:
        self.bet = bet
        self.stand_at = stand_at

    def decide(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        if not isinstance(context, PlayerContext):
            return NO_ACTION

        if isinstance(request, RequestBet):
            return PlayerAction.bet(min(self.bet, context.player.bankroll))

        if isinstance(request, RequestPlay):
            hand = context.player.hands[request.hand_index]
            return HIT if hand.value < self.stand_at else STAND

        return NO_ACTION


class ScriptedProvider(DecisionProvider):
    """
    Replays a fixed list of responses.

    Bets and play actions are taken from the script in order; notifications
    are answered with NO_ACTION. Every request is recorded in `requests`
    as a (request, context) pair.
    """

    def __init__(self, script: Iterable[PlayerAction] = ()) -> None:
        self._script: deque[PlayerAction] = deque(script)
        self.requests: list[tuple[DealerRequest, RequestContext]] = []

    def push(self, *actions: PlayerAction) -> None:
        """Append responses to the end of the script."""
        self._script.extend(actions)

    @property
    def remaining(self) -> int:
        return len(self._script)

    def decide(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        self.requests.append((request, context))
        if not isinstance(request, (RequestBet, RequestPlay)):
            return NO_ACTION
        if not self._script:
            raise LookupError(f"Script exhausted at {request!r}")
        return self._script.popleft()

    def received(self, request_type: type) -> list[DealerRequest]:
        """Return the recorded requests of one type, oldest first."""
        return [r for r, _ in self.requests if isinstance(r, request_type)]
