"""
Decision provider protocol.

The round engine never decides anything for a player. At every decision
point it sends a request to a `DecisionProvider` and acts on the returned
`PlayerAction`. Notifications use the same channel; their responses are
ignored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Union

from twentyone.cards import Card
from twentyone.hand import Hand

if TYPE_CHECKING:
    from twentyone.game.player import Player


class Action(Enum):
    """Possible responses to a dealer request."""

    BET = auto()
    HIT = auto()
    STAND = auto()
    DOUBLE_DOWN = auto()
    SPLIT = auto()
    NONE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class PlayerAction:
    """A provider's answer. `amount` is only meaningful for bets."""

    action: Action
    amount: int = 0

    @classmethod
    def bet(cls, amount: int) -> "PlayerAction":
        """Create a bet response."""
        return cls(Action.BET, amount)

    def __str__(self) -> str:
        if self.action == Action.BET:
            return f"Bet({self.amount})"
        return str(self.action)


HIT = PlayerAction(Action.HIT)
STAND = PlayerAction(Action.STAND)
DOUBLE_DOWN = PlayerAction(Action.DOUBLE_DOWN)
SPLIT = PlayerAction(Action.SPLIT)
NO_ACTION = PlayerAction(Action.NONE)


class ErrorKind(Enum):
    """Recoverable errors reported back to the provider."""

    INSUFFICIENT_FUNDS = auto()
    UNEXPECTED_ACTION = auto()


@dataclass(frozen=True)
class PlayerActionError:
    """Why a response was rejected, and for which hand."""

    kind: ErrorKind
    hand_index: int
    action: PlayerAction

    def __str__(self) -> str:
        if self.kind == ErrorKind.INSUFFICIENT_FUNDS:
            return f"Not enough money for {self.action} on hand {self.hand_index}"
        return f"Cannot {self.action} on hand {self.hand_index}"


# --- Requests ---


@dataclass(frozen=True)
class RequestBet:
    """Ask the player for a bet. Requires `PlayerAction.bet(amount)`."""


@dataclass(frozen=True)
class RequestPlay:
    """Ask the player to act on one hand. Requires hit, stand, double down or split."""

    hand_index: int
    can_double: bool = False
    can_split: bool = False


@dataclass(frozen=True)
class NotifyUpCard:
    """The dealer's face-up card after the deal."""

    card: Card


@dataclass(frozen=True)
class NotifyDealerHit:
    """A card the dealer drew during the dealer turn."""

    card: Card


@dataclass(frozen=True)
class NotifyDealerFinalHand:
    """The dealer's complete hand, sent after settlement."""

    hand: Hand


@dataclass(frozen=True)
class NotifyError:
    """The previous response was rejected; the request will be repeated."""

    error: PlayerActionError


@dataclass(frozen=True)
class NotifyLowCards:
    """The card source ran low and is being replaced with a fresh shoe."""

    remaining: int


DealerRequest = Union[
    RequestBet,
    RequestPlay,
    NotifyUpCard,
    NotifyDealerHit,
    NotifyDealerFinalHand,
    NotifyError,
    NotifyLowCards,
]


# --- Context ---


@dataclass(frozen=True)
class PlayerContext:
    """The request concerns the player sitting at `seat`."""

    seat: int
    player: "Player"


class NoPlayer:
    """The request is a dealer-only event with no player attached."""

    _instance: "NoPlayer | None" = None

    def __new__(cls) -> "NoPlayer":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_PLAYER"


NO_PLAYER = NoPlayer()

RequestContext = Union[PlayerContext, NoPlayer]


class DecisionProvider(ABC):
    """
    Answers dealer requests.

    Implementations may block (read a terminal, run a policy) but must
    return synchronously. A provider that never returns a valid response
    stalls the round; the engine has no retry limit.
    """

    @abstractmethod
    def decide(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        """Return the response to `request`."""
        ...


DecisionFunction = Callable[[DealerRequest, RequestContext], PlayerAction]


class FunctionProvider(DecisionProvider):
    """Adapt a plain function to the provider interface."""

    def __init__(self, func: DecisionFunction) -> None:
        self._func = func

    def decide(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        return self._func(request, context)
