"""Round engine, decision protocol and settlement."""

from twentyone.game.events import EventEmitter, EventType, GameEvent
from twentyone.game.state import RoundState
from twentyone.game.player import Player
from twentyone.game.protocol import (
    DOUBLE_DOWN,
    HIT,
    NO_ACTION,
    NO_PLAYER,
    SPLIT,
    STAND,
    Action,
    DecisionProvider,
    ErrorKind,
    FunctionProvider,
    NoPlayer,
    NotifyDealerFinalHand,
    NotifyDealerHit,
    NotifyError,
    NotifyLowCards,
    NotifyUpCard,
    PlayerAction,
    PlayerActionError,
    PlayerContext,
    RequestBet,
    RequestPlay,
)
from twentyone.game.settlement import Outcome, Settlement
from twentyone.game.engine import Dealer

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "RoundState",
    "Player",
    "DOUBLE_DOWN",
    "HIT",
    "NO_ACTION",
    "NO_PLAYER",
    "SPLIT",
    "STAND",
    "Action",
    "DecisionProvider",
    "ErrorKind",
    "FunctionProvider",
    "NoPlayer",
    "NotifyDealerFinalHand",
    "NotifyDealerHit",
    "NotifyError",
    "NotifyLowCards",
    "NotifyUpCard",
    "PlayerAction",
    "PlayerActionError",
    "PlayerContext",
    "RequestBet",
    "RequestPlay",
    "Outcome",
    "Settlement",
    "Dealer",
]
