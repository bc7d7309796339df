"""Blackjack round engine with state machine."""

from random import Random
from typing import Callable

from transitions import Machine

from twentyone.cards import Card, CardSource
from twentyone.errors import RoundInProgressError
from twentyone.hand import Hand, can_split, hit_card
from twentyone.logging_utils import get_logger
from twentyone.rules import RoundConfig
from twentyone.game.events import EventEmitter, EventType, GameEvent
from twentyone.game.player import Player
from twentyone.game.protocol import (
    NO_PLAYER,
    Action,
    DealerRequest,
    DecisionFunction,
    DecisionProvider,
    ErrorKind,
    FunctionProvider,
    NotifyDealerFinalHand,
    NotifyDealerHit,
    NotifyError,
    NotifyLowCards,
    NotifyUpCard,
    PlayerAction,
    PlayerActionError,
    PlayerContext,
    RequestBet,
    RequestContext,
    RequestPlay,
)
from twentyone.game.settlement import Outcome, Settlement, settle_player
from twentyone.game.state import BETWEEN_ROUNDS, RoundState

logger = get_logger(__name__)

_OUTCOME_EVENTS = {
    Outcome.BLACKJACK: EventType.PLAYER_BLACKJACK,
    Outcome.WIN: EventType.PLAYER_WINS,
    Outcome.PUSH: EventType.PUSH,
    Outcome.LOSE: EventType.PLAYER_LOSES,
    Outcome.BUST: EventType.PLAYER_LOSES,
}


class Dealer:
    """
    Blackjack round engine using a state machine.

    The dealer owns the card source, its own hand and the seated players,
    and plays one complete round per `play_round` call. Every player
    decision is delegated to the decision provider; the engine itself is
    UI-agnostic and reports progress through events and log records.

    Players may only be added or removed between rounds.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {
            "trigger": "start_betting",
            "source": ["idle", "round_complete", "aborted"],
            "dest": "betting",
        },
        {"trigger": "start_dealing", "source": "betting", "dest": "dealing"},
        {"trigger": "start_player_turns", "source": "dealing", "dest": "player_turn"},
        {"trigger": "start_dealer_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "start_settlement", "source": "dealer_turn", "dest": "settling"},
        {"trigger": "finish_round", "source": "settling", "dest": "round_complete"},
        {
            "trigger": "abort_round",
            "source": ["betting", "dealing", "player_turn", "dealer_turn", "settling"],
            "dest": "aborted",
        },
    ]

    def __init__(
        self,
        card_source: CardSource,
        config: RoundConfig,
        provider: DecisionProvider | DecisionFunction,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a dealer.

        Args:
            card_source: The cards to deal from, front first
            config: Table rules
            provider: Answers bet and play requests; a plain function
                taking (request, context) is accepted as well
            rng: Random number generator used when a fresh shoe is needed
        """
        if not isinstance(provider, DecisionProvider):
            provider = FunctionProvider(provider)

        self._source = card_source
        self._config = config
        self._provider = provider
        self._rng = rng or Random()

        self._hand = Hand()
        self._players: list[Player] = []
        self._bets: list[int] = []
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    # --- Table access ---

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def hand(self) -> Hand:
        """The dealer's hand."""
        return self._hand

    @property
    def card_source(self) -> CardSource:
        return self._source

    @property
    def players(self) -> tuple[Player, ...]:
        """Seated players in table order."""
        return tuple(self._players)

    @property
    def bets(self) -> tuple[int, ...]:
        """Amount each player has wagered in the current or last round."""
        return tuple(self._bets)

    @property
    def config(self) -> RoundConfig:
        return self._config

    @config.setter
    def config(self, config: RoundConfig) -> None:
        self._require_between_rounds("change the rules")
        self._config = config

    def add_player(self, player: Player) -> int:
        """Seat a player at the end of the table and return the seat index."""
        self._require_between_rounds("add a player")
        self._players.append(player)
        return len(self._players) - 1

    def remove_player(self, seat: int) -> Player:
        """Remove and return the player at `seat`."""
        self._require_between_rounds("remove a player")
        return self._players.pop(seat)

    def clear_table(self) -> None:
        """Empty the dealer hand and give every player one empty hand."""
        self._require_between_rounds("clear the table")
        self._clear_table()

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def _require_between_rounds(self, what: str) -> None:
        if self.state not in BETWEEN_ROUNDS:
            raise RoundInProgressError(f"Cannot {what} while a round is in progress ({self.state})")

    def _clear_table(self) -> None:
        self._hand.clear()
        for player in self._players:
            player.reset_hands()
        self.events.emit_new(EventType.TABLE_CLEARED)

    # --- Round ---

    def play_round(self, clear_table: bool = True) -> list[Settlement]:
        """
        Play one complete round.

        Args:
            clear_table: Reset every player to one empty hand first. When
                False, existing hands are kept: the first two cards go onto
                hand 0 and every carried hand is played and settled again
                against the single new wager. Keeping them consistent is
                the caller's responsibility.

        Returns:
            One settlement per player, in seat order.

        Raises:
            EmptyCardSource: The card source ran out mid-round. The round
                is aborted and wagers already taken are not returned.
        """
        self.start_betting()
        try:
            return self._play_round(clear_table)
        except Exception:
            self.abort_round()
            self.events.emit_new(EventType.ROUND_ABORTED, cards_remaining=len(self._source))
            logger.exception("Round aborted")
            raise

    def _play_round(self, clear_table: bool) -> list[Settlement]:
        self._replace_source_if_low()

        if clear_table:
            self._clear_table()
        else:
            self._hand.clear()
            for player in self._players:
                if not player.hands:
                    player.add_hand()

        self._bets = [0] * len(self._players)
        self.events.emit_new(EventType.ROUND_STARTED, players=len(self._players))
        logger.info("Round started with %d player(s)", len(self._players))

        self._collect_bets()

        self.start_dealing()
        self._deal_initial_cards()

        self.start_player_turns()
        for seat, player in enumerate(self._players):
            self._play_player(seat, player)

        self.start_dealer_turn()
        dealer_busted = self._play_dealer()

        self.start_settlement()
        settlements = self._settle(dealer_busted)

        self.finish_round()
        return settlements

    def _replace_source_if_low(self) -> None:
        threshold = self._config.low_cards_threshold
        remaining = len(self._source)
        if threshold and remaining < threshold:
            self._notify(NotifyLowCards(remaining), NO_PLAYER)
            self._source = CardSource.shoe(self._config.shoe_decks, rng=self._rng)
            self.events.emit_new(
                EventType.LOW_CARDS,
                remaining=remaining,
                new_size=len(self._source),
            )
            logger.info("Card source low (%d left), replaced with %d cards", remaining, len(self._source))

    # --- Provider channel ---

    def _ask(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        response = self._provider.decide(request, context)
        logger.debug("%r -> %s", request, response)
        return response

    def _notify(self, request: DealerRequest, context: RequestContext) -> None:
        self._provider.decide(request, context)

    def _reject(
        self,
        context: PlayerContext,
        kind: ErrorKind,
        hand_index: int,
        response: PlayerAction,
    ) -> None:
        """Report a rejected response; the caller repeats its request."""
        error = PlayerActionError(kind, hand_index, response)
        logger.warning("Seat %d: %s", context.seat, error)
        event_type = (
            EventType.INSUFFICIENT_FUNDS
            if kind == ErrorKind.INSUFFICIENT_FUNDS
            else EventType.INVALID_ACTION
        )
        self.events.emit_new(
            event_type,
            seat=context.seat,
            hand_index=hand_index,
            action=str(response),
        )
        self._notify(NotifyError(error), context)

    # --- Phases ---

    def _collect_bets(self) -> None:
        """Ask every player for a bet until a valid one is given."""
        for seat, player in enumerate(self._players):
            context = PlayerContext(seat, player)
            while True:
                response = self._ask(RequestBet(), context)
                if response.action != Action.BET or not self._config.accepts_bet(response.amount):
                    self._reject(context, ErrorKind.UNEXPECTED_ACTION, 0, response)
                    continue
                if not player.can_afford(response.amount):
                    self._reject(context, ErrorKind.INSUFFICIENT_FUNDS, 0, response)
                    continue
                break

            player.bankroll -= response.amount
            self._bets[seat] = response.amount
            self.events.emit_new(
                EventType.BET_PLACED,
                seat=seat,
                amount=response.amount,
                bankroll=player.bankroll,
            )

    def _deal_initial_cards(self) -> None:
        """Deal dealer, then each player, twice; then show the up card."""
        for round_index in range(2):
            self._deal_card(self._hand, face_up=round_index == 1)
            for seat, player in enumerate(self._players):
                self._deal_card(player.hands[0], seat=seat)

        self._notify(NotifyUpCard(self._hand[1]), NO_PLAYER)

    def _deal_card(
        self,
        hand: Hand,
        seat: int | None = None,
        hand_index: int = 0,
        face_up: bool = True,
    ) -> Card:
        """Deal a card from the source to a hand."""
        card = hit_card(self._source, hand)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card.code if face_up else "??",
            hand="dealer" if seat is None else "player",
            seat=seat,
            hand_index=hand_index,
        )
        return card

    def _can_split(self, player: Player, hand_index: int) -> bool:
        """A single split of the original hand, when the rules allow it."""
        return (
            self._config.splitting_enabled
            and hand_index == 0
            and len(player.hands) == 1
            and can_split(player.hands[0])
        )

    def _play_player(self, seat: int, player: Player) -> None:
        """
        Play every hand of one player.

        Hands are visited by index and the hand count is re-read on every
        pass, since a split appends a hand while the loop is running.
        """
        context = PlayerContext(seat, player)
        bet = self._bets[seat]
        hand_count = len(player.hands)
        can_double = [self._config.doubling_enabled and player.can_afford(bet)] * hand_count
        stood = [False] * hand_count

        hand_index = 0
        while hand_index < len(player.hands):
            hand = player.hands[hand_index]
            if hand.is_busted:
                stood[hand_index] = True

            while not stood[hand_index]:
                split_allowed = self._can_split(player, hand_index)
                response = self._ask(
                    RequestPlay(
                        hand_index,
                        can_double=can_double[hand_index] and player.can_afford(bet),
                        can_split=split_allowed and player.can_afford(bet),
                    ),
                    context,
                )
                action = response.action

                if action == Action.HIT:
                    self._deal_card(hand, seat, hand_index)
                    can_double[hand_index] = False
                    self.events.emit_new(
                        EventType.PLAYER_HIT, seat=seat, hand_index=hand_index, hand_value=hand.value
                    )

                elif action == Action.STAND:
                    stood[hand_index] = True
                    self.events.emit_new(
                        EventType.PLAYER_STAND, seat=seat, hand_index=hand_index, hand_value=hand.value
                    )

                elif action == Action.DOUBLE_DOWN and can_double[hand_index]:
                    if not player.can_afford(bet):
                        self._reject(context, ErrorKind.INSUFFICIENT_FUNDS, hand_index, response)
                        continue
                    player.bankroll -= bet
                    self._bets[seat] += bet
                    self._deal_card(hand, seat, hand_index)
                    can_double[hand_index] = False
                    stood[hand_index] = True
                    self.events.emit_new(
                        EventType.PLAYER_DOUBLE,
                        seat=seat,
                        hand_index=hand_index,
                        hand_value=hand.value,
                        total_bet=self._bets[seat],
                    )

                elif action == Action.SPLIT and split_allowed:
                    if not player.can_afford(bet):
                        self._reject(context, ErrorKind.INSUFFICIENT_FUNDS, hand_index, response)
                        continue
                    player.bankroll -= bet
                    self._bets[seat] += bet

                    new_hand = player.add_hand()
                    new_hand.add_card(hand.pop())
                    self._deal_card(hand, seat, 0)
                    self._deal_card(new_hand, seat, 1)

                    double_after_split = (
                        self._config.doubling_enabled and self._config.double_after_split_enabled
                    )
                    can_double = [double_after_split, double_after_split]
                    stood.append(False)
                    self.events.emit_new(
                        EventType.PLAYER_SPLIT,
                        seat=seat,
                        hand1_value=hand.value,
                        hand2_value=new_hand.value,
                    )

                else:
                    self._reject(context, ErrorKind.UNEXPECTED_ACTION, hand_index, response)
                    continue

                if hand.is_busted:
                    stood[hand_index] = True
                    self.events.emit_new(
                        EventType.PLAYER_BUSTS, seat=seat, hand_index=hand_index, hand_value=hand.value
                    )

            hand_index += 1

    def _play_dealer(self) -> bool:
        """
        Draw to 17, with one extra card on a soft 17 under H17 rules.

        Returns:
            True if the dealer busted.
        """
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=self._hand.codes,
            hand_value=self._hand.value,
        )

        while self._hand.value < 17:
            self._dealer_hit()

        if not self._config.stand_on_soft_17 and self._is_soft_17():
            self._dealer_hit()

        busted = self._hand.is_busted
        if busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self._hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self._hand.value)
        logger.info("Dealer finished on %d%s", self._hand.value, " (bust)" if busted else "")
        return busted

    def _is_soft_17(self) -> bool:
        """A 17 holding an ace with every ace counted as 11 (A-6 but not A-A-5)."""
        hand = self._hand
        return hand.value == 17 and hand.has_ace and hand.value == hand.hard_value

    def _dealer_hit(self) -> None:
        card = self._deal_card(self._hand)
        self.events.emit_new(EventType.DEALER_HITS, card=card.code, hand_value=self._hand.value)
        self._notify(NotifyDealerHit(card), NO_PLAYER)

    def _settle(self, dealer_busted: bool) -> list[Settlement]:
        """Pay out every player, then show each of them the dealer's hand."""
        settlements = []
        for seat, player in enumerate(self._players):
            settlement = settle_player(
                seat,
                player.hands,
                self._bets[seat],
                self._hand,
                dealer_busted,
                self._config.blackjack_payout,
            )
            player.bankroll += settlement.returned
            settlements.append(settlement)

            for result in settlement.hands:
                self.events.emit_new(
                    _OUTCOME_EVENTS[result.outcome],
                    seat=seat,
                    hand_index=result.hand_index,
                    outcome=result.outcome.name,
                    amount=float(result.returned),
                )

        for seat, player in enumerate(self._players):
            self._notify(NotifyDealerFinalHand(Hand(list(self._hand.cards))), PlayerContext(seat, player))

        self.events.emit_new(
            EventType.ROUND_ENDED,
            results=[s.net for s in settlements],
            bankrolls=[p.bankroll for p in self._players],
        )
        logger.info("Round ended: %s", ", ".join(f"seat {s.seat} {s.net:+d}" for s in settlements))
        return settlements
