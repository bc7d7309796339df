"""Play blackjack in the terminal against the round engine."""

import argparse
from dataclasses import replace
from random import Random
from typing import Callable, Sequence

from twentyone.cards import CardSource
from twentyone.game.engine import Dealer
from twentyone.game.player import Player
from twentyone.game.protocol import (
    DOUBLE_DOWN,
    HIT,
    NO_ACTION,
    SPLIT,
    STAND,
    DealerRequest,
    DecisionProvider,
    ErrorKind,
    NotifyDealerFinalHand,
    NotifyDealerHit,
    NotifyError,
    NotifyLowCards,
    NotifyUpCard,
    PlayerAction,
    PlayerContext,
    RequestBet,
    RequestContext,
    RequestPlay,
)
from twentyone.hand import Hand
from twentyone.logging_utils import get_logger, setup_logging
from twentyone.settings import config

logger = get_logger(__name__)

ACTION_WORDS = {
    "h": HIT,
    "hit": HIT,
    "s": STAND,
    "stand": STAND,
    "d": DOUBLE_DOWN,
    "double": DOUBLE_DOWN,
    "double down": DOUBLE_DOWN,
    "p": SPLIT,
    "split": SPLIT,
}


def format_hand(hand: Hand) -> str:
    """Render a hand as |♠A||♥T| plus its total."""
    cards = "".join(f"|{card}|" for card in hand)
    return f"{cards} Total value: {hand.value}"


def parse_action(text: str) -> PlayerAction:
    """Turn typed input into an action; anything unknown is NO_ACTION."""
    return ACTION_WORDS.get(" ".join(text.lower().split()), NO_ACTION)


def parse_bet(text: str) -> PlayerAction:
    """Turn typed input into a bet; anything but a whole number is NO_ACTION."""
    try:
        return PlayerAction.bet(int(text.strip()))
    except ValueError:
        return NO_ACTION


class TerminalProvider(DecisionProvider):
    """Ask a human at the terminal for every decision."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self._input = input_func
        self._output = output_func

    def decide(self, request: DealerRequest, context: RequestContext) -> PlayerAction:
        if isinstance(request, RequestBet) and isinstance(context, PlayerContext):
            self._output(f"Current Balance: {context.player.bankroll}")
            return parse_bet(self._input("Bet: "))

        if isinstance(request, RequestPlay) and isinstance(context, PlayerContext):
            hand = context.player.hands[request.hand_index]
            self._output(f"Your hand {request.hand_index + 1}:")
            self._output(format_hand(hand))
            choices = ["[H]it", "[S]tand"]
            if request.can_double:
                choices.append("[D]ouble Down")
            if request.can_split:
                choices.append("S[p]lit")
            return parse_action(self._input(f"Enter one of {', '.join(choices)}: "))

        if isinstance(request, NotifyUpCard):
            self._output(f"Dealer up card: {request.card}")
        elif isinstance(request, NotifyDealerHit):
            self._output(f"Dealer hit: {request.card}")
        elif isinstance(request, NotifyLowCards):
            self._output(f"Dealer low on cards ({request.remaining} left), shuffling a new shoe")
        elif isinstance(request, NotifyError):
            if request.error.kind == ErrorKind.INSUFFICIENT_FUNDS:
                self._output("Not enough money.")
            else:
                self._output("Cannot perform action.")
        elif isinstance(request, NotifyDealerFinalHand) and isinstance(context, PlayerContext):
            self._show_results(request.hand, context.player)

        return NO_ACTION

    def _show_results(self, dealer_hand: Hand, player: Player) -> None:
        dealer_value = dealer_hand.value
        self._output("Dealer hand:")
        self._output(format_hand(dealer_hand))
        for i, hand in enumerate(player.hands):
            value = hand.value
            self._output(f"Player Hand {i + 1}:")
            self._output(format_hand(hand))
            if value <= 21 and (value > dealer_value or dealer_value > 21):
                result = "Win!"
            elif value > 21 or value < dealer_value:
                result = "Loss."
            else:
                result = "Push."
            self._output(f"Result Hand {i + 1}: {result}")
        self._output(f"Balance: {player.bankroll}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twentyone", description=__doc__)
    parser.add_argument("--decks", type=int, default=config.table.num_decks, help="decks in the shoe")
    parser.add_argument(
        "--bankroll", type=int, default=config.table.starting_bankroll, help="starting money"
    )
    parser.add_argument(
        "--hit-soft-17",
        action="store_true",
        default=config.table.hit_soft_17,
        help="dealer hits soft 17",
    )
    parser.add_argument("--rounds", type=int, default=None, help="stop after this many rounds")
    parser.add_argument("--seed", type=int, default=None, help="shuffle seed")
    return parser


def main(
    argv: Sequence[str] | None = None,
    provider: DecisionProvider | None = None,
) -> int:
    """Run the terminal game. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(config.logging.level)

    rules = replace(
        config.round_config(),
        stand_on_soft_17=not args.hit_soft_17,
        shoe_decks=args.decks,
    )
    rng = Random(args.seed)
    dealer = Dealer(
        CardSource.shoe(args.decks, rng=rng),
        rules,
        provider or TerminalProvider(),
        rng=rng,
    )
    player = Player(bankroll=args.bankroll, name="You")
    dealer.add_player(player)

    rounds = 0
    try:
        while player.bankroll > 0 and (args.rounds is None or rounds < args.rounds):
            dealer.play_round(clear_table=True)
            rounds += 1
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed after %d round(s)", rounds)

    print(f"Final balance: {player.bankroll}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
