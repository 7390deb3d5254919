"""
The single-player blackjack table.

`BlackjackTable` owns the shoe and the current `RoundState` and implements the
intents a presentation layer can send: set a bet, deal, hit, stand, double and
start a new round. Each intent runs to completion synchronously, the dealer's
whole draw-to-17 included.

Intents that do not apply to the current phase are ignored without a message.
Validation failures (an unaffordable bet or double) leave the phase alone and
put a message in the state for the player to read.
"""

import logging
import math
import numbers
from typing import Any, Optional

from tablejack.blackjack.hand import format_hand, total_of
from tablejack.blackjack.rules import TableRules
from tablejack.blackjack.state import RoundPhase, RoundState, TableSnapshot
from tablejack.blackjack.transitions import (
    CANNOT_DOUBLE_MESSAGE,
    INVALID_BET_MESSAGE,
    StateTransitionEngine,
)
from tablejack.blackjack.constants import MIN_BET
from tablejack.common.card import Card
from tablejack.common.shoe import RandomSource, Shoe
from tablejack.events import EngineEventType, EventBus, EventEmitter

logger = logging.getLogger(__name__)


class BlackjackTable:
    """
    Round state machine for one player against the dealer.

    Phases run BETTING -> PLAYER_TURN -> DEALER_TURN -> SETTLE, with a
    direct BETTING -> SETTLE when either side is dealt a natural, and back to
    BETTING only through `reset`.
    """

    def __init__(
        self,
        rules: Optional[TableRules] = None,
        balance: Optional[float] = None,
        shoe: Optional[Shoe] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Initialize the table.

        Args:
            rules: Table rules (defaults used when None)
            balance: Starting bankroll; ``rules.starting_balance`` when None
            shoe: Pre-built shoe, mainly for replaying a known card order
            rng: Randomness provider for a shoe built here
            event_bus: Emitter for round events (the global bus when None)
        """
        self.rules = rules or TableRules()
        self.event_bus = event_bus or EventBus.get_instance()

        if shoe is None:
            shoe = Shoe(
                num_decks=self.rules.num_decks,
                reshuffle_threshold=self.rules.reshuffle_threshold,
                rng=rng,
                on_shuffle=self._on_shuffle,
            )
        elif shoe.on_shuffle is None:
            shoe.on_shuffle = self._on_shuffle
        self.shoe = shoe

        self.state = RoundState(
            bet=self.rules.default_bet,
            balance=self.rules.starting_balance if balance is None else balance,
        )

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def balance(self) -> float:
        return self.state.balance

    def snapshot(self) -> TableSnapshot:
        """Current state as the player may see it."""
        return TableSnapshot.from_state(self.state, self.shoe.cards_remaining)

    # Intents

    def set_bet(self, amount: Any) -> RoundState:
        """
        Change the bet for the next round.

        The amount is floored to a whole number and clamped to at least 1;
        anything that is not a number counts as 0.
        """
        if self.state.phase != RoundPhase.BETTING:
            return self._ignore("set_bet")

        try:
            bet = math.floor(float(amount))
        except (TypeError, ValueError, OverflowError):
            bet = 0
        self.state = StateTransitionEngine.set_bet(self.state, max(MIN_BET, bet))
        return self.state

    def new_round(self, bet: Optional[int] = None) -> RoundState:
        """
        Take the bet and deal two cards each, player first.

        Args:
            bet: Stake for the round; the current bet when None

        Returns:
            The new state
        """
        if self.state.phase != RoundPhase.BETTING:
            return self._ignore("new_round")

        if bet is None:
            bet = self.state.bet
        if not self._is_valid_bet(bet):
            logger.debug("Rejected bet %r with balance %s", bet, self.state.balance)
            return self._reject(INVALID_BET_MESSAGE)

        bet = int(bet)
        self.event_bus.emit(
            EngineEventType.PLAYER_BET,
            {"amount": bet, "balance": self.state.balance},
        )

        player_first, dealer_up, player_second, dealer_hole = self.shoe.draw(4)
        self.state = StateTransitionEngine.deal(
            self.state,
            bet,
            (player_first, player_second),
            (dealer_up, dealer_hole),
            self.rules.blackjack_payout,
        )

        self.event_bus.emit(
            EngineEventType.ROUND_STARTED,
            {"round_number": self.state.round_number, "bet": bet},
        )
        self._emit_card("player", player_first)
        self._emit_card("dealer", dealer_up)
        self._emit_card("player", player_second)
        self._emit_card("dealer", None)

        if self.state.phase == RoundPhase.SETTLE:
            self._reveal_hole_card()
            self._finish_round()
        return self.state

    def hit(self) -> RoundState:
        """Draw one card for the player."""
        if self.state.phase != RoundPhase.PLAYER_TURN:
            return self._ignore("hit")

        self._emit_action("hit")
        card = self.shoe.draw_one()
        self.state = StateTransitionEngine.hit(self.state, card)
        self._emit_card("player", card)

        if self.state.phase == RoundPhase.SETTLE:
            self._emit_bust()
            self._finish_round()
        return self.state

    def stand(self) -> RoundState:
        """Stop drawing; the dealer plays out and the round settles."""
        if self.state.phase != RoundPhase.PLAYER_TURN:
            return self._ignore("stand")

        self._emit_action("stand")
        self.state = StateTransitionEngine.begin_dealer_turn(self.state)
        self._play_dealer()
        self.state = StateTransitionEngine.resolve(self.state)
        self._finish_round()
        return self.state

    def double(self) -> RoundState:
        """
        Double the stake, take exactly one card and let the dealer play.

        Only offered as the first action of a round, and only when the
        bankroll covers twice the bet.
        """
        if self.state.phase != RoundPhase.PLAYER_TURN or not self.state.can_double:
            return self._ignore("double")

        if self.state.bet * 2 > self.state.balance:
            logger.debug(
                "Rejected double of %s with balance %s",
                self.state.bet,
                self.state.balance,
            )
            return self._reject(CANNOT_DOUBLE_MESSAGE)

        self._emit_action("double")
        card = self.shoe.draw_one()
        self.state = StateTransitionEngine.double(self.state, card)
        self._emit_card("player", card)

        if self.state.phase == RoundPhase.SETTLE:
            self._emit_bust()
        else:
            self._play_dealer()
            self.state = StateTransitionEngine.resolve(self.state)
        self._finish_round()
        return self.state

    def reset(self) -> RoundState:
        """Clear the hands and return to betting. The bet is kept."""
        if self.state.phase != RoundPhase.SETTLE:
            return self._ignore("reset")

        self.state = StateTransitionEngine.reset(self.state)
        return self.state

    # Internals

    def _is_valid_bet(self, bet: Any) -> bool:
        if isinstance(bet, bool) or not isinstance(bet, numbers.Real):
            return False
        if not math.isfinite(bet) or bet != int(bet):
            return False
        return MIN_BET <= bet <= self.state.balance

    def _ignore(self, intent: str) -> RoundState:
        logger.debug("Ignoring %s during %s", intent, self.state.phase.name)
        return self.state

    def _reject(self, message: str) -> RoundState:
        self.state = StateTransitionEngine.reject(self.state, message)
        self.event_bus.emit(
            EngineEventType.WARNING,
            {"message": message, "phase": self.state.phase.name},
        )
        return self.state

    def _play_dealer(self) -> None:
        self._reveal_hole_card()
        while StateTransitionEngine.dealer_should_draw(
            self.state.dealer_hand, self.rules.dealer_stands_on
        ):
            card = self.shoe.draw_one()
            self.state = StateTransitionEngine.dealer_draw(self.state, card)
            self._emit_card("dealer", card)
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION,
                {"action": "hit", "total": total_of(self.state.dealer_hand)},
            )
        self.event_bus.emit(
            EngineEventType.DEALER_ACTION,
            {"action": "stand", "total": total_of(self.state.dealer_hand)},
        )

    def _reveal_hole_card(self) -> None:
        if len(self.state.dealer_hand) > 1:
            self.event_bus.emit(
                EngineEventType.CARD_REVEALED,
                {"card": str(self.state.dealer_hand[1])},
            )

    def _finish_round(self) -> None:
        state = self.state
        logger.info(
            "Round %d settled: %s (player %s = %d, dealer %s = %d), delta %+g, balance %g",
            state.round_number,
            state.outcome.value,
            format_hand(state.player_hand),
            total_of(state.player_hand),
            format_hand(state.dealer_hand),
            total_of(state.dealer_hand),
            state.last_delta,
            state.balance,
        )
        self.event_bus.emit(
            EngineEventType.ROUND_ENDED,
            {
                "round_number": state.round_number,
                "outcome": state.outcome.value,
                "doubled": state.doubled,
                "bet": state.bet,
                "delta": state.last_delta,
                "balance": state.balance,
                "player_total": total_of(state.player_hand),
                "dealer_total": total_of(state.dealer_hand),
            },
        )
        if state.last_delta:
            self.event_bus.emit(
                EngineEventType.BANKROLL_UPDATED,
                {"balance": state.balance, "delta": state.last_delta},
            )

    def _emit_action(self, action: str) -> None:
        self.event_bus.emit(
            EngineEventType.PLAYER_ACTION,
            {"action": action, "round_number": self.state.round_number},
        )

    def _emit_bust(self) -> None:
        self.event_bus.emit(
            EngineEventType.HAND_BUSTED,
            {"total": total_of(self.state.player_hand), "stake": self.state.stake},
        )

    def _emit_card(self, recipient: str, card: Optional[Card]) -> None:
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {
                "recipient": recipient,
                "card": "??" if card is None else str(card),
                "cards_remaining": self.shoe.cards_remaining,
            },
        )

    def _on_shuffle(self, shoe: Shoe) -> None:
        self.event_bus.emit(
            EngineEventType.SHUFFLE,
            {"num_decks": shoe.num_decks, "cards": shoe.cards_remaining},
        )
