"""
State transition functions for the blackjack table.

This module provides pure functions for moving a `RoundState` from one phase
to the next. Cards are passed in by the caller; nothing here touches the shoe,
the event bus or storage. Settlement arithmetic is exposed separately as
`StateTransitionEngine.settle_delta` so hosts can reason about bankroll
changes without a state object.
"""

from dataclasses import replace
from typing import Optional, Tuple

from tablejack.blackjack.constants import BLACKJACK, BLACKJACK_PAYOUT, DEALER_STANDS_ON
from tablejack.blackjack.hand import is_blackjack, is_bust, total_of
from tablejack.blackjack.state import Outcome, RoundPhase, RoundState
from tablejack.common.card import Card

_MESSAGES = {
    Outcome.BLACKJACK_PUSH: "Both Blackjack! Push.",
    Outcome.PLAYER_BLACKJACK: "Blackjack! You win 3:2.",
    Outcome.DEALER_BLACKJACK: "Dealer Blackjack. You lose.",
    Outcome.PLAYER_BUST: "You busted. You lose.",
    Outcome.DEALER_BUST: "Dealer busts. You win!",
    Outcome.PLAYER_WIN: "You win!",
    Outcome.DEALER_WIN: "You lose.",
    Outcome.PUSH: "Push.",
}

_DOUBLED_MESSAGES = {
    Outcome.PLAYER_BUST: "Busted after double. You lose.",
    Outcome.DEALER_BUST: "Dealer busts. You win (doubled)!",
    Outcome.PLAYER_WIN: "You win (doubled)!",
    Outcome.DEALER_WIN: "You lose (doubled).",
    Outcome.PUSH: "Push on a double.",
}

INVALID_BET_MESSAGE = "Pick a valid bet."
CANNOT_DOUBLE_MESSAGE = "Not enough balance to double."


class StateTransitionEngine:
    """
    Pure functions for state transitions at the table.

    This class contains static methods that implement round transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def settle_delta(
        outcome: Outcome,
        bet: float,
        doubled: bool = False,
        blackjack_payout: float = BLACKJACK_PAYOUT,
    ) -> float:
        """
        Signed bankroll change for a settled round.

        Args:
            outcome: How the round ended
            bet: Base stake for the round
            doubled: Whether the stake was doubled
            blackjack_payout: Multiple paid on a player natural

        Returns:
            Positive for a win, negative for a loss, zero for a push
        """
        stake = bet * 2 if doubled else bet
        if outcome == Outcome.PLAYER_BLACKJACK:
            return bet * blackjack_payout
        if outcome.is_player_win:
            return stake
        if outcome.is_push:
            return 0
        return -stake

    @staticmethod
    def message_for(outcome: Outcome, doubled: bool = False) -> str:
        if doubled and outcome in _DOUBLED_MESSAGES:
            return _DOUBLED_MESSAGES[outcome]
        return _MESSAGES[outcome]

    @staticmethod
    def compare_totals(player_total: int, dealer_total: int) -> Outcome:
        """Outcome of a round that reached the dealer with the player standing."""
        if dealer_total > BLACKJACK:
            return Outcome.DEALER_BUST
        if player_total > dealer_total:
            return Outcome.PLAYER_WIN
        if player_total < dealer_total:
            return Outcome.DEALER_WIN
        return Outcome.PUSH

    @staticmethod
    def natural_outcome(
        player_hand: Tuple[Card, ...], dealer_hand: Tuple[Card, ...]
    ) -> Optional[Outcome]:
        player_bj = is_blackjack(player_hand)
        dealer_bj = is_blackjack(dealer_hand)
        if player_bj and dealer_bj:
            return Outcome.BLACKJACK_PUSH
        if player_bj:
            return Outcome.PLAYER_BLACKJACK
        if dealer_bj:
            return Outcome.DEALER_BLACKJACK
        return None

    @staticmethod
    def dealer_should_draw(
        dealer_hand: Tuple[Card, ...], stands_on: int = DEALER_STANDS_ON
    ) -> bool:
        """The dealer draws below ``stands_on`` and stands on any 17, soft or hard."""
        return total_of(dealer_hand) < stands_on

    @staticmethod
    def reject(state: RoundState, message: str) -> RoundState:
        """Record a validation failure without changing anything else."""
        return replace(state, message=message)

    @staticmethod
    def set_bet(state: RoundState, amount: int) -> RoundState:
        return replace(state, bet=amount)

    @staticmethod
    def deal(
        state: RoundState,
        bet: int,
        player_hand: Tuple[Card, ...],
        dealer_hand: Tuple[Card, ...],
        blackjack_payout: float = BLACKJACK_PAYOUT,
    ) -> RoundState:
        """
        Start a round with the opening two cards on each side.

        Args:
            state: Current state, expected to be in BETTING
            bet: Validated stake for the round
            player_hand: Player's first and second card
            dealer_hand: Dealer's up card and hole card
            blackjack_payout: Multiple paid on a player natural

        Returns:
            New state in PLAYER_TURN, or SETTLE when either side has a natural
        """
        new_state = replace(
            state,
            phase=RoundPhase.PLAYER_TURN,
            bet=bet,
            player_hand=tuple(player_hand),
            dealer_hand=tuple(dealer_hand),
            can_double=state.balance >= bet,
            message="",
            outcome=None,
            doubled=False,
            round_number=state.round_number + 1,
            last_delta=0.0,
        )

        outcome = StateTransitionEngine.natural_outcome(
            new_state.player_hand, new_state.dealer_hand
        )
        if outcome is not None:
            # An opening natural keeps the double flag set at the deal
            settled = StateTransitionEngine.settle(new_state, outcome, blackjack_payout)
            return replace(settled, can_double=new_state.can_double)
        return new_state

    @staticmethod
    def hit(state: RoundState, card: Card) -> RoundState:
        """Give the player one card; a bust settles the round."""
        new_state = replace(
            state,
            player_hand=state.player_hand + (card,),
            can_double=False,
        )
        if is_bust(new_state.player_hand):
            return StateTransitionEngine.settle(new_state, Outcome.PLAYER_BUST)
        return new_state

    @staticmethod
    def double(state: RoundState, card: Card) -> RoundState:
        """
        Double the stake and give the player exactly one card.

        A bust settles the round at the doubled stake. Otherwise the state
        moves to DEALER_TURN; the player takes no further cards.
        """
        new_state = replace(
            state,
            player_hand=state.player_hand + (card,),
            can_double=False,
            doubled=True,
        )
        if is_bust(new_state.player_hand):
            return StateTransitionEngine.settle(new_state, Outcome.PLAYER_BUST)
        return replace(new_state, phase=RoundPhase.DEALER_TURN)

    @staticmethod
    def begin_dealer_turn(state: RoundState) -> RoundState:
        return replace(state, phase=RoundPhase.DEALER_TURN, can_double=False)

    @staticmethod
    def dealer_draw(state: RoundState, card: Card) -> RoundState:
        return replace(state, dealer_hand=state.dealer_hand + (card,))

    @staticmethod
    def resolve(state: RoundState) -> RoundState:
        """Compare final totals after the dealer has played and settle."""
        outcome = StateTransitionEngine.compare_totals(
            total_of(state.player_hand), total_of(state.dealer_hand)
        )
        return StateTransitionEngine.settle(state, outcome)

    @staticmethod
    def settle(
        state: RoundState,
        outcome: Outcome,
        blackjack_payout: float = BLACKJACK_PAYOUT,
    ) -> RoundState:
        """
        Apply the settlement for ``outcome`` and move to SETTLE.

        Args:
            state: State holding the final hands
            outcome: How the round ended
            blackjack_payout: Multiple paid on a player natural

        Returns:
            New settled state with the balance adjusted
        """
        delta = StateTransitionEngine.settle_delta(
            outcome, state.bet, state.doubled, blackjack_payout
        )
        return replace(
            state,
            phase=RoundPhase.SETTLE,
            can_double=False,
            balance=state.balance + delta,
            outcome=outcome,
            message=StateTransitionEngine.message_for(outcome, state.doubled),
            last_delta=delta,
        )

    @staticmethod
    def reset(state: RoundState) -> RoundState:
        """Clear the table for the next round, keeping balance and bet."""
        return replace(
            state,
            phase=RoundPhase.BETTING,
            player_hand=(),
            dealer_hand=(),
            can_double=False,
            message="",
            outcome=None,
            doubled=False,
            last_delta=0.0,
        )
