"""
Immutable state models for the blackjack table.

This module provides dataclasses for representing the state of a round in an
immutable manner. They are produced by the pure transition functions in
`tablejack.blackjack.transitions`, which create new state instances rather
than modifying existing ones.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple

from tablejack.blackjack.hand import total_of, visible_cards
from tablejack.common.card import Card


class RoundPhase(Enum):
    """Phases of a round, in the order they are visited."""

    BETTING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    SETTLE = auto()


class Outcome(Enum):
    """How a settled round ended."""

    BLACKJACK_PUSH = "blackjack_push"
    PLAYER_BLACKJACK = "player_blackjack"
    DEALER_BLACKJACK = "dealer_blackjack"
    PLAYER_BUST = "player_bust"
    DEALER_BUST = "dealer_bust"
    PLAYER_WIN = "player_win"
    DEALER_WIN = "dealer_win"
    PUSH = "push"

    @property
    def is_player_win(self) -> bool:
        return self in (Outcome.PLAYER_BLACKJACK, Outcome.DEALER_BUST, Outcome.PLAYER_WIN)

    @property
    def is_push(self) -> bool:
        return self in (Outcome.BLACKJACK_PUSH, Outcome.PUSH)


@dataclass(frozen=True)
class RoundState:
    """
    Immutable representation of the table between intents.

    Attributes:
        phase: Current phase of the round
        player_hand: Cards held by the player
        dealer_hand: Cards held by the dealer, hole card included
        bet: Stake for the round (the doubled stake is tracked by ``doubled``)
        balance: Player bankroll
        can_double: Whether double is still offered
        message: Human-readable result or validation message
        outcome: How the round ended, once settled
        doubled: Whether the player doubled this round
        round_number: Rounds dealt so far
        last_delta: Signed bankroll change from the last settlement
    """

    phase: RoundPhase = RoundPhase.BETTING
    player_hand: Tuple[Card, ...] = ()
    dealer_hand: Tuple[Card, ...] = ()
    bet: int = 10
    balance: float = 100.0
    can_double: bool = False
    message: str = ""
    outcome: Optional[Outcome] = None
    doubled: bool = False
    round_number: int = 0
    last_delta: float = 0.0

    @property
    def stake(self) -> int:
        """Amount at risk this round."""
        return self.bet * 2 if self.doubled else self.bet

    @property
    def hole_card_hidden(self) -> bool:
        return self.phase == RoundPhase.PLAYER_TURN


@dataclass(frozen=True)
class TableSnapshot:
    """
    What a presentation layer may see of the table.

    The dealer's hole card is ``None`` while the player is acting and
    ``dealer_total`` then only counts the up card.
    """

    phase: RoundPhase
    player_hand: Tuple[Card, ...]
    dealer_hand: Tuple[Optional[Card], ...]
    balance: float
    bet: int
    can_double: bool
    message: str
    cards_remaining_in_shoe: int
    player_total: int
    dealer_total: int
    outcome: Optional[Outcome] = None

    @classmethod
    def from_state(cls, state: RoundState, cards_remaining: int) -> "TableSnapshot":
        dealer_hand = visible_cards(state.dealer_hand, state.hole_card_hidden)
        return cls(
            phase=state.phase,
            player_hand=state.player_hand,
            dealer_hand=dealer_hand,
            balance=state.balance,
            bet=state.bet,
            can_double=state.can_double,
            message=state.message,
            cards_remaining_in_shoe=cards_remaining,
            player_total=total_of(state.player_hand),
            dealer_total=total_of(dealer_hand),
            outcome=state.outcome,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the snapshot
        """
        return {
            "phase": self.phase.name,
            "player_hand": [str(card) for card in self.player_hand],
            "dealer_hand": [
                "??" if card is None else str(card) for card in self.dealer_hand
            ],
            "balance": self.balance,
            "bet": self.bet,
            "can_double": self.can_double,
            "message": self.message,
            "cards_remaining_in_shoe": self.cards_remaining_in_shoe,
            "player_total": self.player_total,
            "dealer_total": self.dealer_total,
            "outcome": self.outcome.value if self.outcome else None,
        }
