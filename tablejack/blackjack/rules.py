"""
Table configuration.

`TableRules` holds the handful of knobs the table supports. Hosts pass plain
config dicts; `TableRules.from_config` fills in defaults and rejects values
the table cannot run with.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from tablejack.blackjack.constants import (
    BLACKJACK_PAYOUT,
    DEALER_STANDS_ON,
    DEFAULT_BET,
    DEFAULT_NUM_DECKS,
    DEFAULT_RESHUFFLE_THRESHOLD,
    DEFAULT_STARTING_BALANCE,
    MIN_BET,
)


@dataclass(frozen=True)
class TableRules:
    """
    Rules and defaults for a single-player table.

    Attributes:
        num_decks: Decks in the shoe
        reshuffle_threshold: Rebuild the shoe once this many cards or fewer remain
        starting_balance: Bankroll used when nothing has been stored yet
        default_bet: Bet amount shown before the player changes it
        blackjack_payout: Multiple of the bet paid on a player natural
        dealer_stands_on: Dealer draws while below this total
        db_path: SQLite file holding the bankroll (in-memory when None)
    """

    num_decks: int = DEFAULT_NUM_DECKS
    reshuffle_threshold: int = DEFAULT_RESHUFFLE_THRESHOLD
    starting_balance: float = DEFAULT_STARTING_BALANCE
    default_bet: int = DEFAULT_BET
    blackjack_payout: float = BLACKJACK_PAYOUT
    dealer_stands_on: int = DEALER_STANDS_ON
    db_path: Optional[str] = None

    def __post_init__(self):
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if self.reshuffle_threshold < 0:
            raise ValueError("reshuffle_threshold must be non-negative")
        if self.starting_balance < 0:
            raise ValueError("starting_balance must be non-negative")
        if self.default_bet < MIN_BET:
            raise ValueError(f"default_bet must be at least {MIN_BET}")
        if self.blackjack_payout <= 0:
            raise ValueError("blackjack_payout must be positive")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "TableRules":
        """
        Build rules from a config dict, ignoring keys the table does not use.

        Args:
            config: Configuration options; missing keys take their defaults

        Returns:
            Validated TableRules
        """
        config = config or {}
        return cls(
            num_decks=int(config.get("num_decks", DEFAULT_NUM_DECKS)),
            reshuffle_threshold=int(
                config.get("reshuffle_threshold", DEFAULT_RESHUFFLE_THRESHOLD)
            ),
            starting_balance=float(
                config.get("starting_balance", DEFAULT_STARTING_BALANCE)
            ),
            default_bet=int(config.get("default_bet", DEFAULT_BET)),
            blackjack_payout=float(config.get("blackjack_payout", BLACKJACK_PAYOUT)),
            dealer_stands_on=int(config.get("dealer_stands_on", DEALER_STANDS_ON)),
            db_path=config.get("db_path"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert rules to a dictionary for serialization."""
        return asdict(self)
