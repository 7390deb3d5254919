"""Blackjack-specific constants and value mappings."""

from tablejack.common.card import Rank

BLACKJACK_VALUES = {
    Rank.ACE: 11,  # counted as 1 when 11 would bust the hand
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

BLACKJACK = 21
SOFT_ACE_REDUCTION = 10
DEALER_STANDS_ON = 17
BLACKJACK_PAYOUT = 1.5

DEFAULT_NUM_DECKS = 6
DEFAULT_RESHUFFLE_THRESHOLD = 52
DEFAULT_STARTING_BALANCE = 100.0
DEFAULT_BET = 10
MIN_BET = 1

BANKROLL_KEY = "bankroll"


def get_blackjack_value(rank: Rank) -> int:
    """Get the blackjack value for a given rank, aces counted high."""
    return BLACKJACK_VALUES[rank]
