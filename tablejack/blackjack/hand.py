"""
Hand evaluation for blackjack.

Hands are plain sequences of cards. Every function here is pure and skips
entries that are not cards (such as a hidden hole card rendered as ``None``)
instead of failing on them.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from tablejack.blackjack.constants import BLACKJACK, SOFT_ACE_REDUCTION, get_blackjack_value
from tablejack.common.card import Card, Rank

Hand = Tuple[Card, ...]


def card_value(card: Card) -> int:
    """Base value of a card: pips for 2-10, 10 for faces, 11 for an ace."""
    return get_blackjack_value(card.rank)


def _cards(hand: Iterable[Optional[Card]]) -> List[Card]:
    return [card for card in hand if isinstance(card, Card)]


def _total_and_soft_aces(hand: Iterable[Optional[Card]]) -> Tuple[int, int]:
    cards = _cards(hand)
    total = sum(card_value(card) for card in cards)
    soft_aces = sum(1 for card in cards if card.rank == Rank.ACE)

    while total > BLACKJACK and soft_aces > 0:
        total -= SOFT_ACE_REDUCTION
        soft_aces -= 1

    return total, soft_aces


def total_of(hand: Iterable[Optional[Card]]) -> int:
    """
    Best total of a hand.

    Aces start at 11 and are downgraded to 1 one at a time while the hand is
    over 21. The result is the highest total not over 21 or, when every ace has
    already been downgraded, the smallest bust total.

    >>> from tablejack.common.card import Suit
    >>> total_of([Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.HEARTS), Card(Rank.NINE, Suit.CLUBS)])
    21
    """
    return _total_and_soft_aces(hand)[0]


def is_soft(hand: Iterable[Optional[Card]]) -> bool:
    """True when an ace is still counted as 11 in the best total."""
    return _total_and_soft_aces(hand)[1] > 0


def is_bust(hand: Iterable[Optional[Card]]) -> bool:
    return total_of(hand) > BLACKJACK


def is_blackjack(hand: Sequence[Optional[Card]]) -> bool:
    """A natural: exactly two cards totalling 21."""
    return len(hand) == 2 and total_of(hand) == BLACKJACK


def visible_cards(hand: Sequence[Card], hide_hole_card: bool) -> Tuple[Optional[Card], ...]:
    """
    The dealer's hand as the player may see it.

    With ``hide_hole_card`` every card after the first is replaced by ``None``.
    """
    if not hide_hole_card:
        return tuple(hand)
    return tuple(card if i == 0 else None for i, card in enumerate(hand))


def format_hand(hand: Iterable[Optional[Card]]) -> str:
    return " ".join("??" if card is None else str(card) for card in hand)
