"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Spades, Hearts, Diamonds and Clubs.

- `Rank`: An enum representing the thirteen ranks of a standard deck, Ace
through King. The enum value is the face shown on the card.

- `Card`: An immutable playing card. Cards compare and hash by rank and suit,
so the same card from two different decks of a shoe is indistinguishable.

This module is part of the `tablejack` package.
"""

from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, in deck-building order.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def is_face(self) -> bool:
        """True for Jack, Queen and King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    def __str__(self) -> str:
        return self.value


class Card:
    """
    Class representing a playing card.

    >>> card = Card(Rank.TEN, Suit.HEARTS)
    >>> print(card)
    10♥
    >>> Card(Rank.ACE, Suit.SPADES) == Card(Rank.ACE, Suit.SPADES)
    True
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        """
        Initialize a Card instance.

        :param rank: Rank of the card (one of the Rank enums)
        :param suit: Suit of the card (one of the Suit enums)
        """
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank!r}")
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit!r}")
        object.__setattr__(self, "_rank", rank)
        object.__setattr__(self, "_suit", suit)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return NotImplemented

    def __hash__(self):
        return hash((self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card(Rank.{self._rank.name}, Suit.{self._suit.name})"

    def __str__(self) -> str:
        return f"{self._rank.value}{self._suit.value}"
