"""
Multi-deck shoe with draw-time reshuffling.

The top of the shoe is the end of the card list; every draw removes from there.
Whenever the shoe is empty or has shrunk to the reshuffle threshold, it is
replaced by a freshly built and shuffled shoe before the next card comes off,
so a draw never fails for lack of cards.
"""

import logging
import random
from typing import Callable, Iterable, List, Optional, Protocol

from tablejack.common.card import Card, Rank, Suit

logger = logging.getLogger(__name__)

CARDS_PER_DECK = len(Rank) * len(Suit)


class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float:
        ...


class Shoe:
    def __init__(
        self,
        num_decks: int = 6,
        reshuffle_threshold: int = 52,
        rng: Optional[RandomSource] = None,
        on_shuffle: Optional[Callable[["Shoe"], None]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of decks to use in the shoe (default is 6)
        :param reshuffle_threshold: Rebuild the shoe before a draw once this many
                                    cards or fewer remain (default is 52)
        :param rng: Randomness provider used for shuffling (default is a fresh
                    ``random.Random``)
        :param on_shuffle: Optional callback invoked with the shoe after every build
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if reshuffle_threshold < 0:
            raise ValueError("Reshuffle threshold must be non-negative")

        self.num_decks = num_decks
        self.reshuffle_threshold = reshuffle_threshold
        self.rng = rng if rng is not None else random.Random()
        self.on_shuffle = on_shuffle
        self.cards: List[Card] = []
        self._shuffle_count = 0

        self.rebuild()

    @classmethod
    def stacked(
        cls,
        cards: Iterable[Card],
        num_decks: int = 6,
        reshuffle_threshold: int = 0,
        rng: Optional[RandomSource] = None,
    ) -> "Shoe":
        """
        Build a shoe whose next draws return ``cards`` in the given order.

        Once the stacked cards run out (or reach the threshold) the shoe falls
        back to normal rebuilding.
        """
        shoe = cls(num_decks=num_decks, reshuffle_threshold=reshuffle_threshold, rng=rng)
        shoe.cards = list(reversed(list(cards)))
        return shoe

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the shoe."""
        return len(self.cards)

    @property
    def shuffle_count(self) -> int:
        """Number of times the shoe has been built, the initial build included."""
        return self._shuffle_count

    def build(self) -> List[Card]:
        """
        Produce a freshly shuffled list of ``52 * num_decks`` cards.

        Every (rank, suit) pair appears exactly ``num_decks`` times. The
        shuffle is Fisher-Yates driven by ``rng.random()``.
        """
        cards = [
            Card(rank, suit)
            for _ in range(self.num_decks)
            for rank in Rank
            for suit in Suit
        ]
        for i in range(len(cards) - 1, 0, -1):
            j = int(self.rng.random() * (i + 1))
            cards[i], cards[j] = cards[j], cards[i]
        return cards

    def rebuild(self) -> None:
        """Replace the shoe wholesale with a freshly built one."""
        self.cards = self.build()
        self._shuffle_count += 1
        logger.info(
            "Shuffled %d-deck shoe (%d cards, shuffle #%d)",
            self.num_decks,
            len(self.cards),
            self._shuffle_count,
        )
        if self.on_shuffle is not None:
            self.on_shuffle(self)

    def needs_reshuffle(self) -> bool:
        return not self.cards or len(self.cards) <= self.reshuffle_threshold

    def draw_one(self) -> Card:
        """Remove and return the top card, rebuilding first if the shoe is depleted."""
        if self.needs_reshuffle():
            self.rebuild()
        return self.cards.pop()

    def draw(self, num_cards: int = 1) -> List[Card]:
        """
        Remove and return ``num_cards`` cards from the top of the shoe.

        The depletion check runs before each card, so a request that crosses
        the threshold is completed from a fresh shoe.

        :param num_cards: Number of cards to draw (default is 1)
        :return: A list of exactly ``num_cards`` cards
        """
        if num_cards < 0:
            raise ValueError("Cannot draw a negative number of cards")
        return [self.draw_one() for _ in range(num_cards)]

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, reshuffle_threshold={self.reshuffle_threshold})"
