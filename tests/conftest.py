"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the table, shoe and engine tests.
"""

import pytest

from tablejack.common.card import Card, Rank, Suit
from tablejack.common.shoe import Shoe
from tablejack.blackjack.table import BlackjackTable
from tablejack.events import EventBus


def parse_card(text: str) -> Card:
    """Build a card from its display form, e.g. "10♥" or "A♠"."""
    return Card(Rank(text[:-1]), Suit(text[-1]))


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus.reset()
    yield
    EventBus.reset()


@pytest.fixture
def cards():
    """Turn "10♠ 9♥ A♣" into a list of cards."""

    def _cards(text: str):
        return [parse_card(token) for token in text.split()]

    return _cards


@pytest.fixture
def stacked_table(cards):
    """Table whose shoe deals the given cards first, in order."""

    def _table(text: str, balance: float = 100.0, **kwargs) -> BlackjackTable:
        shoe = Shoe.stacked(cards(text))
        return BlackjackTable(balance=balance, shoe=shoe, **kwargs)

    return _table
