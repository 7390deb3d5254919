"""
Engine hosts for tablejack.

This package connects the table to a presentation layer, keeping side effects
such as bankroll persistence out of the round logic.
"""

from tablejack.engine.base import TableEngine
from tablejack.engine.blackjack import BlackjackEngine

__all__ = ["TableEngine", "BlackjackEngine"]
