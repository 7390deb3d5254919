"""
tablejack: a single-player blackjack table engine.
"""

__version__ = "0.1.0"
