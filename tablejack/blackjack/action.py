"""Defines the Action enum for the intents a player can send to the table."""
from enum import Enum


class Action(Enum):
    """Enum for the intents a player can send to the table."""

    DEAL = "deal"
    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    RESET = "reset"
