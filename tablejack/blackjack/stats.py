"""
This module contains the SessionStats class which tracks the results of the
rounds settled at a table during one session.
"""

from typing import Any, Dict, List

import numpy as np

from tablejack.blackjack.state import Outcome, RoundState
from tablejack.events import EngineEventType, EventEmitter


class SessionStats:
    """
    A class that holds the statistics of a session.
    """

    def __init__(self, starting_balance: float = 0.0):
        """
        Initializes the SessionStats with default values.
        """
        self.starting_balance = starting_balance
        self.rounds_played = 0
        self.player_wins = 0
        self.dealer_wins = 0
        self.pushes = 0
        self.blackjacks = 0
        self.doubles = 0
        self.deltas: List[float] = []

    def update(self, outcome: Outcome, delta: float, doubled: bool = False) -> None:
        """Record one settled round."""
        self.rounds_played += 1
        if outcome.is_player_win:
            self.player_wins += 1
        elif outcome.is_push:
            self.pushes += 1
        else:
            self.dealer_wins += 1
        if outcome == Outcome.PLAYER_BLACKJACK:
            self.blackjacks += 1
        if doubled:
            self.doubles += 1
        self.deltas.append(float(delta))

    def record(self, state: RoundState) -> None:
        """Record a settled round from its final state."""
        self.update(state.outcome, state.last_delta, state.doubled)

    def attach(self, emitter: EventEmitter):
        """
        Update from ROUND_ENDED events.

        Returns:
            Unsubscribe function
        """

        def on_round_ended(data: Dict[str, Any]) -> None:
            self.update(Outcome(data["outcome"]), data["delta"], data["doubled"])

        return emitter.on(EngineEventType.ROUND_ENDED, on_round_ended)

    def report(self) -> Dict[str, Any]:
        """
        Returns a dictionary containing the current statistics.
        """
        deltas = np.asarray(self.deltas, dtype=float)
        if deltas.size:
            balances = self.starting_balance + np.cumsum(deltas)
            net = float(deltas.sum())
            mean = float(deltas.mean())
            std = float(deltas.std())
            peak = float(max(self.starting_balance, balances.max()))
            trough = float(min(self.starting_balance, balances.min()))
        else:
            net = mean = std = 0.0
            peak = trough = float(self.starting_balance)

        return {
            "rounds_played": self.rounds_played,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "pushes": self.pushes,
            "blackjacks": self.blackjacks,
            "doubles": self.doubles,
            "net": net,
            "mean_delta": mean,
            "std_delta": std,
            "peak_balance": peak,
            "trough_balance": trough,
        }
