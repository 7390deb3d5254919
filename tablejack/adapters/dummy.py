"""
Dummy adapter for the tablejack engine, used for testing and simulation.

This module provides a non-interactive adapter that records everything the
engine sends it so tests can inspect it afterwards.
"""

from typing import Any, Dict, List, Tuple, Union
from enum import Enum

from tablejack.adapters.base import PlatformAdapter


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't interact with any real platform. It keeps every
    rendered state and event for later inspection.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the dummy adapter.

        Args:
            verbose: Whether to print rendered states to stdout (useful for debugging)
        """
        self.verbose = verbose
        self.initialized = False
        self.shut_down = False

        # Track events for later inspection
        self.events: List[Tuple[str, Dict[str, Any]]] = []

        # Track rendered states for testing
        self.rendered_states: List[Dict[str, Any]] = []

    @property
    def last_state(self) -> Dict[str, Any]:
        return self.rendered_states[-1] if self.rendered_states else {}

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the table snapshot for later inspection.

        Args:
            state: The current table snapshot
        """
        self.rendered_states.append(state)

        if self.verbose:
            print("\n=== Table ===")
            print(f"Dealer: {' '.join(state.get('dealer_hand', []))} ({state.get('dealer_total')})")
            print(f"Player: {' '.join(state.get('player_hand', []))} ({state.get('player_total')})")
            print(f"Balance: {state.get('balance')}  Bet: {state.get('bet')}")
            if state.get("message"):
                print(state["message"])
            print("=============\n")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name
        self.events.append((event_type, data))

        if self.verbose:
            print(f"Event: {event_type} - {data}")

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True
