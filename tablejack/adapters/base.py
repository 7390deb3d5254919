"""
Base adapter interface for the tablejack engine.

This module defines the interface that platform-specific adapters must
implement to show the table to a player.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    An adapter is the presentation layer: it renders the snapshots the engine
    hands it and is told about game events. Player intents travel the other
    way, as calls on the engine.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current table snapshot to the platform.

        Args:
            state: Serialized `TableSnapshot` (hands, totals, balance, message)
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down.
        """
        pass
