"""
Base engine class for tablejack.

An engine hosts a table for a presentation layer: it forwards player intents
into the table, keeps the adapter informed and owns side effects such as
persistence.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from tablejack.adapters import PlatformAdapter
from tablejack.events import EventBus


class TableEngine(ABC):
    """
    Abstract base class for table engines.

    This class defines the common interface that engines implement: lifecycle
    hooks, a single entry point for player actions and rendering.
    """

    def __init__(self, adapter: PlatformAdapter, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering
            config: Configuration options for the table
        """
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = EventBus.get_instance()

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for play.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def execute_player_action(self, action: Any, **kwargs: Any) -> None:
        """
        Execute a player action.

        Args:
            action: Action to perform
        """
        pass

    @abstractmethod
    async def render_state(self) -> None:
        """
        Render the current state.
        """
        pass
