"""
Blackjack engine implementation.

This module provides the BlackjackEngine class, which hosts a `BlackjackTable`
for a platform adapter. The table itself stays synchronous and free of side
effects; the engine reads the stored bankroll at start, saves it whenever a
round changes it, relays table events to the adapter and renders a fresh
snapshot after every intent.
"""

from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import time

from tablejack.adapters import PlatformAdapter
from tablejack.blackjack.action import Action
from tablejack.blackjack.bankroll import BankrollStore, SQLiteBankrollStore
from tablejack.blackjack.rules import TableRules
from tablejack.blackjack.state import RoundPhase, RoundState, TableSnapshot
from tablejack.blackjack.stats import SessionStats
from tablejack.blackjack.table import BlackjackTable
from tablejack.common.shoe import RandomSource, Shoe
from tablejack.engine.base import TableEngine
from tablejack.events import EngineEventType

logger = logging.getLogger(__name__)


class BlackjackEngine(TableEngine):
    """
    Engine implementation for single-player blackjack.

    Every intent runs to completion on the table before the engine awaits the
    adapter, so the adapter only ever sees settled snapshots.
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Optional[Dict[str, Any]] = None,
        store: Optional[BankrollStore] = None,
        rng: Optional[RandomSource] = None,
        shoe: Optional[Shoe] = None,
    ):
        """
        Initialize the blackjack engine.

        Args:
            adapter: Platform adapter to use for rendering
            config: Configuration options for the table (see `TableRules`)
            store: Bankroll storage. When None an `SQLiteBankrollStore` is opened
                at ``config["db_path"]``; without a ``db_path`` that database is
                in memory and the bankroll is lost at shutdown, so hosts that
                want the bankroll to carry over between sessions must set it
            rng: Randomness provider for the shoe
            shoe: Pre-built shoe, mainly for replaying a known card order
        """
        super().__init__(adapter, config)
        self.rules = TableRules.from_config(self.config)
        self.store = store if store is not None else SQLiteBankrollStore(self.rules.db_path)

        balance = self.store.load(self.rules.starting_balance)
        logger.info("Loaded bankroll %s", balance)

        self.table = BlackjackTable(
            rules=self.rules,
            balance=balance,
            shoe=shoe,
            rng=rng,
            event_bus=self.event_bus,
        )
        self.stats = SessionStats(starting_balance=balance)

        self._pending_events: List[Tuple[str, Dict[str, Any]]] = []
        self._unsubscribe = None

    @property
    def state(self) -> RoundState:
        return self.table.state

    def snapshot(self) -> TableSnapshot:
        return self.table.snapshot()

    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for play.
        """
        await super().initialize()

        if self._unsubscribe is None:
            self._unsubscribe = self.event_bus.on_any(self._queue_event)

        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "blackjack",
                "rules": self.rules.to_dict(),
                "balance": self.table.balance,
                "timestamp": time.time(),
            },
        )
        await self._flush_events()
        await self.render_state()

    async def shutdown(self) -> None:
        """
        Shut down the engine, saving the bankroll and closing storage.
        """
        self.store.save(self.table.balance)
        self.event_bus.emit(
            EngineEventType.ENGINE_SHUTDOWN,
            {"stats": self.stats.report(), "timestamp": time.time()},
        )
        await self._flush_events()

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.store.close()

        await super().shutdown()

    # Intents

    async def set_bet(self, amount: Any) -> TableSnapshot:
        return await self._apply(lambda: self.table.set_bet(amount))

    async def deal(self, bet: Optional[int] = None) -> TableSnapshot:
        return await self._apply(lambda: self.table.new_round(bet))

    async def hit(self) -> TableSnapshot:
        return await self._apply(self.table.hit)

    async def stand(self) -> TableSnapshot:
        return await self._apply(self.table.stand)

    async def double(self) -> TableSnapshot:
        return await self._apply(self.table.double)

    async def reset(self) -> TableSnapshot:
        return await self._apply(self.table.reset)

    async def execute_player_action(
        self, action: Union[Action, str], bet: Optional[int] = None
    ) -> TableSnapshot:
        """
        Execute a player action.

        Args:
            action: An `Action` or its value ("deal", "hit", "stand", "double", "reset")
            bet: Stake for a deal; the current bet when None

        Returns:
            Snapshot after the action
        """
        if not isinstance(action, Action):
            try:
                action = Action(str(action).lower())
            except ValueError:
                raise ValueError(f"Unknown action: {action!r}") from None

        if action == Action.DEAL:
            return await self.deal(bet)
        if action == Action.HIT:
            return await self.hit()
        if action == Action.STAND:
            return await self.stand()
        if action == Action.DOUBLE:
            return await self.double()
        return await self.reset()

    async def render_state(self) -> None:
        """
        Render the current table snapshot.
        """
        await self.adapter.render_game_state(self.snapshot().to_dict())

    # Internals

    async def _apply(self, intent) -> TableSnapshot:
        before = self.table.state
        after = intent()

        if after.phase == RoundPhase.SETTLE and before.phase != RoundPhase.SETTLE:
            self.stats.record(after)
        if after.balance != before.balance:
            self.store.save(after.balance)

        await self._flush_events()
        await self.render_state()
        return self.snapshot()

    def _queue_event(self, event: Tuple[str, Dict[str, Any]]) -> None:
        self._pending_events.append(event)

    async def _flush_events(self) -> None:
        pending, self._pending_events = self._pending_events, []
        for event_type, data in pending:
            await self.adapter.notify_game_event(event_type, data)
