"""
Tests for the BlackjackEngine class.

These cover the host side of the table: bankroll loading and saving,
rendering through the adapter and relaying events.
"""

import pytest

from tablejack.adapters import DummyAdapter
from tablejack.blackjack.action import Action
from tablejack.blackjack.bankroll import MemoryBankrollStore
from tablejack.blackjack.state import RoundPhase
from tablejack.common.shoe import Shoe
from tablejack.engine import BlackjackEngine
from tablejack.events import EngineEventType



@pytest.fixture
def adapter():
    return DummyAdapter()


@pytest.fixture
def store():
    return MemoryBankrollStore()


@pytest.fixture
def make_engine(cards):
    def _engine(adapter, store, text=None, config=None):
        shoe = Shoe.stacked(cards(text)) if text else None
        return BlackjackEngine(adapter, config, store=store, shoe=shoe)

    return _engine


def test_starts_with_default_bankroll(adapter, store, make_engine):
    engine = make_engine(adapter, store)

    assert engine.table.balance == 100.0
    assert engine.state.phase == RoundPhase.BETTING


def test_loads_stored_bankroll(adapter, make_engine):
    engine = make_engine(adapter, MemoryBankrollStore({"bankroll": "250"}))

    assert engine.table.balance == 250.0


def test_starting_balance_from_config(adapter, store, make_engine):
    engine = make_engine(adapter, store, config={"starting_balance": 40})

    assert engine.table.balance == 40.0


@pytest.mark.asyncio
async def test_initialize_renders_and_relays(adapter, store, make_engine):
    engine = make_engine(adapter, store)
    await engine.initialize()

    assert adapter.initialized
    assert adapter.last_state["phase"] == "BETTING"
    assert adapter.last_state["balance"] == 100.0
    assert adapter.events[0][0] == EngineEventType.ENGINE_INIT.name


@pytest.mark.asyncio
async def test_round_saves_new_balance(adapter, store, make_engine):
    engine = make_engine(adapter, store, "10♠ 10♥ 9♣ 7♦")
    await engine.initialize()

    snapshot = await engine.deal(10)
    assert snapshot.phase == RoundPhase.PLAYER_TURN
    assert adapter.last_state["dealer_hand"] == ["10♥", "??"]
    assert store.get("bankroll") is None

    snapshot = await engine.stand()
    assert snapshot.phase == RoundPhase.SETTLE
    assert snapshot.balance == 110.0
    assert store.load() == 110.0
    assert engine.stats.rounds_played == 1
    assert engine.stats.player_wins == 1

    event_names = [name for name, _ in adapter.events]
    assert "ROUND_ENDED" in event_names
    assert "BANKROLL_UPDATED" in event_names


@pytest.mark.asyncio
async def test_push_does_not_save(adapter, store, make_engine):
    engine = make_engine(adapter, store, "10♠ 10♥ 8♣ 8♦")
    await engine.initialize()

    await engine.deal(10)
    snapshot = await engine.stand()

    assert snapshot.message == "Push."
    assert store.get("bankroll") is None


@pytest.mark.asyncio
async def test_execute_player_action_accepts_strings(adapter, store, make_engine):
    engine = make_engine(adapter, store, "10♠ 9♥ 6♣ 7♦ K♠")
    await engine.initialize()

    await engine.execute_player_action("deal", bet=5)
    snapshot = await engine.execute_player_action(Action.HIT)
    assert snapshot.phase == RoundPhase.SETTLE
    assert snapshot.balance == 95.0

    snapshot = await engine.execute_player_action("RESET")
    assert snapshot.phase == RoundPhase.BETTING
    assert snapshot.player_hand == ()


@pytest.mark.asyncio
async def test_unknown_action(adapter, store, make_engine):
    engine = make_engine(adapter, store)

    with pytest.raises(ValueError, match="Unknown action"):
        await engine.execute_player_action("split")


@pytest.mark.asyncio
async def test_shutdown_saves_and_closes(adapter, store, make_engine):
    engine = make_engine(adapter, store)
    await engine.initialize()
    await engine.shutdown()

    assert adapter.shut_down
    assert store.load() == 100.0
    assert engine.event_bus.listener_count() == 0
    assert adapter.events[-1][0] == EngineEventType.ENGINE_SHUTDOWN.name
    assert adapter.events[-1][1]["stats"]["rounds_played"] == 0


@pytest.mark.asyncio
async def test_db_path_carries_bankroll_between_sessions(tmp_path, cards):
    config = {"db_path": str(tmp_path / "tablejack.db")}

    first = BlackjackEngine(
        DummyAdapter(), config, shoe=Shoe.stacked(cards("10♠ 10♥ 9♣ 7♦"))
    )
    await first.initialize()
    await first.deal(10)
    await first.stand()
    await first.shutdown()

    second = BlackjackEngine(DummyAdapter(), config)
    try:
        assert second.table.balance == 110.0
    finally:
        second.store.close()


def test_without_db_path_bankroll_is_not_kept(adapter):
    first = BlackjackEngine(adapter)
    first.store.save(300)
    first.store.close()

    second = BlackjackEngine(adapter)
    try:
        assert second.table.balance == 100.0
    finally:
        second.store.close()
