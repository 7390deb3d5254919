"""
Tests for the pure state transition functions.
"""

from dataclasses import replace

import pytest

from tablejack.blackjack.state import Outcome, RoundPhase, RoundState
from tablejack.blackjack.transitions import StateTransitionEngine


@pytest.mark.parametrize(
    "outcome, doubled, expected",
    [
        (Outcome.PLAYER_BLACKJACK, False, 15.0),
        (Outcome.BLACKJACK_PUSH, False, 0),
        (Outcome.DEALER_BLACKJACK, False, -10),
        (Outcome.PLAYER_BUST, False, -10),
        (Outcome.PLAYER_BUST, True, -20),
        (Outcome.DEALER_BUST, True, 20),
        (Outcome.PLAYER_WIN, False, 10),
        (Outcome.DEALER_WIN, True, -20),
        (Outcome.PUSH, True, 0),
    ],
)
def test_settle_delta(outcome, doubled, expected):
    assert StateTransitionEngine.settle_delta(outcome, 10, doubled) == expected


def test_blackjack_payout_on_odd_bet_keeps_half_units():
    assert StateTransitionEngine.settle_delta(Outcome.PLAYER_BLACKJACK, 11) == 16.5


@pytest.mark.parametrize(
    "player, dealer, expected",
    [
        (18, 22, Outcome.DEALER_BUST),
        (19, 17, Outcome.PLAYER_WIN),
        (17, 20, Outcome.DEALER_WIN),
        (18, 18, Outcome.PUSH),
    ],
)
def test_compare_totals(player, dealer, expected):
    assert StateTransitionEngine.compare_totals(player, dealer) == expected


def test_natural_outcome(cards):
    natural = tuple(cards("A♠ K♥"))
    plain = tuple(cards("9♠ 7♥"))

    assert StateTransitionEngine.natural_outcome(natural, natural) == Outcome.BLACKJACK_PUSH
    assert StateTransitionEngine.natural_outcome(natural, plain) == Outcome.PLAYER_BLACKJACK
    assert StateTransitionEngine.natural_outcome(plain, natural) == Outcome.DEALER_BLACKJACK
    assert StateTransitionEngine.natural_outcome(plain, plain) is None


def test_dealer_stands_on_soft_17(cards):
    assert StateTransitionEngine.dealer_should_draw(tuple(cards("10♠ 6♥")))
    assert not StateTransitionEngine.dealer_should_draw(tuple(cards("A♠ 6♥")))
    assert not StateTransitionEngine.dealer_should_draw(tuple(cards("10♠ 7♥")))


def test_deal_does_not_modify_original(cards):
    state = RoundState(balance=100.0)
    new_state = StateTransitionEngine.deal(
        state, 10, tuple(cards("10♠ 9♣")), tuple(cards("10♥ 6♦"))
    )

    assert state.phase == RoundPhase.BETTING
    assert state.player_hand == ()
    assert new_state.phase == RoundPhase.PLAYER_TURN
    assert new_state.can_double
    assert new_state.round_number == 1


def test_deal_settles_a_natural(cards):
    state = RoundState(balance=100.0)
    new_state = StateTransitionEngine.deal(
        state, 10, tuple(cards("A♠ K♣")), tuple(cards("9♥ 7♦"))
    )

    assert new_state.phase == RoundPhase.SETTLE
    assert new_state.outcome == Outcome.PLAYER_BLACKJACK
    assert new_state.balance == 115.0
    assert new_state.last_delta == 15.0
    assert new_state.can_double


def test_hit_bust_settles(cards):
    state = RoundState(
        phase=RoundPhase.PLAYER_TURN,
        player_hand=tuple(cards("10♠ 6♥")),
        dealer_hand=tuple(cards("9♣ 7♦")),
        bet=10,
        balance=100.0,
        can_double=True,
    )

    new_state = StateTransitionEngine.hit(state, cards("K♠")[0])

    assert new_state.phase == RoundPhase.SETTLE
    assert new_state.outcome == Outcome.PLAYER_BUST
    assert new_state.balance == 90.0
    assert new_state.message == "You busted. You lose."


def test_double_moves_to_dealer_turn(cards):
    state = RoundState(
        phase=RoundPhase.PLAYER_TURN,
        player_hand=tuple(cards("5♠ 6♥")),
        dealer_hand=tuple(cards("10♣ 7♦")),
        bet=10,
        balance=100.0,
        can_double=True,
    )

    new_state = StateTransitionEngine.double(state, cards("9♠")[0])

    assert new_state.phase == RoundPhase.DEALER_TURN
    assert new_state.doubled
    assert new_state.stake == 20
    assert not new_state.can_double


def test_reset_keeps_balance_and_bet(cards):
    state = RoundState(
        phase=RoundPhase.SETTLE,
        player_hand=tuple(cards("10♠ 6♥ K♣")),
        dealer_hand=tuple(cards("9♣ 7♦")),
        bet=25,
        balance=75.0,
        message="You busted. You lose.",
        outcome=Outcome.PLAYER_BUST,
        doubled=True,
        last_delta=-50.0,
    )

    new_state = StateTransitionEngine.reset(state)

    assert new_state == replace(
        RoundState(bet=25, balance=75.0), round_number=state.round_number
    )
