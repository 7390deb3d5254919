import pytest

from tablejack.blackjack.rules import TableRules


def test_defaults():
    rules = TableRules.from_config()

    assert rules.num_decks == 6
    assert rules.reshuffle_threshold == 52
    assert rules.starting_balance == 100.0
    assert rules.default_bet == 10
    assert rules.blackjack_payout == 1.5
    assert rules.dealer_stands_on == 17
    assert rules.db_path is None


def test_from_config_overrides_and_ignores_unknown_keys():
    rules = TableRules.from_config(
        {"num_decks": 2, "reshuffle_threshold": 20, "starting_balance": 500, "theme": "green"}
    )

    assert rules.num_decks == 2
    assert rules.reshuffle_threshold == 20
    assert rules.starting_balance == 500.0
    assert rules.to_dict()["num_decks"] == 2


@pytest.mark.parametrize(
    "config",
    [
        {"num_decks": 0},
        {"reshuffle_threshold": -1},
        {"starting_balance": -10},
        {"default_bet": 0},
        {"blackjack_payout": 0},
    ],
)
def test_invalid_config(config):
    with pytest.raises(ValueError):
        TableRules.from_config(config)
