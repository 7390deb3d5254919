import pytest
from tablejack.common.card import Card, Suit, Rank


def test_card_initialization():
    card = Card(Rank.EIGHT, Suit.HEARTS)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT


def test_card_repr():
    card = Card(Rank.EIGHT, Suit.HEARTS)
    assert repr(card) == "Card(Rank.EIGHT, Suit.HEARTS)"


def test_card_str():
    assert str(Card(Rank.EIGHT, Suit.HEARTS)) == "8♥"
    assert str(Card(Rank.TEN, Suit.CLUBS)) == "10♣"
    assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card(Rank.EIGHT, "Z")


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card("invalid", Suit.HEARTS)


def test_non_enum_rank():
    with pytest.raises(TypeError):
        Card(8, Suit.HEARTS)


def test_card_is_immutable():
    card = Card(Rank.KING, Suit.DIAMONDS)
    with pytest.raises(AttributeError):
        card.rank = Rank.QUEEN


def test_thirteen_distinct_ranks():
    assert len(Rank) == 13
    assert [rank.value for rank in Rank] == [
        "A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K",
    ]


def test_face_cards():
    assert Rank.JACK.is_face
    assert Rank.KING.is_face
    assert not Rank.TEN.is_face
    assert not Rank.ACE.is_face


def test_red_suits():
    assert Suit.HEARTS.is_red
    assert Suit.DIAMONDS.is_red
    assert not Suit.SPADES.is_red
    assert not Suit.CLUBS.is_red


def test_card_equality():
    card1 = Card(Rank.EIGHT, Suit.HEARTS)
    card2 = Card(Rank.EIGHT, Suit.HEARTS)
    card3 = Card(Rank.EIGHT, Suit.CLUBS)
    card4 = Card(Rank.NINE, Suit.HEARTS)

    assert card1 == card2
    assert card1 != card3
    assert card1 != card4
    assert card1 != "8♥"


def test_card_hash():
    card1 = Card(Rank.EIGHT, Suit.HEARTS)
    card2 = Card(Rank.EIGHT, Suit.HEARTS)
    card3 = Card(Rank.NINE, Suit.CLUBS)

    card_set = {card1, card2, card3}

    assert len(card_set) == 2
    assert card1 in card_set
    assert card3 in card_set
