# cards/card.py

from dataclasses import dataclass
from enum import IntEnum


class CardNumber(IntEnum):
    JOKER = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class CardSuit(IntEnum):
    JOKER = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3
    SPADE = 4


NUMBER_RANGE = range(CardNumber.JOKER, CardNumber.KING + 1)
SUIT_RANGE = range(CardSuit.JOKER, CardSuit.SPADE + 1)
PLAYING_NUMBERS = range(CardNumber.ACE, CardNumber.KING + 1)
PLAYING_SUITS = range(CardSuit.HEART, CardSuit.SPADE + 1)


def _coerce(value, enum_cls):
    # Out of range values stay plain ints so an illegal card can still exist
    try:
        return enum_cls(value)
    except ValueError:
        return int(value)


@dataclass(frozen=True)
class Card:
    """A playing card from ace to king in one of the four suits, or a joker.

    number: 0 = joker, 1-13 is ace through king
    suit: 0 = joker, 1-4 is heart through spade
    """
    number: int
    suit: int

    def __post_init__(self):
        object.__setattr__(self, 'number', _coerce(self.number, CardNumber))
        object.__setattr__(self, 'suit', _coerce(self.suit, CardSuit))

    def is_valid(self):
        """True if both fields fit inside CardNumber and CardSuit."""
        return self.number in NUMBER_RANGE and self.suit in SUIT_RANGE

    def is_joker(self):
        return self.number == CardNumber.JOKER and self.suit == CardSuit.JOKER

    def is_partial_joker(self):
        """Only one of number and suit is Joker, e.g. Joker of Hearts."""
        return not self.is_joker() and CardNumber.JOKER in (self.number, self.suit)

    @property
    def text(self):
        return str(self)

    def __str__(self):
        if self.number == CardNumber.JOKER or self.suit == CardSuit.JOKER:
            return "Joker"
        if self.number not in PLAYING_NUMBERS or self.suit not in PLAYING_SUITS:
            return "Illegal card"
        return f"{self.number.name.title()} of {self.suit.name.title()}s"

    def to_dict(self):
        return {'number': int(self.number), 'suit': int(self.suit), 'text': self.text}


JOKER = Card(CardNumber.JOKER, CardSuit.JOKER)


def _parse_field(value, enum_cls, field):
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Bad {field}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.lstrip('-').isdigit():
            return int(value)
        # Accept singular or plural names: "heart", "Hearts", "KING"
        name = value.upper()
        if name in enum_cls.__members__:
            return enum_cls[name]
        if name.endswith('S') and name[:-1] in enum_cls.__members__:
            return enum_cls[name[:-1]]
    raise ValueError(f"Bad {field}: {value!r}")


def parse_number(value):
    return _parse_field(value, CardNumber, 'number')


def parse_suit(value):
    return _parse_field(value, CardSuit, 'suit')


def parse_card(data):
    """Build a Card from request input like {"number": "Ace", "suit": 1}.

    Raises ValueError when a field is missing or cannot be read. The card
    returned is not checked with is_valid(); that is left to the caller.
    """
    if not isinstance(data, dict):
        raise ValueError("Card must be an object with number and suit")
    if 'number' not in data or 'suit' not in data:
        raise ValueError("Card needs both number and suit")
    return Card(parse_number(data['number']), parse_suit(data['suit']))
