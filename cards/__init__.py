from .card import Card, CardNumber, CardSuit, JOKER, parse_card
from .deck import Deck, JOKER_LIMIT
