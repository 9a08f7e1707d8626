# cards/deck.py

import logging
import random
import threading

from .card import JOKER, Card, PLAYING_NUMBERS, PLAYING_SUITS

log = logging.getLogger(__name__)

# 52 standard cards plus three jokers
JOKER_LIMIT = 3


def create_deck():
    """Canonical unshuffled order: ace to king, heart to spade within each number, jokers last."""
    cards = [Card(number, suit) for number in PLAYING_NUMBERS for suit in PLAYING_SUITS]
    cards += [JOKER] * JOKER_LIMIT
    return cards


class Deck:
    """A deck of playing cards shared by every request.

    Each public method holds the deck lock for its whole duration, so a draw
    (peek then remove) or an insert (check then add) is never interleaved
    with another operation.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._rng = random.Random()
        self._cards = []
        self.shuffle()

    @property
    def cards(self):
        """A copy of the current cards, first card is the next to be drawn."""
        with self._lock:
            return list(self._cards)

    @property
    def count(self):
        with self._lock:
            return len(self._cards)

    @property
    def lock(self):
        """Hold this to keep several deck calls together, e.g. a draw and the snapshot after it."""
        return self._lock

    def snapshot(self):
        with self._lock:
            return {'cards': [c.to_dict() for c in self._cards], 'count': len(self._cards)}

    def reset(self):
        with self._lock:
            self._cards = create_deck()
            log.info("[RESET] Deck rebuilt with %d cards", len(self._cards))
            return list(self._cards)

    def shuffle(self):
        """Shuffle the deck, building a new one first if it is empty."""
        with self._lock:
            if not self._cards:
                self.reset()
            shuffled = list(self._cards)
            random.Random().shuffle(shuffled)
            self._cards = shuffled
            log.info("[SHUFFLE] Shuffled %d cards", len(self._cards))
            return list(self._cards)

    def next_card(self):
        with self._lock:
            if not self._cards:
                return None
            return self._cards[0]

    def random_card(self):
        with self._lock:
            if not self._cards:
                return None
            return self._cards[self._rng.randrange(len(self._cards))]

    def find_card(self, card):
        """Return the matching card in the deck, or None if it is not there."""
        with self._lock:
            for c in self._cards:
                if c == card:
                    return c
            return None

    def remove_card(self, card):
        with self._lock:
            try:
                self._cards.remove(card)
            except ValueError:
                return False
            return True

    def add_card(self, card):
        """Append a card. Whether it is allowed is checked by can_insert()."""
        with self._lock:
            self._cards.append(card)

    def joker_count(self):
        with self._lock:
            return self._cards.count(JOKER)

    def can_insert(self, card):
        with self._lock:
            if card.is_joker():
                return self.joker_count() < JOKER_LIMIT
            return card not in self._cards

    def insert(self, card):
        """Add the card if the deck allows it. Returns True when it was added."""
        with self._lock:
            if not self.can_insert(card):
                log.info("[INSERT] Rejected %s", card)
                return False
            self.add_card(card)
            log.info("[INSERT] Added %s, %d cards in deck", card, len(self._cards))
            return True

    def _draw(self, card):
        if card is not None:
            self.remove_card(card)
            log.info("[DRAW] %s, %d cards left", card, len(self._cards))
        return card

    def draw_next(self):
        with self._lock:
            return self._draw(self.next_card())

    def draw_random(self):
        with self._lock:
            return self._draw(self.random_card())
