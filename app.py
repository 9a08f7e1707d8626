from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit
from werkzeug.exceptions import HTTPException

import logging

import config
from cards import Deck
from cards.card import parse_card, parse_number, parse_suit, Card

log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

logger = logging.getLogger(__name__)

EMPTY_DECK = "Deck is empty"


def setup_logging(level=config.LOG_LEVEL):
    """Call once at program start."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def message(text, card=None):
    return {
        "message": text,
        "card": card.to_dict() if card is not None else None,
        "deck": deck.snapshot(),
    }


def card_result(card, missing=EMPTY_DECK):
    if card is not None:
        return message(card.text, card), 200
    return message(missing), 404


def broadcast_deck_update(snapshot):
    socketio.emit('deck_update', snapshot)


app = Flask(__name__)
app.config['SECRET_KEY'] = config.SECRET_KEY
socketio = SocketIO(app, cors_allowed_origins=config.CORS_ALLOWED_ORIGINS, async_mode='threading')

# One deck for the lifetime of the process, shuffled on creation
deck = Deck()


@app.errorhandler(HTTPException)
def handle_http_error(e):
    headers = [(k, v) for k, v in e.get_headers() if k.lower() != 'content-type']
    return jsonify(message(e.description)), e.code, headers


@app.route("/")
def index():
    return jsonify({"status": "Deck service running", "count": deck.count})


# Gets all the cards in the deck.
@app.route("/deck", methods=["GET"])
def get_deck():
    return jsonify(deck.snapshot())


# Gets the next card from the deck, without modifying the deck.
@app.route("/deck/card/next", methods=["GET"])
def peek_next():
    with deck.lock:
        body, status = card_result(deck.next_card())
    return jsonify(body), status


# Gets a random card from the deck, without modifying the deck.
@app.route("/deck/card/random", methods=["GET"])
def peek_random():
    with deck.lock:
        body, status = card_result(deck.random_card())
    return jsonify(body), status


# Gets a specific card from the deck, without modifying the deck.
@app.route("/deck/card", methods=["GET"])
def get_card():
    try:
        wanted = Card(parse_number(request.args.get('number')), parse_suit(request.args.get('suit')))
    except ValueError as e:
        return jsonify(message(str(e))), 400
    with deck.lock:
        body, status = card_result(deck.find_card(wanted), missing=f"{wanted} is not in the deck")
    return jsonify(body), status


def draw(take):
    with deck.lock:
        card = take()
        body, status = card_result(card)
    if card is not None:
        broadcast_deck_update(body["deck"])
    return jsonify(body), status


# Draws the next card from the deck, modifying the deck.
@app.route("/deck/card/next", methods=["PUT"])
def draw_next():
    return draw(deck.draw_next)


# Draws a random card from the deck, modifying the deck.
@app.route("/deck/card/random", methods=["PUT"])
def draw_random():
    return draw(deck.draw_random)


# Puts a specific card back into the deck.
@app.route("/deck/card", methods=["PUT"])
def insert_card():
    data = request.get_json(silent=True)
    try:
        card = parse_card(data)
    except ValueError as e:
        return jsonify(message(str(e))), 400
    if not card.is_valid():
        return jsonify(message(f"Cannot add {card}, number or suit out of range")), 400
    if card.is_partial_joker():
        return jsonify(message("Cannot add card, a joker needs both number and suit set to Joker")), 400

    with deck.lock:
        if not deck.insert(card):
            body = message(f"Cannot add {card} to deck, already present (or 3 are present if joker)", card)
            return jsonify(body), 422
        body = message(card.text, card)
    broadcast_deck_update(body["deck"])
    return jsonify(body), 200


# Shuffles the content of the deck, builds a new deck first if empty.
@app.route("/deck/shuffle", methods=["POST"])
def shuffle_deck():
    with deck.lock:
        deck.shuffle()
        snapshot = deck.snapshot()
    broadcast_deck_update(snapshot)
    return jsonify(snapshot)


# Builds a new unshuffled deck.
@app.route("/deck/reset", methods=["POST"])
def reset_deck():
    with deck.lock:
        deck.reset()
        snapshot = deck.snapshot()
    broadcast_deck_update(snapshot)
    return jsonify(snapshot)


@socketio.on('connect')
def handle_connect(auth=None):
    logger.debug("[SOCKET] Client connected, sid: %s", request.sid)
    emit('deck_update', deck.snapshot())


@socketio.on('get_deck')
def handle_get_deck(data=None):
    emit('deck_update', deck.snapshot())


@socketio.on('disconnect')
def handle_disconnect(*args):
    logger.debug("[SOCKET] Client disconnected, sid: %s", request.sid)


def main():
    setup_logging()
    logger.info("Starting deck service on %s:%s, async_mode = %s", config.HOST, config.PORT, socketio.async_mode)
    socketio.run(app, host=config.HOST, port=config.PORT, allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
