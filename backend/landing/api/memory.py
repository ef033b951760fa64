from flask import Blueprint, jsonify, request, current_app
from landing.services.memory.board import Difficulty


memory = Blueprint('memory', __name__)


def _controller():
    return current_app.extensions['memory_game']


@memory.route('/state', methods=['GET'])
def get_state():
    return jsonify(_controller().snapshot())


@memory.route('/start', methods=['POST'])
def start_game():
    data = request.get_json(silent=True) or {}
    difficulty = data.get('difficulty')
    try:
        snapshot = _controller().start(difficulty)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify(snapshot)


@memory.route('/reset', methods=['POST'])
def reset_game():
    return jsonify(_controller().reset())


@memory.route('/difficulty', methods=['POST'])
def change_difficulty():
    data = request.get_json(silent=True) or {}
    level = data.get('difficulty')
    if not level:
        return jsonify({'error': 'difficulty is required'}), 400
    try:
        snapshot = _controller().change_difficulty(level)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify(snapshot)


@memory.route('/flip', methods=['POST'])
def flip_card():
    data = request.get_json(silent=True) or {}
    card_id = data.get('card_id')
    if card_id is None:
        return jsonify({'error': 'card_id is required'}), 400
    # 1.9 or true must not silently become card 1
    if isinstance(card_id, bool) or not isinstance(card_id, int):
        return jsonify({'error': 'card_id must be an integer'}), 400
    try:
        accepted, snapshot = _controller().flip(card_id)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    payload = dict(snapshot)
    payload['accepted'] = accepted
    return jsonify(payload)


@memory.route('/best', methods=['GET'])
def get_best_scores():
    return jsonify(_controller().best_scores())


@memory.route('/best/<string:difficulty>', methods=['GET'])
def get_best_score(difficulty):
    try:
        level = Difficulty.parse(difficulty)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 404
    return jsonify({'difficulty': level.value, 'best_moves': _controller().best_scores()[level.value]})
