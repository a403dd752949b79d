from numbers import Number

from flask import Blueprint, current_app, jsonify, request

leaderboard = Blueprint('leaderboard', __name__)


def _store():
    return current_app.extensions['leaderboard_store']


def _valid_score(score):
    return isinstance(score, Number) and not isinstance(score, bool) and score > 0


@leaderboard.route('', methods=['GET'])
def get_leaderboard():
    return jsonify(_store().load())


@leaderboard.route('', methods=['POST'])
def save_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    name = data.get('playerName')
    score = data.get('score')
    if not isinstance(name, str) or not name.strip() or not _valid_score(score):
        return jsonify({'error': 'Invalid score or player name'}), 400

    try:
        records = _store().add(
            name.strip(),
            score,
            miss_count=data.get('missCount') or 0,
            level=data.get('level') or 1,
            shots_fired=data.get('shotsFired') or 0,
            duration=data.get('duration') or 0,
        )
    except Exception as exc:
        current_app.logger.exception(f"Error saving to leaderboard: {exc}")
        return jsonify({'error': 'Failed to save score'}), 500

    current_app.logger.info(f"[score] name={name.strip()} score={score}")
    return jsonify(records[:current_app.config['TOP_RETURNED']])
