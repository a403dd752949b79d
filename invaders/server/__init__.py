import logging

from flask import Flask, jsonify

from .config import Config
from .store import LeaderboardStore


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    flask_app.extensions['leaderboard_store'] = LeaderboardStore(
        flask_app.config['LEADERBOARD_FILE'],
        keep=flask_app.config['TOP_STORED'],
    )

    from .routes import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    @flask_app.route('/')
    def index():
        return jsonify({'message': 'Space Invaders leaderboard server'})

    return flask_app


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    app = create_app()
    app.logger.info(f"Leaderboard running at http://localhost:{app.config['PORT']}")
    app.run(host=app.config['HOST'], port=app.config['PORT'])
