from flask import Blueprint, jsonify

from unolobby import get_registry

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the UNO lobby server!'})


@main.route('/leaderboard')
def leaderboard():
    return jsonify(get_registry().leaderboard.snapshot())


@main.route('/lobbies')
def lobbies():
    return jsonify(get_registry().summaries())
