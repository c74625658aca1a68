from flask import Blueprint

from .game_state_utils import json_errors
from .users import enter, get_user, save_creature, get_image
from .battles import list_bosses, start_boss_battle, play_move, get_battle_state
from .matches import create_match, join_match, play_multiplayer_move

api_bp = Blueprint('api', __name__)

# Routes

@api_bp.route('', methods=['GET'])
def hello_route():
    return 'Hello World!'

@api_bp.route('/enter', methods=['POST'])
@json_errors
def enter_route():
    return enter()

@api_bp.route('/user', methods=['GET'])
@json_errors
def get_user_route():
    return get_user()

@api_bp.route('/saveCreature', methods=['POST'])
@json_errors
def save_creature_route():
    return save_creature()

# Keys may contain dots or dashes
@api_bp.route('/image/<key>', methods=['GET'])
@json_errors
def get_image_route(key):
    return get_image(key)

@api_bp.route('/bosses', methods=['GET'])
def list_bosses_route():
    return list_bosses()

@api_bp.route('/startBossBattle', methods=['POST'])
@json_errors
def start_boss_battle_route():
    return start_boss_battle()

@api_bp.route('/playMove', methods=['POST'])
@json_errors
def play_move_route():
    return play_move()

@api_bp.route('/createMatch', methods=['POST'])
@json_errors
def create_match_route():
    return create_match()

@api_bp.route('/joinMatch', methods=['POST'])
@json_errors
def join_match_route():
    return join_match()

@api_bp.route('/playMultiplayerMove', methods=['POST'])
@json_errors
def play_multiplayer_move_route():
    return play_multiplayer_move()

@api_bp.route('/getBattleState', methods=['GET'])
@json_errors
def get_battle_state_route():
    return get_battle_state()
