"""
Boss battle handlers and battle state polling
"""
from flask import request, jsonify

from creature_clash import config
from creature_clash.models.battle_state import BattleType
from creature_clash.services.database import DatabaseManager
from creature_clash.services.battle_manager import BattleManager
from .game_state_utils import run_async, error_response, request_data, string_field, parse_ability_index

# Initialize services
db_manager = DatabaseManager(config.DB_PATH)
battle_manager = BattleManager()


def list_bosses():
    """Static boss roster"""
    return jsonify(battle_manager.list_bosses())


def start_boss_battle():
    """Kick off a fight between the user's creature and a boss"""
    data = request_data()
    name = string_field(data, 'name')
    boss_id = string_field(data, 'bossId')
    if not name or not boss_id:
        return error_response('Name and bossId are required', 400)

    user = run_async(db_manager.load_user(name))
    if not user:
        return error_response('User not found', 404)

    boss = battle_manager.find_boss(boss_id)
    if not boss:
        return error_response('Boss not found', 404)

    state = battle_manager.start_boss_battle(user, boss)
    run_async(db_manager.insert_battle(state))
    return jsonify(state.to_dict())


def play_move():
    """Apply the player's move in a boss fight; the boss counter happens server side"""
    data = request_data()
    battle_id = string_field(data, 'id')
    ability_index = data.get('abilityIndex')
    if not battle_id or ability_index is None:
        return error_response('Battle id and ability index are required', 400)

    state = run_async(db_manager.load_battle(battle_id))
    if not state:
        return error_response('Battle not found', 404)

    if state.type != BattleType.BOSS:
        return error_response('Not a boss battle', 400)

    if not state.is_ongoing:
        return jsonify(state.to_dict())

    new_state, error = battle_manager.play_boss_move(state, parse_ability_index(ability_index))
    if error:
        return error_response(error, 400)

    run_async(db_manager.save_battle(new_state))
    return jsonify(new_state.to_dict())


def get_battle_state():
    """Polling endpoint for boss and multiplayer battles"""
    battle_id = request.args.get('id')
    if not battle_id:
        return error_response('id is required', 400)

    state = run_async(db_manager.load_battle(battle_id))
    if not state:
        return error_response('Battle not found', 404)
    return jsonify(state.to_dict())
