"""
Multiplayer match handlers - create, join and play
"""
import logging

import aiosqlite
from flask import jsonify

from creature_clash import config
from creature_clash.services.database import DatabaseManager
from creature_clash.services.battle_manager import BattleManager
from .game_state_utils import run_async, error_response, request_data, string_field, parse_ability_index

logger = logging.getLogger('creature_clash')

MAX_CODE_ATTEMPTS = 10

# Initialize services
db_manager = DatabaseManager(config.DB_PATH)
battle_manager = BattleManager()


def create_match():
    """Open a lobby under a short join code"""
    name = string_field(request_data(), 'name')
    if not name:
        return error_response('Name is required', 400)

    user = run_async(db_manager.load_user(name))
    if not user:
        return error_response('User not found', 404)

    for _ in range(MAX_CODE_ATTEMPTS):
        code = battle_manager.new_match_code()
        if run_async(db_manager.battle_exists(code)):
            continue
        state = battle_manager.create_match(user, code)
        try:
            run_async(db_manager.insert_battle(state))
        except aiosqlite.IntegrityError:
            # another request claimed the code between the check and the insert
            logger.warning(f"Match code {code} taken concurrently, retrying")
            continue
        return jsonify({'code': code})

    return error_response('Could not allocate a match code, try again', 500)


def join_match():
    """Seat a second player in an existing lobby"""
    data = request_data()
    name = string_field(data, 'name')
    code = string_field(data, 'code')
    if not name or not code:
        return error_response('Name and code are required', 400)

    state = run_async(db_manager.load_battle(code))
    if not state:
        return error_response('Match not found', 404)

    user = run_async(db_manager.load_user(name))
    if not user:
        return error_response('User not found', 404)

    new_state, error = battle_manager.join_match(state, user)
    if error:
        return error_response(error, 400)

    run_async(db_manager.save_battle(new_state))
    return jsonify(new_state.to_dict())


def play_multiplayer_move():
    """Apply a move for whichever seat `name` occupies"""
    data = request_data()
    battle_id = string_field(data, 'id')
    name = string_field(data, 'name')
    ability_index = data.get('abilityIndex')
    if not battle_id or not name or ability_index is None:
        return error_response('Match id, name and ability index are required', 400)

    state = run_async(db_manager.load_battle(battle_id))
    if not state:
        return error_response('Match not found', 404)

    if not state.is_ongoing:
        return jsonify(state.to_dict())

    new_state, error = battle_manager.play_multiplayer_move(state, name, parse_ability_index(ability_index))
    if error:
        return error_response(error, 400)

    run_async(db_manager.save_battle(new_state))
    return jsonify(new_state.to_dict())
