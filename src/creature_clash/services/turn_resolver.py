"""
Turn resolver - applies one chosen ability to a battle and decides win/turn-advance
"""
import random
from copy import deepcopy
from typing import Optional, Tuple

from ..models.battle_state import BattleState, BattleType
from ..models.combatant import Ability, Combatant

NOT_YOUR_TURN = "Not your turn"
INVALID_ABILITY = "Invalid ability index"

HUMAN_INDEX = 0
BOSS_INDEX = 1


def calculate_damage(ability: Ability, attacker: Combatant, defender: Combatant) -> int:
    """Flat damage formula, floored at zero"""
    return max(0, (ability.damage or 0) + attacker.attack - defender.defense)


def _valid_ability_index(combatant: Combatant, ability_index) -> bool:
    # bool is an int subclass; True/False are not indices a client should send
    if isinstance(ability_index, bool) or not isinstance(ability_index, int):
        return False
    return 0 <= ability_index < len(combatant.abilities)


def resolve_hit(state: BattleState, attacker_index: int, ability: Ability) -> bool:
    """Apply one hit in place and log it.

    Returns True when the defender went down, in which case the battle is
    marked finished with the attacker as winner.
    """
    attacker = state.players[attacker_index]
    defender = state.players[1 - attacker_index]

    damage = calculate_damage(ability, attacker, defender)
    defender.health -= damage
    state.log.append(f"{attacker.name} uses {ability.name}! It deals {damage} damage to {defender.name}.")

    if defender.is_defeated:
        state.finish(attacker.name)
        return True
    return False


def boss_counter(state: BattleState, rng: Optional[random.Random] = None) -> bool:
    """Boss strikes back with a uniformly random ability. Returns True if the player fell."""
    rng = rng or random
    boss = state.players[BOSS_INDEX]
    if not boss.abilities:
        return False
    return resolve_hit(state, BOSS_INDEX, rng.choice(boss.abilities))


def apply_move(
    state: BattleState,
    acting_index: int,
    ability_index: int,
    rng: Optional[random.Random] = None,
) -> Tuple[BattleState, Optional[str]]:
    """
    Resolve one move for the combatant at `acting_index`.

    Returns (state, error). On error, or when the battle is not ongoing, the
    given state is returned untouched. Otherwise a new state is returned and
    the input is left as it was.
    """
    if not state.is_ongoing:
        return state, None
    if state.turn != acting_index:
        return state, NOT_YOUR_TURN

    actor = state.players[acting_index]
    if not _valid_ability_index(actor, ability_index):
        return state, INVALID_ABILITY

    new_state = deepcopy(state)
    ability = new_state.players[acting_index].abilities[ability_index]

    if resolve_hit(new_state, acting_index, ability):
        return new_state, None

    if new_state.type == BattleType.BOSS:
        boss_counter(new_state, rng)
        # the boss never holds the turn; a client can only ever act as the human
        new_state.turn = HUMAN_INDEX
    else:
        new_state.turn = 1 - new_state.turn

    return new_state, None
