"""
Match lifecycle - lobby creation, joining and first-turn assignment for multiplayer
"""
import random
import string
from typing import Optional, Tuple

from ..models.battle_state import BattleState, BattleStatus, BattleType
from ..models.combatant import Combatant

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 4

MATCH_FULL = "Match already has two players"
ALREADY_IN_MATCH = "You are already in this match"


def generate_match_code(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return ''.join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def decide_first_turn(first: Combatant, second: Combatant, rng: Optional[random.Random] = None) -> int:
    """Faster combatant starts; a speed tie is a coin flip"""
    if first.speed > second.speed:
        return 0
    if second.speed > first.speed:
        return 1
    rng = rng or random
    return 0 if rng.random() < 0.5 else 1


def create_lobby(code: str, host: Combatant) -> BattleState:
    """New multiplayer match holding only its host"""
    return BattleState(
        id=code,
        type=BattleType.MULTIPLAYER,
        players=[host],
        turn=0,
        status=BattleStatus.LOBBY,
        log=[],
    )


def join_lobby(
    state: BattleState,
    guest: Combatant,
    rng: Optional[random.Random] = None,
) -> Tuple[BattleState, Optional[str]]:
    """
    Seat the second player and start the match.

    Returns (state, error); the input state is not modified.
    """
    if len(state.players) >= 2 or state.status != BattleStatus.LOBBY:
        return state, MATCH_FULL
    if state.player_index(guest.name) != -1:
        return state, ALREADY_IN_MATCH

    host = state.players[0]
    started = BattleState(
        id=state.id,
        type=state.type,
        players=[host, guest],
        turn=decide_first_turn(host, guest, rng),
        status=BattleStatus.ONGOING,
        log=list(state.log),
        winner=state.winner,
        version=state.version,
    )
    return started, None
