"""Battle manager handling boss fights and multiplayer matches"""
import logging
import random
import uuid
from typing import Optional, List, Tuple, Dict, Any

from ..models.battle_state import BattleState, BattleStatus, BattleType
from ..models.combatant import Combatant
from ..models.user import User
from ..services.data_loader import load_game_data, GameData
from ..services import turn_resolver
from ..services import match_lifecycle

logger = logging.getLogger('creature_clash')

PLAYER_NOT_IN_MATCH = "Player not found in match"


class BattleManager:
    """Builds battles from users and routes moves to the turn resolver"""

    def __init__(self, data: Optional[GameData] = None, rng: Optional[random.Random] = None):
        self.data = data or load_game_data()
        self.rng = rng or random.Random()

    def list_bosses(self) -> List[Dict[str, Any]]:
        return [b.to_dict() for b in self.data.bosses]

    def find_boss(self, boss_id: str) -> Optional[Combatant]:
        return self.data.find_boss(boss_id)

    def start_boss_battle(self, user: User, boss: Combatant) -> BattleState:
        """
        New boss fight: the user's creature against a fresh copy of the boss.
        A faster boss lands an opening strike right away, so the human always
        holds the first selectable turn.
        """
        boss_snapshot = Combatant.from_dict(boss.to_dict())
        state = BattleState(
            id=str(uuid.uuid4()),
            type=BattleType.BOSS,
            players=[user.to_combatant(), boss_snapshot],
            turn=turn_resolver.HUMAN_INDEX,
            status=BattleStatus.ONGOING,
            log=[],
        )
        if boss_snapshot.speed > user.speed:
            turn_resolver.boss_counter(state, self.rng)
            logger.debug(f"Boss {boss_snapshot.name} opened battle {state.id}")
        logger.info(f"Boss battle {state.id}: {user.name} vs {boss_snapshot.name}")
        return state

    def play_boss_move(self, state: BattleState, ability_index: int) -> Tuple[BattleState, Optional[str]]:
        """Player move in a boss fight; the boss counter is resolved in the same call"""
        return turn_resolver.apply_move(state, turn_resolver.HUMAN_INDEX, ability_index, self.rng)

    def new_match_code(self) -> str:
        return match_lifecycle.generate_match_code(self.rng)

    def create_match(self, user: User, code: str) -> BattleState:
        logger.info(f"Match {code} created by {user.name}")
        return match_lifecycle.create_lobby(code, user.to_combatant())

    def join_match(self, state: BattleState, user: User) -> Tuple[BattleState, Optional[str]]:
        new_state, error = match_lifecycle.join_lobby(state, user.to_combatant(), self.rng)
        if not error:
            logger.info(f"Match {state.id}: {user.name} joined, player {new_state.turn} starts")
        return new_state, error

    def play_multiplayer_move(self, state: BattleState, name: str, ability_index: int) -> Tuple[BattleState, Optional[str]]:
        """Move in a multiplayer match; `name` picks which seat is acting"""
        if not state.is_ongoing:
            return state, None
        player_index = state.player_index(name)
        if player_index == -1:
            return state, PLAYER_NOT_IN_MATCH
        return turn_resolver.apply_move(state, player_index, ability_index, self.rng)
