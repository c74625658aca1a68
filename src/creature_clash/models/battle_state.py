"""Persisted battle document for boss fights and multiplayer matches"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional

from .combatant import Combatant


class BattleType(Enum):
    BOSS = "boss"
    MULTIPLAYER = "multiplayer"


class BattleStatus(Enum):
    LOBBY = "lobby"
    ONGOING = "ongoing"
    FINISHED = "finished"


@dataclass
class BattleState:
    """Complete state of one battle.

    `players` is the ordered pair of combatant snapshots (a lobby holds only
    the host), `turn` indexes into it, and `log` only ever grows. `version`
    is bumped by the database on every successful write.
    """
    id: str
    type: BattleType
    players: List[Combatant] = field(default_factory=list)
    turn: int = 0
    status: BattleStatus = BattleStatus.ONGOING
    log: List[str] = field(default_factory=list)
    winner: Optional[str] = None
    version: int = 0

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = BattleType(self.type)
        if isinstance(self.status, str):
            self.status = BattleStatus(self.status)

    @property
    def is_ongoing(self) -> bool:
        return self.status == BattleStatus.ONGOING

    @property
    def is_finished(self) -> bool:
        return self.status == BattleStatus.FINISHED

    def player_index(self, name: str) -> int:
        """Index of the combatant with this name, or -1"""
        for idx, player in enumerate(self.players):
            if player.name == name:
                return idx
        return -1

    def finish(self, winner: str):
        self.status = BattleStatus.FINISHED
        self.winner = winner

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and API responses"""
        data = {
            'id': self.id,
            'type': self.type.value,
            'players': [p.to_dict() for p in self.players],
            'turn': self.turn,
            'status': self.status.value,
            'log': list(self.log),
            'version': self.version,
        }
        if self.winner is not None:
            data['winner'] = self.winner
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BattleState':
        """Create from dictionary"""
        return cls(
            id=data['id'],
            type=data['type'],
            players=[Combatant.from_dict(p) for p in data.get('players', [])],
            turn=int(data.get('turn', 0)),
            status=data.get('status', BattleStatus.ONGOING.value),
            log=list(data.get('log', [])),
            winner=data.get('winner'),
            version=int(data.get('version', 0)),
        )
