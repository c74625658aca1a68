"""Combatant and ability models shared by boss and multiplayer battles"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass
class Ability:
    """A named action a combatant can pick on its turn"""
    name: str
    damage: Optional[int] = None
    heal: Optional[int] = None  # carried in data only, the resolver never applies it

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'name': self.name}
        if self.damage is not None:
            data['damage'] = self.damage
        if self.heal is not None:
            data['heal'] = self.heal
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ability':
        damage = data.get('damage')
        heal = data.get('heal')
        return cls(
            name=data['name'],
            damage=int(damage) if damage is not None else None,
            heal=int(heal) if heal is not None else None,
        )


@dataclass
class Combatant:
    """A battling entity: a player's creature or a boss.

    Snapshots are copied by value when a battle starts, so later changes to
    the user record never leak into a running battle.
    """
    name: str
    health: int
    attack: int
    defense: int
    speed: int
    abilities: List[Ability] = field(default_factory=list)
    creature_image: Optional[str] = None  # image store key for player creatures
    boss_id: Optional[str] = None
    image: Optional[str] = None  # portrait URL for bosses

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire/storage dict (camelCase keys)"""
        data: Dict[str, Any] = {}
        if self.boss_id is not None:
            data['id'] = self.boss_id
        data.update({
            'name': self.name,
            'health': self.health,
            'attack': self.attack,
            'defense': self.defense,
            'speed': self.speed,
            'abilities': [a.to_dict() for a in self.abilities],
        })
        if self.boss_id is None:
            data['creatureImage'] = self.creature_image
        if self.image is not None:
            data['image'] = self.image
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Combatant':
        return cls(
            name=data['name'],
            health=int(data['health']),
            attack=int(data['attack']),
            defense=int(data['defense']),
            speed=int(data['speed']),
            abilities=[Ability.from_dict(a) for a in data.get('abilities', [])],
            creature_image=data.get('creatureImage'),
            boss_id=data.get('id'),
            image=data.get('image'),
        )
