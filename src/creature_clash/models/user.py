"""User record: one creature per player name"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from .combatant import Ability, Combatant


def default_abilities() -> List[Ability]:
    """Starting moves handed to every new creature"""
    return [
        Ability(name='Punch', damage=10),
        Ability(name='Kick', damage=8),
        Ability(name='Heal', damage=0, heal=10),
    ]


@dataclass
class User:
    """A player and the stats of their creature"""
    name: str
    id: Optional[int] = None
    creature_image: Optional[str] = None
    health: int = 100
    attack: int = 10
    defense: int = 5
    speed: int = 5
    abilities: List[Ability] = field(default_factory=default_abilities)
    evolution_points: int = 0

    def to_combatant(self) -> Combatant:
        """Snapshot this user's creature for a new battle"""
        return Combatant(
            name=self.name,
            health=self.health,
            attack=self.attack,
            defense=self.defense,
            speed=self.speed,
            abilities=[Ability(a.name, a.damage, a.heal) for a in self.abilities],
            creature_image=self.creature_image,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'creatureImage': self.creature_image,
            'health': self.health,
            'attack': self.attack,
            'defense': self.defense,
            'speed': self.speed,
            'abilities': [a.to_dict() for a in self.abilities],
            'evolutionPoints': self.evolution_points,
        }
