import json
import logging
from pathlib import Path
from typing import List, Optional

from creature_clash.models.combatant import Combatant

BOSSES_FILE = Path(__file__).resolve().parents[1] / "data" / "bosses.json"

logger = logging.getLogger('creature_clash')


class GameData:
    def __init__(self, bosses: List[Combatant]):
        self.bosses = bosses

    def find_boss(self, boss_id: str) -> Optional[Combatant]:
        return next((b for b in self.bosses if b.boss_id == boss_id), None)


def load_game_data(bosses_file: Path = BOSSES_FILE) -> GameData:
    with open(bosses_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    bosses = []
    for b in data:
        if not b.get("abilities"):
            logger.warning(f"Boss {b.get('id', 'unknown')} has no abilities and will never counter")
        bosses.append(Combatant.from_dict(b))

    logger.debug(f"Loaded {len(bosses)} bosses from {bosses_file}")
    return GameData(bosses=bosses)
