"""Database manager for users and battle documents"""
import aiosqlite
import json
import datetime
import logging
from typing import Optional

from ..models.user import User
from ..models.combatant import Ability
from ..models.battle_state import BattleState, BattleStatus

logger = logging.getLogger('creature_clash')


class BattleConflictError(Exception):
    """Raised when a battle row changed since it was loaded"""

    def __init__(self, battle_id: str, expected_version: int):
        super().__init__(f"Battle {battle_id} was modified concurrently (expected version {expected_version})")
        self.battle_id = battle_id
        self.expected_version = expected_version


class DatabaseManager:
    """Manages SQLite database for users and battles"""
    def __init__(self, db_path: str = "creature_clash.db"):
        self.db_path = db_path

    async def initialize(self):
        """Create tables if they don't exist"""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    creature_image TEXT,
                    health INTEGER NOT NULL DEFAULT 100,
                    attack INTEGER NOT NULL DEFAULT 10,
                    defense INTEGER NOT NULL DEFAULT 5,
                    speed INTEGER NOT NULL DEFAULT 5,
                    abilities TEXT,
                    evolution_points INTEGER NOT NULL DEFAULT 0
                )
            """)
            await db.execute("""
                CREATE TABLE IF NOT EXISTS battles (
                    id TEXT PRIMARY KEY,
                    state_json TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Migration: optimistic concurrency token
            try:
                await db.execute("ALTER TABLE battles ADD COLUMN version INTEGER NOT NULL DEFAULT 0")
            except aiosqlite.OperationalError:
                # Column already exists
                pass
            # Migration: status column used by pruning
            try:
                await db.execute("ALTER TABLE battles ADD COLUMN status TEXT NOT NULL DEFAULT 'ongoing'")
            except aiosqlite.OperationalError:
                pass
            await db.commit()

    @staticmethod
    def _row_to_user(row) -> User:
        abilities = json.loads(row[7]) if row[7] else []
        return User(
            id=row[0],
            name=row[1],
            creature_image=row[2],
            health=row[3],
            attack=row[4],
            defense=row[5],
            speed=row[6],
            abilities=[Ability.from_dict(a) for a in abilities],
            evolution_points=row[8],
        )

    async def load_user(self, name: str) -> Optional[User]:
        """Load user by unique name"""
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute("""
                SELECT id, name, creature_image, health, attack, defense, speed, abilities, evolution_points
                FROM users WHERE name = ?
            """, (name,)) as cursor:
                row = await cursor.fetchone()
                if row:
                    return self._row_to_user(row)
        return None

    async def create_user(self, name: str) -> User:
        """Insert a new user with default stats and abilities"""
        user = User(name=name)
        abilities_json = json.dumps([a.to_dict() for a in user.abilities])

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("""
                INSERT INTO users (name, health, attack, defense, speed, abilities, evolution_points)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (user.name, user.health, user.attack, user.defense, user.speed, abilities_json, user.evolution_points))
            user.id = cursor.lastrowid
            await db.commit()
        logger.info(f"Created user {name} (id {user.id})")
        return user

    async def get_or_create_user(self, name: str) -> User:
        existing = await self.load_user(name)
        if existing:
            return existing
        try:
            return await self.create_user(name)
        except aiosqlite.IntegrityError:
            # Another request created the same name first
            return await self.load_user(name)

    async def set_creature_image(self, name: str, image_key: str) -> Optional[User]:
        """Attach an image store key to the user and return the updated record"""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("UPDATE users SET creature_image = ? WHERE name = ?", (image_key, name))
            await db.commit()
        return await self.load_user(name)

    async def battle_exists(self, battle_id: str) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute("SELECT 1 FROM battles WHERE id = ?", (battle_id,)) as cursor:
                return await cursor.fetchone() is not None

    async def insert_battle(self, state: BattleState):
        """Persist a freshly created battle"""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                INSERT INTO battles (id, state_json, status, version, created_at, updated_at)
                VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
            """, (state.id, json.dumps(state.to_dict()), state.status.value, state.version))
            await db.commit()

    async def load_battle(self, battle_id: str) -> Optional[BattleState]:
        """Load battle state by id; the row version wins over the JSON copy"""
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT state_json, version FROM battles WHERE id = ?",
                (battle_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if row:
                    state = BattleState.from_dict(json.loads(row[0]))
                    state.version = row[1]
                    return state
        return None

    async def save_battle(self, state: BattleState):
        """Write back a mutated battle.

        The update only applies if the row still carries the version the
        state was loaded with; otherwise BattleConflictError is raised and
        nothing is written.
        """
        expected = state.version
        state.version = expected + 1
        state_json = json.dumps(state.to_dict())

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("""
                UPDATE battles
                SET state_json = ?, status = ?, version = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ? AND version = ?
            """, (state_json, state.status.value, state.version, state.id, expected))
            await db.commit()
            if cursor.rowcount == 0:
                state.version = expected
                raise BattleConflictError(state.id, expected)

    async def delete_stale_battles(self, max_age_hours: float = 24) -> int:
        """Delete finished battles and abandoned lobbies not touched for max_age_hours.

        Returns number of deleted rows.
        """
        cutoff = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(hours=max_age_hours)
        cutoff_str = cutoff.strftime('%Y-%m-%d %H:%M:%S')
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("""
                DELETE FROM battles
                WHERE status IN (?, ?) AND updated_at < ?
            """, (BattleStatus.FINISHED.value, BattleStatus.LOBBY.value, cutoff_str))
            await db.commit()
            deleted = cursor.rowcount
        logger.info(f"Pruned {deleted} stale battles older than {max_age_hours}h")
        return deleted
