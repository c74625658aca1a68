import aiosqlite
import pytest

from creature_clash.models.battle_state import BattleState, BattleStatus, BattleType
from creature_clash.models.combatant import Ability, Combatant
from creature_clash.services.database import BattleConflictError


def _battle(battle_id='b1', status=BattleStatus.ONGOING):
    players = [
        Combatant('Ash', 100, 10, 5, 5, [Ability('Punch', damage=10)]),
        Combatant('Gary', 100, 10, 5, 5, [Ability('Kick', damage=8)]),
    ]
    return BattleState(id=battle_id, type=BattleType.MULTIPLAYER, players=players, status=status)


async def _age_battle(db_path, battle_id):
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("UPDATE battles SET updated_at = '2000-01-01 00:00:00' WHERE id = ?", (battle_id,))
        await conn.commit()


@pytest.mark.asyncio
async def test_create_and_load_user(db):
    await db.initialize()
    created = await db.create_user('Ash')
    assert created.id is not None

    loaded = await db.load_user('Ash')
    assert loaded is not None
    assert loaded.id == created.id
    assert (loaded.health, loaded.attack, loaded.defense, loaded.speed) == (100, 10, 5, 5)
    assert [a.name for a in loaded.abilities] == ['Punch', 'Kick', 'Heal']
    assert loaded.abilities[2].heal == 10
    assert loaded.evolution_points == 0
    assert loaded.creature_image is None


@pytest.mark.asyncio
async def test_load_missing_user(db):
    await db.initialize()
    assert await db.load_user('nobody') is None


@pytest.mark.asyncio
async def test_get_or_create_user_is_idempotent(db):
    await db.initialize()
    first = await db.get_or_create_user('Ash')
    second = await db.get_or_create_user('Ash')
    assert first.id == second.id


@pytest.mark.asyncio
async def test_null_abilities_load_as_empty(db, db_path):
    await db.initialize()
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("INSERT INTO users (name) VALUES ('Bare')")
        await conn.commit()
    user = await db.load_user('Bare')
    assert user.abilities == []


@pytest.mark.asyncio
async def test_set_creature_image(db):
    await db.initialize()
    await db.create_user('Ash')
    updated = await db.set_creature_image('Ash', 'Ash-1.png')
    assert updated.creature_image == 'Ash-1.png'


@pytest.mark.asyncio
async def test_insert_and_load_battle(db):
    await db.initialize()
    await db.insert_battle(_battle())

    assert await db.battle_exists('b1')
    assert not await db.battle_exists('b2')

    loaded = await db.load_battle('b1')
    assert loaded.to_dict() == _battle().to_dict()
    assert await db.load_battle('b2') is None


@pytest.mark.asyncio
async def test_duplicate_battle_id_raises_integrity_error(db):
    await db.initialize()
    await db.insert_battle(_battle())

    with pytest.raises(aiosqlite.IntegrityError):
        await db.insert_battle(_battle())


@pytest.mark.asyncio
async def test_save_battle_bumps_version(db):
    await db.initialize()
    await db.insert_battle(_battle())

    state = await db.load_battle('b1')
    state.log.append('Ash uses Punch! It deals 15 damage to Gary.')
    await db.save_battle(state)
    assert state.version == 1

    reloaded = await db.load_battle('b1')
    assert reloaded.version == 1
    assert reloaded.log == state.log


@pytest.mark.asyncio
async def test_stale_write_is_rejected(db):
    await db.initialize()
    await db.insert_battle(_battle())

    first = await db.load_battle('b1')
    second = await db.load_battle('b1')

    first.log.append('first')
    await db.save_battle(first)

    second.log.append('second')
    with pytest.raises(BattleConflictError):
        await db.save_battle(second)
    assert second.version == 0

    stored = await db.load_battle('b1')
    assert stored.log == ['first']


@pytest.mark.asyncio
async def test_delete_stale_battles(db, db_path):
    await db.initialize()
    await db.insert_battle(_battle('old-finished', BattleStatus.FINISHED))
    await db.insert_battle(_battle('old-lobby', BattleStatus.LOBBY))
    await db.insert_battle(_battle('old-ongoing', BattleStatus.ONGOING))
    await db.insert_battle(_battle('new-finished', BattleStatus.FINISHED))
    for battle_id in ('old-finished', 'old-lobby', 'old-ongoing'):
        await _age_battle(db_path, battle_id)

    deleted = await db.delete_stale_battles(24)

    assert deleted == 2
    assert not await db.battle_exists('old-finished')
    assert not await db.battle_exists('old-lobby')
    assert await db.battle_exists('old-ongoing')
    assert await db.battle_exists('new-finished')


@pytest.mark.asyncio
async def test_initialize_twice(db):
    await db.initialize()
    await db.initialize()
    await db.create_user('Ash')
    assert await db.load_user('Ash') is not None
