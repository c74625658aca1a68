"""
Test configuration: Flask app/client fixtures and a throwaway database
"""
import os
import random
import tempfile
from types import SimpleNamespace

import pytest

from creature_clash.models.combatant import Ability, Combatant
from creature_clash.services.battle_manager import BattleManager
from creature_clash.services.database import DatabaseManager
from creature_clash.services.image_store import ImageStore
from creature_clash.web.api import app
from creature_clash.web.routes import battles, matches, users
from creature_clash.web.routes.game_state_utils import run_async


@pytest.fixture(scope='session')
def flask_app():
    """Create and configure a test app instance."""
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(flask_app):
    """A test client for the app."""
    return flask_app.test_client()


@pytest.fixture
def db_path():
    fd, path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    yield path
    os.remove(path)


@pytest.fixture
def db(db_path):
    # Initialization is left to the tests
    return DatabaseManager(db_path)


@pytest.fixture
def live_backend(db_path, tmp_path, monkeypatch):
    """Point every route module at a fresh database, image dir and seeded RNG"""
    database = DatabaseManager(db_path)
    run_async(database.initialize())
    store = ImageStore(str(tmp_path / 'images'))
    manager = BattleManager(rng=random.Random(1234))

    for module in (users, battles, matches):
        monkeypatch.setattr(module, 'db_manager', database)
    monkeypatch.setattr(users, 'image_store', store)
    monkeypatch.setattr(battles, 'battle_manager', manager)
    monkeypatch.setattr(matches, 'battle_manager', manager)
    return SimpleNamespace(db=database, images=store, battle_manager=manager)


def make_combatant(name='Hero', health=100, attack=10, defense=5, speed=5, abilities=None):
    if abilities is None:
        abilities = [Ability('Punch', damage=10), Ability('Kick', damage=8)]
    return Combatant(name=name, health=health, attack=attack, defense=defense, speed=speed, abilities=abilities)


@pytest.fixture
def combatant_factory():
    return make_combatant
