import argparse
import asyncio
import logging

from creature_clash import config
from creature_clash.services.data_loader import load_game_data
from creature_clash.services.database import DatabaseManager


async def init_db(db_path: str):
    """Create tables and run column migrations"""
    db = DatabaseManager(db_path)
    await db.initialize()
    print("Database initialized successfully!")


async def prune_stale(db_path: str, hours: float):
    """Delete finished battles and abandoned lobbies"""
    db = DatabaseManager(db_path)
    await db.initialize()
    deleted = await db.delete_stale_battles(hours)
    print(f"Pruned {deleted} stale battles (older than {hours}h)")
    return deleted


def list_bosses():
    data = load_game_data()
    for boss in data.bosses:
        moves = ', '.join(f"{a.name} ({a.damage or 0})" for a in boss.abilities)
        print(f" - {boss.boss_id}: {boss.name} | hp={boss.health} atk={boss.attack} def={boss.defense} spd={boss.speed} | {moves}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Creature Clash CLI")
    parser.add_argument('--db-path', default=config.DB_PATH, help='Path to the database file')
    parser.add_argument('--init-db', action='store_true', help='Create database tables')
    parser.add_argument('--prune-stale', nargs='?', type=float, const=config.STALE_BATTLE_HOURS, metavar='HOURS',
                        help='Delete finished battles and idle lobbies older than HOURS')
    parser.add_argument('--list-bosses', action='store_true', help='Print the boss roster')
    parser.add_argument('--serve', action='store_true', help='Run the HTTP API')
    parser.add_argument('--host', default=config.HOST)
    parser.add_argument('--port', type=int, default=config.PORT)
    parser.add_argument('--debug', action='store_true')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    ran = False
    if args.init_db:
        asyncio.run(init_db(args.db_path))
        ran = True
    if args.prune_stale is not None:
        asyncio.run(prune_stale(args.db_path, args.prune_stale))
        ran = True
    if args.list_bosses:
        list_bosses()
        ran = True
    if args.serve:
        from creature_clash.web.api import main as serve
        serve(host=args.host, port=args.port, debug=args.debug)
        ran = True
    if not ran:
        build_parser().print_help()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
