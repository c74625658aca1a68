"""Runtime settings, read from the environment (and a project .env file)"""
import os
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Load environment variables
load_dotenv(PROJECT_ROOT / '.env')

DB_PATH = os.getenv('CREATURE_CLASH_DB_PATH', str(PROJECT_ROOT / 'creature_clash.db'))
IMAGES_DIR = os.getenv('CREATURE_CLASH_IMAGES_DIR', str(PROJECT_ROOT / 'images'))
CORS_ORIGIN = os.getenv('CORS_ORIGIN', 'http://localhost:5173')
HOST = os.getenv('CREATURE_CLASH_HOST', '0.0.0.0')
PORT = int(os.getenv('CREATURE_CLASH_PORT', '8787'))
# Finished battles and idle lobbies older than this are pruned
STALE_BATTLE_HOURS = float(os.getenv('CREATURE_CLASH_STALE_HOURS', '24'))
