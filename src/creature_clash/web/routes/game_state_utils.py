"""
Shared helpers for route handlers
"""
import asyncio
import logging
import re
from functools import wraps

from flask import jsonify, request

from creature_clash.services.database import BattleConflictError
from creature_clash.services.image_store import ImageDecodeError

logger = logging.getLogger('creature_clash')

INTEGER_PATTERN = re.compile(r'-?[0-9]+')


def run_async(coro):
    """Helper to run async functions"""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def error_response(message: str, status: int):
    return jsonify({'error': message}), status


def request_data() -> dict:
    """JSON body of the current request, or {} when absent/malformed"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def string_field(data: dict, key: str):
    """Value of `key` if it is a non-empty string, otherwise None"""
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def parse_ability_index(value):
    """Accept ints and ASCII digit strings; anything else is handed through for the resolver to reject"""
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value)
    return value


def json_errors(f):
    """Translate storage/decoding failures into JSON error responses"""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except BattleConflictError as e:
            logger.warning(str(e))
            return error_response('Battle was updated by another request, please retry', 409)
        except ImageDecodeError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception(f"Unhandled error in {f.__name__}")
            return error_response('Internal server error', 500)

    return decorated
