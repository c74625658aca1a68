"""
User handlers - entering the game, fetching users and creature images
"""
from flask import Response, request, jsonify

from creature_clash import config
from creature_clash.services.database import DatabaseManager
from creature_clash.services.image_store import ImageStore, decode_base64_image, make_image_key
from .game_state_utils import run_async, error_response, request_data, string_field

# Initialize services
db_manager = DatabaseManager(config.DB_PATH)
image_store = ImageStore(config.IMAGES_DIR)


def enter():
    """Create or fetch a user by name"""
    name = string_field(request_data(), 'name')
    if not name:
        return error_response('Name is required', 400)

    user = run_async(db_manager.get_or_create_user(name))
    return jsonify(user.to_dict())


def get_user():
    """Fetch a user by ?name="""
    name = request.args.get('name')
    if not name:
        return error_response('Name is required', 400)

    user = run_async(db_manager.load_user(name))
    if not user:
        return error_response('User not found', 404)
    return jsonify(user.to_dict())


def save_creature():
    """Store the drawn creature image and attach its key to the user"""
    data = request_data()
    name = string_field(data, 'name')
    image = string_field(data, 'image')
    if not name or not image:
        return error_response('Name and image are required', 400)

    user = run_async(db_manager.load_user(name))
    if not user:
        return error_response('User not found', 404)

    image_bytes = decode_base64_image(image)
    key = image_store.put(make_image_key(name), image_bytes)
    updated = run_async(db_manager.set_creature_image(name, key))
    return jsonify(updated.to_dict())


def get_image(key):
    """Serve a stored image"""
    stored = image_store.get(key)
    if not stored:
        return Response('Not found', status=404, mimetype='text/plain')
    return Response(stored.data, mimetype=stored.content_type)
