import logging

from flask import Flask, jsonify
from flask_cors import CORS

from creature_clash import config
from creature_clash.services.database import DatabaseManager
from creature_clash.web.routes.api_routes import api_bp
from creature_clash.web.routes.game_state_utils import run_async

app = Flask(__name__)
CORS(app, origins=[config.CORS_ORIGIN], supports_credentials=True)

# API routes are always prefixed with /api so they never shadow frontend assets
app.register_blueprint(api_bp, url_prefix='/api')


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({'status': 'ok', 'db': config.DB_PATH})


def main(host: str = config.HOST, port: int = config.PORT, debug: bool = False):
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    print(f"📦 Using database: {config.DB_PATH}")
    print(f"🖼️ Storing images in: {config.IMAGES_DIR}")
    run_async(DatabaseManager(config.DB_PATH).initialize())
    print("✅ Database initialized")
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    main()
