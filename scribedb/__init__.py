from flask import Flask
from .config import Config
from .extensions import cors, init_store

__version__ = "1.0.1"


def create_app(config_class: type[Config] = Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Extensions
    cors.init_app(app)
    init_store(app)

    # Blueprints
    from .routes.pages import bp as pages_bp
    from .routes.collections_api import bp as collections_api

    app.register_blueprint(pages_bp, url_prefix="/api")
    app.register_blueprint(collections_api, url_prefix="/api")

    return app
