# scribedb/extensions.py
from flask import Flask, current_app
from flask_cors import CORS

from .storage.json_store import JsonStore, Options
from .utils.logs import new_console_logger

STORE_KEY = "json_store"

# CORS is a real Flask extension (keeps init_app)
cors = CORS()


def init_store(app: Flask) -> JsonStore:
    """Open the store under DATA_DIR and attach it to the app."""
    logger = new_console_logger("scribedb.store", level=app.config.get("LOG_LEVEL", "DEBUG"))
    store = JsonStore(app.config["DATA_DIR"], Options(logger=logger))
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> JsonStore:
    return current_app.extensions[STORE_KEY]
