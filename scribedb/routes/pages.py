from flask import Blueprint, jsonify

from .. import __version__

bp = Blueprint("pages", __name__)


@bp.get("/")
def index():
    return jsonify({"name": "scribedb", "version": __version__})
