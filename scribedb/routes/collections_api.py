from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from ..extensions import get_store
from ..storage.codec import decode
from ..storage.errors import EncodingFailure, InvalidArgument, IOFailure, NotFound

bp = Blueprint("collections_api", __name__)


@bp.get("/collections/<collection>")
def list_records(collection):
    store = get_store()
    if request.args.get("names", "").strip().lower() in {"1", "true", "yes", "on"}:
        return jsonify(store.resources(collection))
    # Directory order; clients must not rely on it
    return jsonify([decode(raw) for raw in store.read_all(collection)])


@bp.get("/collections/<collection>/<resource>")
def get_record(collection, resource):
    return jsonify(get_store().read(collection, resource))


@bp.put("/collections/<collection>/<resource>")
def put_record(collection, resource):
    if not request.is_json:
        return jsonify({"error": "Request body must be JSON"}), 400
    try:
        payload = request.get_json()
    except BadRequest:
        return jsonify({"error": "Request body is not valid JSON"}), 400
    get_store().write(collection, resource, payload)
    return jsonify(payload)


@bp.delete("/collections/<collection>")
@bp.delete("/collections/<collection>/<resource>")
def delete_record(collection, resource=""):
    get_store().delete(collection, resource)
    return "", 204


@bp.errorhandler(InvalidArgument)
def _invalid_argument(exc):
    return jsonify({"error": str(exc)}), 400


@bp.errorhandler(NotFound)
def _not_found(exc):
    return jsonify({"error": str(exc)}), 404


@bp.errorhandler(EncodingFailure)
def _encoding_failure(exc):
    return jsonify({"error": str(exc)}), 422


@bp.errorhandler(IOFailure)
def _io_failure(exc):
    current_app.logger.error("Storage failure: %s", exc, exc_info=exc)
    return jsonify({"error": "storage failure"}), 500
