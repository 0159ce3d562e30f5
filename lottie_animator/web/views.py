from __future__ import annotations

import json
import logging

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from ..exporter import export_to_lottie
from ..interpolation import value_at_time
from ..types import Keyframe, Project
from ..utils import suggested_filename
from ..validator import ExportValidationError, ensure_valid, validate_with_message

logger = logging.getLogger(__name__)

bp = Blueprint("views", __name__)


def _error(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


@bp.route("/api/export", methods=["POST"])
def export():
    data = request.get_json(silent=True)
    if data is None:
        return _error("Request body must be a JSON project", 400)
    try:
        project = Project.model_validate(data)
    except ValidationError as exc:
        return _error("Invalid project", 400, details=json.loads(exc.json(include_url=False)))
    if not project.layers:
        return _error("Project has no layers", 400)

    try:
        document = export_to_lottie(project)
    except Exception:
        logger.exception("Export of %r failed", project.name)
        return _error("Export failed", 500)

    try:
        ensure_valid(document)
    except ExportValidationError as exc:
        if current_app.config["STRICT_EXPORT"]:
            return _error(str(exc), 422, errors=exc.errors)
        logger.warning("Serving invalid export for %r: %s", project.name, exc)

    filename = suggested_filename(project.name, current_app.config["DEFAULT_NAME"])
    body = json.dumps(document, indent=current_app.config["JSON_INDENT"])
    return Response(
        body,
        mimetype="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@bp.route("/api/validate", methods=["POST"])
def validate():
    data = request.get_json(silent=True)
    if data is None:
        return _error("Request body must be a JSON document", 400)
    result = validate_with_message(data)
    return jsonify({"valid": result.valid, "message": result.message, "errors": result.errors})


@bp.route("/api/value", methods=["POST"])
def value():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return _error("Request body must be a JSON object", 400)
    try:
        keyframes = [Keyframe.model_validate(k) for k in data.get("keyframes", [])]
        time = float(data.get("time", 0.0))
    except (ValidationError, TypeError, ValueError) as exc:
        return _error(f"Invalid request: {exc}", 400)
    return jsonify({"value": value_at_time(keyframes, time)})
