"""Structural checks run on an exported document before it is handed out."""
from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Dict, List


class ExportValidationError(ValueError):
    def __init__(self, message: str, errors: List[str]) -> None:
        super().__init__(message)
        self.errors = errors


@dataclass
class ValidationResult:
    valid: bool
    message: str
    errors: List[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_property_block(value: Any) -> bool:
    return isinstance(value, dict) and "a" in value and "k" in value


def _check_property(block: Dict[str, Any], path: str, errors: List[str]) -> None:
    animated = block.get("a")
    if animated not in (0, 1) or isinstance(animated, bool):
        errors.append(f"{path}.a must be 0 or 1, got {animated!r}.")
        return
    if animated == 0:
        return

    records = block.get("k")
    if not isinstance(records, list) or not records:
        errors.append(f"{path}.k must be a non-empty keyframe array when animated.")
        return
    previous = None
    for i, record in enumerate(records):
        if not isinstance(record, dict) or not _is_number(record.get("t")):
            errors.append(f"{path}.k[{i}] must be a keyframe with a numeric 't'.")
            continue
        frame = record["t"]
        if previous is not None and frame <= previous:
            errors.append(
                f"{path}.k[{i}].t ({frame}) must be greater than the previous frame ({previous})."
            )
        previous = frame


def _walk_properties(node: Any, path: str, errors: List[str]) -> None:
    if isinstance(node, list):
        for i, item in enumerate(node):
            _walk_properties(item, f"{path}[{i}]", errors)
        return
    if not isinstance(node, dict):
        return
    for key, value in node.items():
        child = f"{path}.{key}" if path else key
        if _is_property_block(value):
            _check_property(value, child, errors)
        elif isinstance(value, (dict, list)):
            _walk_properties(value, child, errors)


def _check_header(doc: Dict[str, Any], errors: List[str]) -> None:
    if not isinstance(doc.get("v"), str):
        errors.append("v (format version) is missing or not a string.")
    if not isinstance(doc.get("nm"), str):
        errors.append("nm (name) is missing or not a string.")

    fr = doc.get("fr")
    if not _is_number(fr):
        errors.append("fr (frame rate) is missing or not a number.")
    elif fr <= 0:
        errors.append(f"fr (frame rate) must be positive, got {fr}.")

    for key, label in (("w", "width"), ("h", "height")):
        value = doc.get(key)
        if not _is_number(value):
            errors.append(f"{key} ({label}) is missing or not a number.")
        elif value <= 0:
            errors.append(f"{key} ({label}) must be positive, got {value}.")

    frames_ok = True
    for key, label in (("ip", "in point"), ("op", "out point")):
        value = doc.get(key)
        if not _is_number(value):
            errors.append(f"{key} ({label}) is missing or not a number.")
            frames_ok = False
        elif value < 0:
            errors.append(f"{key} ({label}) must not be negative, got {value}.")
            frames_ok = False
    if frames_ok and doc["op"] < doc["ip"]:
        errors.append(f"op ({doc['op']}) must not be less than ip ({doc['ip']}).")


def _check_layers(layers: Any, errors: List[str]) -> None:
    if not isinstance(layers, list):
        errors.append("layers is missing or not an array.")
        return
    for i, layer in enumerate(layers):
        path = f"layers[{i}]"
        if not isinstance(layer, dict):
            errors.append(f"{path} must be an object.")
            continue
        if not _is_number(layer.get("ty")):
            errors.append(f"{path}.ty (layer type) is missing or not a number.")
        shapes = layer.get("shapes")
        if not isinstance(shapes, list) or not shapes:
            errors.append(f"{path}.shapes must be a non-empty shape tree.")
        ks = layer.get("ks")
        if not isinstance(ks, dict):
            errors.append(f"{path}.ks (transform) is missing or not an object.")
        _walk_properties(layer, path, errors)


def validate_with_message(doc: Any) -> ValidationResult:
    """Check a Lottie document and describe every problem found."""
    errors: List[str] = []
    if not isinstance(doc, dict):
        errors.append("Document root must be a JSON object.")
    else:
        _check_header(doc, errors)
        _check_layers(doc.get("layers"), errors)

    if not errors:
        return ValidationResult(valid=True, message="Lottie document is valid.")
    noun = "problem" if len(errors) == 1 else "problems"
    message = f"Lottie document is invalid ({len(errors)} {noun}):\n" + "\n".join(
        f"- {error}" for error in errors
    )
    return ValidationResult(valid=False, message=message, errors=errors)


def ensure_valid(doc: Any) -> None:
    result = validate_with_message(doc)
    if not result.valid:
        raise ExportValidationError(result.message, result.errors)
