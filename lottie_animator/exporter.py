from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .easing import tangents_for
from .interpolation import value_at_time
from .timeline import KeyframeIndex
from .types import AnimatableProperty, EllipseElement, Keyframe, Layer, Project, RectElement
from .utils import hex_to_rgba, to_frame

logger = logging.getLogger(__name__)

BODYMOVIN_VERSION = "5.5.7"
SHAPE_LAYER = 4

LottieDict = Dict[str, Any]


def _static(value: Any) -> LottieDict:
    return {"a": 0, "k": value}


def _animated(records: List[LottieDict]) -> LottieDict:
    return {"a": 1, "k": records}


def _keyframe_record(frame: int, values: List[float], easing: str) -> LottieDict:
    record: LottieDict = {"t": frame, "s": values}
    tangents = tangents_for(easing)
    if tangents is not None:
        # Players read the leading control point from "i" and the trailing one from "o"
        record["i"] = tangents.out_tangent.to_lottie()
        record["o"] = tangents.in_tangent.to_lottie()
    return record


def _scalar_block(
    track: List[Keyframe],
    static_value: float,
    fps: int,
    convert: Callable[[float], float],
) -> LottieDict:
    if not track:
        return _static(convert(static_value))
    records: Dict[int, LottieDict] = {}
    for keyframe in track:
        frame = to_frame(keyframe.time, fps)
        # later keyframes win when several times round to one frame
        records[frame] = _keyframe_record(frame, [convert(keyframe.value)], keyframe.easing)
    return _animated([records[f] for f in sorted(records)])


def _vector_block(
    first: List[Keyframe],
    second: List[Keyframe],
    static_values: List[float],
    fps: int,
    convert: Callable[[float], float],
) -> LottieDict:
    """Merge two per-axis tracks into a single 2-vector block.

    At every keyframe time of either axis, an axis without a keyframe at that
    exact time is sampled from its own track, or from its static value when
    it has no keyframes at all.
    """
    if not first and not second:
        return _static([convert(v) for v in static_values])

    tracks = (first, second)
    times = sorted({k.time for k in first} | {k.time for k in second})
    records: Dict[int, LottieDict] = {}
    for time in times:
        values: List[float] = []
        easing: Optional[str] = None
        for axis, track in enumerate(tracks):
            exact = [k for k in track if k.time == time]
            if exact:
                values.append(exact[-1].value)
                if easing is None:
                    easing = exact[-1].easing
            elif track:
                values.append(value_at_time(track, time))
            else:
                values.append(static_values[axis])
        frame = to_frame(time, fps)
        records[frame] = _keyframe_record(frame, [convert(v) for v in values], easing or "linear")
    return _animated([records[f] for f in sorted(records)])


def _identity(value: float) -> float:
    return value


def _percent(value: float) -> float:
    return value * 100


def _transform_block(layer: Layer, index: KeyframeIndex, fps: int) -> LottieDict:
    transform = layer.element.transform
    style = layer.element.style

    def track(prop: AnimatableProperty) -> List[Keyframe]:
        return index.track(layer.id, prop)

    return {
        "a": _static([0, 0]),
        "p": _vector_block(
            track(AnimatableProperty.X),
            track(AnimatableProperty.Y),
            [transform.x, transform.y],
            fps,
            _identity,
        ),
        "r": _scalar_block(track(AnimatableProperty.ROTATION), transform.rotation, fps, _identity),
        "s": _vector_block(
            track(AnimatableProperty.SCALE_X),
            track(AnimatableProperty.SCALE_Y),
            [transform.scale_x, transform.scale_y],
            fps,
            _percent,
        ),
        "o": _scalar_block(track(AnimatableProperty.OPACITY), style.opacity, fps, _percent),
    }


def _geometry_item(layer: Layer) -> LottieDict:
    element = layer.element
    size = _static([element.width, element.height])
    if isinstance(element, RectElement):
        return {"ty": "rc", "nm": element.name or "Rectangle", "d": 1,
                "p": _static(element.center()), "s": size, "r": _static(0)}
    if isinstance(element, EllipseElement):
        return {"ty": "el", "nm": element.name or "Ellipse", "d": 1,
                "p": _static(element.center()), "s": size}
    raise ValueError(f"Unsupported element type on layer {layer.id!r}: {type(element).__name__}")


def _shape_tree(layer: Layer) -> List[LottieDict]:
    style = layer.element.style
    items: List[LottieDict] = [_geometry_item(layer)]

    stroke = hex_to_rgba(style.stroke)
    if stroke is not None and style.stroke_width > 0:
        items.append({
            "ty": "st",
            "nm": "Stroke",
            "c": _static(stroke),
            "o": _static(100),
            "w": _static(style.stroke_width),
            "lc": 2,
            "lj": 2,
        })

    fill = hex_to_rgba(style.fill)
    if fill is not None:
        items.append({"ty": "fl", "nm": "Fill", "c": _static(fill), "o": _static(100), "r": 1})

    items.append({
        "ty": "tr",
        "nm": "Transform",
        "p": _static([0, 0]),
        "a": _static([0, 0]),
        "s": _static([100, 100]),
        "r": _static(0),
        "o": _static(100),
    })
    return [{"ty": "gr", "nm": layer.name, "it": items}]


def _shape_layer(position: int, layer: Layer, index: KeyframeIndex, out_frame: int, fps: int) -> LottieDict:
    record: LottieDict = {
        "ddd": 0,
        "ind": position + 1,
        "ty": SHAPE_LAYER,
        "nm": layer.name,
        "sr": 1,
        "ks": _transform_block(layer, index, fps),
        "ao": 0,
        "shapes": _shape_tree(layer),
        "ip": 0,
        "op": out_frame,
        "st": 0,
        "bm": 0,
    }
    if not layer.visible:
        record["hd"] = True
    return record


def export_to_lottie(project: Project) -> LottieDict:
    """Build a Bodymovin document for ``project``.

    The project is only read. Layers keep the project order and every
    animated keyframe array is sorted by frame.
    """
    out_frame = to_frame(project.duration, project.fps)
    index = KeyframeIndex.from_keyframes(project.keyframes)
    known = {layer.id for layer in project.layers}
    dangling = [layer_id for layer_id in index.layer_ids() if layer_id not in known]
    if dangling:
        logger.debug("Ignoring keyframes for unknown layers: %s", ", ".join(dangling))

    layers = [
        _shape_layer(position, layer, index, out_frame, project.fps)
        for position, layer in enumerate(project.layers)
    ]
    logger.debug("Exported %d layers, %d keyframes from %r", len(layers), len(index), project.name)
    return {
        "v": BODYMOVIN_VERSION,
        "fr": project.fps,
        "ip": 0,
        "op": out_frame,
        "w": project.width,
        "h": project.height,
        "nm": project.name,
        "ddd": 0,
        "assets": [],
        "layers": layers,
    }
