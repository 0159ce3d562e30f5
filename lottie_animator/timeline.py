from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .interpolation import sort_keyframes, value_at_time
from .types import AnimatableProperty, Keyframe, Layer

TrackKey = Tuple[str, AnimatableProperty]


@dataclass
class LayerSample:
    x: float
    y: float
    rotation: float
    scale_x: float
    scale_y: float
    opacity: float


class KeyframeIndex:
    """Flat keyframe store with a lookup keyed by (layer id, property).

    Tracks are kept sorted by time and hold at most one keyframe per time;
    adding a keyframe at an occupied time replaces the previous one. Ids are
    not assumed to be unique, so keyframes that share an id on different
    tracks or times are all kept.
    """

    def __init__(self) -> None:
        self._tracks: Dict[TrackKey, List[Keyframe]] = {}

    @classmethod
    def from_keyframes(cls, keyframes: Iterable[Keyframe]) -> "KeyframeIndex":
        index = cls()
        for keyframe in keyframes:
            index.insert(keyframe)
        return index

    def __len__(self) -> int:
        return sum(len(track) for track in self._tracks.values())

    def __iter__(self):
        for key in sorted(self._tracks, key=lambda k: (k[0], k[1].value)):
            yield from self._tracks[key]

    def layer_ids(self) -> List[str]:
        return sorted({layer_id for layer_id, _ in self._tracks})

    def track(self, layer_id: str, prop: AnimatableProperty) -> List[Keyframe]:
        return list(self._tracks.get((layer_id, AnimatableProperty(prop)), []))

    def has_keyframe_at(self, layer_id: str, prop: AnimatableProperty, time: float) -> bool:
        return any(k.time == time for k in self.track(layer_id, prop))

    def insert(self, keyframe: Keyframe) -> Keyframe:
        """Insert an existing keyframe, replacing any at the same track and time."""
        track = self._tracks.setdefault((keyframe.layer_id, keyframe.property), [])
        for i, existing in enumerate(track):
            if existing.time == keyframe.time:
                track[i] = keyframe
                return keyframe
        track.append(keyframe)
        track[:] = sort_keyframes(track)
        return keyframe

    def add_keyframe(
        self,
        layer_id: str,
        prop: AnimatableProperty,
        value: float,
        time: float,
        easing: str = "linear",
    ) -> Keyframe:
        """Create a keyframe, or update the one already at ``time`` in place."""
        prop = AnimatableProperty(prop)
        for existing in self._tracks.get((layer_id, prop), []):
            if existing.time == time:
                existing.value = value
                existing.easing = easing
                return existing
        keyframe = Keyframe(
            id=uuid.uuid4().hex[:12],
            time=time,
            property=prop,
            value=value,
            easing=easing,
            layer_id=layer_id,
        )
        return self.insert(keyframe)

    def remove_keyframe(self, keyframe_id: str) -> bool:
        """Remove every keyframe carrying ``keyframe_id``."""
        removed = False
        for key in list(self._tracks):
            track = self._tracks[key]
            kept = [k for k in track if k.id != keyframe_id]
            if len(kept) == len(track):
                continue
            removed = True
            if kept:
                track[:] = kept
            else:
                del self._tracks[key]
        return removed

    def remove_layer(self, layer_id: str) -> int:
        removed = 0
        for key in [k for k in self._tracks if k[0] == layer_id]:
            removed += len(self._tracks.pop(key))
        return removed

    def value_at(
        self,
        layer_id: str,
        prop: AnimatableProperty,
        time: float,
        default: Optional[float] = None,
    ) -> float:
        track = self.track(layer_id, prop)
        if not track:
            return 0.0 if default is None else default
        return value_at_time(track, time)


def sample_layer(index: KeyframeIndex, layer: Layer, time: float) -> LayerSample:
    """Effective transform and opacity of a layer at ``time``.

    Keyframed properties are interpolated, the rest come from the element.
    """
    transform = layer.element.transform
    style = layer.element.style
    return LayerSample(
        x=index.value_at(layer.id, AnimatableProperty.X, time, transform.x),
        y=index.value_at(layer.id, AnimatableProperty.Y, time, transform.y),
        rotation=index.value_at(layer.id, AnimatableProperty.ROTATION, time, transform.rotation),
        scale_x=index.value_at(layer.id, AnimatableProperty.SCALE_X, time, transform.scale_x),
        scale_y=index.value_at(layer.id, AnimatableProperty.SCALE_Y, time, transform.scale_y),
        opacity=index.value_at(layer.id, AnimatableProperty.OPACITY, time, style.opacity),
    )
