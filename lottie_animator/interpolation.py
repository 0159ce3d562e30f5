from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .easing import clamp
from .types import Keyframe


def interpolate_linear(start: float, end: float, t: float) -> float:
    return start + (end - start) * clamp(t, 0.0, 1.0)


def sort_keyframes(keyframes: Iterable[Keyframe]) -> List[Keyframe]:
    return sorted(keyframes, key=lambda k: k.time)


def find_keyframe_bounds(
    keyframes: Sequence[Keyframe],
    time: float,
) -> Optional[Tuple[Keyframe, Keyframe]]:
    """Find the segment containing ``time`` in a time-sorted track.

    Returns None with fewer than two keyframes or when ``time`` lies outside
    the track. A time equal to an interior keyframe opens the segment that
    starts at that keyframe; only the last keyframe closes a segment. When
    the final segment has zero length (the last keyframes share a time), the
    last two keyframes are returned for ``time`` equal to that shared time.
    """
    if len(keyframes) < 2:
        return None
    if time < keyframes[0].time or time > keyframes[-1].time:
        return None

    last = len(keyframes) - 2
    for i in range(len(keyframes) - 1):
        k0 = keyframes[i]
        k1 = keyframes[i + 1]
        if k0.time <= time < k1.time:
            return k0, k1
        if time == k1.time and i == last:
            return k0, k1
    # zero-length final segments end up here
    return keyframes[-2], keyframes[-1]


def interpolate_keyframes(k0: Keyframe, k1: Keyframe, time: float) -> float:
    if time <= k0.time:
        return k0.value
    if time >= k1.time:
        return k1.value
    duration = k1.time - k0.time
    t = (time - k0.time) / duration if duration > 0 else 0.0
    return interpolate_linear(k0.value, k1.value, t)


def value_at_time(keyframes: Iterable[Keyframe], time: float) -> float:
    """Value of a single (layer, property) track at ``time`` in seconds.

    Clamps to the first/last keyframe outside the track and interpolates
    linearly inside it. Keyframes may arrive in any order; when several share
    a time, the one listed last wins.
    """
    ordered = sort_keyframes(keyframes)
    if not ordered:
        return 0.0
    if len(ordered) == 1:
        return ordered[0].value
    if time <= ordered[0].time:
        first = [k for k in ordered if k.time == ordered[0].time]
        return first[-1].value
    if time >= ordered[-1].time:
        return ordered[-1].value

    bounds = find_keyframe_bounds(ordered, time)
    if bounds is None:
        # unreachable for finite times inside the track
        return 0.0
    return interpolate_keyframes(bounds[0], bounds[1], time)
