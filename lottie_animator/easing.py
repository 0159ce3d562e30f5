from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .types import EasingKind


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(value, max_value))


@dataclass(frozen=True)
class Tangent:
    """One bezier control point, duplicated per axis as Bodymovin expects."""
    x: List[float]
    y: List[float]

    def to_lottie(self) -> Dict[str, List[float]]:
        return {"x": list(self.x), "y": list(self.y)}


@dataclass(frozen=True)
class BezierTangents:
    out_tangent: Tangent
    in_tangent: Tangent


def _tangent(x: float, y: float) -> Tangent:
    return Tangent(x=[x, x], y=[y, y])


# CSS cubic-bezier(x1, y1, x2, y2): out tangent is (x1, y1), in tangent is (x2, y2)
BEZIER_TANGENTS: Dict[EasingKind, BezierTangents] = {
    EasingKind.EASE_IN: BezierTangents(_tangent(0.42, 0), _tangent(1, 1)),
    EasingKind.EASE_OUT: BezierTangents(_tangent(0, 0), _tangent(0.58, 1)),
    EasingKind.EASE_IN_OUT: BezierTangents(_tangent(0.42, 0), _tangent(0.58, 1)),
}


def normalize_easing(easing: Union[str, EasingKind, None]) -> EasingKind:
    """Parse an easing name, falling back to linear for anything unrecognised."""
    if isinstance(easing, EasingKind):
        return easing
    try:
        return EasingKind(str(easing).strip().lower())
    except ValueError:
        return EasingKind.LINEAR


def tangents_for(easing: Union[str, EasingKind, None]) -> Optional[BezierTangents]:
    """Bezier tangents for an easing, or None for linear segments."""
    return BEZIER_TANGENTS.get(normalize_easing(easing))
