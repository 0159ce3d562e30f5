from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from rich.logging import RichHandler

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")


def to_frame(seconds: float, fps: float) -> int:
    """Convert seconds to the nearest frame number, rounding halves up."""
    return int(math.floor(seconds * fps + 0.5))


def hex_to_rgba(color: str) -> Optional[List[float]]:
    """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into 0-1 RGBA components.

    Returns None for ``none``/``transparent``/empty; anything else that does
    not parse falls back to opaque black.
    """
    value = (color or "").strip()
    if value.lower() in ("", "none", "transparent"):
        return None
    match = _HEX_COLOR.match(value)
    if match is None:
        logger.warning("Unsupported color %r, exporting as black", color)
        return [0.0, 0.0, 0.0, 1.0]
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits += "ff"
    return [int(digits[i:i + 2], 16) / 255 for i in range(0, 8, 2)]


def suggested_filename(name: Optional[str], default: str = "animation") -> str:
    """Filesystem-safe ``.json`` filename derived from a project name."""
    stem = _UNSAFE_FILENAME.sub("_", (name or "").strip()).strip("._")
    if not stem:
        stem = _UNSAFE_FILENAME.sub("_", default).strip("._") or "animation"
    if stem.lower().endswith(".json"):
        return stem
    return f"{stem}.json"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
