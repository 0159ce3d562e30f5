from __future__ import annotations

from typing import Optional

import yaml
from pydantic import BaseModel


class AppConfig(BaseModel):
    output_dir: Optional[str] = None
    default_name: Optional[str] = None
    indent: Optional[int] = None
    strict: Optional[bool] = None
    log_level: Optional[str] = None


def load_config(path: str) -> AppConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(**data)
