# MIT License
"""Runtime configuration.

Model defaults live on the pydantic input models.  Deployment settings
come from environment variables:

* ``IMPACT_LOG_LEVEL`` – logging level name (default ``INFO``)
* ``IMPACT_PRESETS_DIR`` – directory of preset JSON files
  (default ``assets/presets`` next to the app)
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List

from .params import ForestInputs

logger = logging.getLogger(__name__)

DEFAULT_PRESETS_DIR = Path(__file__).resolve().parent.parent / "assets" / "presets"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_log_level() -> int:
    name = os.getenv("IMPACT_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Configure root logging once for the dashboard process."""
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)


def get_presets_dir() -> Path:
    return Path(os.getenv("IMPACT_PRESETS_DIR") or DEFAULT_PRESETS_DIR)


def list_presets() -> List[str]:
    """Names of the available preset files, without extension."""
    directory = get_presets_dir()
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob("*.json"))


def load_preset(name: str) -> ForestInputs:
    """Load a preset project from the presets folder.

    If the file does not exist or is malformed, logs a warning and
    returns the default :class:`ForestInputs`.
    """
    path = get_presets_dir() / f"{name}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return ForestInputs.model_validate(data)
    except (OSError, ValueError) as exc:
        logger.warning("Could not load preset %s (%s); using defaults", path, exc)
        return ForestInputs()
