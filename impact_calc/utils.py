# MIT License
from __future__ import annotations

import hashlib
import json
import logging
import math
from typing import Any

import numpy as np
from pydantic import BaseModel

logger = logging.getLogger(__name__)


def inputs_hash(*models: BaseModel) -> str:
    """Compute a stable hash for one or more input models.

    Serialises the models to JSON (with sorted keys) and computes a
    SHA256 hash.  Used to tell whether the stored result still matches
    the inputs currently shown in the form.

    Parameters
    ----------
    models:
        Input model instances, e.g. forest inputs and economics.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    payload = [m.model_dump(mode="json", exclude_none=True) for m in models]
    # ensure deterministic key ordering
    raw = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def coerce_non_negative(value: Any, name: str) -> float:
    """Return `value` as a finite, non-negative float.

    Missing, non-numeric, NaN, infinite or negative values are replaced
    by 0.0 and a warning naming `name` is logged.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid value for %s (%r); using 0", name, value)
        return 0.0
    if not np.isfinite(number) or number < 0.0:
        logger.warning("Invalid value for %s (%r); using 0", name, value)
        return 0.0
    return number


def ha_to_m2(ha: float) -> float:
    """Convert hectares to square metres."""
    return ha * 10_000.0


def kg_to_tonnes(kg: float) -> float:
    """Convert kilograms to metric tonnes."""
    return kg / 1000.0


def mm_on_area_to_kl(mm: float, area_m2: float) -> float:
    """Volume in kilolitres of `mm` of water over `area_m2` square metres."""
    return area_m2 * mm / 1000.0


def round_half_up(value: float) -> int:
    """Round a non-negative count to the nearest integer, halves upwards.

    The built-in ``round`` rounds halves to even (``round(2.5) == 2``);
    head counts round ``.5`` up instead.
    """
    return int(math.floor(value + 0.5))
