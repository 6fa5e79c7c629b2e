# MIT License
"""Multi‑species aggregation.

The project area is split among species according to their proportions.
Each species is projected independently with :func:`impact_calc.forest.project`
and the yearly series are summed year by year.  All species share the
project duration, so the series always have the same length and can be
added by position.

The additive stock columns (trees, volume, biomass, carbon, CO₂e) are
summed; ``cumulative_co2e`` of the merged series is therefore the sum of
the species' running totals and the summary of the merged result equals
the sum of the species summaries.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd
from pydantic import ValidationError

from .errors import InvalidSpeciesDataError
from .forest import project
from .params import ForestInputs, SpeciesEntry
from .results import ForestResult, SpeciesContribution, YearRecord

logger = logging.getLogger(__name__)

PROPORTION_TOLERANCE = 0.01

SUMMED_COLUMNS = [
    "surviving_trees",
    "growing_stock",
    "above_ground_biomass",
    "below_ground_biomass",
    "total_biomass",
    "carbon_content",
    "co2e",
    "annual_increment",
    "cumulative_co2e",
]

SpeciesLike = Union[SpeciesEntry, Mapping[str, Any]]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return isinstance(value, str) and not value.strip()


def validate_species(species: Optional[Iterable[SpeciesLike]]) -> List[SpeciesEntry]:
    """Validate a species set and return it as :class:`SpeciesEntry` objects.

    Parameters
    ----------
    species:
        Species entries or raw mappings (e.g. rows of an uploaded file).

    Returns
    -------
    list of SpeciesEntry
        The validated entries in their original order.

    Raises
    ------
    InvalidSpeciesDataError
        If the set is empty, a row has no name, a proportion is outside
        (0, 1], a name is repeated, an override is invalid, or the
        proportions do not sum to 1 within 0.01.
    """
    rows = list(species or [])
    if not rows:
        raise InvalidSpeciesDataError("No species data found")

    entries: List[SpeciesEntry] = []
    seen = set()
    for i, row in enumerate(rows, start=1):
        data = row.model_dump() if isinstance(row, SpeciesEntry) else dict(row)
        name = data.get("name")
        if _is_blank(name):
            raise InvalidSpeciesDataError(f"Species at row {i} is missing a name", row=i, field="name")
        name = str(name).strip()
        proportion = data.get("proportion")
        if isinstance(proportion, bool) or not isinstance(proportion, (int, float)) or not 0 < proportion <= 1:
            raise InvalidSpeciesDataError(
                f'Species "{name}" has an invalid proportion (should be between 0 and 1)',
                row=i,
                field="proportion",
            )
        if name in seen:
            raise InvalidSpeciesDataError(f'Species "{name}" appears more than once', row=i, field="name")
        seen.add(name)
        try:
            entries.append(SpeciesEntry.model_validate({**data, "name": name}))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or None
            raise InvalidSpeciesDataError(
                f'Species "{name}" has an invalid {field}: {first.get("msg")}', row=i, field=field
            ) from exc

    total = sum(e.proportion for e in entries)
    if abs(total - 1.0) > PROPORTION_TOLERANCE:
        raise InvalidSpeciesDataError(
            f"Species proportions should sum to 1 (current sum: {total:.2f})", field="proportion"
        )
    return entries


def _records_from_frame(df: pd.DataFrame) -> List[YearRecord]:
    return [
        YearRecord(
            year=int(r["year"]),
            surviving_trees=int(r["surviving_trees"]),
            **{c: float(r[c]) for c in SUMMED_COLUMNS if c != "surviving_trees"},
        )
        for r in df.to_dict("records")
    ]


def project_multi_species(inputs: ForestInputs, species: Sequence[SpeciesLike]) -> ForestResult:
    """Project a mixed planting and merge the species series.

    Parameters
    ----------
    inputs:
        Base project inputs; `area` is the total area of all species.
    species:
        Species set, validated with :func:`validate_species`.

    Returns
    -------
    ForestResult
        Merged yearly series with a ``species`` breakdown listing each
        species' name, proportion and total CO₂e.
    """
    entries = validate_species(species)
    merged: Optional[pd.DataFrame] = None
    breakdown: List[SpeciesContribution] = []
    for entry in entries:
        res = project(entry.apply_to(inputs))
        breakdown.append(
            SpeciesContribution(name=entry.name, proportion=entry.proportion, co2e=res.summary.total_co2e)
        )
        df = res.to_frame()
        if merged is None:
            # first species initialises the series
            merged = df.copy()
        else:
            merged[SUMMED_COLUMNS] = merged[SUMMED_COLUMNS] + df[SUMMED_COLUMNS]
        logger.debug("Species %s (%.2f): %.4f t CO2e", entry.name, entry.proportion, res.summary.total_co2e)
    return ForestResult(yearly=_records_from_frame(merged), species=breakdown)


def run_projection(inputs: ForestInputs, species: Optional[Sequence[SpeciesLike]] = None) -> ForestResult:
    """Run the multi‑species engine when species data is given, else the single one."""
    if species:
        return project_multi_species(inputs, species)
    return project(inputs)
