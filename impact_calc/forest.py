# MIT License
"""Forest carbon projection engine.

This module implements the yearly dynamics of a single‑species
afforestation/reforestation stand.  It takes a
:class:`~impact_calc.params.ForestInputs` and produces a
:class:`~impact_calc.results.ForestResult` where each yearly record lists
surviving trees, growing stock, biomass pools, carbon and CO₂‑equivalent
stock, the increment over the previous year and the running total.

Growing stock uses a deliberately simple stand‑volume model:

    area * growth_rate * year * survival_ratio / planting_density

Volume accumulates linearly with age, scaled by the fraction of trees
still alive and by the inverse planting density.  It is not a
growth‑and‑yield model; all downstream figures depend on this exact form.
"""
from __future__ import annotations

import logging
from typing import List

from .errors import InvalidInputError
from .params import ForestInputs
from .results import ForestResult, YearRecord
from .utils import round_half_up

logger = logging.getLogger(__name__)

# molar mass of CO2 over molar mass of C
CO2_FACTOR = 44 / 12


def survival_ratio(mortality_rate: float, year: int) -> float:
    """Fraction of planted trees alive after `year` years.

    Mortality is compounded annually: ``(1 - mortality_rate/100) ** year``.
    """
    return (1.0 - mortality_rate / 100.0) ** year


def _check(inputs: ForestInputs) -> None:
    # models built with model_construct() skip pydantic validation
    if inputs.project_duration < 1:
        raise InvalidInputError("Project duration must be at least 1 year", field="project_duration")
    if inputs.planting_density <= 0:
        raise InvalidInputError("Planting density must be greater than zero", field="planting_density")
    if inputs.area <= 0:
        raise InvalidInputError("Area must be greater than zero", field="area")


def project(inputs: ForestInputs) -> ForestResult:
    """Project carbon sequestration year by year for one species.

    Parameters
    ----------
    inputs:
        Validated project inputs.

    Returns
    -------
    ForestResult
        Yearly records for years 1..project_duration and the derived
        summary.

    Raises
    ------
    InvalidInputError
        If the duration is below one year or the area or planting density
        is not positive.
    """
    _check(inputs)
    initial_trees = inputs.area * inputs.planting_density
    rows: List[YearRecord] = []
    previous_co2e = 0.0
    cumulative = 0.0
    for year in range(1, inputs.project_duration + 1):
        ratio = survival_ratio(inputs.mortality_rate, year)
        growing_stock = inputs.area * inputs.growth_rate * year * ratio / inputs.planting_density
        agb = growing_stock * inputs.wood_density * inputs.bef
        bgb = agb * inputs.rsr
        total_biomass = agb + bgb
        carbon = total_biomass * inputs.carbon_fraction
        co2e = carbon * CO2_FACTOR
        increment = co2e - previous_co2e
        cumulative += increment
        previous_co2e = co2e
        rows.append(
            YearRecord(
                year=year,
                surviving_trees=round_half_up(initial_trees * ratio),
                growing_stock=growing_stock,
                above_ground_biomass=agb,
                below_ground_biomass=bgb,
                total_biomass=total_biomass,
                carbon_content=carbon,
                co2e=co2e,
                annual_increment=increment,
                cumulative_co2e=cumulative,
            )
        )
    result = ForestResult(yearly=rows)
    logger.debug(
        "Projected %d years on %.2f ha: %.4f t CO2e",
        inputs.project_duration,
        inputs.area,
        result.summary.total_co2e,
    )
    return result
