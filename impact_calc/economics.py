# MIT License
"""Economic derivers for forest and water projects.

The functions in this module are pure: they map a projection summary and
a few auxiliary scalars (project cost, carbon price, risk buffer, water
value) to flat metric records.  Numeric inputs are coerced with
:func:`~impact_calc.utils.coerce_non_negative`, so a bad form value
becomes 0 with a logged warning instead of a NaN.  Ratios with a zero
denominator raise :class:`~impact_calc.errors.DivisionByZeroError`.
"""
from __future__ import annotations

import logging
from typing import Optional

from .errors import DivisionByZeroError
from .results import CarbonCredits, CostAnalysis, WaterCostAnalysis
from .utils import coerce_non_negative

logger = logging.getLogger(__name__)

ESTABLISHMENT_SHARE = 0.6
MAINTENANCE_SHARE = 0.3
MONITORING_SHARE = 0.1

DEFAULT_RISK_BUFFER = 20.0


def _ratio(numerator: float, denominator: float, field: str, what: str) -> float:
    if denominator == 0.0:
        raise DivisionByZeroError(f"Cannot compute {what}: {field} is zero", field=field)
    return numerator / denominator


def cost_analysis(project_cost: float, area: float, total_co2e: float) -> CostAnalysis:
    """Compute cost efficiency and a fixed cost breakdown for a forest project.

    Parameters
    ----------
    project_cost:
        Total project cost.
    area:
        Project area in hectares.
    total_co2e:
        Total CO₂e sequestered over the project (t).

    Returns
    -------
    CostAnalysis
        Cost per tonne and per hectare plus a 60/30/10 split into
        establishment, maintenance and monitoring.

    Raises
    ------
    DivisionByZeroError
        If `total_co2e` or `area` is zero.
    """
    cost = coerce_non_negative(project_cost, "project_cost")
    area = coerce_non_negative(area, "area")
    total = coerce_non_negative(total_co2e, "total_co2e")
    return CostAnalysis(
        cost_per_tonne=_ratio(cost, total, "total_co2e", "cost per tonne"),
        cost_per_hectare=_ratio(cost, area, "area", "cost per hectare"),
        establishment_cost=cost * ESTABLISHMENT_SHARE,
        maintenance_cost=cost * MAINTENANCE_SHARE,
        monitoring_cost=cost * MONITORING_SHARE,
    )


def carbon_credits(total_co2e: float, carbon_price: float, risk_buffer: Optional[float] = None) -> CarbonCredits:
    """Carbon credits left after the risk buffer and their revenue.

    `risk_buffer` is a percentage of credits withheld; it defaults to 20
    when not supplied and is capped at 100.
    """
    total = coerce_non_negative(total_co2e, "total_co2e")
    price = coerce_non_negative(carbon_price, "carbon_price")
    buffer = DEFAULT_RISK_BUFFER if risk_buffer is None else coerce_non_negative(risk_buffer, "risk_buffer")
    if buffer > 100.0:
        logger.warning("Risk buffer %.1f%% exceeds 100%%; capping at 100%%", buffer)
        buffer = 100.0
    credits = total * (1.0 - buffer / 100.0)
    return CarbonCredits(
        carbon_price=price,
        risk_buffer=buffer,
        credits_after_buffer=credits,
        revenue=credits * price,
    )


def water_cost_analysis(
    project_cost: float,
    water_value: float,
    annual_water_captured: float,
    total_water_captured: float,
    project_duration: int,
) -> WaterCostAnalysis:
    """Cost per kilolitre, annual value, simple payback and ROI of a water project.

    Raises
    ------
    DivisionByZeroError
        If no water is captured, the captured water has no value, or the
        project cost is zero (ROI undefined).
    """
    cost = coerce_non_negative(project_cost, "project_cost")
    value = coerce_non_negative(water_value, "water_value")
    annual = coerce_non_negative(annual_water_captured, "annual_water_captured")
    total = coerce_non_negative(total_water_captured, "total_water_captured")
    years = coerce_non_negative(project_duration, "project_duration")
    annual_value = annual * value
    return WaterCostAnalysis(
        cost_per_kl=_ratio(cost, total, "total_water_captured", "cost per KL"),
        annual_value=annual_value,
        payback_period=_ratio(cost, annual_value, "annual_value", "payback period"),
        roi=_ratio(annual_value * years - cost, cost, "project_cost", "ROI") * 100.0,
    )
