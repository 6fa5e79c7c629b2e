# MIT License
"""Output models for forest and water projections.

A result set is created once per calculation run and never mutated.  The
yearly series is ordered by year (1..N) and the summary is computed from
its last element, so a result without a summary cannot exist.  Derived
metric groups (costs, credits, biodiversity, ...) are attached with
:meth:`attach`, which returns a new object.
"""
from __future__ import annotations

from typing import Any, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- forest -----------------------------------------------------------------

class YearRecord(_Frozen):
    """State of the stand at the end of one project year."""

    year: int
    surviving_trees: int
    growing_stock: float
    above_ground_biomass: float
    below_ground_biomass: float
    total_biomass: float
    carbon_content: float
    co2e: float
    annual_increment: float
    cumulative_co2e: float


class SummaryRecord(_Frozen):
    total_co2e: float
    avg_annual_co2e: float
    final_carbon_stock: float


class SpeciesContribution(_Frozen):
    name: str
    proportion: float
    co2e: float


class CostAnalysis(_Frozen):
    cost_per_tonne: float
    cost_per_hectare: float
    establishment_cost: float
    maintenance_cost: float
    monitoring_cost: float


class CarbonCredits(_Frozen):
    carbon_price: float
    risk_buffer: float
    credits_after_buffer: float
    revenue: float


class Biodiversity(_Frozen):
    biodiversity_index: float
    species_count: int
    habitat_creation: float
    potential_species_supported: int


class GreenCover(_Frozen):
    initial_green_cover: float
    final_green_cover: float
    green_cover_increase: float


class Beneficiaries(_Frozen):
    direct_beneficiaries: int
    indirect_beneficiaries: int
    total_beneficiaries: int
    beneficiaries_factor: float = 0.0


class _YearlyResult(_Frozen):
    """Shared behaviour of result sets holding a `yearly` series."""

    notes: List[str] = Field(default_factory=list)

    @field_validator("yearly", check_fields=False)
    @classmethod
    def _years_in_order(cls, v: List[Any]) -> List[Any]:
        if not v:
            raise ValueError("a result needs at least one year")
        years = [r.year for r in v]
        if years != list(range(1, len(v) + 1)):
            raise ValueError("yearly records must cover years 1..N in ascending order")
        return v

    @property
    def project_duration(self) -> int:
        return len(self.yearly)  # type: ignore[attr-defined]

    def to_frame(self) -> pd.DataFrame:
        """Return the yearly series as a DataFrame, one row per year."""
        return pd.DataFrame([r.model_dump() for r in self.yearly])  # type: ignore[attr-defined]

    def attach(self, **groups: Any):
        """Return a copy with derived metric groups (or notes) set."""
        return self.model_copy(update=groups)


class ForestResult(_YearlyResult):
    """Result of a single- or multi-species forest projection."""

    yearly: List[YearRecord]
    species: Optional[List[SpeciesContribution]] = None
    cost_analysis: Optional[CostAnalysis] = None
    carbon_credits: Optional[CarbonCredits] = None
    biodiversity: Optional[Biodiversity] = None
    green_cover: Optional[GreenCover] = None
    beneficiaries: Optional[Beneficiaries] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> SummaryRecord:
        last = self.yearly[-1]
        return SummaryRecord(
            total_co2e=last.cumulative_co2e,
            avg_annual_co2e=last.cumulative_co2e / self.project_duration,
            final_carbon_stock=last.carbon_content,
        )


# --- water ------------------------------------------------------------------

class WaterYearRecord(_Frozen):
    year: int
    annual_water_captured: float
    cumulative_water_captured: float
    annual_energy_saved: float
    cumulative_energy_saved: float
    annual_emissions_reduction: float
    cumulative_emissions_reduction: float


class WaterSummary(_Frozen):
    annual_water_captured: float
    total_water_captured: float
    annual_energy_saved: float
    total_energy_saved: float
    annual_emissions_reduction: float
    total_emissions_reduction: float


class WaterCostAnalysis(_Frozen):
    cost_per_kl: float
    annual_value: float
    payback_period: float
    roi: float


class EnvironmentalBenefits(_Frozen):
    groundwater_recharge: float
    ecosystem_restoration: float
    biodiversity_impact: float


class WaterBeneficiaries(_Frozen):
    people_supplied: int
    direct_beneficiaries: int
    indirect_beneficiaries: int
    total_beneficiaries: int


class WaterResult(_YearlyResult):
    """Result of a water capture projection."""

    yearly: List[WaterYearRecord]
    cost_analysis: Optional[WaterCostAnalysis] = None
    environmental_benefits: Optional[EnvironmentalBenefits] = None
    beneficiaries: Optional[WaterBeneficiaries] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> WaterSummary:
        last = self.yearly[-1]
        return WaterSummary(
            annual_water_captured=last.annual_water_captured,
            total_water_captured=last.cumulative_water_captured,
            annual_energy_saved=last.annual_energy_saved,
            total_energy_saved=last.cumulative_energy_saved,
            annual_emissions_reduction=last.annual_emissions_reduction,
            total_emissions_reduction=last.cumulative_emissions_reduction,
        )
