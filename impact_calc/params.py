# MIT License
"""Input models for the impact calculator.

All inputs are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, range validation and JSON serialisation.  The
models are frozen: one instance describes exactly one calculation run and
is never mutated while the projection is computed.

Form values arrive as strings or floats from the dashboard; pydantic's lax
mode coerces them to numbers.  Use :func:`parse_inputs` to turn a
validation failure into an :class:`~impact_calc.errors.InvalidInputError`
that names the offending field.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidInputError

M = TypeVar("M", bound=BaseModel)


class ForestInputs(BaseModel):
    """Parameters of an afforestation/reforestation project.

    Attributes
    ----------
    area:
        Planted area in hectares.
    project_duration:
        Number of projected years.
    planting_density:
        Trees planted per hectare.
    growth_rate:
        Mean annual volume increment (m³/ha/yr).
    mortality_rate:
        Annual tree mortality in percent, compounded every year.
    wood_density:
        Basic wood density (t dry matter per m³).
    bef:
        Biomass expansion factor from stem volume to above‑ground biomass.
    rsr:
        Root‑to‑shoot ratio (below‑ground over above‑ground biomass).
    carbon_fraction:
        Carbon fraction of dry biomass.
    """

    model_config = ConfigDict(frozen=True)

    area: float = Field(10.0, gt=0, le=1_000_000, description="Project area (ha)")
    project_duration: int = Field(30, ge=1, le=200, description="Projection horizon (years)")
    planting_density: float = Field(1600.0, gt=0, le=100_000, description="Planting density (trees/ha)")
    growth_rate: float = Field(15.0, gt=0, le=200, description="Growth rate (m³/ha/yr)")
    mortality_rate: float = Field(2.0, ge=0, le=100, description="Annual mortality rate (%)")
    wood_density: float = Field(0.5, gt=0, le=2.0, description="Wood density (t/m³)")
    bef: float = Field(1.5, gt=0, le=10.0, description="Biomass expansion factor")
    rsr: float = Field(0.25, gt=0, le=10.0, description="Root-to-shoot ratio")
    carbon_fraction: float = Field(0.47, ge=0, le=1.0, description="Carbon fraction of dry biomass")


class SpeciesEntry(BaseModel):
    """One species of a mixed planting.

    The species receives `proportion` of the total project area.  Any
    override left empty falls back to the value of the base
    :class:`ForestInputs`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    proportion: float = Field(..., gt=0, le=1)
    growth_rate: Optional[float] = Field(None, gt=0)
    wood_density: Optional[float] = Field(None, gt=0)
    bef: Optional[float] = Field(None, gt=0)
    rsr: Optional[float] = Field(None, gt=0)
    carbon_fraction: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("growth_rate", "wood_density", "bef", "rsr", "carbon_fraction", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        # empty CSV cells arrive as NaN or ""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, float) and math.isnan(v):
            return None
        return v

    def apply_to(self, base: ForestInputs) -> ForestInputs:
        """Return the effective inputs for this species' share of `base`."""
        return base.model_copy(
            update={
                "area": base.area * self.proportion,
                "growth_rate": self.growth_rate if self.growth_rate is not None else base.growth_rate,
                "wood_density": self.wood_density if self.wood_density is not None else base.wood_density,
                "bef": self.bef if self.bef is not None else base.bef,
                "rsr": self.rsr if self.rsr is not None else base.rsr,
                "carbon_fraction": self.carbon_fraction if self.carbon_fraction is not None else base.carbon_fraction,
            }
        )


class ForestEconomics(BaseModel):
    """Auxiliary scalars used by the forest cost and credit derivers."""

    model_config = ConfigDict(frozen=True)

    project_cost: float = Field(100_000.0, ge=0, description="Total project cost")
    carbon_price: float = Field(5.0, ge=0, description="Carbon price per tonne CO₂e")
    risk_buffer: float = Field(20.0, ge=0, le=100, description="Credits withheld as risk buffer (%)")


class WaterInputs(BaseModel):
    """Parameters of a water‑body restoration project."""

    model_config = ConfigDict(frozen=True)

    water_area: float = Field(5.0, gt=0, le=1_000_000, description="Water body catchment area (ha)")
    rain_fall: float = Field(1200.0, gt=0, le=20_000, description="Annual rainfall (mm/yr)")
    runoff_coefficient: float = Field(0.7, gt=0, le=1.0, description="Runoff coefficient (0-1)")
    capture_efficiency: float = Field(0.85, gt=0, le=1.0, description="Capture efficiency (0-1)")
    energy_savings: float = Field(1.5, ge=0, le=1_000, description="Energy saved per KL captured (kWh/KL)")
    project_duration: int = Field(20, ge=1, le=200, description="Projection horizon (years)")


class WaterEconomics(BaseModel):
    """Auxiliary scalars used by the water cost deriver."""

    model_config = ConfigDict(frozen=True)

    project_cost: float = Field(200_000.0, ge=0, description="Total project cost")
    water_value: float = Field(50.0, ge=0, description="Value of one kilolitre of captured water")


def parse_inputs(model: Type[M], data: Mapping[str, Any]) -> M:
    """Validate raw form data into `model`.

    Parameters
    ----------
    model:
        Target pydantic model class, e.g. :class:`ForestInputs`.
    data:
        Mapping of field names to raw values (numbers or numeric strings).

    Returns
    -------
    BaseModel
        A validated, frozen instance of `model`.

    Raises
    ------
    InvalidInputError
        If any field is missing or out of range.  The first failing field
        is reported.
    """
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        raise InvalidInputError(message, field=field) from exc
