"""Core package for the A/R project impact calculator.

This package contains the deterministic projection engines (forest carbon
sequestration and water capture), the multi‑species aggregator, the
cost/credit/biodiversity/beneficiary derivers and the plumbing used by the
Streamlit dashboard: an event bus, a single‑slot result store and the
calculators that tie them together.

Each engine and deriver is a pure function that accepts typed pydantic
models and returns frozen result models; yearly series convert to pandas
DataFrames with ``to_frame()`` for plotting and export.
"""

from .params import ForestInputs, SpeciesEntry, ForestEconomics, WaterInputs, WaterEconomics, parse_inputs
from .results import ForestResult, WaterResult, YearRecord, SummaryRecord, WaterYearRecord
from .errors import (
    ImpactCalculatorError,
    InvalidInputError,
    InvalidSpeciesDataError,
    DivisionByZeroError,
    CalculationError,
)
from .forest import project, CO2_FACTOR
from .species import project_multi_species, validate_species, run_projection
from .calculator import ForestCalculator, WaterCalculator
from .events import EventBus, ErrorEvent
from .store import ResultStore

__all__ = [
    "ForestInputs",
    "SpeciesEntry",
    "ForestEconomics",
    "WaterInputs",
    "WaterEconomics",
    "parse_inputs",
    "ForestResult",
    "WaterResult",
    "YearRecord",
    "SummaryRecord",
    "WaterYearRecord",
    "ImpactCalculatorError",
    "InvalidInputError",
    "InvalidSpeciesDataError",
    "DivisionByZeroError",
    "CalculationError",
    "project",
    "CO2_FACTOR",
    "project_multi_species",
    "validate_species",
    "run_projection",
    "ForestCalculator",
    "WaterCalculator",
    "EventBus",
    "ErrorEvent",
    "ResultStore",
]
