# MIT License
"""Calculation runs: engine → derivers → result store → event bus.

A calculator owns one :class:`~impact_calc.store.ResultStore` and one
:class:`~impact_calc.events.EventBus`, both injectable.  The dashboard
keeps a calculator per project type in its session and subscribes its
rendering callbacks to the bus.

A run either completes and publishes ``results`` or fails and publishes
``error``; a failed run never touches the stored result.  Derived groups
whose ratio has a zero denominator are left empty and explained in the
result's ``notes`` instead of failing the whole run.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, TypeVar, Union

from .ecology import beneficiaries, biodiversity, green_cover
from .economics import carbon_credits, cost_analysis, water_cost_analysis
from .errors import CalculationError, DivisionByZeroError, ImpactCalculatorError, InvalidSpeciesDataError
from .events import ErrorEvent, EventBus
from .export import read_species_csv
from .params import ForestEconomics, ForestInputs, SpeciesEntry, WaterEconomics, WaterInputs, parse_inputs
from .results import ForestResult, WaterResult
from .species import SpeciesLike, run_projection
from .store import ResultStore
from .utils import inputs_hash
from . import water

logger = logging.getLogger(__name__)

R = TypeVar("R")


class _Calculator(Generic[R]):
    module = ""

    def __init__(self, bus: Optional[EventBus[R]] = None, store: Optional[ResultStore[R]] = None) -> None:
        self.bus: EventBus[R] = bus if bus is not None else EventBus()
        self.store: ResultStore[R] = store if store is not None else ResultStore()

    @property
    def last_result(self) -> Optional[R]:
        return self.store.get()

    def reset(self) -> None:
        """Drop the stored result and notify subscribers."""
        self.store.clear()
        logger.info("%s calculator reset", self.module)
        self.bus.emit_reset()

    def _fail(self, exc: ImpactCalculatorError, **context: Any) -> None:
        logger.error("%s calculation failed: %s", self.module, exc.message)
        self.bus.emit_error(ErrorEvent(message=exc.message, field=exc.field, context={"module": self.module, **context}))

    def _run(self, fn: Callable[[], R]) -> Optional[R]:
        try:
            return fn()
        except InvalidSpeciesDataError as exc:
            self._fail(exc, row=exc.row)
        except ImpactCalculatorError as exc:
            self._fail(exc)
        except Exception as exc:
            logger.exception("Unexpected error in %s calculation", self.module)
            self._fail(CalculationError(f"Calculation error: {exc}"))
        return None

    @staticmethod
    def _optional(notes: List[str], fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except DivisionByZeroError as exc:
            logger.warning("Skipping %s: %s", fn.__name__, exc.message)
            notes.append(exc.message)
            return None


class ForestCalculator(_Calculator[ForestResult]):
    """Forest sequestration runs, single‑ or multi‑species."""

    module = "Forest"

    def __init__(self, bus: Optional[EventBus[ForestResult]] = None, store: Optional[ResultStore[ForestResult]] = None) -> None:
        super().__init__(bus, store)
        self.species: Optional[List[SpeciesEntry]] = None

    def load_species(self, source: Any) -> Optional[List[SpeciesEntry]]:
        """Parse an uploaded species file and keep it for later runs.

        Publishes ``data_updated`` on success and ``error`` on failure, in
        which case previously loaded species are kept.
        """
        try:
            entries = read_species_csv(source)
        except InvalidSpeciesDataError as exc:
            self._fail(exc, row=exc.row)
            return None
        self.species = entries
        logger.info("Loaded %d species", len(entries))
        self.bus.emit_data_updated({"species": entries})
        return entries

    def clear_species(self) -> None:
        self.species = None
        self.bus.emit_data_updated({"species": None})

    def calculate(
        self,
        inputs: Union[ForestInputs, Mapping[str, Any]],
        species: Optional[Sequence[SpeciesLike]] = None,
        economics: Union[ForestEconomics, Mapping[str, Any], None] = None,
    ) -> Optional[ForestResult]:
        """Run a projection and publish the result.

        Parameters
        ----------
        inputs:
            Project inputs, validated or as raw form values.
        species:
            Species set for a mixed planting; ``None`` or empty runs the
            single‑species engine.
        economics:
            Project cost, carbon price and risk buffer; defaults apply
            when omitted.

        Returns
        -------
        ForestResult or None
            The stored result, or ``None`` if the run failed (an ``error``
            event has been published).
        """

        def run() -> ForestResult:
            params = inputs if isinstance(inputs, ForestInputs) else parse_inputs(ForestInputs, inputs)
            if isinstance(economics, ForestEconomics):
                econ = economics
            else:
                econ = parse_inputs(ForestEconomics, economics or {})
            result = run_projection(params, species)
            result = self._derive(params, econ, result, len(species) if species else 1)
            self.store.put(result, key=inputs_hash(params, econ))
            logger.info(
                "Forest calculation: %.2f ha, %d years, %d species, %.2f t CO2e",
                params.area,
                params.project_duration,
                len(species) if species else 1,
                result.summary.total_co2e,
            )
            return result

        result = self._run(run)
        if result is not None:
            self.bus.emit_results(result)
        return result

    def _derive(self, inputs: ForestInputs, econ: ForestEconomics, result: ForestResult, species_count: int) -> ForestResult:
        notes: List[str] = []
        total = result.summary.total_co2e
        return result.attach(
            cost_analysis=self._optional(notes, cost_analysis, econ.project_cost, inputs.area, total),
            carbon_credits=carbon_credits(total, econ.carbon_price, econ.risk_buffer),
            biodiversity=biodiversity(inputs.area, species_count),
            green_cover=green_cover(inputs.area, result.yearly[-1].surviving_trees),
            beneficiaries=beneficiaries(inputs.area, inputs.planting_density),
            notes=notes,
        )


class WaterCalculator(_Calculator[WaterResult]):
    """Water capture runs."""

    module = "Water"

    def calculate(
        self,
        inputs: Union[WaterInputs, Mapping[str, Any]],
        economics: Union[WaterEconomics, Mapping[str, Any], None] = None,
    ) -> Optional[WaterResult]:
        def run() -> WaterResult:
            params = inputs if isinstance(inputs, WaterInputs) else parse_inputs(WaterInputs, inputs)
            if isinstance(economics, WaterEconomics):
                econ = economics
            else:
                econ = parse_inputs(WaterEconomics, economics or {})
            result = water.project(params)
            notes: List[str] = []
            summary = result.summary
            result = result.attach(
                cost_analysis=self._optional(
                    notes,
                    water_cost_analysis,
                    econ.project_cost,
                    econ.water_value,
                    summary.annual_water_captured,
                    summary.total_water_captured,
                    params.project_duration,
                ),
                environmental_benefits=water.environmental_benefits(params, result),
                beneficiaries=water.beneficiaries(params, result),
                notes=notes,
            )
            self.store.put(result, key=inputs_hash(params, econ))
            logger.info(
                "Water calculation: %.2f ha, %d years, %.0f KL captured",
                params.water_area,
                params.project_duration,
                summary.total_water_captured,
            )
            return result

        result = self._run(run)
        if result is not None:
            self.bus.emit_results(result)
        return result
