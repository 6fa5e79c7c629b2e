"""Tests for the calculators tying engines, store and bus together."""

import io

from impact_calc.calculator import ForestCalculator, WaterCalculator
from impact_calc.events import ErrorEvent
from impact_calc.export import species_template_csv
from impact_calc.params import ForestEconomics, ForestInputs
from impact_calc.utils import inputs_hash


def _recording_calculator(cls=ForestCalculator):
    calc = cls()
    events = []
    calc.bus.on_results(lambda r: events.append(("results", r)))
    calc.bus.on_error(lambda e: events.append(("error", e)))
    calc.bus.on_reset(lambda _: events.append(("reset", None)))
    calc.bus.on_data_updated(lambda d: events.append(("data_updated", d)))
    return calc, events


def test_successful_run_is_stored_and_published():
    calc, events = _recording_calculator()
    result = calc.calculate({"area": 10, "project_duration": 5})
    assert result is not None
    assert calc.last_result is result
    assert calc.store.key == inputs_hash(ForestInputs(area=10, project_duration=5), ForestEconomics())
    assert events == [("results", result)]
    assert len(result.yearly) == 5


def test_derived_groups_are_attached():
    calc = ForestCalculator()
    result = calc.calculate(ForestInputs(), economics={"project_cost": 50_000, "carbon_price": 10})
    assert result.cost_analysis is not None
    assert result.carbon_credits.carbon_price == 10
    assert result.carbon_credits.risk_buffer == 20
    assert result.biodiversity.species_count == 1
    assert result.green_cover is not None
    assert result.beneficiaries.direct_beneficiaries == 100
    assert result.notes == []


def test_invalid_input_publishes_error_and_keeps_store():
    calc, events = _recording_calculator()
    first = calc.calculate({"area": 10})
    events.clear()
    assert calc.calculate({"area": 10, "planting_density": 0}) is None
    assert calc.last_result is first
    assert len(events) == 1
    kind, event = events[0]
    assert kind == "error"
    assert isinstance(event, ErrorEvent)
    assert event.field == "planting_density"
    assert event.context["module"] == "Forest"


def test_invalid_species_publishes_error():
    calc, events = _recording_calculator()
    species = [{"name": "A", "proportion": 0.5}, {"name": "B", "proportion": 0.2}]
    assert calc.calculate(ForestInputs(), species=species) is None
    assert calc.last_result is None
    assert events[0][0] == "error"
    assert "current sum: 0.70" in events[0][1].message


def test_species_row_error_carries_row_context():
    calc, events = _recording_calculator()
    species = [{"name": "A", "proportion": 0.5}, {"name": "A", "proportion": 0.5}]
    assert calc.calculate(ForestInputs(), species=species) is None
    kind, event = events[0]
    assert kind == "error"
    assert event.context == {"module": "Forest", "row": 2}


def test_zero_sequestration_notes_instead_of_failing():
    calc, events = _recording_calculator()
    result = calc.calculate({"mortality_rate": 100})
    assert result is not None
    assert result.cost_analysis is None
    assert result.carbon_credits.revenue == 0
    assert any("total_co2e is zero" in note for note in result.notes)
    assert events[0][0] == "results"


def test_multi_species_run_counts_species():
    calc = ForestCalculator()
    species = [{"name": "A", "proportion": 0.5}, {"name": "B", "proportion": 0.5}]
    result = calc.calculate(ForestInputs(), species=species)
    assert result.biodiversity.species_count == 2
    assert len(result.species) == 2


def test_reset_clears_store_and_notifies():
    calc, events = _recording_calculator()
    calc.calculate({})
    events.clear()
    calc.reset()
    assert calc.last_result is None
    assert events == [("reset", None)]


def test_load_species_from_template():
    calc, events = _recording_calculator()
    entries = calc.load_species(species_template_csv().encode("utf-8"))
    assert len(entries) == 3
    assert calc.species == entries
    assert events == [("data_updated", {"species": entries})]
    calc.clear_species()
    assert calc.species is None


def test_load_bad_species_file_keeps_previous_species():
    calc, events = _recording_calculator()
    calc.load_species(species_template_csv().encode("utf-8"))
    previous = calc.species
    events.clear()
    assert calc.load_species(io.BytesIO(b"species,share\nTeak,1.0\n")) is None
    assert calc.species == previous
    kind, event = events[0]
    assert kind == "error"
    assert "Missing required columns" in event.message


def test_water_calculator_run():
    calc, events = _recording_calculator(WaterCalculator)
    result = calc.calculate({"water_area": 5}, economics={"project_cost": 100_000})
    assert result is not None
    assert calc.last_result is result
    assert result.cost_analysis is not None
    assert result.environmental_benefits is not None
    assert result.beneficiaries.total_beneficiaries == 600
    assert events[0][0] == "results"


def test_water_calculator_zero_value_adds_note():
    calc = WaterCalculator()
    result = calc.calculate({}, economics={"water_value": 0})
    assert result.cost_analysis is None
    assert any("payback" in note for note in result.notes)
