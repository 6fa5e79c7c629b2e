"""Tests for download helpers.

These tests cover results CSV export and re-import, species file parsing,
PDF report generation and JSON serialisation of the input models.  They
do not interact with Streamlit's download buttons.
"""

import io
import json
import math
from datetime import date

import pytest

from impact_calc.calculator import ForestCalculator, WaterCalculator
from impact_calc.errors import InvalidSpeciesDataError
from impact_calc.export import (
    FOREST_HEADERS,
    WATER_HEADERS,
    build_pdf_report,
    export_filename,
    read_results_csv,
    read_species_csv,
    results_to_csv,
    species_template_csv,
)
from impact_calc.forest import project
from impact_calc.params import ForestInputs, WaterInputs
from impact_calc.settings import DEFAULT_PRESETS_DIR


def test_inputs_json_roundtrip():
    inputs = ForestInputs(area=12.5, project_duration=25)
    data = json.loads(inputs.model_dump_json())
    assert ForestInputs.model_validate_json(json.dumps(data)) == inputs


def test_forest_csv_header_order():
    csv_str = results_to_csv(project(ForestInputs(project_duration=3)))
    lines = csv_str.splitlines()
    assert lines[0].split(",") == list(FOREST_HEADERS.values())
    assert len(lines) == 4


def test_forest_csv_reimport_preserves_values():
    result = project(ForestInputs(project_duration=10))
    records = read_results_csv(results_to_csv(result))
    assert len(records) == 10
    for original, parsed in zip(result.yearly, records):
        for name, value in original.model_dump().items():
            assert math.isclose(getattr(parsed, name), value), name


def test_water_csv_reimport():
    result = WaterCalculator().calculate(WaterInputs(project_duration=4))
    csv_str = results_to_csv(result)
    assert csv_str.splitlines()[0].split(",") == list(WATER_HEADERS.values())
    records = read_results_csv(io.StringIO(csv_str))
    assert [r.year for r in records] == [1, 2, 3, 4]
    for original, parsed in zip(result.yearly, records):
        for name, value in original.model_dump().items():
            assert math.isclose(getattr(parsed, name), value), name


def test_unknown_results_columns():
    with pytest.raises(ValueError, match="Unrecognised"):
        read_results_csv("a,b\n1,2\n")


def test_species_file_with_blank_overrides():
    entries = read_species_csv(DEFAULT_PRESETS_DIR.parent / "species_example.csv")
    assert [e.name for e in entries] == ["Tectona grandis", "Dalbergia sissoo", "Azadirachta indica"]
    assert entries[1].carbon_fraction is None
    assert entries[2].growth_rate is None
    assert entries[2].carbon_fraction == 0.48


def test_species_file_camel_case_headers():
    data = b"name,proportion,growthRate,woodDensity\nTeak,0.7,11,0.6\nNeem,0.3,,\n"
    entries = read_species_csv(data)
    assert entries[0].growth_rate == 11
    assert entries[0].wood_density == 0.6
    assert entries[1].growth_rate is None


def test_species_file_missing_columns():
    with pytest.raises(InvalidSpeciesDataError, match="Missing required columns: proportion"):
        read_species_csv(b"name,growth_rate\nTeak,12\n")


def test_empty_species_file():
    with pytest.raises(InvalidSpeciesDataError, match="Error parsing CSV"):
        read_species_csv(b"")


def test_template_is_valid():
    entries = read_species_csv(species_template_csv().encode("utf-8"))
    assert len(entries) == 3
    assert math.isclose(sum(e.proportion for e in entries), 1.0)


def test_export_filename():
    day = date(2024, 5, 1)
    assert export_filename("forest", "csv", today=day) == "forest_sequestration_results_2024-05-01.csv"
    assert export_filename("water", "pdf", today=day) == "water_capture_report_2024-05-01.pdf"


def test_forest_pdf_report():
    calc = ForestCalculator()
    species = [{"name": "A", "proportion": 0.5}, {"name": "B", "proportion": 0.5}]
    result = calc.calculate(ForestInputs(project_duration=60), species=species)
    pdf = build_pdf_report(result)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_water_pdf_report_with_notes():
    result = WaterCalculator().calculate({}, economics={"water_value": 0})
    assert result.notes
    pdf = build_pdf_report(result, title="Pond restoration")
    assert pdf.startswith(b"%PDF")
