"""Tests for the cost, credit and co‑benefit derivers."""

import logging
import math

import pytest

from impact_calc.ecology import beneficiaries, biodiversity, green_cover
from impact_calc.economics import carbon_credits, cost_analysis, water_cost_analysis
from impact_calc.errors import DivisionByZeroError
from impact_calc.utils import coerce_non_negative, round_half_up


def test_cost_analysis_split_and_ratios():
    cost = cost_analysis(100_000, 10, 500)
    assert math.isclose(cost.cost_per_tonne, 200)
    assert math.isclose(cost.cost_per_hectare, 10_000)
    assert math.isclose(cost.establishment_cost, 60_000)
    assert math.isclose(cost.maintenance_cost, 30_000)
    assert math.isclose(cost.monitoring_cost, 10_000)
    assert math.isclose(cost.establishment_cost + cost.maintenance_cost + cost.monitoring_cost, 100_000)


def test_cost_analysis_zero_co2e_raises():
    with pytest.raises(DivisionByZeroError) as exc:
        cost_analysis(100_000, 10, 0)
    assert exc.value.field == "total_co2e"


def test_cost_analysis_zero_area_raises():
    with pytest.raises(DivisionByZeroError) as exc:
        cost_analysis(100_000, 0, 50)
    assert exc.value.field == "area"


def test_carbon_credits_default_buffer():
    credits = carbon_credits(1000, 5)
    assert credits.risk_buffer == 20
    assert math.isclose(credits.credits_after_buffer, 800)
    assert math.isclose(credits.revenue, 4000)


def test_carbon_credits_explicit_buffer():
    credits = carbon_credits(1000, 10, risk_buffer=0)
    assert math.isclose(credits.credits_after_buffer, 1000)
    assert math.isclose(credits.revenue, 10_000)


def test_carbon_credits_buffer_capped(caplog):
    with caplog.at_level(logging.WARNING):
        credits = carbon_credits(1000, 5, risk_buffer=150)
    assert credits.risk_buffer == 100
    assert credits.credits_after_buffer == 0
    assert "capping" in caplog.text


def test_invalid_numbers_become_zero_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        assert coerce_non_negative("abc", "carbon_price") == 0.0
        assert coerce_non_negative(float("nan"), "carbon_price") == 0.0
        assert coerce_non_negative(-3, "carbon_price") == 0.0
        assert coerce_non_negative(None, "carbon_price") == 0.0
    assert "carbon_price" in caplog.text
    assert coerce_non_negative("2.5", "carbon_price") == 2.5


def test_carbon_credits_with_bad_price(caplog):
    with caplog.at_level(logging.WARNING):
        credits = carbon_credits(1000, "n/a")
    assert credits.revenue == 0
    assert "carbon_price" in caplog.text


def test_biodiversity_index_grows_with_species():
    one = biodiversity(10, 1)
    three = biodiversity(10, 3)
    assert math.isclose(one.biodiversity_index, math.log10(2) * 100)
    assert three.biodiversity_index > one.biodiversity_index
    assert three.species_count == 3
    assert three.potential_species_supported == 15
    assert three.habitat_creation == 100_000


def test_biodiversity_index_capped_at_100():
    assert biodiversity(10, 50).biodiversity_index == 100


def test_green_cover_from_surviving_trees():
    # 1 ha = 10 000 m², 200 trees × 25 m² = 5 000 m²
    cover = green_cover(1, 200)
    assert cover.initial_green_cover == 10
    assert math.isclose(cover.final_green_cover, 50)
    assert math.isclose(cover.green_cover_increase, 40)


def test_green_cover_capped_at_full_area():
    cover = green_cover(1, 16_000)
    assert cover.final_green_cover == 100
    assert cover.green_cover_increase == 90


def test_green_cover_zero_area():
    assert green_cover(0, 100).final_green_cover == 0


def test_beneficiaries():
    people = beneficiaries(10, 1600)
    assert people.direct_beneficiaries == 100
    assert people.indirect_beneficiaries == 500
    assert people.total_beneficiaries == 600
    assert math.isclose(people.beneficiaries_factor, 600 / 16_000)
    assert beneficiaries(10).beneficiaries_factor == 0


def test_water_cost_analysis():
    cost = water_cost_analysis(200_000, 50, 1000, 20_000, 20)
    assert math.isclose(cost.cost_per_kl, 10)
    assert math.isclose(cost.annual_value, 50_000)
    assert math.isclose(cost.payback_period, 4)
    assert math.isclose(cost.roi, 400)


def test_water_cost_analysis_no_value():
    with pytest.raises(DivisionByZeroError, match="payback"):
        water_cost_analysis(200_000, 0, 1000, 20_000, 20)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4) == 2
    assert round_half_up(0) == 0


def test_beneficiaries_round_halves_up():
    people = beneficiaries(0.25)
    assert people.direct_beneficiaries == 3
    assert people.indirect_beneficiaries == 13
    assert people.total_beneficiaries == 16
