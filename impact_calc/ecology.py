# MIT License
"""Ecological and social co‑benefit derivers for forest projects.

These are screening heuristics, not field models:

* biodiversity grows with the logarithm of the number of planted species;
* each surviving tree is assumed to cover 25 m² of canopy at maturity;
* ten people per hectare benefit directly and fifty indirectly.
"""
from __future__ import annotations

import math

from .results import Beneficiaries, Biodiversity, GreenCover
from .utils import coerce_non_negative, ha_to_m2, round_half_up

TREE_CANOPY_M2 = 25.0
INITIAL_GREEN_COVER_PCT = 10.0
SPECIES_SUPPORTED_PER_TREE_SPECIES = 5
DIRECT_BENEFICIARIES_PER_HA = 10
INDIRECT_BENEFICIARIES_PER_HA = 50


def biodiversity(area: float, species_count: int = 1) -> Biodiversity:
    """Biodiversity index (0–100) with diminishing returns per species."""
    area = coerce_non_negative(area, "area")
    count = int(coerce_non_negative(species_count, "species_count"))
    return Biodiversity(
        biodiversity_index=min(100.0, math.log10(count + 1) * 100.0),
        species_count=count,
        habitat_creation=ha_to_m2(area),
        potential_species_supported=round_half_up(count * SPECIES_SUPPORTED_PER_TREE_SPECIES),
    )


def green_cover(area: float, surviving_trees: float) -> GreenCover:
    """Canopy cover at the end of the project against a 10 % baseline.

    Covered area is capped at the project area, so the final cover never
    exceeds 100 %.
    """
    area_m2 = ha_to_m2(coerce_non_negative(area, "area"))
    trees = coerce_non_negative(surviving_trees, "surviving_trees")
    if area_m2 == 0.0:
        final = 0.0
    else:
        covered = min(trees * TREE_CANOPY_M2, area_m2)
        final = min(100.0, covered / area_m2 * 100.0)
    return GreenCover(
        initial_green_cover=INITIAL_GREEN_COVER_PCT,
        final_green_cover=final,
        green_cover_increase=final - INITIAL_GREEN_COVER_PCT,
    )


def beneficiaries(area: float, planting_density: float = 0.0) -> Beneficiaries:
    area = coerce_non_negative(area, "area")
    density = coerce_non_negative(planting_density, "planting_density")
    direct = round_half_up(area * DIRECT_BENEFICIARIES_PER_HA)
    indirect = round_half_up(area * INDIRECT_BENEFICIARIES_PER_HA)
    total = direct + indirect
    trees = area * density
    return Beneficiaries(
        direct_beneficiaries=direct,
        indirect_beneficiaries=indirect,
        total_beneficiaries=total,
        beneficiaries_factor=total / trees if trees > 0 else 0.0,
    )
