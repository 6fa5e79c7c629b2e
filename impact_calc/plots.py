# MIT License
"""Plotly figure builders for the impact dashboard.

The forest and water pages share one plotly_white look; figures take
result models and read their yearly series through `to_frame()`.
"""

from __future__ import annotations

from typing import List

import plotly.graph_objects as go

from .results import ForestResult, SpeciesContribution, WaterResult


def fig_sequestration(result: ForestResult) -> go.Figure:
    """Cumulative CO₂e stock and annual increment on two y axes.

    Parameters
    ----------
    result:
        Forest projection result.

    Returns
    -------
    plotly.graph_objects.Figure
        Line for the cumulative stock (left axis) and bars for the
        annual increment (right axis).
    """
    df = result.to_frame()
    fig = go.Figure()
    fig.add_scatter(x=df["year"], y=df["cumulative_co2e"], mode="lines+markers", name="Cumulative CO₂e (t)")
    fig.add_bar(x=df["year"], y=df["annual_increment"], name="Annual CO₂e (t/yr)", yaxis="y2", opacity=0.5)
    fig.update_layout(
        title="Carbon Sequestration",
        xaxis_title="Year",
        yaxis=dict(title="Cumulative CO₂e (t)"),
        yaxis2=dict(title="Annual CO₂e (t/yr)", overlaying="y", side="right", showgrid=False),
        template="plotly_white",
    )
    return fig


def fig_species_breakdown(species: List[SpeciesContribution]) -> go.Figure:
    fig = go.Figure(go.Pie(labels=[s.name for s in species], values=[s.co2e for s in species], hole=0.55))
    fig.update_layout(template="plotly_white", title="CO₂e by Species")
    return fig


def fig_water_capture(result: WaterResult) -> go.Figure:
    df = result.to_frame()
    fig = go.Figure()
    fig.add_scatter(x=df["year"], y=df["cumulative_water_captured"], mode="lines+markers", name="Cumulative water (KL)")
    fig.add_scatter(
        x=df["year"],
        y=df["cumulative_emissions_reduction"],
        mode="lines",
        name="Cumulative emissions avoided (t CO₂e)",
        yaxis="y2",
    )
    fig.update_layout(
        title="Water Capture",
        xaxis_title="Year",
        yaxis=dict(title="Water (KL)"),
        yaxis2=dict(title="t CO₂e", overlaying="y", side="right", showgrid=False),
        template="plotly_white",
    )
    return fig
