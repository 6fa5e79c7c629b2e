# MIT License
"""File import/export for results and species data.

* Results are exported one row per year with a fixed column order that
  follows the record fields.  :func:`read_results_csv` reads such a file
  back into records.
* Species files are tabular with a header row; ``name`` and
  ``proportion`` are required, the parameter overrides are optional.
* PDF reports are paginated A4 documents built with ReportLab.
"""
from __future__ import annotations

import io
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .errors import InvalidSpeciesDataError
from .params import SpeciesEntry
from .results import ForestResult, WaterResult, WaterYearRecord, YearRecord
from .species import validate_species

logger = logging.getLogger(__name__)

FOREST_HEADERS: Dict[str, str] = {
    "year": "Year",
    "surviving_trees": "Surviving Trees",
    "growing_stock": "Growing Stock (m³)",
    "above_ground_biomass": "Above-ground Biomass (t)",
    "below_ground_biomass": "Below-ground Biomass (t)",
    "total_biomass": "Total Biomass (t)",
    "carbon_content": "Carbon Content (t C)",
    "co2e": "CO₂e (t)",
    "annual_increment": "Annual CO₂e (t/yr)",
    "cumulative_co2e": "Cumulative CO₂e (t)",
}

WATER_HEADERS: Dict[str, str] = {
    "year": "Year",
    "annual_water_captured": "Annual Water Captured (KL)",
    "cumulative_water_captured": "Cumulative Water (KL)",
    "annual_energy_saved": "Annual Energy Saved (kWh)",
    "cumulative_energy_saved": "Cumulative Energy Saved (kWh)",
    "annual_emissions_reduction": "Annual Emissions Reduction (t CO₂e)",
    "cumulative_emissions_reduction": "Cumulative Emissions (t CO₂e)",
}

SPECIES_REQUIRED = ["name", "proportion"]
SPECIES_OPTIONAL = ["growth_rate", "wood_density", "bef", "rsr", "carbon_fraction"]
# headers used by older templates
SPECIES_ALIASES = {
    "growthRate": "growth_rate",
    "woodDensity": "wood_density",
    "carbonFraction": "carbon_fraction",
}

Result = Union[ForestResult, WaterResult]


def _headers_for(result: Result) -> Dict[str, str]:
    return FOREST_HEADERS if isinstance(result, ForestResult) else WATER_HEADERS


def results_to_csv(result: Result) -> str:
    """Serialise the yearly series of `result` to CSV text."""
    headers = _headers_for(result)
    df = result.to_frame()[list(headers)]
    return df.rename(columns=headers).to_csv(index=False)


def read_results_csv(source: Union[str, io.IOBase]) -> Union[List[YearRecord], List[WaterYearRecord]]:
    """Parse an exported results file back into yearly records.

    `source` is CSV text or an open file.  The record type is chosen from
    the header row.
    """
    buffer = io.StringIO(source) if isinstance(source, str) else source
    df = pd.read_csv(buffer, float_precision="round_trip")
    for headers, record in ((FOREST_HEADERS, YearRecord), (WATER_HEADERS, WaterYearRecord)):
        if list(df.columns) == list(headers.values()):
            df = df.rename(columns={v: k for k, v in headers.items()})
            return [record.model_validate(row) for row in df.astype(object).to_dict("records")]
    raise ValueError(f"Unrecognised results columns: {', '.join(map(str, df.columns))}")


def read_species_csv(source: Union[str, Path, bytes, io.IOBase]) -> List[SpeciesEntry]:
    """Read and validate a species file.

    Parameters
    ----------
    source:
        Path to a CSV file, raw bytes, or a file‑like object such as a
        Streamlit upload.

    Returns
    -------
    list of SpeciesEntry
        Validated species set.

    Raises
    ------
    InvalidSpeciesDataError
        If the file cannot be parsed, required columns are missing or the
        rows fail validation.
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    try:
        df = pd.read_csv(source, skip_blank_lines=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise InvalidSpeciesDataError(f"Error parsing CSV: {exc}") from exc
    df = df.rename(columns=lambda c: SPECIES_ALIASES.get(str(c).strip(), str(c).strip()))
    missing = [c for c in SPECIES_REQUIRED if c not in df.columns]
    if missing:
        raise InvalidSpeciesDataError(f"Missing required columns: {', '.join(missing)}")
    columns = SPECIES_REQUIRED + [c for c in SPECIES_OPTIONAL if c in df.columns]
    df = df[columns].dropna(how="all")
    rows = df.astype(object).where(df.notna(), None).to_dict("records")
    return validate_species(rows)


def species_template_csv() -> str:
    """Three‑species example file offered as a download."""
    df = pd.DataFrame(
        [
            {"name": "Species 1", "proportion": 0.4, "growth_rate": 15, "wood_density": 0.5, "bef": 1.5, "rsr": 0.25, "carbon_fraction": 0.47},
            {"name": "Species 2", "proportion": 0.3, "growth_rate": 12, "wood_density": 0.55, "bef": 1.4, "rsr": 0.24, "carbon_fraction": 0.47},
            {"name": "Species 3", "proportion": 0.3, "growth_rate": 18, "wood_density": 0.45, "bef": 1.6, "rsr": 0.26, "carbon_fraction": 0.47},
        ],
        columns=SPECIES_REQUIRED + SPECIES_OPTIONAL,
    )
    return df.to_csv(index=False)


def export_filename(kind: str, extension: str, today: Optional[date] = None) -> str:
    """e.g. ``forest_sequestration_results_2024-05-01.csv``."""
    stem = {"forest": "forest_sequestration", "water": "water_capture"}.get(kind, kind)
    suffix = "report" if extension == "pdf" else "results"
    return f"{stem}_{suffix}_{(today or date.today()).isoformat()}.{extension}"


# --- PDF --------------------------------------------------------------------

def _label(name: str) -> str:
    text = name.replace("_", " ").capitalize()
    return text.replace("Co2e", "CO2e").replace("co2e", "CO2e")


def _fmt(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.2f}"


def _table(rows: List[List[str]], col_widths: Optional[List[float]] = None, font_size: int = 9) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), font_size),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ]
        )
    )
    return table


def _metrics_table(values: Dict[str, Any]) -> Table:
    rows = [["Metric", "Value"]] + [[_label(k), _fmt(v)] for k, v in values.items()]
    return _table(rows, col_widths=[8 * cm, 6 * cm], font_size=10)


DERIVED_GROUPS = [
    "cost_analysis",
    "carbon_credits",
    "biodiversity",
    "green_cover",
    "beneficiaries",
    "environmental_benefits",
]


def build_pdf_report(result: Result, title: Optional[str] = None) -> bytes:
    """Render `result` as a paginated PDF and return its bytes.

    The report lists the summary, every attached derived metric group, the
    species breakdown for mixed plantings, any notes, and the yearly
    table.  Long tables continue on following pages with the header row
    repeated.
    """
    forest = isinstance(result, ForestResult)
    title = title or ("Forest Sequestration Report" if forest else "Water Capture Report")
    styles = getSampleStyleSheet()
    story: List[Any] = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Generated {date.today().isoformat()}", styles["Normal"]),
        Spacer(1, 0.4 * cm),
        Paragraph("Summary", styles["Heading2"]),
        _metrics_table(result.summary.model_dump()),
        Spacer(1, 0.4 * cm),
    ]
    for group in DERIVED_GROUPS:
        values = getattr(result, group, None)
        if values is None:
            continue
        story += [Paragraph(_label(group), styles["Heading2"]), _metrics_table(values.model_dump()), Spacer(1, 0.4 * cm)]

    if forest and result.species:
        rows = [["Species", "Proportion", "CO2e (t)"]]
        rows += [[s.name, _fmt(s.proportion), _fmt(s.co2e)] for s in result.species]
        story += [Paragraph("Species breakdown", styles["Heading2"]), _table(rows), Spacer(1, 0.4 * cm)]

    for note in result.notes:
        story.append(Paragraph(f"Note: {note}", styles["Italic"]))

    headers = _headers_for(result)
    df = result.to_frame()[list(headers)]
    rows = [[_label(c) for c in headers]] + [[_fmt(v) for v in row] for row in df.astype(object).values.tolist()]
    story += [Paragraph("Yearly projection", styles["Heading2"]), _table(rows, font_size=7)]

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=title,
    )
    doc.build(story)
    logger.info("Built PDF report %r with %d yearly rows", title, len(df))
    return buffer.getvalue()
