from __future__ import annotations

"""
FARS report generator
---------------------
This module writes a DOCX report for a set of years:

- the month x year accident table from `fars_summarize_years`,
- a line chart of monthly counts (one line per year),
- a bar chart of yearly totals,
- optionally, the accident map of one state for one year.

Report dependencies (python-docx, matplotlib) are imported lazily so the
loader and the summary work without them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging
import os
import tempfile

import pandas as pd

from .config import FarsConfig

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "Fatality Analysis Reporting System (FARS)"
    institutional_author: str = "National Highway Traffic Safety Administration (NHTSA)"
    location: str = "Washington, DC, USA"
    website: str = "https://www.nhtsa.gov/research-data/fatality-analysis-reporting-system-fars"
    file_names: List[str] = field(default_factory=list)


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "FARS Accident Report"
    subtitle: str = "Monthly fatal accident counts"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # Optional: state map to include (FARS state code and year)
    map_state: Optional[int] = None
    map_year: Optional[int] = None

    # Optional: list of CLI commands used to create the report
    command_log: Optional[List[str]] = None


def _cell(v) -> str:
    """Format a count cell; NaN (month not observed) stays blank."""
    if pd.isna(v):
        return ""
    return f"{int(v):,}"


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    summary: pd.DataFrame,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    fars_config: Optional[FarsConfig] = None,
) -> str:
    """
    Generate a DOCX report + charts for a month x year summary table.

    `summary` is the output of `fars_summarize_years`. If `config.map_state`
    and `config.map_year` are set, the state map is drawn with
    `fars_map_state` and embedded; its errors propagate.
    """
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if summary.empty:
        raise ValueError("No data to report on (summary table is empty).")

    years = [int(y) for y in summary.columns]
    totals = summary.sum(axis=0, skipna=True)

    # -----------------------------
    # 1) Create charts
    # -----------------------------
    with tempfile.TemporaryDirectory(prefix="fars_report_") as tmpdir:
        # Each chart is: (title, file_path, caption)
        chart_paths: List[Tuple[str, str, str]] = []

        def _save(filename: str) -> str:
            path = os.path.join(tmpdir, filename)
            plt.tight_layout()
            plt.savefig(path, dpi=200)
            plt.close()
            return path

        plt.figure()
        months = np.asarray(summary.index, dtype=float)
        for y in summary.columns:
            plt.plot(months, summary[y].to_numpy(dtype=float), marker="o", label=str(y))
        plt.xticks(range(1, 13), MONTH_NAMES)
        plt.title("Fatal accidents per month")
        plt.xlabel("Month")
        plt.ylabel("Accidents")
        plt.legend(title="Year")
        chart_paths.append((
            "Fatal accidents per month",
            _save("monthly_counts.png"),
            "One line per year; gaps mark months without observations.",
        ))

        plt.figure()
        plt.bar([str(y) for y in years], totals.to_numpy(dtype=float))
        plt.title("Fatal accidents per year")
        plt.ylabel("Accidents")
        chart_paths.append((
            "Fatal accidents per year",
            _save("yearly_totals.png"),
            "Sum of the monthly counts of each year.",
        ))

        if config.map_state is not None and config.map_year is not None:
            from .mapping import fars_map_state
            fig, ax = plt.subplots(figsize=(8, 6))
            drawn = fars_map_state(config.map_state, config.map_year, ax=ax, config=fars_config)
            if drawn is None:
                plt.close(fig)
            else:
                title = f"Accidents in state {config.map_state}, {config.map_year}"
                chart_paths.append((
                    title,
                    _save("state_map.png"),
                    "Each dot is one accident; unknown coordinates are left out.",
                ))

        # -----------------------------
        # 2) Build DOCX report
        # -----------------------------
        doc = Document()
        style = doc.styles["Normal"]
        style.font.name = "Calibri"
        style.font.size = Pt(11)

        def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
            p = doc.add_paragraph()
            r = p.add_run(text)
            r.bold = bold
            r.italic = italic
            r.font.size = Pt(size)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        def _kv(key: str, value: str) -> None:
            p = doc.add_paragraph()
            r = p.add_run(f"{key}: ")
            r.bold = True
            p.add_run(value)

        _center_title(config.title, 22, bold=True)
        _center_title(config.subtitle, 12, italic=True)

        doc.add_paragraph("")
        _kv("Years", ", ".join(str(y) for y in years))
        _kv("Total accidents", _cell(totals.sum()))

        doc.add_paragraph("")
        doc.add_heading("Dataset citation", level=1)
        cit = config.citation
        if cit.file_names:
            doc.add_paragraph("Data files used: " + ", ".join(cit.file_names))
        doc.add_paragraph(
            f"{cit.institutional_author}. {cit.database_name}. {cit.location}. {cit.website}."
        )

        if config.command_log:
            doc.add_paragraph("")
            doc.add_heading("Command log (reproducibility)", level=1)
            for line in config.command_log:
                doc.add_paragraph(line, style="List Bullet")

        # Month x year table
        doc.add_paragraph("")
        doc.add_heading("Accidents per month and year", level=1)
        t = doc.add_table(rows=1, cols=len(years) + 1)
        t.rows[0].cells[0].text = "Month"
        for i, y in enumerate(years, start=1):
            t.rows[0].cells[i].text = str(y)
        for month, row in summary.iterrows():
            cells = t.add_row().cells
            m = int(month)
            cells[0].text = MONTH_NAMES[m - 1] if 1 <= m <= 12 else str(m)
            for i, y in enumerate(summary.columns, start=1):
                cells[i].text = _cell(row[y])
        cells = t.add_row().cells
        cells[0].text = "Total"
        for i, y in enumerate(summary.columns, start=1):
            cells[i].text = _cell(totals[y])

        missing = int(summary.isna().sum().sum())
        if missing:
            doc.add_paragraph(
                f"{missing} month/year cell(s) have no observations and are left blank."
            )

        doc.add_paragraph("")
        doc.add_heading("Visualizations", level=1)
        for title, path, caption in chart_paths:
            doc.add_paragraph(title)
            doc.add_picture(path, width=Inches(6.5))
            doc.add_paragraph(caption)
            doc.add_paragraph("")

        doc.add_heading("Notes", level=1)
        doc.add_paragraph(
            "FARS codes unknown positions as longitude 999.9999 and latitude 99.9999. "
            "Those values are treated as missing on the map."
        )

        # -----------------------------
        # Reproducibility footer
        # -----------------------------
        from . import __version__ as fars_version
        from datetime import datetime as _dt
        doc.add_paragraph("")
        doc.add_heading("Reproducibility footer", level=1)
        doc.add_paragraph(f"fars version: {fars_version}")
        doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")

        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        doc.save(out_path)
    logger.info("report written to %s", out_path)
    return out_path
