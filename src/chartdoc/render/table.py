#!/usr/bin/env python3
"""
CHARTDOC TABLE - Markdown Parameter Table
-----------------------------------------
Lays the extracted rows out as a three-column Markdown table with padded
cells, so the generated README also reads well as plain text.

Author: ChartDoc Team
Date: 2026-10-19
"""

from typing import List

from chartdoc.core.models import Row

HEADERS = ["Parameter", "Description", "Default"]


def _cell(text: str) -> str:
    return text.replace("\n", " ").replace("|", "\\|")


def table_cells(rows: List[Row]) -> List[List[str]]:
    """Converts rows to escaped cell text; defaults are shown as code."""
    return [
        [_cell(row.path), _cell(row.description), f"`{_cell(row.default)}`"]
        for row in rows
    ]


def render_table(rows: List[Row]) -> str:
    cells = table_cells(rows)
    widths = [len(h) for h in HEADERS]
    for line in cells:
        widths = [max(w, len(c)) for w, c in zip(widths, line)]

    def fmt(values: List[str]) -> str:
        return "| " + " | ".join(v.ljust(w) for v, w in zip(values, widths)) + " |"

    out = [fmt(HEADERS), "|" + "|".join("-" * (w + 2) for w in widths) + "|"]
    out.extend(fmt(line) for line in cells)
    return "\n".join(out) + "\n"
