#!/usr/bin/env python3
"""
CHARTDOC CORE MODELS
--------------------
Defines the output records of a documentation run: the table Row emitted
by the walker and the DocInfo record that feeds the README template.

Author: ChartDoc Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Defaults too generic to serve as a `--set` example in the README
TRIVIAL_DEFAULTS = frozenset(["", '""', "''", "{}", "[]", "true", "false"])


@dataclass
class Row:
    """
    One documented parameter of a values file.

    Rows are emitted in document order (pre-order, depth-first).
    """
    path: str               # Dotted parameter path (e.g. 'image.repository')
    description: str = ""   # Text taken from comments or the resolved schema
    default: str = ""       # Literal default as written in the values file
    example: str = ""       # Verbatim example block from the key's foot comment

    def as_set_flag(self) -> str:
        """Renders the row the way `helm install --set` expects it."""
        return f"{self.path}={self.default}"


@dataclass
class Project:
    name: str = ""
    short_name: str = ""
    url: str = ""
    description: str = ""
    app: str = ""


@dataclass
class Repository:
    url: str = ""
    name: str = ""


@dataclass
class Chart:
    name: str = ""
    version: str = ""
    values: str = ""            # Rendered parameter table
    values_example: str = ""    # First non-trivial `path=default` pair


@dataclass
class Release:
    name: str = ""
    namespace: str = ""


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


@dataclass
class DocInfo:
    """
    Project metadata read from doc.yaml, enriched with the generated
    parameter table before it is handed to the template.
    """
    project: Project = field(default_factory=Project)
    repository: Repository = field(default_factory=Repository)
    chart: Chart = field(default_factory=Chart)
    prerequisites: List[str] = field(default_factory=list)
    release: Release = field(default_factory=Release)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DocInfo":
        """Builds a DocInfo from the camelCase mapping found in doc.yaml."""
        data = data or {}
        project = data.get("project") or {}
        repository = data.get("repository") or {}
        chart = data.get("chart") or {}
        release = data.get("release") or {}
        return cls(
            project=Project(
                name=_text(project, "name"),
                short_name=_text(project, "shortName"),
                url=_text(project, "url"),
                description=_text(project, "description"),
                app=_text(project, "app"),
            ),
            repository=Repository(
                url=_text(repository, "url"),
                name=_text(repository, "name"),
            ),
            chart=Chart(
                name=_text(chart, "name"),
                version=_text(chart, "version"),
                values=_text(chart, "values"),
                values_example=_text(chart, "valuesExample"),
            ),
            prerequisites=[str(p) for p in (data.get("prerequisites") or [])],
            release=Release(
                name=_text(release, "name"),
                namespace=_text(release, "namespace"),
            ),
        )


def pick_values_example(rows: List[Row]) -> str:
    """Returns the first row with a meaningful default as a `--set` pair."""
    for row in rows:
        if row.default not in TRIVIAL_DEFAULTS:
            return row.as_set_flag()
    return ""
