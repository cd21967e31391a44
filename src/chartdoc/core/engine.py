#!/usr/bin/env python3
"""
CHARTDOC ENGINE - The Orchestrator
----------------------------------
The DocEngine takes a chart's values file through the documentation
phases: read, parse, walk (rows + pruned tree), table, template. It owns
the schema registry for its lifetime and shares it, read-only, with
every traversal.

Author: ChartDoc Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import List, Optional

from ruamel.yaml import YAML, YAMLError

from chartdoc.core.context import GenContext
from chartdoc.core.errors import ChartDocError, DocInfoError
from chartdoc.core.models import DocInfo, Row, pick_values_example
from chartdoc.document.exporter import ValuesExporter
from chartdoc.document.loader import ValuesLoader
from chartdoc.render.table import render_table
from chartdoc.render.template import load_template, render_readme
from chartdoc.walk.rows import RowExtractor
from chartdoc.walk.schema import EMPTY_REGISTRY, SchemaRegistry
from chartdoc.walk.visitor import Visitor
from chartdoc.walk.walker import Walker

logger = logging.getLogger("chartdoc.engine")

# Top-level doc.yaml sections and the shape each must have
DOC_SECTIONS = {
    "project": dict,
    "repository": dict,
    "chart": dict,
    "release": dict,
    "prerequisites": list,
}


class DocEngine:
    """
    Principal orchestrator for values documentation.
    All configuration is explicit: the optional schema registry file and
    the traversal flags.
    """

    def __init__(self, schema_path: Optional[str] = None,
                 infer_associative_lists: bool = False):
        self.registry = SchemaRegistry.from_file(schema_path) if schema_path else EMPTY_REGISTRY
        self.infer_associative_lists = infer_associative_lists
        self.loader = ValuesLoader()
        self.exporter = ValuesExporter()

    def _read(self, path: str, what: str) -> str:
        try:
            return Path(path).read_text(encoding='utf-8-sig')
        except OSError as e:
            logger.error(f"Unable to read {what} from {path}")
            raise DocInfoError(f"Failed to read {what}: {str(e)}") from e

    def load_doc_info(self, doc_path: str) -> DocInfo:
        """Reads the project's doc.{yaml|json} info file."""
        raw = self._read(doc_path, "doc info")
        try:
            data = YAML(typ='safe', pure=True).load(raw)
        except YAMLError as e:
            logger.error(f"Doc info file {doc_path} is not valid YAML/JSON")
            raise DocInfoError(f"Failed to parse doc info: {str(e)}") from e
        if data is not None and not isinstance(data, dict):
            raise DocInfoError(f"Doc info file {doc_path} must be a mapping")

        for section, expected in DOC_SECTIONS.items():
            value = (data or {}).get(section)
            if value is not None and not isinstance(value, expected):
                raise DocInfoError(
                    f"Doc info file {doc_path}: '{section}' must be a {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
        return DocInfo.from_dict(data)

    def walk(self, context: GenContext, visitor: Visitor) -> GenContext:
        """Parses the raw text (if needed) and walks it with `visitor`."""
        if context.source is None:
            context.source = self.loader.load(context.raw_text)
        context.destination = Walker(
            source=context.source,
            visitor=visitor,
            registry=self.registry,
            visit_keys_as_scalars=True,
            infer_associative_lists=self.infer_associative_lists,
        ).walk()
        return context

    def extract(self, values_text: str) -> GenContext:
        """
        Phases 1-2: parse the values and collect rows. Raises on any fatal
        error; no partial row list is ever returned.
        """
        context = GenContext(raw_text=values_text)
        extractor = RowExtractor()
        self.walk(context, extractor)
        context.rows = extractor.rows
        logger.debug(f"Extracted {len(context.rows)} rows")
        return context

    def extract_rows(self, values_text: str) -> List[Row]:
        return self.extract(values_text).rows

    def prune(self, values_text: str) -> str:
        """Returns the values file with every ignored field removed."""
        context = self.walk(GenContext(raw_text=values_text), Visitor())
        return self.exporter.export(context.destination)

    def generate(self, values_path: str, doc_path: Optional[str] = None,
                 template_path: Optional[str] = None) -> GenContext:
        """
        Runs every phase for one chart and returns the populated context.
        """
        logger.info(f"Documenting {values_path}")
        try:
            context = self.extract(self._read(values_path, "values"))
            doc = self.load_doc_info(doc_path) if doc_path else DocInfo()

            context.table = render_table(context.rows)
            doc.chart.values = context.table
            doc.chart.values_example = pick_values_example(context.rows)
            context.doc = doc

            context.readme = render_readme(doc, context.rows, load_template(template_path))
        except ChartDocError as e:
            logger.error(f"Error documenting {values_path}: {str(e)}")
            raise
        return context
