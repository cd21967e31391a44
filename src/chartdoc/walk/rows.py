#!/usr/bin/env python3
"""
CHARTDOC ROW EXTRACTOR - The Values Table
-----------------------------------------
The documentation Visitor. It leaves the tree untouched and, at every
leaf, records one Row(path, description, default) in traversal order.

Description precedence for a field:
  1. the key's head comment
  2. the key's line comment, unless it is a directive or a schema marker
  3. the description of the resolved schema
  4. ''

Author: ChartDoc Team
Date: 2026-10-19
"""

from typing import List, Optional

from chartdoc.core.models import Row
from chartdoc.document.nodes import Field, Node, flow_text
from chartdoc.walk.comment import description_text, example_text
from chartdoc.walk.schema import Schema, SchemaRegistry, parse_marker
from chartdoc.walk.visitor import Visitor
from chartdoc.walk.walker import Walker


class RowExtractor(Visitor):
    """
    Accumulates documentation rows into a caller-owned list.
    """

    def __init__(self, rows: Optional[List[Row]] = None):
        self.rows: List[Row] = rows if rows is not None else []

    def describe(self, source: Field, schema: Optional[Schema]) -> str:
        notes = source.annotations
        desc = description_text(notes.head_comment)
        if not desc and parse_marker(notes.line_comment) is None:
            desc = description_text(notes.line_comment)
        if not desc and schema is not None:
            desc = schema.description.strip()
        return desc

    def visit_leaf(self, source: Field, path: str, schema: Optional[Schema]) -> Optional[Node]:
        self.rows.append(Row(
            path=path,
            description=self.describe(source, schema),
            default=flow_text(source.value),
            example=example_text(source.annotations.foot_comment),
        ))
        return source.value


def generate_values_table(node: Optional[Node], registry: Optional[SchemaRegistry] = None,
                          infer_associative_lists: bool = False) -> List[Row]:
    """
    Walks a values tree and returns its documentation rows in document
    order. Either the full list is returned or an error propagates.
    """
    extractor = RowExtractor()
    walker = Walker(
        source=node,
        visitor=extractor,
        visit_keys_as_scalars=True,
        infer_associative_lists=infer_associative_lists,
    )
    if registry is not None:
        walker.registry = registry
    walker.walk()
    return extractor.rows
