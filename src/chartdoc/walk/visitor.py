#!/usr/bin/env python3
"""
CHARTDOC VISITOR - Pluggable Walker Behaviour
---------------------------------------------
The Walker calls a Visitor at each decision point and rebuilds a
destination tree from what the Visitor returns:

  visit_map       -> destination map the walker fills field by field
  visit_sequence  -> destination sequence the walker fills item by item
  visit_scalar    -> destination scalar (also used for nulls and keys)
  visit_leaf      -> called for scalar, empty and break-forced fields

Returning None from visit_map or visit_sequence drops the whole subtree.

The base class is the no-op copy: walking with it reproduces the source
tree field for field. Subclasses override only what they need.

Author: ChartDoc Team
Date: 2026-10-19
"""

from typing import Optional

from chartdoc.document.nodes import Field, MapNode, Node, SequenceNode
from chartdoc.walk.schema import Schema


class Visitor:

    def visit_map(self, source: MapNode, schema: Optional[Schema]) -> Optional[MapNode]:
        return source.shell()

    def visit_sequence(self, source: SequenceNode, schema: Optional[Schema]) -> Optional[SequenceNode]:
        return source.shell()

    def visit_scalar(self, source: Node, schema: Optional[Schema]) -> Optional[Node]:
        return source

    def visit_leaf(self, source: Field, path: str, schema: Optional[Schema]) -> Optional[Node]:
        """
        Visits a field treated as a leaf. When the field carries a break
        directive, the returned node becomes its destination value.
        """
        return source.value
