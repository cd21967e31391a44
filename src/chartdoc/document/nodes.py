#!/usr/bin/env python3
"""
CHARTDOC NODE MODEL
-------------------
The in-memory form of a parsed values document. Every node is one of four
closed variants (map, sequence, scalar, null) and every map key carries
its own Annotations, so comments travel with the field they describe.

The loader builds a source tree once; walkers only read it and assemble
fresh destination trees from the shells returned by `shell()`.

Author: ChartDoc Team
Date: 2026-10-19
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union


class Kind(Enum):
    MAP = "map"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    NULL = "null"


@dataclass
class Annotations:
    """
    Comments attached to a map key, stored with their '#' marker.
    Multi-line comments are joined with newlines; absent ones are ''.
    """
    head_comment: str = ""    # Comment lines directly above the key
    line_comment: str = ""    # Trailing comment on the key line
    foot_comment: str = ""    # Deeper-indented comment lines right below the key


@dataclass
class ScalarNode:
    kind: ClassVar[Kind] = Kind.SCALAR

    value: str                      # Scalar text without quotes
    style: Optional[str] = None     # None (plain), '"', "'", '|' or '>'
    line_comment: str = ""          # Trailing comment on the line the value starts on

    @property
    def literal(self) -> str:
        """The scalar as written, quotes included."""
        if self.style == '"':
            return json.dumps(self.value, ensure_ascii=False)
        if self.style == "'":
            return "'" + self.value.replace("'", "''") + "'"
        if self.style in ("|", ">"):
            # Block scalars cannot live on one line; show them JSON-quoted
            return json.dumps(self.value, ensure_ascii=False)
        return self.value


@dataclass
class NullNode:
    kind: ClassVar[Kind] = Kind.NULL

    value: str = ""                 # '', '~' or a spelling of 'null'
    line_comment: str = ""

    @property
    def literal(self) -> str:
        return self.value


@dataclass
class Field:
    key: ScalarNode
    value: "Node"
    annotations: Annotations = field(default_factory=Annotations)

    @property
    def name(self) -> str:
        return self.key.value


@dataclass
class MapNode:
    kind: ClassVar[Kind] = Kind.MAP

    fields: List[Field] = field(default_factory=list)
    flow_style: bool = False

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def set_field(self, source: Field, value: Optional["Node"]):
        """
        Sets `value` under the key of `source`, keeping the source key and
        its annotations. A None value removes the field. New keys are
        appended, so filling an empty shell in source order keeps that order.
        """
        for i, existing in enumerate(self.fields):
            if existing.name == source.name:
                if value is None:
                    del self.fields[i]
                else:
                    self.fields[i] = Field(source.key, value, source.annotations)
                return
        if value is not None:
            self.fields.append(Field(source.key, value, source.annotations))

    def shell(self) -> "MapNode":
        """An empty map with the same styling, used as a destination."""
        return MapNode(flow_style=self.flow_style)


@dataclass
class SequenceNode:
    kind: ClassVar[Kind] = Kind.SEQUENCE

    items: List["Node"] = field(default_factory=list)
    flow_style: bool = False

    def shell(self) -> "SequenceNode":
        return SequenceNode(flow_style=self.flow_style)


Node = Union[MapNode, SequenceNode, ScalarNode, NullNode]


def is_empty(node: Optional[Node]) -> bool:
    """True for null, empty-string, empty-map and empty-sequence values."""
    if node is None or node.kind is Kind.NULL:
        return True
    if node.kind is Kind.MAP:
        return not node.fields
    if node.kind is Kind.SEQUENCE:
        return not node.items
    return node.value == ""


def flow_text(node: Optional[Node]) -> str:
    """
    Renders any node on a single line in YAML flow style, reusing the
    literal text of every scalar so defaults read exactly as written.
    """
    if node is None:
        return ""
    if node.kind is Kind.MAP:
        pairs = [f"{f.key.literal}: {flow_text(f.value)}".rstrip() for f in node.fields]
        return "{" + ", ".join(pairs) + "}"
    if node.kind is Kind.SEQUENCE:
        return "[" + ", ".join(flow_text(item) for item in node.items) + "]"
    return node.literal
