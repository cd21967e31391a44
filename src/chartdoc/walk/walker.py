#!/usr/bin/env python3
"""
CHARTDOC WALKER - The Recursive Engine
--------------------------------------
Walks a source Node tree depth-first, dispatching on node kind, and
rebuilds a destination tree from the nodes a Visitor hands back.

With `visit_keys_as_scalars` the walker also reads the comment directives
on every map key:

  +doc-gen:ignore  (head or line comment) skip the field entirely
  +doc-gen:break   (line comment)         treat the field as a leaf and
                                          stop descending into it

With `infer_associative_lists` the elements of a sequence of maps that
share a distinct identifying field ('name', 'id' or 'key') are addressed
by that field instead of their position, e.g. `containers[name=web]`.

Author: ChartDoc Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from chartdoc.core.errors import StructuralError
from chartdoc.document.nodes import (
    Field, Kind, MapNode, Node, NullNode, ScalarNode, SequenceNode, is_empty,
)
from chartdoc.walk.comment import BREAK, IGNORE, is_directive
from chartdoc.walk.schema import EMPTY_REGISTRY, Schema, SchemaRegistry, resolve_field_schema
from chartdoc.walk.visitor import Visitor

NODE_TYPES = (MapNode, SequenceNode, ScalarNode, NullNode)

# Candidate identifying fields for associative lists, in priority order
MERGE_KEYS = ("name", "id", "key")

PATH_SEPARATOR = "."


def format_path(segments: Iterable[str]) -> str:
    """Joins path segments with '.', attaching '[...]' segments directly."""
    result = ""
    for segment in segments:
        if result and not segment.startswith("["):
            result += PATH_SEPARATOR
        result += segment
    return result


def merge_key(sequence: SequenceNode) -> Optional[str]:
    """
    Returns the field that identifies every element of an associative
    list, or None when elements can only be matched by position.
    """
    if not sequence.items or any(item.kind is not Kind.MAP for item in sequence.items):
        return None
    for candidate in MERGE_KEYS:
        values = []
        for item in sequence.items:
            found = item.field(candidate)
            if found is None or found.value.kind is not Kind.SCALAR:
                break
            values.append(found.value.value)
        else:
            if len(set(values)) == len(values):
                return candidate
    return None


@dataclass
class Walker:
    """
    One level of a traversal. Recursion creates a child Walker per field
    or element, carrying the same visitor, registry and mode flags.
    """
    source: Optional[Node]
    visitor: Visitor = field(default_factory=Visitor)
    schema: Optional[Schema] = None
    path: Tuple[str, ...] = ()
    registry: SchemaRegistry = EMPTY_REGISTRY
    visit_keys_as_scalars: bool = False
    infer_associative_lists: bool = False

    def walk(self) -> Optional[Node]:
        """Walks the source and returns the destination node (None if dropped)."""
        if self.source is None:
            return None
        dispatch = {
            Kind.MAP: self._walk_map,
            Kind.SEQUENCE: self._walk_sequence,
            Kind.SCALAR: self._walk_scalar,
            Kind.NULL: self._walk_scalar,
        }
        return dispatch[self.source.kind]()

    def _child(self, source: Node, schema: Optional[Schema], segment: str) -> "Walker":
        return replace(self, source=source, schema=schema, path=self.path + (segment,))

    def _check(self, dest, kind: Kind, visit: str):
        if not isinstance(dest, NODE_TYPES) or dest.kind is not kind:
            raise StructuralError(
                f"{format_path(self.path) or '<root>'}: {visit} must return a "
                f"{kind.value} node, got {type(dest).__name__}"
            )

    def _set(self, dest: MapNode, source: Field, value: Optional[Node]):
        if value is not None and not isinstance(value, NODE_TYPES):
            raise StructuralError(
                f"{format_path(self.path + (source.name,))}: cannot set a "
                f"{type(value).__name__} as a field value"
            )
        dest.set_field(source, value)

    def _walk_scalar(self) -> Optional[Node]:
        return self.visitor.visit_scalar(self.source, self.schema)

    def _walk_map(self) -> Optional[Node]:
        dest = self.visitor.visit_map(self.source, self.schema)
        if dest is None:
            return None
        self._check(dest, Kind.MAP, "visit_map")

        for source_field in self.source.fields:
            breakout = False
            if self.visit_keys_as_scalars:
                # Keys carry no schema of their own
                self.visitor.visit_scalar(source_field.key, None)

                notes = source_field.annotations
                if is_directive(notes.line_comment, IGNORE) or is_directive(notes.head_comment, IGNORE):
                    continue
                breakout = is_directive(notes.line_comment, BREAK)

            schema = resolve_field_schema(source_field, self.schema, self.registry)

            if self.visit_keys_as_scalars:
                value = source_field.value
                leaf = None
                if value.kind in (Kind.SCALAR, Kind.NULL) or is_empty(value) or breakout:
                    path = format_path(self.path + (source_field.name,))
                    leaf = self.visitor.visit_leaf(source_field, path, schema)
                if breakout:
                    self._set(dest, source_field, leaf)
                    continue

            value = self._child(source_field.value, schema, source_field.name).walk()
            # this handles empty and non-empty values
            self._set(dest, source_field, value)

        return dest

    def _walk_sequence(self) -> Optional[Node]:
        dest = self.visitor.visit_sequence(self.source, self.schema)
        if dest is None:
            return None
        self._check(dest, Kind.SEQUENCE, "visit_sequence")

        item_schema = self.registry.expand(self.schema.items) if self.schema else None
        key = merge_key(self.source) if self.infer_associative_lists else None

        for index, item in enumerate(self.source.items):
            if key is not None:
                segment = f"[{key}={item.field(key).value.value}]"
            else:
                segment = f"[{index}]"
            value = self._child(item, item_schema, segment).walk()
            if value is None:
                continue
            if not isinstance(value, NODE_TYPES):
                raise StructuralError(
                    f"{format_path(self.path + (segment,))}: cannot append a "
                    f"{type(value).__name__} to a sequence"
                )
            dest.items.append(value)

        return dest
