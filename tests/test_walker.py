#!/usr/bin/env python3
"""
CHARTDOC WALKER SUITE
---------------------
Traversal properties of the recursive engine:
1. Row count and order without directives
2. ignore / break semantics on rows and on the destination tree
3. Idempotence of the no-op visitor
4. Subtree dropping and structural errors
5. Associative list addressing

Author: ChartDoc Team
Date: 2026-10-19
"""

import pytest

from chartdoc.core.errors import StructuralError
from chartdoc.document.loader import load_values
from chartdoc.document.nodes import Kind, SequenceNode
from chartdoc.walk.rows import generate_values_table
from chartdoc.walk.visitor import Visitor
from chartdoc.walk.walker import Walker, format_path, merge_key

PLAIN_VALUES = (
    "a: 1\n"
    "b:\n"
    "  c: x\n"
    "  d: []\n"
    "  e:\n"
    "    f: null\n"
    "g: \"\"\n"
)


class RecordingVisitor(Visitor):
    """Copies the tree and records the kinds it was asked to visit."""

    def __init__(self):
        self.calls = []

    def visit_map(self, source, schema):
        self.calls.append("map")
        return super().visit_map(source, schema)

    def visit_scalar(self, source, schema):
        self.calls.append("scalar")
        return super().visit_scalar(source, schema)


class DropSequences(Visitor):
    def visit_sequence(self, source, schema):
        return None


class BrokenVisitor(Visitor):
    def visit_map(self, source, schema):
        return SequenceNode()


def test_rows_follow_document_order():
    rows = generate_values_table(load_values(PLAIN_VALUES))
    assert [r.path for r in rows] == ["a", "b.c", "b.d", "b.e.f", "g"]
    assert [r.default for r in rows] == ["1", "x", "[]", "null", '""']


def test_ignore_removes_rows_and_destination_field():
    tree = load_values(
        "keep: 1\n"
        "# +doc-gen:ignore\n"
        "secret:\n"
        "  token: abc\n"
        "debug: false  # +doc-gen:ignore\n"
        "other: 2\n"
    )
    rows = generate_values_table(tree)
    assert [r.path for r in rows] == ["keep", "other"]

    dest = Walker(source=tree, visit_keys_as_scalars=True).walk()
    assert dest.field_names() == ["keep", "other"]
    # The source is never mutated
    assert tree.field_names() == ["keep", "secret", "debug", "other"]


@pytest.mark.parametrize("values, default", [
    ("resources: # +doc-gen:break\n  limits:\n    cpu: 100m\n", "{limits: {cpu: 100m}}"),
    ("resources: # +doc-gen:break\n  - --verbose\n  - --port=80\n", "[--verbose, --port=80]"),
    ("resources: 5 # +doc-gen:break\n", "5"),
])
def test_break_emits_single_row(values, default):
    tree = load_values(values + "after: 1\n")
    rows = generate_values_table(tree)
    assert [r.path for r in rows] == ["resources", "after"]
    assert rows[0].default == default

    # The broken-out value is kept as-is in the destination
    dest = Walker(source=tree, visit_keys_as_scalars=True).walk()
    assert dest == tree


def test_break_is_scoped_to_its_field():
    rows = generate_values_table(load_values(
        "image:\n"
        "  repo: nginx # +doc-gen:break\n"
        "  tag: latest\n"
    ))
    assert [r.path for r in rows] == ["image.repo", "image.tag"]


@pytest.mark.parametrize("keys_as_scalars", [False, True])
def test_noop_visitor_is_idempotent(keys_as_scalars):
    """
    IDEMPOTENCY TEST: walking with the base visitor rebuilds the source
    field for field, and walking the result again changes nothing.
    """
    tree = load_values(
        "# head\n"
        "replicas: 3 # count\n"
        "image:\n"
        "  repository: nginx\n"
        "  tag: \"1.21\"\n"
        "ports:\n"
        "  - name: http\n"
        "    port: 80\n"
        "  - 8080\n"
        "empty: {}\n"
    )
    first = Walker(source=tree, visit_keys_as_scalars=keys_as_scalars).walk()
    assert first == tree
    assert first is not tree
    second = Walker(source=first, visit_keys_as_scalars=keys_as_scalars).walk()
    assert second == tree
    assert second.field_names() == ["replicas", "image", "ports", "empty"]


def test_visitor_sees_keys_as_scalars():
    visitor = RecordingVisitor()
    Walker(source=load_values("a: 1\n"), visitor=visitor, visit_keys_as_scalars=True).walk()
    # map, then the key, then the value
    assert visitor.calls == ["map", "scalar", "scalar"]

    visitor = RecordingVisitor()
    Walker(source=load_values("a: 1\n"), visitor=visitor).walk()
    assert visitor.calls == ["map", "scalar"]


def test_none_from_visitor_drops_subtree():
    tree = load_values("args:\n  - a\nname: x\n")
    dest = Walker(source=tree, visitor=DropSequences()).walk()
    assert dest.field_names() == ["name"]


def test_wrong_destination_kind_is_structural_error():
    with pytest.raises(StructuralError):
        Walker(source=load_values("a: 1\n"), visitor=BrokenVisitor()).walk()


def test_non_map_roots():
    assert generate_values_table(load_values("")) == []
    assert generate_values_table(load_values("- a\n- b\n")) == []
    assert Walker(source=None).walk() is None


CONTAINERS = (
    "containers:\n"
    "  - name: web\n"
    "    image: nginx\n"
    "  - name: sidecar\n"
    "    image: envoy\n"
)


def test_sequence_elements_addressed_by_position():
    rows = generate_values_table(load_values(CONTAINERS))
    assert [r.path for r in rows] == [
        "containers[0].name", "containers[0].image",
        "containers[1].name", "containers[1].image",
    ]


def test_associative_list_addressed_by_merge_key():
    rows = generate_values_table(load_values(CONTAINERS), infer_associative_lists=True)
    assert [r.path for r in rows] == [
        "containers[name=web].name", "containers[name=web].image",
        "containers[name=sidecar].name", "containers[name=sidecar].image",
    ]


@pytest.mark.parametrize("values, expected", [
    (CONTAINERS, "name"),
    ("l:\n  - id: 1\n  - id: 2\n", "id"),
    ("l:\n  - name: a\n  - name: a\n", None),
    ("l:\n  - name: a\n  - other: b\n", None),
    ("l:\n  - a\n  - b\n", None),
    ("l: []\n", None),
])
def test_merge_key_detection(values, expected):
    sequence = load_values(values).fields[0].value
    assert sequence.kind is Kind.SEQUENCE
    assert merge_key(sequence) == expected


def test_format_path():
    assert format_path(["image", "tag"]) == "image.tag"
    assert format_path(["containers", "[0]", "name"]) == "containers[0].name"
    assert format_path([]) == ""
