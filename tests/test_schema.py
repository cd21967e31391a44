#!/usr/bin/env python3
"""
CHARTDOC SCHEMA SUITE
---------------------
Marker parsing, registry lookups and the value-over-key precedence of
field schema resolution. Nothing here may raise on bad input.

Author: ChartDoc Team
Date: 2026-10-19
"""

import json

import pytest

from chartdoc.core.errors import DocInfoError
from chartdoc.document.loader import load_values
from chartdoc.document.nodes import Annotations, Field, ScalarNode, SequenceNode
from chartdoc.walk.rows import generate_values_table
from chartdoc.walk.schema import Schema, SchemaRegistry, parse_marker, resolve_field_schema

REGISTRY = SchemaRegistry({
    "image": {"description": "Container image to run", "type": "string"},
    "alias": {"$ref": "#/definitions/image"},
    "loop-a": {"$ref": "loop-b"},
    "loop-b": {"$ref": "loop-a"},
})


def make_field(name, value_comment="", key_comment="", value=None):
    if value is None:
        value = ScalarNode(value="x", line_comment=value_comment)
    return Field(
        key=ScalarNode(value=name),
        value=value,
        annotations=Annotations(line_comment=key_comment),
    )


def test_parse_marker_reads_json_object():
    schema = parse_marker('# {"description": "The image", "type": "string"}')
    assert schema.description == "The image"
    assert schema.type == "string"


def test_openapi_shorthand_becomes_ref():
    assert parse_marker('# {"$openapi": "image"}').ref == "#/definitions/image"


@pytest.mark.parametrize("comment", [
    "",
    "# just words",
    "# {not json",
    "# [1, 2]",
    "# +doc-gen:break",
])
def test_non_marker_comments_yield_none(comment):
    assert parse_marker(comment) is None


def test_registry_resolution():
    assert REGISTRY.resolve("#/definitions/image").description == "Container image to run"
    assert REGISTRY.resolve("image").type == "string"
    # Chained reference
    assert REGISTRY.resolve("alias").description == "Container image to run"
    assert REGISTRY.resolve("#/definitions/missing") is None
    # Cycles degrade to no schema
    assert REGISTRY.resolve("loop-a") is None
    assert "image" in REGISTRY
    assert len(REGISTRY) == 4


def test_value_marker_takes_priority():
    source = make_field(
        "image",
        value_comment='# {"description": "from value"}',
        key_comment='# {"description": "from key"}',
    )
    assert resolve_field_schema(source).description == "from value"


def test_key_marker_used_for_sequences():
    source = make_field(
        "args",
        key_comment='# {"description": "Extra arguments"}',
        value=SequenceNode(items=[ScalarNode(value="--v")]),
    )
    assert resolve_field_schema(source).description == "Extra arguments"


def test_reference_is_resolved_against_registry():
    source = make_field("image", value_comment='# {"$ref": "#/definitions/image"}')
    assert resolve_field_schema(source, registry=REGISTRY).description == "Container image to run"


def test_unresolved_reference_keeps_local_schema():
    source = make_field(
        "image",
        value_comment='# {"$ref": "#/definitions/unknown", "description": "local"}',
    )
    schema = resolve_field_schema(source, registry=REGISTRY)
    assert schema.description == "local"


def test_parent_property_used_without_marker():
    parent = Schema.from_dict({"properties": {"tag": {"description": "Image tag"}}})
    assert resolve_field_schema(make_field("tag"), parent=parent).description == "Image tag"
    assert resolve_field_schema(make_field("other"), parent=parent) is None


def test_no_marker_no_schema():
    assert resolve_field_schema(make_field("plain", value_comment="# hello")) is None


def test_registry_from_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"definitions": {"image": {"description": "Image"}}}))
    registry = SchemaRegistry.from_file(str(path))
    assert registry.resolve("image").description == "Image"


def test_registry_from_openapi_v3_file(tmp_path):
    path = tmp_path / "schema.yaml"
    path.write_text("components:\n  schemas:\n    port:\n      description: Service port\n")
    registry = SchemaRegistry.from_file(str(path))
    assert registry.resolve("#/components/schemas/port").description == "Service port"


def test_registry_missing_file(tmp_path):
    with pytest.raises(DocInfoError):
        SchemaRegistry.from_file(str(tmp_path / "absent.json"))


@pytest.mark.parametrize("marker", [
    '# {"properties": "x"}',
    '# {"properties": [1, 2]}',
    '# {"properties": 7}',
    '# {"items": "x"}',
    '# {"items": [3]}',
    '# {"items": 7}',
    '# {"type": {"nested": true}}',
    '# {"type": 7}',
    '# {"properties": {"a": {"properties": ["deep"]}}}',
])
def test_malformed_marker_shapes_never_raise(marker):
    schema = parse_marker(marker)
    assert schema.type == ""
    assert schema.items is None
    assert all(not sub.properties for sub in schema.properties.values())
    # Resolution from a field carrying the marker must not raise either
    resolve_field_schema(make_field("a", value_comment=marker), registry=REGISTRY)


def test_malformed_marker_in_document_still_yields_rows():
    rows = generate_values_table(load_values(
        'name: web  # {"properties": "x"}\n'
        'port: 80  # {"items": [1]}\n'
    ))
    assert [(r.path, r.default) for r in rows] == [("name", "web"), ("port", "80")]


def test_registry_file_with_malformed_definitions(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({
        "definitions": {
            "x": {"properties": [1], "description": "Still usable"},
            "y": "not a definition",
        },
    }))
    registry = SchemaRegistry.from_file(str(path))
    assert registry.resolve("x").description == "Still usable"
    assert registry.resolve("x").properties == {}
    assert registry.resolve("y") is None


def test_registry_file_with_scalar_components(tmp_path):
    path = tmp_path / "schema.yaml"
    path.write_text("components: none\nport:\n  description: Service port\n")
    registry = SchemaRegistry.from_file(str(path))
    assert registry.resolve("port").description == "Service port"
