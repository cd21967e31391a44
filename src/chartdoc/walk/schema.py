#!/usr/bin/env python3
"""
CHARTDOC SCHEMA RESOLVER
------------------------
Opportunistic type metadata for values fields. A field may carry an inline
marker, a comment holding a JSON object such as

    image: nginx  # {"$ref": "#/definitions/image", "description": "..."}

or its shorthand {"$openapi": "image"}. References are looked up in a
SchemaRegistry, an immutable table of definitions that is passed in
explicitly and may be shared between traversals.

Resolution is best-effort: a missing marker, malformed JSON or an unknown
reference yields the locally declared schema or nothing. Nothing in this
module raises during a traversal.

Author: ChartDoc Team
Date: 2026-10-19
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ruamel.yaml import YAML, YAMLError

from chartdoc.core.errors import DocInfoError
from chartdoc.document.nodes import Field, Kind
from chartdoc.walk.comment import comment_value

logger = logging.getLogger("chartdoc.schema")

DEFINITIONS_PREFIX = "#/definitions/"


@dataclass(frozen=True)
class Schema:
    """The subset of an OpenAPI schema the walker cares about."""
    description: str = ""
    type: str = ""
    ref: str = ""
    properties: Mapping[str, "Schema"] = field(default_factory=dict)
    items: Optional["Schema"] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Schema":
        ref = data.get("$ref") or ""
        if not ref and data.get("$openapi"):
            ref = DEFINITIONS_PREFIX + str(data["$openapi"])

        schema_type = data.get("type") or ""
        if isinstance(schema_type, list):
            schema_type = "|".join(str(t) for t in schema_type)
        elif not isinstance(schema_type, str):
            schema_type = ""

        # Malformed 'properties' (a list, a string) declares nothing
        declared = data.get("properties")
        if not isinstance(declared, Mapping):
            declared = {}
        properties = {
            str(name): cls.from_dict(sub)
            for name, sub in declared.items()
            if isinstance(sub, Mapping)
        }

        items = data.get("items")
        if isinstance(items, list):
            items = items[0] if items else None

        return cls(
            description=str(data.get("description") or ""),
            type=str(schema_type),
            ref=str(ref),
            properties=MappingProxyType(properties),
            items=cls.from_dict(items) if isinstance(items, Mapping) else None,
        )

    def field(self, name: str) -> Optional["Schema"]:
        """Schema of a named property, if declared."""
        return self.properties.get(name)

    def is_empty(self) -> bool:
        return not (self.description or self.type or self.ref or self.properties or self.items)


def parse_marker(comment: str) -> Optional[Schema]:
    """
    Reads an inline schema marker from a raw comment. Returns None unless
    the comment text is a JSON object.
    """
    text = comment_value(comment or "")
    if not text.startswith("{"):
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return Schema.from_dict(data)
    except (AttributeError, TypeError, ValueError, RecursionError) as e:
        logger.debug(f"Ignoring malformed schema marker {text!r}: {e}")
        return None


class SchemaRegistry:
    """
    Read-only table of schema definitions keyed by name. References may be
    given as '#/definitions/<name>', '#/components/schemas/<name>' or a
    bare '<name>'.
    """

    def __init__(self, definitions: Optional[Mapping[str, Any]] = None):
        parsed: Dict[str, Schema] = {}
        for name, data in (definitions or {}).items():
            if isinstance(data, Schema):
                parsed[str(name)] = data
            elif isinstance(data, Mapping):
                parsed[str(name)] = Schema.from_dict(data)
        self._definitions = MappingProxyType(parsed)

    @classmethod
    def from_file(cls, path: str) -> "SchemaRegistry":
        """
        Loads definitions from a JSON or YAML file. The table may sit under
        'definitions' (OpenAPI v2), 'components.schemas' (OpenAPI v3) or be
        the whole document.
        """
        try:
            raw = Path(path).read_text(encoding='utf-8-sig')
            data = YAML(typ='safe', pure=True).load(raw) or {}
        except (OSError, YAMLError) as e:
            logger.error(f"Unable to load schema registry from {path}")
            raise DocInfoError(f"Failed to load schema registry: {str(e)}") from e

        if not isinstance(data, dict):
            raise DocInfoError(f"Schema registry {path} must be a mapping")

        components = data.get("components")
        if isinstance(data.get("definitions"), dict):
            table = data["definitions"]
        elif isinstance(components, dict) and isinstance(components.get("schemas"), dict):
            table = components["schemas"]
        else:
            table = data
        logger.info(f"Loaded {len(table)} schema definitions from {path}")
        return cls(table)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, ref: str) -> bool:
        return self._name(ref) in self._definitions

    @staticmethod
    def _name(ref: str) -> str:
        if ref.startswith("#/"):
            return ref.rsplit("/", 1)[-1]
        return ref

    def resolve(self, ref: str) -> Optional[Schema]:
        """Follows `ref` (and any chained refs) to a definition, or None."""
        seen = set()
        current = ref
        while current:
            if current in seen:
                logger.debug(f"Reference cycle detected at '{current}'")
                return None
            seen.add(current)
            schema = self._definitions.get(self._name(current))
            if schema is None:
                logger.debug(f"Unresolved schema reference '{current}'")
                return None
            if not schema.ref:
                return schema
            current = schema.ref
        return None

    def expand(self, schema: Optional[Schema]) -> Optional[Schema]:
        """
        Replaces a referencing schema by its definition, keeping the local
        description when the definition has none. Unresolvable references
        leave the local schema untouched.
        """
        if schema is None or not schema.ref:
            return schema
        resolved = self.resolve(schema.ref)
        if resolved is None:
            return schema
        if not resolved.description and schema.description:
            return replace(resolved, description=schema.description)
        return resolved


EMPTY_REGISTRY = SchemaRegistry()


def _value_marker(value: Any) -> Optional[Schema]:
    # Collections start on the line below their key; only scalars own a
    # trailing comment
    if value.kind in (Kind.SCALAR, Kind.NULL):
        return parse_marker(value.line_comment)
    return None


def resolve_field_schema(source: Field, parent: Optional[Schema] = None,
                         registry: Optional[SchemaRegistry] = None) -> Optional[Schema]:
    """
    Finds the schema of a map field. The value's marker wins; when it is
    absent or empty, the key's marker is used (sequence-valued fields carry
    it on the key line). Without any marker the parent schema's property is
    used. References are resolved against `registry`.
    """
    registry = registry or EMPTY_REGISTRY

    marker = _value_marker(source.value)
    if marker is None or marker.is_empty():
        marker = parse_marker(source.annotations.line_comment)
    if marker is not None and marker.is_empty():
        marker = None

    if marker is None and parent is not None:
        marker = parent.field(source.name)

    return registry.expand(marker)
