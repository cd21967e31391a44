#!/usr/bin/env python3
"""
CHARTDOC EXPORTER - Node Model to YAML
--------------------------------------
Converts a (destination) Node tree back into YAML text through ruamel.yaml
round-trip types, so quoting styles, key order and head/line comments
survive. Used to write the pruned values file (ignored fields removed).

Author: ChartDoc Team
Date: 2026-10-19
"""

import io
from typing import Any, Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.scalarstring import (
    DoubleQuotedScalarString, FoldedScalarString, LiteralScalarString,
    SingleQuotedScalarString,
)

from chartdoc.document.nodes import Kind, Node
from chartdoc.walk.comment import comment_value

# Column offsets matching yaml.indent(mapping=2, sequence=4, offset=2)
MAPPING_INDENT = 2
SEQUENCE_INDENT = 4


class NullSpelling(str):
    """A null written as '~', 'null', 'Null' or 'NULL' in the source."""


def represent_null_spelling(representer, data):
    return representer.represent_scalar('tag:yaml.org,2002:null', str(data))


class ValuesExporter:
    """
    The Reconstructor: converts Node trees back to YAML strings.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Helm charts: 2 spaces, sequences indented 4 (offset 2)
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.yaml.representer.add_representer(NullSpelling, represent_null_spelling)
        # Separate instance to type plain scalars ('3' -> int, 'true' -> bool)
        self._reader = YAML(typ='rt')

    def _plain(self, text: str) -> Any:
        try:
            data = self._reader.load(text)
        except YAMLError:
            return text
        if isinstance(data, (CommentedMap, CommentedSeq)) or data is None:
            return text
        return data

    def _scalar(self, node: Node) -> Any:
        if node.kind is Kind.NULL:
            # Bare 'key:' stays bare; explicit spellings are kept as written
            return NullSpelling(node.value) if node.value else None
        if node.style == '"':
            return DoubleQuotedScalarString(node.value)
        if node.style == "'":
            return SingleQuotedScalarString(node.value)
        if node.style == '|':
            return LiteralScalarString(node.value)
        if node.style == '>':
            return FoldedScalarString(node.value)
        return self._plain(node.value)

    def to_data(self, node: Optional[Node], column: int = 0) -> Any:
        """Builds ruamel round-trip data for `node`, comments included."""
        if node is None:
            return None

        if node.kind is Kind.MAP:
            data = CommentedMap()
            if node.flow_style:
                data.fa.set_flow_style()
            for f in node.fields:
                value = f.value
                child_column = column + (SEQUENCE_INDENT if value.kind is Kind.SEQUENCE else MAPPING_INDENT)
                data[f.name] = self.to_data(value, child_column)

                notes = f.annotations
                if notes.head_comment:
                    before = "\n".join(comment_value(line) for line in notes.head_comment.splitlines())
                    data.yaml_set_comment_before_after_key(f.name, before=before, indent=column)
                if notes.line_comment:
                    data.yaml_add_eol_comment(notes.line_comment, f.name)
            return data

        if node.kind is Kind.SEQUENCE:
            data = CommentedSeq()
            if node.flow_style:
                data.fa.set_flow_style()
            for item in node.items:
                data.append(self.to_data(item, column))
            return data

        return self._scalar(node)

    def export(self, node: Optional[Node]) -> str:
        """Serialises a Node tree to YAML text."""
        if node is None or node.kind is Kind.NULL:
            return ""
        stream = io.StringIO()
        self.yaml.dump(self.to_data(node), stream)
        return stream.getvalue()
