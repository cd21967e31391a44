#!/usr/bin/env python3
"""
CHARTDOC LOADER - Values File to Node Model
-------------------------------------------
Parses a values document with ruamel.yaml's composer and converts the
composed graph into the chartdoc Node Model. Comments are mapped onto
keys through the CommentShadow, which reads the original source lines,
so every key ends up with its own head/line/foot annotations.

Author: ChartDoc Team
Date: 2026-10-19
"""

import logging
import re
from typing import Any, List, Set

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml import nodes as ynodes

from chartdoc.core.errors import ParseError, StructuralError
from chartdoc.document.nodes import (
    Annotations, Field, MapNode, NullNode, ScalarNode, SequenceNode, Node,
)
from chartdoc.document.shadow import CommentShadow

logger = logging.getLogger("chartdoc.loader")

# YAML 1.2 core schema spellings of null (plain style only)
NULL_PATTERN = re.compile(r'^(?:~|null|Null|NULL|)$')


class ValuesLoader:
    """
    Turns raw values text into a Node tree annotated with comments.
    A loader instance may be reused; each load() starts from clean state.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.shadow = CommentShadow()

    def _compose(self, text: str) -> Any:
        """Builds the ruamel node graph, mapping syntax errors to ParseError."""
        try:
            return self.yaml.compose(text)
        except YAMLError as e:
            mark = getattr(e, 'problem_mark', None) or getattr(e, 'context_mark', None)
            problem = getattr(e, 'problem', None) or str(e)
            if mark is not None:
                raise ParseError(problem, line=mark.line + 1, column=mark.column + 1) from e
            raise ParseError(problem) from e

    def _block_scalar_lines(self, root: Any) -> Set[int]:
        """Collects the 1-based lines holding block scalar content."""
        lines: Set[int] = set()
        stack: List[Any] = [root] if root is not None else []
        seen: Set[int] = set()
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            if isinstance(node, ynodes.ScalarNode):
                if node.style in ('|', '>'):
                    lines.update(range(node.start_mark.line + 2, node.end_mark.line + 1))
            elif isinstance(node, ynodes.MappingNode):
                for key, value in node.value:
                    stack.extend((key, value))
            elif isinstance(node, ynodes.SequenceNode):
                stack.extend(node.value)
        return lines

    def _inline(self, line0: int) -> str:
        meta = self.shadow.get_metadata(line0 + 1)
        if meta is None or not meta.inline_comment:
            return ""
        return meta.inline_comment

    def _annotations(self, key_node: Any) -> Annotations:
        meta = self.shadow.get_metadata(key_node.start_mark.line + 1)
        if meta is None:
            return Annotations()
        return Annotations(
            head_comment="\n".join(c.strip() for c in meta.above_comments),
            line_comment=meta.inline_comment or "",
            foot_comment="\n".join(c.rstrip() for c in meta.below_comments),
        )

    def _convert(self, node: Any, active: Set[int], in_flow: bool = False) -> Node:
        if isinstance(node, ynodes.ScalarNode):
            # Comments on a flow collection's line belong to its owner key
            comment = "" if in_flow else self._inline(node.start_mark.line)
            if not node.style and NULL_PATTERN.match(node.value):
                return NullNode(value=node.value, line_comment=comment)
            return ScalarNode(value=node.value, style=node.style or None, line_comment=comment)

        # Aliases share node objects; a node reached again while still
        # being converted is a recursive structure
        if id(node) in active:
            raise StructuralError("Recursive alias cannot be represented as a tree")
        active.add(id(node))
        in_flow = in_flow or bool(node.flow_style)
        try:
            if isinstance(node, ynodes.MappingNode):
                return self._convert_map(node, active, in_flow)
            if isinstance(node, ynodes.SequenceNode):
                return SequenceNode(
                    items=[self._convert(item, active, in_flow) for item in node.value],
                    flow_style=bool(node.flow_style),
                )
        finally:
            active.discard(id(node))
        raise StructuralError(f"Unsupported YAML node type: {type(node).__name__}")

    def _convert_map(self, node: Any, active: Set[int], in_flow: bool = False) -> MapNode:
        result = MapNode(flow_style=bool(node.flow_style))
        seen_keys: Set[str] = set()
        for key_node, value_node in node.value:
            if not isinstance(key_node, ynodes.ScalarNode):
                mark = key_node.start_mark
                raise StructuralError(
                    f"L{mark.line + 1}:C{mark.column + 1}: map keys must be scalars"
                )
            if key_node.value in seen_keys:
                mark = key_node.start_mark
                raise ParseError(
                    f"found duplicate key '{key_node.value}'",
                    line=mark.line + 1, column=mark.column + 1,
                )
            seen_keys.add(key_node.value)

            key = ScalarNode(
                value=key_node.value,
                style=key_node.style or None,
                line_comment="" if in_flow else self._inline(key_node.start_mark.line),
            )
            result.fields.append(Field(
                key=key,
                value=self._convert(value_node, active, in_flow),
                annotations=Annotations() if in_flow else self._annotations(key_node),
            ))
        return result

    def load(self, text: str) -> Node:
        """
        Parses `text` into a Node tree. An empty document yields a NullNode.

        Raises:
            ParseError: the text is not a single well-formed YAML document.
            StructuralError: the document holds complex keys or recursive aliases.
        """
        text = text.lstrip('\ufeff').replace('\r\n', '\n')
        root = self._compose(text)
        if root is None:
            logger.debug("Values document is empty")
            return NullNode()

        self.shadow.capture(text, skip_lines=self._block_scalar_lines(root))
        if self.shadow.orphans:
            logger.debug(
                f"{len(self.shadow.orphans)} trailing comment line(s) belong to no key "
                "and are not documented"
            )
        return self._convert(root, set())


def load_values(text: str) -> Node:
    """Convenience wrapper: parse values text into an annotated Node tree."""
    return ValuesLoader().load(text)
