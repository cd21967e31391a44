#!/usr/bin/env python3
"""
CHARTDOC ANNOTATIONS - Comment Directives & Descriptions
--------------------------------------------------------
Comments on a values key double as a control channel. A comment line is a
directive only when, stripped of its '#' and surrounding whitespace, it is
exactly one of the tokens below; anything else is plain description text.

Author: ChartDoc Team
Date: 2026-10-19
"""

import textwrap
from typing import List

COMMENT_MARKER = "#"

IGNORE = "+doc-gen:ignore"
BREAK = "+doc-gen:break"
DIRECTIVES = frozenset([IGNORE, BREAK])


def comment_value(line: str) -> str:
    """Strips the comment marker and surrounding whitespace."""
    result = line.strip()
    if result.startswith(COMMENT_MARKER):
        result = result[len(COMMENT_MARKER):]
    return result.strip()


def comment_example_value(line: str) -> str:
    """
    Strips only the leading comment marker. Whatever follows it is kept
    verbatim so that example values keep their formatting.
    """
    result = line.lstrip()
    if result.startswith(COMMENT_MARKER):
        result = result[len(COMMENT_MARKER):]
    return result


def _lines(comment: str) -> List[str]:
    return [line for line in comment.splitlines() if line.strip()]


def is_directive(comment: str, directive: str) -> bool:
    """True if any single line of `comment` is exactly `directive`."""
    return any(comment_value(line) == directive for line in _lines(comment))


def description_text(comment: str) -> str:
    """
    Joins the descriptive lines of a (possibly multi-line) comment with a
    single space. Directive lines are dropped.
    """
    parts = []
    for line in _lines(comment):
        value = comment_value(line)
        if value and value not in DIRECTIVES:
            parts.append(value)
    return " ".join(parts)


def example_text(comment: str) -> str:
    """
    Rebuilds a commented-out example block. Only the indentation shared
    by every line is removed; relative indentation is preserved.
    """
    if not comment.strip():
        return ""
    body = "\n".join(comment_example_value(line) for line in comment.splitlines())
    return textwrap.dedent(body).strip("\n")
