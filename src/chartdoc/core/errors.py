#!/usr/bin/env python3
"""
CHARTDOC ERRORS
---------------
Fatal failure modes of a documentation run. Anything not listed here
(unresolved schema references, comments that merely look like directives)
degrades silently and never aborts a traversal.

Author: ChartDoc Team
Date: 2026-10-19
"""

from typing import Optional


class ChartDocError(Exception):
    """Base class for every error raised by chartdoc."""


class ParseError(ChartDocError):
    """
    The values document is not well-formed YAML.
    Raised before any traversal begins.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"L{line}:C{column}: {message}"
        super().__init__(message)


class StructuralError(ChartDocError):
    """A destination node cannot be constructed during reconstruction."""


class DocInfoError(ChartDocError):
    """The doc info file, schema registry or template could not be used."""
