#!/usr/bin/env python3
"""
CHARTDOC GENERATION CONTEXT
---------------------------
A state-management object that records everything produced while
documenting one values file: the parsed source tree, the reconstructed
destination tree, the rows and the rendered README.

Author: ChartDoc Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import List, Optional

from chartdoc.core.models import DocInfo, Row
from chartdoc.document.nodes import Node


@dataclass
class GenContext:
    """
    Maintains the state of a single documentation run.

    Created by the DocEngine and enriched phase by phase.
    """
    raw_text: str                                   # The values file as read from disk
    source: Optional[Node] = None                   # Parsed, annotated source tree
    destination: Optional[Node] = None              # Tree rebuilt by the walker (ignored fields removed)
    rows: List[Row] = field(default_factory=list)   # Documentation rows in document order
    doc: DocInfo = field(default_factory=DocInfo)   # Project metadata handed to the template
    table: str = ""                                 # Rendered Markdown parameter table
    readme: str = ""                                # Final rendered document
