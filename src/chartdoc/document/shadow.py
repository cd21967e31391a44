#!/usr/bin/env python3
"""
CHARTDOC SHADOW - The Comment Curator
-------------------------------------
Records the comments around every data line of a values file so the
loader can attach them to the keys they annotate.

Three kinds of comment are mapped to a data line:
  * above   - full-line comments directly above it (a blank line resets)
  * inline  - the trailing comment on the line itself
  * below   - full-line comments directly below it, indented deeper
              than the data line (commented-out examples)

Detection is quote-aware so '#' characters inside values survive.

Author: ChartDoc Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

# Characters after which a quote starts a quoted scalar
QUOTE_OPENERS = " \t:[{,-?"


@dataclass
class ShadowMetadata:
    """
    Stores human-readable annotations associated with a specific YAML line.
    """
    above_comments: List[str] = field(default_factory=list)
    inline_comment: Optional[str] = None
    below_comments: List[str] = field(default_factory=list)


class CommentShadow:
    """
    The Curator: captures the 'shadow' of a values file, the parts that
    aren't data but carry the documentation.
    """

    def __init__(self):
        # Maps 1-based line numbers to their respective metadata
        self.comment_map: Dict[int, ShadowMetadata] = {}
        # Comments at the very end of the file with no data line following
        self.orphans: List[str] = []

    def _find_safe_comment_idx(self, text: str) -> int:
        """
        Identifies the true start of a comment, protecting hashes
        wrapped in quotes. A quote only opens a string at the start of a
        token, so apostrophes inside plain values (don't) are ignored.
        """
        in_double = in_single = False
        i, n = 0, len(text)
        while i < n:
            char = text[i]
            if in_double:
                if char == '\\':
                    i += 2
                    continue
                if char == '"':
                    in_double = False
            elif in_single:
                if char == "'":
                    # '' is an escaped quote inside a single-quoted string
                    if i + 1 < n and text[i+1] == "'":
                        i += 2
                        continue
                    in_single = False
            elif char in '"\'' and (i == 0 or text[i-1] in QUOTE_OPENERS):
                in_double = char == '"'
                in_single = char == "'"
            elif char == '#' and (i == 0 or text[i-1].isspace()):
                # Valid YAML comments require a leading space if not at start
                return i
            i += 1
        return -1

    def _entry(self, line_no: int) -> ShadowMetadata:
        return self.comment_map.setdefault(line_no, ShadowMetadata())

    def capture(self, raw_text: str, skip_lines: Iterable[int] = ()):
        """
        Scans the document and maps comments to their logical data lines.

        Args:
            raw_text: The values file content.
            skip_lines: 1-based lines holding block scalar content; these
                are data even when they start with '#'.
        """
        self.comment_map = {}
        self.orphans = []
        skip = set(skip_lines)
        lines = raw_text.splitlines()
        pending_comments: List[str] = []

        # The most recent data line and the deeper-indented comments that
        # follow it. Whether they are its foot or the head of a child key
        # is only known once the next data line shows its indentation.
        footed_line = None
        footed_indent = 0
        foot_buffer: List[str] = []

        def commit_foot():
            if footed_line is not None and foot_buffer:
                self._entry(footed_line).below_comments = foot_buffer.copy()
            foot_buffer.clear()

        for i, line in enumerate(lines, 1):
            stripped = line.strip()
            indent = len(line) - len(line.lstrip())

            if i in skip:
                pending_comments.clear()
                foot_buffer.clear()
                footed_line = None
                continue

            # 1. Full-line comment: candidate foot of the previous data
            #    line, or part of the head block of the next one
            if stripped.startswith('#'):
                if footed_line is not None and not pending_comments and indent > footed_indent:
                    foot_buffer.append(line)
                else:
                    commit_foot()
                    footed_line = None
                    pending_comments.append(line)
                continue

            # 2. Blank lines end both head and foot blocks
            if not stripped:
                commit_foot()
                pending_comments.clear()
                footed_line = None
                continue

            # 3. A deeper data line turns the buffered foot into its head
            if foot_buffer:
                if indent > footed_indent:
                    pending_comments = foot_buffer.copy()
                    foot_buffer.clear()
                else:
                    commit_foot()

            # 4. Data line association & inline capture
            inline_part = None
            comment_idx = self._find_safe_comment_idx(line)
            if comment_idx != -1:
                inline_part = line[comment_idx:].strip()

            if pending_comments or inline_part:
                entry = self._entry(i)
                entry.above_comments = pending_comments.copy()
                entry.inline_comment = inline_part
                pending_comments.clear()

            footed_line = i
            footed_indent = indent

        commit_foot()
        self.orphans = pending_comments

    def get_metadata(self, line_no: int) -> Optional[ShadowMetadata]:
        """Retrieves the comments recorded for a 1-based line number."""
        return self.comment_map.get(line_no)
