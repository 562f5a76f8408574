"""Parsing of the ``winget source list`` table.

winget prints sources as a left-aligned, fixed-width table::

    Name    Argument
    -----------------------------------------------
    msstore https://storeedgefd.dsx.mp.microsoft.com/v9.0
    winget  https://cdn.winget.microsoft.com/cache

Column widths are not fixed by winget, so the boundary between the two
columns is inferred each time: from the separator when it is split into
one dash run per column, otherwise from the header line.
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .exceptions import ParseError
from .models import Source


# Spinner/progress output uses single dashes; the separator is a long run.
SEPARATOR_RE = re.compile(r"-{3,}")
DASH_RUN_RE = re.compile(r"-+")


class SourceListParser(ABC):
    """Turns raw ``source list`` output into Source records.

    Callers depend on this interface only, so a structured output mode can
    replace the whitespace heuristic without touching them.
    """

    @abstractmethod
    def parse(self, lines: Sequence[str]) -> List[Source]:
        """Return sources in table order.

        Raises:
            ParseError: If the output does not contain a readable table
        """
        pass


class FixedWidthTableParser(SourceListParser):
    """Two-column (name, url) table parser with inferred column boundary."""

    def find_separator(self, lines: Sequence[str]) -> int:
        """Return the index of the first separator (dash run) line."""
        for index, line in enumerate(lines):
            if SEPARATOR_RE.search(line):
                return index
        raise ParseError("No separator line found in source table")

    def find_separator_column(self, separator: str) -> Optional[int]:
        """Return the start of the second dash run in the separator line.

        None when the separator is one continuous run, as winget prints it.
        """
        runs = [m.start() for m in DASH_RUN_RE.finditer(separator)]
        return runs[1] if len(runs) >= 2 else None

    def find_url_column(self, header: str) -> int:
        """Return the start column of the second field in the header line.

        The second field starts at the first non-space character that
        follows at least one space.
        """
        seen_space = False
        for index, char in enumerate(header):
            if char == ' ':
                seen_space = True
            elif seen_space:
                return index
        raise ParseError(f"Cannot locate second column in header {header!r}")

    def parse(self, lines: Sequence[str]) -> List[Source]:
        if not lines:
            raise ParseError("Empty source table")

        top_line_index = self.find_separator(lines)
        if top_line_index == 0:
            raise ParseError("Source table has no header line above the separator")

        url_start = self.find_separator_column(lines[top_line_index])
        if url_start is None:
            url_start = self.find_url_column(lines[top_line_index - 1])

        sources = []
        for row in lines[top_line_index + 1:]:
            if not row.strip():
                continue
            sources.append(Source(
                name=row[:url_start].strip(),
                url=row[url_start:].strip(),
            ))
        return sources


def parse_source_table(lines: Sequence[str]) -> List[Source]:
    """Parse ``source list`` output with the default fixed-width parser."""
    return FixedWidthTableParser().parse(lines)
