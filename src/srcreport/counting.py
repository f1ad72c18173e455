"""Reduce a per-file line-count listing to directory totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class LineCountEntry:
    count: int
    label: str


@dataclass(frozen=True)
class DirectorySummary:
    file_count: int = 0
    total_lines: int = 0


def parse_count_line(line: str) -> Optional[LineCountEntry]:
    """Parse ``"<count> <filename>"`` or return None if the line has no count.

    Leading whitespace is accepted since ``wc`` right-aligns its numbers.
    """
    parts = line.strip().split(None, 1)
    if not parts or not parts[0].isdecimal():
        return None
    label = parts[1].rstrip("\r\n") if len(parts) > 1 else ""
    return LineCountEntry(int(parts[0]), label)


def summarize_listing(lines: Iterable[str]) -> DirectorySummary:
    """Count files and lines in a listing, skipping unparseable lines."""
    file_count = 0
    total_lines = 0
    for line in lines:
        entry = parse_count_line(line)
        if entry is None:
            continue
        file_count += 1
        total_lines += entry.count
    return DirectorySummary(file_count, total_lines)
