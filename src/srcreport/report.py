"""Assemble the three-line source comparison report."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .classify import DiffTally, classify_diff
from .counting import DirectorySummary, summarize_listing
from .tools import count_lines, diff_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Report:
    old_label: str
    new_label: str
    old: DirectorySummary
    new: DirectorySummary
    tally: DiffTally

    def lines(self) -> list[str]:
        return [
            format_summary(self.old_label, self.old),
            format_summary(self.new_label, self.new),
            format_tally(self.tally),
        ]


def format_summary(label: str, summary: DirectorySummary) -> str:
    return f"{label}: files={summary.file_count} lines={summary.total_lines}"


def format_tally(tally: DiffTally) -> str:
    return f"lines: changed={tally.changed} added={tally.added} deleted={tally.deleted}"


def build_report(old_dir: str, new_dir: str, flush_tail: bool = False) -> Report:
    """Count both trees and classify the diff between them."""
    old = summarize_listing(count_lines(old_dir))
    logger.info("%s: %d files, %d lines", old_dir, old.file_count, old.total_lines)

    new = summarize_listing(count_lines(new_dir))
    logger.info("%s: %d files, %d lines", new_dir, new.file_count, new.total_lines)

    tally = classify_diff(diff_text(old_dir, new_dir), flush_tail=flush_tail)
    logger.info(
        "diff: changed=%d added=%d deleted=%d (flush_tail=%s)",
        tally.changed,
        tally.added,
        tally.deleted,
        flush_tail,
    )
    return Report(old_dir, new_dir, old, new, tally)
