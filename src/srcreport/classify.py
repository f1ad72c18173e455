"""Classify a normal-format diff transcript into changed/added/deleted lines.

Each hunk in ``diff`` output lists the old lines (``<``) and the new lines
(``>``) of one region, optionally split by a ``---`` separator.  Lines are
paired off by count only: the smaller side of a run is reported as changed,
and the surplus as added or deleted.  Any line that is not ``<``, ``>`` or
``-`` (hunk headers such as ``12,14c12``, ``diff -r ...`` headers, ``Only
in`` notices) ends the current run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class DiffLineKind(Enum):
    ONLY_IN_OLD = "<"
    ONLY_IN_NEW = ">"
    SEPARATOR = "-"
    OTHER = "other"


_KINDS_BY_PREFIX = {
    "<": DiffLineKind.ONLY_IN_OLD,
    ">": DiffLineKind.ONLY_IN_NEW,
    "-": DiffLineKind.SEPARATOR,
}


def classify_line(line: str) -> DiffLineKind:
    """Return the kind of a transcript line from its first character."""
    return _KINDS_BY_PREFIX.get(line[:1], DiffLineKind.OTHER)


@dataclass
class DiffTally:
    changed: int = 0
    added: int = 0
    deleted: int = 0


@dataclass
class Run:
    """Old/new line counts seen since the last flush."""

    plus: int = 0
    minus: int = 0


class DiffClassifier:
    """Single-pass accumulator over transcript lines.

    Feed lines with :meth:`feed`; the running result is in :attr:`tally`.
    A pending run is only folded into the tally when an ``OTHER`` line
    arrives or :meth:`flush` is called explicitly.
    """

    def __init__(self) -> None:
        self.tally = DiffTally()
        self.run = Run()

    def feed(self, line: str) -> None:
        kind = classify_line(line)
        if kind is DiffLineKind.ONLY_IN_OLD:
            self.run.minus += 1
        elif kind is DiffLineKind.ONLY_IN_NEW:
            self.run.plus += 1
        elif kind is DiffLineKind.OTHER:
            self.flush()

    def flush(self) -> None:
        """Fold the pending run into the tally and start a new one."""
        run = self.run
        self.tally.changed += min(run.plus, run.minus)
        if run.plus > run.minus:
            self.tally.added += run.plus - run.minus
        else:
            self.tally.deleted += run.minus - run.plus
        self.run = Run()


def classify_diff(lines: Iterable[str], flush_tail: bool = False) -> DiffTally:
    """Tally changed, added and deleted lines in a diff transcript.

    With ``flush_tail`` false a run still pending at the end of the stream
    is dropped, which reproduces the historical report numbers.  Set it to
    count the last hunk of the transcript as well.
    """
    classifier = DiffClassifier()
    for line in lines:
        classifier.feed(line)
    if flush_tail:
        classifier.flush()
    return classifier.tally
