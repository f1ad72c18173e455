import pytest

from srcreport.classify import DiffClassifier, DiffLineKind, DiffTally, classify_diff, classify_line


@pytest.mark.parametrize(
    "line, kind",
    [
        ("< old text", DiffLineKind.ONLY_IN_OLD),
        ("> new text", DiffLineKind.ONLY_IN_NEW),
        ("---", DiffLineKind.SEPARATOR),
        ("12,14c12", DiffLineKind.OTHER),
        ("diff -rdbNH a/x.c b/x.c", DiffLineKind.OTHER),
        ("Only in a: y.c", DiffLineKind.OTHER),
        ("", DiffLineKind.OTHER),
        (" < indented", DiffLineKind.OTHER),
    ],
)
def test_classify_line(line: str, kind: DiffLineKind) -> None:
    assert classify_line(line) is kind


def test_empty_transcript() -> None:
    assert classify_diff([]) == DiffTally(0, 0, 0)


def test_more_new_than_old_lines() -> None:
    lines = ["1,2c1,5", "< a", "< b", "---", "> 1", "> 2", "> 3", "> 4", "> 5", "6a7"]
    assert classify_diff(lines) == DiffTally(changed=2, added=3, deleted=0)


def test_pure_deletion() -> None:
    lines = ["3,5d2", "< a", "< b", "< c", "7c5"]
    assert classify_diff(lines) == DiffTally(changed=0, added=0, deleted=3)


def test_equal_run_is_all_changed() -> None:
    lines = ["1,3c1,3", "< a", "< b", "< c", "---", "> x", "> y", "> z", "9d8"]
    assert classify_diff(lines) == DiffTally(changed=3, added=0, deleted=0)


def test_trailing_run_is_dropped_by_default() -> None:
    lines = ["< x", "< y", "> z", "---"]
    assert classify_diff(lines) == DiffTally(0, 0, 0)


def test_trailing_run_counted_after_other_line() -> None:
    lines = ["< x", "< y", "> z", "2d1", "---"]
    assert classify_diff(lines) == DiffTally(changed=1, added=0, deleted=1)


def test_flush_tail_counts_last_hunk() -> None:
    lines = ["< x", "< y", "> z", "---"]
    assert classify_diff(lines, flush_tail=True) == DiffTally(changed=1, added=0, deleted=1)


def test_separator_does_not_split_run() -> None:
    lines = ["< a", "---", "> b", "x"]
    assert classify_diff(lines) == DiffTally(changed=1, added=0, deleted=0)


def test_consecutive_other_lines_are_noops() -> None:
    lines = ["diff a b", "1a2", "> n", "hdr", "hdr", "hdr"]
    assert classify_diff(lines) == DiffTally(changed=0, added=1, deleted=0)


def test_totals_match_sum_over_runs() -> None:
    runs = [(5, 2), (0, 3), (4, 4), (1, 0), (2, 7)]
    lines: list[str] = []
    for plus, minus in runs:
        lines.append("1c1")
        lines.extend("< old" for _ in range(minus))
        lines.append("---")
        lines.extend("> new" for _ in range(plus))
    lines.append("end")

    tally = classify_diff(lines)
    assert tally.changed == sum(min(p, m) for p, m in runs)
    assert tally.added - tally.deleted == sum(p - m for p, m in runs)


def test_classifier_tally_never_decreases() -> None:
    classifier = DiffClassifier()
    previous = (0, 0, 0)
    for line in ["< a", "> b", "> c", "1c1", "< d", "2d2", "> e", "---", "3a3"]:
        classifier.feed(line)
        current = (classifier.tally.changed, classifier.tally.added, classifier.tally.deleted)
        assert all(c >= p for c, p in zip(current, previous))
        previous = current
    assert classifier.tally == DiffTally(changed=1, added=2, deleted=1)


def test_fresh_classifier_starts_from_zero() -> None:
    classify_diff(["< a", "x"])
    assert classify_diff(["> a", "x"]) == DiffTally(changed=0, added=1, deleted=0)
