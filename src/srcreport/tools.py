"""External tools that produce the raw listings and diff transcript.

Every function returns a lazy iterator over the tool's stdout lines.  The
process is started when iteration begins and its exit status is checked
once stdout is exhausted.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import threading
from typing import IO, Iterable, Iterator, Sequence

logger = logging.getLogger(__name__)

DEFAULT_DIFF_ARGS = "-rdbNH"
DEFAULT_WC_BATCH = 256


class ToolError(RuntimeError):
    """An external command could not be run or exited with a failure status."""

    def __init__(self, command: Sequence[str], message: str, returncode: int | None = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(f"{shlex.join(self.command)}: {message}")


def get_diff_args() -> list[str]:
    """Return diff flags from SRCREPORT_DIFF_ARGS or the defaults.

    The defaults recurse into subdirectories (-r), look for a minimal set
    of changes (-d), ignore changes in the amount of whitespace (-b), treat
    absent files as empty (-N) and speed up large files (-H).
    """
    override = os.getenv("SRCREPORT_DIFF_ARGS")
    if override is not None:
        return shlex.split(override)
    return shlex.split(DEFAULT_DIFF_ARGS)


def get_wc_batch() -> int:
    """Return how many files are passed to a single ``wc -l`` call."""
    raw = os.getenv("SRCREPORT_WC_BATCH")
    if not raw:
        return DEFAULT_WC_BATCH
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"SRCREPORT_WC_BATCH must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"SRCREPORT_WC_BATCH must be positive, got {value}")
    return value


def _drain(stream: IO[str], chunks: list[str]) -> None:
    for chunk in stream:
        chunks.append(chunk)


def iter_command_lines(command: Sequence[str], ok_codes: Iterable[int] = (0,)) -> Iterator[str]:
    """Run ``command`` and yield its stdout line by line.

    Raises ToolError if the executable cannot be started or the exit status
    is not in ``ok_codes``.  Abandoning the iterator early kills the process.
    """
    ok = set(ok_codes)
    logger.debug("Running %s", shlex.join(command))
    try:
        proc = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise ToolError(command, f"failed to start ({exc})") from exc

    # stderr is read on the side so a noisy tool cannot fill the pipe and stall
    stderr_chunks: list[str] = []
    reader = threading.Thread(target=_drain, args=(proc.stderr, stderr_chunks), daemon=True)
    reader.start()

    finished = False
    try:
        for line in proc.stdout:
            yield line
        finished = True
    finally:
        if not finished:
            proc.kill()
        proc.stdout.close()
        returncode = proc.wait()
        reader.join()
        proc.stderr.close()

    stderr_text = "".join(stderr_chunks).strip()
    if returncode not in ok:
        raise ToolError(command, stderr_text or f"exited with status {returncode}", returncode)
    if stderr_text:
        logger.warning("%s reported: %s", command[0], stderr_text)
    logger.debug("%s exited with status %d", command[0], returncode)


def _operand(path: str) -> str:
    """Keep a path that starts with a dash from being read as an option."""
    if path.startswith("-"):
        return os.path.join(os.curdir, path)
    return path


def list_files(directory: str) -> Iterator[str]:
    """Yield the path of every regular file below ``directory``."""
    for line in iter_command_lines(["find", _operand(directory), "-type", "f"]):
        path = line.rstrip("\n")
        if path:
            yield path


def _batched(items: Iterable[str], size: int) -> Iterator[list[str]]:
    batch: list[str] = []
    for item in items:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _without_last(lines: Iterable[str]) -> Iterator[str]:
    pending = None
    for line in lines:
        if pending is not None:
            yield pending
        pending = line


def count_lines(directory: str, batch_size: int | None = None) -> Iterator[str]:
    """Yield ``wc -l`` output lines for every file below ``directory``.

    Files are handed to ``wc`` in batches.  For a batch of several files wc
    ends with a ``total`` line, which is dropped here so only per-file
    records reach the listing.  wc exits with status 1 when some
    file cannot be read; the readable files are still counted and the
    complaint is logged.
    """
    if batch_size is None:
        batch_size = get_wc_batch()
    for batch in _batched(list_files(directory), batch_size):
        lines = iter_command_lines(["wc", "-l", "--", *batch], ok_codes=(0, 1))
        if len(batch) > 1:
            lines = _without_last(lines)
        yield from lines


def diff_text(old_dir: str, new_dir: str, args: Sequence[str] | None = None) -> Iterator[str]:
    """Yield the diff transcript between two directories.

    diff exits with 1 when the inputs differ, so only statuses above 1 are
    treated as failures.
    """
    if args is None:
        args = get_diff_args()
    return iter_command_lines(["diff", *args, "--", old_dir, new_dir], ok_codes=(0, 1))
