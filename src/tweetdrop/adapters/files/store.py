"""Read and write the JSONL batch files, the airdrop file and the proofs file."""

from __future__ import annotations

import json
import re
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from tweetdrop.domain.amounts import AmountTable
from tweetdrop.domain.errors import AmountPolicyError, TweetdropError

from .schema import ClaimEntry, ClaimSetDocument

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from tweetdrop.domain.model import ClaimSet

log = getLogger(__name__)

BATCH_GLOB = "batch-*.jsonl"
_BATCH_NUMBER = re.compile(r"^batch-(\d+)\.jsonl$")


class EntryFormatError(TweetdropError):
    """Raised when a JSONL line is not a valid claim entry."""


def write_entry_batches(
    entries: Sequence[ClaimEntry],
    directory: Path,
    *,
    batch_size: int = 100,
) -> list[Path]:
    """Write ``entries`` as ``batch-<n>.jsonl`` files of ``batch_size`` lines.

    Batch files left over from an earlier run are removed first so a later
    compile cannot pick them up.
    """

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    directory.mkdir(parents=True, exist_ok=True)
    for stale in _batch_files(directory):
        log.warning(f"Removing stale batch file {stale}")
        stale.unlink()

    written: list[Path] = []
    for start in range(0, len(entries), batch_size):
        path = directory / f"batch-{start // batch_size}.jsonl"
        write_entries(entries[start : start + batch_size], path)
        written.append(path)
    log.info(f"Wrote {len(entries)} entries in {len(written)} batch files to {directory}")
    return written


def read_entry_batches(directory: Path) -> list[ClaimEntry]:
    """Read every batch file in ``directory`` in batch-number order."""

    entries: list[ClaimEntry] = []
    for path in _batch_files(directory):
        entries.extend(read_entries(path))
    return entries


def write_entries(entries: Iterable[ClaimEntry], path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        for entry in entries:
            handle.write(entry.to_line() + "\n")


def read_entries(path: Path) -> list[ClaimEntry]:
    entries: list[ClaimEntry] = []
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                entries.append(ClaimEntry.model_validate_json(line))
            except ValidationError as exc:
                raise EntryFormatError(f"{path}:{line_number}: invalid entry: {exc}") from exc
    return entries


def load_amount_table(path: Path, *, default: int | None = None) -> AmountTable:
    """Load a JSON object mapping handles or addresses to amounts."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise AmountPolicyError(f"Amounts file {path} is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise AmountPolicyError(f"Amounts file {path} must contain a JSON object")
    return AmountTable.from_mapping(payload, default=default)


def write_claim_set(claim_set: ClaimSet, path: Path) -> None:
    document = ClaimSetDocument.from_claim_set(claim_set)
    path.write_text(document.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")


def read_claim_set(path: Path) -> ClaimSet:
    try:
        document = ClaimSetDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise EntryFormatError(f"{path}: invalid claim set: {exc}") from exc
    return document.to_claim_set()


def _batch_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    numbered: list[tuple[int, Path]] = []
    for path in directory.glob(BATCH_GLOB):
        match = _BATCH_NUMBER.match(path.name)
        if match is not None:
            numbered.append((int(match.group(1)), path))
    return [path for _, path in sorted(numbered)]
