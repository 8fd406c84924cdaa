"""File-based hand-off between the batch jobs."""

from __future__ import annotations

from .schema import ClaimEntry, ClaimProofDocument, ClaimSetDocument
from .store import (
    EntryFormatError,
    load_amount_table,
    read_claim_set,
    read_entries,
    read_entry_batches,
    write_claim_set,
    write_entries,
    write_entry_batches,
)

__all__ = [
    "ClaimEntry",
    "ClaimProofDocument",
    "ClaimSetDocument",
    "EntryFormatError",
    "load_amount_table",
    "read_claim_set",
    "read_entries",
    "read_entry_batches",
    "write_claim_set",
    "write_entries",
    "write_entry_batches",
]
