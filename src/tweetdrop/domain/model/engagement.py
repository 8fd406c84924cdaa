"""Engagement-side value objects: raw records and extracted candidates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EngagementRecord:
    """One engagement event (reply, quote) as handed over by a collector."""

    author_id: str
    author_handle: str
    text: str


@dataclass(frozen=True, slots=True)
class Candidate:
    """Unverified claim identity pulled out of a single record.

    ``raw_token`` is either a 42-character hex address prefix or a dotted
    naming-service name; nothing about it has been validated yet.
    """

    author_handle: str
    raw_token: str
