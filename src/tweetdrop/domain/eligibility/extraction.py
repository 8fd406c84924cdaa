"""Candidate extraction from free-text engagement records."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tweetdrop.domain.model import Candidate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tweetdrop.domain.model import EngagementRecord

NAME_SUFFIX = ".eth"
ADDRESS_LENGTH = 42

_LINE_BREAKS = re.compile(r"\r\n|\n|\r")
_NAME_PATTERN = re.compile(r"([^ ]+\.(eth))", re.IGNORECASE)
_HEX_ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")


def extract_candidate(
    record: EngagementRecord,
    *,
    extract_hex_addresses: bool = False,
) -> Candidate | None:
    """Return the first claim token in ``record.text`` or ``None``.

    Line breaks are removed without substitution before matching. A name match
    that starts with ``0x`` is cut to address length so trailing text such as
    ``0x…1234.eth`` cannot leak into the token. Bare hex addresses are only
    considered when ``extract_hex_addresses`` is set and no name matched.
    """

    text = _LINE_BREAKS.sub("", record.text)

    match = _NAME_PATTERN.search(text)
    if match is not None:
        token = match.group(0)
        if token.startswith("0x"):
            token = token[:ADDRESS_LENGTH]
        return Candidate(author_handle=record.author_handle, raw_token=token)

    if extract_hex_addresses:
        hex_match = _HEX_ADDRESS_PATTERN.search(text)
        if hex_match is not None:
            return Candidate(author_handle=record.author_handle, raw_token=hex_match.group(0))

    return None


def extract_candidates(
    records: Iterable[EngagementRecord],
    *,
    extract_hex_addresses: bool = False,
) -> list[Candidate]:
    """Extract candidates in record order; records without a token are skipped."""

    candidates: list[Candidate] = []
    for record in records:
        candidate = extract_candidate(record, extract_hex_addresses=extract_hex_addresses)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
