from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tweetdrop.adapters.twitter import TwitterEngagementFetcher
from tweetdrop.app import collect_entries, compile_airdrop, generate_proofs, verify_address
from tweetdrop.config import configure_logging, get_airdrop_config, parse_pairing

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from tweetdrop.config import AirdropConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a token claim set from tweet engagement")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every dropped candidate",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    collect = subparsers.add_parser(
        "collect",
        help="Collect replies and quotes, resolve addresses, write review batches",
    )
    collect.add_argument(
        "--page-limit",
        type=int,
        default=None,
        help="Maximum pages per endpoint, 0 for no limit (defaults to PAGE_LIMIT)",
    )
    collect.add_argument(
        "--no-retweet-filter",
        action="store_true",
        help="Keep replies from authors who did not retweet",
    )

    subparsers.add_parser("compile", help="Merge review batches into the airdrop file")

    generate = subparsers.add_parser("generate", help="Build the Merkle root and proofs")
    generate.add_argument(
        "--pairing",
        type=str,
        help="Sibling pairing rule: sorted or positional (defaults to MERKLE_PAIRING)",
    )

    verify = subparsers.add_parser("verify", help="Check one address against a proofs file")
    verify.add_argument("address", type=str, help="Address to verify")
    verify.add_argument(
        "--pairing",
        type=str,
        help="Pairing rule the proofs were built with (defaults to MERKLE_PAIRING)",
    )
    verify.add_argument(
        "--proofs-file",
        type=str,
        help="Proofs file to read (defaults to PROOFS_FILE)",
    )

    return parser.parse_args(list(argv))


def _with_pairing(config: AirdropConfig, value: str | None) -> AirdropConfig:
    if value is None:
        return config
    return replace(config, pairing=parse_pairing(value))


def _run_collect(args: argparse.Namespace, config: AirdropConfig) -> None:
    fetcher = TwitterEngagementFetcher(require_retweet=not args.no_retweet_filter)
    result = collect_entries(fetcher=fetcher, config=config, page_limit=args.page_limit)
    report = result.report
    log.info(
        f"Collect finished: records={report.records}, claims={report.claims}, "
        f"author_duplicates={report.author_duplicates}, unresolved={report.unresolved}, "
        f"invalid_addresses={report.invalid_addresses}, "
        f"resolver_errors={report.resolver_errors}, "
        f"address_duplicates={report.address_duplicates}, "
        f"batch_files={len(result.batch_files)}"
    )


def _run_verify(args: argparse.Namespace, config: AirdropConfig) -> bool:
    proofs_file = Path(args.proofs_file) if args.proofs_file else None
    valid = verify_address(args.address, proofs_file=proofs_file, config=config)
    if valid:
        log.info(f"Proof for {args.address} is valid")
    else:
        log.warning(f"No valid proof for {args.address}")
    return valid


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    configure_logging()
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.verbose:
            configure_logging(verbose=True, force=True)
        page_limit = getattr(parsed_args, "page_limit", None)
        if page_limit is not None and page_limit < 0:
            raise ValueError("Page limit must be non-negative")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    valid = True
    try:
        config = _with_pairing(get_airdrop_config(), getattr(parsed_args, "pairing", None))
        if parsed_args.command == "collect":
            _run_collect(parsed_args, config)
        elif parsed_args.command == "compile":
            compile_airdrop(config=config)
        elif parsed_args.command == "generate":
            claim_set = generate_proofs(config=config)
            log.info(f"Merkle root: {claim_set.merkle_root} ({len(claim_set)} claims)")
        elif parsed_args.command == "verify":
            valid = _run_verify(parsed_args, config)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception(f"Fatal error during {parsed_args.command}")
        sys.exit(1)

    if not valid:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
