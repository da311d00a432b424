#!/usr/bin/env python3
"""Reconstruct secrets from test-case share records.

Usage:
    python -m quorumsecret.cli [FILE ...] [--prime P]

Each file is processed independently; a file that cannot be reconstructed
is reported and the remaining files are still processed.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from quorumsecret.config import PRIME, TESTCASE_FILES
from quorumsecret.crypto import consensus
from quorumsecret.crypto.errors import (
    InsufficientSharesError,
    InvalidRecordError,
    NoConsensusError,
)
from quorumsecret.crypto.field import PrimeField
from quorumsecret.records.testcase import load_record


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "files",
        nargs="*",
        default=TESTCASE_FILES,
        help="test-case JSON files (default: %(default)s)",
    )
    parser.add_argument("--prime", type=int, default=PRIME, help="field modulus")
    args = parser.parse_args(argv)
    if args.prime < 2:
        parser.error(f"--prime must be at least 2 (got {args.prime})")
    return args


def run_case(label: str, path: str, field: PrimeField) -> bool:
    """Reconstruct one file and print the outcome.  Returns success."""
    try:
        record = load_record(path, field)
        outcome = consensus.reconstruct(record.shares, record.k, field)
    except InvalidRecordError as exc:
        print(f"❌ Invalid input for {path}: {exc}")
        return False
    except InsufficientSharesError:
        print(f"❌ Insufficient valid roots for {path}.")
        return False
    except NoConsensusError:
        print(f"❌ No valid secret could be reconstructed for {path}.")
        return False

    print(f"{label} Secret: {outcome.secret}")
    print(f"{label} Valid Keys: {list(outcome.contributing_indices)}")
    if record.skipped:
        print(f"{label} Skipped Roots: {record.skipped}")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    field = PrimeField(args.prime)
    print("Secrets for all test cases:")
    ok = [run_case(f"Test Case {i}", path, field) for i, path in enumerate(args.files, 1)]
    return 0 if all(ok) else 1


if __name__ == "__main__":
    sys.exit(main())
