#!/usr/bin/env python3
"""QuorumSecret end-to-end demo.

Usage (with the coordinator running, e.g.
``uvicorn quorumsecret.coordinator.app:app``):
    python -m quorumsecret.demo.run_demo

The script:
1. Generates a secret and N Shamir shares with threshold K.
2. Corrupts one share.
3. Reconstructs through the coordinator and checks the majority secret.
4. Sends a record with values in mixed bases.
5. Sends too few shares to show the rejection.
6. Dumps the audit log.
"""

from __future__ import annotations

import httpx

from quorumsecret.config import COORDINATOR_URL, DEFAULT_NUM_SHARES, DEFAULT_THRESHOLD
from quorumsecret.crypto import shamir
from quorumsecret.crypto.field import reduce


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def main() -> None:
    client = httpx.Client(timeout=15.0)
    n, k = DEFAULT_NUM_SHARES, DEFAULT_THRESHOLD

    # ---- 1. Shares ----
    banner(f"1) Generate secret and {n} shares (threshold {k})")
    secret = 42
    shares = shamir.share(secret, n, k)
    for x, y in shares:
        print(f"   share {x}: {y % 10**6}…")

    # ---- 2. Corrupt ----
    banner("2) Corrupt the last share")
    bad_x, bad_y = shares[-1]
    shares[-1] = (bad_x, reduce(bad_y + 1))
    print(f"   share {bad_x} now off by one")

    # ---- 3. Reconstruct ----
    banner("3) Consensus reconstruction")
    resp = client.post(
        f"{COORDINATOR_URL}/reconstruct",
        json={"threshold": k, "shares": {str(x): str(y) for x, y in shares}},
    )
    resp.raise_for_status()
    body = resp.json()
    match = "✓" if int(body["secret"]) == secret else "✗"
    print(f"   secret = {body['secret']}  (expected {secret}) {match}")
    print(f"   contributing shares: {body['contributing_indices']}")
    print(f"   votes {body['votes']}/{body['subsets_tried']}")

    # ---- 4. Record with encoded values ----
    banner("4) Test-case record (values in bases 10, 2, 16)")
    # f(x) = 3 + 2x
    record = {
        "keys": {"n": 3, "k": 2},
        "1": {"base": "10", "value": "5"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "16", "value": "9"},
    }
    resp = client.post(f"{COORDINATOR_URL}/reconstruct_record", json=record)
    resp.raise_for_status()
    print(f"   secret = {resp.json()['secret']}  (expected 3)")

    # ---- 5. Too few shares ----
    banner("5) Too few shares")
    resp = client.post(
        f"{COORDINATOR_URL}/reconstruct",
        json={"threshold": k, "shares": {str(x): str(y) for x, y in shares[: k - 1]}},
    )
    print(f"   HTTP {resp.status_code}: {resp.json().get('detail', resp.text)}")

    # ---- 6. Audit log ----
    banner("6) Audit log")
    resp = client.get(f"{COORDINATOR_URL}/audit")
    resp.raise_for_status()
    audit = resp.json()
    print(f"   Entries: {len(audit['entries'])}")
    print(f"   Chain valid: {audit['chain_valid']}")
    for e in audit["entries"][-5:]:
        print(f"     [{e['event']}] {e['entry_hash'][:12]}… ← {e['prev_hash'][:12]}…")

    banner("DEMO COMPLETE")
    client.close()


if __name__ == "__main__":
    main()
