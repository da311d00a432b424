"""Hash-chained audit log of reconstruction attempts.

Each entry carries the SHA-256 of the previous one, so rewriting or
dropping an earlier reconstruction record breaks the chain.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from quorumsecret.crypto.consensus import ReconstructionOutcome

GENESIS_HASH = "0" * 64


@dataclass(frozen=True)
class AuditEntry:
    timestamp: float
    event: str
    data: Dict[str, Any]
    prev_hash: str
    entry_hash: str


def _digest(timestamp: float, event: str, data: Dict[str, Any], prev_hash: str) -> str:
    payload = json.dumps(
        {"timestamp": timestamp, "event": event, "data": data, "prev_hash": prev_hash},
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode()).hexdigest()


class AuditLog:
    """Append-only in-memory log; secrets are stored as decimal strings."""

    def __init__(self) -> None:
        self._entries: List[AuditEntry] = []

    @property
    def head(self) -> str:
        return self._entries[-1].entry_hash if self._entries else GENESIS_HASH

    def append(self, event: str, data: Dict[str, Any]) -> AuditEntry:
        ts = time.time()
        prev = self.head
        entry = AuditEntry(
            timestamp=ts,
            event=event,
            data=data,
            prev_hash=prev,
            entry_hash=_digest(ts, event, data, prev),
        )
        self._entries.append(entry)
        return entry

    def record_success(self, threshold: int, outcome: ReconstructionOutcome) -> AuditEntry:
        """Log a successful reconstruction."""
        return self.append(
            "reconstruct_ok",
            {
                "threshold": threshold,
                "secret": str(outcome.secret),
                "contributing_indices": list(outcome.contributing_indices),
                "votes": outcome.votes,
                "subsets_tried": outcome.subsets_tried,
                "subsets_skipped": outcome.subsets_skipped,
            },
        )

    def record_failure(self, threshold: int, error: Exception) -> AuditEntry:
        return self.append(
            "reconstruct_failed",
            {"threshold": threshold, "error": type(error).__name__, "reason": str(error)},
        )

    def entries(self) -> List[Dict[str, Any]]:
        return [asdict(e) for e in self._entries]

    def verify_chain(self) -> bool:
        """Verify the integrity of the full chain."""
        prev = GENESIS_HASH
        for e in self._entries:
            if e.prev_hash != prev:
                return False
            if e.entry_hash != _digest(e.timestamp, e.event, e.data, e.prev_hash):
                return False
            prev = e.entry_hash
        return True
