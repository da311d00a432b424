"""Reconstruction coordinator FastAPI application.

The coordinator accepts share sets, runs consensus reconstruction over
every threshold-sized subset and reports the majority secret together
with the indices of the shares that agree with it.

Endpoints:
- POST /reconstruct         – normalized input {threshold, shares, modulus?}
- POST /reconstruct_record  – a raw test-case record (``keys`` + encoded shares)
- GET  /audit               – hash-chained log of every attempt
- GET  /health

Field elements travel as decimal strings; they exceed JSON-safe integers.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from quorumsecret.config import DEFAULT_THRESHOLD
from quorumsecret.coordinator.audit import AuditLog
from quorumsecret.crypto import consensus
from quorumsecret.crypto.errors import (
    InsufficientSharesError,
    InvalidRecordError,
    NoConsensusError,
)
from quorumsecret.crypto.field import DEFAULT_FIELD, PrimeField
from quorumsecret.records.testcase import parse_record

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(title="QuorumSecret Coordinator")

# ---------------------------------------------------------------------------
# In-memory state
# ---------------------------------------------------------------------------

_audit = AuditLog()

# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ReconstructRequest(BaseModel):
    threshold: int = DEFAULT_THRESHOLD
    # index -> field element (int or decimal string)
    shares: Dict[str, Union[str, int]]
    # Optional per-request prime; defaults to config.PRIME
    modulus: Optional[Union[str, int]] = None


class ReconstructResponse(BaseModel):
    secret: str
    contributing_indices: List[int]
    votes: int
    subsets_tried: int
    subsets_skipped: int
    skipped: List[str] = []


class AuditResponse(BaseModel):
    entries: List[Dict[str, Any]]
    chain_valid: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _field_for(modulus: Optional[Union[str, int]]) -> PrimeField:
    if modulus is None:
        return DEFAULT_FIELD
    try:
        return PrimeField(int(modulus))
    except ValueError as exc:
        raise HTTPException(400, f"Invalid modulus: {exc}") from exc


def _run(shares: consensus.Shares, k: int, fld: PrimeField, skipped: List[str]) -> ReconstructResponse:
    """Reconstruct, audit the attempt and map failures to HTTP errors."""
    try:
        outcome = consensus.reconstruct(shares, k, fld)
    except InsufficientSharesError as exc:
        _audit.record_failure(k, exc)
        raise HTTPException(422, str(exc)) from exc
    except NoConsensusError as exc:
        _audit.record_failure(k, exc)
        raise HTTPException(409, str(exc)) from exc

    _audit.record_success(k, outcome)
    return ReconstructResponse(
        secret=str(outcome.secret),
        contributing_indices=list(outcome.contributing_indices),
        votes=outcome.votes,
        subsets_tried=outcome.subsets_tried,
        subsets_skipped=outcome.subsets_skipped,
        skipped=skipped,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/reconstruct")
async def reconstruct(req: ReconstructRequest) -> ReconstructResponse:
    """Reconstruct the majority secret from an index -> value mapping."""
    fld = _field_for(req.modulus)
    if req.threshold < 1:
        _audit.record_failure(req.threshold, ValueError("threshold must be positive"))
        raise HTTPException(400, f"Invalid threshold: k={req.threshold}")
    try:
        # A list keeps colliding indices ("1", "01") as separate shares
        shares = [(int(idx), fld.reduce(int(value))) for idx, value in req.shares.items()]
    except ValueError as exc:
        _audit.record_failure(req.threshold, exc)
        raise HTTPException(400, f"Invalid share: {exc}") from exc
    return _run(shares, req.threshold, fld, [])


@app.post("/reconstruct_record")
async def reconstruct_record(record: Dict[str, Any]) -> ReconstructResponse:
    """Decode a test-case record and reconstruct its secret."""
    try:
        parsed = parse_record(record)
    except InvalidRecordError as exc:
        _audit.record_failure(0, exc)
        raise HTTPException(400, str(exc)) from exc
    return _run(parsed.shares, parsed.k, DEFAULT_FIELD, parsed.skipped)


@app.get("/audit")
async def audit():
    """Return the full audit log."""
    return AuditResponse(entries=_audit.entries(), chain_valid=_audit.verify_chain())


@app.get("/health")
async def health():
    return {"status": "ok", "modulus_bits": DEFAULT_FIELD.modulus.bit_length()}
