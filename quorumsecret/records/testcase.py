"""Test-case share records.

A record is a JSON object with a ``keys`` header and one entry per share,
keyed by the share index, whose value is written in an arbitrary base::

    {
      "keys": {"n": 4, "k": 3},
      "1": {"base": "10", "value": "4"},
      "2": {"base": "2", "value": "111"}
    }

Entries that cannot be decoded are skipped and listed in
``ShareRecord.skipped``; the header itself must be valid.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field as dc_field
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ValidationError

from quorumsecret.crypto.errors import InvalidRecordError
from quorumsecret.crypto.field import DEFAULT_FIELD, PrimeField


class RecordKeys(BaseModel):
    """Record header: declared share count *n* and threshold *k*."""

    n: int
    k: int


class EncodedShare(BaseModel):
    """One share value as written in the record."""

    base: Union[str, int]
    value: str


@dataclass
class ShareRecord:
    n: int
    k: int
    shares: Dict[int, int]
    skipped: List[str] = dc_field(default_factory=list)


def decode_value(encoded: EncodedShare, field: PrimeField | None = None) -> int:
    """Interpret ``encoded.value`` in ``encoded.base`` and reduce it into F_p."""
    field = field or DEFAULT_FIELD
    base = int(encoded.base)
    if not 2 <= base <= 36:
        raise ValueError(f"Unsupported base: {base}")
    if "_" in encoded.value or encoded.value != encoded.value.strip():
        raise ValueError(f"Malformed digits: {encoded.value!r}")
    return field.reduce(int(encoded.value, base))


def parse_record(data: Dict[str, Any], field: PrimeField | None = None) -> ShareRecord:
    """Decode a record dict into a ``ShareRecord``.

    Raises ``InvalidRecordError`` if the header is missing or violates
    0 < k <= n.
    """
    field = field or DEFAULT_FIELD
    if not isinstance(data, dict) or "keys" not in data:
        raise InvalidRecordError("Record has no 'keys' header")
    try:
        keys = RecordKeys.model_validate(data["keys"])
    except ValidationError as exc:
        raise InvalidRecordError(f"Invalid 'keys' header: {exc.errors()[0]['msg']}") from exc
    if keys.n <= 0 or keys.k <= 0 or keys.k > keys.n:
        raise InvalidRecordError(
            f"n and k must be positive, and k must not exceed n (n={keys.n}, k={keys.k})"
        )

    shares: Dict[int, int] = {}
    skipped: List[str] = []
    for name, entry in data.items():
        if name == "keys":
            continue
        try:
            index = int(name)
            shares[index] = decode_value(EncodedShare.model_validate(entry), field)
        except (ValueError, ValidationError):
            skipped.append(name)
    return ShareRecord(n=keys.n, k=keys.k, shares=shares, skipped=skipped)


def load_record(path: Union[str, Path], field: PrimeField | None = None) -> ShareRecord:
    """Read and decode the record stored at *path*."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidRecordError(f"Cannot read {path}: {exc}") from exc
    return parse_record(data, field)
