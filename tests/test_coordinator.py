"""Integration tests for the coordinator using an in-process TestClient."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from quorumsecret.config import PRIME
from quorumsecret.coordinator import app as coord_module
from quorumsecret.crypto import shamir
from quorumsecret.crypto.field import reduce


@pytest.fixture()
def client():
    """Fresh coordinator state per test."""
    coord_module._audit = coord_module.AuditLog()
    return TestClient(coord_module.app)


def _payload(shares, threshold, **extra):
    body = {"threshold": threshold, "shares": {str(x): str(y) for x, y in shares}}
    body.update(extra)
    return body


def test_reconstruct_with_corrupted_share(client):
    secret = 2024
    shares = shamir.share(secret, 4, 2)
    x, y = shares[2]
    shares[2] = (x, reduce(y + 5))

    resp = client.post("/reconstruct", json=_payload(shares, 2))
    assert resp.status_code == 200
    body = resp.json()
    assert int(body["secret"]) == secret
    assert body["contributing_indices"] == [1, 2, 4]
    assert body["votes"] == 3
    assert body["subsets_tried"] == 6


def test_large_values_as_strings(client):
    shares = shamir.share(PRIME - 2, 3, 3)
    resp = client.post("/reconstruct", json=_payload(shares, 3))
    assert resp.status_code == 200
    assert resp.json()["secret"] == str(PRIME - 2)


def test_custom_modulus(client):
    # f(x) = 11 + 4x over F_97
    resp = client.post(
        "/reconstruct",
        json={"threshold": 2, "shares": {"1": 15, "2": 19, "3": 23}, "modulus": 97},
    )
    assert resp.status_code == 200
    assert resp.json()["secret"] == "11"


def test_insufficient_shares(client):
    shares = shamir.share(5, 3, 3)
    resp = client.post("/reconstruct", json=_payload(shares[:2], 3))
    assert resp.status_code == 422
    assert "Insufficient" in resp.json()["detail"]


def test_invalid_threshold(client):
    resp = client.post("/reconstruct", json={"threshold": 0, "shares": {"1": 1}})
    assert resp.status_code == 400


def test_invalid_share_value(client):
    resp = client.post("/reconstruct", json={"threshold": 1, "shares": {"1": "abc"}})
    assert resp.status_code == 400


def test_invalid_modulus(client):
    resp = client.post(
        "/reconstruct", json={"threshold": 1, "shares": {"1": 1}, "modulus": 1}
    )
    assert resp.status_code == 400


def test_reconstruct_record(client):
    # f(x) = 3 + 2x, share 4 corrupted
    record = {
        "keys": {"n": 4, "k": 2},
        "1": {"base": "10", "value": "5"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "16", "value": "9"},
        "4": {"base": "10", "value": "1000"},
        "5": {"base": "8", "value": "9"},
    }
    resp = client.post("/reconstruct_record", json=record)
    assert resp.status_code == 200
    body = resp.json()
    assert body["secret"] == "3"
    assert body["contributing_indices"] == [1, 2, 3]
    assert body["skipped"] == ["5"]


def test_reconstruct_record_invalid(client):
    resp = client.post("/reconstruct_record", json={"keys": {"n": 1, "k": 2}})
    assert resp.status_code == 400


def test_reconstruct_record_insufficient(client):
    record = {"keys": {"n": 3, "k": 2}, "1": {"base": "10", "value": "5"}}
    resp = client.post("/reconstruct_record", json=record)
    assert resp.status_code == 422


def test_audit_trail(client):
    shares = shamir.share(77, 3, 2)
    client.post("/reconstruct", json=_payload(shares, 2))
    client.post("/reconstruct", json=_payload(shares[:1], 2))

    resp = client.get("/audit")
    assert resp.status_code == 200
    audit = resp.json()
    assert audit["chain_valid"] is True
    assert [e["event"] for e in audit["entries"]] == ["reconstruct_ok", "reconstruct_failed"]
    assert audit["entries"][0]["data"]["secret"] == "77"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_colliding_indices_kept_apart(client):
    # "1" and "01" are both index 1; the pair is singular and excluded
    resp = client.post(
        "/reconstruct",
        json={"threshold": 2, "modulus": 97, "shares": {"1": 15, "01": 40, "2": 19}},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["secret"] == "11"
    assert body["subsets_tried"] == 3
    assert body["subsets_skipped"] == 1
