"""Tests for the audit log."""

from quorumsecret.coordinator.audit import GENESIS_HASH, AuditLog
from quorumsecret.crypto import consensus
from quorumsecret.crypto.errors import InsufficientSharesError
from quorumsecret.crypto.field import PrimeField


def test_append_and_verify():
    log = AuditLog()
    log.append("reconstruct_ok", {"secret": "1"})
    log.append("reconstruct_failed", {"error": "NoConsensusError"})
    assert len(log.entries()) == 2
    assert log.verify_chain()


def test_empty_chain():
    log = AuditLog()
    assert log.verify_chain()
    assert log.head == GENESIS_HASH


def test_chain_links():
    log = AuditLog()
    e1 = log.append("a", {})
    e2 = log.append("b", {})
    assert e1.prev_hash == GENESIS_HASH
    assert e2.prev_hash == e1.entry_hash


def test_tampering_detected():
    log = AuditLog()
    log.append("reconstruct_ok", {"secret": "11"})
    log.append("reconstruct_ok", {"secret": "12"})
    log._entries[0].data["secret"] = "99"
    assert not log.verify_chain()


def test_record_success_and_failure():
    log = AuditLog()
    outcome = consensus.reconstruct({1: 15, 2: 19, 3: 50}, 2, PrimeField(97))
    ok = log.record_success(2, outcome)
    assert ok.event == "reconstruct_ok"
    assert ok.data["secret"] == str(outcome.secret)
    assert ok.data["contributing_indices"] == list(outcome.contributing_indices)

    bad = log.record_failure(2, InsufficientSharesError(1, 2))
    assert bad.event == "reconstruct_failed"
    assert bad.data["error"] == "InsufficientSharesError"
    assert log.verify_chain()
