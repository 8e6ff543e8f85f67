"""Tests for the audit log."""

from shareguard.service.audit import GENESIS_HASH, AuditLog, DetectionEvent


def test_append_and_verify():
    log = AuditLog()
    log.append("detect", {"secret": "1", "wrong_shares": ["4"]})
    log.append("reject", {"reason": "bad base"})
    assert len(log.entries()) == 2
    assert log.verify_chain()


def test_empty_chain():
    log = AuditLog()
    assert log.verify_chain()
    assert len(log) == 0


def test_chain_links():
    log = AuditLog()
    e1 = log.append("a", {})
    e2 = log.append("b", {})
    assert e1.prev_hash == GENESIS_HASH
    assert e2.prev_hash == e1.entry_hash


def test_tampering_detected():
    log = AuditLog()
    log.append("detect", {"secret": "1"})
    log.append("detect", {"secret": "2"})
    log._entries[0].data["secret"] = "999"
    assert not log.verify_chain()


def test_record_detection_event():
    log = AuditLog()
    entry = log.record(
        DetectionEvent(
            "detect", shares=4, k=3, secret="1", wrong_shares=["4"], combinations_examined=4
        )
    )
    assert entry.event == "detect"
    assert entry.data == {
        "shares": 4,
        "k": 3,
        "secret": "1",
        "wrong_shares": ["4"],
        "combinations_examined": 4,
    }
    rejected = log.record(DetectionEvent("reject", reason="bad base"))
    assert rejected.data == {"reason": "bad base"}
    assert log.verify_chain()
