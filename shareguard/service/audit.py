"""Hash-chained audit log of detection requests.

Each entry carries the SHA-256 of the previous one, so edits to recorded
outcomes (secret, wrong shares, rejections) are detectable.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

GENESIS_HASH = "0" * 64


@dataclass
class AuditEntry:
    timestamp: float
    event: str
    data: Dict[str, Any]
    prev_hash: str
    entry_hash: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "event": self.event,
            "data": self.data,
            "prev_hash": self.prev_hash,
            "entry_hash": self.entry_hash,
        }


@dataclass(frozen=True)
class DetectionEvent:
    """What one detection request did.

    ``kind`` is ``detect`` (secret recovered), ``reject`` (bad input or no
    consistent secret) or ``budget`` (cap or deadline exhausted).  The secret
    is kept as a decimal string so the entry stays JSON-serialisable.
    """

    kind: str
    shares: Optional[int] = None
    k: Optional[int] = None
    secret: Optional[str] = None
    wrong_shares: Optional[List[str]] = None
    combinations_examined: Optional[int] = None
    reason: Optional[str] = None

    def to_data(self) -> Dict[str, Any]:
        data = {
            "shares": self.shares,
            "k": self.k,
            "secret": self.secret,
            "wrong_shares": list(self.wrong_shares) if self.wrong_shares is not None else None,
            "combinations_examined": self.combinations_examined,
            "reason": self.reason,
        }
        return {key: value for key, value in data.items() if value is not None}


def _digest(timestamp: float, event: str, data: Dict[str, Any], prev_hash: str) -> str:
    payload = json.dumps(
        {"timestamp": timestamp, "event": event, "data": data, "prev_hash": prev_hash},
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode()).hexdigest()


class AuditLog:
    """Append-only hash-chained audit log."""

    def __init__(self) -> None:
        self._entries: List[AuditEntry] = []
        self._prev_hash: str = GENESIS_HASH

    def append(self, event: str, data: Dict[str, Any]) -> AuditEntry:
        ts = time.time()
        entry = AuditEntry(
            timestamp=ts,
            event=event,
            data=data,
            prev_hash=self._prev_hash,
            entry_hash=_digest(ts, event, data, self._prev_hash),
        )
        self._entries.append(entry)
        self._prev_hash = entry.entry_hash
        return entry

    def record(self, event: DetectionEvent) -> AuditEntry:
        return self.append(event.kind, event.to_data())

    def entries(self) -> List[Dict[str, Any]]:
        return [e.as_dict() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

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
