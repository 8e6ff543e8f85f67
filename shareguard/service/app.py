"""ShareGuard FastAPI application.

Endpoints:
- POST /detect  – structured request: threshold + list of encoded shares
- POST /upload  – the flat share document (see ``shareguard.service.codec``)
- GET  /audit   – hash-chained log of every detection request
- GET  /health

Both detection endpoints decode the share values, run the majority-vote
fault detector under the configured budget and return the secret, the
inlier / wrong share ids and the decoded points.  Every big integer is
sent as a decimal string.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from shareguard.budget import Budget
from shareguard.config import LOG_LEVEL
from shareguard.detector.faults import detect
from shareguard.detector.models import Share
from shareguard.errors import (
    InvalidArguments,
    NoConsistentSecret,
    ResourceExceeded,
    Timeout,
)
from shareguard.service.audit import AuditLog, DetectionEvent
from shareguard.service.codec import decode_share, encode_decimal, parse_document

logging.basicConfig(level=LOG_LEVEL)
log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(title="ShareGuard")

# ---------------------------------------------------------------------------
# In-memory state
# ---------------------------------------------------------------------------

_budget = Budget()
_audit = AuditLog()

# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class EncodedShare(BaseModel):
    id: str
    base: Union[int, str] = 10
    value: str


class DetectRequest(BaseModel):
    k: int
    shares: List[EncodedShare]
    # Optional per-request limits; they can only tighten the server budget
    max_combinations: Optional[int] = None
    deadline_seconds: Optional[float] = None


class PointOut(BaseModel):
    id: str
    x: str
    y: str


class DetectResponse(BaseModel):
    secret: str
    total_shares: int
    min_shares: int
    wrong_shares: List[str]
    inlier_shares: List[str]
    combinations_examined: int
    points: List[PointOut]


class AuditResponse(BaseModel):
    entries: List[Dict[str, Any]]
    chain_valid: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_detection(shares: List[Share], k: int, budget: Budget) -> DetectResponse:
    """Run ``detect`` and map its failures onto HTTP errors."""
    try:
        result = detect(shares, k, budget)
    except InvalidArguments as exc:
        _audit.record(DetectionEvent("reject", reason=str(exc)))
        raise HTTPException(400, str(exc))
    except NoConsistentSecret as exc:
        _audit.record(DetectionEvent("reject", shares=len(shares), k=k, reason=str(exc)))
        raise HTTPException(422, str(exc))
    except Timeout as exc:
        _audit.record(DetectionEvent("budget", shares=len(shares), k=k, reason=str(exc)))
        raise HTTPException(504, str(exc))
    except ResourceExceeded as exc:
        _audit.record(DetectionEvent("budget", shares=len(shares), k=k, reason=str(exc)))
        raise HTTPException(413, str(exc))

    secret = encode_decimal(result.secret)
    _audit.record(
        DetectionEvent(
            "detect",
            shares=len(shares),
            k=k,
            secret=secret,
            wrong_shares=result.wrong_ids,
            combinations_examined=result.combinations_examined,
        )
    )
    return DetectResponse(
        secret=secret,
        total_shares=len(shares),
        min_shares=k,
        wrong_shares=result.wrong_ids,
        inlier_shares=result.inlier_ids,
        combinations_examined=result.combinations_examined,
        points=[
            PointOut(id=s.id, x=encode_decimal(s.x), y=encode_decimal(s.y)) for s in shares
        ],
    )


def _reject(exc: Exception) -> HTTPException:
    log.warning("rejected request: %s", exc)
    _audit.record(DetectionEvent("reject", reason=str(exc)))
    return HTTPException(400, str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/detect", response_model=DetectResponse)
async def detect_shares(req: DetectRequest):
    """Classify structured shares and recover the secret."""
    try:
        shares = [decode_share(s.id, s.base, s.value) for s in req.shares]
        budget = _budget.tightened(req.max_combinations, req.deadline_seconds)
    except InvalidArguments as exc:
        raise _reject(exc)
    return _run_detection(shares, req.k, budget)


@app.post("/upload", response_model=DetectResponse)
async def upload(doc: Dict[str, Any]):
    """Classify a flat share document (``{"keys": {...}, "<id>": {...}}``)."""
    try:
        shares, _n, k = parse_document(doc)
    except InvalidArguments as exc:
        raise _reject(exc)
    return _run_detection(shares, k, _budget)


@app.get("/audit", response_model=AuditResponse)
async def audit():
    return AuditResponse(entries=_audit.entries(), chain_valid=_audit.verify_chain())


@app.get("/health")
async def health():
    return {"status": "ok"}
