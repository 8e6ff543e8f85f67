#!/usr/bin/env python3
"""ShareGuard end-to-end demo.

Usage (with the service running, e.g. ``uvicorn shareguard.service.app:app``):
    python -m shareguard.demo.run_demo

The script:
1. Generates a secret and integer Shamir shares.
2. Corrupts two of them.
3. Uploads the shares (as a base-encoded document) to the service.
4. Prints the recovered secret and the wrong shares.
5. Sends an oversized request to show budget enforcement.
6. Dumps the audit log.
"""

from __future__ import annotations

import os
import secrets

import httpx

from shareguard.config import SERVICE_URL
from shareguard.crypto import shamir

SERVICE = os.environ.get("SHAREGUARD_DEMO_URL", SERVICE_URL)

N, K = 7, 3
BASES = [2, 8, 10, 16, 36]


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def to_base(value: int, base: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, r = divmod(value, base)
        out.append(digits[r])
    return "".join(reversed(out))


def main() -> None:
    client = httpx.Client(timeout=15.0)

    # ---- 1. Generate secret and shares ----
    banner(f"1) Generate secret and {N} shares (threshold {K})")
    secret = secrets.randbits(128)
    shares = shamir.share(secret, N, K)
    print(f"   secret = {secret}")

    # ---- 2. Corrupt two shares ----
    banner("2) Corrupt shares 3 and 6")
    corrupted = {3, 6}
    shares = [(x, y + 1 if x in corrupted else y) for x, y in shares]

    # ---- 3. Upload ----
    banner("3) Upload share document")
    doc = {"keys": {"n": N, "k": K}}
    for i, (x, y) in enumerate(shares):
        base = BASES[i % len(BASES)]
        doc[str(x)] = {"base": str(base), "value": to_base(y, base)}
    resp = client.post(f"{SERVICE}/upload", json=doc)
    resp.raise_for_status()
    result = resp.json()

    # ---- 4. Result ----
    banner("4) Classification")
    print(f"   recovered secret = {result['secret']}")
    print(f"   matches          = {int(result['secret']) == secret}")
    print(f"   inliers          = {result['inlier_shares']}")
    print(f"   wrong            = {result['wrong_shares']}")
    print(f"   combinations     = {result['combinations_examined']}")

    # ---- 5. Budget enforcement ----
    banner("5) Oversized request (C(30,15) combinations, budget 100)")
    big = shamir.share(secret, 30, 15)
    resp = client.post(
        f"{SERVICE}/detect",
        json={
            "k": 15,
            "shares": [{"id": str(x), "base": 10, "value": str(y)} for x, y in big],
            "max_combinations": 100,
        },
    )
    print(f"   status = {resp.status_code}")
    print(f"   reason = {resp.json().get('detail', resp.text)}")

    # ---- 6. Audit log ----
    banner("6) Audit log")
    resp = client.get(f"{SERVICE}/audit")
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
