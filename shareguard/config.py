"""Global configuration for ShareGuard."""

import os

# ---------- Resource budget for combination enumeration ----------
# C(n, k) grows combinatorially, so every detection run is bounded by a
# combination cap and a wall-clock deadline.  Env vars override the defaults.
DEFAULT_MAX_COMBINATIONS = int(os.environ.get("SHAREGUARD_MAX_COMBINATIONS", "200000"))
DEFAULT_DEADLINE_SECONDS = float(os.environ.get("SHAREGUARD_DEADLINE_SECONDS", "10.0"))

# ---------- Parallel tally ----------
DEFAULT_WORKERS = int(os.environ.get("SHAREGUARD_WORKERS", "1"))
PARALLEL_BATCH_SIZE = 512   # combinations per worker batch

# ---------- Share value decoding ----------
MIN_BASE = 2
MAX_BASE = 36

# ---------- Service ----------
LOG_LEVEL = os.environ.get("SHAREGUARD_LOG_LEVEL", "INFO").upper()
SERVICE_URL = os.environ.get("SHAREGUARD_URL", "http://localhost:8000")
