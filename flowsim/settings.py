"""Simulation runtime settings: tunable parameters for workflow execution.

All values read from environment variables with defaults matching the
behaviour of the interactive builder. Import from here instead of hardcoding.

Infrastructure config (API host, CORS, log directory) stays in flowsim/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


# =====================================================================
# Simulated execution
# =====================================================================

# Per-node simulated work duration, uniformly drawn (seconds)
SIM_MIN_DELAY_SECS = _float("SIM_MIN_DELAY_SECS", 1.0)
SIM_MAX_DELAY_SECS = _float("SIM_MAX_DELAY_SECS", 2.0)

# Probability that a simulated node step succeeds
SIM_SUCCESS_RATE = _float("SIM_SUCCESS_RATE", 0.9)


# =====================================================================
# Event stream (SSE)
# =====================================================================

# Seconds between keepalive comments on idle SSE connections
SSE_KEEPALIVE_SECS = _float("SSE_KEEPALIVE_SECS", 30.0)

# Max queued events per subscriber before new events are dropped
SSE_SUBSCRIBER_QUEUE_SIZE = _int("SSE_SUBSCRIBER_QUEUE_SIZE", 1000)
