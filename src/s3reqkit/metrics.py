"""Prometheus metrics definitions for s3reqkit.

All metrics use the ``s3reqkit_`` prefix.  Nothing is registered until
``init_metrics()`` is called, so importing the library never touches the
global ``prometheus_client`` registry; until then the ``record_*`` helpers
are no-ops.
"""

from __future__ import annotations

from prometheus_client import Counter

# Flag indicating whether metrics have been initialised via init_metrics().
_initialized: bool = False

# Bucket-name checks (labels: result -- "ok" or the failed rule name)
bucket_name_checks_total: Counter | None = None

# Part plans (labels: outcome -- "planned", "streaming", or the error code)
part_plans_total: Counter | None = None


def init_metrics() -> None:
    """Create and register all Prometheus metrics.

    Safe to call more than once; only the first call registers collectors.
    """
    global _initialized
    global bucket_name_checks_total, part_plans_total

    if _initialized:
        return

    bucket_name_checks_total = Counter(
        "s3reqkit_bucket_name_checks_total",
        "Bucket-name checks by result",
        ["result"],
    )

    part_plans_total = Counter(
        "s3reqkit_part_plans_total",
        "Multipart part plans by outcome",
        ["outcome"],
    )

    _initialized = True


def record_bucket_name_check(result: str) -> None:
    if bucket_name_checks_total is not None:
        bucket_name_checks_total.labels(result=result).inc()


def record_part_plan(outcome: str) -> None:
    if part_plans_total is not None:
        part_plans_total.labels(outcome=outcome).inc()
