"""Prometheus metrics for the Notice store.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Store operation metrics
# ---------------------------------------------------------------------------

NOTICE_OPERATIONS = Counter(
    "notice_operations_total",
    "Total number of notice store operations",
    ["operation", "status"],  # status: success or an error kind
)

NOTICE_RECORDS = Gauge(
    "notice_records",
    "Number of notices currently stored",
)
