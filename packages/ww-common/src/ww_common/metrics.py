"""
Prometheus metrics helpers for Whisperwire.

Provides the shared metric definitions exposed by the compliance service:
evaluation counters and latency, alerts by rule and severity, per-rule
failures, rule-library pattern errors, and the active-call gauge.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

evaluations_total = Counter(
    "ww_evaluations_total",
    "Total transcript evaluations performed",
)
evaluation_duration_seconds = Histogram(
    "ww_evaluation_duration_seconds",
    "Wall time of one transcript evaluation in seconds",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)
alerts_total = Counter(
    "ww_alerts_total",
    "Compliance alerts raised",
    ["rule_id", "severity"],
)
rule_errors_total = Counter(
    "ww_rule_errors_total",
    "Rule evaluations that raised and were skipped",
    ["rule_id"],
)
pattern_errors_total = Counter(
    "ww_pattern_errors_total",
    "Regex patterns rejected at rule-library load",
)
active_calls = Gauge(
    "ww_active_calls",
    "Call sessions currently open",
)
