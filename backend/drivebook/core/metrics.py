"""Prometheus counters and histograms for slot computation and travel lookups."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Dedicated registry so importing this package never touches the global default.
REGISTRY = CollectorRegistry()

# Travel estimates by where the answer came from (remote provider or local fallback).
TRAVEL_LOOKUPS_TOTAL = Counter(
    "drivebook_travel_lookups_total",
    "Travel time/distance lookups by source",
    ["source"],
    registry=REGISTRY,
)

TRAVEL_PROVIDER_FALLBACKS_TOTAL = Counter(
    "drivebook_travel_provider_fallbacks_total",
    "Remote travel provider failures absorbed by the local estimator",
    ["reason"],
    registry=REGISTRY,
)

# Outcome of each slot computation: slots, no_slots, no_service_center,
# out_of_service_area, no_open_windows.
SLOT_COMPUTATIONS_TOTAL = Counter(
    "drivebook_slot_computations_total",
    "Slot availability computations by outcome",
    ["outcome"],
    registry=REGISTRY,
)

SERVICE_OPERATION_DURATION_SECONDS = Histogram(
    "drivebook_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
