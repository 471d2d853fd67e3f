"""Prometheus metrics for hydrant mutations."""

from prometheus_client import Counter, Histogram

MUTATIONS = Counter(
    "hydrant_mutations_total",
    "Hydrant mutations by action and outcome",
    labelnames=["action", "outcome"],
)

MUTATION_LATENCY = Histogram(
    "hydrant_mutation_latency_seconds",
    "Latency of a hydrant mutation including its ledger write",
    labelnames=["action"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

# outcome label values
OUTCOME_SUCCESS = "success"
OUTCOME_NOT_FOUND = "not_found"
OUTCOME_ERROR = "error"
