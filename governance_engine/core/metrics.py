"""
Prometheus metrics, exposed on /metrics by main.py.
"""
from prometheus_client import Counter, Histogram

ASSESSMENT_RUNS = Counter(
    "governance_assessment_runs_total",
    "Assessment runs by template and outcome",
    ["template", "outcome"],
)

DOCUMENT_GENERATIONS = Counter(
    "governance_document_generations_total",
    "Document generations by type and outcome",
    ["document_type", "outcome"],
)

GATEWAY_CALLS = Counter(
    "governance_llm_gateway_calls_total",
    "LLM gateway calls by outcome",
    ["outcome"],
)

GATEWAY_LATENCY = Histogram(
    "governance_llm_gateway_latency_seconds",
    "LLM gateway round-trip time",
    buckets=(0.5, 1, 2, 5, 10, 20, 30, 60, 120),
)
