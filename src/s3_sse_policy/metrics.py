"""Prometheus metrics for the S3 SSE policy library."""

from prometheus_client import Counter, Histogram

# Secret resolution metrics
secret_lookups_total = Counter(
    "s3_sse_policy_secret_lookups_total",
    "Total number of layered secret lookups by the level that supplied the value",
    ["source"],
)

secret_lookup_failures_total = Counter(
    "s3_sse_policy_secret_lookup_failures_total",
    "Total number of credential store failures swallowed by the lenient key lookup",
    ["key"],
)

# Policy resolution metrics
encryption_resolutions_total = Counter(
    "s3_sse_policy_encryption_resolutions_total",
    "Total number of encryption method resolutions",
    ["method", "result"],
)

# Copy metrics
copy_parameter_selections_total = Counter(
    "s3_sse_policy_copy_parameter_selections_total",
    "Total number of copy encryption parameter selections",
    ["destination_method", "propagated"],
)

copy_operations_total = Counter(
    "s3_sse_policy_copy_operations_total",
    "Total number of copy and rename operations",
    ["operation", "result"],
)

copy_duration_seconds = Histogram(
    "s3_sse_policy_copy_duration_seconds",
    "Duration of copy and rename operations in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Wire format metrics
serialization_total = Counter(
    "s3_sse_policy_serialization_total",
    "Total number of encryption secrets (de)serializations",
    ["direction", "result"],
)

# S3 API metrics
s3_api_call_total = Counter(
    "s3_sse_policy_s3_api_call_total",
    "Total number of S3 API calls",
    ["operation", "result"],
)

s3_api_call_duration_seconds = Histogram(
    "s3_sse_policy_s3_api_call_duration_seconds",
    "Duration of S3 API calls in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

s3_throttle_retries_total = Counter(
    "s3_sse_policy_s3_throttle_retries_total",
    "Total number of S3 API retries caused by throttling",
    ["operation"],
)
