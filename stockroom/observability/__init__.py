"""Observability: structured logging and metrics.

Uses structlog for logging, Prometheus for metrics and OpenTelemetry
for optional request tracing.
"""
