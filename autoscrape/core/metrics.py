"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, start_http_server

# Run Metrics
automation_runs_total = Counter(
    "automation_runs_total", "Total automation runs finished", ["status"]
)

automation_run_duration_seconds = Histogram(
    "automation_run_duration_seconds", "Automation run duration in seconds"
)

# Step Metrics
steps_executed_total = Counter(
    "steps_executed_total", "Total declarative steps executed", ["kind", "status"]
)

# Extraction Metrics
pages_scraped_total = Counter("pages_scraped_total", "Total result pages extracted")

rows_extracted_total = Counter("rows_extracted_total", "Total rows extracted from result pages")

pagination_stops_total = Counter(
    "pagination_stops_total", "Pagination loops terminated", ["reason"]
)

# Sink Metrics
sink_deliveries_total = Counter(
    "sink_deliveries_total", "Sink delivery outcomes", ["sink", "status"]
)


def start_metrics_server(port: int) -> None:
    """Expose the default registry over HTTP for the lifetime of the process."""
    start_http_server(port)
