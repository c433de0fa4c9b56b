"""
Core metrics collection for the RSA AI Framework using Prometheus
"""
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, Info, generate_latest

from core.config import settings
from core.logging import get_logger

# Create a global registry for the application
REGISTRY = CollectorRegistry()

# Application info
app_info = Info("aiframework_app", "RSA AI Framework application information", registry=REGISTRY)

# Request metrics
request_count = Counter(
    "aiframework_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

request_duration = Histogram(
    "aiframework_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=REGISTRY,
)

# Scoring metrics
classifications_total = Counter(
    "aiframework_classifications_total",
    "Total use case classifications",
    ["quadrant", "overridden"],
    registry=REGISTRY,
)

size_estimates_total = Counter(
    "aiframework_size_estimates_total",
    "Total T-shirt size estimates",
    ["size"],
    registry=REGISTRY,
)

phase_derivations_total = Counter(
    "aiframework_phase_derivations_total",
    "Total TOM phase derivations",
    ["matched_by"],
    registry=REGISTRY,
)

# Error metrics
error_count = Counter(
    "aiframework_errors_total",
    "Total number of errors",
    ["error_type", "domain"],
    registry=REGISTRY,
)

config_reload_total = Counter(
    "aiframework_config_reload_total",
    "Total configuration loads and saves",
    ["config_type", "status"],
    registry=REGISTRY,
)

config_reload_duration = Histogram(
    "aiframework_config_reload_duration_seconds",
    "Configuration load duration",
    ["config_type"],
    buckets=(0.001, 0.01, 0.05, 0.1, 0.5, 1.0),
    registry=REGISTRY,
)


class MetricsCollector:
    """Helper class for collecting metrics"""

    def __init__(self):
        self.logger = get_logger("metrics")

        app_info.info({"version": settings.app_version, "environment": settings.environment})

    def track_request(self, method: str, endpoint: str, status: int, duration: float):
        """Track HTTP request metrics"""
        request_count.labels(method=method, endpoint=endpoint, status=str(status)).inc()
        request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def track_classification(self, quadrant: str, overridden: bool = False):
        """Track a quadrant classification"""
        classifications_total.labels(quadrant=quadrant, overridden=str(overridden).lower()).inc()

    def track_size_estimate(self, size: str | None):
        """Track a T-shirt size estimate (unsized estimates are counted too)"""
        size_estimates_total.labels(size=size or "unsized").inc()

    def track_phase_derivation(self, matched_by: str):
        """Track a TOM phase derivation"""
        phase_derivations_total.labels(matched_by=matched_by).inc()

    def track_error(self, error_type: str, domain: str):
        """Track errors"""
        error_count.labels(error_type=error_type, domain=domain).inc()

    def track_config_reload(self, config_type: str, duration: float, status: str = "success"):
        """Track configuration reload metrics"""
        config_reload_total.labels(config_type=config_type, status=status).inc()
        config_reload_duration.labels(config_type=config_type).observe(duration)

    def get_metrics(self) -> bytes:
        """Get current metrics in Prometheus format"""
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return metrics


def get_metrics_response() -> tuple[bytes, str]:
    """Get metrics response for Prometheus endpoint"""
    return metrics.get_metrics(), CONTENT_TYPE_LATEST
