"""
Product creation metrics - one immutable record per create attempt.
Emitted twice: as a structured log event (INFO on success, ERROR on failure)
and as Prometheus samples scraped from /metrics.
"""

import logging
from dataclasses import asdict, dataclass

from prometheus_client import Counter, Histogram

PRODUCT_CREATIONS = Counter(
    "product_creation_total",
    "Product create attempts by category and outcome",
    ["category", "outcome"],
)
PRODUCT_CREATION_STAGE_SECONDS = Histogram(
    "product_creation_stage_seconds",
    "Time spent per product creation stage",
    ["stage"],
)


@dataclass(frozen=True)
class CreationMetrics:
    operation_id: str
    product_name: str
    sku: str
    category: str
    validation_duration_ms: float
    persistence_duration_ms: float
    total_duration_ms: float
    success: bool
    error_reason: str | None = None

    def summary(self) -> str:
        status = "succeeded" if self.success else "failed"
        reason = f" Reason: {self.error_reason}" if self.error_reason else ""
        return (
            f"Product creation {status}. Name: {self.product_name}, SKU: {self.sku}, "
            f"Category: {self.category}, ValidationDuration: {self.validation_duration_ms:.2f}ms, "
            f"DatabaseSaveDuration: {self.persistence_duration_ms:.2f}ms, "
            f"TotalDuration: {self.total_duration_ms:.2f}ms{reason}"
        )


def log_creation_metrics(logger: logging.Logger | logging.LoggerAdapter, metrics: CreationMetrics) -> None:
    """Emit the metrics record as one log event and update the Prometheus series."""
    fields = {k: v for k, v in asdict(metrics).items() if v is not None}
    level = logging.INFO if metrics.success else logging.ERROR
    logger.log(level, metrics.summary(), extra=fields)

    PRODUCT_CREATIONS.labels(
        category=metrics.category,
        outcome="success" if metrics.success else "failure",
    ).inc()
    PRODUCT_CREATION_STAGE_SECONDS.labels(stage="validation").observe(metrics.validation_duration_ms / 1000)
    PRODUCT_CREATION_STAGE_SECONDS.labels(stage="persistence").observe(metrics.persistence_duration_ms / 1000)
    PRODUCT_CREATION_STAGE_SECONDS.labels(stage="total").observe(metrics.total_duration_ms / 1000)
