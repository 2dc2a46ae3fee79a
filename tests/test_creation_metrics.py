"""
Creation metrics tests - log level, structured fields and Prometheus samples.
"""

import logging

from prometheus_client import REGISTRY

from catalog.core.metrics import CreationMetrics, log_creation_metrics


def make_metrics(**overrides) -> CreationMetrics:
    values = {
        "operation_id": "AB12CD34",
        "product_name": "Wireless Headphones",
        "sku": "ELEC-WH-001",
        "category": "Electronics",
        "validation_duration_ms": 1.5,
        "persistence_duration_ms": 4.25,
        "total_duration_ms": 7.0,
        "success": True,
    }
    values.update(overrides)
    return CreationMetrics(**values)


def creations(category: str, outcome: str) -> float:
    return REGISTRY.get_sample_value(
        "product_creation_total", {"category": category, "outcome": outcome}
    ) or 0.0


def test_summary_mentions_durations():
    summary = make_metrics().summary()
    assert summary.startswith("Product creation succeeded.")
    assert "SKU: ELEC-WH-001" in summary
    assert "DatabaseSaveDuration: 4.25ms" in summary
    assert "Reason" not in summary


def test_failure_summary_has_reason():
    summary = make_metrics(success=False, error_reason="boom").summary()
    assert summary.startswith("Product creation failed.")
    assert summary.endswith("Reason: boom")


def test_success_logged_at_info_with_fields(caplog):
    logger = logging.getLogger("catalog.tests.metrics")
    caplog.set_level(logging.INFO, logger="catalog.tests.metrics")

    log_creation_metrics(logger, make_metrics())

    (record,) = caplog.records
    assert record.levelno == logging.INFO
    assert record.operation_id == "AB12CD34"
    assert record.validation_duration_ms == 1.5
    assert record.success is True


def test_failure_logged_at_error(caplog):
    logger = logging.getLogger("catalog.tests.metrics")
    caplog.set_level(logging.INFO, logger="catalog.tests.metrics")

    log_creation_metrics(logger, make_metrics(success=False, error_reason="duplicate"))

    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.error_reason == "duplicate"


def test_prometheus_counter_by_outcome():
    before_ok = creations("Books", "success")
    before_failed = creations("Books", "failure")

    log_creation_metrics(logging.getLogger("catalog.tests.metrics"), make_metrics(category="Books"))
    log_creation_metrics(
        logging.getLogger("catalog.tests.metrics"),
        make_metrics(category="Books", success=False, error_reason="x"),
    )

    assert creations("Books", "success") == before_ok + 1
    assert creations("Books", "failure") == before_failed + 1
