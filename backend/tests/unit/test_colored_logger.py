"""Unit tests for the colored ledger logger."""

import logging

import pytest

from patent_auth.infrastructure.logging.colored_logger import LedgerLogger, LedgerStage


def test_step_rejected_logs_warning(caplog):
    log = LedgerLogger("LedgerService")
    with caplog.at_level(logging.INFO, logger="LedgerService"):
        log.step_rejected(LedgerStage.PAYMENT, "Insufficient credits", required=500, available=100)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "[PAYMENT]" in record.getMessage()
    assert "required=500 | available=100" in record.getMessage()


def test_timed_step_logs_error_and_reraises(caplog):
    log = LedgerLogger("CertificateDeliveryService")
    with caplog.at_level(logging.INFO, logger="CertificateDeliveryService"):
        with pytest.raises(RuntimeError):
            with log.timed_step(LedgerStage.EXPORT, "Exporting certificate"):
                raise RuntimeError("boom")

    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]
    assert "RuntimeError: boom" in caplog.records[-1].getMessage()


def test_timed_step_logs_completion(caplog):
    log = LedgerLogger("CertificateDeliveryService")
    with caplog.at_level(logging.INFO, logger="CertificateDeliveryService"):
        with log.timed_step(LedgerStage.EXPORT, "Exporting certificate", preview=True):
            pass

    assert "✓ Exporting certificate" in caplog.records[-1].getMessage()
    assert "preview=True" in caplog.records[-1].getMessage()
