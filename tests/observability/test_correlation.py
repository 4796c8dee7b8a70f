"""
Test suite for correlation ID tracking.

System role: Verification of request tracing helpers
"""

import logging

from kbchat.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    def setup_method(self) -> None:
        clear_correlation_id()

    def test_set_should_keep_given_value(self) -> None:
        assert set_correlation_id("req-42") == "req-42"
        assert get_correlation_id() == "req-42"

    def test_set_without_value_should_generate_one(self) -> None:
        generated = set_correlation_id()

        assert len(generated) == 32
        assert get_correlation_id() == generated

    def test_clear_should_reset_to_empty(self) -> None:
        set_correlation_id("req-42")

        clear_correlation_id()

        assert get_correlation_id() == ""

    def test_filter_should_stamp_records(self) -> None:
        record = logging.makeLogRecord({"msg": "hello"})
        log_filter = CorrelationIdFilter()

        assert log_filter.filter(record) is True
        assert record.correlation_id == "-"

        set_correlation_id("req-7")
        log_filter.filter(record)
        assert record.correlation_id == "req-7"
