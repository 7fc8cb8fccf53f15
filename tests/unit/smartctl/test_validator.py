# tests/unit/smartctl/test_validator.py - v1
"""Tests for smartctl/validator.py - exit status bits and error messages."""

from __future__ import annotations

import itertools
import logging

import pytest

from smartprobe.core.document import normalize
from smartprobe.core.exceptions import ReadingRejectedError
from smartprobe.smartctl.validator import (
    EXIT_STATUS_BITS,
    exit_status_ok,
    fatal_bits,
    first_error_message,
    set_bits,
    validate_reading,
)
from tests.conftest import smartctl_output

ADVISORY_BITS = [2, 3, 4, 5, 6, 7]


class TestExitStatusTable:
    def test_covers_bits_zero_to_seven(self):
        assert [b.bit for b in EXIT_STATUS_BITS] == list(range(8))

    def test_fatal_bits_are_zero_and_one(self):
        assert fatal_bits() == frozenset({0, 1})

    def test_set_bits(self):
        assert [b.bit for b in set_bits(0b1000_0101)] == [0, 2, 7]


class TestExitStatusOk:
    def test_zero_accepted(self):
        assert exit_status_ok(0) is True

    @pytest.mark.parametrize("status", [1, 2, 3])
    def test_fatal_bits_rejected(self, status):
        assert exit_status_ok(status) is False

    def test_every_advisory_combination_accepted(self):
        for n in range(1, len(ADVISORY_BITS) + 1):
            for combo in itertools.combinations(ADVISORY_BITS, n):
                status = sum(1 << bit for bit in combo)
                assert exit_status_ok(status) is True, status

    def test_fatal_wins_over_advisory(self):
        assert exit_status_ok(0b1111_1110) is False

    def test_bits_above_seven_ignored(self):
        assert exit_status_ok(1 << 8) is True

    def test_advisory_logged_as_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="smartprobe"):
            exit_status_ok(4)
        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "checksum" in caplog.records[0].getMessage()

    def test_fatal_logged_as_error(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="smartprobe"):
            exit_status_ok(2)
        assert [r.levelno for r in caplog.records] == [logging.ERROR]
        assert "low-power" in caplog.records[0].getMessage()


class TestFirstErrorMessage:
    def test_no_messages(self):
        assert first_error_message(normalize(smartctl_output())) is None

    def test_non_error_messages(self):
        doc = normalize(smartctl_output(messages=[
            {"string": "Warning: ATA error count", "severity": "warning"},
            {"string": "info", "severity": "information"},
        ]))
        assert first_error_message(doc) is None

    def test_returns_first_error(self):
        doc = normalize(smartctl_output(messages=[
            {"string": "ok", "severity": "information"},
            {"string": "boom", "severity": "error"},
            {"string": "later", "severity": "error"},
        ]))
        assert first_error_message(doc)["string"] == "boom"

    def test_error_position_does_not_matter(self):
        base = [{"string": f"m{i}", "severity": "information"} for i in range(4)]
        for pos in range(len(base) + 1):
            messages = list(base)
            messages.insert(pos, {"string": "bad", "severity": "error"})
            doc = normalize(smartctl_output(messages=messages))
            assert first_error_message(doc) is not None

    def test_malformed_messages_ignored(self):
        doc = normalize('{"smartctl": {"messages": ["error", 3, null]}}')
        assert first_error_message(doc) is None
        doc = normalize('{"smartctl": {"messages": {"severity": "error"}}}')
        assert first_error_message(doc) is None

    def test_error_logged(self, caplog):
        doc = normalize(smartctl_output(messages=[
            {"string": "Smartctl open device: /dev/sdx failed", "severity": "error"},
        ]))
        with caplog.at_level(logging.ERROR, logger="smartprobe"):
            first_error_message(doc)
        assert "/dev/sdx failed" in caplog.text


class TestValidateReading:
    def test_accepts_clean_reading(self):
        validate_reading("/dev/sda", normalize(smartctl_output(exit_status=0)))

    def test_accepts_advisory_only(self):
        validate_reading("/dev/sdc", normalize(smartctl_output(exit_status=4)))

    def test_rejects_fatal_bit(self):
        with pytest.raises(ReadingRejectedError, match="/dev/sdb") as exc_info:
            validate_reading("/dev/sdb", normalize(smartctl_output(exit_status=2)))
        assert exc_info.value.device_id == "/dev/sdb"
        assert "exit status 2" in exc_info.value.reasons[0]

    def test_rejects_error_message_with_zero_status(self):
        doc = normalize(smartctl_output(
            exit_status=0, messages=[{"string": "bad", "severity": "error"}],
        ))
        with pytest.raises(ReadingRejectedError, match="bad"):
            validate_reading("/dev/sda", doc)

    def test_both_reasons_reported(self):
        doc = normalize(smartctl_output(
            exit_status=1, messages=[{"string": "bad", "severity": "error"}],
        ))
        with pytest.raises(ReadingRejectedError) as exc_info:
            validate_reading("/dev/sda", doc)
        assert len(exc_info.value.reasons) == 2

    def test_rejects_empty_document(self):
        with pytest.raises(ReadingRejectedError, match="no smartctl exit status"):
            validate_reading("/dev/sda", normalize(""))

    @pytest.mark.parametrize("status", ["1e400", "\"1e400\""])
    def test_out_of_range_status_does_not_crash(self, status):
        doc = normalize(f'{{"smartctl": {{"exit_status": {status}}}}}')
        # No integer form: read as the default 0, so the reading is accepted.
        validate_reading("/dev/sdx", doc)
