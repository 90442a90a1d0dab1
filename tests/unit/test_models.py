"""Unit tests for wire value helpers, the status envelope and the session slot."""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from connect_xmlapi.models import ApiStatus, ResultStatus, ScoType, StatusCode, SubCode
from connect_xmlapi.models.fields import (
    DATE_FORMAT,
    format_date,
    format_duration,
    parse_bool,
    parse_date,
    parse_duration,
)
from connect_xmlapi.transport.session import SessionSlot
from connect_xmlapi.utils.exceptions import TransportError, ValidationError


class TestWireEnum:
    @pytest.mark.parametrize("text", ["meeting", "MEETING", "Meeting"])
    def test_case_insensitive(self, text: str) -> None:
        assert ScoType.from_wire(text) == ScoType.MEETING

    def test_hyphens_ignored(self) -> None:
        assert StatusCode.from_wire("too-much-data") == StatusCode.TOO_MUCH_DATA
        assert StatusCode.from_wire("TooMuchData") == StatusCode.TOO_MUCH_DATA

    def test_blank_returns_default(self) -> None:
        assert SubCode.from_wire("  ", default=SubCode.NOT_SET) == SubCode.NOT_SET

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            ScoType.from_wire("spaceship")

    def test_wire_name(self) -> None:
        assert SubCode.NO_SUCH_ITEM.wire_name == "no-such-item"


class TestDates:
    def test_parse_with_offset_converts_to_utc(self) -> None:
        parsed = parse_date("2024-03-01T09:30:00.000-05:00")

        assert parsed == datetime(2024, 3, 1, 14, 30, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    @pytest.mark.parametrize(
        "text",
        ["2024-03-01T09:30:00Z", "2024-03-01T09:30:00", "2024-03-01T09:30:00.000+00:00"],
    )
    def test_accepted_layouts(self, text: str) -> None:
        assert parse_date(text) == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)

    def test_date_only(self) -> None:
        assert parse_date("2024-03-01") == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_unrecognized(self) -> None:
        with pytest.raises(ValueError):
            parse_date("01/03/2024")

    def test_format_keeps_milliseconds(self) -> None:
        value = datetime(2024, 3, 1, 9, 30, 5, 123456, tzinfo=timezone.utc)

        assert format_date(value) == "2024-03-01T09:30:05.123+00:00"

    def test_format_follows_date_format(self) -> None:
        """Encoded text is exactly the documented layout, offset included."""
        value = datetime(2024, 3, 1, 9, 30, 5, 7000, tzinfo=timezone(timedelta(hours=-5)))

        assert format_date(value) == DATE_FORMAT.format(value, 7, "-05:00")
        assert format_date(value) == "2024-03-01T09:30:05.007-05:00"

    def test_round_trip_is_millisecond_precise(self) -> None:
        """Sub-millisecond digits do not survive the wire."""
        value = datetime(2024, 3, 1, 9, 30, 5, 123456, tzinfo=timezone.utc)

        assert parse_date(format_date(value)) == value.replace(microsecond=123000)


class TestDurations:
    @pytest.mark.parametrize(
        "value,text",
        [
            (timedelta(minutes=90), "PT1H30M"),
            (timedelta(hours=2), "PT2H"),
            (timedelta(days=1, seconds=30), "P1DT30S"),
            (timedelta(0), "PT0S"),
        ],
    )
    def test_format(self, value: timedelta, text: str) -> None:
        assert format_duration(value) == text

    @pytest.mark.parametrize(
        "text,value",
        [
            ("PT1H30M", timedelta(minutes=90)),
            ("PT0.5S", timedelta(milliseconds=500)),
            ("90", timedelta(minutes=90)),
            ("-PT5M", timedelta(minutes=-5)),
        ],
    )
    def test_parse(self, text: str, value: timedelta) -> None:
        assert parse_duration(text) == value

    @pytest.mark.parametrize("text", ["P", "PT", "1h", ""])
    def test_parse_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(text)


class TestParseBool:
    @pytest.mark.parametrize("text,value", [("true", True), ("FALSE", False), ("1", True), ("0", False)])
    def test_values(self, text: str, value: bool) -> None:
        assert parse_bool(text) is value

    def test_rejects(self) -> None:
        with pytest.raises(ValueError):
            parse_bool("yes")


class TestApiStatus:
    def test_default_is_not_set(self) -> None:
        status = ApiStatus()

        assert status.code == StatusCode.NOT_SET
        assert status.sub_code == SubCode.NOT_SET
        assert not status.is_ok
        assert not status.has_payload

    def test_ok_with_error_is_not_ok(self) -> None:
        assert not ApiStatus(code=StatusCode.OK, error=TransportError("x")).is_ok

    def test_missing_argument(self) -> None:
        status = ApiStatus.missing_argument("sco-id")

        assert status.code == StatusCode.INVALID
        assert status.sub_code == SubCode.MISSING
        assert isinstance(status.error, ValidationError)

    def test_with_result_copies_envelope(self) -> None:
        status = ApiStatus(code=StatusCode.OK, session_info="breez1", exception_text="note")

        result = status.with_result([1, 2])

        assert isinstance(result, ResultStatus)
        assert result.result == [1, 2]
        assert result.session_info == "breez1"
        assert result.exception_text == "note"

    def test_summary(self) -> None:
        status = ApiStatus(code=StatusCode.INVALID, sub_code=SubCode.DUPLICATE, invalid_field="name")

        assert status.summary() == "code=invalid subcode=duplicate field=name"


class TestSessionSlot:
    def test_set_get_clear(self) -> None:
        slot = SessionSlot()
        slot.set("breez1")

        assert slot.get() == "breez1"
        assert slot.is_set

        slot.clear()
        assert slot.get() is None

    def test_empty_token_clears(self) -> None:
        slot = SessionSlot()
        slot.set("breez1")
        slot.set("")

        assert not slot.is_set

    def test_concurrent_writers_leave_one_whole_value(self) -> None:
        slot = SessionSlot()
        tokens = [f"breez{i}" for i in range(20)]
        threads = [threading.Thread(target=slot.set, args=(token,)) for token in tokens]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert slot.get() in tokens
