"""날짜/시간 유틸리티 테스트"""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.utils.datetime import UTC, days_since, ensure_utc, parse_iso


class TestParseIso:
    """ISO 8601 파싱 테스트"""

    def test_seven_digit_fraction_with_z_suffix(self):
        """소수점 7자리 + Z 접미사"""
        parsed = parse_iso("2024-03-01T12:34:56.1234567Z")

        assert parsed == datetime(2024, 3, 1, 12, 34, 56, 123456, tzinfo=UTC)

    def test_offset_is_converted_to_utc(self):
        """오프셋 시간은 UTC로 변환"""
        parsed = parse_iso("2024-03-01T09:00:00+09:00")

        assert parsed == datetime(2024, 3, 1, 0, 0, tzinfo=UTC)

    def test_short_fraction_is_padded(self):
        """짧은 소수점은 6자리로 보정"""
        parsed = parse_iso("2024-03-01T00:00:00.5Z")

        assert parsed is not None
        assert parsed.microsecond == 500000

    def test_invalid_values_return_none(self):
        """파싱할 수 없는 값은 None"""
        assert parse_iso(None) is None
        assert parse_iso("") is None
        assert parse_iso("not a date") is None

    @pytest.mark.parametrize(
        "value", [1717200000, 1717200000.5, True, ["2024-01-01"], {"t": 1}]
    )
    def test_non_string_values_return_none(self, value):
        """문자열이 아닌 값은 None"""
        assert parse_iso(value) is None

    def test_naive_datetime_is_treated_as_utc(self):
        """naive datetime은 UTC로 간주"""
        parsed = parse_iso(datetime(2024, 1, 1))

        assert parsed is not None
        assert parsed.tzinfo == UTC


class TestDaysSince:
    """경과 일수 테스트"""

    def test_days_since_reference(self):
        now = datetime(2024, 1, 11, tzinfo=UTC)

        assert days_since(datetime(2024, 1, 1, tzinfo=UTC), now) == 10

    def test_mixed_timezones(self):
        now = datetime(2024, 1, 2, tzinfo=UTC)
        kst = timezone(timedelta(hours=9))

        assert days_since(datetime(2024, 1, 2, 9, tzinfo=kst), now) == 0

    def test_ensure_utc_keeps_aware_instant(self):
        kst = timezone(timedelta(hours=9))
        converted = ensure_utc(datetime(2024, 1, 1, 9, tzinfo=kst))

        assert converted == datetime(2024, 1, 1, tzinfo=UTC)
        assert converted.tzinfo == UTC
