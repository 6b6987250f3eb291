import datetime as dt

import pytest

from dnslookup.errors import TimeParseError
from dnslookup.records.timefmt import format_api_time, parse_api_time


class TestParseApiTime:
    def test_empty_string_is_no_time(self):
        assert parse_api_time("") is None

    def test_utc(self):
        value = parse_api_time("2006-01-02 15:04:05 UTC")

        assert value == dt.datetime(2006, 1, 2, 15, 4, 5, tzinfo=dt.timezone.utc)
        assert value.tzname() == "UTC"

    def test_other_zone_keeps_its_name(self):
        value = parse_api_time("2022-07-12 11:46:25 EST")

        assert value is not None
        assert value.tzname() == "EST"
        assert value.utcoffset() == dt.timedelta(0)

    @pytest.mark.parametrize(
        "text",
        [
            "2006-01-02T15:04:05-07:00",
            "2006-01-02 15:04:05",
            "2006-01-02 15:04:05 UTC\n",
            " 2006-01-02 15:04:05 UTC",
            "2006-13-02 15:04:05 UTC",
            "yesterday",
        ],
    )
    def test_bad_layout_raises(self, text):
        with pytest.raises(TimeParseError) as exc_info:
            parse_api_time(text)

        assert text in str(exc_info.value)

    def test_time_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_api_time("not a time")

    def test_non_string_raises(self):
        with pytest.raises(TimeParseError):
            parse_api_time(1657626385)  # type: ignore[arg-type]


class TestFormatApiTime:
    def test_none_is_empty(self):
        assert format_api_time(None) == ""

    @pytest.mark.parametrize(
        "text",
        ["2006-01-02 15:04:05 UTC", "2022-07-12 11:46:25 EST"],
    )
    def test_round_trip(self, text):
        assert format_api_time(parse_api_time(text)) == text
