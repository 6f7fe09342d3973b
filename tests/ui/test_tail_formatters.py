"""Test envelope rendering."""

from datetime import timedelta, timezone

import pytest

from logcache_cli.core.envelopes import (
    Counter,
    Event,
    Gauge,
    GaugeValue,
    LogLevel,
    Timer,
    Unknown,
)
from logcache_cli.ui.tail.formatters import TailFormatter, format_duration
from tests.builders import BASE_TIME, NS, make_envelope, make_log

STAMP = "2017-07-14T02:40:00.12+0000"
T = BASE_TIME + 123_456_789


class TestFormatTimestamp:
    """Test timestamp formatting."""

    def test_centiseconds_truncated(self, utc_formatter):
        assert utc_formatter.format_timestamp(T) == STAMP

    def test_epoch(self, utc_formatter):
        assert utc_formatter.format_timestamp(1) == "1970-01-01T00:00:00.00+0000"

    def test_offset_follows_timezone(self):
        formatter = TailFormatter(tz=timezone(timedelta(hours=-7)))
        assert formatter.format_timestamp(T) == "2017-07-13T19:40:00.12-0700"

    def test_unrepresentable_falls_back_to_integer(self, utc_formatter):
        assert utc_formatter.format_timestamp(10**30) == str(10**30)


class TestRender:
    """Test single-line rendering of every variant."""

    def test_log(self, utc_formatter):
        assert (
            utc_formatter.render(make_log(T))
            == f"{STAMP} [app-name/0] LOG/OUT log body"
        )

    def test_err_log(self, utc_formatter):
        line = utc_formatter.render(make_log(T, level=LogLevel.ERR))
        assert line == f"{STAMP} [app-name/0] LOG/ERR log body"

    def test_empty_instance_id(self, utc_formatter):
        line = utc_formatter.render(make_log(T, instance_id=""))
        assert line == f"{STAMP} [app-name/] LOG/OUT log body"

    @pytest.mark.parametrize(
        "payload,expected",
        [
            (Counter("some-name", 99), "COUNTER some-name:99"),
            (
                Gauge.from_mapping(
                    {
                        "some-other-name": GaugeValue(101, "my-unit"),
                        "some-name": GaugeValue(99, "my-unit"),
                    }
                ),
                "GAUGE some-name:99.000000 my-unit "
                "some-other-name:101.000000 my-unit",
            ),
            (Timer("http", T + NS, T + 2 * NS), "TIMER 1s"),
            (Event("some-title", "some-body"), "EVENT some-title:some-body"),
            (Unknown.from_mapping({"foo": "bar"}), 'UNKNOWN foo:"bar"'),
        ],
    )
    def test_variants(self, utc_formatter, payload, expected):
        line = utc_formatter.render(make_envelope(T, payload))
        assert line == f"{STAMP} [app-name/0] {expected}"

    def test_multiline_body_stays_verbatim(self, utc_formatter):
        line = utc_formatter.render(make_log(T, body=b"one\ntwo\n"))
        assert line.endswith("LOG/OUT one\ntwo")

    def test_render_text_matches_plain(self, utc_formatter):
        envelope = make_envelope(T, Counter("some-name", 99))
        assert utc_formatter.render_text(envelope).plain == utc_formatter.render(
            envelope
        )


class TestFormatDuration:
    """Test compact duration strings."""

    @pytest.mark.parametrize(
        "nanoseconds,expected",
        [
            (0, "0s"),
            (999, "999ns"),
            (1_500, "1.5µs"),
            (1_500_000, "1.5ms"),
            (NS, "1s"),
            (NS + NS // 2, "1.5s"),
            (90 * NS, "1m30s"),
            (705 * NS, "11m45s"),
            (3600 * NS, "1h0m0s"),
            (3723 * NS + NS // 2, "1h2m3.5s"),
            (-NS, "-1s"),
        ],
    )
    def test_format(self, nanoseconds, expected):
        assert format_duration(nanoseconds) == expected
