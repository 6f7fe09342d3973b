"""Test decoding of log-cache meta responses."""

import pytest

from logcache_cli.core.exceptions import MalformedResponseError
from logcache_cli.core.types import MetaInfo
from logcache_cli.io.meta_decoder import decode_meta
from tests.fixtures.responses import NS, meta_response


class TestDecodeMeta:
    """Test decode_meta."""

    def test_decodes_sources(self):
        body = meta_response(
            {"doppler": {"count": 10, "expired": 2, "oldest": NS, "newest": 706 * NS}}
        )

        meta = decode_meta(body)

        assert meta == {
            "doppler": MetaInfo(
                source_id="doppler",
                count=10,
                expired=2,
                oldest_timestamp=NS,
                newest_timestamp=706 * NS,
            )
        }

    @pytest.mark.parametrize("body", [None, "", "{}", '{"meta": {}}'])
    def test_empty(self, body):
        assert decode_meta(body) == {}

    def test_missing_fields_default_to_zero(self):
        meta = decode_meta('{"meta": {"a": {}}}')
        assert meta["a"] == MetaInfo(source_id="a")

    @pytest.mark.parametrize(
        "body",
        ["[]", '{"meta": []}', '{"meta": {"a": 1}}', '{"meta": {"a": {"count": "x"}}}'],
    )
    def test_malformed(self, body):
        with pytest.raises(MalformedResponseError):
            decode_meta(body)


class TestMetaInfo:
    """Test MetaInfo.cache_duration."""

    def test_cache_duration_truncates_to_seconds(self):
        info = MetaInfo(
            source_id="a", oldest_timestamp=0, newest_timestamp=705 * NS + 999_999_999
        )
        assert info.cache_duration == 705 * NS

    def test_cache_duration_zero_for_single_instant(self):
        info = MetaInfo(source_id="a", oldest_timestamp=5, newest_timestamp=5)
        assert info.cache_duration == 0

    def test_cache_duration_exact_beyond_float_precision(self):
        info = MetaInfo(
            source_id="a", oldest_timestamp=0, newest_timestamp=9_007_199_254_999_999_999
        )
        assert info.cache_duration == 9_007_199_254_000_000_000

    def test_cache_duration_negative_span_truncates_toward_zero(self):
        info = MetaInfo(source_id="a", oldest_timestamp=1_500_000_000, newest_timestamp=0)
        assert info.cache_duration == -NS
