"""Test the tail cursor."""

from hypothesis import given, settings
from hypothesis import strategies as st

from logcache_cli.core.cursor import Cursor
from logcache_cli.core.envelopes import LogLevel
from tests.builders import BASE_TIME, NS, make_log, make_logs


class TestCursor:
    """Test ordering, deduplication and cursor movement."""

    def test_starts_without_lower_bound(self):
        assert Cursor().next_start is None

    def test_orders_descending_batch(self):
        cursor = Cursor()
        batch = make_logs([BASE_TIME + 2 * NS, BASE_TIME + NS, BASE_TIME])

        fresh = cursor.advance(batch)

        assert [e.timestamp for e in fresh] == [
            BASE_TIME,
            BASE_TIME + NS,
            BASE_TIME + 2 * NS,
        ]

    def test_ties_keep_server_order(self):
        cursor = Cursor()
        first = make_log(BASE_TIME, body=b"first\n")
        second = make_log(BASE_TIME, body=b"second\n")

        assert cursor.advance([first, second]) == [first, second]

    def test_next_start_is_one_past_newest(self):
        cursor = Cursor()
        cursor.advance(make_logs([BASE_TIME, BASE_TIME + 5]))
        assert cursor.next_start == BASE_TIME + 6

    def test_empty_batch_keeps_cursor(self):
        cursor = Cursor(next_start=BASE_TIME)
        assert cursor.advance([]) == []
        assert cursor.next_start == BASE_TIME

    def test_overlapping_batches_emit_each_envelope_once(self):
        cursor = Cursor()
        first = cursor.advance(make_logs([BASE_TIME, BASE_TIME + 1]))
        second = cursor.advance(make_logs([BASE_TIME + 1, BASE_TIME + 2]))

        assert [e.timestamp for e in first] == [BASE_TIME, BASE_TIME + 1]
        assert [e.timestamp for e in second] == [BASE_TIME + 2]

    def test_distinct_envelopes_at_same_instant_both_emitted(self):
        cursor = Cursor()
        cursor.advance([make_log(BASE_TIME)])
        fresh = cursor.advance(
            [make_log(BASE_TIME), make_log(BASE_TIME, level=LogLevel.ERR)]
        )
        assert len(fresh) == 1
        assert fresh[0].payload.level == LogLevel.ERR

    def test_prunes_identities_outside_retention(self):
        cursor = Cursor(retention=1.0)
        cursor.advance([make_log(BASE_TIME)])
        cursor.advance([make_log(BASE_TIME + 10 * NS)])

        assert len(cursor.seen) == 1

        # Forgotten, so a late replay is emitted again
        assert len(cursor.advance([make_log(BASE_TIME)])) == 1

    def test_keeps_identities_inside_retention(self):
        cursor = Cursor(retention=5.0)
        cursor.advance([make_log(BASE_TIME)])
        cursor.advance([make_log(BASE_TIME + NS)])

        assert len(cursor.seen) == 2


timestamps = st.lists(st.integers(min_value=0, max_value=10**9), max_size=30)


class TestCursorProperties:
    """Property-based tests for Cursor."""

    @given(st.lists(timestamps, max_size=5))
    @settings(max_examples=50)
    def test_output_never_repeats_identity(self, batches):
        cursor = Cursor(retention=5.0)
        emitted = []
        for batch in batches:
            emitted.extend(cursor.advance(make_logs(batch)))

        identities = [e.identity for e in emitted]
        assert len(identities) == len(set(identities))

    @given(timestamps)
    def test_each_batch_comes_out_sorted(self, batch):
        fresh = Cursor().advance(make_logs(batch))
        emitted = [e.timestamp for e in fresh]
        assert emitted == sorted(emitted)

    @given(timestamps)
    def test_replaying_a_batch_emits_nothing(self, batch):
        cursor = Cursor(retention=5.0)
        cursor.advance(make_logs(batch))
        assert cursor.advance(make_logs(batch)) == []

    @given(st.lists(timestamps.filter(bool), min_size=1, max_size=5))
    def test_next_start_follows_newest_timestamp(self, batches):
        cursor = Cursor()
        for batch in batches:
            cursor.advance(make_logs(batch))
            assert cursor.next_start == max(batch) + 1
