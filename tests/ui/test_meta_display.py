"""Test MetaDisplay table output."""

import io

from logcache_cli.meta import MetaRow
from logcache_cli.ui import MetaDisplay
from tests.builders import NS


def rows():
    return [
        MetaRow("guid-1", "app-one", count=100, expired=3, cache_duration=705 * NS),
        MetaRow("doppler", "doppler", count=5, expired=0, cache_duration=NS),
    ]


class TestMetaDisplay:
    """Test table rendering."""

    def test_header_and_columns(self):
        output = io.StringIO()
        MetaDisplay(output, show_headers=True).render(rows())

        lines = output.getvalue().splitlines()
        assert lines[0] == "Retrieving log cache metadata..."
        assert lines[1] == ""
        assert lines[2].split() == ["Source", "Count", "Expired", "Cache", "Duration"]
        assert lines[3].split() == ["app-one", "100", "3", "11m45s"]
        assert lines[4].split() == ["doppler", "5", "0", "1s"]

    def test_no_headers(self):
        output = io.StringIO()
        MetaDisplay(output, show_headers=False).render(rows())

        lines = output.getvalue().splitlines()
        assert lines[0].split() == ["app-one", "100", "3", "11m45s"]
        assert len(lines) == 2

    def test_guid_and_rate_columns(self):
        table_rows = rows()
        table_rows[0].rate = 42
        output = io.StringIO()

        MetaDisplay(output, show_headers=True, show_guid=True, show_rate=True).render(
            table_rows
        )

        lines = output.getvalue().splitlines()
        assert lines[2].split()[0] == "Source"
        assert lines[2].split()[-1] == "Rate"
        assert lines[3].split() == ["guid-1", "app-one", "100", "3", "11m45s", "42"]
        assert lines[4].split() == ["doppler", "doppler", "5", "0", "1s"]

    def test_nothing_written_without_rows(self):
        output = io.StringIO()
        MetaDisplay(output, show_headers=True).render([])
        assert output.getvalue() == ""
