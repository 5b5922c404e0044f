"""
Tests for the remote Wan Phra feed client and the static fallback table.
"""
import json
import socket
import threading
import time
from datetime import date
from unittest.mock import MagicMock, Mock

import pytest
import requests

from thainews.calendar import (
    CalendarResolver,
    CalendarSourceError,
    RemoteCalendarSource,
    StaticFallbackTable,
    WanPhraDate,
    parse_wan_phra_records,
    remote_tier,
    static_tier,
)


def _session_returning(payload=None, status=200, body=None):
    response = MagicMock()
    response.__enter__.return_value = response
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    else:
        response.raise_for_status.return_value = None
    if body is None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    response.iter_content.return_value = [body[:10], body[10:]]
    session = Mock()
    session.get.return_value = response
    return session


class TricklingFeed:
    """Local HTTP server that sends its JSON body one byte at a time."""

    BODY = b'[{"date": "2024-04-24", "label": "x"}]'

    def __init__(self, delay=0.3):
        self.delay = delay
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(1)
        self._server.settimeout(0.2)
        self.url = f"http://127.0.0.1:{self._server.getsockname()[1]}/api/wanphra"
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def __enter__(self):
        self._thread.start()
        return self

    def __exit__(self, *exc):
        self._stop.set()
        self._thread.join(timeout=2)
        self._server.close()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            with conn:
                conn.recv(4096)
                headers = (
                    "HTTP/1.1 200 OK\r\n"
                    "Content-Type: application/json\r\n"
                    f"Content-Length: {len(self.BODY)}\r\n"
                    "Connection: close\r\n\r\n"
                )
                try:
                    conn.sendall(headers.encode("ascii"))
                    for i in range(len(self.BODY)):
                        if self._stop.wait(self.delay):
                            return
                        conn.sendall(self.BODY[i:i + 1])
                except OSError:
                    return


# =============================================================================
# Payload parsing
# =============================================================================

def test_parse_label_and_summary_records():
    records = parse_wan_phra_records([
        {"date": "2025-08-09", "label": "ขึ้น 15 ค่ำ"},
        {"date": "2025-08-17T00:00:00+07:00", "summary": " แรม 8 ค่ำ "},
    ])
    assert records == [
        WanPhraDate(date(2025, 8, 9), "ขึ้น 15 ค่ำ"),
        WanPhraDate(date(2025, 8, 17), "แรม 8 ค่ำ"),
    ]


@pytest.mark.parametrize("payload", [
    {"date": "2025-08-09", "label": "x"},
    [{"date": "2025-08-09"}],
    [{"label": "x"}],
    [{"date": "09/08/2025", "label": "x"}],
    ["2025-08-09"],
    None,
])
def test_parse_rejects_malformed_payloads(payload):
    with pytest.raises(CalendarSourceError):
        parse_wan_phra_records(payload)


# =============================================================================
# Remote source
# =============================================================================

def test_fetch_sends_year_month_and_timeout():
    session = _session_returning([{"date": "2024-04-24", "label": "ขึ้น 15 ค่ำ"}])
    source = RemoteCalendarSource("https://calendar.example/api/wanphra", timeout=2.5, session=session)

    assert source.fetch(2024, 4) == [WanPhraDate(date(2024, 4, 24), "ขึ้น 15 ค่ำ")]

    _, kwargs = session.get.call_args
    assert session.get.call_args[0][0] == "https://calendar.example/api/wanphra"
    assert kwargs["params"] == {"year": 2024, "month": 4}
    assert kwargs["timeout"] == 2.5


def test_fetch_http_error_is_source_error():
    source = RemoteCalendarSource("https://x", session=_session_returning(status=503))
    with pytest.raises(CalendarSourceError):
        source.fetch(2024, 4)


def test_fetch_timeout_is_source_error():
    session = Mock()
    session.get.side_effect = requests.Timeout("read timed out")
    source = RemoteCalendarSource("https://x", session=session)
    with pytest.raises(CalendarSourceError):
        source.fetch(2024, 4)


def test_fetch_invalid_json_is_source_error():
    session = _session_returning(body=b"not json")
    source = RemoteCalendarSource("https://x", session=session)
    with pytest.raises(CalendarSourceError):
        source.fetch(2024, 4)


def test_fetch_empty_array_is_valid():
    source = RemoteCalendarSource("https://x", session=_session_returning([]))
    assert source.fetch(2024, 4) == []


def test_fetch_streams_with_deadline():
    session = _session_returning([])
    RemoteCalendarSource("https://x", session=session).fetch(2024, 4)
    _, kwargs = session.get.call_args
    assert kwargs["stream"] is True


def test_slow_session_is_cut_off_at_timeout():
    session = Mock()
    session.get.side_effect = lambda *args, **kwargs: time.sleep(3)
    source = RemoteCalendarSource("https://x", timeout=0.5, session=session)

    started = time.monotonic()
    with pytest.raises(CalendarSourceError):
        source.fetch(2024, 4)
    assert time.monotonic() - started < 1.5
    source.close()


def test_trickling_feed_is_bounded_by_timeout():
    fallback = [WanPhraDate(date(2024, 4, 24), "ขึ้น 15 ค่ำ")]
    with TricklingFeed(delay=0.3) as feed:
        source = RemoteCalendarSource(feed.url, timeout=1.0)
        resolver = CalendarResolver([
            remote_tier(source),
            static_tier(StaticFallbackTable({"2024-04": fallback})),
        ])

        started = time.monotonic()
        dates = resolver.get_wan_phra_dates(2024, 4)
        elapsed = time.monotonic() - started
        source.close()

    assert elapsed < 2.0
    assert dates == fallback


# =============================================================================
# Static fallback table
# =============================================================================

def test_lookup_known_and_unknown_months():
    table = StaticFallbackTable.from_mapping({
        "2024-04": [{"date": "2024-04-24", "label": "ขึ้น 15 ค่ำ"}],
    })
    assert table.lookup(2024, 4) == [WanPhraDate(date(2024, 4, 24), "ขึ้น 15 ค่ำ")]
    assert table.lookup(1899, 1) == []


def test_lookup_returns_a_copy():
    table = StaticFallbackTable({"2024-04": [WanPhraDate(date(2024, 4, 24), "ขึ้น 15 ค่ำ")]})
    table.lookup(2024, 4).clear()
    assert len(table.lookup(2024, 4)) == 1


def test_malformed_months_are_skipped():
    table = StaticFallbackTable.from_mapping({
        "2024-04": [{"date": "2024-04-24", "label": "ขึ้น 15 ค่ำ"}],
        "2024-05": "not a list",
    })
    assert table.months() == ["2024-04"]


def test_from_file(tmp_path):
    path = tmp_path / "wanphra.json"
    path.write_text(
        json.dumps({"2025-01": [{"date": "2025-01-13", "label": "ขึ้น 15 ค่ำ"}]}, ensure_ascii=False),
        encoding="utf-8",
    )
    table = StaticFallbackTable.from_file(path)
    assert table.lookup(2025, 1) == [WanPhraDate(date(2025, 1, 13), "ขึ้น 15 ค่ำ")]


def test_missing_or_broken_file_gives_empty_table(tmp_path):
    assert len(StaticFallbackTable.from_file(tmp_path / "missing.json")) == 0

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert len(StaticFallbackTable.from_file(broken)) == 0


def test_packaged_table_loads():
    table = StaticFallbackTable.from_file()
    assert isinstance(table.months(), list)
