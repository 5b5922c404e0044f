"""
Client for a remote Wan Phra feed.

The feed answers `GET <url>?year=YYYY&month=M` with a JSON array:

    [{"date": "2025-08-09", "label": "ขึ้น 15 ค่ำ"}, ...]

Feeds converted from iCalendar may send `summary` instead of `label`.
"""
import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from datetime import date
from typing import Any, List, Optional

import requests

from .models import WanPhraDate

logger = logging.getLogger("calendar.remote")

CHUNK_SIZE = 256


class CalendarSourceError(Exception):
    """Raised when the remote feed is unreachable or answers garbage."""
    pass


def parse_wan_phra_records(payload: Any) -> List[WanPhraDate]:
    """
    Validate a feed payload.

    Raises:
        CalendarSourceError: If the payload is not a list of
            {date, label|summary} objects with ISO dates
    """
    if not isinstance(payload, list):
        raise CalendarSourceError(f"expected a JSON array, got {type(payload).__name__}")

    records = []
    for item in payload:
        if not isinstance(item, dict):
            raise CalendarSourceError(f"malformed record: {item!r}")
        label = item.get("label") or item.get("summary")
        raw_date = item.get("date")
        if not isinstance(raw_date, str) or not isinstance(label, str):
            raise CalendarSourceError(f"malformed record: {item!r}")
        try:
            day = date.fromisoformat(raw_date[:10])
        except ValueError:
            raise CalendarSourceError(f"invalid date in record: {raw_date!r}")
        records.append(WanPhraDate(date=day, label=label.strip()))
    return records


class RemoteCalendarSource:
    """
    Fetches Wan Phra dates for one month from a remote feed.

    The whole call, body included, is bounded by `timeout`. The download runs
    on a small worker pool and the caller stops waiting at the deadline, so a
    feed that trickles its response counts as a failure.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
        max_workers: int = 4,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="wanphra-feed",
        )

    def fetch(self, year: int, month: int) -> List[WanPhraDate]:
        """
        Fetch the month's Wan Phra dates.

        Raises:
            CalendarSourceError: On network error, timeout, non-2xx status
                or malformed body
        """
        deadline = time.monotonic() + self.timeout
        future = self._pool.submit(self._download, year, month, deadline)
        try:
            payload = future.result(timeout=self.timeout)
        except FuturesTimeoutError as e:
            future.cancel()
            raise CalendarSourceError(
                f"Wan Phra feed did not answer within {self.timeout}s"
            ) from e
        except requests.RequestException as e:
            raise CalendarSourceError(f"Wan Phra feed request failed: {e}") from e
        except ValueError as e:
            raise CalendarSourceError(f"Wan Phra feed returned invalid JSON: {e}") from e

        records = parse_wan_phra_records(payload)
        logger.debug(f"Wan Phra feed returned {len(records)} records for {year}-{month:02d}")
        return records

    def _download(self, year: int, month: int, deadline: float) -> Any:
        """Stream the body, giving up once the deadline has passed."""
        with self._session.get(
            self.url,
            params={"year": year, "month": month},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            stream=True,
        ) as response:
            response.raise_for_status()
            body = bytearray()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise CalendarSourceError("Wan Phra feed body exceeded the deadline")
                body.extend(chunk)
        return json.loads(bytes(body))

    def close(self):
        """Stop the worker pool without waiting for stragglers."""
        self._pool.shutdown(wait=False)
