"""
Precomputed Wan Phra table used when no live source answers.

The table is a JSON object keyed by "YYYY-MM":

    {"2025-08": [{"date": "2025-08-01", "label": "ขึ้น 8 ค่ำ"}, ...]}
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .models import WanPhraDate
from .remote import CalendarSourceError, parse_wan_phra_records

logger = logging.getLogger("calendar.fallback")

DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "wanphra.json"


def month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


class StaticFallbackTable:
    """Read-only (year, month) -> Wan Phra lookup."""

    def __init__(self, data: Optional[Dict[str, List[WanPhraDate]]] = None):
        self._data: Dict[str, List[WanPhraDate]] = dict(data or {})

    @classmethod
    def from_mapping(cls, raw: Dict[str, list]) -> "StaticFallbackTable":
        """
        Build a table from raw JSON-like data.

        Months with malformed records are skipped and logged.
        """
        data = {}
        for key, records in raw.items():
            try:
                data[key] = parse_wan_phra_records(records)
            except CalendarSourceError as e:
                logger.warning(f"Skipping fallback month {key}: {e}")
        return cls(data)

    @classmethod
    def from_file(cls, path: Union[str, Path, None] = None) -> "StaticFallbackTable":
        """
        Load a table from a JSON file.

        A missing or unreadable file yields an empty table.
        """
        path = Path(path) if path else DEFAULT_TABLE_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load Wan Phra fallback table {path}: {e}")
            return cls()
        if not isinstance(raw, dict):
            logger.warning(f"Wan Phra fallback table {path} is not a JSON object")
            return cls()
        return cls.from_mapping(raw)

    def lookup(self, year: int, month: int) -> List[WanPhraDate]:
        """Entries for a month, empty when the table has none."""
        return list(self._data.get(month_key(year, month), []))

    def months(self) -> List[str]:
        return sorted(self._data)

    def __len__(self) -> int:
        return len(self._data)
