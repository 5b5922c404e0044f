"""
Data models for Thai calendar resolution.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict


WAXING = "ขึ้น"
WANING = "แรม"


class HolidayType(str, Enum):
    """Classification of a fixed-date holiday."""
    PUBLIC = "public"
    CULTURAL = "cultural"
    OBSERVANCE = "observance"


@dataclass(frozen=True)
class ThaiHoliday:
    """A holiday projected onto a specific Gregorian date."""
    date: date
    name: str
    type: HolidayType = HolidayType.PUBLIC

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "name": self.name,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class WanPhraDate:
    """
    A Buddhist holy day.

    `label` describes the lunar phase in Thai, e.g. "ขึ้น 15 ค่ำ" (15th day
    of the waxing moon) or "แรม 8 ค่ำ" (8th day of the waning moon).
    """
    date: date
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "label": self.label}


@dataclass(frozen=True)
class LunarDay:
    """Position of one Gregorian day in the Thai lunar month."""
    is_waxing: bool
    day: int  # 1-15
    is_holy_day: bool = False

    @property
    def label(self) -> str:
        return phase_label(self.is_waxing, self.day)


def phase_label(is_waxing: bool, day: int) -> str:
    """Thai phase label, e.g. phase_label(False, 8) -> "แรม 8 ค่ำ"."""
    return f"{WAXING if is_waxing else WANING} {day} ค่ำ"
