"""
Thai calendar: Wan Phra resolution with fallback chain and fixed-date holidays.
"""
from .models import HolidayType, LunarDay, ThaiHoliday, WanPhraDate, phase_label
from .holidays import (
    FIXED_HOLIDAYS,
    get_thai_holidays,
    get_thai_holidays_for_month,
    get_today_holiday,
)
from .lunar import (
    LunarCalculator,
    LunarCalculatorUnavailable,
    NullLunarCalculator,
    get_lunar_calculator,
)
from .remote import CalendarSourceError, RemoteCalendarSource, parse_wan_phra_records
from .fallback import StaticFallbackTable
from .resolver import (
    CalendarResolver,
    ResolutionTier,
    build_calendar_resolver,
    compute_wan_phra_dates,
    is_wan_phra,
    lunar_tier,
    remote_tier,
    static_tier,
)

__all__ = [
    # Models
    "HolidayType",
    "LunarDay",
    "ThaiHoliday",
    "WanPhraDate",
    "phase_label",
    # Holidays
    "FIXED_HOLIDAYS",
    "get_thai_holidays",
    "get_thai_holidays_for_month",
    "get_today_holiday",
    # Lunar arithmetic
    "LunarCalculator",
    "LunarCalculatorUnavailable",
    "NullLunarCalculator",
    "get_lunar_calculator",
    # Sources
    "CalendarSourceError",
    "RemoteCalendarSource",
    "parse_wan_phra_records",
    "StaticFallbackTable",
    # Resolution
    "CalendarResolver",
    "ResolutionTier",
    "build_calendar_resolver",
    "compute_wan_phra_dates",
    "is_wan_phra",
    "lunar_tier",
    "remote_tier",
    "static_tier",
]
