"""
Thai national and cultural holidays on fixed Gregorian dates.

Buddhist holidays that follow the lunar calendar (Makha Bucha, Visakha Bucha,
Asalha Bucha, Khao Phansa) move every year and are not part of this table.
"""
from datetime import date
from typing import List, Optional, Tuple

from .models import HolidayType, ThaiHoliday


# (month, day, name, type)
FIXED_HOLIDAYS: List[Tuple[int, int, str, HolidayType]] = [
    # Public holidays
    (1, 1, "วันขึ้นปีใหม่", HolidayType.PUBLIC),
    (4, 6, "วันจักรี", HolidayType.PUBLIC),
    (4, 13, "วันสงกรานต์", HolidayType.PUBLIC),
    (4, 14, "วันสงกรานต์", HolidayType.PUBLIC),
    (4, 15, "วันสงกรานต์", HolidayType.PUBLIC),
    (5, 1, "วันแรงงานแห่งชาติ", HolidayType.PUBLIC),
    (5, 4, "วันฉัตรมงคล", HolidayType.PUBLIC),
    (6, 3, "วันเฉลิมพระชนมพรรษาสมเด็จพระนางเจ้าฯ พระบรมราชินี", HolidayType.PUBLIC),
    (7, 28, "วันเฉลิมพระชนมพรรษาพระบาทสมเด็จพระเจ้าอยู่หัว", HolidayType.PUBLIC),
    (8, 12, "วันแม่แห่งชาติ", HolidayType.PUBLIC),
    (10, 13, "วันคล้ายวันสวรรคตรัชกาลที่ 9", HolidayType.PUBLIC),
    (10, 23, "วันปิยมหาราช", HolidayType.PUBLIC),
    (12, 5, "วันพ่อแห่งชาติ", HolidayType.PUBLIC),
    (12, 10, "วันรัฐธรรมนูญ", HolidayType.PUBLIC),
    (12, 31, "วันสิ้นปี", HolidayType.PUBLIC),
    # Observances (non-exhaustive)
    (6, 1, "วันไหว้ครู (ประมาณ)", HolidayType.OBSERVANCE),
    (7, 29, "วันภาษาไทยแห่งชาติ", HolidayType.OBSERVANCE),
    (1, 16, "วันครู", HolidayType.OBSERVANCE),
    (2, 3, "วันทหารผ่านศึก", HolidayType.OBSERVANCE),
    (2, 14, "วันวาเลนไทน์", HolidayType.OBSERVANCE),
    (3, 13, "วันช้างไทย", HolidayType.OBSERVANCE),
    (6, 5, "วันสิ่งแวดล้อมโลก", HolidayType.OBSERVANCE),
    (6, 24, "วันเปลี่ยนแปลงการปกครอง", HolidayType.OBSERVANCE),
    (9, 24, "วันมหิดล", HolidayType.OBSERVANCE),
    (9, 28, "วันพระราชทานธงชาติไทย", HolidayType.OBSERVANCE),
    (12, 25, "วันคริสต์มาส", HolidayType.OBSERVANCE),
    (12, 26, "วันสมเด็จพระเจ้าตากสินมหาราช", HolidayType.OBSERVANCE),
]


def get_thai_holidays(year: int, month: Optional[int] = None) -> List[ThaiHoliday]:
    """
    Project the fixed-date table onto a year.

    Args:
        year: Gregorian year
        month: Optional month (1-12) to filter on

    Returns:
        Holidays in table order
    """
    return [
        ThaiHoliday(date=date(year, m, d), name=name, type=kind)
        for m, d, name, kind in FIXED_HOLIDAYS
        if month is None or m == month
    ]


def get_thai_holidays_for_month(year: int, month: int) -> List[ThaiHoliday]:
    """Holidays of one month, sorted by date."""
    return sorted(get_thai_holidays(year, month), key=lambda h: h.date)


def get_today_holiday(today: Optional[date] = None) -> Optional[ThaiHoliday]:
    """The first holiday falling on `today`, if any."""
    today = today or date.today()
    for holiday in get_thai_holidays(today.year, today.month):
        if holiday.date == today:
            return holiday
    return None
