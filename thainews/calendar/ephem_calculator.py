"""Astronomical lunar calculator backed by `ephem`.

Moon phases are computed in Bangkok local time (UTC+7). The day of the full
moon counts as ขึ้น 15 ค่ำ and the day of the new moon as the last day of the
waning half (แรม 14 or 15 ค่ำ, depending on the month's length). This follows
the astronomical moon, so it can differ by a day from the official
arithmetic calendar in some months.
"""

from datetime import date, datetime, time, timedelta

import ephem

from .lunar import LunarCalculator
from .models import LunarDay

BANGKOK_OFFSET = timedelta(hours=7)
MAX_LUNAR_DAY = 15


def _local_date(moment) -> date:
    """Bangkok calendar date of an ephem instant."""
    return (ephem.Date(moment).datetime() + BANGKOK_OFFSET).date()


class EphemLunarCalculator(LunarCalculator):

    @property
    def is_available(self) -> bool:
        return True

    def lunar_day(self, day: date) -> LunarDay:
        # Last instant of the local day, expressed in UTC for ephem
        end_of_day = datetime.combine(day, time(23, 59, 59)) - BANGKOK_OFFSET
        new_moon = _local_date(ephem.previous_new_moon(end_of_day))
        full_moon = _local_date(ephem.previous_full_moon(end_of_day))

        if new_moon > full_moon:
            if new_moon == day:
                # New moon closes the waning half
                waning = min((day - full_moon).days, MAX_LUNAR_DAY)
                return LunarDay(is_waxing=False, day=waning, is_holy_day=True)
            waxing = min((day - new_moon).days, MAX_LUNAR_DAY - 1)
            return LunarDay(is_waxing=True, day=waxing)

        if full_moon == day:
            return LunarDay(is_waxing=True, day=MAX_LUNAR_DAY, is_holy_day=True)
        waning = min((day - full_moon).days, MAX_LUNAR_DAY - 1)
        return LunarDay(is_waxing=False, day=waning)
