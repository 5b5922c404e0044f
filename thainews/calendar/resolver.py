"""
Wan Phra resolution through an ordered chain of sources.

Default chain, most to least precise:

1. remote   - the configured Wan Phra feed (bounded by its timeout)
2. lunar    - local lunar arithmetic, when this deployment has it
3. static   - the precomputed fallback table

Each tier either answers with data or fails. A failing tier (exception or
None) hands over to the next one; so does an empty answer, unless the tier
is marked `trust_empty`. When every tier is exhausted the month simply has
no known Wan Phra and the result is an empty list. Nothing here raises to
the caller.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, List, Optional

from .fallback import StaticFallbackTable
from .holidays import get_thai_holidays_for_month
from .lunar import LunarCalculator, LunarCalculatorUnavailable, get_lunar_calculator
from .models import LunarDay, ThaiHoliday, WanPhraDate
from .remote import RemoteCalendarSource
from thainews.utils.helpers import iter_month_days, next_month

logger = logging.getLogger("calendar.resolver")

TierAttempt = Callable[[int, int], Optional[List[WanPhraDate]]]


@dataclass
class ResolutionTier:
    """One source in the resolution chain."""
    name: str
    attempt: TierAttempt
    trust_empty: bool = False


def is_wan_phra(lunar: LunarDay) -> bool:
    """
    Holy day rule: waxing 8 and 15, waning 8, and the last waning day.

    The calculator flags the last waning day (14 or 15 depending on the
    month's length) through `is_holy_day`.
    """
    if lunar.is_holy_day:
        return True
    if lunar.day == 8:
        return True
    return lunar.is_waxing and lunar.day == 15


def compute_wan_phra_dates(
    calculator: LunarCalculator,
    year: int,
    month: int,
) -> List[WanPhraDate]:
    """
    Compute a month's Wan Phra with a lunar calculator.

    All or nothing: if any day cannot be computed the whole month fails.

    Raises:
        LunarCalculatorUnavailable: If the calculator is not available
    """
    if not calculator.is_available:
        raise LunarCalculatorUnavailable("no lunar calculator in this deployment")

    results = []
    for day in iter_month_days(year, month):
        lunar = calculator.lunar_day(day)
        if is_wan_phra(lunar):
            results.append(WanPhraDate(date=day, label=lunar.label))
    return results


def remote_tier(source: RemoteCalendarSource, trust_empty: bool = False) -> ResolutionTier:
    return ResolutionTier(name="remote", attempt=source.fetch, trust_empty=trust_empty)


def lunar_tier(calculator: LunarCalculator) -> ResolutionTier:
    return ResolutionTier(
        name="lunar",
        attempt=lambda year, month: compute_wan_phra_dates(calculator, year, month),
    )


def static_tier(table: StaticFallbackTable) -> ResolutionTier:
    return ResolutionTier(name="static", attempt=table.lookup)


class CalendarResolver:
    """
    Resolves Wan Phra dates per month and exposes the holiday table.

    Usage:
        resolver = CalendarResolver([remote_tier(source), static_tier(table)])
        dates = resolver.get_wan_phra_dates(2025, 8)
    """

    def __init__(self, tiers: Iterable[ResolutionTier]):
        self.tiers: List[ResolutionTier] = list(tiers)

    def get_wan_phra_dates(self, year: int, month: int) -> List[WanPhraDate]:
        """
        Wan Phra dates of a month from the first tier that answers.

        Returns:
            The answering tier's records, or [] when every tier came up empty
        """
        for tier in self.tiers:
            try:
                result = tier.attempt(year, month)
            except Exception as e:
                logger.info(f"Wan Phra tier '{tier.name}' failed for {year}-{month:02d}: {e}")
                continue

            if result is None:
                logger.debug(f"Wan Phra tier '{tier.name}' had no answer for {year}-{month:02d}")
                continue
            if result or tier.trust_empty:
                logger.debug(
                    f"Wan Phra for {year}-{month:02d} resolved by '{tier.name}' "
                    f"({len(result)} dates)"
                )
                return list(result)
            logger.debug(f"Wan Phra tier '{tier.name}' empty for {year}-{month:02d}, falling through")

        logger.info(f"No Wan Phra data for {year}-{month:02d}")
        return []

    def get_next_wan_phra(
        self,
        from_date: Optional[date] = None,
        month_lookup: Optional[Callable[[int, int], List[WanPhraDate]]] = None,
    ) -> Optional[WanPhraDate]:
        """
        The first Wan Phra on or after `from_date`, searching this month and next.

        Args:
            from_date: Start of the search, today by default
            month_lookup: Per-month source to use instead of the chain,
                e.g. a cached wrapper around `get_wan_phra_dates`
        """
        from_date = from_date or date.today()
        lookup = month_lookup or self.get_wan_phra_dates
        following = next_month(from_date.year, from_date.month)

        candidates = (
            list(lookup(from_date.year, from_date.month))
            + list(lookup(*following))
        )
        upcoming = sorted((d for d in candidates if d.date >= from_date), key=lambda d: d.date)
        return upcoming[0] if upcoming else None

    def get_thai_holidays_for_month(self, year: int, month: int) -> List[ThaiHoliday]:
        """Fixed-date holidays of a month; never touches the network."""
        return get_thai_holidays_for_month(year, month)


def build_calendar_resolver(
    settings,
    calculator: Optional[LunarCalculator] = None,
    fallback_table: Optional[StaticFallbackTable] = None,
    source: Optional[RemoteCalendarSource] = None,
) -> CalendarResolver:
    """
    Wire the default chain from settings.

    The remote tier is left out when no feed URL is configured.
    """
    tiers = []

    if source is None and settings.calendar_remote_url:
        source = RemoteCalendarSource(
            settings.calendar_remote_url,
            timeout=settings.calendar_remote_timeout_seconds,
        )
    if source is not None:
        tiers.append(remote_tier(source, trust_empty=settings.calendar_trust_empty_remote))

    if calculator is None:
        calculator = get_lunar_calculator(enabled=settings.calendar_lunar_enabled)
    tiers.append(lunar_tier(calculator))

    if fallback_table is None:
        fallback_table = StaticFallbackTable.from_file(settings.calendar_fallback_path)
    tiers.append(static_tier(fallback_table))

    logger.info(f"Wan Phra resolution chain: {' -> '.join(t.name for t in tiers)}")
    return CalendarResolver(tiers)
