"""
Thai News - Main FastAPI Application
Calendar endpoints (Wan Phra, holidays) and cache statistics
"""
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Query, Request

from thainews.cache import TTLCache, build_cache_manager, build_cache_key
from thainews.calendar import (
    CalendarResolver,
    WanPhraDate,
    build_calendar_resolver,
    get_thai_holidays,
    get_today_holiday,
)
from thainews.schemas import CalendarMonth, Holiday, NextWanPhra, WanPhra
from thainews.utils.helpers import format_thai_month_year
from config.settings import settings

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("thainews")

# Version tracking
APP_VERSION = "v0.3.0"
APP_NAME = "Thai News"


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cache_manager.start()
    try:
        yield
    finally:
        app.state.cache_manager.stop()


app = FastAPI(
    title=APP_NAME,
    description="Thai news site core: article caches, Wan Phra and Thai holidays",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Process-wide instances, replaceable in tests
app.state.cache_manager = build_cache_manager(settings)
app.state.calendar_resolver = build_calendar_resolver(settings)
app.state.calendar_cache = TTLCache(
    "calendar",
    default_ttl=settings.calendar_month_cache_ttl,
    enabled=settings.cache_enabled,
)


def _resolve_month(request: Request, year: int, month: int) -> list[WanPhraDate]:
    """Wan Phra of a month, cached per month when the chain found any."""
    cache: TTLCache = request.app.state.calendar_cache
    resolver: CalendarResolver = request.app.state.calendar_resolver

    key = build_cache_key("wanphra", year=year, month=month)
    cached = cache.get(key)
    if cached is not None:
        return list(cached)

    dates = resolver.get_wan_phra_dates(year, month)
    # Empty months are not cached so the next request retries the live tiers
    if dates:
        cache.set(key, dates)
    return dates


def _to_schema(dates: list[WanPhraDate]) -> list[WanPhra]:
    return [WanPhra(**d.to_dict()) for d in dates]


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/version")
def version_info():
    """Version information endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "full": f"{APP_NAME} {APP_VERSION}",
    }


@app.get("/cache/stats")
def cache_stats(request: Request):
    """Get cache statistics."""
    return {
        "news": request.app.state.cache_manager.get_stats(),
        "calendar": request.app.state.calendar_cache.get_stats(),
    }


@app.get("/api/wanphra", response_model=list[WanPhra])
def wan_phra(
    request: Request,
    year: int = Query(..., ge=1, le=9999, description="Gregorian year"),
    month: int = Query(..., ge=1, le=12, description="Month (1-12)"),
):
    """Buddhist holy days of a month. Empty when no source knows the month."""
    return _to_schema(_resolve_month(request, year, month))


@app.get("/api/wanphra/next", response_model=NextWanPhra)
def next_wan_phra(request: Request):
    """Next Buddhist holy day from today."""
    resolver: CalendarResolver = request.app.state.calendar_resolver
    upcoming = resolver.get_next_wan_phra(
        date.today(),
        month_lookup=lambda year, month: _resolve_month(request, year, month),
    )
    return NextWanPhra(wan_phra=WanPhra(**upcoming.to_dict()) if upcoming else None)


@app.get("/api/thai-holidays", response_model=list[Holiday])
def thai_holidays(
    year: int = Query(..., ge=1, le=9999, description="Gregorian year"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Optional month filter"),
):
    """Fixed-date Thai holidays of a year or month, sorted by date."""
    holidays = sorted(get_thai_holidays(year, month), key=lambda h: h.date)
    return [Holiday(**h.to_dict()) for h in holidays]


@app.get("/api/thai-holidays/today", response_model=Optional[Holiday])
def todays_holiday():
    """Today's holiday, or null."""
    holiday = get_today_holiday(date.today())
    return Holiday(**holiday.to_dict()) if holiday else None


@app.get("/api/calendar", response_model=CalendarMonth)
def calendar_month(
    request: Request,
    year: int = Query(..., ge=1, le=9999, description="Gregorian year"),
    month: int = Query(..., ge=1, le=12, description="Month (1-12)"),
):
    """Wan Phra and holidays of a month, titled in Thai with the Buddhist Era year."""
    resolver: CalendarResolver = request.app.state.calendar_resolver
    return CalendarMonth(
        year=year,
        month=month,
        title=format_thai_month_year(year, month),
        wan_phra=_to_schema(_resolve_month(request, year, month)),
        holidays=[Holiday(**h.to_dict()) for h in resolver.get_thai_holidays_for_month(year, month)],
    )
