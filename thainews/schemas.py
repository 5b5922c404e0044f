"""
Pydantic schemas for API responses
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date


# ===== CALENDAR SCHEMAS =====

class WanPhra(BaseModel):
    """Buddhist holy day"""
    date: date
    label: str

    class Config:
        from_attributes = True


class Holiday(BaseModel):
    """Fixed-date Thai holiday"""
    date: date
    name: str
    type: str

    class Config:
        from_attributes = True


class CalendarMonth(BaseModel):
    """Everything the calendar page shows for one month"""
    year: int
    month: int
    title: str
    wan_phra: list[WanPhra]
    holidays: list[Holiday]


class NextWanPhra(BaseModel):
    """Next holy day from today, if one is known"""
    wan_phra: Optional[WanPhra] = None
