"""Lunar calculator abstraction for local Wan Phra computation.

The calculator is a capability picked once at startup: deployments with the
optional `ephem` package get an astronomical calculator, the rest get a null
calculator that reports itself unavailable. Callers check `is_available`
instead of probing for the package on every call.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

from .models import LunarDay

if TYPE_CHECKING:
    from .ephem_calculator import EphemLunarCalculator

logger = logging.getLogger("calendar.lunar")

__all__ = [
    "LunarCalculator",
    "NullLunarCalculator",
    "LunarCalculatorUnavailable",
    "get_lunar_calculator",
]


class LunarCalculatorUnavailable(Exception):
    """Raised when lunar arithmetic is requested but not supported."""
    pass


class LunarCalculator(ABC):
    """Maps Gregorian days onto the Thai lunar month."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def lunar_day(self, day: date) -> LunarDay:
        """
        Locate a Gregorian day in its lunar month.

        Raises:
            LunarCalculatorUnavailable: If this calculator cannot compute
        """
        pass


class NullLunarCalculator(LunarCalculator):
    """Calculator for deployments without lunar arithmetic."""

    @property
    def is_available(self) -> bool:
        return False

    def lunar_day(self, day: date) -> LunarDay:
        raise LunarCalculatorUnavailable("lunar calculation is not installed")


def get_lunar_calculator(enabled: bool = True) -> LunarCalculator:
    """
    Get the lunar calculator for this deployment.

    Returns EphemLunarCalculator when enabled and the `ephem` package is
    installed. Otherwise returns NullLunarCalculator, which makes the
    resolver skip straight from the remote source to the static table.
    """
    if enabled:
        try:
            from .ephem_calculator import EphemLunarCalculator
            logger.info("Using ephem lunar calculator for Wan Phra")
            return EphemLunarCalculator()
        except ImportError:
            logger.warning("ephem package not installed, lunar calculation disabled")

    logger.info("Using null lunar calculator (remote source and static table only)")
    return NullLunarCalculator()
