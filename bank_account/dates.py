"""
Date Provider Module

The account never reads the system clock directly. It asks an injected
provider for "today", so behavior is deterministic under test.
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Optional


class DateProvider(ABC):
    """Abstract source of the current calendar date"""

    @abstractmethod
    def today(self) -> date:
        """Return today's date (day granularity)"""
        pass


class SystemDateProvider(DateProvider):
    """Date provider backed by the system clock"""

    def today(self) -> date:
        return date.today()


class FixedDateProvider(DateProvider):
    """Date provider returning a settable date, for tests and demos"""

    def __init__(self, today: Optional[date] = None):
        self._today = today or date.today()

    def today(self) -> date:
        return self._today

    def set_today(self, today: date) -> None:
        """Move the provider to a specific date"""
        self._today = today

    def advance(self, days: int = 1) -> date:
        """Move the provider forward by a number of days"""
        self._today = self._today + timedelta(days=days)
        return self._today
