from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import Optional

class ClockInterface(ABC):
    """
    Abstract Base Class for application clocks.
    Components needing the time should depend on this, not on a concrete clock.
    """

    @abstractmethod
    def initialize(self, explicit_time: Optional[datetime] = None) -> None:
        """
        Fixes the clock's reference time. May succeed only once.
        """
        pass

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        pass

    @abstractmethod
    def now(self) -> datetime:
        """
        Current time as a tz-aware local datetime.
        """
        pass

    @abstractmethod
    def utc_now(self) -> datetime:
        pass

    @abstractmethod
    def now_date(self) -> date:
        pass

    @abstractmethod
    def now_time(self) -> time:
        pass
