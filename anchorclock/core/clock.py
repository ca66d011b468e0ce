import datetime as dt
import threading
import time
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Protocol
from .clock_interface import ClockInterface
from .errors import AlreadyInitializedError, NotInitializedError
from .logger import get_logger

logger = get_logger("InternalClock")

def monotonic_us() -> int:
    """
    Current monotonic reading in microseconds (int64).
    Only meaningful as a difference between two readings.
    """
    # monotonic_ns returns nanoseconds. Divide by 1000 to get microseconds.
    return time.monotonic_ns() // 1000

class TimeSource(Protocol):
    def fetch(self) -> datetime: ...

class InternalClock(ClockInterface):
    """
    Application clock independent of the system wall clock.

    Initialized once, either with an explicit time or from network time.
    Every query afterwards is genesis + (reading() - anchor); the live system
    clock is only ever used to measure elapsed time.
    """
    def __init__(
        self,
        time_source: Optional[TimeSource] = None,
        reading: Callable[[], int] = monotonic_us,
    ):
        self._time_source = time_source
        self._reading = reading
        self._lock = threading.Lock()
        self._genesis: Optional[datetime] = None
        self._anchor_us: int = 0
        self._initialized = False

    def initialize(self, explicit_time: Optional[datetime] = None) -> None:
        """
        Fixes genesis and anchor. Raises AlreadyInitializedError on a second call.
        Without explicit_time the genesis comes from the time source; its errors
        propagate and leave the clock uninitialized.
        """
        with self._lock:
            if self._initialized:
                raise AlreadyInitializedError()

            if explicit_time is not None:
                source = "explicit"
                # Naive datetimes are taken as local time
                genesis = explicit_time if explicit_time.tzinfo is not None else explicit_time.astimezone()
            else:
                source = "network"
                genesis = self._resolve_time_source().fetch()

            self._genesis = genesis
            self._anchor_us = self._reading()
            self._initialized = True

        logger.info("clock_initialized", source=source, genesis=genesis.isoformat())

    def _resolve_time_source(self) -> TimeSource:
        if self._time_source is None:
            from ..network.selector import NetworkTimeSource
            self._time_source = NetworkTimeSource()
        return self._time_source

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def genesis(self) -> datetime:
        self._require_initialized()
        return self._genesis

    def _require_initialized(self):
        if not self._initialized:
            raise NotInitializedError()

    def _current(self) -> datetime:
        self._require_initialized()
        elapsed_us = self._reading() - self._anchor_us
        return self._genesis + timedelta(microseconds=elapsed_us)

    def now(self) -> datetime:
        return self._current().astimezone()

    def utc_now(self) -> datetime:
        return self._current().astimezone(timezone.utc)

    def now_date(self) -> date:
        return self.now().date()

    def now_time(self) -> dt.time:
        return self.now().time()

_default_clock: Optional[InternalClock] = None
_default_lock = threading.Lock()

def get_clock() -> InternalClock:
    """
    Process-wide default clock, created on first use.
    Prefer passing an explicitly constructed InternalClock where possible.
    """
    global _default_clock
    with _default_lock:
        if _default_clock is None:
            _default_clock = InternalClock()
        return _default_clock
