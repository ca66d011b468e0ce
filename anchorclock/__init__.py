"""
anchorclock

Application clock pinned once to an explicit or network (SNTP) time,
then advanced by the local monotonic clock.
"""
from .core.clock import InternalClock, get_clock
from .core.clock_interface import ClockInterface
from .core.config import ClockSettings
from .core.errors import (
    ClockError,
    NotInitializedError,
    AlreadyInitializedError,
    NetworkTimeUnavailableError,
)
from .network.selector import NetworkTimeSource, fetch_network_time

__all__ = [
    "InternalClock",
    "get_clock",
    "ClockInterface",
    "ClockSettings",
    "ClockError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "NetworkTimeUnavailableError",
    "NetworkTimeSource",
    "fetch_network_time",
]
