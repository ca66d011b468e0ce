"""
anchorclock: Time Source Selector

Walks the candidate stream in order and returns the first usable network time.
Strictly sequential: worst-case latency is the sum of every lookup and exchange timeout.
"""
from datetime import datetime
from typing import Callable, Iterable, Iterator, Optional
from ..core.config import ClockSettings
from ..core.errors import NetworkTimeUnavailableError
from ..core.logger import get_logger
from ..core.types import Candidate
from .protocol import query_server
from .resolver import resolve_candidates

logger = get_logger("TimeSourceSelector")

Resolver = Callable[[Iterable[str], float], Iterator[Candidate]]
Exchange = Callable[[str, int, float], Optional[datetime]]

def fetch_network_time(
    settings: Optional[ClockSettings] = None,
    resolver: Resolver = resolve_candidates,
    exchange: Exchange = query_server,
) -> datetime:
    """
    Returns the first timestamp any candidate produces.
    Raises NetworkTimeUnavailableError naming the configured servers if none does.
    """
    settings = settings or ClockSettings()
    attempts = 0

    for candidate in resolver(settings.server_list, settings.dns_timeout):
        attempts += 1
        network_time = exchange(candidate.address, settings.port, settings.socket_timeout)
        if network_time is not None:
            logger.info("network_time_acquired",
                        host=candidate.host,
                        address=candidate.address,
                        attempts=attempts,
                        network_time=network_time.isoformat())
            return network_time

    logger.error("network_time_unavailable", servers=settings.servers, attempts=attempts)
    raise NetworkTimeUnavailableError(settings.servers)

class NetworkTimeSource:
    """
    Stateless time source backed by NTP.
    Anything exposing fetch() -> datetime can stand in for it.
    """
    def __init__(self, settings: Optional[ClockSettings] = None):
        self.settings = settings or ClockSettings()

    def fetch(self) -> datetime:
        return fetch_network_time(self.settings)
