"""
anchorclock: Domain Resolver

Turns the configured server string into a lazy stream of unique IPv4 candidates.
Each lookup is time-boxed; a slow or failing host simply yields nothing.
"""
import ipaddress
import re
import socket
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Iterable, Iterator, List, Set, Tuple
from ..core.config import DEFAULT_DNS_TIMEOUT
from ..core.logger import get_logger
from ..core.types import Candidate

logger = get_logger("DomainResolver")

_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
MAX_HOSTNAME_LENGTH = 253

def is_valid_hostname(name: str) -> bool:
    """
    True for an IP literal or a syntactically plausible DNS name.
    """
    if not name:
        return False
    try:
        ipaddress.ip_address(name)
        return True
    except ValueError:
        pass

    if name.endswith("."):
        name = name[:-1]
    if not name or len(name) > MAX_HOSTNAME_LENGTH:
        return False
    return all(_LABEL.match(label) for label in name.split("."))

def parse_server_list(csv_servers: str) -> Tuple[str, ...]:
    """
    Splits a comma-separated server string.
    Drops blank, invalid and repeated host names; keeps first-seen order.
    """
    hosts: List[str] = []
    for entry in csv_servers.split(","):
        host = entry.strip()
        if not is_valid_hostname(host):
            if host:
                logger.warning("invalid_server_name_skipped", host=host)
            continue
        if host not in hosts:
            hosts.append(host)
    return tuple(hosts)

def _lookup(host: str) -> List[str]:
    infos = socket.getaddrinfo(host, None, socket.AF_INET, socket.SOCK_DGRAM)
    addresses: List[str] = []
    for _family, _type, _proto, _canonname, sockaddr in infos:
        if sockaddr[0] not in addresses:
            addresses.append(sockaddr[0])
    return addresses

def resolve_host(host: str, timeout: float = DEFAULT_DNS_TIMEOUT) -> List[str]:
    """
    IPv4 addresses for host, or [] if the lookup fails or overruns timeout.
    An overrunning lookup is abandoned, not cancelled; its thread finishes on its own.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dns")
    try:
        future = executor.submit(_lookup, host)
        try:
            return future.result(timeout=timeout)
        except FutureTimeout:
            logger.debug("dns_lookup_timeout", host=host, timeout_s=timeout)
            return []
        except OSError as e:
            # socket.gaierror and friends
            logger.debug("dns_lookup_failed", host=host, error=str(e))
            return []
    finally:
        executor.shutdown(wait=False)

def resolve_candidates(servers: Iterable[str], timeout: float = DEFAULT_DNS_TIMEOUT) -> Iterator[Candidate]:
    """
    Yields unique candidates, resolving one host per pull.
    Single pass: calling again re-runs every lookup.
    """
    seen: Set[str] = set()
    for host in servers:
        for address in resolve_host(host, timeout):
            if address in seen:
                continue
            seen.add(address)
            yield Candidate(host=host, address=address)
