from .protocol import query_server, decode_response, build_request
from .resolver import parse_server_list, resolve_candidates
from .selector import NetworkTimeSource, fetch_network_time

__all__ = [
    "query_server",
    "decode_response",
    "build_request",
    "parse_server_list",
    "resolve_candidates",
    "NetworkTimeSource",
    "fetch_network_time",
]
