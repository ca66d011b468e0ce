"""
anchorclock: Time Protocol Exchange

One SNTP round trip (RFC 2030 / RFC 4330 framing) against a single address.
Only the server's transmit timestamp is used; no delay or dispersion math.

Header byte layout:

     0 1 2 3 4 5 6 7
    +-+-+-+-+-+-+-+-+
    |LI | VN  |Mode |
    +-+-+-+-+-+-+-+-+
     0 0 0 1 1 0 1 1   = 0x1B  (LI=0 no warning, VN=3, Mode=3 client)
"""
import socket
import struct
import sys
from datetime import datetime
from typing import Final, Optional
from ..core.config import DEFAULT_NTP_PORT, DEFAULT_SOCKET_TIMEOUT
from ..core.logger import get_logger
from ..core.types import NtpTimestamp

logger = get_logger("TimeProtocolExchange")

PACKET_SIZE: Final[int] = 48
CLIENT_HEADER: Final[int] = 0x1B
TRANSMIT_TIMESTAMP_OFFSET: Final[int] = 40  # time the reply departed the server
UINT32_MAX: Final[int] = 0xFFFFFFFF

def build_request() -> bytes:
    """
    48-byte client request: header byte then zeros.
    """
    return bytes([CLIENT_HEADER]) + bytes(PACKET_SIZE - 1)

def swap_uint32(value: int) -> int:
    """
    Reverses the byte order of an unsigned 32-bit integer.
    """
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"not an unsigned 32-bit value: {value}")
    return (
        ((value & 0x000000FF) << 24)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x00FF0000) >> 8)
        | ((value & 0xFF000000) >> 24)
    )

def read_uint32_be(data: bytes, offset: int) -> int:
    """
    Reads a big-endian (network order) uint32 at offset and returns it in host order.
    """
    (raw,) = struct.unpack_from("=I", data, offset)
    if sys.byteorder == "little":
        return swap_uint32(raw)
    return raw

def decode_response(data: bytes) -> NtpTimestamp:
    """
    Extracts the transmit timestamp from a server reply.
    Raises ValueError on a short packet.
    """
    if len(data) < PACKET_SIZE:
        raise ValueError(f"NTP reply too short: {len(data)} bytes, expected {PACKET_SIZE}")
    return NtpTimestamp(
        seconds=read_uint32_be(data, TRANSMIT_TIMESTAMP_OFFSET),
        fraction=read_uint32_be(data, TRANSMIT_TIMESTAMP_OFFSET + 4),
    )

def query_server(
    address: str,
    port: int = DEFAULT_NTP_PORT,
    timeout: float = DEFAULT_SOCKET_TIMEOUT,
) -> Optional[datetime]:
    """
    Single UDP exchange with address:port.
    Returns the server's UTC time, or None if the server could not be reached in time
    or sent an unusable reply. Never retries.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.settimeout(timeout)
            sock.connect((address, port))
            sock.send(build_request())
            reply = sock.recv(PACKET_SIZE)
    except OSError as e:
        # timeout, refused, unreachable: caller moves on to the next candidate
        logger.debug("ntp_exchange_failed", address=address, port=port, error=repr(e))
        return None

    try:
        timestamp = decode_response(reply)
    except ValueError as e:
        logger.debug("ntp_reply_rejected", address=address, error=str(e))
        return None

    network_time = timestamp.to_datetime()
    logger.debug("ntp_exchange_succeeded", address=address, network_time=network_time.isoformat())
    return network_time
