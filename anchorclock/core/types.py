from datetime import datetime, timedelta, timezone
from typing import Final
from pydantic import BaseModel, ConfigDict, Field

# Constants
MILLISECONDS_PER_SECOND: Final[int] = 1_000
FRACTION_SCALE: Final[int] = 2**32  # one second in NTP fractional units

# 1900-01-01T00:00:00Z, origin of NTP era 0
NTP_EPOCH: Final[datetime] = datetime(1900, 1, 1, tzinfo=timezone.utc)

class Candidate(BaseModel):
    """
    A resolved IPv4 address for a configured time server host name.
    Eligible for exactly one protocol exchange attempt.
    """
    model_config = ConfigDict(frozen=True)

    host: str # configured host name, e.g. "us.pool.ntp.org"
    address: str # dotted IPv4, e.g. "192.0.2.10"

class NtpTimestamp(BaseModel):
    """
    64-bit NTP timestamp: whole seconds since NTP_EPOCH plus a 32-bit fraction.
    Both fields are already in host byte order.
    """
    model_config = ConfigDict(frozen=True)

    seconds: int = Field(ge=0, lt=FRACTION_SCALE)
    fraction: int = Field(ge=0, lt=FRACTION_SCALE)

    def to_milliseconds(self) -> int:
        """
        Milliseconds elapsed since NTP_EPOCH. The fraction is truncated, not rounded.
        """
        return self.seconds * MILLISECONDS_PER_SECOND + (self.fraction * MILLISECONDS_PER_SECOND) // FRACTION_SCALE

    def to_datetime(self) -> datetime:
        """
        Absolute UTC instant, tz-aware.
        """
        return NTP_EPOCH + timedelta(milliseconds=self.to_milliseconds())
