"""
anchorclock: Configuration

Time server list and network timeouts. Immutable once built.
"""
import os
from typing import Dict, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SERVERS = "us.pool.ntp.org,time.windows.com"
DEFAULT_DNS_TIMEOUT = 0.15    # seconds per host name lookup
DEFAULT_SOCKET_TIMEOUT = 0.5  # seconds per UDP exchange
DEFAULT_NTP_PORT = 123

ENV_PREFIX = "ANCHORCLOCK_"

class ClockSettings(BaseModel):
    """
    Settings for acquiring network time.
    """
    model_config = ConfigDict(frozen=True)

    servers: str = DEFAULT_SERVERS # comma-separated host names
    dns_timeout: float = Field(default=DEFAULT_DNS_TIMEOUT, gt=0)
    socket_timeout: float = Field(default=DEFAULT_SOCKET_TIMEOUT, gt=0)
    port: int = Field(default=DEFAULT_NTP_PORT, ge=1, le=65535)

    @property
    def server_list(self) -> Tuple[str, ...]:
        """Validated, de-duplicated host names in configured order."""
        from ..network.resolver import parse_server_list
        return parse_server_list(self.servers)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ClockSettings":
        """
        Builds settings from ANCHORCLOCK_* environment variables.
        Keyword overrides that are not None win over the environment.
        Raises pydantic.ValidationError on malformed values.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, object] = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
