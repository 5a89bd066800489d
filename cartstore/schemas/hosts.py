"""
Schemas describing database replicas and their measured latency.

A replica list is configured as ``"host1:5432, host2, host3:6432"``. Each entry
becomes a HostCandidate; every probe attempt against it yields a
LatencyMeasurement, and the winner of the selection is a SelectedHost.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cartstore.exceptions import ConfigurationError

DEFAULT_POSTGRES_PORT = 5432


class HostCandidate(BaseModel):
    """One replica endpoint that may serve the cart table."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1, description="Hostname or IP address")
    port: int = Field(DEFAULT_POSTGRES_PORT, ge=1, le=65535, description="TCP port")

    def __str__(self) -> str:
        if ":" in self.address:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"

    @classmethod
    def parse(cls, entry: str) -> "HostCandidate":
        """
        Parse a single ``host[:port]`` entry.

        IPv6 literals are written ``[addr]:port`` or ``[addr]``; a bare literal
        such as ``::1`` is taken as an address on the default port.

        Raises:
            ConfigurationError: If the entry is empty or the port is not a valid number
        """
        entry = entry.strip()
        if entry.startswith("["):
            address, bracket, rest = entry[1:].partition("]")
            if not bracket or (rest and not rest.startswith(":")):
                raise ConfigurationError(f"Invalid database host entry: '{entry}'")
            port_text = rest[1:]
        elif entry.count(":") > 1:
            address, port_text = entry, ""
        else:
            address, sep, port_text = entry.rpartition(":")
            if not sep:
                address, port_text = entry, ""
        address = address.strip()
        port_text = port_text.strip()

        if not address:
            raise ConfigurationError(f"Invalid database host entry: '{entry}'")
        if not port_text:
            return cls(address=address)
        if not port_text.isdigit() or not 1 <= int(port_text) <= 65535:
            raise ConfigurationError(f"Invalid port in database host entry: '{entry}'")
        return cls(address=address, port=int(port_text))


def parse_host_list(host_list: Optional[str]) -> List[HostCandidate]:
    """
    Parse a comma-separated replica list.

    Whitespace around entries is trimmed and empty entries are skipped.

    Raises:
        ConfigurationError: If the list is empty or contains a malformed entry
    """
    if not host_list or not host_list.strip():
        raise ConfigurationError("PGEDGE_HOSTS_LIST is not configured.")

    candidates = [HostCandidate.parse(entry) for entry in host_list.split(",") if entry.strip()]
    if not candidates:
        raise ConfigurationError("PGEDGE_HOSTS_LIST does not contain any hosts.")
    return candidates


class LatencyMeasurement(BaseModel):
    """Outcome of a single probe attempt. Failed attempts carry no duration."""

    model_config = ConfigDict(frozen=True)

    host: HostCandidate
    elapsed: Optional[float] = Field(None, ge=0, description="Round-trip time in seconds")
    success: bool

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds, infinite for a failed attempt."""
        if not self.success or self.elapsed is None:
            return float("inf")
        return self.elapsed * 1000


class SelectedHost(BaseModel):
    """The replica picked at startup. Never changes afterwards."""

    model_config = ConfigDict(frozen=True)

    host: HostCandidate
    mean_latency: float = Field(..., ge=0, description="Mean successful probe time in seconds")

    @property
    def address(self) -> str:
        return self.host.address

    @property
    def port(self) -> int:
        return self.host.port
