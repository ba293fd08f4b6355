"""Date providers for the rotation engine.

The engine only needs "today" as a calendar date. ``NtpClock`` asks a list of
time servers in priority order and falls back to the system date when none
answers, so a machine with a wrong local clock still rotates on the right day.
"""

from __future__ import annotations

import socket
import struct
from datetime import date, datetime
from typing import List, Optional, Sequence


NTP_PORT = 123
NTP_PACKET_SIZE = 48
NTP_CLIENT_REQUEST = 0x1B  # LI=0, version 4, mode 3 (client)
NTP_TO_UNIX_OFFSET = 2208988800  # seconds between 1900-01-01 and 1970-01-01

DEFAULT_NTP_SERVERS = [
    "cn.pool.ntp.org",
    "ntp.aliyun.com",
    "ntp1.aliyun.com",
    "time.google.com",
    "time.windows.com",
    "pool.ntp.org",
    "time.apple.com",
]


class SystemClock:
    """Local system date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a settable date (tests, --date overrides)."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day

    def set(self, day: date) -> None:
        self.day = day


def build_ntp_request() -> bytes:
    """48-byte SNTP client request."""
    packet = bytearray(NTP_PACKET_SIZE)
    packet[0] = NTP_CLIENT_REQUEST
    return bytes(packet)


def parse_ntp_response(data: bytes) -> date:
    """
    Extract the local calendar date from an NTP response.

    Args:
        data: Raw response packet

    Returns:
        Local calendar date of the server's transmit timestamp

    Raises:
        ValueError: If the packet is too short
    """
    if len(data) < NTP_PACKET_SIZE:
        raise ValueError(f"Invalid NTP response size: {len(data)}")
    # Transmit timestamp, integer seconds part
    seconds_since_1900 = struct.unpack("!I", data[40:44])[0]
    unix_ts = seconds_since_1900 - NTP_TO_UNIX_OFFSET
    return datetime.fromtimestamp(unix_ts).date()


def query_ntp_date(server: str, timeout: float = 2.0) -> Optional[date]:
    """Ask one server for the current date. Returns None on any network or format failure."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.settimeout(timeout)
            sock.sendto(build_ntp_request(), (server, NTP_PORT))
            data, _ = sock.recvfrom(1024)
        return parse_ntp_response(data)
    except (OSError, ValueError) as e:
        print(f"[WARN] NTP query to {server} failed: {e}")
        return None


class NtpClock:
    """Date from the first NTP server that answers, system date otherwise."""

    def __init__(
        self,
        servers: Sequence[str] | None = None,
        timeout: float = 2.0,
        query=query_ntp_date,
        fallback: SystemClock | None = None,
    ):
        self.servers: List[str] = list(servers) if servers else list(DEFAULT_NTP_SERVERS)
        self.timeout = timeout
        self._query = query
        self._fallback = fallback or SystemClock()

    def today(self) -> date:
        for server in self.servers:
            day = self._query(server, self.timeout)
            if day is not None:
                print(f"[INFO] Got date from {server}: {day.isoformat()}")
                return day
        print("[WARN] All NTP servers failed, using system date")
        return self._fallback.today()
