"""Querying and describing the database server version."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class DBVersion:
    """The server's version banner and its decoded number."""

    info: str = ""
    text: str = ""
    number: int = 0
    major_version: int = 0
    minor_version: int = 0
    patchset_version: int = 0
    is_db10g_r20_or_higher: bool = False
    is_db11g_r10_or_higher: bool = False

    @classmethod
    def from_number(cls, info: str, number: int) -> DBVersion:
        """Decode the packed version number sent by the server."""
        major = number >> 24 & 0xFF
        minor = number >> 20 & 0xF
        release = number >> 12 & 0xF
        patchset = number >> 8 & 0xF
        port = number & 0xFF
        return cls(
            info=info,
            text=f"{major}.{minor}.{release}.{patchset}.{port}",
            number=(major * 1000 + minor * 100 + release * 10 + patchset) & 0xFFFF,
            major_version=major,
            minor_version=minor,
            patchset_version=patchset,
            is_db10g_r20_or_higher=major > 10 or (major == 10 and minor >= 2),
            is_db11g_r10_or_higher=major > 11 or (major == 11 and minor >= 1),
        )


def get_db_version(session: Any) -> DBVersion:
    """Ask the server for its version over ``session``."""
    session.reset_buffer()
    session.put_bytes(3, 0x3B, 0, 1)
    session.put_uint(0x100, 2, True, True)
    session.put_bytes(1, 1)
    if session.ttc_version >= 11:
        session.put_uint(1, 4, True, True)
    session.write()
    msg = session.get_byte()
    if msg != 8:
        raise ValueError(f"message code error: received code {msg} and expected code is 8")
    length = session.get_int(2, True, True)
    info = session.get_string(length)
    number = session.get_int(4, True, True)
    return DBVersion.from_number(info, number)