"""Protocol negotiation: the first exchange after the transport handshake."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_CLIENT_BANNER = b"OracleClientGo\x00"
_ORACLE_VERSIONS = {4: 7230, 5: 8030, 6: 8100}


@dataclass
class TCPNego:
    """What the server announced about its protocol, character sets and capabilities."""

    message_code: int = 0
    protocol_server_version: int = 0
    protocol_server_string: str = ""
    oracle_version: int = 0
    server_charset: int = 0
    server_flags: int = 0
    charset_elem: int = 0
    server_ncharset: int = 0
    server_compile_time_caps: bytes = b""
    server_runtime_caps: bytes = b""
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def negotiate(cls, session: Any) -> TCPNego:
        """Send the client's protocol offer and read the server's answer.

        Capability flags found in the answer are set on ``session``.
        """
        session.reset_buffer()
        session.put_bytes(1, 6, 0)
        session.put_bytes(_CLIENT_BANNER)
        session.write()

        result = cls()
        result.message_code = session.get_byte()
        if result.message_code != 1:
            raise ValueError(
                f"message code error: received code {result.message_code} "
                "and expected code is 1"
            )
        result.protocol_server_version = session.get_byte()
        try:
            result.oracle_version = _ORACLE_VERSIONS[result.protocol_server_version]
        except KeyError:
            raise ValueError("unsupported server version") from None
        session.get_byte()
        result.protocol_server_string = session.get_null_term_string(50)
        result.server_charset = session.get_int(2, False, False)
        result.server_flags = session.get_byte()
        result.charset_elem = session.get_int(2, False, False)
        if result.charset_elem > 0:
            session.get_bytes(result.charset_elem * 5)

        length = session.get_int(2, False, True)
        fsvs = session.get_bytes(length)
        if len(fsvs) < 7:
            raise ValueError("server character set data too short")
        offset = (6 + fsvs[5] + fsvs[6]) & 0xFF
        if len(fsvs) < offset + 5:
            raise ValueError("server character set data too short")
        result.server_ncharset = int.from_bytes(fsvs[offset + 3:offset + 5], "big")

        result.server_compile_time_caps = session.get_bytes(session.get_byte())
        result.server_runtime_caps = session.get_bytes(session.get_byte())

        caps = result.server_compile_time_caps
        if len(caps) < 8:
            raise ValueError("server compile time caps length less than 8")
        if len(caps) <= 16:
            raise ValueError("server compile time caps too short")
        if caps[15] & 1:
            session.has_eos_capability = True
        if caps[16] & 1:
            session.has_fsap_capability = True
        if len(caps) > 37 and caps[37] & 32:
            session.use_big_clr_chunks = True
            session.clr_chunk_size = 0x7FFF
        return result