"""Physical row identifiers and their base-64 text form."""

from __future__ import annotations

from dataclasses import dataclass

from .network.codec import MessageCodec

_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_NEGATIVE_SHIFT_ADJUST = 2 << 25


def _to_int64(number: int) -> int:
    return ((number + (1 << 63)) % (1 << 64)) - (1 << 63)


def convert_rowid_to_bytes(number: int, size: int) -> bytes:
    """Encode ``number`` as ``size`` base-64 characters, most significant first."""
    number = _to_int64(number)
    output = bytearray(size)
    for position in reversed(range(size)):
        output[position] = _ALPHABET[number & 0x3F]
        if number >= 0:
            number >>= 6
        else:
            number = _to_int64((number >> 6) + _NEGATIVE_SHIFT_ADJUST)
    return bytes(output)


@dataclass
class RowID:
    """Location of a row: object, file, block and slot numbers."""

    rba: int = 0
    partition_id: int = 0
    block_number: int = 0
    slot_number: int = 0

    @classmethod
    def read(cls, session: MessageCodec) -> RowID | None:
        """Read a row id from the session; None when absent or all zero."""
        if session.get_byte() == 0:
            return None
        rba = session.get_int(4, True, True)
        partition_id = session.get_int(2, True, True)
        marker = session.get_byte()
        block_number = session.get_int(4, True, True)
        slot_number = session.get_int(2, True, True)
        if not any((rba, partition_id, marker, block_number, slot_number)):
            return None
        return cls(rba, partition_id, block_number, slot_number)

    def to_bytes(self) -> bytes:
        """Return the 18-character text form of the row id."""
        return (
            convert_rowid_to_bytes(self.rba, 6)
            + convert_rowid_to_bytes(self.partition_id, 3)
            + convert_rowid_to_bytes(self.block_number, 6)
            + convert_rowid_to_bytes(self.slot_number, 3)
        )