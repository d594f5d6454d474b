"""Encoding and decoding of the primitive values carried in session messages."""

from __future__ import annotations

from typing import Any

_UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF
_INT64_RANGE = 1 << 64
_INT64_SIGN = 1 << 63
_CLR_CHUNKED = 0xFE
_CLR_NULL = 0xFF
_CLR_MAX_INLINE = 0xFC
_MAX_UNTERMINATED_CHUNK = 1024 * 4


def _to_int64(number: int) -> int:
    return ((number + _INT64_SIGN) % _INT64_RANGE) - _INT64_SIGN


def _fixed(number: int, size: int, big_endian: bool) -> bytes:
    if size in (2, 4, 8):
        mask = (1 << (size * 8)) - 1
        return (number & mask).to_bytes(size, "big" if big_endian else "little")
    return bytes(size)


def _require_int(number: Any) -> int:
    if isinstance(number, bool) or not isinstance(number, int):
        raise TypeError("you need to pass an integer to this function")
    return number


class MessageCodec:
    """An output buffer for building messages and an input buffer for parsing them.

    Reading past the end of the input asks ``_receive`` for more bytes; the base
    class has no source of data and raises ``EOFError``.
    """

    def __init__(self) -> None:
        self._in_buffer = bytearray()
        self._index = 0
        self._out_buffer = bytearray()
        self.ttc_version = 0
        self.has_eos_capability = False
        self.has_fsap_capability = False
        self.use_big_clr_chunks = False
        self.use_big_scn = False
        self.clr_chunk_size = 0x40
        self.str_conv: Any = None

    # buffer management

    def reset_buffer(self) -> None:
        """Discard all buffered input and output."""
        self._in_buffer = bytearray()
        self._index = 0
        self._out_buffer = bytearray()

    def feed(self, data: bytes) -> None:
        """Append received bytes to the input buffer."""
        self._in_buffer += data

    def pending_output(self) -> bytes:
        """Return the bytes written so far and not yet sent."""
        return bytes(self._out_buffer)

    def _receive(self) -> bytes:
        raise EOFError("not enough data in the input buffer")

    def _read(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("cannot read a negative number of bytes")
        while self._index + count > len(self._in_buffer):
            chunk = self._receive()
            if not chunk:
                raise EOFError("not enough data in the input buffer")
            self._in_buffer += chunk
        data = bytes(self._in_buffer[self._index:self._index + count])
        self._index += count
        return data

    # writing

    def put_bytes(self, *args: int | bytes) -> None:
        """Write single byte values and byte strings in order."""
        for item in args:
            if isinstance(item, int):
                self._out_buffer.append(item)
            else:
                self._out_buffer += item

    def put_uint(self, number: int, size: int, big_endian: bool, compress: bool) -> None:
        """Write an unsigned integer, fixed width or length-prefixed."""
        num = _require_int(number) & _UINT64_MASK
        if size == 1:
            self._out_buffer.append(num & 0xFF)
            return
        if compress:
            temp = num.to_bytes(8, "big").lstrip(b"\x00")
            size = min(size, len(temp))
            if size == 0:
                self._out_buffer.append(0)
            else:
                self._out_buffer.append(size)
                self._out_buffer += temp
        else:
            self._out_buffer += _fixed(num, size, big_endian)

    def put_int(self, number: int, size: int, big_endian: bool, compress: bool) -> None:
        """Write a signed integer, fixed width or length-prefixed."""
        num = _to_int64(_require_int(number))
        if compress:
            temp = (num & _UINT64_MASK).to_bytes(8, "big").lstrip(b"\x00")
            size = min(size, len(temp))
            if size == 0:
                self._out_buffer.append(0)
            else:
                if num < 0:
                    size &= 0x80
                self._out_buffer.append(size)
                self._out_buffer += temp
        elif size == 1:
            self._out_buffer.append(num & 0xFF)
        else:
            self._out_buffer += _fixed(num, size, big_endian)

    def put_clr(self, data: bytes) -> None:
        """Write a length-prefixed byte string, chunked when long."""
        length = len(data)
        if length > _CLR_MAX_INLINE:
            self._out_buffer.append(_CLR_CHUNKED)
            for start in range(0, length, self.clr_chunk_size):
                chunk = data[start:start + self.clr_chunk_size]
                if self.use_big_clr_chunks:
                    self.put_int(len(chunk), 4, True, True)
                else:
                    self._out_buffer.append(len(chunk))
                self._out_buffer += chunk
            self._out_buffer.append(0)
        elif length == 0:
            self._out_buffer.append(0)
        else:
            self._out_buffer.append(length)
            self._out_buffer += data

    def put_string(self, text: str) -> None:
        self.put_clr(text.encode("utf-8"))

    def put_key_val(self, key: bytes, val: bytes, num: int) -> None:
        """Write a key, a value and a numeric flag."""
        for item in (key, val):
            if not item:
                self._out_buffer.append(0)
            else:
                self.put_uint(len(item), 4, True, True)
                self.put_clr(item)
        self.put_int(num, 4, True, True)

    def put_key_val_string(self, key: str, val: str, num: int) -> None:
        self.put_key_val(key.encode("utf-8"), val.encode("utf-8"), num)

    # reading

    def get_byte(self) -> int:
        return self._read(1)[0]

    def get_int(self, size: int, compress: bool, big_endian: bool) -> int:
        """Read a signed 64-bit integer, fixed width or length-prefixed."""
        negative = False
        if compress:
            size = self.get_byte()
            if size & 0x80:
                negative = True
                size &= 0x7F
            big_endian = True
        if size == 0:
            return 0
        if size > 8:
            raise ValueError(f"integer size {size} exceeds 8 bytes")
        raw = self._read(size)
        value = _to_int64(int.from_bytes(raw, "big" if big_endian else "little"))
        if negative:
            value = _to_int64(-value)
        return value

    def get_bytes(self, length: int) -> bytes:
        return self._read(length)

    def get_null_term_string(self, max_size: int) -> str:
        """Read up to ``max_size`` bytes and return the text before the first NUL."""
        start = self._index
        data = self._read(max_size)
        found = data.find(b"\x00")
        if found > 0:
            self._index = start + found + 1
            return data[:found].decode("utf-8", errors="replace")
        return data.decode("utf-8", errors="replace")

    def get_clr(self) -> bytes | None:
        """Read a length-prefixed byte string; None stands for a null value."""
        size = self.get_byte()
        if size in (0, _CLR_NULL):
            return None
        if size != _CLR_CHUNKED:
            return self._read(size)
        output = bytearray()
        if not self.use_big_clr_chunks:
            while True:
                header = self.get_byte()
                if header == 0:
                    break
                if header == 0xFF:
                    while True:
                        value = self.get_byte()
                        if value == 0:
                            break
                        output.append(value)
                        if len(output) >= _MAX_UNTERMINATED_CHUNK:
                            break
                    break
                if header >= 64:
                    raise ValueError(f"invalid chunk size: {header}")
                output += self._read(header)
            return bytes(output)
        while True:
            chunk_size = self.get_int(4, True, True)
            if chunk_size == 0:
                break
            output += self._read(chunk_size)
        return bytes(output)

    def get_dlc(self) -> bytes | None:
        """Read a declared length followed by a byte string of at most that length."""
        length = self.get_int(4, True, True)
        if length <= 0:
            return None
        output = self.get_clr()
        if output is not None and len(output) > length:
            output = output[:length]
        return output

    def get_string(self, length: int) -> str:
        data = self.get_clr() or b""
        return data[:length].decode("utf-8", errors="replace")

    def get_key_val(self) -> tuple[bytes | None, bytes | None, int]:
        """Read a key, a value and a numeric flag."""
        key = self.get_dlc()
        val = self.get_dlc()
        num = self.get_int(4, True, True)
        return key, val, num