import pytest

from oraproto.network.codec import MessageCodec


def _loop(writer: MessageCodec) -> MessageCodec:
    reader = MessageCodec()
    reader.use_big_clr_chunks = writer.use_big_clr_chunks
    reader.feed(writer.pending_output())
    return reader


def test_put_uint_compressed_wire_bytes():
    codec = MessageCodec()
    codec.put_uint(0x100, 2, True, True)
    assert codec.pending_output() == b"\x02\x01\x00"


def test_put_int_zero_compressed_is_single_zero():
    codec = MessageCodec()
    codec.put_int(0, 4, True, True)
    assert codec.pending_output() == b"\x00"


@pytest.mark.parametrize("value", [0, 1, 255, 256, 65535, 123456789, 2**40 + 7])
def test_compressed_uint_round_trip(value):
    writer = MessageCodec()
    writer.put_uint(value, 8, True, True)
    assert _loop(writer).get_int(8, True, True) == value


@pytest.mark.parametrize("size", [2, 4, 8])
@pytest.mark.parametrize("big_endian", [True, False])
def test_fixed_width_round_trip(size, big_endian):
    writer = MessageCodec()
    writer.put_int(513, size, big_endian, False)
    assert len(writer.pending_output()) == size
    assert _loop(writer).get_int(size, False, big_endian) == 513


def test_byte_order_differs_between_endianness():
    big = MessageCodec()
    little = MessageCodec()
    big.put_uint(0x0102, 2, True, False)
    little.put_uint(0x0102, 2, False, False)
    assert big.pending_output() == little.pending_output()[::-1]


def test_negative_flag_in_compressed_read():
    reader = MessageCodec()
    reader.feed(b"\x81\x05")
    assert reader.get_int(4, True, True) == -5


def test_put_bytes_mixes_ints_and_bytes():
    codec = MessageCodec()
    codec.put_bytes(3, 0x3B, b"ab", 0)
    reader = _loop(codec)
    assert reader.get_byte() == 3
    assert reader.get_byte() == 0x3B
    assert reader.get_bytes(2) == b"ab"
    assert reader.get_byte() == 0


def test_put_uint_rejects_non_integer():
    with pytest.raises(TypeError):
        MessageCodec().put_uint("1", 4, True, True)


def test_short_clr_round_trip():
    writer = MessageCodec()
    writer.put_clr(b"hello")
    assert writer.pending_output()[0] == len(b"hello")
    assert _loop(writer).get_clr() == b"hello"


def test_empty_clr_reads_as_null():
    writer = MessageCodec()
    writer.put_clr(b"")
    assert _loop(writer).get_clr() is None


def test_long_clr_round_trip_with_small_chunks():
    data = bytes(range(256)) * 2
    writer = MessageCodec()
    writer.clr_chunk_size = 0x3F
    writer.put_clr(data)
    assert writer.pending_output()[0] == 0xFE
    assert _loop(writer).get_clr() == data


def test_long_clr_round_trip_with_big_chunks():
    data = b"x" * 1000
    writer = MessageCodec()
    writer.use_big_clr_chunks = True
    writer.clr_chunk_size = 0x7FFF
    writer.put_clr(data)
    assert _loop(writer).get_clr() == data


def test_default_chunk_size_is_rejected_by_reader():
    writer = MessageCodec()
    writer.put_clr(b"y" * 300)
    with pytest.raises(ValueError, match="invalid chunk size"):
        _loop(writer).get_clr()


def test_key_val_round_trip():
    writer = MessageCodec()
    writer.put_key_val_string("AUTH_KEY", "value", 7)
    assert _loop(writer).get_key_val() == (b"AUTH_KEY", b"value", 7)


def test_key_val_with_empty_parts():
    writer = MessageCodec()
    writer.put_key_val(b"", b"", 0)
    assert _loop(writer).get_key_val() == (None, None, 0)


def test_dlc_truncates_to_declared_length():
    writer = MessageCodec()
    writer.put_uint(3, 4, True, True)
    writer.put_clr(b"abcdef")
    assert _loop(writer).get_dlc() == b"abc"


def test_get_string_truncates():
    writer = MessageCodec()
    writer.put_string("database")
    assert _loop(writer).get_string(4) == "data"


def test_null_terminated_string_advances_past_terminator():
    reader = MessageCodec()
    reader.feed(b"abc\x00def")
    assert reader.get_null_term_string(7) == "abc"
    assert reader.get_bytes(3) == b"def"


def test_null_terminated_string_without_terminator():
    reader = MessageCodec()
    reader.feed(b"abcd")
    assert reader.get_null_term_string(4) == "abcd"


def test_reading_past_end_raises():
    reader = MessageCodec()
    reader.feed(b"\x01")
    reader.get_byte()
    with pytest.raises(EOFError):
        reader.get_byte()


def test_reset_buffer_clears_both_sides():
    codec = MessageCodec()
    codec.put_bytes(1, 2, 3)
    codec.feed(b"\x09")
    codec.reset_buffer()
    assert codec.pending_output() == b""
    with pytest.raises(EOFError):
        codec.get_byte()


def test_oversized_integer_rejected():
    reader = MessageCodec()
    reader.feed(b"\x09" + bytes(9))
    with pytest.raises(ValueError):
        reader.get_int(4, True, True)