import hashlib

import pytest

from oraproto.network.security import (
    OracleNetworkCBCCryptor,
    OracleNetworkHash,
    OracleNetworkHash2,
    _RC4,
    pkcs5_padding,
)

KEY = bytes(range(1, 17))
IV = bytes(range(100, 116))
DATA = b"select 1 from dual"


def test_rc4_known_vector():
    assert _RC4(b"Key").process(b"Plaintext") == bytes.fromhex("bbf316e8d940af0ad3")


def test_rc4_stream_continues_across_calls():
    whole = _RC4(b"Key").keystream(10)
    split = _RC4(b"Key")
    assert split.keystream(4) + split.keystream(6) == whole


@pytest.mark.parametrize("cls", [OracleNetworkHash, OracleNetworkHash2])
def test_compute_deterministic_and_advancing(cls):
    a = cls(hashlib.sha256, KEY, IV)
    b = cls(hashlib.sha256, KEY, IV)
    first_a, first_b = a.compute(DATA), b.compute(DATA)
    second_a = a.compute(DATA)
    assert first_a == first_b
    assert len(first_a) == hashlib.sha256().digest_size
    assert second_a != first_a


@pytest.mark.parametrize("cls", [OracleNetworkHash, OracleNetworkHash2])
def test_init_keeps_peers_in_step(cls):
    a = cls(hashlib.sha256, KEY, IV)
    b = cls(hashlib.sha256, KEY, IV)
    untouched = cls(hashlib.sha256, KEY, IV)
    a.init()
    b.init()
    assert a.compute(DATA) == b.compute(DATA)
    assert a.compute(DATA) != untouched.compute(DATA)


@pytest.mark.parametrize("cls", [OracleNetworkHash, OracleNetworkHash2])
def test_validate_short_input(cls):
    checker = cls(hashlib.sha256, KEY, IV)
    with pytest.raises(ValueError, match="lesser than hash size"):
        checker.validate(bytes(32))


@pytest.mark.parametrize("cls", [OracleNetworkHash, OracleNetworkHash2])
def test_validate_rejects_wrong_hash(cls):
    checker = cls(hashlib.sha256, KEY, IV)
    with pytest.raises(ValueError, match="data integrity check failed"):
        checker.validate(DATA + bytes(32))


@pytest.mark.parametrize("cls", [OracleNetworkHash, OracleNetworkHash2])
def test_short_key_rejected(cls):
    with pytest.raises(ValueError):
        cls(hashlib.sha256, b"abc", IV)


def test_hash2_needs_block_multiple_digest():
    with pytest.raises(ValueError):
        OracleNetworkHash2(hashlib.sha1, KEY, IV)


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 100])
def test_cbc_round_trip(length):
    cryptor = OracleNetworkCBCCryptor(KEY, IV)
    plain = bytes(range(length))
    encrypted = cryptor.encrypt(plain)
    assert (len(encrypted) - 1) % 16 == 0
    assert encrypted[-1] == len(encrypted) - 1 - length + 1
    assert cryptor.decrypt(encrypted) == plain


def test_cbc_decrypt_bad_length():
    with pytest.raises(ValueError, match="invalid padding"):
        OracleNetworkCBCCryptor(KEY, IV).decrypt(bytes(16))


def test_cbc_decrypt_bad_pad_byte():
    with pytest.raises(ValueError, match="invalid padding"):
        OracleNetworkCBCCryptor(KEY, IV).decrypt(bytes(16) + bytes([17]))


def test_cbc_bad_key_size():
    with pytest.raises(ValueError):
        OracleNetworkCBCCryptor(b"short", IV)


def test_pkcs5_padding_value():
    assert pkcs5_padding(b"abc", 8) == b"abc" + b"\x05" * 5


@pytest.mark.parametrize("length", [0, 7, 8, 9])
def test_pkcs5_padding_invariant(length):
    padded = pkcs5_padding(bytes(length), 8)
    assert len(padded) % 8 == 0
    assert padded[-padded[-1]:] == bytes([padded[-1]]) * padded[-1]
    assert 1 <= padded[-1] <= 8