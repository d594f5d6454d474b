"""Network data integrity and encryption algorithms."""

from __future__ import annotations

import hmac
from typing import Any, Callable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

HashFactory = Callable[[], Any]

_BLOCK = 16


class _RC4:
    """A streaming RC4 keystream whose state carries across calls."""

    def __init__(self, key: bytes) -> None:
        if not 1 <= len(key) <= 256:
            raise ValueError("invalid RC4 key size")
        state = list(range(256))
        j = 0
        for i in range(256):
            j = (j + state[i] + key[i % len(key)]) & 0xFF
            state[i], state[j] = state[j], state[i]
        self._state = state
        self._i = 0
        self._j = 0

    def keystream(self, size: int) -> bytes:
        state = self._state
        out = bytearray()
        for _ in range(size):
            self._i = (self._i + 1) & 0xFF
            self._j = (self._j + state[self._i]) & 0xFF
            state[self._i], state[self._j] = state[self._j], state[self._i]
            out.append(state[(state[self._i] + state[self._j]) & 0xFF])
        return bytes(out)

    def process(self, data: bytes) -> bytes:
        return bytes(a ^ b for a, b in zip(data, self.keystream(len(data))))


def _cbc_encryptor(key: bytes, iv: bytes) -> Any:
    return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv))).encryptor()


def _check_integrity(data: bytes, size: int, salt: bytes, factory: HashFactory) -> bytes:
    original, received = data[:-size], data[-size:]
    digest = factory()
    digest.update(original)
    digest.update(salt)
    if hmac.compare_digest(received, digest.digest()):
        return original
    raise ValueError("data integrity check failed")


class OracleNetworkHash:
    """Data integrity checksum keyed by an RC4 keystream."""

    def __init__(self, hash_factory: HashFactory, key: bytes, iv: bytes) -> None:
        if len(key) < 5:
            raise ValueError("integrity key must hold at least 5 bytes")
        self.hash_factory = hash_factory
        self._size = hash_factory().digest_size
        self._key_gen = _RC4(bytes(key[-5:]) + b"\xff" + bytes(iv))
        self.init()

    def init(self) -> None:
        seed = self._key_gen.keystream(5)
        self._encryptor = _RC4(seed + bytes([90]))
        self._decryptor = _RC4(seed + bytes([180]))

    def compute(self, data: bytes) -> bytes:
        salt = self._encryptor.keystream(self._size)
        digest = self.hash_factory()
        digest.update(data)
        digest.update(salt)
        return digest.digest()

    def validate(self, data: bytes) -> bytes:
        if len(data) <= self._size:
            raise ValueError("data integrity check failed: size of the input lesser than hash size")
        salt = self._decryptor.keystream(self._size)
        return _check_integrity(data, self._size, salt, self.hash_factory)


class OracleNetworkHash2:
    """Data integrity checksum keyed by AES-CBC generated blocks."""

    def __init__(self, hash_factory: HashFactory, key: bytes, iv: bytes) -> None:
        if len(key) < 5:
            raise ValueError("integrity key must hold at least 5 bytes")
        self.hash_factory = hash_factory
        self._size = hash_factory().digest_size
        if self._size % _BLOCK:
            raise ValueError("hash size must be a multiple of the AES block size")
        self._buffer = bytes(32)
        self._output = bytes(self._size)
        self._input = bytes(self._size)
        aes_key = bytes(key[:5]) + b"\xff" + bytes(10)
        self._key_gen = _cbc_encryptor(aes_key, bytes(iv[:16]))
        self.init()

    def init(self) -> None:
        self._buffer = self._key_gen.update(self._buffer)
        key = bytearray(self._buffer[:16])
        iv = self._buffer[16:]
        self._key_gen = _cbc_encryptor(bytes(key), iv)
        key[5] = 90
        self._encryptor = _cbc_encryptor(bytes(key), iv)
        key[5] = 180
        self._decryptor = _cbc_encryptor(bytes(key), iv)

    def compute(self, data: bytes) -> bytes:
        self._output = self._encryptor.update(self._output)
        digest = self.hash_factory()
        digest.update(data)
        digest.update(self._output)
        return digest.digest()

    def validate(self, data: bytes) -> bytes:
        if len(data) <= self._size:
            raise ValueError("data integrity check failed: size of the input lesser than hash size")
        self._input = self._decryptor.update(self._input)
        return _check_integrity(data, self._size, self._input, self.hash_factory)


class OracleNetworkCBCCryptor:
    """AES-CBC encryption with zero padding and a trailing pad-length byte."""

    def __init__(self, key: bytes, iv: bytes) -> None:
        self._cipher = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))

    def encrypt(self, data: bytes) -> bytes:
        pad = -len(data) % _BLOCK
        encryptor = self._cipher.encryptor()
        output = encryptor.update(bytes(data) + bytes(pad)) + encryptor.finalize()
        return output + bytes([pad + 1])

    def decrypt(self, data: bytes) -> bytes:
        length = len(data)
        if length == 0 or (length - 1) % _BLOCK:
            raise ValueError("invalid padding from cipher text")
        num = data[-1]
        if num > 16:
            raise ValueError("invalid padding from cipher text")
        decryptor = self._cipher.decryptor()
        output = decryptor.update(bytes(data[:-1])) + decryptor.finalize()
        return output[:length - num]


def pkcs5_padding(data: bytes, block_size: int) -> bytes:
    """Append PKCS#5 padding to ``data``."""
    padding = block_size - len(data) % block_size
    return bytes(data) + bytes([padding]) * padding