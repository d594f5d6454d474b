# oraproto

Low-level building blocks for the Oracle TTC message protocol, in plain
Python.

`oraproto` does not hide the protocol behind a database API. It gives you
the pieces a driver is built from: the TTC message codec, parsing of the
server's end-of-call summaries and warnings, protocol negotiation, version
decoding, ROWID encoding, column and parameter descriptors, and the
network data-integrity and encryption helpers.

## Installation

```
pip install oraproto
```

The only runtime dependency is `cryptography`, which supplies the AES
primitive used by the network security helpers.

## What is inside

| Module | Purpose |
| --- | --- |
| `oraproto.network.codec` | `MessageCodec`: an output buffer for building messages and an input buffer for parsing them. Reads and writes bytes, fixed-width and compressed integers, CLR and DLC strings, and key/value triples. |
| `oraproto.network.summary` | `SummaryObject`, `BindError` and `WarningObject`, each read from a `MessageCodec` with `read()`. |
| `oraproto.network.security` | `OracleNetworkHash` (RC4-keyed checksum), `OracleNetworkHash2` (AES-CBC-keyed checksum), `OracleNetworkCBCCryptor` (AES-CBC encryption) and `pkcs5_padding`. |
| `oraproto.tcp_nego` | `TCPNego.negotiate(session)`, the protocol negotiation exchange; sets capability flags on the session. |
| `oraproto.db_version` | `DBVersion.from_number()` to decode a packed version number, and `get_db_version(session)` to ask the server. |
| `oraproto.rowid` | `RowID.read()` / `RowID.to_bytes()` and `convert_rowid_to_bytes`. |
| `oraproto.parameter` | `OracleType`, `ParameterDirection`, `ParameterType`, `NVarChar` and `ParameterInfo` with `load()` and `write()`. |

## Examples

### Encoding and decoding TTC values

```python
from oraproto.network.codec import MessageCodec

out = MessageCodec()
out.put_uint(300, 4, True, True)
out.put_clr(b"hello")
payload = out.pending_output()

reader = MessageCodec()
reader.feed(payload)
assert reader.get_int(4, True, True) == 300
assert reader.get_clr() == b"hello"
```

Reading past the end of the fed input raises `EOFError`. `get_clr()` and
`get_dlc()` return `None` for a null value.

### Decoding a server version number

```python
from oraproto.db_version import DBVersion

version = DBVersion.from_number("Oracle Database", 0x13000000)
print(version.text)            # 19.0.0.0.0
print(version.major_version)   # 19
```

### Turning ROWID parts into text

```python
from oraproto.rowid import convert_rowid_to_bytes

print(convert_rowid_to_bytes(1, 6))  # b"AAAAAB"
```

### Encrypting a payload

```python
from oraproto.network.security import OracleNetworkCBCCryptor

cryptor = OracleNetworkCBCCryptor(bytes(16), bytes(16))
sealed = cryptor.encrypt(b"hello")
assert cryptor.decrypt(sealed) == b"hello"
```

The data is zero-padded to the AES block size and a final byte holding the
pad length plus one is appended.

## Sessions for negotiation

`TCPNego.negotiate()` and `get_db_version()` work with any object that has
the `MessageCodec` methods plus a `write()` method that sends the pending
output. `ParameterInfo.load()` and `write()` need only the codec methods and
a `ttc_version` attribute, which `MessageCodec` has.

## What this package does not do

- It opens no network connections. There is no socket transport, no
  connect/accept/redirect handshake and no packet framing; you provide the
  object that sends bytes and feeds received bytes into a `MessageCodec`.
- It builds no connect descriptors and has no connection options.
- It has no tracing or packet logging.
- Server errors found in a `SummaryObject` are left in its `ret_code` and
  `error_message` fields; there is no dedicated exception class for them.
- There is no SQL execution, cursor or result-set API, and no command-line
  tool.

## Running the tests

```
pip install "oraproto[test]"
pytest
```