"""Bind parameters and column descriptions exchanged with the server."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

_SCALE_UNSET = 0xFF
_FLOAT_SCALE = -127
_BINARY_DIGITS_TO_DECIMAL = 0.30103


class ParameterDirection(IntEnum):
    """Whether a parameter carries data in, out, or both."""

    INPUT = 1
    OUTPUT = 2
    IN_OUT = 3
    RET_VAL = 9


class OracleType(IntEnum):
    """Wire data type codes."""

    NCHAR = 1
    NUMBER = 2
    SB1 = 3
    SB2 = 3
    SB4 = 3
    FLOAT = 4
    NULL_STR = 5
    VAR_NUM = 6
    LONG = 8
    VARCHAR = 9
    ROWID = 11
    DATE = 12
    VAR_RAW = 15
    B_FLOAT = 21
    B_DOUBLE = 22
    RAW = 23
    LONG_RAW = 24
    UINT = 68
    LONG_VAR_CHAR = 94
    LONG_VAR_RAW = 95
    CHAR = 96
    CHARZ = 97
    IB_FLOAT = 100
    IB_DOUBLE = 101
    REFCURSOR = 102
    OCI_XML_TYPE = 108
    XML_TYPE = 109
    OCI_REF = 110
    OCI_CLOB_LOCATOR = 112
    OCI_BLOB_LOCATOR = 113
    OCI_FILE_LOCATOR = 114
    RESULT_SET = 116
    OCI_STRING = 155
    OCI_DATE = 156
    TIMESTAMP_DTY = 180
    TIMESTAMP_TZ_DTY = 181
    INTERVAL_YM_DTY = 182
    INTERVAL_DS_DTY = 183
    TIME_TZ = 186
    TIMESTAMP = 187
    TIMESTAMP_TZ = 188
    INTERVAL_YM = 189
    INTERVAL_DS = 190
    UROWID = 208
    TIMESTAMP_LTZ_DTY = 231
    TIMESTAMP_LTZ = 232


class ParameterType(IntEnum):
    """Broad kind of a bound value."""

    NUMBER = 1
    STRING = 2


class NVarChar(str):
    """A string to be bound in the national character set."""

    def value(self) -> str:
        return str(self)


_SCALE_AS_INT = frozenset({
    OracleType.NUMBER,
    OracleType.TIMESTAMP_DTY,
    OracleType.TIMESTAMP_TZ_DTY,
    OracleType.INTERVAL_DS_DTY,
    OracleType.TIMESTAMP,
    OracleType.TIMESTAMP_TZ,
    OracleType.INTERVAL_DS,
    OracleType.TIMESTAMP_LTZ_DTY,
    OracleType.TIMESTAMP_LTZ,
})

_FIXED_MAX_LEN = {
    OracleType.ROWID: 128,
    OracleType.DATE: 7,
    OracleType.IB_FLOAT: 4,
    OracleType.IB_DOUBLE: 8,
    OracleType.TIMESTAMP_TZ_DTY: 13,
    OracleType.INTERVAL_YM_DTY: 11,
    OracleType.INTERVAL_DS_DTY: 11,
    OracleType.INTERVAL_YM: 11,
    OracleType.INTERVAL_DS: 11,
}


def _oracle_type(code: int) -> OracleType | int:
    try:
        return OracleType(code)
    except ValueError:
        return code


def _decode(session: Any, raw: bytes | None) -> str:
    raw = raw or b""
    if session.str_conv is not None:
        return session.str_conv.decode(raw)
    return raw.decode("utf-8", errors="replace")


@dataclass
class ParameterInfo:
    """Description of a bind parameter or a result column."""

    name: str = ""
    type_name: str = ""
    direction: ParameterDirection = ParameterDirection.INPUT
    is_null: bool = False
    allow_null: bool = False
    col_alias: str = ""
    data_type: OracleType | int = 0
    is_xml_type: bool = False
    flag: int = 0
    precision: int = 0
    scale: int = 0
    max_len: int = 0
    max_char_len: int = 0
    max_no_of_array_elements: int = 0
    cont_flag: int = 0
    to_id: bytes | None = None
    version: int = 0
    charset_id: int = 0
    charset_form: int = 0
    b_value: bytes | None = None
    value: Any = None
    get_data_from_server: bool = False
    oaccollid: int = 0
    cus_type: Any = None

    def load(self, session: Any) -> None:
        """Read a column description sent by the server."""
        self.get_data_from_server = True
        self.data_type = _oracle_type(session.get_byte())
        self.flag = session.get_byte()
        self.precision = session.get_byte()
        if self.data_type in _SCALE_AS_INT:
            scale = session.get_int(2, True, True)
            if scale == _FLOAT_SCALE:
                self.precision = math.ceil(self.precision * _BINARY_DIGITS_TO_DECIMAL) & 0xFF
                self.scale = _SCALE_UNSET
            else:
                self.scale = scale & 0xFF
        else:
            self.scale = session.get_byte()
        if (
            self.data_type == OracleType.NUMBER
            and self.precision == 0
            and self.scale in (0, _SCALE_UNSET)
        ):
            self.precision = 38
            self.scale = _SCALE_UNSET

        self.max_len = session.get_int(4, True, True)
        self.max_len = _FIXED_MAX_LEN.get(self.data_type, self.max_len)
        self.max_no_of_array_elements = session.get_int(4, True, True)
        if session.ttc_version >= 10:
            self.cont_flag = session.get_int(8, True, True)
        else:
            self.cont_flag = session.get_int(4, True, True)
        self.to_id = session.get_dlc()
        self.version = session.get_int(2, True, True)
        self.charset_id = session.get_int(2, True, True)
        self.charset_form = session.get_int(1, False, False)
        self.max_char_len = session.get_int(4, True, True)
        if session.ttc_version >= 8:
            self.oaccollid = session.get_int(4, True, True)
        self.allow_null = session.get_int(1, False, False) > 0
        session.get_byte()
        self.name = _decode(session, session.get_dlc())
        session.get_dlc()
        self.type_name = _decode(session, session.get_dlc()).upper()

        if self.data_type == OracleType.XML_TYPE and self.type_name != "XMLTYPE":
            custom_types = getattr(session, "custom_types", None) or {}
            if self.type_name in custom_types:
                self.cus_type = custom_types[self.type_name]
        if self.type_name == "XMLTYPE":
            self.data_type = OracleType.XML_TYPE
            self.is_xml_type = True

        if session.ttc_version < 3:
            return
        session.get_int(2, True, True)
        if session.ttc_version < 6:
            return
        session.get_int(4, True, True)

    def write(self, session: Any) -> None:
        """Write the parameter description to the session's output."""
        session.put_bytes(
            int(self.data_type) & 0xFF, self.flag & 0xFF,
            self.precision & 0xFF, self.scale & 0xFF,
        )
        session.put_uint(self.max_len, 4, True, True)
        session.put_int(self.max_no_of_array_elements, 4, True, True)
        if session.ttc_version >= 10:
            session.put_int(self.cont_flag, 8, True, True)
        else:
            session.put_int(self.cont_flag, 4, True, True)
        if self.to_id is None:
            session.put_bytes(0)
        else:
            session.put_int(len(self.to_id), 4, True, True)
            session.put_clr(self.to_id)
        session.put_uint(self.version, 2, True, True)
        session.put_uint(self.charset_id, 2, True, True)
        session.put_bytes(self.charset_form & 0xFF)
        session.put_uint(self.max_char_len, 4, True, True)
        if session.ttc_version >= 8:
            session.put_int(self.oaccollid, 4, True, True)