"""End-of-call summaries and warnings sent by the server."""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec import MessageCodec

_CHUNKED = 0xFE


@dataclass
class BindError:
    """An error raised for one row of an array bind."""

    error_code: int = 0
    row_offset: int = 0
    error_msg: bytes = b""


def _slot(errors: list[BindError], index: int) -> BindError:
    while len(errors) <= index:
        errors.append(BindError())
    return errors[index]


def _skip_chunk_header(codec: MessageCodec) -> None:
    if codec.use_big_clr_chunks:
        codec.get_int(4, True, True)
    else:
        codec.get_byte()


@dataclass
class SummaryObject:
    """The status block that ends a server call."""

    end_of_call_status: int = 0
    end_to_end_ecid_sequence: int = 0
    cur_row_number: int = 0
    ret_code: int = 0
    array_elm_w_error: int = 0
    array_elm_errno: int = 0
    cursor_id: int = 0
    error_pos: int = 0
    sql_type: int = 0
    oer_fatal: int = 0
    flags: int = 0
    user_cursor_opt: int = 0
    upi_param: int = 0
    warning_flag: int = 0
    rba: int = 0
    partition_id: int = 0
    table_id: int = 0
    block_number: int = 0
    slot_number: int = 0
    os_error: int = 0
    stmt_number: int = 0
    call_number: int = 0
    pad1: int = 0
    success_iter: int = 0
    error_message: bytes = b""
    bind_errors: list[BindError] = field(default_factory=list)

    @classmethod
    def read(cls, codec: MessageCodec) -> SummaryObject:
        """Read a summary from the codec's input."""
        result = cls()
        if codec.has_eos_capability:
            result.end_of_call_status = codec.get_int(4, True, True)
        if codec.has_fsap_capability:
            result.end_to_end_ecid_sequence = codec.get_int(2, True, True)
        result.cur_row_number = codec.get_int(4, True, True)
        result.ret_code = codec.get_int(2, True, True)
        result.array_elm_w_error = codec.get_int(2, True, True)
        result.array_elm_errno = codec.get_int(2, True, True)
        result.cursor_id = codec.get_int(2, True, True)
        result.error_pos = codec.get_int(2, True, True)
        result.sql_type = codec.get_byte()
        result.oer_fatal = codec.get_byte()
        result.flags = codec.get_int(2, True, True)
        result.user_cursor_opt = codec.get_int(2, True, True)
        result.upi_param = codec.get_byte()
        result.warning_flag = codec.get_byte()
        result.rba = codec.get_int(4, True, True)
        result.partition_id = codec.get_int(2, True, True)
        result.table_id = codec.get_byte()
        result.block_number = codec.get_int(4, True, True)
        result.slot_number = codec.get_int(2, True, True)
        result.os_error = codec.get_int(4, True, True)
        result.stmt_number = codec.get_byte()
        result.call_number = codec.get_byte()
        result.pad1 = codec.get_int(2, True, True)
        result.success_iter = codec.get_int(4, True, True)
        codec.get_dlc()

        errors = result.bind_errors
        count = codec.get_int(2, True, True)
        if count > 0:
            chunked = codec.get_byte() == _CHUNKED
            for index in range(count):
                if chunked:
                    _skip_chunk_header(codec)
                _slot(errors, index).error_code = codec.get_int(2, True, True)
            if chunked:
                codec.get_byte()

        count = codec.get_int(4, True, True)
        if count > 0:
            chunked = codec.get_byte() == _CHUNKED
            for index in range(count):
                if chunked:
                    _skip_chunk_header(codec)
                _slot(errors, index).row_offset = codec.get_int(4, True, True)
            if chunked:
                codec.get_byte()

        count = codec.get_int(2, True, True)
        if count > 0:
            codec.get_byte()
            for index in range(count):
                codec.get_int(2, True, True)
                _slot(errors, index).error_msg = codec.get_clr() or b""
                codec.get_byte()
                codec.get_byte()

        if codec.ttc_version >= 7:
            result.ret_code = codec.get_int(4, True, True)
            result.cur_row_number = codec.get_int(8, True, True)
        if result.ret_code != 0:
            result.error_message = codec.get_clr() or b""
        return result


@dataclass
class WarningObject:
    """A warning attached to a server response."""

    ret_code: int = 0
    flag: int = 0
    error_message: str = ""

    @classmethod
    def read(cls, codec: MessageCodec) -> WarningObject | None:
        """Read a warning; None when it carries no code or no message."""
        ret_code = codec.get_int(2, True, True)
        length = codec.get_int(2, True, True)
        flag = codec.get_int(2, True, True)
        if ret_code == 0 or length == 0:
            return None
        message = codec.get_clr() or b""
        return cls(
            ret_code=ret_code,
            flag=flag,
            error_message=message.decode("utf-8", errors="replace"),
        )