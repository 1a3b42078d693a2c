"""
Unit tests for enclave report body parsing (report.py).
"""

import pytest

from builders import build_report_body

from sgx_quote.errors import TooShortError
from sgx_quote.reader import ByteReader
from sgx_quote.report import REPORT_SIZE, ReportBody, parse_report_body


def test_parse_report_body_fields():
    raw = build_report_body(
        cpu_svn=bytes(range(16)),
        miscselect=0xCAFEBABE,
        mrenclave=b"\x10" * 32,
        mrsigner=b"\x20" * 32,
        isv_prod_id=0x0102,
        isv_svn=0x0304,
        report_data=bytes(range(64)),
    )
    report = parse_report_body(ByteReader.from_bytes(raw))

    assert isinstance(report, ReportBody)
    assert report.cpu_svn == bytes(range(16))
    assert report.miscselect == 0xCAFEBABE
    assert report.attributes == raw[0x30:0x40]
    assert report.mrenclave == b"\x10" * 32
    assert report.mrsigner == b"\x20" * 32
    assert report.isv_prod_id == 0x0102
    assert report.isv_svn == 0x0304
    assert report.report_data == bytes(range(64))


def test_field_offsets_within_report():
    report = parse_report_body(ByteReader.from_bytes(build_report_body()))
    assert report.cpu_svn.offset == 0x00
    assert report.attributes.offset == 0x30
    assert report.mrenclave.offset == 0x40
    assert report.mrsigner.offset == 0x80
    assert report.report_data.offset == 0x140
    assert report.report_data.end == REPORT_SIZE


def test_signed_message_is_consumed_span():
    prefix = b"\xaa" * 10
    raw = build_report_body(reserved_fill=b"\x5c")
    reader = ByteReader.from_bytes(prefix + raw + b"tail")
    reader.skip(len(prefix), "prefix")

    report = parse_report_body(reader)

    assert len(report.signed_message) == REPORT_SIZE
    assert report.signed_message.offset == len(prefix)
    assert report.signed_message == raw
    assert reader.remaining == 4


def test_signed_message_keeps_reserved_bytes():
    zeroed = parse_report_body(ByteReader.from_bytes(build_report_body()))
    filled = parse_report_body(
        ByteReader.from_bytes(build_report_body(reserved_fill=b"\x01"))
    )
    # Same decoded fields, different signed bytes
    assert zeroed.mrenclave == filled.mrenclave
    assert zeroed.report_data == filled.report_data
    assert zeroed.signed_message != filled.signed_message


@pytest.mark.parametrize("length", [0, 1, 383])
def test_short_report_body(length):
    reader = ByteReader.from_bytes(build_report_body()[:length])
    with pytest.raises(TooShortError) as exc_info:
        parse_report_body(reader)
    assert exc_info.value.needed == REPORT_SIZE
    assert exc_info.value.available == length
    assert reader.offset == 0


def test_signed_message_not_in_repr():
    report = parse_report_body(ByteReader.from_bytes(build_report_body()))
    assert "signed_message" not in repr(report)


def test_debug_logs_fields(caplog):
    with caplog.at_level("DEBUG", logger="sgx_quote"):
        parse_report_body(ByteReader.from_bytes(build_report_body()), debug=True)
    assert "Decoded report body at [0, 384)" in caplog.text
    assert "mrenclave" in caplog.text
