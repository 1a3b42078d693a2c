"""
Unit tests for quote signature parsing and key type dispatch (signature.py).
"""

import pytest

from builders import (
    CERT_DATA_TYPE_PCK_LEAF,
    CERT_DATA_TYPE_PPID_RSA2048,
    build_certification_data,
    build_ppid_payload,
    build_report_body,
    build_signature_data,
)

from sgx_quote.certification import (
    CertChainCertificationData,
    Enc2048Ppid,
    PpidCertificationData,
)
from sgx_quote.ecdsa import AttestationKeyType
from sgx_quote.errors import (
    InvalidCertificationDataTypeError,
    TooShortError,
    TrailingDataError,
)
from sgx_quote.reader import ByteReader
from sgx_quote.signature import (
    EcdsaP256Signature,
    parse_signature,
    signature_decoder,
)

P256 = AttestationKeyType.ECDSA_P256.value


def parse(raw: bytes, key_type: int = P256):
    return parse_signature(key_type, ByteReader.from_bytes(raw))


def test_parse_ecdsa_p256_signature():
    qe_report = build_report_body(mrenclave=b"\x42" * 32, isv_svn=6)
    raw = build_signature_data(
        isv_report_signature=b"\x01" * 64,
        attestation_key=b"\x02" * 64,
        qe_report=qe_report,
        qe_report_signature=b"\x03" * 64,
        qe_authentication_data=b"auth-data",
    )
    signature = parse(raw)

    assert isinstance(signature, EcdsaP256Signature)
    assert signature.key_type is AttestationKeyType.ECDSA_P256
    assert signature.isv_report_signature == b"\x01" * 64
    assert signature.attestation_key == b"\x02" * 64
    assert signature.qe_report.mrenclave == b"\x42" * 32
    assert signature.qe_report.isv_svn == 6
    assert signature.qe_report_signature == b"\x03" * 64
    assert signature.qe_authentication_data == b"auth-data"
    assert isinstance(signature.qe_certification_data, CertChainCertificationData)


def test_qe_report_signed_message_position():
    qe_report = build_report_body(reserved_fill=b"\x33")
    raw = build_signature_data(qe_report=qe_report)
    signature = parse(raw)

    assert len(signature.qe_report.signed_message) == 384
    assert signature.qe_report.signed_message.offset == 128
    assert signature.qe_report.signed_message == qe_report


def test_ppid_certification_data():
    raw = build_signature_data(
        certification_data=build_certification_data(
            CERT_DATA_TYPE_PPID_RSA2048, build_ppid_payload(pce_svn=17)
        )
    )
    signature = parse(raw)
    cert_data = signature.qe_certification_data
    assert isinstance(cert_data, PpidCertificationData)
    assert isinstance(cert_data.ppid, Enc2048Ppid)
    assert cert_data.pce_svn == 17


def test_empty_authentication_data():
    signature = parse(build_signature_data(qe_authentication_data=b""))
    assert signature.qe_authentication_data == b""


def test_invalid_certification_type():
    raw = build_signature_data(
        certification_data=build_certification_data(CERT_DATA_TYPE_PCK_LEAF, b"x")
    )
    with pytest.raises(InvalidCertificationDataTypeError):
        parse(raw)


@pytest.mark.parametrize(
    "length,field",
    [
        (0, "isv_report_signature"),
        (64, "attestation_key"),
        (128, "report body"),
        (512, "qe_report_signature"),
        (576, "qe_authentication_data length"),
        (578, "qe_authentication_data"),
    ],
)
def test_truncated_fixed_fields(length, field):
    raw = build_signature_data(qe_authentication_data=b"\x00" * 4)
    with pytest.raises(TooShortError) as exc_info:
        parse(raw[:length])
    assert exc_info.value.field == field


def test_authentication_data_length_exceeds_block():
    raw = build_signature_data(qe_authentication_data=b"")
    # Point the u16 length past the end of the block
    raw = raw[:576] + b"\xff\xff" + raw[578:]
    with pytest.raises(TooShortError):
        parse(raw)


def test_trailing_bytes_in_signature_block():
    with pytest.raises(TrailingDataError) as exc_info:
        parse(build_signature_data() + b"\x00")
    assert exc_info.value.remaining == 1


def test_p256_key_type_uses_p256_decoder():
    assert signature_decoder(P256) is signature_decoder(2)


@pytest.mark.parametrize("key_type", [0, 1, AttestationKeyType.ECDSA_P384.value, 4, 0xFFFF])
def test_other_key_types_fall_back_to_p256_layout(key_type):
    raw = build_signature_data()
    assert signature_decoder(key_type) is signature_decoder(P256)
    signature = parse(raw, key_type=key_type)
    assert isinstance(signature, EcdsaP256Signature)
    assert signature == parse(raw)


def test_fallback_is_logged(caplog):
    with caplog.at_level("DEBUG", logger="sgx_quote"):
        signature_decoder(9)
    assert "No signature decoder for attestation key type 9" in caplog.text


def test_ecdsa_accessors_split_components():
    raw = build_signature_data(
        isv_report_signature=b"\x01" * 32 + b"\x02" * 32,
        attestation_key=b"\x03" * 32 + b"\x04" * 32,
        qe_report_signature=b"\x05" * 32 + b"\x06" * 32,
    )
    signature = parse(raw)
    assert signature.isv_signature().r == b"\x01" * 32
    assert signature.isv_signature().s == b"\x02" * 32
    assert signature.public_key().x == b"\x03" * 32
    assert signature.public_key().y == b"\x04" * 32
    assert signature.qe_signature().r == b"\x05" * 32
    assert signature.qe_signature().s == b"\x06" * 32
