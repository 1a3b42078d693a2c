# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# SGX quote structures - Data classes for parsing and representing Intel SGX DCAP quotes.

from dataclasses import dataclass, field
from typing import Tuple

from . import sgx_logging
from .reader import ByteReader, BytesLike, ByteSpan
from .report import REPORT_SIZE, ReportBody, parse_report_body
from .signature import Signature, parse_signature

# Get logger for this module
logger = sgx_logging.get_logger(__name__)

HEADER_SIZE = 48
SIGNED_MESSAGE_SIZE = HEADER_SIZE + REPORT_SIZE


@dataclass(frozen=True)
class Header:
    """
    Header
    Description: Represents the SGX Quote header (48 bytes)
    Based on Intel SGX ECDSA Quote Library API

    The attestation key type and the reserved bytes are consumed while
    decoding but not kept; the key type only selects the signature layout.
    """

    version: int  # Quote version (2 bytes)
    qe_svn: int  # QE security version number (2 bytes)
    pce_svn: int  # PCE security version number (2 bytes)
    qe_vendor_id: ByteSpan  # QE Vendor ID (16 bytes)
    user_data: ByteSpan  # User data (20 bytes)

    def print_details(self) -> None:
        logger.info("=== Quote Header ===")
        logger.info(f"Version:                     {self.version}")
        logger.info(f"QE SVN:                      {self.qe_svn}")
        logger.info(f"PCE SVN:                     {self.pce_svn}")
        logger.info(f"QE Vendor ID:                {self.qe_vendor_id.hex()}")
        logger.info(f"User Data:                   {self.user_data.hex()}")


def _parse_header(reader: ByteReader, debug: bool = False) -> Tuple[Header, int]:
    """
    Decode the 48-byte quote header.

    Returns:
        Tuple of (Header, attestation key type tag)

    Raises:
        TooShortError: If fewer than 48 bytes remain
    """
    start = reader.offset
    reader.take(HEADER_SIZE, "header")
    header_reader = ByteReader(reader.source, start, start + HEADER_SIZE)

    version = header_reader.le_u16("version")  # u16
    attestation_key_type = header_reader.le_u16("attestation_key_type")  # u16
    header_reader.skip(4, "reserved")  # [u8; 4]
    qe_svn = header_reader.le_u16("qe_svn")  # u16
    pce_svn = header_reader.le_u16("pce_svn")  # u16
    qe_vendor_id = header_reader.take(16, "qe_vendor_id")  # [u8; 16]
    user_data = header_reader.take(20, "user_data")  # [u8; 20]
    header_reader.finish("header")

    header = Header(
        version=version,
        qe_svn=qe_svn,
        pce_svn=pce_svn,
        qe_vendor_id=qe_vendor_id,
        user_data=user_data,
    )

    if debug:
        sgx_logging.log_decode_step(
            "header", start, HEADER_SIZE, f"attestation key type {attestation_key_type}"
        )
        sgx_logging.log_fields("header", header)

    return header, attestation_key_type


@dataclass(frozen=True)
class Quote:
    """
    Represents a complete Intel SGX DCAP quote.

    A quote contains a header, the ISV enclave report body, and the
    signature data required to verify both. Every byte field is a view into
    the buffer the quote was parsed from.

    Based on Intel SGX ECDSA Quote Library API
    Ref: https://download.01.org/intel-sgx/dcap-1.1/linux/docs/Intel_SGX_ECDSA_QuoteGenReference_DCAP_API_Linux_1.1.pdf
    """

    header: Header
    isv_report: ReportBody
    signature: Signature
    signed_message: ByteSpan = field(repr=False)  # header || isv_report (432 bytes)

    @classmethod
    def parse(cls, data: BytesLike, debug: bool = False) -> "Quote":
        return parse_quote(data, debug=debug)

    def print_details(self) -> None:
        """
        Print a detailed representation of the Quote.

        Outputs the header, the ISV report body and the signature data,
        including the nested QE report.
        """
        logger.info("SGX Quote Details:")
        self.header.print_details()
        logger.info("\nISV Report Body:")
        self.isv_report.print_details()
        logger.info(f"\nQuote Signature Data ({type(self.signature).__name__}):")
        self.signature.print_details()


def parse_quote(data: BytesLike, debug: bool = False) -> Quote:
    """
    Parse an SGX DCAP quote from raw bytes.

    The whole input must be consumed: header, ISV report body, a 4-byte
    signature length, and exactly that many bytes of signature data.
    Nothing is copied; the returned Quote refers into data, which must not
    be modified while the Quote is in use.

    Args:
        data: Raw quote bytes (bytes, bytearray or memoryview)
        debug: If True, log each decoded structure and field

    Returns:
        Quote: Parsed quote

    Raises:
        TooShortError: If any structure is truncated
        InvalidCertificationDataTypeError: If the certification data type is invalid
        TrailingDataError: If bytes follow the signature data
    """
    reader = ByteReader.from_bytes(data)
    if debug:
        logger.debug(f"Parsing quote, total size: {reader.remaining} bytes")

    header, attestation_key_type = _parse_header(reader, debug=debug)
    isv_report = parse_report_body(reader, debug=debug)
    signature_reader = reader.sub_reader(4, "signature data")
    signature = parse_signature(attestation_key_type, signature_reader, debug=debug)
    reader.finish("quote")

    return Quote(
        header=header,
        isv_report=isv_report,
        signature=signature,
        signed_message=ByteSpan(reader.source, 0, SIGNED_MESSAGE_SIZE),
    )
