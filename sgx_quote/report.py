# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Enclave report structures - SGX enclave report body parsing.

from dataclasses import dataclass, field

from . import sgx_logging
from .reader import ByteReader, ByteSpan

# Get logger for this module
logger = sgx_logging.get_logger(__name__)

REPORT_SIZE = 384


@dataclass(frozen=True)
class ReportBody:
    """
    Represents an SGX Enclave Report body (384 bytes).

    Contains SGX enclave measurements, attributes, and report data as
    specified in the Intel SGX specification. The same structure is used
    for the ISV enclave report and for the Quoting Enclave report nested in
    the quote signature.

    signed_message is the exact 384-byte span the report was decoded from,
    including the reserved regions. It is what a relying party hashes when
    checking the signature over the report, so it is never rebuilt from the
    decoded fields.
    """

    cpu_svn: ByteSpan  # CPU Security Version Number (16 bytes)
    miscselect: int  # Miscellaneous select (4 bytes)
    attributes: ByteSpan  # Enclave attributes (16 bytes)
    mrenclave: ByteSpan  # Measurement of enclave (32 bytes)
    mrsigner: ByteSpan  # Measurement of signer (32 bytes)
    isv_prod_id: int  # ISV product ID (2 bytes)
    isv_svn: int  # ISV security version number (2 bytes)
    report_data: ByteSpan  # Report data (64 bytes)
    signed_message: ByteSpan = field(repr=False)  # Whole report (384 bytes)

    def print_details(self) -> None:
        """
        Print a detailed representation of the ReportBody.

        Displays the decoded fields of the enclave report body in a
        human-readable format for debugging and analysis purposes.
        """
        logger.info("\n=== Enclave Report Body ===")
        logger.info(f"CPU SVN:                     {self.cpu_svn.hex()}")
        logger.info(f"Misc Select:                 0x{self.miscselect:08x}")
        logger.info(f"Attributes:                  {self.attributes.hex()}")
        logger.info(f"MR Enclave:                  {self.mrenclave.hex()}")
        logger.info(f"MR Signer:                   {self.mrsigner.hex()}")
        logger.info(f"ISV Product ID:              {self.isv_prod_id}")
        logger.info(f"ISV SVN:                     {self.isv_svn}")
        logger.info(f"Report Data:                 {self.report_data.hex()}")


def parse_report_body(reader: ByteReader, debug: bool = False) -> ReportBody:
    """
    Decode a 384-byte enclave report body from the reader.

    Args:
        reader: Reader positioned at the start of the report body
        debug: If True, log every decoded field

    Returns:
        ReportBody: Decoded report body

    Raises:
        TooShortError: If fewer than 384 bytes remain
    """
    start = reader.offset
    # Check the whole body up front so a short report fails at its own offset
    signed_message = reader.take(REPORT_SIZE, "report body")
    body = ByteReader(reader.source, start, signed_message.end)

    cpu_svn = body.take(16, "cpu_svn")  # [u8; 16]
    miscselect = body.le_u32("miscselect")  # u32
    body.skip(28, "reserved_1")  # [u8; 28]
    attributes = body.take(16, "attributes")  # [u8; 16]
    mrenclave = body.take(32, "mrenclave")  # [u8; 32]
    body.skip(32, "reserved_2")  # [u8; 32]
    mrsigner = body.take(32, "mrsigner")  # [u8; 32]
    body.skip(96, "reserved_3")  # [u8; 96]
    isv_prod_id = body.le_u16("isv_prod_id")  # u16
    isv_svn = body.le_u16("isv_svn")  # u16
    body.skip(60, "reserved_4")  # [u8; 60]
    report_data = body.take(64, "report_data")  # [u8; 64]
    body.finish("report body")

    report = ReportBody(
        cpu_svn=cpu_svn,
        miscselect=miscselect,
        attributes=attributes,
        mrenclave=mrenclave,
        mrsigner=mrsigner,
        isv_prod_id=isv_prod_id,
        isv_svn=isv_svn,
        report_data=report_data,
        signed_message=signed_message,
    )

    if debug:
        sgx_logging.log_decode_step("report body", start, REPORT_SIZE)
        sgx_logging.log_fields("report body", report)

    return report
