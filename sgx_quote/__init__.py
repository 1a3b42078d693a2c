# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# sgx_quote - Zero-copy decoder for Intel SGX DCAP quotes.

"""
sgx_quote - Zero-copy decoder for Intel SGX DCAP quotes

This package decodes SGX ECDSA quotes into immutable records whose byte
fields are views into the original buffer, and delimits the exact signed
byte ranges a verifier needs. It does not verify signatures or certificates.
"""

# Certification data variants
from .certification import (
    CertChainCertificationData,
    CertificationDataType,
    ClearPpid,
    Enc2048Ppid,
    Enc3072Ppid,
    Ppid,
    PpidCertificationData,
    QeCertificationData,
    parse_certification_data,
)

# ECDSA components
from .ecdsa import AttestationKeyType, EcdsaPublicKey, EcdsaSignature

# Errors
from .errors import (
    InvalidCertificationDataTypeError,
    ParseError,
    TooShortError,
    TrailingDataError,
)

# Core quote components
from .quote import HEADER_SIZE, SIGNED_MESSAGE_SIZE, Header, Quote, parse_quote

# Buffer views
from .reader import ByteReader, ByteSpan

# Enclave report body
from .report import REPORT_SIZE, ReportBody, parse_report_body

# Logging utilities
from .sgx_logging import (
    get_logger,
    setup_cli_logging,
    setup_library_logging,
    setup_logging,
)

# Signature data
from .signature import EcdsaP256Signature, Signature, parse_signature

__version__ = "0.1.0"
__author__ = "Isaac Matthews"

__all__ = [
    # Core classes
    "Quote",
    "Header",
    "ReportBody",
    "Signature",
    "EcdsaP256Signature",
    "QeCertificationData",
    "PpidCertificationData",
    "CertChainCertificationData",
    "CertificationDataType",
    "Ppid",
    "ClearPpid",
    "Enc2048Ppid",
    "Enc3072Ppid",
    "ByteSpan",
    "ByteReader",
    # Parsing functions
    "parse_quote",
    "parse_report_body",
    "parse_signature",
    "parse_certification_data",
    # Sizes
    "HEADER_SIZE",
    "REPORT_SIZE",
    "SIGNED_MESSAGE_SIZE",
    # ECDSA components
    "AttestationKeyType",
    "EcdsaPublicKey",
    "EcdsaSignature",
    # Errors
    "ParseError",
    "TooShortError",
    "InvalidCertificationDataTypeError",
    "TrailingDataError",
    # Logging utilities
    "get_logger",
    "setup_cli_logging",
    "setup_library_logging",
    "setup_logging",
]
