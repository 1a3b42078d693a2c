# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Quote signature structures - Signature block parsing, dispatched on attestation key type.

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict

from . import sgx_logging
from .certification import QeCertificationData, parse_certification_data
from .ecdsa import AttestationKeyType, EcdsaPublicKey, EcdsaSignature
from .reader import ByteReader, ByteSpan
from .report import ReportBody, parse_report_body

# Get logger for this module
logger = sgx_logging.get_logger(__name__)

SIGNATURE_SIZE = 64
ATTESTATION_KEY_SIZE = 64


@dataclass(frozen=True)
class Signature:
    """Base class for quote signature blocks, one subclass per attestation key type."""

    key_type: ClassVar[AttestationKeyType]

    def print_details(self) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class EcdsaP256Signature(Signature):
    """
    Quote signature data for ECDSA-256-with-P-256 attestation keys.

    Contains the signature over header || ISV report, the attestation key,
    the Quoting Enclave report binding that key, and the certification data
    that chains the QE report back to Intel.
    """

    key_type: ClassVar[AttestationKeyType] = AttestationKeyType.ECDSA_P256

    isv_report_signature: ByteSpan  # Signature over header || ISV report (64 bytes)
    attestation_key: ByteSpan  # Raw P-256 public key x || y (64 bytes)
    qe_report: ReportBody  # QE Report (384 bytes)
    qe_report_signature: ByteSpan  # PCK signature over the QE report (64 bytes)
    qe_authentication_data: ByteSpan  # QE Authentication Data (variable)
    qe_certification_data: QeCertificationData  # QE Certification Data (variable)

    def isv_signature(self) -> EcdsaSignature:
        """Return the signature over the quote's signed message split into r and s."""
        return EcdsaSignature.from_bytes(self.isv_report_signature, self.key_type)

    def qe_signature(self) -> EcdsaSignature:
        """Return the signature over the QE report split into r and s."""
        return EcdsaSignature.from_bytes(self.qe_report_signature, self.key_type)

    def public_key(self) -> EcdsaPublicKey:
        """Return the attestation key split into x and y."""
        return EcdsaPublicKey.from_uncompressed_bytes(
            self.attestation_key, self.key_type
        )

    def print_details(self) -> None:
        """
        Print a detailed representation of the signature data.

        Logs the signature components, the attestation key, authentication
        data size and certification data, followed by the QE report body.
        """
        isv_signature = self.isv_signature()
        qe_signature = self.qe_signature()
        public_key = self.public_key()
        logger.info(f"  Quote Signature (r):       {isv_signature.r.hex()}")
        logger.info(f"  Quote Signature (s):       {isv_signature.s.hex()}")
        logger.info(f"  Attestation Key Type:      {self.key_type.name}")
        logger.info(f"  Attestation Key (x):       {public_key.x.hex()}")
        logger.info(f"  Attestation Key (y):       {public_key.y.hex()}")
        logger.info(f"  QE Report Signature (r):   {qe_signature.r.hex()}")
        logger.info(f"  QE Report Signature (s):   {qe_signature.s.hex()}")
        logger.info(
            f"  Auth Data Size:            {len(self.qe_authentication_data)} bytes"
        )
        logger.info(
            f"  Cert Data:                 {type(self.qe_certification_data).__name__}"
        )
        self.qe_certification_data.print_details()
        logger.info("\n QE Report Body:")
        self.qe_report.print_details()


def _parse_ecdsa_p256(reader: ByteReader, debug: bool = False) -> Signature:
    isv_report_signature = reader.take(SIGNATURE_SIZE, "isv_report_signature")
    attestation_key = reader.take(ATTESTATION_KEY_SIZE, "attestation_key")
    qe_report = parse_report_body(reader, debug=debug)
    qe_report_signature = reader.take(SIGNATURE_SIZE, "qe_report_signature")
    qe_authentication_data = reader.length_prefixed(2, "qe_authentication_data")
    if debug:
        logger.debug(
            f"QE Authentication Data Size: {len(qe_authentication_data)} bytes"
        )
    qe_certification_data = parse_certification_data(reader, debug=debug)

    return EcdsaP256Signature(
        isv_report_signature=isv_report_signature,
        attestation_key=attestation_key,
        qe_report=qe_report,
        qe_report_signature=qe_report_signature,
        qe_authentication_data=qe_authentication_data,
        qe_certification_data=qe_certification_data,
    )


SignatureDecoder = Callable[..., Signature]

_DECODERS: Dict[AttestationKeyType, SignatureDecoder] = {
    AttestationKeyType.ECDSA_P256: _parse_ecdsa_p256,
}

# Key types without a registered decoder are read with this layout
FALLBACK_KEY_TYPE = AttestationKeyType.ECDSA_P256


def signature_decoder(key_type_tag: int) -> SignatureDecoder:
    """
    Select the signature decoder for a raw attestation key type tag.

    Only ECDSA-P256 has a decoder. Any other tag, known or not, is decoded
    with the ECDSA-P256 layout so quotes with unexpected tags are still
    accepted when their structure is valid. Registering a decoder for a key
    type changes the layout used for that tag only.

    Args:
        key_type_tag: attestation_key_type field from the quote header

    Returns:
        The decoder function to apply to the signature block
    """
    key_type = AttestationKeyType.from_tag(key_type_tag)
    decoder = _DECODERS.get(key_type)
    if decoder is None:
        logger.debug(
            f"No signature decoder for attestation key type {key_type_tag}, "
            f"using {FALLBACK_KEY_TYPE.name} layout"
        )
        decoder = _DECODERS[FALLBACK_KEY_TYPE]
    return decoder


def parse_signature(
    key_type_tag: int, reader: ByteReader, debug: bool = False
) -> Signature:
    """
    Decode a quote signature block.

    Structure (ECDSA-P256):
        - ISV Report Signature: 64 bytes
        - Attestation Key: 64 bytes
        - QE Report: 384 bytes
        - QE Report Signature: 64 bytes
        - QE Authentication Data Size: 2 bytes
        - QE Authentication Data: variable
        - QE Certification Data: type (2 bytes), size (4 bytes), data

    Args:
        key_type_tag: attestation_key_type field from the quote header
        reader: Reader confined to the signature block
        debug: If True, log decoded fields

    Returns:
        Signature: Decoded signature block

    Raises:
        TooShortError: If a field or prefixed region does not fit
        InvalidCertificationDataTypeError: If the certification data type is invalid
        TrailingDataError: If bytes remain in the block after decoding
    """
    start = reader.offset
    signature = signature_decoder(key_type_tag)(reader, debug=debug)
    reader.finish("signature data")
    if debug:
        sgx_logging.log_decode_step(
            "signature data", start, reader.offset - start, type(signature).__name__
        )
    return signature
