# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# QE certification data - Tag-dispatched certification data carried in the quote signature.

import enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from . import sgx_logging
from .errors import InvalidCertificationDataTypeError
from .reader import ByteReader, ByteSpan

# Get logger for this module
logger = sgx_logging.get_logger(__name__)

PPID_SIZE = 384
PPID_CERTIFICATION_DATA_SIZE = PPID_SIZE + 16 + 2 + 2  # ppid + cpu_svn + pce_svn + pce_id


class CertificationDataType(enum.Enum):
    """
    QE certification data types.

    Type 4 (PCK leaf certificate only) is defined by Intel but not accepted
    here, and is treated the same as any unknown tag.
    """

    PPID_CLEARTEXT = 1
    PPID_RSA2048_ENCRYPTED = 2
    PPID_RSA3072_ENCRYPTED = 3
    PCK_CERT_CHAIN = 5

    @classmethod
    def from_tag(cls, tag: int) -> Optional["CertificationDataType"]:
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True)
class Ppid:
    """Platform Provisioning ID payload (384 bytes). Subclasses say how to read it."""

    data: ByteSpan

    @property
    def encrypted(self) -> bool:
        return not isinstance(self, ClearPpid)


@dataclass(frozen=True)
class ClearPpid(Ppid):
    """PPID in cleartext."""


@dataclass(frozen=True)
class Enc2048Ppid(Ppid):
    """PPID encrypted with RSA-2048-OAEP."""


@dataclass(frozen=True)
class Enc3072Ppid(Ppid):
    """PPID encrypted with RSA-3072-OAEP."""


@dataclass(frozen=True)
class QeCertificationData:
    """Base class for the certification data variants."""

    def print_details(self) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class PpidCertificationData(QeCertificationData):
    """
    Certification data for types 1-3: a PPID plus the platform TCB it was issued for.
    """

    ppid: Ppid  # PPID (384 bytes)
    cpu_svn: ByteSpan  # CPU SVN (16 bytes)
    pce_svn: int  # PCE ISV SVN (2 bytes)
    pce_id: int  # PCE ID (2 bytes)

    def print_details(self) -> None:
        logger.info(f"  PPID Type:                 {type(self.ppid).__name__}")
        logger.info(f"  PPID:                      {self.ppid.data.hex()}")
        logger.info(f"  CPU SVN:                   {self.cpu_svn.hex()}")
        logger.info(f"  PCE SVN:                   {self.pce_svn}")
        logger.info(f"  PCE ID:                    {self.pce_id}")


@dataclass(frozen=True)
class CertChainCertificationData(QeCertificationData):
    """
    Certification data type 5: the PCK certificate chain, kept uninterpreted.
    """

    data: ByteSpan  # Concatenated PEM certificates (variable)

    def print_details(self) -> None:
        logger.info(f"  PCK Cert Chain Size:       {len(self.data)} bytes")


def _ppid_decoder(
    ppid_cls: Type[Ppid],
) -> Callable[[ByteReader], QeCertificationData]:
    def decode(reader: ByteReader) -> QeCertificationData:
        ppid = ppid_cls(reader.take(PPID_SIZE, "ppid"))  # [u8; 384]
        cpu_svn = reader.take(16, "cpu_svn")  # [u8; 16]
        pce_svn = reader.le_u16("pce_svn")  # u16
        pce_id = reader.le_u16("pce_id")  # u16
        return PpidCertificationData(
            ppid=ppid, cpu_svn=cpu_svn, pce_svn=pce_svn, pce_id=pce_id
        )

    return decode


def _decode_cert_chain(reader: ByteReader) -> QeCertificationData:
    return CertChainCertificationData(reader.take(reader.remaining, "pck_cert_chain"))


_DECODERS: Dict[CertificationDataType, Callable[[ByteReader], QeCertificationData]] = {
    CertificationDataType.PPID_CLEARTEXT: _ppid_decoder(ClearPpid),
    CertificationDataType.PPID_RSA2048_ENCRYPTED: _ppid_decoder(Enc2048Ppid),
    CertificationDataType.PPID_RSA3072_ENCRYPTED: _ppid_decoder(Enc3072Ppid),
    CertificationDataType.PCK_CERT_CHAIN: _decode_cert_chain,
}


def parse_certification_data(
    reader: ByteReader, debug: bool = False
) -> QeCertificationData:
    """
    Decode a QE certification data block from the reader.

    Structure:
        - Certification Data Type: 2 bytes
        - Certification Data Size: 4 bytes
        - Certification Data: variable, interpreted according to the type

    The type is validated before the size is read, so an invalid type
    never consumes the rest of the block.

    Args:
        reader: Reader positioned at the certification data type
        debug: If True, log the decoded type and size

    Returns:
        QeCertificationData: One of the certification data variants

    Raises:
        TooShortError: If the block, or a fixed-size payload, is truncated
        InvalidCertificationDataTypeError: If the type is not 1, 2, 3 or 5
        TrailingDataError: If a PPID payload is longer than its fixed layout
    """
    tag_offset = reader.offset
    tag = reader.le_u16("qe_certification_data_type")
    cert_type = CertificationDataType.from_tag(tag)
    if cert_type is None:
        raise InvalidCertificationDataTypeError(tag, tag_offset)

    payload = reader.sub_reader(4, "qe_certification_data")
    if debug:
        logger.debug(f"QE Certification Data Type: {tag} ({cert_type.name})")
        logger.debug(f"QE Certification Data Size: {payload.remaining} bytes")

    certification_data = _DECODERS[cert_type](payload)
    payload.finish("QE certification data")
    return certification_data
