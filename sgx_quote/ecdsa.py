# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# ECDSA structures - Attestation key types and views over raw ECDSA keys and signatures.

import enum
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import ec, utils

from .reader import BytesLike


class AttestationKeyType(enum.Enum):
    """
    Attestation Key Types for SGX quotes
    """

    ECDSA_P256 = 2
    ECDSA_P384 = 3

    @classmethod
    def from_tag(cls, tag: int) -> Optional["AttestationKeyType"]:
        """Return the key type for a raw header tag, or None if the tag is unknown."""
        try:
            return cls(tag)
        except ValueError:
            return None

    @property
    def component_size(self) -> int:
        """Size in bytes of one coordinate or signature component."""
        return 32 if self is AttestationKeyType.ECDSA_P256 else 48


def _split_components(
    raw: BytesLike, curve_type: AttestationKeyType, what: str
) -> tuple:
    raw = bytes(raw)
    size = curve_type.component_size
    if len(raw) != 2 * size:
        raise ValueError(
            f"{curve_type.name} {what} must be {2 * size} bytes, got {len(raw)}"
        )
    return raw[:size], raw[size:]


@dataclass(frozen=True)
class EcdsaPublicKey:
    """
    ECDSA public key components for P-256 or P-384 curves.

    Represents an elliptic curve public key as separate x and y coordinates
    along with the curve type, as carried raw (x || y) in SGX quotes.
    """

    x: bytes
    y: bytes
    curve_type: AttestationKeyType

    @classmethod
    def from_uncompressed_bytes(
        cls, key_bytes: BytesLike, curve_type: AttestationKeyType
    ) -> "EcdsaPublicKey":
        """
        Create ECDSA public key from the raw x || y representation used in quotes.

        Args:
            key_bytes: Public key bytes (64 bytes for P-256, 96 bytes for P-384)
            curve_type: The curve type

        Returns:
            EcdsaPublicKey instance

        Raises:
            ValueError: If key_bytes has the wrong length for the curve
        """
        x, y = _split_components(key_bytes, curve_type, "public key")
        return cls(x, y, curve_type)

    def to_uncompressed_bytes(self) -> bytes:
        return self.x + self.y

    def to_cryptography_key(self) -> ec.EllipticCurvePublicKey:
        """
        Convert to cryptography library public key object.

        Returns:
            cryptography EllipticCurvePublicKey object for downstream verifiers

        Raises:
            ValueError: If the coordinates are not a point on the curve
        """
        if self.curve_type == AttestationKeyType.ECDSA_P256:
            curve = ec.SECP256R1()
        else:
            curve = ec.SECP384R1()

        return ec.EllipticCurvePublicKey.from_encoded_point(
            curve, b"\x04" + self.x + self.y
        )

    def __repr__(self) -> str:
        return f"EcdsaPublicKey(curve={self.curve_type.name}, x={self.x.hex()[:16]}..., y={self.y.hex()[:16]}...)"


@dataclass(frozen=True)
class EcdsaSignature:
    """
    ECDSA signature components (r, s values)
    """

    r: bytes
    s: bytes
    curve_type: AttestationKeyType

    @classmethod
    def from_bytes(
        cls, sig_bytes: BytesLike, curve_type: AttestationKeyType
    ) -> "EcdsaSignature":
        """
        Create ECDSA signature from raw bytes (r || s)

        Args:
            sig_bytes: Raw signature bytes (r concatenated with s)
            curve_type: The curve type (determines component sizes)

        Returns:
            EcdsaSignature instance
        """
        r, s = _split_components(sig_bytes, curve_type, "signature")
        return cls(r, s, curve_type)

    def get_r_int(self) -> int:
        return int.from_bytes(self.r, "big")

    def get_s_int(self) -> int:
        return int.from_bytes(self.s, "big")

    def to_der(self) -> bytes:
        """
        Convert to DER-encoded signature for cryptography library.

        Returns:
            DER-encoded signature bytes
        """
        return utils.encode_dss_signature(self.get_r_int(), self.get_s_int())

    @classmethod
    def from_der(
        cls, der_data: bytes, curve_type: AttestationKeyType
    ) -> "EcdsaSignature":
        """
        Create ECDSA signature from DER-encoded data

        Args:
            der_data: DER-encoded signature
            curve_type: The curve type (determines component sizes)

        Returns:
            EcdsaSignature instance
        """
        r_int, s_int = utils.decode_dss_signature(der_data)
        size = curve_type.component_size
        return cls(r_int.to_bytes(size, "big"), s_int.to_bytes(size, "big"), curve_type)

    def to_bytes(self) -> bytes:
        return self.r + self.s

    def __repr__(self) -> str:
        return f"EcdsaSignature(curve={self.curve_type.name}, r={self.r.hex()[:16]}..., s={self.s.hex()[:16]}...)"
