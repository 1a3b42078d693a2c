"""
Unit tests for ECDSA key and signature views (ecdsa.py).
"""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from builders import build_quote, build_signature_data

from sgx_quote import parse_quote
from sgx_quote.ecdsa import AttestationKeyType, EcdsaPublicKey, EcdsaSignature


def test_key_type_from_tag():
    assert AttestationKeyType.from_tag(2) is AttestationKeyType.ECDSA_P256
    assert AttestationKeyType.from_tag(3) is AttestationKeyType.ECDSA_P384
    assert AttestationKeyType.from_tag(0) is None
    assert AttestationKeyType.ECDSA_P256.component_size == 32
    assert AttestationKeyType.ECDSA_P384.component_size == 48


def test_signature_wrong_length():
    with pytest.raises(ValueError):
        EcdsaSignature.from_bytes(b"\x00" * 63, AttestationKeyType.ECDSA_P256)


def test_public_key_wrong_length():
    with pytest.raises(ValueError):
        EcdsaPublicKey.from_uncompressed_bytes(b"\x00" * 64, AttestationKeyType.ECDSA_P384)


def test_der_round_trip():
    sig = EcdsaSignature.from_bytes(
        b"\x00" * 31 + b"\x07" + b"\x01" * 32, AttestationKeyType.ECDSA_P256
    )
    again = EcdsaSignature.from_der(sig.to_der(), AttestationKeyType.ECDSA_P256)
    assert again == sig
    assert again.get_r_int() == 7


def test_quote_fields_usable_by_cryptography():
    # Build a quote whose attestation key and ISV signature are real, then
    # check the decoded views can be handed to cryptography as-is.
    private_key = ec.generate_private_key(ec.SECP256R1())
    numbers = private_key.public_key().public_numbers()
    raw_key = numbers.x.to_bytes(32, "big") + numbers.y.to_bytes(32, "big")

    unsigned = build_quote(signature_data=build_signature_data(attestation_key=raw_key))
    der = private_key.sign(unsigned[:432], ec.ECDSA(hashes.SHA256()))
    raw_sig = EcdsaSignature.from_der(der, AttestationKeyType.ECDSA_P256).to_bytes()
    data = build_quote(
        signature_data=build_signature_data(
            isv_report_signature=raw_sig, attestation_key=raw_key
        )
    )

    quote = parse_quote(data)
    public_key = quote.signature.public_key().to_cryptography_key()
    assert public_key.public_numbers().x == numbers.x
    assert public_key.public_numbers().y == numbers.y
    public_key.verify(
        quote.signature.isv_signature().to_der(),
        bytes(quote.signed_message),
        ec.ECDSA(hashes.SHA256()),
    )
