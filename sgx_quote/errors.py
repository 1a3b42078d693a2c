# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Parse errors - Exception types raised while decoding SGX quotes.

from typing import Optional


class ParseError(ValueError):
    """Base class for all errors raised while decoding a quote."""

    def __init__(
        self, message: str, offset: Optional[int] = None, field: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.field = field


class TooShortError(ParseError):
    """Raised when fewer bytes remain than a field or region requires."""

    def __init__(self, field: str, offset: int, needed: int, available: int) -> None:
        super().__init__(
            f"Insufficient data for {field} at offset {offset}: "
            f"expected {needed} bytes, got {available}",
            offset=offset,
            field=field,
        )
        self.needed = needed
        self.available = available


class InvalidCertificationDataTypeError(ParseError):
    """Raised when the QE certification data type tag is not a supported value."""

    def __init__(self, cert_type: int, offset: int) -> None:
        super().__init__(
            f"Invalid QE certification data type {cert_type} at offset {offset}",
            offset=offset,
            field="qe_certification_data_type",
        )
        self.cert_type = cert_type


class TrailingDataError(ParseError):
    """Raised when bytes remain after a structure has been fully decoded."""

    def __init__(self, context: str, offset: int, remaining: int) -> None:
        super().__init__(
            f"Unexpected trailing data after {context}: "
            f"{remaining} bytes remain at offset {offset}",
            offset=offset,
            field=context,
        )
        self.remaining = remaining
