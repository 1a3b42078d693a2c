# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Byte reader - Bounds-checked cursor and zero-copy views over a quote buffer.

import struct
from typing import Optional, Union

from .errors import TooShortError, TrailingDataError

BytesLike = Union[bytes, bytearray, memoryview]


def as_buffer(data: BytesLike) -> memoryview:
    """
    Return a read-only, byte-format memoryview over data without copying.

    Args:
        data: Any object supporting the buffer protocol

    Returns:
        memoryview: Flat unsigned-byte view of data

    Raises:
        TypeError: If data does not support the buffer protocol
    """
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view.toreadonly()


class ByteSpan:
    """
    A (offset, length) view into a shared quote buffer.

    Decoded byte fields are spans rather than copies, so they always refer
    to the exact bytes they were read from. Equality and hashing use the
    content, which lets spans be compared directly against bytes.
    """

    __slots__ = ("_source", "_offset", "_length")

    def __init__(self, source: memoryview, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(source):
            raise ValueError(
                f"Span [{offset}, {offset + length}) outside buffer of {len(source)} bytes"
            )
        self._source = source
        self._offset = offset
        self._length = length

    @property
    def source(self) -> memoryview:
        """The whole buffer this span points into."""
        return self._source

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def length(self) -> int:
        return self._length

    @property
    def end(self) -> int:
        return self._offset + self._length

    def view(self) -> memoryview:
        """Return a memoryview aliasing exactly the spanned bytes."""
        return self._source[self._offset : self.end]

    def tobytes(self) -> bytes:
        return self.view().tobytes()

    def hex(self) -> str:
        return self.view().hex()

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, key):
        return self.view()[key]

    def __iter__(self):
        return iter(self.view())

    def __eq__(self, other) -> bool:
        if isinstance(other, ByteSpan):
            return self.view() == other.view()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.view() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.tobytes())

    def __repr__(self) -> str:
        preview = self.hex()
        if len(preview) > 32:
            preview = preview[:32] + "..."
        return f"ByteSpan(offset={self._offset}, length={self._length}, data={preview})"


class ByteReader:
    """
    Forward-only cursor over a region of a quote buffer.

    Every read checks the remaining length first and raises TooShortError
    instead of reading past the end of the region. Offsets reported in
    errors and spans are absolute positions in the original buffer.
    """

    def __init__(
        self, source: memoryview, start: int = 0, end: Optional[int] = None
    ) -> None:
        self._source = source
        self._pos = start
        self._end = len(source) if end is None else end

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "ByteReader":
        return cls(as_buffer(data))

    @property
    def source(self) -> memoryview:
        return self._source

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def _advance(self, size: int, field: str) -> int:
        if size > self.remaining:
            raise TooShortError(field, self._pos, size, self.remaining)
        start = self._pos
        self._pos += size
        return start

    def take(self, size: int, field: str) -> ByteSpan:
        """Consume size bytes and return them as a span."""
        start = self._advance(size, field)
        return ByteSpan(self._source, start, size)

    def skip(self, size: int, field: str) -> None:
        """Consume size reserved bytes without keeping them."""
        self._advance(size, field)

    def le_u16(self, field: str) -> int:
        start = self._advance(2, field)
        return struct.unpack_from("<H", self._source, start)[0]

    def le_u32(self, field: str) -> int:
        start = self._advance(4, field)
        return struct.unpack_from("<I", self._source, start)[0]

    def length_prefixed(self, prefix_size: int, field: str) -> ByteSpan:
        """
        Consume a little-endian length prefix followed by that many bytes.

        Args:
            prefix_size: Width of the length prefix, 2 or 4 bytes
            field: Field name used in error messages

        Returns:
            ByteSpan: The delimited payload (the prefix is not included)

        Raises:
            TooShortError: If the prefix or the declared payload does not fit
        """
        if prefix_size == 2:
            length = self.le_u16(f"{field} length")
        elif prefix_size == 4:
            length = self.le_u32(f"{field} length")
        else:
            raise ValueError(f"Unsupported length prefix size: {prefix_size}")
        return self.take(length, field)

    def sub_reader(self, prefix_size: int, field: str) -> "ByteReader":
        """Consume a length-prefixed region and return a reader confined to it."""
        span = self.length_prefixed(prefix_size, field)
        return ByteReader(self._source, span.offset, span.end)

    def finish(self, context: str) -> None:
        """
        Require that the region has been consumed completely.

        Raises:
            TrailingDataError: If any bytes remain
        """
        if self.remaining:
            raise TrailingDataError(context, self._pos, self.remaining)
