"""Row entity and its fixed-width codec.

A row is one record of the fixed schema ``(id, username, email)``. The codec
copies each column into its slot of a ``ROW_SIZE``-byte range at the offsets
defined in ``row_store.domain.value_objects.layout``. Text columns are UTF-8
and zero-filled to their full width; the width applies to encoded bytes.

The codec never truncates: a column that does not fit raises
FieldTooLongError before any byte of the destination is touched. NUL is the
zero fill, so a column containing one raises InvalidFieldValueError; every
row the codec accepts decodes back to an equal row.

References:
    - layout.py (Row Layout diagram)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from row_store.domain.value_objects import (
    EMAIL_OFFSET,
    EMAIL_SIZE,
    ID_OFFSET,
    ID_SIZE,
    MAX_ROW_ID,
    ROW_SIZE,
    USERNAME_OFFSET,
    USERNAME_SIZE,
)
from row_store.ports.inbound.execution_engine import FieldTooLongError, InvalidFieldValueError


@dataclass(frozen=True, slots=True)
class Row:
    """A single fixed-schema record.

    Attributes:
        id: Unsigned 32-bit identifier
        username: Text of at most 32 UTF-8 bytes
        email: Text of at most 255 UTF-8 bytes

    Example:
        >>> row = Row(1, "alice", "alice@example.com")
        >>> Row.from_bytes(row.to_bytes()) == row
        True
    """

    id: int
    username: str
    email: str

    ID_FORMAT: ClassVar[str] = "=I"  # native byte order, standard 4-byte size

    def __post_init__(self) -> None:
        """Validate the id column."""
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise TypeError(f"id must be an int, got {type(self.id).__name__}")
        if not 0 <= self.id <= MAX_ROW_ID:
            raise ValueError(f"id must be in [0, {MAX_ROW_ID}], got {self.id}")

    def validate(self) -> None:
        """Check that both text columns can be stored.

        Raises:
            FieldTooLongError: If username or email is too long
            InvalidFieldValueError: If username or email contains NUL
        """
        _encode_text("username", self.username, USERNAME_SIZE)
        _encode_text("email", self.email, EMAIL_SIZE)

    def to_bytes(self) -> bytes:
        """Serialize to a fresh ROW_SIZE buffer."""
        buffer = bytearray(ROW_SIZE)
        serialize_row(self, buffer)
        return bytes(buffer)

    @classmethod
    def from_bytes(cls, data: bytes) -> Row:
        """Deserialize from exactly ROW_SIZE bytes."""
        return deserialize_row(data)

    def __str__(self) -> str:
        return f"({self.id}, {self.username}, {self.email})"


def _encode_text(field_name: str, value: str, width: int) -> bytes:
    """Encode a text column and pad it to its full width."""
    position = value.find("\x00")
    if position != -1:
        raise InvalidFieldValueError(field_name, position)
    encoded = value.encode("utf-8")
    if len(encoded) > width:
        raise FieldTooLongError(field_name, len(encoded), width)
    return encoded.ljust(width, b"\x00")


def _decode_text(data: bytes) -> str:
    """Strip the zero fill and decode a text column."""
    return data.rstrip(b"\x00").decode("utf-8")


def _check_size(buffer: bytes | bytearray | memoryview) -> None:
    if len(buffer) != ROW_SIZE:
        raise ValueError(f"Row requires {ROW_SIZE} bytes, got {len(buffer)}")


def serialize_row(row: Row, destination: bytearray | memoryview) -> None:
    """Write a row into a ROW_SIZE-byte destination.

    All columns are encoded and checked before the destination is written,
    so a rejected row leaves the destination untouched.

    Args:
        row: The row to encode
        destination: Writable buffer of exactly ROW_SIZE bytes

    Raises:
        ValueError: If the destination has the wrong size
        FieldTooLongError: If a text column exceeds its width
        InvalidFieldValueError: If a text column contains NUL
    """
    _check_size(destination)

    id_bytes = struct.pack(Row.ID_FORMAT, row.id)
    username = _encode_text("username", row.username, USERNAME_SIZE)
    email = _encode_text("email", row.email, EMAIL_SIZE)

    destination[ID_OFFSET : ID_OFFSET + ID_SIZE] = id_bytes
    destination[USERNAME_OFFSET : USERNAME_OFFSET + USERNAME_SIZE] = username
    destination[EMAIL_OFFSET : EMAIL_OFFSET + EMAIL_SIZE] = email


def deserialize_row(source: bytes | bytearray | memoryview) -> Row:
    """Rebuild a row from a ROW_SIZE-byte range.

    Raises:
        ValueError: If the source has the wrong size
    """
    _check_size(source)

    (row_id,) = struct.unpack_from(Row.ID_FORMAT, source, ID_OFFSET)
    username = bytes(source[USERNAME_OFFSET : USERNAME_OFFSET + USERNAME_SIZE])
    email = bytes(source[EMAIL_OFFSET : EMAIL_OFFSET + EMAIL_SIZE])

    return Row(id=row_id, username=_decode_text(username), email=_decode_text(email))
