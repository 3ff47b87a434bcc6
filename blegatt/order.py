"""Little-endian field helpers and a bounded pool of reusable byte buffers."""

from __future__ import annotations

import queue
import struct
from typing import Optional

__all__ = [
    "BytePool",
    "mac_from_bytes",
    "mac_to_bytes",
    "read_int8",
    "read_uint8",
    "read_uint16",
    "read_uint64",
]

_MAC_LEN = 6


class BytePool:
    """A bounded pool of byte buffers of a fixed width.

    ``get`` hands out a pooled buffer when one is available and a fresh one
    otherwise; ``put`` returns a buffer to the pool, silently dropping it when
    the pool is already full.
    """

    def __init__(self, width: int, depth: int) -> None:
        if width < 0:
            raise ValueError(f"width must not be negative, got {width}")
        if depth < 0:
            raise ValueError(f"depth must not be negative, got {depth}")
        self.width = width
        self.depth = depth
        # A depth of zero means nothing is ever retained.
        self._pool: Optional[queue.Queue] = queue.Queue(maxsize=depth) if depth else None

    def get(self) -> Optional[bytearray]:
        """Return a pooled buffer, or a new zeroed one of ``width`` bytes."""
        if self._pool is not None:
            try:
                return self._pool.get_nowait()
            except queue.Empty:
                pass
        return bytearray(self.width)

    def put(self, buf: Optional[bytearray]) -> None:
        """Return ``buf`` to the pool; it is dropped if the pool is full."""
        if self._pool is None:
            return
        try:
            self._pool.put_nowait(buf)
        except queue.Full:
            pass

    def __len__(self) -> int:
        return 0 if self._pool is None else self._pool.qsize()


def _require(data: bytes, size: int) -> None:
    if len(data) < size:
        raise ValueError(f"need at least {size} bytes, got {len(data)}")


def mac_from_bytes(data: bytes) -> bytes:
    """Decode a 6-byte device address stored in reversed (wire) order."""
    _require(data, _MAC_LEN)
    return bytes(reversed(bytes(data[:_MAC_LEN])))


def mac_to_bytes(mac: bytes) -> bytes:
    """Encode a 6-byte device address into reversed (wire) order."""
    if len(mac) != _MAC_LEN:
        raise ValueError(f"address must be {_MAC_LEN} bytes, got {len(mac)}")
    return bytes(reversed(bytes(mac)))


def read_int8(data: bytes) -> int:
    """Read a signed byte from the start of ``data``."""
    _require(data, 1)
    return struct.unpack_from("<b", data)[0]


def read_uint8(data: bytes) -> int:
    """Read an unsigned byte from the start of ``data``."""
    _require(data, 1)
    return data[0]


def read_uint16(data: bytes) -> int:
    """Read a little-endian unsigned 16-bit integer from the start of ``data``."""
    _require(data, 2)
    return struct.unpack_from("<H", data)[0]


def read_uint64(data: bytes) -> int:
    """Read a little-endian unsigned 64-bit integer from the start of ``data``."""
    _require(data, 8)
    return struct.unpack_from("<Q", data)[0]