"""A small writer that assembles L2CAP/ATT responses bounded by an MTU."""

from __future__ import annotations

import struct

from .uuid import UUID

__all__ = ["L2capWriterError", "L2capWriter"]


class L2capWriterError(RuntimeError):
    """Raised when the writer is used out of order."""


class L2capWriter:
    """Builds a response no longer than ``mtu`` bytes.

    Plain writes are truncated to fit. Between :meth:`chunk` and
    :meth:`commit` (or :meth:`commit_fit`) writes are collected without limit
    and then committed whole or truncated.
    """

    def __init__(self, mtu: int) -> None:
        if mtu < 0:
            raise ValueError(f"mtu must not be negative, got {mtu}")
        self.mtu = mtu
        self._buf = bytearray()
        self._chunk = bytearray()
        self._chunked = False

    def chunk(self) -> None:
        """Start a chunk that is held back until it is committed."""
        if self._chunked:
            raise L2capWriterError("chunk called twice without committing")
        self._chunked = True

    def _end_chunk(self) -> None:
        self._chunk.clear()
        self._chunked = False

    def commit(self) -> bool:
        """Write the current chunk if it fits entirely; report whether it did."""
        if not self._chunked:
            raise L2capWriterError("commit without starting a chunk")
        success = len(self._buf) + len(self._chunk) <= self.mtu
        if success:
            self._buf += self._chunk
        self._end_chunk()
        return success

    def commit_fit(self) -> None:
        """Write as much of the current chunk as fits, truncating the rest."""
        if not self._chunked:
            raise L2capWriterError("commit_fit without starting a chunk")
        room = max(self.mtu - len(self._buf), 0)
        self._buf += self._chunk[:room]
        self._end_chunk()

    def write_byte_fit(self, value: int) -> bool:
        """Write a single byte; see :meth:`write_fit`."""
        return self.write_fit(bytes((value,)))

    def write_uint16_fit(self, value: int) -> bool:
        """Write ``value`` as a little-endian 16-bit integer; see :meth:`write_fit`."""
        return self.write_fit(struct.pack("<H", value))

    def write_uuid_fit(self, u: UUID) -> bool:
        """Write ``u`` in wire order; see :meth:`write_fit`."""
        return self.write_fit(u.to_bytes())

    def writeable(self, pad: int, data: bytes) -> int:
        """Return how many bytes of ``data`` would fit after ``pad`` bytes."""
        if self._chunked:
            return len(data)
        avail = self.mtu - len(self._buf) - pad
        if avail > len(data):
            return len(data)
        return max(avail, 0)

    def write_fit(self, data: bytes) -> bool:
        """Write as much of ``data`` as fits; report whether nothing was cut."""
        if self._chunked:
            self._chunk += data
            return True
        avail = max(self.mtu - len(self._buf), 0)
        if avail >= len(data):
            self._buf += data
            return True
        self._buf += data[:avail]
        return False

    def chunk_seek(self, offset: int) -> bool:
        """Drop the first ``offset`` bytes of the chunk; report whether there were enough."""
        if not self._chunked:
            raise L2capWriterError("chunk_seek requested without chunked write in progress")
        if len(self._chunk) < offset:
            self._chunk.clear()
            return False
        del self._chunk[:offset]
        return True

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        if self._chunked:
            raise L2capWriterError("bytes requested while chunked write in progress")
        return bytes(self._buf)