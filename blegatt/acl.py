"""HCI ACL data packets: parsing, L2CAP reassembly and fragmentation."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

__all__ = [
    "PacketType",
    "AdvEventType",
    "AclError",
    "AclData",
    "Reassembler",
    "CID_ATT",
    "CID_LE_SIGNAL",
    "build_acl_fragments",
    "connection_parameter_update_request",
]

CID_ATT = 0x0004
CID_LE_SIGNAL = 0x0005

_MAX_SDU = 512
_CONTINUATION = 0x1
_CONTINUATION_FLAG_BITS = 0x10


class PacketType(IntEnum):
    """HCI packet indicators."""

    COMMAND = 0x01
    ACL_DATA = 0x02
    SCO_DATA = 0x03
    EVENT = 0x04
    VENDOR = 0xFF


class AdvEventType(IntEnum):
    """Advertising report event types."""

    ADV_IND = 0x00
    ADV_DIRECT_IND = 0x01
    ADV_SCAN_IND = 0x02
    ADV_NONCONN_IND = 0x03
    SCAN_RSP = 0x04


class AclError(ValueError):
    """Raised for malformed ACL packets or broken reassembly."""


@dataclass(frozen=True)
class AclData:
    """One HCI ACL data packet (without the packet-type byte)."""

    handle: int
    flags: int
    dlen: int
    payload: bytes

    @classmethod
    def unmarshal(cls, data: bytes) -> "AclData":
        """Parse an ACL packet; raise :class:`AclError` if it is malformed."""
        if len(data) < 4:
            raise AclError("malformed acl packet")
        handle = data[0] | ((data[1] & 0x0F) << 8)
        flags = data[1] >> 4
        dlen = data[2] | (data[3] << 8)
        if len(data) != 4 + dlen:
            raise AclError("malformed acl packet")
        return cls(handle=handle, flags=flags, dlen=dlen, payload=bytes(data[4:]))


class Reassembler:
    """Rebuilds L2CAP payloads from a connection's ACL packets.

    Signalling-channel packets are ignored. Any protocol error closes the
    reassembler, after which every feed raises.
    """

    def __init__(self) -> None:
        self._buf: Optional[bytearray] = None
        self._total = 0
        self.closed = False

    def _fail(self, message: str) -> AclError:
        self.closed = True
        self._buf = None
        return AclError(message)

    def feed(self, acl: AclData) -> Optional[bytes]:
        """Take one packet; return a completed payload, or ``None`` if none is ready."""
        if self.closed:
            raise AclError("connection closed")
        if self._buf is None:
            return self._start(acl)
        if not acl.flags & _CONTINUATION:
            raise self._fail("expected a continuation fragment")
        self._buf += acl.payload
        return self._check_complete()

    def _start(self, acl: AclData) -> Optional[bytes]:
        b = acl.payload
        if len(b) < 4:
            raise self._fail("short or corrupt l2cap packet")
        total, cid = struct.unpack_from("<HH", b)
        if cid == CID_LE_SIGNAL:
            return None
        self._total = total
        self._buf = bytearray(b[4:])
        return self._check_complete()

    def _check_complete(self) -> Optional[bytes]:
        assert self._buf is not None
        n = len(self._buf)
        if n > _MAX_SDU:
            raise self._fail(f"l2cap payload exceeds {_MAX_SDU} bytes")
        if n > self._total:
            raise self._fail("fragments exceed the declared l2cap length")
        if n < self._total:
            return None
        out = bytes(self._buf)
        self._buf = None
        return out


def build_acl_fragments(handle: int, cid: int, payload: bytes, buf_size: int) -> List[bytes]:
    """Split an L2CAP payload into HCI ACL packets of at most ``buf_size`` data bytes.

    Each packet starts with the ACL packet-type byte.
    """
    if buf_size <= 0:
        raise ValueError(f"buffer size must be positive, got {buf_size}")
    if len(payload) > 0xFFFF:
        raise ValueError(f"l2cap payload too long: {len(payload)}")
    stream = struct.pack("<HH", len(payload), cid & 0xFFFF) + bytes(payload)
    fragments = []
    flag = 0
    for offset in range(0, len(stream), buf_size):
        segment = stream[offset:offset + buf_size]
        header = bytes((
            PacketType.ACL_DATA,
            handle & 0xFF,
            ((handle >> 8) & 0xFF) | flag,
            len(segment) & 0xFF,
            len(segment) >> 8,
        ))
        fragments.append(header + segment)
        flag = _CONTINUATION_FLAG_BITS
    return fragments


def connection_parameter_update_request() -> bytes:
    """Return the LE signalling packet that requests new connection parameters."""
    return bytes((
        0x12,        # Code (Connection Param Update)
        0x02,        # ID
        0x08, 0x00,  # DataLength
        0x08, 0x00,  # IntervalMin
        0x18, 0x00,  # IntervalMax
        0x00, 0x00,  # SlaveLatency
        0xC8, 0x00,  # TimeoutMultiplier
    ))