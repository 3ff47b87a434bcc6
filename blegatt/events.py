"""HCI event parsing: the event header, a dispatcher and event parameter decoders."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple

from .order import mac_from_bytes, read_int8, read_uint16, read_uint8

__all__ = [
    "EventError",
    "EventCode",
    "LEEventCode",
    "EventHeader",
    "EventHandler",
    "EventDispatcher",
    "DisconnectionCompleteEP",
    "CommandCompleteEP",
    "CommandStatusEP",
    "NumOfCompletedPkt",
    "NumberOfCompletedPktsEP",
    "LEConnectionCompleteEP",
    "LEAdvertisingReportEP",
    "LEConnectionUpdateCompleteEP",
    "LEReadRemoteUsedFeaturesCompleteEP",
    "LELTKRequestEP",
    "LERemoteConnectionParameterRequestEP",
]

EventHandler = Callable[[bytes], Any]


class EventError(ValueError):
    """Raised when an HCI event or its parameters cannot be decoded."""


class EventCode(IntEnum):
    """HCI event codes."""

    INQUIRY_COMPLETE = 0x01
    INQUIRY_RESULT = 0x02
    CONNECTION_COMPLETE = 0x03
    CONNECTION_REQUEST = 0x04
    DISCONNECTION_COMPLETE = 0x05
    AUTHENTICATION_COMPLETE = 0x06
    REMOTE_NAME_REQ_COMPLETE = 0x07
    ENCRYPTION_CHANGE = 0x08
    CHANGE_CONNECTION_LINK_KEY_COMPLETE = 0x09
    MASTER_LINK_KEY_COMPLETE = 0x0A
    READ_REMOTE_SUPPORTED_FEATURES_COMPLETE = 0x0B
    READ_REMOTE_VERSION_INFORMATION_COMPLETE = 0x0C
    QOS_SETUP_COMPLETE = 0x0D
    COMMAND_COMPLETE = 0x0E
    COMMAND_STATUS = 0x0F
    HARDWARE_ERROR = 0x10
    FLUSH_OCCURRED = 0x11
    ROLE_CHANGE = 0x12
    NUMBER_OF_COMPLETED_PKTS = 0x13
    MODE_CHANGE = 0x14
    RETURN_LINK_KEYS = 0x15
    PIN_CODE_REQUEST = 0x16
    LINK_KEY_REQUEST = 0x17
    LINK_KEY_NOTIFICATION = 0x18
    LOOPBACK_COMMAND = 0x19
    DATA_BUFFER_OVERFLOW = 0x1A
    MAX_SLOTS_CHANGE = 0x1B
    READ_CLOCK_OFFSET_COMPLETE = 0x1C
    CONNECTION_PTYPE_CHANGED = 0x1D
    QOS_VIOLATION = 0x1E
    PAGE_SCAN_REPETITION_MODE_CHANGE = 0x20
    FLOW_SPECIFICATION_COMPLETE = 0x21
    INQUIRY_RESULT_WITH_RSSI = 0x22
    READ_REMOTE_EXTENDED_FEATURES_COMPLETE = 0x23
    SYNC_CONNECTION_COMPLETE = 0x2C
    SYNC_CONNECTION_CHANGED = 0x2D
    SNIFF_SUBRATING = 0x2E
    EXTENDED_INQUIRY_RESULT = 0x2F
    ENCRYPTION_KEY_REFRESH_COMPLETE = 0x30
    IO_CAPABILITY_REQUEST = 0x31
    IO_CAPABILITY_RESPONSE = 0x32
    USER_CONFIRMATION_REQUEST = 0x33
    USER_PASSKEY_REQUEST = 0x34
    REMOTE_OOB_DATA_REQUEST = 0x35
    SIMPLE_PAIRING_COMPLETE = 0x36
    LINK_SUPERVISION_TIMEOUT_CHANGED = 0x38
    ENHANCED_FLUSH_COMPLETE = 0x39
    USER_PASSKEY_NOTIFY = 0x3B
    KEYPRESS_NOTIFY = 0x3C
    REMOTE_HOST_FEATURES_NOTIFY = 0x3D
    LE_META = 0x3E
    PHYSICAL_LINK_COMPLETE = 0x40
    CHANNEL_SELECTED = 0x41
    DISCONNECTION_PHYSICAL_LINK_COMPLETE = 0x42
    PHYSICAL_LINK_LOSS_EARLY_WARNING = 0x43
    PHYSICAL_LINK_RECOVERY = 0x44
    LOGICAL_LINK_COMPLETE = 0x45
    DISCONNECTION_LOGICAL_LINK_COMPLETE = 0x46
    FLOW_SPEC_MODIFY_COMPLETE = 0x47
    NUMBER_OF_COMPLETED_BLOCKS = 0x48
    AMP_START_TEST = 0x49
    AMP_TEST_END = 0x4A
    AMP_RECEIVER_REPORT = 0x4B
    AMP_STATUS_CHANGE = 0x4D
    TRIGGERED_CLOCK_CAPTURE = 0x4E
    SYNCHRONIZATION_TRAIN_COMPLETE = 0x4F
    SYNCHRONIZATION_TRAIN_RECEIVED = 0x50
    CONNECTIONLESS_SLAVE_BROADCAST_RECEIVE = 0x51
    CONNECTIONLESS_SLAVE_BROADCAST_TIMEOUT = 0x52
    TRUNCATED_PAGE_COMPLETE = 0x53
    SLAVE_PAGE_RESPONSE_TIMEOUT = 0x54
    CONNECTIONLESS_SLAVE_BROADCAST_CHANNEL_MAP_CHANGE = 0x55
    INQUIRY_RESPONSE_NOTIFICATION = 0x56
    AUTHENTICATED_PAYLOAD_TIMEOUT_EXPIRED = 0x57


class LEEventCode(IntEnum):
    """LE Meta event sub-event codes."""

    CONNECTION_COMPLETE = 0x01
    ADVERTISING_REPORT = 0x02
    CONNECTION_UPDATE_COMPLETE = 0x03
    READ_REMOTE_USED_FEATURES_COMPLETE = 0x04
    LTK_REQUEST = 0x05
    REMOTE_CONNECTION_PARAMETER_REQUEST = 0x06


@dataclass(frozen=True)
class EventHeader:
    """The two-byte header of an HCI event packet."""

    code: int
    plen: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "EventHeader":
        """Parse the header of a whole event packet."""
        if len(data) < 2:
            raise EventError("malformed header")
        code, plen = data[0], data[1]
        # The length check is carried out on a single byte, as on the wire.
        if (len(data) & 0xFF) != ((2 + plen) & 0xFF):
            raise EventError("wrong length")
        return cls(code=code, plen=plen)


class EventDispatcher:
    """Routes HCI event packets to handlers registered by event code."""

    def __init__(self) -> None:
        self._handlers: Dict[int, EventHandler] = {}

    def handle_event(self, code: int, handler: EventHandler) -> None:
        """Register ``handler`` for event ``code``, replacing any earlier one."""
        self._handlers[int(code)] = handler

    def dispatch(self, data: bytes) -> Any:
        """Decode the header and pass the parameters to the matching handler.

        Returns what the handler returns, or ``None`` when no handler is
        registered for the event.
        """
        header = EventHeader.unmarshal(data)
        handler = self._handlers.get(header.code)
        if handler is None:
            return None
        return handler(bytes(data[2:]))


def _unpack_fixed(fmt: str, data: bytes, name: str) -> Tuple[int, ...]:
    size = struct.calcsize(fmt)
    if len(data) < size:
        raise EventError(f"{name}: expected {size} bytes, got {len(data)}")
    return struct.unpack_from(fmt, data)


@dataclass(frozen=True)
class DisconnectionCompleteEP:
    """Disconnection Complete event parameters."""

    status: int
    connection_handle: int
    reason: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "DisconnectionCompleteEP":
        status, handle, reason = _unpack_fixed("<BHB", data, "disconnection complete")
        return cls(status=status, connection_handle=handle, reason=reason)


@dataclass(frozen=True)
class CommandCompleteEP:
    """Command Complete event parameters."""

    num_hci_command_packets: int
    command_opcode: int
    return_parameters: bytes

    @classmethod
    def unmarshal(cls, data: bytes) -> "CommandCompleteEP":
        num, opcode = _unpack_fixed("<BH", data, "command complete")
        return cls(
            num_hci_command_packets=num,
            command_opcode=opcode,
            return_parameters=bytes(data[3:]),
        )


@dataclass(frozen=True)
class CommandStatusEP:
    """Command Status event parameters."""

    status: int
    num_hci_command_packets: int
    command_opcode: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "CommandStatusEP":
        status, num, opcode = _unpack_fixed("<BBH", data, "command status")
        return cls(status=status, num_hci_command_packets=num, command_opcode=opcode)


@dataclass(frozen=True)
class NumOfCompletedPkt:
    """Completed-packet count for one connection handle."""

    connection_handle: int
    num_of_completed_pkts: int


def _lenient_uint16(data: bytes, pos: int) -> int:
    field = data[pos:pos + 2]
    return struct.unpack("<H", field)[0] if len(field) == 2 else 0


@dataclass(frozen=True)
class NumberOfCompletedPktsEP:
    """Number Of Completed Packets event parameters.

    Entries missing from a short packet decode as zero.
    """

    number_of_handles: int
    packets: Tuple[NumOfCompletedPkt, ...]

    @classmethod
    def unmarshal(cls, data: bytes) -> "NumberOfCompletedPktsEP":
        if not data:
            raise EventError("number of completed packets: empty parameters")
        n = data[0]
        body = bytes(data[1:])
        packets = tuple(
            NumOfCompletedPkt(
                connection_handle=_lenient_uint16(body, 4 * i) & 0xFFF,
                num_of_completed_pkts=_lenient_uint16(body, 4 * i + 2),
            )
            for i in range(n)
        )
        return cls(number_of_handles=n, packets=packets)


@dataclass(frozen=True)
class LEConnectionCompleteEP:
    """LE Connection Complete sub-event parameters."""

    subevent_code: int
    status: int
    connection_handle: int
    role: int
    peer_address_type: int
    peer_address: bytes
    conn_interval: int
    conn_latency: int
    supervision_timeout: int
    master_clock_accuracy: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "LEConnectionCompleteEP":
        if len(data) < 18:
            raise EventError(f"expected at least 18 bytes, got {len(data)}")
        return cls(
            subevent_code=read_uint8(data[0:]),
            status=read_uint8(data[1:]),
            connection_handle=read_uint16(data[2:]),
            role=read_uint8(data[4:]),
            peer_address_type=read_uint8(data[5:]),
            peer_address=mac_from_bytes(data[6:]),
            conn_interval=read_uint16(data[12:]),
            conn_latency=read_uint16(data[14:]),
            supervision_timeout=read_uint16(data[16:]),
            master_clock_accuracy=read_uint8(data[17:]),
        )


@dataclass(frozen=True)
class LEAdvertisingReportEP:
    """LE Advertising Report sub-event parameters, one entry per report in each field."""

    subevent_code: int
    num_reports: int
    event_type: Tuple[int, ...]
    address_type: Tuple[int, ...]
    address: Tuple[bytes, ...]
    length: Tuple[int, ...]
    data: Tuple[bytes, ...]
    rssi: Tuple[int, ...]

    @classmethod
    def unmarshal(cls, data: bytes) -> "LEAdvertisingReportEP":
        if len(data) < 2:
            raise EventError("expected at least 2 bytes")
        subevent, n = data[0], data[1]
        b = bytes(data[2:])
        fixed = (1 + 1 + 6 + 1) * n
        if len(b) < fixed:
            raise EventError(f"expected {fixed} more bytes, got {len(b)}")

        event_type = tuple(b[:n])
        b = b[n:]
        address_type = tuple(b[:n])
        b = b[n:]
        address = tuple(mac_from_bytes(b[6 * i:]) for i in range(n))
        b = b[6 * n:]
        length = tuple(b[:n])
        b = b[n:]

        needed = sum(length) + n
        if len(b) < needed:
            raise EventError(f"expected {needed} more bytes, got {len(b)}")

        reports = []
        for size in length:
            reports.append(b[:size])
            b = b[size:]
        rssi = tuple(read_int8(b[i:]) for i in range(n))

        return cls(
            subevent_code=subevent,
            num_reports=n,
            event_type=event_type,
            address_type=address_type,
            address=address,
            length=length,
            data=tuple(reports),
            rssi=rssi,
        )


@dataclass(frozen=True)
class LEConnectionUpdateCompleteEP:
    """LE Connection Update Complete sub-event parameters."""

    subevent_code: int
    status: int
    connection_handle: int
    conn_interval: int
    conn_latency: int
    supervision_timeout: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "LEConnectionUpdateCompleteEP":
        return cls(*_unpack_fixed("<BBHHHH", data, "LE connection update complete"))


@dataclass(frozen=True)
class LEReadRemoteUsedFeaturesCompleteEP:
    """LE Read Remote Used Features Complete sub-event parameters."""

    subevent_code: int
    status: int
    connection_handle: int
    le_features: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "LEReadRemoteUsedFeaturesCompleteEP":
        return cls(*_unpack_fixed("<BBHQ", data, "LE read remote used features complete"))


@dataclass(frozen=True)
class LELTKRequestEP:
    """LE Long Term Key Request sub-event parameters."""

    subevent_code: int
    connection_handle: int
    random_number: int
    encryption_diversifier: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "LELTKRequestEP":
        return cls(*_unpack_fixed("<BHQH", data, "LE LTK request"))


@dataclass(frozen=True)
class LERemoteConnectionParameterRequestEP:
    """LE Remote Connection Parameter Request sub-event parameters."""

    subevent_code: int
    connection_handle: int
    interval_min: int
    interval_max: int
    latency: int
    timeout: int

    @classmethod
    def unmarshal(cls, data: bytes) -> "LERemoteConnectionParameterRequestEP":
        return cls(*_unpack_fixed("<BHHHHH", data, "LE remote connection parameter request"))


def _optional_code(value: int) -> Optional[EventCode]:
    try:
        return EventCode(value)
    except ValueError:
        return None