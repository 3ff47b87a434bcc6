"""HCI command parameters and their wire encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass, fields
from typing import ClassVar, Optional

from ..order import mac_to_bytes
from .opcodes import Opcode

__all__ = [
    "COMMAND_PACKET",
    "MAX_ADVERTISING_DATA",
    "CommandParam",
    "Disconnect",
    "WriteDefaultLinkPolicy",
    "SetEventMask",
    "Reset",
    "Flush",
    "WritePageTimeout",
    "WriteClassOfDevice",
    "HostBufferSize",
    "WriteInquiryScanType",
    "WriteInquiryMode",
    "WritePageScanType",
    "WriteSimplePairingMode",
    "SetEventMaskPage2",
    "WriteLEHostSupported",
    "LESetEventMask",
    "LEReadBufferSize",
    "LEReadLocalSupportedFeatures",
    "LESetRandomAddress",
    "LESetAdvertisingParameters",
    "LEReadAdvertisingChannelTxPower",
    "LESetAdvertisingData",
    "LESetScanResponseData",
    "LESetAdvertiseEnable",
    "LESetScanParameters",
    "LESetScanEnable",
    "LECreateConn",
    "LECreateConnCancel",
    "LEReadWhiteListSize",
    "LEClearWhiteList",
    "LEAddDeviceToWhiteList",
    "LERemoveDeviceFromWhiteList",
    "LEConnUpdate",
    "LESetHostChannelClassification",
    "LEReadChannelMap",
    "LEReadRemoteUsedFeatures",
    "LEEncrypt",
    "LERand",
    "LEStartEncryption",
    "LELTKReply",
    "LELTKNegReply",
    "LEReadSupportedStates",
    "LEReceiverTest",
    "LETransmitterTest",
    "LETestEnd",
    "LERemoteConnectionParameterReply",
    "LERemoteConnectionParameterNegReply",
]

COMMAND_PACKET = 0x01
MAX_ADVERTISING_DATA = 31
_NO_ADDRESS = bytes(6)
_NO_KEY = bytes(16)


def _fixed(name: str, value: bytes, size: int) -> bytes:
    raw = bytes(value)
    if len(raw) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(raw)}")
    return raw


def _pack(fmt: str, *values: int) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(f"parameter out of range: {exc}") from exc


def _advertising_payload(data: bytes, length: Optional[int]) -> bytes:
    raw = bytes(data)
    if len(raw) > MAX_ADVERTISING_DATA:
        raise ValueError(
            f"advertising data is limited to {MAX_ADVERTISING_DATA} bytes, got {len(raw)}")
    n = len(raw) if length is None else length
    if not 0 <= n <= MAX_ADVERTISING_DATA:
        raise ValueError(f"advertising data length out of range: {n}")
    return bytes((n,)) + raw.ljust(MAX_ADVERTISING_DATA, b"\0")[:n]


class CommandParam:
    """Base of all HCI commands: an opcode and a fixed-size parameter block.

    Subclasses with plain integer fields set ``_FORMAT`` to a struct format
    covering their fields in order; others override ``_encode``.
    """

    opcode: ClassVar[int]
    length: ClassVar[int]
    _FORMAT: ClassVar[str] = ""

    def _encode(self) -> bytes:
        if not self._FORMAT:
            return b""
        return _pack(self._FORMAT, *(getattr(self, f.name) for f in fields(self)))

    def marshal(self) -> bytes:
        """Return the parameter block, zero-padded to the command's length."""
        body = self._encode()
        if len(body) > self.length:
            raise ValueError(
                f"{type(self).__name__} parameters exceed {self.length} bytes")
        return body.ljust(self.length, b"\0")

    def packet(self) -> bytes:
        """Return the whole HCI command packet, packet-type byte included."""
        op = int(self.opcode)
        return bytes((COMMAND_PACKET, op & 0xFF, op >> 8, self.length)) + self.marshal()


# Link control commands

@dataclass(frozen=True)
class Disconnect(CommandParam):
    opcode: ClassVar[int] = Opcode.DISCONNECT
    length: ClassVar[int] = 3
    _FORMAT: ClassVar[str] = "<HB"
    connection_handle: int = 0
    reason: int = 0


# Link policy commands

@dataclass(frozen=True)
class WriteDefaultLinkPolicy(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_DEFAULT_LINK_POLICY
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<H"
    default_link_policy_settings: int = 0


# Host control commands

@dataclass(frozen=True)
class SetEventMask(CommandParam):
    opcode: ClassVar[int] = Opcode.SET_EVENT_MASK
    length: ClassVar[int] = 8
    _FORMAT: ClassVar[str] = "<Q"
    event_mask: int = 0


@dataclass(frozen=True)
class Reset(CommandParam):
    opcode: ClassVar[int] = Opcode.RESET
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class Flush(CommandParam):
    opcode: ClassVar[int] = Opcode.FLUSH
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<H"
    connection_handle: int = 0


@dataclass(frozen=True)
class WritePageTimeout(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_PAGE_TIMEOUT
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<H"
    page_timeout: int = 0


@dataclass(frozen=True)
class WriteClassOfDevice(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_CLASS_OF_DEVICE
    length: ClassVar[int] = 3
    class_of_device: bytes = bytes(3)

    def _encode(self) -> bytes:
        return _fixed("class_of_device", self.class_of_device, 3)


@dataclass(frozen=True)
class HostBufferSize(CommandParam):
    opcode: ClassVar[int] = Opcode.HOST_BUFFER_SIZE
    length: ClassVar[int] = 7
    _FORMAT: ClassVar[str] = "<HBHH"
    host_acl_data_packet_length: int = 0
    host_synchronous_data_packet_length: int = 0
    host_total_num_acl_data_packets: int = 0
    host_total_num_synchronous_data_packets: int = 0


@dataclass(frozen=True)
class WriteInquiryScanType(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_INQUIRY_SCAN_TYPE
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    scan_type: int = 0


@dataclass(frozen=True)
class WriteInquiryMode(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_INQUIRY_MODE
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    inquiry_mode: int = 0


@dataclass(frozen=True)
class WritePageScanType(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_PAGE_SCAN_TYPE
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    page_scan_type: int = 0


@dataclass(frozen=True)
class WriteSimplePairingMode(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_SIMPLE_PAIRING_MODE
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    simple_pairing_mode: int = 0


@dataclass(frozen=True)
class SetEventMaskPage2(CommandParam):
    opcode: ClassVar[int] = Opcode.SET_EVENT_MASK_PAGE2
    length: ClassVar[int] = 8
    _FORMAT: ClassVar[str] = "<Q"
    event_mask_page2: int = 0


@dataclass(frozen=True)
class WriteLEHostSupported(CommandParam):
    opcode: ClassVar[int] = Opcode.WRITE_LE_HOST_SUPPORTED
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<BB"
    le_supported_host: int = 0
    simultaneous_le_host: int = 0


# LE controller commands

@dataclass(frozen=True)
class LESetEventMask(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_EVENT_MASK
    length: ClassVar[int] = 8
    _FORMAT: ClassVar[str] = "<Q"
    le_event_mask: int = 0


@dataclass(frozen=True)
class LEReadBufferSize(CommandParam):
    # The parameter block is one zero byte, as the controller is sent.
    opcode: ClassVar[int] = Opcode.LE_READ_BUFFER_SIZE
    length: ClassVar[int] = 1


@dataclass(frozen=True)
class LEReadLocalSupportedFeatures(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_READ_LOCAL_SUPPORTED_FEATURES
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LESetRandomAddress(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_RANDOM_ADDRESS
    length: ClassVar[int] = 6
    random_address: bytes = _NO_ADDRESS

    def _encode(self) -> bytes:
        return mac_to_bytes(self.random_address)


@dataclass(frozen=True)
class LESetAdvertisingParameters(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_ADVERTISING_PARAMETERS
    length: ClassVar[int] = 15
    advertising_interval_min: int = 0
    advertising_interval_max: int = 0
    advertising_type: int = 0
    own_address_type: int = 0
    direct_address_type: int = 0
    direct_address: bytes = _NO_ADDRESS
    advertising_channel_map: int = 0
    advertising_filter_policy: int = 0

    def _encode(self) -> bytes:
        return (
            _pack("<HHBBB", self.advertising_interval_min, self.advertising_interval_max,
                  self.advertising_type, self.own_address_type, self.direct_address_type)
            + mac_to_bytes(self.direct_address)
            + _pack("<BB", self.advertising_channel_map, self.advertising_filter_policy)
        )


@dataclass(frozen=True)
class LEReadAdvertisingChannelTxPower(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_READ_ADVERTISING_CHANNEL_TX_POWER
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LESetAdvertisingData(CommandParam):
    """Advertising data; the length defaults to the size of ``advertising_data``."""

    opcode: ClassVar[int] = Opcode.LE_SET_ADVERTISING_DATA
    length: ClassVar[int] = 32
    advertising_data: bytes = b""
    advertising_data_length: Optional[int] = None

    def _encode(self) -> bytes:
        return _advertising_payload(self.advertising_data, self.advertising_data_length)


@dataclass(frozen=True)
class LESetScanResponseData(CommandParam):
    """Scan response data; the length defaults to the size of ``scan_response_data``."""

    opcode: ClassVar[int] = Opcode.LE_SET_SCAN_RESPONSE_DATA
    length: ClassVar[int] = 32
    scan_response_data: bytes = b""
    scan_response_data_length: Optional[int] = None

    def _encode(self) -> bytes:
        return _advertising_payload(self.scan_response_data, self.scan_response_data_length)


@dataclass(frozen=True)
class LESetAdvertiseEnable(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_ADVERTISE_ENABLE
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    advertising_enable: int = 0


@dataclass(frozen=True)
class LESetScanParameters(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_SCAN_PARAMETERS
    length: ClassVar[int] = 7
    _FORMAT: ClassVar[str] = "<BHHBB"
    le_scan_type: int = 0
    le_scan_interval: int = 0
    le_scan_window: int = 0
    own_address_type: int = 0
    scanning_filter_policy: int = 0


@dataclass(frozen=True)
class LESetScanEnable(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_SCAN_ENABLE
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<BB"
    le_scan_enable: int = 0
    filter_duplicates: int = 0


@dataclass(frozen=True)
class LECreateConn(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_CREATE_CONN
    length: ClassVar[int] = 25
    le_scan_interval: int = 0
    le_scan_window: int = 0
    initiator_filter_policy: int = 0
    peer_address_type: int = 0
    peer_address: bytes = _NO_ADDRESS
    own_address_type: int = 0
    conn_interval_min: int = 0
    conn_interval_max: int = 0
    conn_latency: int = 0
    supervision_timeout: int = 0
    minimum_ce_length: int = 0
    maximum_ce_length: int = 0

    def _encode(self) -> bytes:
        return (
            _pack("<HHBB", self.le_scan_interval, self.le_scan_window,
                  self.initiator_filter_policy, self.peer_address_type)
            + mac_to_bytes(self.peer_address)
            + _pack("<BHHHHHH", self.own_address_type, self.conn_interval_min,
                    self.conn_interval_max, self.conn_latency, self.supervision_timeout,
                    self.minimum_ce_length, self.maximum_ce_length)
        )


@dataclass(frozen=True)
class LECreateConnCancel(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_CREATE_CONN_CANCEL
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LEReadWhiteListSize(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_READ_WHITE_LIST_SIZE
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LEClearWhiteList(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_CLEAR_WHITE_LIST
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LEAddDeviceToWhiteList(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_ADD_DEVICE_TO_WHITE_LIST
    length: ClassVar[int] = 7
    address_type: int = 0
    address: bytes = _NO_ADDRESS

    def _encode(self) -> bytes:
        return _pack("<B", self.address_type) + mac_to_bytes(self.address)


@dataclass(frozen=True)
class LERemoveDeviceFromWhiteList(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_REMOVE_DEVICE_FROM_WHITE_LIST
    length: ClassVar[int] = 7
    address_type: int = 0
    address: bytes = _NO_ADDRESS

    def _encode(self) -> bytes:
        return _pack("<B", self.address_type) + mac_to_bytes(self.address)


@dataclass(frozen=True)
class LEConnUpdate(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_CONN_UPDATE
    length: ClassVar[int] = 14
    _FORMAT: ClassVar[str] = "<HHHHHHH"
    connection_handle: int = 0
    conn_interval_min: int = 0
    conn_interval_max: int = 0
    conn_latency: int = 0
    supervision_timeout: int = 0
    minimum_ce_length: int = 0
    maximum_ce_length: int = 0


@dataclass(frozen=True)
class LESetHostChannelClassification(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_SET_HOST_CHANNEL_CLASSIFICATION
    length: ClassVar[int] = 5
    channel_map: bytes = bytes(5)

    def _encode(self) -> bytes:
        return _fixed("channel_map", self.channel_map, 5)


@dataclass(frozen=True)
class LEReadChannelMap(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_READ_CHANNEL_MAP
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<H"
    connection_handle: int = 0


@dataclass(frozen=True)
class LEReadRemoteUsedFeatures(CommandParam):
    # An 8-byte block of which only the handle is filled in.
    opcode: ClassVar[int] = Opcode.LE_READ_REMOTE_USED_FEATURES
    length: ClassVar[int] = 8
    _FORMAT: ClassVar[str] = "<H"
    connection_handle: int = 0


@dataclass(frozen=True)
class LEEncrypt(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_ENCRYPT
    length: ClassVar[int] = 32
    key: bytes = _NO_KEY
    plaintext_data: bytes = _NO_KEY

    def _encode(self) -> bytes:
        return _fixed("key", self.key, 16) + _fixed("plaintext_data", self.plaintext_data, 16)


@dataclass(frozen=True)
class LERand(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_RAND
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LEStartEncryption(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_START_ENCRYPTION
    length: ClassVar[int] = 28
    connection_handle: int = 0
    random_number: int = 0
    encrypted_diversifier: int = 0
    long_term_key: bytes = _NO_KEY

    def _encode(self) -> bytes:
        return (
            _pack("<HQH", self.connection_handle, self.random_number,
                  self.encrypted_diversifier)
            + _fixed("long_term_key", self.long_term_key, 16)
        )


@dataclass(frozen=True)
class LELTKReply(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_LTK_REPLY
    length: ClassVar[int] = 18
    connection_handle: int = 0
    long_term_key: bytes = _NO_KEY

    def _encode(self) -> bytes:
        return (_pack("<H", self.connection_handle)
                + _fixed("long_term_key", self.long_term_key, 16))


@dataclass(frozen=True)
class LELTKNegReply(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_LTK_NEG_REPLY
    length: ClassVar[int] = 2
    _FORMAT: ClassVar[str] = "<H"
    connection_handle: int = 0


@dataclass(frozen=True)
class LEReadSupportedStates(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_READ_SUPPORTED_STATES
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LEReceiverTest(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_RECEIVER_TEST
    length: ClassVar[int] = 1
    _FORMAT: ClassVar[str] = "<B"
    rx_channel: int = 0


@dataclass(frozen=True)
class LETransmitterTest(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_TRANSMITTER_TEST
    length: ClassVar[int] = 3
    _FORMAT: ClassVar[str] = "<BBB"
    tx_channel: int = 0
    length_of_test_data: int = 0
    packet_payload: int = 0


@dataclass(frozen=True)
class LETestEnd(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_TEST_END
    length: ClassVar[int] = 0


@dataclass(frozen=True)
class LERemoteConnectionParameterReply(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_REMOTE_CONNECTION_PARAMETER_REPLY
    length: ClassVar[int] = 14
    _FORMAT: ClassVar[str] = "<HHHHHHH"
    connection_handle: int = 0
    interval_min: int = 0
    interval_max: int = 0
    latency: int = 0
    timeout: int = 0
    minimum_ce_length: int = 0
    maximum_ce_length: int = 0


@dataclass(frozen=True)
class LERemoteConnectionParameterNegReply(CommandParam):
    opcode: ClassVar[int] = Opcode.LE_REMOTE_CONNECTION_PARAMETER_NEG_REPLY
    length: ClassVar[int] = 3
    _FORMAT: ClassVar[str] = "<HB"
    connection_handle: int = 0
    reason: int = 0