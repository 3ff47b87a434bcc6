import struct

import pytest

from blegatt.events import (
    CommandCompleteEP,
    CommandStatusEP,
    DisconnectionCompleteEP,
    EventCode,
    EventDispatcher,
    EventError,
    EventHeader,
    LEAdvertisingReportEP,
    LEConnectionCompleteEP,
    LEConnectionUpdateCompleteEP,
    LEEventCode,
    LELTKRequestEP,
    LEReadRemoteUsedFeaturesCompleteEP,
    LERemoteConnectionParameterRequestEP,
    NumberOfCompletedPktsEP,
    NumOfCompletedPkt,
)
from blegatt.order import mac_from_bytes

WIRE_ADDR_A = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06])
WIRE_ADDR_B = bytes([0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F])


def test_header_unmarshal():
    params = bytes([7, 8, 9])
    header = EventHeader.unmarshal(bytes([EventCode.COMMAND_COMPLETE, len(params)]) + params)
    assert header.code == EventCode.COMMAND_COMPLETE
    assert header.plen == len(params)


def test_header_too_short():
    with pytest.raises(EventError, match="malformed header"):
        EventHeader.unmarshal(bytes([EventCode.LE_META]))


def test_header_wrong_length():
    with pytest.raises(EventError, match="wrong length"):
        EventHeader.unmarshal(bytes([EventCode.LE_META, 5, 1, 2]))


def test_dispatch_routes_parameters_to_handler():
    seen = []
    dispatcher = EventDispatcher()
    dispatcher.handle_event(EventCode.COMMAND_COMPLETE, lambda b: seen.append(b) or "done")
    params = bytes([1, 0x03, 0x0C, 0x00])
    result = dispatcher.dispatch(bytes([0x0E, len(params)]) + params)
    assert result == "done"
    assert seen == [params]


def test_dispatch_without_handler_returns_none():
    seen = []
    dispatcher = EventDispatcher()
    dispatcher.handle_event(EventCode.COMMAND_STATUS, seen.append)
    assert dispatcher.dispatch(bytes([EventCode.HARDWARE_ERROR, 1, 0])) is None
    assert seen == []


def test_dispatch_propagates_handler_error():
    dispatcher = EventDispatcher()

    def failing(_):
        raise EventError("boom")

    dispatcher.handle_event(EventCode.LE_META, failing)
    with pytest.raises(EventError, match="boom"):
        dispatcher.dispatch(bytes([0x3E, 1, LEEventCode.ADVERTISING_REPORT]))


def test_dispatch_rejects_bad_header():
    dispatcher = EventDispatcher()
    dispatcher.handle_event(EventCode.LE_META, lambda b: b)
    with pytest.raises(EventError):
        dispatcher.dispatch(bytes([EventCode.LE_META, 4, 1]))


def test_disconnection_complete_roundtrip():
    ep = DisconnectionCompleteEP.unmarshal(struct.pack("<BHB", 0, 0x0040, 0x13))
    assert ep == DisconnectionCompleteEP(status=0, connection_handle=0x0040, reason=0x13)


@pytest.mark.parametrize("size", [0, 1, 3])
def test_disconnection_complete_short(size):
    with pytest.raises(EventError):
        DisconnectionCompleteEP.unmarshal(bytes(size))


def test_command_complete_keeps_return_parameters():
    ret = bytes([0x00, 0xAA, 0xBB])
    ep = CommandCompleteEP.unmarshal(struct.pack("<BH", 1, 0x0C03) + ret)
    assert ep.num_hci_command_packets == 1
    assert ep.command_opcode == 0x0C03
    assert ep.return_parameters == ret


def test_command_complete_short():
    with pytest.raises(EventError):
        CommandCompleteEP.unmarshal(bytes([1, 3]))


def test_command_status_roundtrip():
    ep = CommandStatusEP.unmarshal(struct.pack("<BBH", 0, 1, 0x200D))
    assert (ep.status, ep.num_hci_command_packets, ep.command_opcode) == (0, 1, 0x200D)


def test_command_status_short():
    with pytest.raises(EventError):
        CommandStatusEP.unmarshal(bytes([0, 1, 2]))


def test_number_of_completed_packets_masks_handle():
    data = bytes([2]) + struct.pack("<HHHH", 0xF123, 3, 0x0040, 1)
    ep = NumberOfCompletedPktsEP.unmarshal(data)
    assert ep.number_of_handles == 2
    assert ep.packets == (
        NumOfCompletedPkt(connection_handle=0x0123, num_of_completed_pkts=3),
        NumOfCompletedPkt(connection_handle=0x0040, num_of_completed_pkts=1),
    )


def test_number_of_completed_packets_missing_entries_are_zero():
    data = bytes([2]) + struct.pack("<HH", 0x0040, 5)
    ep = NumberOfCompletedPktsEP.unmarshal(data)
    assert ep.packets[0] == NumOfCompletedPkt(0x0040, 5)
    assert ep.packets[1] == NumOfCompletedPkt(0, 0)


def test_number_of_completed_packets_empty():
    with pytest.raises(EventError):
        NumberOfCompletedPktsEP.unmarshal(b"")


def test_le_connection_complete_short():
    with pytest.raises(EventError, match="expected at least 18 bytes, got 17"):
        LEConnectionCompleteEP.unmarshal(bytes(17))


def _adv_report(reports):
    n = len(reports)
    out = bytes([LEEventCode.ADVERTISING_REPORT, n])
    out += bytes(r[0] for r in reports)
    out += bytes(r[1] for r in reports)
    out += b"".join(r[2] for r in reports)
    out += bytes(len(r[3]) for r in reports)
    out += b"".join(r[3] for r in reports)
    out += b"".join(struct.pack("<b", r[4]) for r in reports)
    return out


def test_le_advertising_report_two_reports():
    reports = [
        (0x00, 0x00, WIRE_ADDR_A, bytes([0x02, 0x01, 0x06]), -60),
        (0x04, 0x01, WIRE_ADDR_B, b"", -80),
    ]
    ep = LEAdvertisingReportEP.unmarshal(_adv_report(reports))
    assert ep.num_reports == 2
    assert ep.event_type == (0x00, 0x04)
    assert ep.address_type == (0x00, 0x01)
    assert ep.address == (mac_from_bytes(WIRE_ADDR_A), mac_from_bytes(WIRE_ADDR_B))
    assert ep.length == (3, 0)
    assert ep.data == (bytes([0x02, 0x01, 0x06]), b"")
    assert ep.rssi == (-60, -80)


def test_le_advertising_report_too_short_header():
    with pytest.raises(EventError):
        LEAdvertisingReportEP.unmarshal(bytes([LEEventCode.ADVERTISING_REPORT]))


def test_le_advertising_report_missing_fixed_fields():
    with pytest.raises(EventError):
        LEAdvertisingReportEP.unmarshal(bytes([LEEventCode.ADVERTISING_REPORT, 1, 0, 0]))


def test_le_advertising_report_missing_data():
    full = _adv_report([(0x00, 0x00, WIRE_ADDR_A, bytes([1, 2, 3, 4]), -40)])
    with pytest.raises(EventError):
        LEAdvertisingReportEP.unmarshal(full[:-2])


@pytest.mark.parametrize(
    "cls, fmt, values",
    [
        (LEConnectionUpdateCompleteEP, "<BBHHHH", (3, 0, 0x0040, 0x18, 0, 0x48)),
        (LEReadRemoteUsedFeaturesCompleteEP, "<BBHQ", (4, 0, 0x0041, 0x1F)),
        (LELTKRequestEP, "<BHQH", (5, 0x0040, 0x0102030405060708, 0x1234)),
        (LERemoteConnectionParameterRequestEP, "<BHHHHH", (6, 0x0040, 6, 24, 0, 200)),
    ],
)
def test_fixed_size_events_roundtrip(cls, fmt, values):
    data = struct.pack(fmt, *values)
    assert cls.unmarshal(data) == cls(*values)
    # Trailing bytes are ignored.
    assert cls.unmarshal(data + b"\xff\xff") == cls(*values)
    with pytest.raises(EventError):
        cls.unmarshal(data[:-1])