import pytest

from blegatt.acl import (
    CID_ATT,
    CID_LE_SIGNAL,
    AclData,
    AclError,
    PacketType,
    Reassembler,
    build_acl_fragments,
    connection_parameter_update_request,
)


def _parse(fragment):
    assert fragment[0] == PacketType.ACL_DATA
    return AclData.unmarshal(fragment[1:])


def test_unmarshal_fields():
    data = bytes([0x23, 0x11, 2, 0, 9, 9])
    acl = AclData.unmarshal(data)
    assert acl.handle == 0x123
    assert acl.flags == 0x1
    assert acl.dlen == 2
    assert acl.payload == b"\x09\x09"


def test_unmarshal_short():
    with pytest.raises(AclError):
        AclData.unmarshal(b"\x01\x02\x03")


def test_unmarshal_length_mismatch():
    with pytest.raises(AclError):
        AclData.unmarshal(bytes([0x40, 0x00, 3, 0, 1]))


def test_single_fragment_wire_bytes():
    frags = build_acl_fragments(0x0040, CID_ATT, b"\x01\x02", 27)
    assert frags == [b"\x02\x40\x00\x06\x00\x02\x00\x04\x00\x01\x02"]


def test_fragment_sizes_bounded():
    payload = bytes(range(60))
    frags = build_acl_fragments(0x0040, CID_ATT, payload, 27)
    assert len(frags) > 1
    for frag in frags:
        assert len(_parse(frag).payload) <= 27
    assert _parse(frags[0]).flags == 0
    assert all(_parse(f).flags == 1 for f in frags[1:])


def test_round_trip_through_reassembler():
    payload = bytes(range(100))
    r = Reassembler()
    results = [r.feed(_parse(f)) for f in build_acl_fragments(0x0041, CID_ATT, payload, 10)]
    assert results[-1] == payload
    assert all(x is None for x in results[:-1])
    assert all(_parse(f).handle == 0x0041 for f in build_acl_fragments(0x0041, CID_ATT, payload, 10))


def test_empty_payload_round_trip():
    frags = build_acl_fragments(1, CID_ATT, b"", 27)
    assert len(frags) == 1
    assert Reassembler().feed(_parse(frags[0])) == b""


def test_signal_packets_ignored():
    frags = build_acl_fragments(1, CID_LE_SIGNAL, connection_parameter_update_request(), 27)
    r = Reassembler()
    assert r.feed(_parse(frags[0])) is None
    follow = build_acl_fragments(1, CID_ATT, b"\x0a", 27)
    assert r.feed(_parse(follow[0])) == b"\x0a"


def test_short_l2cap_packet_closes():
    r = Reassembler()
    with pytest.raises(AclError):
        r.feed(AclData(handle=1, flags=0, dlen=2, payload=b"\x00\x00"))
    assert r.closed is True
    with pytest.raises(AclError):
        r.feed(_parse(build_acl_fragments(1, CID_ATT, b"\x01", 27)[0]))


def test_missing_continuation_flag_fails():
    frags = build_acl_fragments(1, CID_ATT, bytes(30), 10)
    r = Reassembler()
    assert r.feed(_parse(frags[0])) is None
    second = _parse(frags[1])
    broken = AclData(handle=second.handle, flags=0, dlen=second.dlen, payload=second.payload)
    with pytest.raises(AclError):
        r.feed(broken)


def test_connection_parameter_update_request_bytes():
    assert connection_parameter_update_request() == bytes(
        [0x12, 0x02, 0x08, 0x00, 0x08, 0x00, 0x18, 0x00, 0x00, 0x00, 0xC8, 0x00]
    )


def test_bad_buffer_size():
    with pytest.raises(ValueError):
        build_acl_fragments(1, CID_ATT, b"\x01", 0)