import pytest

from blegatt.order import (
    BytePool,
    mac_from_bytes,
    mac_to_bytes,
    read_int8,
    read_uint8,
    read_uint16,
    read_uint64,
)


def test_pool_get_from_empty_pool_makes_buffer_of_width():
    pool = BytePool(4096, 16)
    buf = pool.get()
    assert len(buf) == 4096
    assert not any(buf)


def test_pool_returns_put_buffer():
    pool = BytePool(8, 2)
    buf = bytearray(b"abcdefgh")
    pool.put(buf)
    assert pool.get() is buf


def test_pool_drops_buffers_beyond_depth():
    pool = BytePool(4, 2)
    buffers = [bytearray(4) for _ in range(3)]
    for b in buffers:
        pool.put(b)
    assert len(pool) == 2
    first, second = pool.get(), pool.get()
    assert first is buffers[0]
    assert second is buffers[1]
    assert pool.get() is not buffers[2]


def test_pool_keeps_none_sentinel():
    pool = BytePool(16, 1)
    pool.put(None)
    assert pool.get() is None


def test_pool_zero_depth_retains_nothing():
    pool = BytePool(3, 0)
    buf = bytearray(b"xyz")
    pool.put(buf)
    got = pool.get()
    assert got is not buf
    assert len(got) == 3


def test_pool_rejects_negative_sizes():
    with pytest.raises(ValueError):
        BytePool(-1, 1)
    with pytest.raises(ValueError):
        BytePool(1, -1)


def test_mac_from_bytes_reverses_first_six():
    data = bytes([1, 2, 3, 4, 5, 6, 7])
    assert mac_from_bytes(data) == bytes([6, 5, 4, 3, 2, 1])


def test_mac_round_trip():
    mac = bytes([0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F])
    assert mac_from_bytes(mac_to_bytes(mac)) == mac


def test_mac_errors():
    with pytest.raises(ValueError):
        mac_from_bytes(b"\x01\x02")
    with pytest.raises(ValueError):
        mac_to_bytes(b"\x01\x02\x03")


def test_read_uint16_little_endian():
    assert read_uint16(bytes([0x00, 0x18])) == 0x1800


def test_read_uint64_little_endian():
    data = bytes([0xFF, 0xFF, 0xFB, 0xFF, 0x07, 0xF8, 0xBF, 0x3D])
    assert read_uint64(data) == 0x3DBFF807FFFBFFFF


def test_read_int8_and_uint8():
    assert read_int8(b"\xff") == -1
    assert read_uint8(b"\xff") == 0xFF
    assert read_int8(b"\x05rest") == 5


def test_reads_reject_short_data():
    with pytest.raises(ValueError):
        read_uint8(b"")
    with pytest.raises(ValueError):
        read_int8(b"")
    with pytest.raises(ValueError):
        read_uint16(b"\x01")
    with pytest.raises(ValueError):
        read_uint64(b"\x01\x02\x03")