from blegatt.ioctl import (
    GENERIC,
    HCI_IOCTL_TYPE,
    MIPS,
    hci_requests,
    io,
    ioc,
    ior,
    iorw,
    iow,
)


def test_hci_requests_match_linux_values():
    reqs = hci_requests(GENERIC)
    assert reqs["HCIDEVUP"] == 0x400448C9
    assert reqs["HCIGETDEVINFO"] == 0x800448D3


def test_hci_requests_keys():
    assert set(hci_requests()) == {
        "HCIDEVUP", "HCIDEVDOWN", "HCIDEVRESET", "HCIGETDEVLIST", "HCIGETDEVINFO",
    }


def test_fields_decompose():
    for layout in (GENERIC, MIPS):
        value = ior(HCI_IOCTL_TYPE, 210, 4, layout)
        assert value & 0xFF == 210
        assert (value >> layout.type_shift) & 0xFF == HCI_IOCTL_TYPE
        size_mask = (1 << layout.size_bits) - 1
        assert (value >> layout.size_shift) & size_mask == 4
        assert value >> layout.direction_shift == layout.direction_read


def test_iorw_combines_read_and_write():
    for layout in (GENERIC, MIPS):
        assert iorw(7, 3, 8, layout) == ior(7, 3, 8, layout) | iow(7, 3, 8, layout)


def test_io_carries_no_size():
    for layout in (GENERIC, MIPS):
        value = io(7, 3, layout)
        assert value == ioc(layout.direction_none, 7, 3, 0, layout)
        assert value >> layout.direction_shift == layout.direction_none


def test_layouts_differ():
    assert hci_requests(GENERIC) != hci_requests(MIPS)
    assert GENERIC.direction_shift == 30
    assert MIPS.direction_shift == 29