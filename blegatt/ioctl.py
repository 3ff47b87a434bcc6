"""Linux ioctl request-number encoding and the HCI device requests."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "IoctlLayout",
    "GENERIC",
    "MIPS",
    "HCI_MAX_DEVICES",
    "HCI_IOCTL_TYPE",
    "HCI_IOCTL_SIZE",
    "ioc",
    "io",
    "ior",
    "iow",
    "iorw",
    "hci_requests",
]

_NUMBER_BITS = 8
_TYPE_BITS = 8


@dataclass(frozen=True)
class IoctlLayout:
    """The direction codes and size-field width of an architecture."""

    direction_none: int
    direction_write: int
    direction_read: int
    size_bits: int

    @property
    def number_shift(self) -> int:
        return 0

    @property
    def type_shift(self) -> int:
        return self.number_shift + _NUMBER_BITS

    @property
    def size_shift(self) -> int:
        return self.type_shift + _TYPE_BITS

    @property
    def direction_shift(self) -> int:
        return self.size_shift + self.size_bits


GENERIC = IoctlLayout(direction_none=0, direction_write=1, direction_read=2, size_bits=14)
MIPS = IoctlLayout(direction_none=1, direction_write=4, direction_read=2, size_bits=13)

HCI_MAX_DEVICES = 16
HCI_IOCTL_TYPE = ord("H")
HCI_IOCTL_SIZE = 4


def ioc(direction: int, type_: int, number: int, size: int,
        layout: IoctlLayout = GENERIC) -> int:
    """Pack direction, type, number and size into a request number."""
    return (
        (direction << layout.direction_shift)
        | (type_ << layout.type_shift)
        | (number << layout.number_shift)
        | (size << layout.size_shift)
    )


def io(type_: int, number: int, layout: IoctlLayout = GENERIC) -> int:
    """Request number for an ioctl that transfers no data."""
    return ioc(layout.direction_none, type_, number, 0, layout)


def ior(type_: int, number: int, size: int, layout: IoctlLayout = GENERIC) -> int:
    """Request number for an ioctl that reads ``size`` bytes from the driver."""
    return ioc(layout.direction_read, type_, number, size, layout)


def iow(type_: int, number: int, size: int, layout: IoctlLayout = GENERIC) -> int:
    """Request number for an ioctl that writes ``size`` bytes to the driver."""
    return ioc(layout.direction_write, type_, number, size, layout)


def iorw(type_: int, number: int, size: int, layout: IoctlLayout = GENERIC) -> int:
    """Request number for an ioctl that both writes and reads data."""
    return ioc(layout.direction_read | layout.direction_write, type_, number, size, layout)


def hci_requests(layout: IoctlLayout = GENERIC) -> dict[str, int]:
    """Return the HCI device ioctl request numbers for ``layout``."""
    t, size = HCI_IOCTL_TYPE, HCI_IOCTL_SIZE
    return {
        "HCIDEVUP": iow(t, 201, size, layout),
        "HCIDEVDOWN": iow(t, 202, size, layout),
        "HCIDEVRESET": iow(t, 203, size, layout),
        "HCIGETDEVLIST": ior(t, 210, size, layout),
        "HCIGETDEVINFO": ior(t, 211, size, layout),
    }