# blegatt

Pure-Python building blocks for Bluetooth Low Energy host stacks. Every module
works on bytes and Python objects only; nothing here opens a socket or talks to
a controller by itself.

## Modules

- `blegatt.uuid` – the `UUID` class (2 or 16 bytes, kept in wire order),
  `uuid16`, `parse_uuid`, `uuid_contains`, `reverse_bytes`, and lookups of
  well-known identifiers: `known_service`, `known_attribute`,
  `known_descriptor`, `known_characteristic`, each returning a `KnownEntry`
  (`name`, `type`) or `None`.
- `blegatt.l2cap_writer` – `L2capWriter`, which builds a response no longer
  than its MTU. Plain writes (`write_fit`, `write_byte_fit`,
  `write_uint16_fit`, `write_uuid_fit`) are truncated to fit; writes between
  `chunk()` and `commit()` are kept whole or dropped, and `commit_fit()` keeps
  as much as fits. `chunk_seek`, `writeable` and `getvalue` complete it.
  Calling these out of order raises `L2capWriterError`.
- `blegatt.subscriber` – `Subscriber`, a thread-safe map from attribute
  handle to notification callback (`subscribe`, `unsubscribe`, `lookup`), and
  `InvalidLengthError` for responses with records of an unexpected length.
- `blegatt.acl` – `AclData.unmarshal` for HCI ACL packets, `Reassembler` to
  rebuild L2CAP payloads from fragments (signalling-channel packets are
  skipped), `build_acl_fragments` to split a payload into ACL packets, and
  `connection_parameter_update_request()`. Also the `PacketType` and
  `AdvEventType` enums. Errors raise `AclError`.
- `blegatt.events` – `EventHeader`, `EventDispatcher` (register handlers by
  event code with `handle_event`, route packets with `dispatch`), the
  `EventCode` and `LEEventCode` enums, and decoders for Disconnection
  Complete, Command Complete, Command Status, Number Of Completed Packets and
  the LE Connection Complete, Advertising Report, Connection Update Complete,
  Read Remote Used Features Complete, LTK Request and Remote Connection
  Parameter Request sub-events. Errors raise `EventError`.
- `blegatt.hci.opcodes` – `OGF`, the `Opcode` enum of known HCI command
  opcodes, `make_opcode` and `split_opcode`.
- `blegatt.hci.commands` – frozen dataclasses for HCI commands, all derived
  from `CommandParam`, with `marshal()` for the parameter block and `packet()`
  for the whole command packet.
- `blegatt.hci.cmd` – `Cmd`, which writes command packets to any object with
  a `write` method and pairs them with the Command Complete / Command Status
  events passed to `handle_complete` / `handle_status`. `send` returns the
  return parameters (optionally with a `timeout`); `send_and_check_resp`
  checks the status byte. Failures raise `CommandError`.
- `blegatt.ioctl` – Linux ioctl request-number encoding (`ioc`, `io`, `ior`,
  `iow`, `iorw`) for the `GENERIC` and `MIPS` layouts, and `hci_requests`
  for the HCI device requests.
- `blegatt.order` – little-endian readers (`read_int8`, `read_uint8`,
  `read_uint16`, `read_uint64`), device address byte order
  (`mac_from_bytes`, `mac_to_bytes`) and `BytePool`, a bounded pool of
  fixed-width buffers.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

UUIDs:

```python
from blegatt.uuid import parse_uuid, uuid16, known_service

battery = uuid16(0x180F)
assert battery == parse_uuid("180f")
print(str(battery))                # 180f
print(known_service(battery).name) # Battery Service
```

A response that must fit in the ATT MTU:

```python
from blegatt.l2cap_writer import L2capWriter

w = L2capWriter(23)
w.write_byte_fit(0x0B)
w.chunk()
w.write_fit(b"value bytes")
if not w.commit():
    ...  # the chunk did not fit and was dropped
payload = w.getvalue()
```

An HCI command packet:

```python
from blegatt.hci.commands import LESetScanEnable

packet = LESetScanEnable(le_scan_enable=1, filter_duplicates=1).packet()
```

Parsing an HCI event:

```python
from blegatt.events import EventHeader, CommandCompleteEP

header = EventHeader.unmarshal(raw_event)
complete = CommandCompleteEP.unmarshal(raw_event[2:])
```

Sending commands through any writer and feeding back the events:

```python
from blegatt.events import EventCode, EventDispatcher
from blegatt.hci.cmd import Cmd
from blegatt.hci.commands import Reset

cmd = Cmd(transport)              # any object with write(bytes)
dispatcher = EventDispatcher()
dispatcher.handle_event(EventCode.COMMAND_COMPLETE, cmd.handle_complete)
dispatcher.handle_event(EventCode.COMMAND_STATUS, cmd.handle_status)
# a reader thread calls dispatcher.dispatch(event_bytes) for each event packet
cmd.send_and_check_resp(Reset(), b"\x00")
```

## What this package does not do

It does not open Bluetooth sockets, issue ioctls, bring HCI devices up or
down, scan, advertise, connect, or run a GATT client or server. `blegatt.ioctl`
only computes request numbers, and `blegatt.hci.cmd` only writes to the object
it is given and waits for events you pass in. Putting these pieces together
with a transport is left to the caller.