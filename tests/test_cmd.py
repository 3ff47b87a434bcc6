import struct
import threading
import time

import pytest

from blegatt.events import EventError
from blegatt.hci.cmd import Cmd, CommandError
from blegatt.hci.commands import (
    LESetAdvertiseEnable,
    LESetScanEnable,
    Reset,
    SetEventMask,
)


def complete_event(opcode, params=b""):
    return struct.pack("<BH", 1, opcode) + params


def status_event(opcode, status=0):
    return struct.pack("<BBH", status, 1, opcode)


class RespondingWriter:
    """Records packets and answers each one through a callback."""

    def __init__(self, respond=None, short=False):
        self.packets = []
        self.respond = respond
        self.short = short
        self.cmd = None

    def write(self, data):
        self.packets.append(bytes(data))
        if self.respond is not None:
            self.respond(self.cmd, data)
        return len(data) - 1 if self.short else len(data)


def answer_complete(params):
    def respond(cmd, data):
        opcode = data[1] | (data[2] << 8)
        cmd.handle_complete(complete_event(opcode, params))
    return respond


def make(respond=None, short=False):
    writer = RespondingWriter(respond, short)
    cmd = Cmd(writer)
    writer.cmd = cmd
    return cmd, writer


def test_send_writes_packet_and_returns_parameters():
    cmd, writer = make(answer_complete(b"\x00\x42"))
    rsp = cmd.send(Reset())
    assert rsp == b"\x00\x42"
    assert writer.packets == [Reset().packet()]
    assert cmd.pending == ()


def test_reset_packet_wire_bytes():
    cmd, writer = make(answer_complete(b"\x00"))
    cmd.send(Reset())
    assert writer.packets[0] == bytes([0x01, 0x03, 0x0C, 0x00])


def test_status_event_answers_with_empty_bytes():
    def respond(cmd, data):
        opcode = data[1] | (data[2] << 8)
        assert cmd.handle_status(status_event(opcode)) is True
    cmd, _ = make(respond)
    assert cmd.send(SetEventMask(event_mask=1)) == b""


def test_send_and_check_resp_accepts_expected_status():
    cmd, writer = make(answer_complete(b"\x00"))
    cmd.send_and_check_resp(LESetAdvertiseEnable(advertising_enable=1), b"\x00")
    assert writer.packets == [LESetAdvertiseEnable(advertising_enable=1).packet()]


def test_send_and_check_resp_rejects_other_status():
    cmd, _ = make(answer_complete(b"\x0c"))
    with pytest.raises(CommandError):
        cmd.send_and_check_resp(LESetScanEnable(le_scan_enable=1), b"\x00")


def test_send_and_check_resp_ignores_response_without_expectation():
    cmd, writer = make(answer_complete(b"\x0c"))
    cmd.send_and_check_resp(Reset(), b"")
    assert len(writer.packets) == 1
    assert cmd.pending == ()


def test_send_and_check_resp_empty_response_is_error():
    cmd, _ = make(answer_complete(b""))
    with pytest.raises(CommandError):
        cmd.send_and_check_resp(Reset(), b"\x00")


def test_short_write_raises_and_clears_pending():
    cmd, _ = make(short=True)
    with pytest.raises(CommandError):
        cmd.send(Reset())
    assert cmd.pending == ()


def test_writer_error_propagates():
    class Failing:
        def write(self, data):
            raise OSError("device gone")
    cmd = Cmd(Failing())
    with pytest.raises(OSError):
        cmd.send(Reset())
    assert cmd.pending == ()


def test_timeout_raises_and_late_answer_is_unmatched():
    cmd, _ = make()
    with pytest.raises(CommandError):
        cmd.send(Reset(), timeout=0.05)
    assert cmd.pending == ()
    assert cmd.handle_complete(complete_event(int(Reset.opcode), b"\x00")) is False


def test_unmatched_events_report_false():
    cmd, _ = make()
    assert cmd.handle_complete(complete_event(int(Reset.opcode))) is False
    assert cmd.handle_status(status_event(int(Reset.opcode))) is False


def test_malformed_events_raise():
    cmd, _ = make()
    with pytest.raises(EventError):
        cmd.handle_complete(b"\x01")
    with pytest.raises(EventError):
        cmd.handle_status(b"\x00\x01")


def test_answers_are_matched_by_opcode():
    cmd, _ = make()
    results = {}

    def run(name, param):
        results[name] = cmd.send(param, timeout=5)

    threads = [
        threading.Thread(target=run, args=("reset", Reset())),
        threading.Thread(target=run, args=("mask", SetEventMask(event_mask=2))),
    ]
    for t in threads:
        t.start()
    deadline = time.monotonic() + 5
    while len(cmd.pending) < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    assert sorted(cmd.pending) == sorted([int(Reset.opcode), int(SetEventMask.opcode)])

    assert cmd.handle_complete(complete_event(int(SetEventMask.opcode), b"\x01")) is True
    assert cmd.handle_complete(complete_event(int(Reset.opcode), b"\x02")) is True
    for t in threads:
        t.join(5)
    assert results == {"reset": b"\x02", "mask": b"\x01"}
    assert cmd.pending == ()