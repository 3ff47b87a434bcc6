"""Sending HCI commands and matching them with their completion events."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from ..events import CommandCompleteEP, CommandStatusEP
from .commands import CommandParam

__all__ = ["CommandError", "Cmd", "Writer"]

_log = logging.getLogger(__name__)


class Writer(Protocol):
    def write(self, data: bytes) -> Optional[int]:
        ...


class CommandError(RuntimeError):
    """Raised when a command cannot be sent or its response is unexpected."""


@dataclass
class _Pending:
    opcode: int
    done: threading.Event = field(default_factory=threading.Event)
    response: bytes = b""


class Cmd:
    """Writes HCI command packets and waits for the controller's answer.

    Each sent command stays pending until a Command Complete or Command
    Status event with the same opcode arrives through :meth:`handle_complete`
    or :meth:`handle_status`.
    """

    def __init__(self, writer: Writer) -> None:
        self._writer = writer
        self._sent: List[_Pending] = []
        self._lock = threading.Lock()

    @property
    def pending(self) -> Tuple[int, ...]:
        """Opcodes of the commands still waiting for an answer, oldest first."""
        with self._lock:
            return tuple(p.opcode for p in self._sent)

    def _take(self, opcode: int) -> Optional[_Pending]:
        with self._lock:
            for i, p in enumerate(self._sent):
                if p.opcode == opcode:
                    return self._sent.pop(i)
        return None

    def _discard(self, entry: _Pending) -> None:
        with self._lock:
            if entry in self._sent:
                self._sent.remove(entry)

    def handle_complete(self, data: bytes) -> bool:
        """Take a Command Complete event; report whether it answered a pending command."""
        event = CommandCompleteEP.unmarshal(data)
        entry = self._take(event.command_opcode)
        if entry is None:
            _log.warning("no pending command for command complete event: %s", event)
            return False
        entry.response = event.return_parameters
        entry.done.set()
        return True

    def handle_status(self, data: bytes) -> bool:
        """Take a Command Status event; report whether it answered a pending command."""
        event = CommandStatusEP.unmarshal(data)
        entry = self._take(event.command_opcode)
        if entry is None:
            _log.warning("no pending command for command status event: %s", event)
            return False
        entry.response = b""
        entry.done.set()
        return True

    def send(self, param: CommandParam, timeout: Optional[float] = None) -> bytes:
        """Send ``param`` and return the return parameters of its answer.

        A command answered by a Command Status event yields ``b""``. With a
        ``timeout`` in seconds, :class:`CommandError` is raised if no answer
        arrives in time.
        """
        raw = param.packet()
        entry = _Pending(opcode=int(param.opcode))
        with self._lock:
            self._sent.append(entry)
        try:
            written = self._writer.write(raw)
        except BaseException:
            self._discard(entry)
            raise
        if written is not None and written != len(raw):
            self._discard(entry)
            raise CommandError("failed to send whole command packet to HCI socket")
        if not entry.done.wait(timeout):
            self._discard(entry)
            raise CommandError(
                f"HCI command 0x{int(param.opcode):04x}: no response within {timeout} s")
        return entry.response

    def send_and_check_resp(self, param: CommandParam, expected: bytes) -> None:
        """Send ``param`` and check that its status byte is one of ``expected``.

        An empty ``expected`` accepts any response.
        """
        rsp = self.send(param)
        if not expected:
            return
        status = rsp[0:1]
        if not status or status not in bytes(expected):
            got = f"0x{rsp[0]:02X}" if rsp else "nothing"
            raise CommandError(
                f"HCI command: '0x{int(param.opcode):04x}' return {got}, "
                f"expect: [{bytes(expected).hex().upper()}] ")