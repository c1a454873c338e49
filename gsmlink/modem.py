"""Line-oriented driver for a SIM800L modem on a serial port."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable

from gsmlink.parsing import Message, _IncompleteHeader, battery_level, parse_sms, signal_level

_CTRL_Z = b"\x1a"
_DELETE_COMMANDS = ("AT+CMGD=1,4", 'AT+CMGDA= "DEL ALL"')


class Modem:
    """Sends AT commands and tracks SMS, signal and battery state.

    ``port`` is any object with ``write(bytes)``, ``read(n)`` and an
    ``in_waiting`` count, such as a ``serial.Serial``.
    """

    pause = 0.1

    def __init__(self, port, log: Callable[[str], object] = print) -> None:
        self.port = port
        self._log = log
        self.last_message = Message()
        self.signal = ""
        self.battery = ""
        self._buffer = bytearray()
        self._sms_header: str | None = None

    def send_command(self, command: str) -> None:
        """Write one command line to the modem."""
        self.port.write(f"{command}\r\n".encode("utf-8"))

    def send_message(self, text: str, number: int) -> None:
        """Send an SMS to ``number`` (prefixed with +549)."""
        if number < 0:
            raise ValueError(f"invalid phone number: {number}")
        command = f'AT+CMGS="+549{number}"'
        self._log(f"Comando enviado: {command}")
        self._log(f"Mensaje: {text}")
        self.send_command(command)
        time.sleep(self.pause)
        self.port.write(text.encode("utf-8"))
        time.sleep(self.pause)
        self.port.write(_CTRL_Z)
        self._log("Mensaje enviado (pendiente de confirmación)")

    def feed(self, data: bytes | str) -> None:
        """Take received data and handle every complete line in it."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buffer.extend(data)
        while (end := self._buffer.find(b"\r\n")) != -1:
            line = bytes(self._buffer[:end]).decode("utf-8", "replace").strip()
            del self._buffer[: end + 2]
            if not line:
                continue
            if self._sms_header is not None:
                header, self._sms_header = self._sms_header, None
                self._store_sms(header, line)
            else:
                self._process_line(line)

    def update(self) -> None:
        """Read whatever the port has waiting and handle it."""
        while waiting := self.port.in_waiting:
            self.feed(self.port.read(waiting))

    def clear_message_status(self) -> None:
        """Mark the last message as handled by emptying its status."""
        self.last_message = replace(self.last_message, status="")

    def _delete_stored(self) -> None:
        for command in _DELETE_COMMANDS:
            self.send_command(command)

    def _store_sms(self, header: str, content: str) -> None:
        try:
            self.last_message = parse_sms(header, content, self.last_message)
        except _IncompleteHeader as exc:
            self.last_message = exc.partial
            return
        self._delete_stored()

    def _process_line(self, line: str) -> None:
        if line.startswith(("+CMGR:", "+CMT:")):
            self._sms_header = line
        elif line.startswith("+CMTI:"):
            _, comma, index = line.partition(",")
            if comma:
                self.send_command(f"AT+CMGR={index.strip()}")
        elif line.startswith("+CSQ:"):
            rssi = line.partition(":")[2].strip().partition(",")[0].strip()
            self.signal = signal_level(rssi)
        elif line.startswith("+CBC:"):
            try:
                self.battery = battery_level(line.partition(":")[2])
            except ValueError:
                self._log("Error al parsear la respuesta de batería.")
                self.battery = "Error"
        elif line.startswith("+CMGS"):
            self._log("Mensaje Enviado")
            self._delete_stored()
            self._log("Mensaje borrado de la memoria")
        elif line in ("OK", ">"):
            pass
        else:
            self._log(f"Comando no manejado: {line}")