"""Command line: run the SMS monitor or probe the modem connection."""

from __future__ import annotations

import argparse
import sys
import threading
import time

import serial

from gsmlink.modem import Modem

REPLY_SUFFIX = "puto"
CHECK_INTERVAL = 10.0
REPORT_INTERVAL = 15.0
PROBE_DELAY = 0.5

INIT_COMMANDS = (
    "ATE0",
    "AT",
    "AT+CFUN=1",
    "AT+CMGF=1",
    "AT+CNMI=1,2,0,0,0",
    "AT+CSQ",
    "AT+CBC",
)
PROBE_COMMANDS = ("AT", "AT+CSQ", "AT+CCID", "AT+CREG?")


def initialize(modem: Modem) -> None:
    """Disable echo, enable text mode SMS and ask for signal and battery."""
    for command in INIT_COMMANDS:
        modem.send_command(command)


class Monitor:
    """Polls the modem, reports its state and answers received messages."""

    def __init__(self, modem: Modem, reply_number: int, out=None) -> None:
        self.modem = modem
        self.reply_number = reply_number
        self.out = out if out is not None else sys.stdout
        self._last_check = 0.0
        self._last_report = 0.0

    def tick(self, now: float) -> None:
        """Run one step; ``now`` is seconds since start."""
        self.modem.update()
        if now - self._last_check >= CHECK_INTERVAL:
            self.modem.send_command("AT+CSQ")
            self.modem.send_command("AT+CBC")
            self._last_check = now
        if now - self._last_report >= REPORT_INTERVAL:
            self._report()
            self._last_report = now

    def _report(self) -> None:
        write = self.out.write
        write(f"Nivel Bateria:{self.modem.battery}\n")
        write(f"Nivel Señal:{self.modem.signal}\n")
        if self.modem.last_message.status != "REC":
            return
        text = self.modem.last_message.text
        write(f"El ultimo msj es:{text}\n")
        write("Status Mensaje liberado:")
        self.modem.clear_message_status()
        write(f"\n Status Mensaje:{self.modem.last_message.status}\n")
        write("Se envia respuesta\n")
        self.modem.send_message(text + REPLY_SUFFIX, self.reply_number)


def _relay(port, out) -> None:
    time.sleep(PROBE_DELAY)
    while waiting := port.in_waiting:
        out.write(port.read(waiting).decode("utf-8", "replace"))
    out.flush()


def probe(port, out) -> None:
    """Send the handshake commands and copy each reply to ``out``."""
    for command in PROBE_COMMANDS:
        port.write(f"{command}\r\n".encode("ascii"))
        _relay(port, out)


def _bridge(port, out) -> None:
    def forward_input() -> None:
        for line in sys.stdin:
            port.write(line.encode("utf-8"))

    threading.Thread(target=forward_input, daemon=True).start()
    while True:
        _relay(port, out)


def _run(port, reply_number: int) -> None:
    print("Inicializando SIM800L...")
    modem = Modem(port)
    initialize(modem)
    monitor = Monitor(modem, reply_number)
    start = time.monotonic()
    while True:
        monitor.tick(time.monotonic() - start)
        time.sleep(0.01)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gsmlink", description="SIM800L SMS monitor.")
    modes = parser.add_subparsers(dest="mode", required=True)
    run = modes.add_parser("run", help="monitor the modem and answer messages")
    run.add_argument("port")
    run.add_argument("--baud", type=int, default=115200)
    run.add_argument("--reply-number", type=int, required=True)
    check = modes.add_parser("probe", help="check the connection and relay traffic")
    check.add_argument("port")
    check.add_argument("--baud", type=int, default=9600)
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    try:
        port = serial.Serial(args.port, args.baud, timeout=0)
    except serial.SerialException as exc:
        print(f"gsmlink: {exc}", file=sys.stderr)
        return 1
    with port:
        try:
            if args.mode == "probe":
                print("Initializing...")
                probe(port, sys.stdout)
                _bridge(port, sys.stdout)
            else:
                _run(port, args.reply_number)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())