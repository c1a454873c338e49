import io

import pytest

from gsmlink.cli import Monitor, initialize, main, probe
from gsmlink.modem import Modem


class FakePort:
    def __init__(self, incoming=b""):
        self.incoming = bytearray(incoming)
        self.written = bytearray()

    @property
    def in_waiting(self):
        return len(self.incoming)

    def read(self, size=1):
        chunk = bytes(self.incoming[:size])
        del self.incoming[:size]
        return chunk

    def write(self, data):
        self.written.extend(data)
        return len(data)


def make_modem(incoming=b""):
    port = FakePort(incoming)
    modem = Modem(port, log=lambda line: None)
    modem.pause = 0
    return modem, port


def test_initialize_sends_setup_commands():
    modem, port = make_modem()
    initialize(modem)
    assert bytes(port.written).split(b"\r\n")[:-1] == [
        b"ATE0",
        b"AT",
        b"AT+CFUN=1",
        b"AT+CMGF=1",
        b"AT+CNMI=1,2,0,0,0",
        b"AT+CSQ",
        b"AT+CBC",
    ]


def test_tick_polls_every_ten_seconds():
    modem, port = make_modem()
    monitor = Monitor(modem, 123, io.StringIO())
    monitor.tick(0)
    assert bytes(port.written) == b""
    monitor.tick(10)
    assert bytes(port.written) == b"AT+CSQ\r\nAT+CBC\r\n"
    monitor.tick(12)
    assert bytes(port.written) == b"AT+CSQ\r\nAT+CBC\r\n"


def test_tick_reports_state():
    modem, _ = make_modem(b"+CBC: 0,76,4100\r\n+CSQ: 25,0\r\n")
    out = io.StringIO()
    monitor = Monitor(modem, 123, out)
    monitor.tick(15)
    assert out.getvalue() == "Nivel Bateria:76\nNivel Señal:Buena\n"


def test_tick_answers_received_message():
    modem, port = make_modem(b'+CMT: "s","","d"\r\nHola\r\n')
    out = io.StringIO()
    monitor = Monitor(modem, 123, out)
    monitor.tick(15)
    text = out.getvalue()
    assert "El ultimo msj es:hola\n" in text
    assert "Se envia respuesta\n" in text
    assert modem.last_message.status == ""
    assert bytes(port.written).endswith(b'AT+CMGS="+549123"\r\nholaputo\x1a')


def test_tick_does_not_answer_twice():
    modem, port = make_modem(b'+CMT: "s","","d"\r\nHola\r\n')
    monitor = Monitor(modem, 123, io.StringIO())
    monitor.tick(15)
    sent = bytes(port.written).count(b"AT+CMGS")
    monitor.tick(30)
    assert bytes(port.written).count(b"AT+CMGS") == sent == 1


def test_probe_sends_handshake_and_relays():
    port = FakePort(b"OK\r\n")
    out = io.StringIO()
    probe(port, out)
    assert bytes(port.written) == b"AT\r\nAT+CSQ\r\nAT+CCID\r\nAT+CREG?\r\n"
    assert out.getvalue() == "OK\r\n"


def test_main_requires_mode():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_main_reports_unopenable_port():
    assert main(["run", "/nonexistent/gsmlink-port", "--reply-number", "1"]) == 1