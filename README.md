# gsmlink

Talk to a SIM800L GSM modem over a serial line without blocking: send AT
commands, send SMS messages, and keep track of the last received SMS, the
signal quality and the battery charge reported by the modem.

## Installation

```
pip install gsmlink
```

Running the tests needs the `test` extra:

```
pip install "gsmlink[test]"
pytest
```

## Command line

The package installs one command, `gsmlink`, with two modes:

```
gsmlink --help
gsmlink run PORT --reply-number NUMBER [--baud 115200]
gsmlink probe PORT [--baud 9600]
```

`run` opens the serial port and sends the start-up commands (`ATE0`, `AT`,
`AT+CFUN=1`, `AT+CMGF=1`, `AT+CNMI=1,2,0,0,0`, `AT+CSQ`, `AT+CBC`). It then
polls the modem until interrupted with Ctrl+C: signal quality and battery
level are requested every 10 seconds, and every 15 seconds the current values
are printed. When a received SMS is waiting, its text is printed, it is
marked as handled, and a reply made of the received text followed by a fixed
suffix is sent to `--reply-number`. Numbers are dialled with the `+549`
prefix, so `--reply-number` is given without it.

`probe` sends the handshake queries `AT`, `AT+CSQ`, `AT+CCID` and `AT+CREG?`,
printing whatever the modem answers after each one. It then keeps relaying:
lines typed on standard input go to the modem and the modem's output is
printed, until interrupted with Ctrl+C.

If the serial port cannot be opened the command prints the error and exits
with status 1.

## Library use

`gsmlink.modem.Modem(port, log=print)` wraps any object with `write(bytes)`,
`read(n)` and an `in_waiting` count, such as a `serial.Serial`. Call
`update()` regularly, or hand received bytes or text to `feed()`; complete
lines are split on `\r\n`, stripped, and handled:

- `+CMT:` and `+CMGR:` headers are paired with the following line and parsed
  into `last_message`, a `gsmlink.parsing.Message` with `status`, `sender`,
  `date` and lower-cased `text`. After a complete message the SIM storage is
  cleared (`AT+CMGD=1,4` and `AT+CMGDA= "DEL ALL"`).
- `+CMTI:` notifications make the modem read the stored message back with
  `AT+CMGR=<index>`.
- `+CSQ:` answers set `signal` to a rating: `Sin señal`, `Mala`, `Regular`,
  `Buena`, `Excelente`, or `error` for values outside 0–31.
- `+CBC:` answers set `battery` to the charge percentage, or `Error` when the
  reply cannot be parsed.
- `+CMGS` confirmations are logged and the SIM storage is cleared.
- `OK` and `>` are ignored; any other line is logged as unhandled.

`send_command()` writes one AT command line. `send_message(text, number)`
sends an SMS to `+549<number>`, terminated with Ctrl+Z; a negative number
raises `ValueError`. `clear_message_status()` empties the status of the last
message so it is not answered twice.

The helpers in `gsmlink.parsing` work on plain strings:

- `signal_level(rssi)` rates an RSSI value as above.
- `battery_level(data)` returns the percentage from a `+CBC:` payload and
  raises `ValueError` when it is malformed.
- `parse_sms(header, content, previous=None)` builds a `Message`, keeping
  fields the header does not set from `previous`; a header cut short raises
  `ValueError`.

`gsmlink.cli.Monitor(modem, reply_number, out=None)` drives the periodic
polling and reply logic through `tick(now)`, where `now` is seconds since
start. `initialize(modem)` sends the start-up command sequence and
`probe(port, out)` runs the handshake queries.

## What it does not do

Only the most recent SMS is kept; there is no message history or storage.
Commands are written without waiting for their answers, so no command
reports success or failure to the caller, and sent messages are not tracked
beyond logging the modem's `+CMGS` confirmation.