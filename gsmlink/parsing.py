"""Parsing of SIM800L status replies and SMS headers."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Message:
    """An SMS as reported by the modem."""

    status: str = ""
    sender: str = ""
    date: str = ""
    text: str = ""


class _IncompleteHeader(ValueError):
    """Raised when an SMS header ends before all its fields; carries what was read."""

    def __init__(self, header: str, partial: Message) -> None:
        super().__init__(f"incomplete SMS header: {header!r}")
        self.partial = partial


def _to_int(text: str) -> int:
    """Leading integer of ``text``, or 0 when it does not start with one."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def signal_level(rssi: str) -> str:
    """Describe an ``+CSQ`` RSSI value (0-31) in words."""
    value = _to_int(rssi)
    if value == 0:
        return "Sin señal"
    if 0 < value <= 10:
        return "Mala"
    if 10 < value <= 20:
        return "Regular"
    if 20 < value <= 26:
        return "Buena"
    if 26 < value <= 31:
        return "Excelente"
    return "error"


def battery_level(data: str) -> str:
    """Return the charge percentage from the payload of a ``+CBC`` reply."""
    parts = data.split(",")
    if len(parts) < 3:
        raise ValueError(f"malformed battery reply: {data!r}")
    return parts[1].strip()


def _quoted_fields(text: str) -> list[str]:
    """Contents of each complete pair of double quotes, in order."""
    parts = text.split('"')
    return parts[1::2][: (len(parts) - 1) // 2]


def parse_sms(header: str, content: str, previous: Message | None = None) -> Message:
    """Build a message from a ``+CMGR:``/``+CMT:`` header and its content line.

    Fields the header does not name are kept from ``previous``. When the
    header is cut short a ``ValueError`` is raised whose ``partial``
    attribute holds the fields that were read before the cut.
    """
    message = previous if previous is not None else Message()
    if header.startswith("+CMGR:"):
        fields = _quoted_fields(header.partition(":")[2])
        for name, value in zip(("status", "sender", "date"), fields):
            message = replace(message, **{name: value})
        if len(fields) < 3:
            raise _IncompleteHeader(header, message)
    elif header.startswith("+CMT:"):
        fields = _quoted_fields(header.partition(":")[2])
        if not fields:
            raise _IncompleteHeader(header, message)
        message = replace(message, status="REC", sender=fields[0])
        if len(fields) < 3:
            raise _IncompleteHeader(header, message)
        message = replace(message, date=fields[2])
    return replace(message, text=content.lower())