# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

"""
Encoding and decoding memory channel lines.

Channel data is transferred in two lines:

    ME nnn,ffffffffff,s,d,r,t,c,d,tt,cc,ddd,oooooooo,m,ffffffffff,s,l
    MN nnn,name

All numeric fields are zero-padded decimal numbers of fixed width;
`N` is returned by radio for empty channel.
"""

from __future__ import annotations

import logging
import typing as ty

from . import consts
from .errors import MalformedResponseError, ValidateError

if ty.TYPE_CHECKING:
    from .model import Channel

_LOG = logging.getLogger(__name__)


class LineField(ty.NamedTuple):
    attr: str
    width: int


# order of fields in ME line
MEMORY_LINE_FIELDS: ty.Final = (
    LineField("number", 3),
    LineField("rx_frequency", 10),
    LineField("rx_step_size", 1),
    LineField("shift_direction", 1),
    LineField("reverse_enabled", 1),
    LineField("tone_enabled", 1),
    LineField("ctcss_enabled", 1),
    LineField("dcs_enabled", 1),
    LineField("tone_frequency", 2),
    LineField("ctcss_frequency", 2),
    LineField("dcs_frequency", 3),
    LineField("offset_frequency", 8),
    LineField("mode", 1),
    LineField("tx_frequency", 10),
    LineField("tx_step_size", 1),
    LineField("lock_out", 1),
)

# radio may skip last field (lock out)
MIN_MEMORY_LINE_FIELDS: ty.Final = 15


def strip_terminator(line: str) -> str:
    return line.removesuffix(consts.TERMINATOR)


def read_memory_command(number: int) -> str:
    return f"{consts.CMD_MEMORY} {number:03d}"


def read_name_command(number: int) -> str:
    return f"{consts.CMD_NAME} {number:03d}"


def clear_memory_command(number: int) -> str:
    return f"{consts.CMD_MEMORY} {number:03d},{consts.CLEAR_FLAG}"


def _encode_field(field: LineField, value: int) -> str:
    res = f"{value:0{field.width}d}"
    if value < 0 or len(res) > field.width:
        raise ValidateError(field.attr, value)

    return res


def encode_memory_line(chan: Channel) -> str:
    """Encode numeric fields of `chan` into ME line (without terminator)."""
    values = ",".join(
        _encode_field(field, getattr(chan, field.attr))
        for field in MEMORY_LINE_FIELDS
    )
    return f"{consts.CMD_MEMORY} {values}"


def _parse_field(field: LineField, item: str) -> int | None:
    if not item.isascii() or not item.isdigit() or len(item) > field.width:
        return None

    return int(item)


def decode_memory_line(line: str) -> dict[str, int]:
    """Decode ME line into dict attribute -> value.

    Empty channel (`N`) is decoded as empty dict. Fields are assigned by
    position; decoding stop on first invalid field. Line is accepted when at
    least `MIN_MEMORY_LINE_FIELDS` fields are valid.
    """
    line = strip_terminator(line)
    if line == consts.EMPTY_MARKER:
        return {}

    prefix = consts.CMD_MEMORY + " "
    if not line.startswith(prefix):
        raise MalformedResponseError(line, "missing ME prefix")

    items = line[len(prefix) :].split(",")
    if len(items) > len(MEMORY_LINE_FIELDS):
        raise MalformedResponseError(line, "too many fields")

    res: dict[str, int] = {}
    for field, item in zip(MEMORY_LINE_FIELDS, items):
        value = _parse_field(field, item)
        if value is None:
            _LOG.debug("invalid %s value: %r", field.attr, item)
            break

        res[field.attr] = value

    if len(res) < MIN_MEMORY_LINE_FIELDS:
        raise MalformedResponseError(
            line, f"expected {len(MEMORY_LINE_FIELDS)} fields, got {len(res)}"
        )

    if len(res) < len(MEMORY_LINE_FIELDS):
        _LOG.warning("incomplete channel line: %r", line)

    return res


def encode_name_line(chan: Channel) -> str:
    """Encode MN line; name is cut to `NAME_LEN` characters."""
    name = chan.name[: consts.NAME_LEN]
    return f"{consts.CMD_NAME} {chan.number:03d},{name}"


def decode_name_line(line: str) -> str:
    line = strip_terminator(line)
    if line == consts.EMPTY_MARKER:
        return ""

    head, _, value = line.partition(",")
    if not head.startswith(consts.CMD_NAME):
        raise MalformedResponseError(line, "missing MN prefix")

    # name can't contain comma; anything after next comma is ignored
    return value.split(",", 1)[0]
