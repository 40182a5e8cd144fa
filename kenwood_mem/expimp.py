# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

"""
Import/export channels.

Memory dump is stored as JSON list of channels; keys are compatible with
`kenwood-memory.json` files; fields with zero value and empty name are
omitted.
"""

import csv
import io
import json
import logging
import typing as ty
from pathlib import Path

from . import coding, model, radio_memory

_LOG = logging.getLogger(__name__)

# channel attribute -> json key
JSON_KEYS: ty.Final = {
    "number": "Number",
    "rx_frequency": "RXFrequency",
    "rx_step_size": "RXStepSize",
    "shift_direction": "ShiftDirection",
    "reverse_enabled": "ReverseEnabled",
    "tone_enabled": "ToneEnabled",
    "ctcss_enabled": "CTCSSEnabled",
    "dcs_enabled": "DCSEnabled",
    "tone_frequency": "ToneFrequency",
    "ctcss_frequency": "CTCSSFrequency",
    "dcs_frequency": "DCSFrequency",
    "offset_frequency": "OffsetFrequency",
    "mode": "Mode",
    "tx_frequency": "TXFrequency",
    "tx_step_size": "TXStepSize",
    "lock_out": "LockOut",
}
JSON_NAME_KEY: ty.Final = "Name"

CHANNEL_FIELDS = (
    "channel",
    "rx_freq",
    "rx_step",
    "shift",
    "reverse",
    "tone",
    "ctcss",
    "dcs",
    "tone_freq",
    "ctcss_freq",
    "dcs_code",
    "offset",
    "mode",
    "tx_freq",
    "tx_step",
    "lockout",
    "name",
)


def channel_to_json(chan: model.Channel) -> dict[str, object]:
    res: dict[str, object] = {}
    for fld in coding.MEMORY_LINE_FIELDS:
        if value := getattr(chan, fld.attr):
            res[JSON_KEYS[fld.attr]] = value

    if chan.name:
        res[JSON_NAME_KEY] = chan.name

    return res


def channel_from_json(data: dict[str, object]) -> model.Channel:
    if not isinstance(data, dict):
        raise model.ValidateError("channel", data)

    chan = model.Channel(number=0)
    for fld in coding.MEMORY_LINE_FIELDS:
        key = JSON_KEYS[fld.attr]
        value = data.get(key, 0)
        # bool is int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise model.ValidateError(key, value)

        setattr(chan, fld.attr, value)

    name = data.get(JSON_NAME_KEY, "")
    if not isinstance(name, str):
        raise model.ValidateError(JSON_NAME_KEY, name)

    chan.name = name

    if unknown := set(data) - set(JSON_KEYS.values()) - {JSON_NAME_KEY}:
        _LOG.warning("unknown keys in channel %d: %r", chan.number, unknown)

    return chan


def save_json_file(file: Path, channels: ty.Iterable[model.Channel]) -> None:
    _LOG.info("write %s", file)
    data = [channel_to_json(chan) for chan in channels]
    with file.open("w") as out:
        json.dump(data, out, indent=2)
        out.write("\n")

    _LOG.info("write %s done; channels: %d", file, len(data))


def load_json_file(file: Path) -> radio_memory.RadioMemory:
    """Load memory dump; raise ValidateError on invalid content and
    json.JSONDecodeError (ValueError) on invalid file."""
    _LOG.info("loading %s", file)
    with file.open() as inp:
        data = json.load(inp)

    if not isinstance(data, list):
        raise model.ValidateError("file", type(data).__name__)

    mem = radio_memory.RadioMemory()
    mem.load_channels(channel_from_json(item) for item in data)
    _LOG.info("loading %s done", file)
    return mem


def create_backup(file: Path) -> None:
    if file.is_file():
        bakfile = file.with_suffix(f"{file.suffix}.bak")
        _LOG.info("backup %s -> %s", file, bakfile)
        file.replace(bakfile)


def _write_channels_csv(
    out: ty.TextIO, channels: ty.Iterable[model.Channel]
) -> None:
    writer = csv.DictWriter(
        out,
        fieldnames=CHANNEL_FIELDS,
        quoting=csv.QUOTE_NONNUMERIC,
        extrasaction="ignore",
    )
    writer.writeheader()
    writer.writerows(chan.to_record() for chan in channels)


def export_channels_str(channels: ty.Iterable[model.Channel]) -> str:
    output = io.StringIO()
    _write_channels_csv(output, channels)
    return output.getvalue()


def export_channels_file(
    channels: ty.Iterable[model.Channel], output: Path
) -> None:
    with output.open("w", newline="") as out:
        _write_channels_csv(out, channels)
