# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

""" """

from __future__ import annotations

import logging
import typing as ty

from . import consts, model
from .model._support import is_valid_index

_LOG = logging.getLogger(__name__)


class RadioMemory:
    """Bank of all memory channels; index in `channels` is channel number."""

    def __init__(self) -> None:
        self.channels: list[model.Channel] = [
            model.Channel(number=idx) for idx in range(consts.NUM_CHANNELS)
        ]

    def get_channel(self, idx: int) -> model.Channel:
        is_valid_index(self.channels, idx, "channel")
        return self.channels[idx]

    def set_channel(self, chan: model.Channel) -> None:
        is_valid_index(self.channels, chan.number, "channel")
        _LOG.debug("set_channel: %r", chan)
        self.channels[chan.number] = chan.clone()

    def occupied_channels(self) -> list[model.Channel]:
        return [chan for chan in self.channels if chan.occupied]

    def clear(self) -> None:
        for chan in self.channels:
            chan.clear()

    def load_channels(self, channels: ty.Iterable[model.Channel]) -> None:
        """Replace whole memory by `channels`; each channel is placed
        according to its number."""
        self.clear()

        loaded: set[int] = set()
        for chan in channels:
            is_valid_index(self.channels, chan.number, "channel")
            if chan.number in loaded:
                raise model.ValidateError("channel", chan.number)

            loaded.add(chan.number)
            self.channels[chan.number] = chan.clone()

        _LOG.info("loaded %d channels", len(loaded))

    def validate(self) -> ty.Iterator[str]:
        for chan in self.occupied_channels():
            try:
                chan.validate()
            except model.ValidateError as err:
                yield str(err.at_channel(chan.number))
