# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
"""
Errors raised by radio communication and memory coding.
"""

from __future__ import annotations

import typing as ty

_E = ty.TypeVar("_E", bound="ChannelContext")


class ChannelContext:
    """Mixin that keep number of channel processed when error occurred.

    `channel` is set by bank operations; `str()` is prefixed by channel
    number when set.
    """

    channel: int | None = None

    def at_channel(self: _E, channel: int) -> _E:
        if self.channel is None:
            self.channel = channel

        return self

    def _describe(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        msg = self._describe()
        if self.channel is not None:
            return f"channel {self.channel:03d}: {msg}"

        return msg


class RadioError(ChannelContext, Exception):
    """Base for errors in communication with radio."""


class TransportError(RadioError):
    def _describe(self) -> str:
        return f"Communication error: {super()._describe()}"


class RejectedError(RadioError):
    def __init__(self, command: str) -> None:
        super().__init__(command)
        self.command = command

    def _describe(self) -> str:
        return f"radio did not understand command {self.command!r}"


class MalformedResponseError(RadioError):
    def __init__(self, line: str, reason: str = "") -> None:
        super().__init__(line, reason)
        self.line = line
        self.reason = reason

    def _describe(self) -> str:
        if self.reason:
            return f"invalid response {self.line!r}: {self.reason}"

        return f"invalid response {self.line!r}"


class PreconditionError(RadioError):
    pass


class ValidateError(ChannelContext, ValueError):
    def __init__(self, field_name: str, value: object) -> None:
        super().__init__(field_name, value)
        self.field = field_name
        self.value = value

    def _describe(self) -> str:
        return f"invalid value in {self.field}: {self.value!r}"
