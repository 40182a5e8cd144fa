# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

"""
Communication with radio.

Radio use simple half-duplex line protocol: every command is terminated by
CR and radio answer with exactly one CR-terminated line. Answer starting
with `?` means that radio did not understand command.
"""

from __future__ import annotations

import io
import logging
import typing as ty
from contextlib import contextmanager
from pathlib import Path

import serial

from . import coding, consts, model, radio_memory
from .errors import (
    MalformedResponseError,
    PreconditionError,
    RadioError,
    RejectedError,
    TransportError,
    ValidateError,
)

_LOG = logging.getLogger(__name__)

_TERMINATOR_B: ty.Final = consts.TERMINATOR.encode()


@ty.runtime_checkable
class Serial(ty.Protocol):
    def write(self, data: bytes) -> None: ...

    def read_until(self, terminator: bytes) -> bytes: ...

    def open(self) -> None: ...

    def close(self) -> None: ...


class StreamLogger:
    """
    StreamLogger wrap Serial and append output/input to `file`.
    """

    def __init__(self, impl: Serial, file: Path) -> None:
        self._impl = impl
        self._file = file
        self._log: ty.TextIO | None = None

    def open(self) -> None:
        self._log = self._file.open("at", encoding="ascii")  # noqa: SIM115 # pylint:disable=consider-using-with
        self._impl.open()

    def close(self) -> None:
        self._impl.close()
        if self._log:
            self._log.close()
            self._log = None

    def write(self, data: bytes) -> None:
        if self._log:
            self._log.write(f"<{data!r}\n")

        self._impl.write(data)

    def read_until(self, terminator: bytes) -> bytes:
        data = self._impl.read_until(terminator)
        if self._log:
            self._log.write(f">{data!r}\n")

        return data


class RealSerial:
    def __init__(
        self,
        port: str,
        baudrate: int = consts.DEFAULT_BAUDRATE,
        timeout: float = consts.DEFAULT_TIMEOUT,
    ) -> None:
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: serial.Serial | None = None

    def open(self) -> None:
        _LOG.info("opening serial %r, baudrate=%d", self.port, self.baudrate)
        try:
            self._serial = serial.Serial(
                self.port or consts.DEFAULT_PORT,
                self.baudrate,
                timeout=self.timeout,
                write_timeout=self.timeout,
            )
        except serial.SerialException as err:
            raise TransportError(f"cannot open {self.port!r}: {err}") from err

    def close(self) -> None:
        _LOG.info("closing serial")
        if self._serial:
            self._serial.close()
            self._serial = None

    def write(self, data: bytes) -> None:
        assert self._serial
        self._serial.write(data)
        self._serial.flush()

    def read_until(self, terminator: bytes) -> bytes:
        assert self._serial
        return self._serial.read_until(terminator)  # type: ignore


class FakeSerial:
    """Serial that replay prerecorded responses and collect sent data."""

    def __init__(self, responses: bytes = b"") -> None:
        self._input = io.BytesIO(responses)
        self.written: list[bytes] = []

    @classmethod
    def from_file(cls: type[FakeSerial], file: Path) -> FakeSerial:
        _LOG.info("loading responses from %s", file)
        return cls(file.read_bytes())

    def open(self) -> None:
        _LOG.info("opening fake serial")

    def close(self) -> None:
        _LOG.info("closing fake serial")

    def write(self, data: bytes) -> None:
        self.written.append(data)

    def read_until(self, terminator: bytes) -> bytes:
        buf: list[bytes] = []
        while d := self._input.read(1):
            buf.append(d)
            if d == terminator:
                break

        return b"".join(buf)

    @property
    def commands(self) -> list[str]:
        """Sent commands without terminator."""
        return [
            d.decode("ascii").removesuffix(consts.TERMINATOR)
            for d in self.written
        ]


@contextmanager
def open_serial(impl: Serial, trace: Path | None = None) -> ty.Iterator[Serial]:
    if trace:
        impl = StreamLogger(impl, trace)

    impl.open()

    try:
        yield impl
    finally:
        impl.close()


class CommandChannel:
    def __init__(self, s: Serial) -> None:
        self._serial = s

    def transact(self, command: str) -> str:
        """Send `command` and return response line without terminator."""
        try:
            data = (command + consts.TERMINATOR).encode("ascii")
        except UnicodeEncodeError as err:
            raise ValidateError("command", command) from err

        _LOG.debug("send: %r", command)

        try:
            self._serial.write(data)
            resp = self._serial.read_until(_TERMINATOR_B)
        except (OSError, serial.SerialException) as err:
            raise TransportError(f"i/o error on {command!r}: {err}") from err

        if not resp.endswith(_TERMINATOR_B):
            _LOG.error("no response for %r; received: %r", command, resp)
            raise TransportError(f"no response for {command!r}")

        line = resp[: -len(_TERMINATOR_B)].decode("ascii", errors="replace")
        _LOG.debug("recv: %r", line)

        if line.startswith(consts.NAK):
            raise RejectedError(command)

        return line


class Radio:
    def __init__(self, channel: CommandChannel) -> None:
        self._channel = channel

    def transact(self, command: str) -> str:
        return self._channel.transact(command)

    def identify(self) -> str:
        line = self._channel.transact(consts.CMD_ID)
        items = line.split()
        if len(items) != 2 or items[0] != consts.CMD_ID:  # noqa: PLR2004
            raise MalformedResponseError(line, "expected 'ID <model>'")

        _LOG.info("radio model: %s", items[1])
        return items[1]

    def read_channel(self, number: int) -> model.Channel:
        try:
            memory_line = self._channel.transact(
                coding.read_memory_command(number)
            )
            name_line = self._channel.transact(coding.read_name_command(number))
            return model.Channel.from_lines(number, memory_line, name_line)
        except RadioError as err:
            err.at_channel(number)
            raise

    def read_memory(
        self,
        mem: radio_memory.RadioMemory | None = None,
        cb: ty.Callable[[int, int], None] | None = None,
    ) -> radio_memory.RadioMemory:
        """Read all channels into `mem` (or new RadioMemory).

        Stop on first error; channels after failed one are not changed.
        """
        if mem is None:
            mem = radio_memory.RadioMemory()

        for idx in range(consts.NUM_CHANNELS):
            if cb:
                cb(idx, consts.NUM_CHANNELS)

            mem.channels[idx] = self.read_channel(idx)

        return mem

    def write_channel(
        self, mem: radio_memory.RadioMemory, number: int
    ) -> None:
        chan = mem.get_channel(number)
        if not chan.occupied:
            raise PreconditionError(
                f"attempted to write empty channel {number}"
            ).at_channel(number)

        _validate_channel(chan)
        self._send_channel(chan)

    def _send_channel(self, chan: model.Channel) -> None:
        # channel is cleared before write; when any later step fail, channel
        # stay cleared on radio
        number = chan.number
        try:
            self._channel.transact(coding.clear_memory_command(number))
            _LOG.debug("channel %d: cleared", number)

            self._channel.transact(coding.encode_memory_line(chan))
            _LOG.debug("channel %d: data written", number)

            self._channel.transact(coding.encode_name_line(chan))
            _LOG.debug("channel %d: name written", number)

        except RadioError as err:
            err.at_channel(number)
            raise

    def write_memory(
        self,
        mem: radio_memory.RadioMemory,
        cb: ty.Callable[[int, int], None] | None = None,
    ) -> int:
        """Write all non-empty channels; return number of written channels.

        All channels are validated before first command is sent.
        """
        channels = mem.occupied_channels()
        for chan in channels:
            _validate_channel(chan)

        for idx, chan in enumerate(channels):
            if cb:
                cb(idx, len(channels))

            self._send_channel(chan)

        return len(channels)


def _validate_channel(chan: model.Channel) -> None:
    try:
        chan.validate()
    except ValidateError as err:
        err.at_channel(chan.number)
        raise


@contextmanager
def connect(impl: Serial, trace: Path | None = None) -> ty.Iterator[Radio]:
    with open_serial(impl, trace) as s:
        yield Radio(CommandChannel(s))
