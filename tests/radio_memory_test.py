# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
# pylint: disable=protected-access,unspecified-encoding,consider-using-with
# mypy: allow-untyped-defs, allow-untyped-calls
# ruff: noqa: SLF001,PLR2004

""" """

import pytest

from kenwood_mem import consts, errors, model, radio_io
from kenwood_mem import radio_memory as rm


def _chan(number, rx=145_500_000, name=""):
    return model.Channel(
        number=number, rx_frequency=rx, tx_frequency=rx, name=name
    )


def _radio(responses):
    s = radio_io.FakeSerial(responses)
    return radio_io.Radio(radio_io.CommandChannel(s)), s


@pytest.fixture
def mem():
    mem = rm.RadioMemory()
    mem.set_channel(_chan(5, name="CALL"))
    mem.set_channel(_chan(7, rx=433_500_000))
    return mem


def test_new_memory():
    mem = rm.RadioMemory()

    assert len(mem.channels) == consts.NUM_CHANNELS
    assert all(idx == chan.number for idx, chan in enumerate(mem.channels))
    assert not mem.occupied_channels()


def test_occupied_channels(mem):
    assert [chan.number for chan in mem.occupied_channels()] == [5, 7]


def test_occupied_channels_only_rx():
    mem = rm.RadioMemory()
    # tx frequency does not matter
    mem.set_channel(model.Channel(number=3, tx_frequency=145_500_000))
    mem.set_channel(model.Channel(number=4, rx_frequency=1))

    assert [chan.number for chan in mem.occupied_channels()] == [4]


def test_set_channel_store_copy(mem):
    chan = _chan(10)
    mem.set_channel(chan)
    chan.rx_frequency = 0

    assert mem.get_channel(10).rx_frequency == 145_500_000


@pytest.mark.parametrize("idx", [-1, 1000])
def test_get_channel_invalid(mem, idx):
    with pytest.raises(model.ValidateError):
        mem.get_channel(idx)


def test_clear(mem):
    mem.clear()

    assert not mem.occupied_channels()
    assert mem.get_channel(5) == model.Channel(number=5)


def test_load_channels(mem):
    mem.load_channels([_chan(999, name="LAST"), _chan(0)])

    assert [chan.number for chan in mem.occupied_channels()] == [0, 999]
    assert mem.get_channel(999).name == "LAST"
    # previous content is removed
    assert not mem.get_channel(5).occupied


def test_load_channels_duplicated():
    mem = rm.RadioMemory()

    with pytest.raises(model.ValidateError) as exc:
        mem.load_channels([_chan(3), _chan(3, rx=433_500_000)])

    assert exc.value.value == 3


@pytest.mark.parametrize("number", [-1, 1000])
def test_load_channels_invalid_number(number):
    mem = rm.RadioMemory()

    with pytest.raises(model.ValidateError):
        mem.load_channels([_chan(number)])


def test_validate(mem):
    assert not list(mem.validate())

    mem.channels[7].name = "A,B"
    mem.channels[5].mode = 10
    # empty channels are not validated
    mem.channels[6].mode = 10

    assert list(mem.validate()) == [
        "channel 005: invalid value in mode: 10",
        "channel 007: invalid value in name: 'A,B'",
    ]


class TestWriteMemory:
    def test_write_memory(self, mem):
        radio, s = _radio(b"OK\r" * 6)
        progress = []

        cnt = radio.write_memory(mem, cb=lambda i, t: progress.append((i, t)))

        assert cnt == 2
        assert progress == [(0, 2), (1, 2)]
        assert s.commands == [
            "ME 005,C",
            "ME 005,0145500000,0,0,0,0,0,0,00,00,000,00000000,0,0145500000,0,0",
            "MN 005,CALL",
            "ME 007,C",
            "ME 007,0433500000,0,0,0,0,0,0,00,00,000,00000000,0,0433500000,0,0",
            "MN 007,",
        ]

    def test_write_memory_empty(self):
        radio, s = _radio(b"")

        assert radio.write_memory(rm.RadioMemory()) == 0
        assert not s.written

    def test_write_memory_abort(self, mem):
        radio, s = _radio(b"OK\r?\r")

        with pytest.raises(errors.RejectedError) as exc:
            radio.write_memory(mem)

        assert exc.value.channel == 5
        # channel 7 is not touched
        assert len(s.written) == 2

    def test_write_memory_invalid(self, mem):
        mem.channels[7].mode = 10
        radio, s = _radio(b"OK\r" * 6)
        progress = []

        with pytest.raises(model.ValidateError) as exc:
            radio.write_memory(mem, cb=lambda i, t: progress.append((i, t)))

        assert exc.value.channel == 7
        assert exc.value.field == "mode"
        assert str(exc.value) == "channel 007: invalid value in mode: 10"
        # nothing is written, even valid channel 5
        assert not s.written
        assert not progress


class TestReadMemory:
    def test_read_memory(self):
        resp = b"N\rN\r" + (
            b"ME 001,0146520000,0,0,0,0,0,0,00,00,000,00000000,0,"
            b"0146520000,0,0\rMN 001,SIMPLEX\r"
        )
        resp += b"N\rN\r" * (consts.NUM_CHANNELS - 2)
        radio, s = _radio(resp)
        progress = []

        mem = radio.read_memory(cb=lambda i, t: progress.append((i, t)))

        assert len(s.written) == 2 * consts.NUM_CHANNELS
        assert s.commands[:4] == ["ME 000", "MN 000", "ME 001", "MN 001"]
        assert s.commands[-1] == "MN 999"
        assert len(progress) == consts.NUM_CHANNELS
        assert progress[-1] == (999, consts.NUM_CHANNELS)

        occupied = mem.occupied_channels()
        assert len(occupied) == 1
        assert occupied[0].number == 1
        assert occupied[0].name == "SIMPLEX"

    def test_read_memory_abort(self, mem):
        # channel 0-5 empty, then no response
        radio, s = _radio(b"N\rN\r" * 6)

        with pytest.raises(errors.TransportError) as exc:
            radio.read_memory(mem)

        assert exc.value.channel == 6
        assert len(s.written) == 13
        # read channels are replaced, later are not changed
        assert not mem.get_channel(5).occupied
        assert mem.get_channel(7).occupied
