# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
# pylint: disable=protected-access,unspecified-encoding,consider-using-with
# mypy: allow-untyped-defs, allow-untyped-calls
# ruff: noqa: SLF001,PLR2004

""" """

import pytest

from kenwood_mem import errors, model
from kenwood_mem.model import _support

MEMORY_LINE = (
    "ME 010,0439250000,7,2,0,1,0,0,08,00,000,05000000,1,0439250000,7,1"
)


class TestFromLines:
    def test_from_lines(self):
        chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT SP")

        assert chan.number == 10
        assert chan.occupied
        assert chan.rx_frequency == 439_250_000
        assert chan.rx_step_size == 7
        assert chan.shift_direction == 2
        assert chan.tone_enabled == 1
        assert chan.tone_frequency == 8
        assert chan.offset_frequency == 5_000_000
        assert chan.mode == 1
        assert chan.lock_out == 1
        assert chan.name == "RPT SP"
        assert chan.debug_info is None

    def test_from_lines_empty(self):
        chan = model.Channel.from_lines(10, "N", "N")

        assert chan == model.Channel(number=10)
        assert not chan.occupied

    def test_from_lines_other_number(self):
        # number requested from radio wins
        chan = model.Channel.from_lines(11, MEMORY_LINE, "MN 011,X")

        assert chan.number == 11
        assert chan.rx_frequency == 439_250_000

    def test_from_lines_debug(self, monkeypatch):
        monkeypatch.setattr(_support, "DEBUG", True)

        chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,X")

        assert chan.debug_info == {
            "memory_line": MEMORY_LINE,
            "name_line": "MN 010,X",
        }

    def test_from_lines_name_with_comma(self):
        chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT,X")

        assert chan.name == "RPT"
        # channel read from radio can be written back
        chan.validate()

    def test_from_lines_malformed(self):
        with pytest.raises(errors.MalformedResponseError):
            model.Channel.from_lines(10, "ME 010,0439250000", "MN 010,X")


def test_clear():
    chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT")

    chan.clear()

    assert chan == model.Channel(number=10)


def test_clone():
    chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT")
    chan2 = chan.clone()

    assert chan == chan2
    assert chan is not chan2

    chan2.name = "OTHER"
    assert chan.name == "RPT"


def test_sort():
    channels = [model.Channel(number=n) for n in (7, 1, 5)]
    assert [chan.number for chan in sorted(channels)] == [1, 5, 7]


def test_str():
    chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT")

    res = str(chan)
    assert res.startswith("Channel 010: rx=439 250 000, rx_step=25, ")
    assert "shift='-'" in res
    assert "tone_freq=88.5" in res
    assert "mode=NFM" in res
    assert "lockout='S'" in res
    assert "name='RPT'" in res


class TestValidate:
    @pytest.mark.parametrize(
        "name", ["", "A", "ABCDEFGH", "REPEATER12", "R-1 (x)"]
    )
    def test_validate(self, name):
        chan = model.Channel(number=999, rx_frequency=145_500_000, name=name)
        chan.validate()

    @pytest.mark.parametrize(
        ("attrs", "field"),
        [
            ({"number": -1}, "number"),
            ({"number": 1000}, "number"),
            ({"rx_frequency": 10_000_000_000}, "rx_frequency"),
            ({"mode": 10}, "mode"),
            ({"dcs_frequency": -1}, "dcs_frequency"),
            ({"name": "A,B"}, "name"),
            ({"name": "ŻÓŁW"}, "name"),
            ({"name": "A\tB"}, "name"),
        ],
    )
    def test_validate_invalid(self, attrs, field):
        chan = model.Channel(number=5, rx_frequency=145_500_000)
        for key, val in attrs.items():
            setattr(chan, key, val)

        with pytest.raises(model.ValidateError) as exc:
            chan.validate()

        assert exc.value.field == field

    def test_validate_name_truncated(self):
        # only first 8 characters are sent to radio
        chan = model.Channel(
            number=5, rx_frequency=145_500_000, name="ABCDEFGH,IJ"
        )
        chan.validate()


class TestToRecord:
    def test_to_record(self):
        chan = model.Channel.from_lines(10, MEMORY_LINE, "MN 010,RPT")

        assert chan.to_record() == {
            "channel": 10,
            "rx_freq": 439_250_000,
            "rx_step": "25",
            "shift": "-",
            "reverse": False,
            "tone": True,
            "ctcss": False,
            "dcs": False,
            "tone_freq": "88.5",
            "ctcss_freq": "67.0",
            "dcs_code": "023",
            "offset": 5_000_000,
            "mode": "NFM",
            "tx_freq": 439_250_000,
            "tx_step": "25",
            "lockout": "S",
            "name": "RPT",
        }

    def test_to_record_empty(self):
        assert model.Channel(number=1).to_record() == {}

    def test_to_record_out_of_range(self):
        chan = model.Channel(number=1, rx_frequency=1, mode=7)

        assert chan.to_record()["mode"] == "<[7]>"
