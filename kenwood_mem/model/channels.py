# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
""" """

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from kenwood_mem import coding, consts
from kenwood_mem.errors import ValidateError

from . import _support
from ._support import format_freq, try_get

_LOG = logging.getLogger(__name__)


@dataclass
class Channel:
    number: int

    rx_frequency: int = 0
    rx_step_size: int = 0
    shift_direction: int = 0
    reverse_enabled: int = 0
    tone_enabled: int = 0
    ctcss_enabled: int = 0
    dcs_enabled: int = 0
    # index in CTCSS_TONES
    tone_frequency: int = 0
    ctcss_frequency: int = 0
    # index in DTCS_CODES
    dcs_frequency: int = 0
    offset_frequency: int = 0
    mode: int = 0
    tx_frequency: int = 0
    tx_step_size: int = 0
    lock_out: int = 0

    name: str = ""

    debug_info: dict[str, object] | None = field(default=None, compare=False)

    @property
    def occupied(self) -> bool:
        return self.rx_frequency != 0

    def clear(self) -> None:
        for fld in coding.MEMORY_LINE_FIELDS:
            if fld.attr != "number":
                setattr(self, fld.attr, 0)

        self.name = ""
        self.debug_info = None

    def clone(self) -> Channel:
        return copy.deepcopy(self)

    def __lt__(self, other: object) -> bool:
        assert isinstance(other, Channel)
        return self.number < other.number

    def __str__(self) -> str:
        return (
            f"Channel {self.number:03d}: "
            f"rx={format_freq(self.rx_frequency)}, "
            f"rx_step={try_get(consts.STEPS, self.rx_step_size)}, "
            f"shift={try_get(consts.DUPLEX_DIRS, self.shift_direction)!r}, "
            f"reverse={self.reverse_enabled}, "
            f"tone={self.tone_enabled}, "
            f"ctcss={self.ctcss_enabled}, "
            f"dcs={self.dcs_enabled}, "
            f"tone_freq={try_get(consts.CTCSS_TONES, self.tone_frequency)}, "
            f"ctcss_freq={try_get(consts.CTCSS_TONES, self.ctcss_frequency)}, "
            f"dcs_code={try_get(consts.DTCS_CODES, self.dcs_frequency)}, "
            f"offset={format_freq(self.offset_frequency)}, "
            f"mode={try_get(consts.MODES, self.mode)}, "
            f"tx={format_freq(self.tx_frequency)}, "
            f"tx_step={try_get(consts.STEPS, self.tx_step_size)}, "
            f"lockout={try_get(consts.LOCKOUT, self.lock_out)!r}, "
            f"name={self.name!r}, "
            f"debug_info={self.debug_info}"
        )

    @classmethod
    def from_lines(
        cls: type[Channel], number: int, memory_line: str, name_line: str
    ) -> Channel:
        """Create channel `number` from ME and MN responses."""
        values = coding.decode_memory_line(memory_line)
        if (line_number := values.pop("number", number)) != number:
            _LOG.warning(
                "radio returned data of channel %d for %d", line_number, number
            )

        chan = cls(number=number, **values)
        chan.name = coding.decode_name_line(name_line)
        if _support.DEBUG:
            chan.debug_info = {
                "memory_line": memory_line,
                "name_line": name_line,
            }

        return chan

    def validate(self) -> None:
        if not 0 <= self.number < consts.NUM_CHANNELS:
            raise ValidateError("number", self.number)

        # check fields width
        coding.encode_memory_line(self)

        name = self.name[: consts.NAME_LEN]
        if not name.isascii() or not name.isprintable() or "," in name:
            raise ValidateError("name", self.name)

    def to_record(self) -> dict[str, object]:
        if not self.occupied:
            return {}

        return {
            "channel": self.number,
            "rx_freq": self.rx_frequency,
            "rx_step": try_get(consts.STEPS, self.rx_step_size),
            "shift": try_get(consts.DUPLEX_DIRS, self.shift_direction),
            "reverse": bool(self.reverse_enabled),
            "tone": bool(self.tone_enabled),
            "ctcss": bool(self.ctcss_enabled),
            "dcs": bool(self.dcs_enabled),
            "tone_freq": try_get(consts.CTCSS_TONES, self.tone_frequency),
            "ctcss_freq": try_get(consts.CTCSS_TONES, self.ctcss_frequency),
            "dcs_code": try_get(consts.DTCS_CODES, self.dcs_frequency),
            "offset": self.offset_frequency,
            "mode": try_get(consts.MODES, self.mode),
            "tx_freq": self.tx_frequency,
            "tx_step": try_get(consts.STEPS, self.tx_step_size),
            "lockout": try_get(consts.LOCKOUT, self.lock_out),
            "name": self.name,
        }
