# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
"""
Support function for model objects.
"""

from __future__ import annotations

import typing as ty

from kenwood_mem.errors import ValidateError

DEBUG = False


def is_valid_index(inlist: ty.Collection[object], idx: int, name: str) -> None:
    if idx < 0 or idx >= len(inlist):
        raise ValidateError(name, idx)


def try_get(inlist: ty.Sequence[str], idx: int) -> str:
    try:
        return inlist[idx]
    except IndexError:
        return f"<[{idx}]>"


def format_freq(freq: int) -> str:
    return f"{freq:_}".replace("_", " ")
