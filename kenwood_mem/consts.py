# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.
"""
Constants used in app.
"""

from __future__ import annotations

import typing as ty

NUM_CHANNELS: ty.Final[int] = 1000
NAME_LEN: ty.Final[int] = 8

# line protocol
TERMINATOR: ty.Final = "\r"
# first character of response when radio did not understand command
NAK: ty.Final = "?"
# response for empty channel
EMPTY_MARKER: ty.Final = "N"

CMD_ID: ty.Final = "ID"
CMD_MEMORY: ty.Final = "ME"
CMD_NAME: ty.Final = "MN"
# argument of ME command that clear channel
CLEAR_FLAG: ty.Final = "C"

DEFAULT_PORT: ty.Final = "/dev/ttyUSB0"
DEFAULT_BAUDRATE: ty.Final = 9600
# seconds
DEFAULT_TIMEOUT: ty.Final = 5.0

STEPS: ty.Final = [
    "5",
    "6.25",
    "8.33",
    "10",
    "12.5",
    "15",
    "20",
    "25",
    "30",
    "50",
    "100",
]
DUPLEX_DIRS: ty.Final = ["", "+", "-"]
MODES: ty.Final = ["FM", "NFM", "AM"]
LOCKOUT: ty.Final = ["", "S"]

# tones available in radio; 159.8, 165.5, 171.3, 177.3, 183.5, 189.9, 196.6
# and 199.5 are not supported
CTCSS_TONES: ty.Final = (
    "67.0 69.3 71.9 74.4 77.0 79.7 82.5 85.4 88.5 91.5 "
    "94.8 97.4 100.0 103.5 107.2 110.9 114.8 118.8 123.0 127.3 "
    "131.8 136.5 141.3 146.2 151.4 156.7 162.2 167.9 173.8 179.9 "
    "186.2 192.8 203.5 206.5 210.7 218.1 225.7 229.1 233.6 241.8 "
    "250.3 254.1"
).split(" ")

DTCS_CODES: ty.Final = (
    "023 025 026 031 032 036 043 047 051 053 054 065 071 072 073 074 "
    "114 115 116 122 125 131 132 134 143 145 152 155 156 162 165 172 "
    "174 205 212 223 225 226 243 244 245 246 251 252 255 261 263 265 "
    "266 271 274 306 311 315 325 331 332 343 346 351 356 364 365 371 "
    "411 412 413 423 431 432 445 446 452 454 455 462 464 465 466 503 "
    "506 516 523 526 532 546 565 606 612 624 627 631 632 654 662 664 "
    "703 712 723 731 732 734 743 754"
).split(" ")
